"""
Evaluador de fin de episodio.
"""

from enum import Enum
from typing import List, Optional

from .road_grid import ResourceLedger
from .vehicle import Car
from src.utils.config import TerminationConfig


class TerminationReason(Enum):
    """Causas por las que termina un episodio."""
    TOO_MANY_STUCK = "too_many_stuck"      # Demasiados autos bloqueados
    OUT_OF_RESOURCES = "out_of_resources"  # Sin recursos y con mucho tráfico
    MAX_STEPS = "max_steps"                # Se alcanzó el horizonte


def count_stuck_cars(cars: List[Car],
                     stuck_threshold: int = TerminationConfig.STUCK_THRESHOLD) -> int:
    """Cuenta los autos con más de `stuck_threshold` pasos atascados."""
    return sum(1 for car in cars if car.stuck_time > stuck_threshold)


def check_termination(cars: List[Car], ledger: ResourceLedger, current_step: int,
                      max_steps: int = TerminationConfig.MAX_STEPS) -> Optional[TerminationReason]:
    """
    Evalúa si el episodio terminó.

    Se evalúa una vez por paso, después del movimiento y la generación.

    Args:
        cars: Autos activos
        ledger: Inventario de recursos
        current_step: Paso actual
        max_steps: Horizonte del episodio

    Returns:
        TerminationReason si el episodio terminó, None en caso contrario
    """
    if count_stuck_cars(cars) > TerminationConfig.MAX_STUCK_CARS:
        return TerminationReason.TOO_MANY_STUCK

    if ledger.total() == 0 and len(cars) > TerminationConfig.MAX_CARS_WITHOUT_RESOURCES:
        return TerminationReason.OUT_OF_RESOURCES

    if current_step >= max_steps:
        return TerminationReason.MAX_STEPS

    return None
