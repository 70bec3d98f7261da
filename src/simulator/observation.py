"""
Codificador de observaciones.

Produce un vector numérico de largo fijo para el agente de decisión:

1. Capa de grilla: ordinal de casilla / 7.0, por filas (W*H valores)
2. Capa de densidad: min(autos en la casilla / 5.0, 1.0), por filas (W*H valores)
3. Recursos: cantidad / tope de cada ResourceType (6 valores)
4. Escalares: puntaje/100, autos activos/50, penalización/100, paso/horizonte
"""

from typing import Dict, List, Optional

import numpy as np

from .road_grid import ResourceLedger, ResourceType, RoadGrid
from .vehicle import Car
from src.utils.config import ObservationConfig, ResourceConfig


def observation_size(width: int, height: int) -> int:
    """Largo del vector de observación para una grilla W x H."""
    return (2 * width * height + ObservationConfig.NUM_RESOURCE_VALUES +
            ObservationConfig.NUM_SCALAR_VALUES)


def car_density(cars: List[Car], width: int, height: int) -> np.ndarray:
    """Cuenta autos por casilla; matriz [y, x]."""
    density = np.zeros((height, width), dtype=np.int32)
    for car in cars:
        x, y = car.position
        if 0 <= x < width and 0 <= y < height:
            density[y, x] += 1
    return density


def encode_observation(grid: RoadGrid, cars: List[Car], ledger: ResourceLedger,
                       score: int, congestion_penalty: int,
                       current_step: int, max_steps: int) -> np.ndarray:
    """
    Codifica el estado actual en un vector float32.

    Función pura: no modifica ninguno de sus argumentos.

    Returns:
        np.ndarray: Vector de largo observation_size(grid.width, grid.height)
    """
    grid_layer = grid.tiles.astype(np.float32).ravel() / ObservationConfig.TILE_NORMALIZER

    density = car_density(cars, grid.width, grid.height).astype(np.float32).ravel()
    density_layer = np.minimum(density / ObservationConfig.CARS_PER_CELL_NORMALIZER, 1.0)

    resource_layer = np.array(
        [ledger.get(r) / ledger.get_cap(r) if ledger.get_cap(r) > 0 else 0.0
         for r in ResourceType],
        dtype=np.float32
    )

    scalar_layer = np.array([
        score / ObservationConfig.SCORE_NORMALIZER,
        len(cars) / ObservationConfig.CAR_COUNT_NORMALIZER,
        congestion_penalty / ObservationConfig.CONGESTION_NORMALIZER,
        current_step / float(max_steps),
    ], dtype=np.float32)

    return np.concatenate([grid_layer, density_layer, resource_layer,
                           scalar_layer]).astype(np.float32)


def decode_grid_layer(observation: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Recupera la matriz de tipos de casilla [y, x] desde una observación.

    Args:
        observation: Vector producido por encode_observation
        width: Columnas de la grilla
        height: Filas de la grilla

    Returns:
        np.ndarray: Matriz de enteros con los ordinales de TileType
    """
    layer = np.asarray(observation[:width * height], dtype=np.float64)
    return np.rint(layer * ObservationConfig.TILE_NORMALIZER).astype(np.int8).reshape(height, width)


def decode_resources(observation: np.ndarray, width: int, height: int,
                     caps: Optional[Dict[str, int]] = None) -> Dict[str, int]:
    """Recupera las cantidades de recursos a partir de sus topes de normalización."""
    caps = caps or ResourceConfig.INITIAL_RESOURCES
    offset = 2 * width * height
    values = observation[offset:offset + ObservationConfig.NUM_RESOURCE_VALUES]
    return {r.key: int(round(float(values[r]) * caps.get(r.key, 0))) for r in ResourceType}
