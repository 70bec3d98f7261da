"""
Modelo de auto que recorre la grilla casilla por casilla.

Este módulo implementa el estado de un vehículo individual: su posición,
destino, ruta calculada, contador de atasco y estadísticas del viaje.
"""

from enum import Enum, IntEnum
from typing import List, Optional

from .road_grid import Position


class CarColor(IntEnum):
    """Paleta de colores. Un auto solo puede ir a un comercio de su color."""
    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3
    PURPLE = 4
    ORANGE = 5


class CarState(Enum):
    """Estados posibles de un auto."""
    WAITING_FOR_ROUTE = "waiting"  # Sin ruta hacia el destino
    MOVING = "moving"              # Avanzó en el último paso
    STUCK = "stuck"                # No pudo avanzar a la próxima casilla
    ARRIVED = "arrived"            # Llegó a destino


class Car:
    """
    Representa un auto en la simulación.

    El auto avanza una casilla por paso siguiendo su ruta. Si la próxima
    casilla deja de ser transitable, se queda quieto y acumula tiempo de
    atasco; nunca recalcula una ruta que no esté vacía.
    """

    def __init__(self, car_id: int, origin: Position, destination: Position,
                 color: CarColor, spawn_step: int = 0):
        """
        Inicializa un auto.

        Args:
            car_id: Identificador único dentro del episodio
            origin: Casilla de la casa de origen
            destination: Casilla del comercio de destino
            color: Color compartido con su casa y su comercio
            spawn_step: Paso de simulación en que fue generado
        """
        self.id = car_id
        self.origin = Position(*origin)
        self.position = Position(*origin)
        self.destination = Position(*destination)
        self.color = CarColor(color)

        # Ruta desde la casilla actual hasta el destino, inclusive
        self.route: List[Position] = []

        self.stuck_time = 0
        self.completed = False
        self.state = CarState.WAITING_FOR_ROUTE

        self.spawn_step = spawn_step
        self.arrival_step: Optional[int] = None

        # Estadísticas
        self.tiles_moved = 0
        self.total_stuck_steps = 0
        self.route_requests = 0

    def has_route(self) -> bool:
        """Verifica si el auto tiene una ruta calculada."""
        return len(self.route) > 0

    def set_route(self, route: List[Position]):
        """Asigna una nueva ruta (vacía si no hay camino)."""
        self.route = list(route)
        self.route_requests += 1
        if not self.route:
            self.state = CarState.WAITING_FOR_ROUTE

    def next_waypoint(self) -> Optional[Position]:
        """Retorna la próxima casilla de la ruta, o None si no hay."""
        if len(self.route) < 2:
            return None
        return self.route[1]

    def advance(self):
        """Avanza a la próxima casilla de la ruta."""
        self.route.pop(0)
        self.position = self.route[0]
        self.stuck_time = 0
        self.tiles_moved += 1
        self.state = CarState.MOVING

    def mark_stuck(self):
        """Registra un paso sin poder avanzar."""
        self.stuck_time += 1
        self.total_stuck_steps += 1
        self.state = CarState.STUCK

    def mark_arrived(self, current_step: int):
        """Marca el auto como completado."""
        self.completed = True
        self.arrival_step = current_step
        self.state = CarState.ARRIVED

    def has_arrived(self) -> bool:
        """Verifica si el auto llegó a su destino."""
        return self.position == self.destination

    def get_trip_steps(self, current_step: int) -> int:
        """
        Calcula la duración del viaje en pasos.

        Args:
            current_step: Paso actual (se usa si aún no llegó)

        Returns:
            int: Pasos transcurridos desde la generación
        """
        end = self.arrival_step if self.arrival_step is not None else current_step
        return end - self.spawn_step

    def get_statistics(self) -> dict:
        """Retorna un diccionario con las estadísticas del auto."""
        return {
            'car_id': self.id,
            'color': self.color.name.lower(),
            'origin': tuple(self.origin),
            'destination': tuple(self.destination),
            'spawn_step': self.spawn_step,
            'arrival_step': self.arrival_step,
            'tiles_moved': self.tiles_moved,
            'total_stuck_steps': self.total_stuck_steps,
            'route_requests': self.route_requests,
            'completed': self.completed
        }

    def __str__(self) -> str:
        return f"Car(#{self.id}, {self.color.name}, {tuple(self.position)}→{tuple(self.destination)})"

    def __repr__(self) -> str:
        return (f"Car(id={self.id}, color={self.color.name}, "
                f"pos={tuple(self.position)}, dest={tuple(self.destination)}, "
                f"state={self.state.value}, stuck={self.stuck_time})")
