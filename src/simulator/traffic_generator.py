"""
Generador de edificios y autos.

Este módulo implementa la ubicación aleatoria de los edificios iniciales
y la generación periódica de autos desde las casas hacia el primer
comercio del mismo color.
"""

import logging
from typing import List, Optional

import numpy as np

from .buildings import Building
from .road_grid import Position, RoadGrid, TileType
from .vehicle import Car, CarColor
from src.utils.config import SpawnConfig

logger = logging.getLogger(__name__)

# Colores asignados en orden a las casas y a los comercios iniciales
INITIAL_COLORS = [CarColor.RED, CarColor.BLUE, CarColor.GREEN,
                  CarColor.YELLOW, CarColor.PURPLE, CarColor.ORANGE]


class CarSpawner:
    """
    Genera edificios y autos usando un generador aleatorio inyectado.

    Los autos se generan cada `spawn_interval` pasos: cada casa que no
    llegó a su tope tira un número uniforme y, si es menor que la
    probabilidad de generación, emite un auto hacia el primer comercio
    de su color según el orden del registro.
    """

    def __init__(self, rng: np.random.Generator,
                 num_houses: int = SpawnConfig.NUM_HOUSES,
                 num_businesses: int = SpawnConfig.NUM_BUSINESSES,
                 spawn_interval: int = SpawnConfig.SPAWN_INTERVAL,
                 spawn_probability: float = SpawnConfig.SPAWN_PROBABILITY,
                 placement_attempts: int = SpawnConfig.PLACEMENT_ATTEMPTS):
        """
        Inicializa el generador.

        Args:
            rng: Generador aleatorio de numpy (compartido con el entorno)
            num_houses: Casas a ubicar al reiniciar
            num_businesses: Comercios a ubicar al reiniciar
            spawn_interval: Cada cuántos pasos se intenta generar autos
            spawn_probability: Probabilidad por casa en un paso elegible
            placement_attempts: Intentos de muestreo por edificio
        """
        if spawn_interval <= 0:
            raise ValueError(f"Intervalo de generación inválido: {spawn_interval}")
        if not 0.0 <= spawn_probability <= 1.0:
            raise ValueError(f"Probabilidad fuera de rango: {spawn_probability}")
        if max(num_houses, num_businesses) > len(INITIAL_COLORS):
            raise ValueError(f"A lo sumo {len(INITIAL_COLORS)} edificios de cada tipo")

        self.rng = rng
        self.num_houses = num_houses
        self.num_businesses = num_businesses
        self.spawn_interval = spawn_interval
        self.spawn_probability = spawn_probability
        self.placement_attempts = placement_attempts

        self.total_cars_generated = 0

    def find_empty_position(self, grid: RoadGrid) -> Optional[Position]:
        """
        Busca una casilla vacía al azar.

        Args:
            grid: Grilla donde buscar

        Returns:
            Position vacía, o None si se agotaron los intentos
        """
        for _ in range(self.placement_attempts):
            x = int(self.rng.integers(0, grid.width))
            y = int(self.rng.integers(0, grid.height))
            if grid.get_tile(x, y) == TileType.EMPTY:
                return Position(x, y)
        return None

    def spawn_initial_buildings(self, grid: RoadGrid) -> List[Building]:
        """
        Ubica las casas y comercios iniciales sobre la grilla.

        Si no se encuentra lugar para un edificio, se omite sin error.

        Returns:
            Lista de edificios en orden de registro (casas, luego comercios)
        """
        buildings = []

        plan = ([(TileType.HOUSE, color) for color in INITIAL_COLORS[:self.num_houses]] +
                [(TileType.BUSINESS, color) for color in INITIAL_COLORS[:self.num_businesses]])

        for kind, color in plan:
            pos = self.find_empty_position(grid)
            if pos is None:
                logger.debug("Sin lugar para %s %s tras %d intentos",
                             kind.name, color.name, self.placement_attempts)
                continue
            buildings.append(Building(pos, color, kind))
            grid.set_tile(pos.x, pos.y, kind)

        return buildings

    def should_spawn(self, current_step: int) -> bool:
        """Determina si el paso actual es elegible para generar autos."""
        return current_step % self.spawn_interval == 0

    def create_car(self, origin: Position, destination: Position,
                   color: CarColor, current_step: int) -> Car:
        """Crea un auto con el siguiente identificador del episodio."""
        self.total_cars_generated += 1
        return Car(self.total_cars_generated, origin, destination, color,
                   spawn_step=current_step)

    def spawn_cars(self, current_step: int, buildings: List[Building]) -> List[Car]:
        """
        Genera los autos del paso actual.

        Args:
            current_step: Paso de simulación
            buildings: Registro de edificios (se actualiza cars_spawned)

        Returns:
            Lista de autos nuevos, en orden de casa
        """
        if not self.should_spawn(current_step):
            return []

        new_cars = []

        for house in buildings:
            if not house.can_spawn():
                continue
            if self.rng.random() >= self.spawn_probability:
                continue

            business = self.find_matching_business(house, buildings)
            if business is None:
                # Sin comercio de su color: la casa reintentará más adelante
                continue

            new_cars.append(self.create_car(house.position, business.position,
                                            house.color, current_step))
            house.cars_spawned += 1

        return new_cars

    @staticmethod
    def find_matching_business(house: Building, buildings: List[Building]) -> Optional[Building]:
        """Retorna el primer comercio del color de la casa, o None."""
        for building in buildings:
            if building.is_business and building.color == house.color:
                return building
        return None

    def get_spawn_statistics(self, buildings: List[Building]) -> dict:
        """
        Retorna estadísticas de generación de autos.

        Returns:
            dict: Estadísticas de spawn
        """
        houses = [b for b in buildings if b.is_house]
        return {
            'total_generated': self.total_cars_generated,
            'houses': len(houses),
            'businesses': len(buildings) - len(houses),
            'houses_exhausted': sum(1 for h in houses if not h.can_spawn()),
            'spawn_probability': self.spawn_probability,
            'spawn_interval': self.spawn_interval
        }

    def reset(self):
        """Reinicia el generador."""
        self.total_cars_generated = 0
