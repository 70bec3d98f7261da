"""
Edificios de la ciudad: casas (origen de autos) y comercios (destino).
"""

from .road_grid import Position, TileType
from .vehicle import CarColor
from src.utils.config import SpawnConfig


class Building:
    """
    Casa o comercio ubicado en una casilla.

    Las casas llevan la cuenta de cuántos autos generaron, con un tope
    fijo por edificio. Los edificios no se destruyen durante un episodio.
    """

    def __init__(self, position: Position, color: CarColor, kind: TileType,
                 max_cars: int = SpawnConfig.MAX_CARS_PER_BUILDING):
        if kind not in (TileType.HOUSE, TileType.BUSINESS):
            raise ValueError(f"Tipo de edificio inválido: {kind}")

        self.position = Position(*position)
        self.color = CarColor(color)
        self.kind = kind
        self.cars_spawned = 0
        self.max_cars = max_cars

    @property
    def is_house(self) -> bool:
        return self.kind == TileType.HOUSE

    @property
    def is_business(self) -> bool:
        return self.kind == TileType.BUSINESS

    def can_spawn(self) -> bool:
        """Una casa puede generar autos mientras no llegue a su tope."""
        return self.is_house and self.cars_spawned < self.max_cars

    def __repr__(self) -> str:
        return (f"Building({self.kind.name}, {self.color.name}, "
                f"pos={tuple(self.position)}, spawned={self.cars_spawned}/{self.max_cars})")
