"""
Modelo de la grilla de casillas y del inventario de recursos.

Este módulo implementa la representación de la ciudad como una matriz
fija de casillas (vacías, edificios o infraestructura vial) junto con el
contador de recursos que el jugador puede colocar sobre ella.
"""

from enum import IntEnum
from typing import Dict, Iterator, List, NamedTuple, Optional

import numpy as np

from src.utils.config import GridConfig, ResourceConfig


class Position(NamedTuple):
    """Coordenada entera (x, y) de una casilla."""
    x: int
    y: int


class TileType(IntEnum):
    """Tipos de casilla. El valor es el ordinal usado en la observación."""
    EMPTY = 0
    HOUSE = 1
    BUSINESS = 2
    ROAD = 3
    MOTORWAY = 4
    BRIDGE = 5
    ROUNDABOUT = 6
    TRAFFIC_LIGHT = 7


# Todo tipo salvo EMPTY admite vehículos
PASSABLE_TILES = frozenset(tile for tile in TileType if tile != TileType.EMPTY)

# Orden de expansión de vecinos: S, E, N, O
DIRECTIONS = ((0, 1), (1, 0), (0, -1), (-1, 0))


class ResourceType(IntEnum):
    """Categorías de recursos consumibles."""
    ROADS = 0
    MOTORWAYS = 1
    BRIDGES = 2
    ROUNDABOUTS = 3
    TRAFFIC_LIGHTS = 4
    UPGRADES = 5

    @property
    def key(self) -> str:
        """Nombre del recurso tal como aparece en la configuración."""
        return self.name.lower()


class ResourceLedger:
    """
    Inventario de recursos de infraestructura.

    Mantiene un contador no negativo por cada ResourceType. Solo el
    ejecutor de acciones lo modifica, de a una unidad por vez.
    """

    def __init__(self, initial_counts: Optional[Dict[str, int]] = None):
        """
        Inicializa el inventario.

        Args:
            initial_counts: Dict {nombre_recurso: cantidad}. Si es None,
                            usa ResourceConfig.INITIAL_RESOURCES; los
                            recursos omitidos empiezan en 0.

        Raises:
            ValueError: Si hay un recurso desconocido o una cantidad negativa
        """
        if initial_counts is None:
            initial_counts = ResourceConfig.INITIAL_RESOURCES
        self.initial_counts = dict(initial_counts)

        unknown = set(self.initial_counts) - {resource.key for resource in ResourceType}
        if unknown:
            raise ValueError(f"Recursos desconocidos: {sorted(unknown)}")

        for resource in ResourceType:
            if self.initial_counts.get(resource.key, 0) < 0:
                raise ValueError(f"Cantidad inicial negativa para {resource.key}")

        self.counts = np.zeros(len(ResourceType), dtype=np.int64)
        self.reset()

    def reset(self):
        """Restaura las cantidades iniciales."""
        for resource in ResourceType:
            self.counts[resource] = self.initial_counts.get(resource.key, 0)

    def get(self, resource: ResourceType) -> int:
        """Retorna la cantidad disponible de un recurso."""
        return int(self.counts[resource])

    def get_cap(self, resource: ResourceType) -> int:
        """Retorna la cantidad inicial (tope por episodio) de un recurso."""
        return self.initial_counts.get(resource.key, 0)

    def consume(self, resource: ResourceType) -> bool:
        """
        Descuenta una unidad del recurso si hay disponible.

        Returns:
            bool: True si se descontó, False si estaba agotado
        """
        if self.counts[resource] <= 0:
            return False
        self.counts[resource] -= 1
        return True

    def restore(self, resource: ResourceType):
        """Devuelve una unidad del recurso al inventario."""
        self.counts[resource] += 1

    def total(self) -> int:
        """Retorna la suma de todos los recursos disponibles."""
        return int(self.counts.sum())

    def as_dict(self) -> Dict[str, int]:
        """Retorna el inventario como {nombre_recurso: cantidad}."""
        return {resource.key: int(self.counts[resource]) for resource in ResourceType}

    def __repr__(self) -> str:
        return f"ResourceLedger({self.as_dict()})"


class RoadGrid:
    """
    Grilla fija de W x H casillas.

    Cada celda contiene exactamente un TileType. La matriz se indexa como
    tiles[y, x] de modo que su recorrido por filas coincide con el orden
    de la observación.
    """

    def __init__(self, width: int = GridConfig.WIDTH, height: int = GridConfig.HEIGHT):
        """
        Inicializa una grilla vacía.

        Args:
            width: Cantidad de columnas
            height: Cantidad de filas

        Raises:
            ValueError: Si alguna dimensión no es positiva
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Dimensiones de grilla inválidas: {width}x{height}")

        self.width = width
        self.height = height
        self.tiles = np.full((height, width), int(TileType.EMPTY), dtype=np.int8)

    def clear(self):
        """Vuelve todas las casillas a EMPTY."""
        self.tiles.fill(int(TileType.EMPTY))

    def in_bounds(self, x: int, y: int) -> bool:
        """Verifica si (x, y) está dentro de la grilla."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> TileType:
        """Retorna el tipo de la casilla (x, y)."""
        return TileType(int(self.tiles[y, x]))

    def set_tile(self, x: int, y: int, tile: TileType):
        """Asigna el tipo de la casilla (x, y)."""
        self.tiles[y, x] = int(tile)

    def is_passable(self, x: int, y: int) -> bool:
        """
        Determina si un vehículo puede ocupar la casilla.

        Solo mira el tipo de casilla; no considera otros vehículos.
        Las posiciones fuera de la grilla no son transitables.
        """
        if not self.in_bounds(x, y):
            return False
        return int(self.tiles[y, x]) in PASSABLE_TILES

    def neighbors(self, x: int, y: int) -> Iterator[Position]:
        """Itera las casillas 4-adyacentes dentro de la grilla."""
        for dx, dy in DIRECTIONS:
            nx_, ny_ = x + dx, y + dy
            if self.in_bounds(nx_, ny_):
                yield Position(nx_, ny_)

    def positions_of(self, tile: TileType) -> List[Position]:
        """Retorna las posiciones con el tipo dado, en orden por filas."""
        ys, xs = np.nonzero(self.tiles == int(tile))
        return [Position(int(x), int(y)) for y, x in zip(ys, xs)]

    def count(self, tile: TileType) -> int:
        """Cuenta las casillas de un tipo."""
        return int(np.count_nonzero(self.tiles == int(tile)))

    def snapshot(self) -> np.ndarray:
        """Retorna una copia de la matriz de casillas (solo lectura)."""
        tiles = self.tiles.copy()
        tiles.setflags(write=False)
        return tiles

    def get_grid_stats(self) -> Dict:
        """
        Calcula estadísticas de ocupación de la grilla.

        Returns:
            dict: Cantidad de casillas por tipo y total transitables
        """
        stats = {tile.name.lower(): self.count(tile) for tile in TileType}
        stats['passable'] = self.width * self.height - stats['empty']
        stats['size'] = f"{self.width}x{self.height}"
        return stats

    def __str__(self) -> str:
        symbols = ".HBRMbOT"
        rows = ["".join(symbols[int(v)] for v in row) for row in self.tiles]
        return "\n".join(rows)

    def __repr__(self) -> str:
        return (f"RoadGrid({self.width}x{self.height}, "
                f"passable={self.width * self.height - self.count(TileType.EMPTY)})")
