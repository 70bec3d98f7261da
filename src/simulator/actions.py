"""
Ejecutor de acciones de infraestructura.

Valida y aplica una acción de edición (colocar o remover infraestructura)
sobre la grilla y el inventario de recursos. Toda acción inválida es un
no-op atómico: retorna False sin modificar ningún estado.
"""

import logging
from enum import IntEnum

from .road_grid import ResourceLedger, ResourceType, RoadGrid, TileType

logger = logging.getLogger(__name__)


class ActionType(IntEnum):
    """Tipos de acción. Cualquier valor >= NOOP no edita la grilla."""
    PLACE_ROAD = 0
    PLACE_MOTORWAY = 1
    PLACE_BRIDGE = 2
    PLACE_ROUNDABOUT = 3
    PLACE_TRAFFIC_LIGHT = 4
    REMOVE = 5
    NOOP = 6


# Acciones que colocan sobre casilla vacía: (tipo de casilla, recurso)
PLACEMENTS = {
    ActionType.PLACE_ROAD: (TileType.ROAD, ResourceType.ROADS),
    ActionType.PLACE_MOTORWAY: (TileType.MOTORWAY, ResourceType.MOTORWAYS),
    ActionType.PLACE_BRIDGE: (TileType.BRIDGE, ResourceType.BRIDGES),
    ActionType.PLACE_ROUNDABOUT: (TileType.ROUNDABOUT, ResourceType.ROUNDABOUTS),
}

# Casillas removibles y el recurso que devuelven
REMOVABLE = {
    TileType.ROAD: ResourceType.ROADS,
    TileType.MOTORWAY: ResourceType.MOTORWAYS,
}


def is_edit_action(action_kind: int) -> bool:
    """Retorna True si el tipo de acción pasa por el ejecutor (todo valor < 6)."""
    return action_kind < ActionType.NOOP


def apply_action(grid: RoadGrid, ledger: ResourceLedger,
                 action_kind: int, x: int, y: int) -> bool:
    """
    Aplica una acción de infraestructura sobre la casilla (x, y).

    Args:
        grid: Grilla a modificar
        ledger: Inventario de recursos a modificar
        action_kind: Tipo de acción (0-5)
        x: Columna destino
        y: Fila destino

    Returns:
        bool: True si la acción se aplicó, False si fue rechazada
    """
    if not grid.in_bounds(x, y):
        return False

    tile = grid.get_tile(x, y)

    if action_kind in PLACEMENTS:
        new_tile, resource = PLACEMENTS[ActionType(action_kind)]
        if tile != TileType.EMPTY or not ledger.consume(resource):
            return False
        grid.set_tile(x, y, new_tile)
        logger.debug("Colocado %s en (%d, %d)", new_tile.name, x, y)
        return True

    if action_kind == ActionType.PLACE_TRAFFIC_LIGHT:
        # Un semáforo solo se instala sobre una calle existente
        if tile != TileType.ROAD or not ledger.consume(ResourceType.TRAFFIC_LIGHTS):
            return False
        grid.set_tile(x, y, TileType.TRAFFIC_LIGHT)
        logger.debug("Semáforo instalado en (%d, %d)", x, y)
        return True

    if action_kind == ActionType.REMOVE:
        if tile not in REMOVABLE:
            return False
        grid.set_tile(x, y, TileType.EMPTY)
        ledger.restore(REMOVABLE[tile])
        logger.debug("Removido %s en (%d, %d)", tile.name, x, y)
        return True

    return False
