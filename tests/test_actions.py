"""
Tests para el ejecutor de acciones de infraestructura.
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.simulator.actions import ActionType, apply_action, is_edit_action
from src.simulator.road_grid import ResourceLedger, ResourceType, RoadGrid, TileType


def make_state(width=5, height=5, resources=None):
    """Crea una grilla vacía y un inventario nuevo."""
    return RoadGrid(width, height), ResourceLedger(resources)


class TestPlacement:
    """Tests para las acciones de colocación."""

    def test_place_each_kind(self):
        """Test de colocación de cada tipo sobre casilla vacía."""
        grid, ledger = make_state()
        expected = [
            (ActionType.PLACE_ROAD, TileType.ROAD, ResourceType.ROADS),
            (ActionType.PLACE_MOTORWAY, TileType.MOTORWAY, ResourceType.MOTORWAYS),
            (ActionType.PLACE_BRIDGE, TileType.BRIDGE, ResourceType.BRIDGES),
            (ActionType.PLACE_ROUNDABOUT, TileType.ROUNDABOUT, ResourceType.ROUNDABOUTS),
        ]

        for x, (action, tile, resource) in enumerate(expected):
            before = ledger.get(resource)
            assert apply_action(grid, ledger, action, x, 0)
            assert grid.get_tile(x, 0) == tile
            assert ledger.get(resource) == before - 1

    def test_place_on_occupied_tile(self):
        """Test de que colocar sobre casilla ocupada no cambia nada."""
        grid, ledger = make_state()
        grid.set_tile(2, 2, TileType.HOUSE)

        assert not apply_action(grid, ledger, ActionType.PLACE_ROAD, 2, 2)
        assert grid.get_tile(2, 2) == TileType.HOUSE
        assert ledger.get(ResourceType.ROADS) == 20

    def test_place_without_resources(self):
        """Test de colocación con recurso agotado."""
        grid, ledger = make_state()

        # Solo hay una rotonda
        assert apply_action(grid, ledger, ActionType.PLACE_ROUNDABOUT, 0, 0)
        assert not apply_action(grid, ledger, ActionType.PLACE_ROUNDABOUT, 1, 0)

        assert grid.get_tile(1, 0) == TileType.EMPTY
        assert ledger.get(ResourceType.ROUNDABOUTS) == 0

    def test_out_of_bounds(self):
        """Test de acciones fuera de la grilla."""
        grid, ledger = make_state()

        for x, y in [(-1, 0), (0, -1), (5, 0), (0, 5)]:
            assert not apply_action(grid, ledger, ActionType.PLACE_ROAD, x, y)

        assert ledger.as_dict() == ResourceLedger().as_dict()

    def test_unknown_action_kinds(self):
        """Test de tipos de acción negativos o fuera de rango."""
        grid, ledger = make_state()

        assert not apply_action(grid, ledger, -1, 0, 0)
        assert not apply_action(grid, ledger, 6, 0, 0)
        assert grid.count(TileType.EMPTY) == 25


class TestTrafficLight:
    """Tests para la instalación de semáforos."""

    def test_requires_road(self):
        """Test de que el semáforo solo se instala sobre una calle."""
        grid, ledger = make_state()

        assert not apply_action(grid, ledger, ActionType.PLACE_TRAFFIC_LIGHT, 0, 0)
        assert ledger.get(ResourceType.TRAFFIC_LIGHTS) == 2

        grid.set_tile(1, 0, TileType.MOTORWAY)
        assert not apply_action(grid, ledger, ActionType.PLACE_TRAFFIC_LIGHT, 1, 0)

    def test_upgrade_road(self):
        """Test de conversión de calle a semáforo."""
        grid, ledger = make_state()

        apply_action(grid, ledger, ActionType.PLACE_ROAD, 0, 0)
        assert apply_action(grid, ledger, ActionType.PLACE_TRAFFIC_LIGHT, 0, 0)

        assert grid.get_tile(0, 0) == TileType.TRAFFIC_LIGHT
        assert ledger.get(ResourceType.TRAFFIC_LIGHTS) == 1
        # La calle convertida no se devuelve
        assert ledger.get(ResourceType.ROADS) == 19

    def test_limited_supply(self):
        """Test de agotamiento de semáforos."""
        grid, ledger = make_state()

        for x in range(3):
            apply_action(grid, ledger, ActionType.PLACE_ROAD, x, 0)

        results = [apply_action(grid, ledger, ActionType.PLACE_TRAFFIC_LIGHT, x, 0)
                   for x in range(3)]

        assert results == [True, True, False]
        assert grid.get_tile(2, 0) == TileType.ROAD


class TestRemoval:
    """Tests para la acción de remoción."""

    def test_place_remove_round_trip(self):
        """Test de que colocar y remover restaura grilla e inventario."""
        grid, ledger = make_state()
        before = ledger.as_dict()

        apply_action(grid, ledger, ActionType.PLACE_ROAD, 3, 3)
        apply_action(grid, ledger, ActionType.PLACE_MOTORWAY, 4, 4)

        assert apply_action(grid, ledger, ActionType.REMOVE, 3, 3)
        assert apply_action(grid, ledger, ActionType.REMOVE, 4, 4)

        assert grid.count(TileType.EMPTY) == 25
        assert ledger.as_dict() == before

    def test_non_removable_tiles(self):
        """Test de casillas que no se pueden remover."""
        grid, ledger = make_state()
        grid.set_tile(0, 0, TileType.HOUSE)
        grid.set_tile(1, 0, TileType.BUSINESS)
        apply_action(grid, ledger, ActionType.PLACE_BRIDGE, 2, 0)
        apply_action(grid, ledger, ActionType.PLACE_ROUNDABOUT, 3, 0)

        for x in range(5):
            assert not apply_action(grid, ledger, ActionType.REMOVE, x, 0)

        assert grid.get_tile(0, 0) == TileType.HOUSE
        assert grid.get_tile(2, 0) == TileType.BRIDGE
        assert ledger.get(ResourceType.BRIDGES) == 1

    def test_remove_traffic_light(self):
        """Test de que un semáforo no se puede remover."""
        grid, ledger = make_state()
        apply_action(grid, ledger, ActionType.PLACE_ROAD, 0, 0)
        apply_action(grid, ledger, ActionType.PLACE_TRAFFIC_LIGHT, 0, 0)

        assert not apply_action(grid, ledger, ActionType.REMOVE, 0, 0)
        assert grid.get_tile(0, 0) == TileType.TRAFFIC_LIGHT


class TestEditActions:
    """Tests para la clasificación de tipos de acción."""

    def test_is_edit_action(self):
        """Test de qué tipos pasan por el ejecutor."""
        assert all(is_edit_action(kind) for kind in range(6))
        assert is_edit_action(-3)
        assert not is_edit_action(ActionType.NOOP)
        assert not is_edit_action(42)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
