"""
Tests para los edificios y el generador de autos.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.simulator.buildings import Building
from src.simulator.road_grid import Position, RoadGrid, TileType
from src.simulator.traffic_generator import CarSpawner
from src.simulator.vehicle import CarColor


def make_spawner(seed=0, **kwargs):
    return CarSpawner(np.random.default_rng(seed), **kwargs)


class TestBuilding:
    """Tests para la clase Building."""

    def test_house_creation(self):
        """Test de creación de una casa."""
        house = Building((1, 2), CarColor.RED, TileType.HOUSE)

        assert house.position == Position(1, 2)
        assert house.is_house
        assert not house.is_business
        assert house.cars_spawned == 0
        assert house.max_cars == 5
        assert house.can_spawn()

    def test_business_never_spawns(self):
        """Test de que un comercio no genera autos."""
        business = Building((0, 0), CarColor.BLUE, TileType.BUSINESS)

        assert business.is_business
        assert not business.can_spawn()

    def test_spawn_cap(self):
        """Test de tope de autos por casa."""
        house = Building((0, 0), CarColor.RED, TileType.HOUSE, max_cars=2)
        house.cars_spawned = 2

        assert not house.can_spawn()

    def test_invalid_kind(self):
        """Test de validación del tipo de edificio."""
        with pytest.raises(ValueError):
            Building((0, 0), CarColor.RED, TileType.ROAD)


class TestInitialBuildings:
    """Tests para la ubicación de edificios iniciales."""

    def test_default_layout(self):
        """Test de casas RED/BLUE/GREEN y comercios RED/BLUE."""
        grid = RoadGrid()
        buildings = make_spawner(seed=42).spawn_initial_buildings(grid)

        houses = [b for b in buildings if b.is_house]
        businesses = [b for b in buildings if b.is_business]

        assert [h.color for h in houses] == [CarColor.RED, CarColor.BLUE, CarColor.GREEN]
        assert [b.color for b in businesses] == [CarColor.RED, CarColor.BLUE]
        # Registro: primero casas, luego comercios
        assert buildings == houses + businesses

    def test_buildings_match_grid(self):
        """Test de que cada edificio ocupa su casilla en la grilla."""
        grid = RoadGrid()
        buildings = make_spawner(seed=3).spawn_initial_buildings(grid)

        for building in buildings:
            assert grid.get_tile(*building.position) == building.kind

        assert grid.count(TileType.HOUSE) == 3
        assert grid.count(TileType.BUSINESS) == 2
        assert len({b.position for b in buildings}) == 5

    def test_same_seed_same_layout(self):
        """Test de reproducibilidad con la misma semilla."""
        first = make_spawner(seed=11).spawn_initial_buildings(RoadGrid())
        second = make_spawner(seed=11).spawn_initial_buildings(RoadGrid())

        assert [b.position for b in first] == [b.position for b in second]

    def test_full_grid_skips_buildings(self):
        """Test de que sin lugar libre los edificios se omiten."""
        grid = RoadGrid(3, 3)
        grid.tiles.fill(int(TileType.ROAD))

        buildings = make_spawner().spawn_initial_buildings(grid)

        assert buildings == []
        assert grid.count(TileType.ROAD) == 9

    def test_find_empty_position(self):
        """Test de búsqueda de casilla vacía."""
        grid = RoadGrid(2, 1)
        grid.set_tile(0, 0, TileType.ROAD)

        assert make_spawner().find_empty_position(grid) == Position(1, 0)

    def test_invalid_configuration(self):
        """Test de validación de parámetros."""
        with pytest.raises(ValueError):
            make_spawner(spawn_interval=0)

        with pytest.raises(ValueError):
            make_spawner(spawn_probability=1.5)

        with pytest.raises(ValueError):
            make_spawner(num_houses=7)


class TestCarSpawning:
    """Tests para la generación periódica de autos."""

    def test_spawn_only_on_interval(self):
        """Test de que solo se generan autos cada 5 pasos."""
        spawner = make_spawner(spawn_probability=1.0)
        buildings = [
            Building((0, 0), CarColor.RED, TileType.HOUSE),
            Building((3, 3), CarColor.RED, TileType.BUSINESS),
        ]

        for step in [1, 2, 3, 4, 6, 9]:
            assert spawner.spawn_cars(step, buildings) == []

        cars = spawner.spawn_cars(5, buildings)
        assert len(cars) == 1

    def test_car_goes_to_first_matching_business(self):
        """Test de destino en el primer comercio del mismo color."""
        spawner = make_spawner(spawn_probability=1.0)
        buildings = [
            Building((0, 0), CarColor.BLUE, TileType.HOUSE),
            Building((1, 1), CarColor.RED, TileType.BUSINESS),
            Building((2, 2), CarColor.BLUE, TileType.BUSINESS),
            Building((3, 3), CarColor.BLUE, TileType.BUSINESS),
        ]

        car = spawner.spawn_cars(10, buildings)[0]

        assert car.origin == Position(0, 0)
        assert car.destination == Position(2, 2)
        assert car.color == CarColor.BLUE
        assert car.spawn_step == 10
        assert buildings[0].cars_spawned == 1

    def test_no_matching_business(self):
        """Test de casa sin comercio de su color."""
        spawner = make_spawner(spawn_probability=1.0)
        house = Building((0, 0), CarColor.GREEN, TileType.HOUSE)
        buildings = [house, Building((1, 1), CarColor.RED, TileType.BUSINESS)]

        for step in range(5, 55, 5):
            assert spawner.spawn_cars(step, buildings) == []

        # El contador no avanza si no se generó el auto
        assert house.cars_spawned == 0

    def test_spawn_cap_per_house(self):
        """Test de tope de 5 autos por casa."""
        spawner = make_spawner(spawn_probability=1.0)
        house = Building((0, 0), CarColor.RED, TileType.HOUSE)
        buildings = [house, Building((1, 1), CarColor.RED, TileType.BUSINESS)]

        total = sum(len(spawner.spawn_cars(step, buildings)) for step in range(5, 105, 5))

        assert total == 5
        assert house.cars_spawned == 5
        assert not house.can_spawn()

    def test_zero_probability(self):
        """Test de probabilidad nula."""
        spawner = make_spawner(spawn_probability=0.0)
        buildings = [
            Building((0, 0), CarColor.RED, TileType.HOUSE),
            Building((1, 1), CarColor.RED, TileType.BUSINESS),
        ]

        assert spawner.spawn_cars(5, buildings) == []

    def test_unique_ids(self):
        """Test de IDs únicos dentro del episodio."""
        spawner = make_spawner(spawn_probability=1.0)
        buildings = [
            Building((0, 0), CarColor.RED, TileType.HOUSE),
            Building((0, 1), CarColor.RED, TileType.HOUSE),
            Building((1, 1), CarColor.RED, TileType.BUSINESS),
        ]

        cars = spawner.spawn_cars(5, buildings) + spawner.spawn_cars(10, buildings)

        assert [car.id for car in cars] == [1, 2, 3, 4]
        assert spawner.total_cars_generated == 4

        spawner.reset()
        assert spawner.total_cars_generated == 0

    def test_spawn_statistics(self):
        """Test de estadísticas de generación."""
        spawner = make_spawner(spawn_probability=1.0)
        buildings = [
            Building((0, 0), CarColor.RED, TileType.HOUSE, max_cars=1),
            Building((1, 1), CarColor.RED, TileType.BUSINESS),
        ]
        spawner.spawn_cars(5, buildings)

        stats = spawner.get_spawn_statistics(buildings)

        assert stats['total_generated'] == 1
        assert stats['houses'] == 1
        assert stats['businesses'] == 1
        assert stats['houses_exhausted'] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
