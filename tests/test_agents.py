"""
Tests para los agentes de decisión.
"""

import pytest
import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.agents import Agent, RandomAgent, RoadBuilderAgent
from src.simulator import ActionType, MotorwaysEnvironment, Position, TileType
from src.simulator.pathfinding import find_path


def layout_environment(houses, businesses, width=8, height=8):
    """Entorno vacío con edificios ubicados a mano."""
    env = MotorwaysEnvironment(width=width, height=height, seed=0,
                               num_houses=0, num_businesses=0)
    env.reset()
    for x, y in houses:
        env.grid.set_tile(x, y, TileType.HOUSE)
    for x, y in businesses:
        env.grid.set_tile(x, y, TileType.BUSINESS)
    return env


class TestAgentInterface:
    """Tests para la interfaz Agent."""

    def test_cannot_instantiate_abstract(self):
        """Test de que Agent es abstracta."""
        with pytest.raises(TypeError):
            Agent()

    def test_default_hooks(self):
        """Test de métodos opcionales sin efecto."""
        agent = RandomAgent(seed=0)

        agent.update(None, (6, 0, 0), 0.0, None, False)
        agent.save_model("unused.pkl")
        agent.load_model("unused.pkl")

        assert agent.get_statistics()['agent'] == 'random'


class TestRandomAgent:
    """Tests para RandomAgent."""

    def test_actions_in_range(self):
        """Test de acciones dentro del rango válido."""
        agent = RandomAgent(width=5, height=4, seed=1)

        actions = [agent.get_action(None) for _ in range(500)]

        assert all(0 <= kind <= 6 for kind, _, _ in actions)
        assert all(0 <= x < 5 and 0 <= y < 4 for _, x, y in actions)
        # Con 500 muestras aparecen todos los tipos
        assert {kind for kind, _, _ in actions} == set(range(7))
        assert agent.decisions_made == 500

    def test_reproducible(self):
        """Test de reproducibilidad con semilla."""
        a = RandomAgent(seed=7)
        b = RandomAgent(seed=7)

        assert [a.get_action(None) for _ in range(20)] == [b.get_action(None) for _ in range(20)]


class TestRoadBuilderAgent:
    """Tests para RoadBuilderAgent."""

    def test_builds_first_gap(self):
        """Test de construcción en la primera casilla vacía del corredor."""
        env = layout_environment(houses=[(0, 0)], businesses=[(3, 0)])
        agent = RoadBuilderAgent(env.width, env.height)

        kind, x, y = agent.get_action(env.get_observation())

        assert kind == ActionType.PLACE_ROAD
        assert (x, y) == (1, 0)

    def test_connects_house_and_business(self):
        """Test de que el agente termina conectando el par."""
        env = layout_environment(houses=[(1, 1)], businesses=[(5, 4)])
        agent = RoadBuilderAgent(env.width, env.height)

        for _ in range(10):
            env.step(agent.get_action(env.get_observation()))

        path = find_path(Position(1, 1), Position(5, 4), env.grid)

        assert len(path) == 8
        assert env.get_resources()['roads'] == 14
        assert agent.roads_requested == 6

        # Ya conectado: no hace nada
        assert agent.get_action(env.get_observation()) == (ActionType.NOOP, 0, 0)
        assert agent.noops >= 1

    def test_reuses_existing_roads(self):
        """Test de que prefiere casillas ya transitables."""
        env = layout_environment(houses=[(0, 2)], businesses=[(4, 2)])
        for x in range(1, 4):
            env.grid.set_tile(x, 2, TileType.ROAD)
        env.grid.set_tile(2, 2, TileType.EMPTY)

        agent = RoadBuilderAgent(env.width, env.height)

        assert agent.get_action(env.get_observation()) == (ActionType.PLACE_ROAD, 2, 2)

    def test_noop_without_roads(self):
        """Test de no-op con calles agotadas."""
        env = MotorwaysEnvironment(width=8, height=8, seed=0, num_houses=1,
                                   num_businesses=1, initial_resources={"roads": 0, "upgrades": 1})
        env.reset()
        agent = RoadBuilderAgent(8, 8)

        assert agent.get_action(env.get_observation()) == (ActionType.NOOP, 0, 0)

    def test_noop_without_buildings(self):
        """Test de no-op sin pares casa-comercio."""
        env = layout_environment(houses=[(0, 0)], businesses=[])
        agent = RoadBuilderAgent(env.width, env.height)

        assert agent.get_action(env.get_observation()) == (ActionType.NOOP, 0, 0)

    def test_statistics_and_reset(self):
        """Test de estadísticas del agente."""
        env = layout_environment(houses=[(0, 0)], businesses=[(2, 0)])
        agent = RoadBuilderAgent(env.width, env.height)
        agent.get_action(env.get_observation())

        stats = agent.get_statistics()
        assert stats['decisions_made'] == 1
        assert stats['roads_requested'] == 1

        agent.reset()
        assert agent.get_statistics()['decisions_made'] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
