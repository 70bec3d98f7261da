"""
Agente heurístico que construye calles entre casas y comercios.

Sirve como baseline con sentido frente al agente aleatorio. Solo lee la
observación: decodifica la capa de grilla y los recursos, busca el
corredor más barato entre cada casa y cada comercio (entrar a una
casilla vacía cuesta 1, a una transitable casi nada) y coloca una calle
en la primera casilla vacía de ese corredor.
"""

from typing import Dict, List, Optional, Tuple

import networkx as nx
import numpy as np

from .base_agent import Action, Agent
from src.simulator.actions import ActionType
from src.simulator.observation import decode_grid_layer, decode_resources
from src.simulator.pathfinding import manhattan_distance
from src.simulator.road_grid import Position, TileType
from src.utils.config import AgentConfig, GridConfig


class RoadBuilderAgent(Agent):
    """
    Política determinista de construcción de calles.

    Recorre los pares (casa, comercio) del más cercano al más lejano y
    trabaja en el primero que todavía no está conectado. Cuando no quedan
    calles disponibles o todos los pares están conectados, no hace nada.
    """

    name = "road_builder"

    def __init__(self, width: int = GridConfig.WIDTH, height: int = GridConfig.HEIGHT,
                 empty_cost: float = AgentConfig.EMPTY_CELL_COST,
                 passable_cost: float = AgentConfig.PASSABLE_CELL_COST):
        """
        Inicializa el agente.

        Args:
            width: Columnas de la grilla
            height: Filas de la grilla
            empty_cost: Costo de atravesar una casilla vacía
            passable_cost: Costo de atravesar una casilla ya transitable
        """
        self.width = width
        self.height = height
        self.empty_cost = empty_cost
        self.passable_cost = passable_cost

        # La topología no cambia; los costos se recalculan en cada decisión
        self.graph = nx.Graph()
        for y in range(height):
            for x in range(width):
                self.graph.add_node(Position(x, y))
                if x > 0:
                    self.graph.add_edge(Position(x - 1, y), Position(x, y))
                if y > 0:
                    self.graph.add_edge(Position(x, y - 1), Position(x, y))

        # Estadísticas
        self.decisions_made = 0
        self.roads_requested = 0
        self.noops = 0

    def get_action(self, observation: np.ndarray) -> Action:
        self.decisions_made += 1

        resources = decode_resources(observation, self.width, self.height)
        if resources['roads'] <= 0:
            return self._noop()

        tiles = decode_grid_layer(observation, self.width, self.height)

        for house, business in self._pairs_by_distance(tiles):
            target = self._first_gap(tiles, house, business)
            if target is not None:
                self.roads_requested += 1
                return (int(ActionType.PLACE_ROAD), target.x, target.y)

        return self._noop()

    def _noop(self) -> Action:
        self.noops += 1
        return (AgentConfig.NOOP_ACTION, 0, 0)

    @staticmethod
    def _positions(tiles: np.ndarray, tile: TileType) -> List[Position]:
        ys, xs = np.nonzero(tiles == int(tile))
        return [Position(int(x), int(y)) for y, x in zip(ys, xs)]

    def _pairs_by_distance(self, tiles: np.ndarray) -> List[Tuple[Position, Position]]:
        """Pares (casa, comercio) ordenados por distancia Manhattan."""
        houses = self._positions(tiles, TileType.HOUSE)
        businesses = self._positions(tiles, TileType.BUSINESS)
        pairs = [(h, b) for h in houses for b in businesses]
        return sorted(pairs, key=lambda pair: (manhattan_distance(*pair), pair))

    def _first_gap(self, tiles: np.ndarray, house: Position,
                   business: Position) -> Optional[Position]:
        """
        Busca la primera casilla vacía del corredor más barato.

        Returns:
            Position a construir, o None si el par ya está conectado
        """
        empty = tiles == int(TileType.EMPTY)

        def entry_cost(u, v, data):
            return self.empty_cost if empty[v[1], v[0]] else self.passable_cost

        path = nx.dijkstra_path(self.graph, house, business, weight=entry_cost)

        for pos in path:
            if empty[pos.y, pos.x]:
                return pos
        return None

    def get_statistics(self) -> Dict:
        return {
            'agent': self.name,
            'decisions_made': self.decisions_made,
            'roads_requested': self.roads_requested,
            'noops': self.noops
        }

    def reset(self):
        self.decisions_made = 0
        self.roads_requested = 0
        self.noops = 0
