"""
Búsqueda de rutas A* sobre la grilla.

Construye un grafo no dirigido de las casillas transitables (4-conexo,
costo unitario por arista) y calcula rutas óptimas con networkx usando
la distancia Manhattan como heurística.

Desempate: networkx ordena la frontera por (f, contador de inserción), de
modo que entre nodos con igual f se expande primero el insertado antes.
Nodos y aristas se agregan siempre en el mismo orden (por filas), por lo
que la ruta devuelta entre varias óptimas es siempre la misma.
"""

from typing import Iterable, List

import networkx as nx

from .road_grid import DIRECTIONS, Position, RoadGrid


def manhattan_distance(a: Position, b: Position) -> int:
    """Distancia Manhattan entre dos posiciones."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def build_road_graph(grid: RoadGrid, extra_nodes: Iterable[Position] = ()) -> nx.Graph:
    """
    Construye el grafo de movimiento de la grilla.

    Args:
        grid: Grilla de casillas
        extra_nodes: Posiciones a incluir aunque no sean transitables
                     (por ejemplo, la casilla donde está parado un auto)

    Returns:
        nx.Graph: Nodos Position, aristas de peso 1 entre casillas adyacentes
    """
    graph = nx.Graph()

    extra = {Position(*pos) for pos in extra_nodes if grid.in_bounds(*pos)}

    for y in range(grid.height):
        for x in range(grid.width):
            pos = Position(x, y)
            if grid.is_passable(x, y) or pos in extra:
                graph.add_node(pos)

    for node in list(graph.nodes):
        for dx, dy in DIRECTIONS:
            neighbor = Position(node.x + dx, node.y + dy)
            if neighbor not in graph:
                continue
            # Dos casillas no transitables nunca se conectan
            if not grid.is_passable(*neighbor) and not grid.is_passable(*node):
                continue
            graph.add_edge(node, neighbor, weight=1)

    return graph


def find_path(start: Position, goal: Position, grid: RoadGrid) -> List[Position]:
    """
    Calcula la ruta más corta entre dos casillas.

    Args:
        start: Casilla de partida (no necesita ser transitable)
        goal: Casilla de llegada (debe ser transitable)
        grid: Grilla de casillas

    Returns:
        Lista de posiciones desde start hasta goal inclusive, o lista
        vacía si no existe ruta
    """
    start = Position(*start)
    goal = Position(*goal)

    if start == goal:
        return [start]

    if not grid.in_bounds(*start) or not grid.is_passable(*goal):
        return []

    graph = build_road_graph(grid, extra_nodes=[start])

    try:
        return nx.astar_path(graph, start, goal,
                             heuristic=manhattan_distance, weight='weight')
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return []
