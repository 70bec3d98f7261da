"""
Simulador de tráfico en grilla estilo Mini Motorways.

Este módulo contiene el motor de simulación que modela:
- Grilla de casillas e inventario de recursos
- Acciones de construcción y remoción de infraestructura
- Búsqueda de rutas A* y movimiento de autos
- Generación de autos desde casas hacia comercios
- Fin de episodio y codificación de observaciones
"""

from .road_grid import Position, TileType, ResourceType, ResourceLedger, RoadGrid
from .actions import ActionType, apply_action
from .pathfinding import find_path, build_road_graph, manhattan_distance
from .vehicle import Car, CarColor, CarState
from .buildings import Building
from .traffic_generator import CarSpawner
from .termination import TerminationReason, check_termination
from .observation import encode_observation, observation_size, decode_grid_layer
from .traffic_simulator import MotorwaysEnvironment

__all__ = [
    'Position',
    'TileType',
    'ResourceType',
    'ResourceLedger',
    'RoadGrid',
    'ActionType',
    'apply_action',
    'find_path',
    'build_road_graph',
    'manhattan_distance',
    'Car',
    'CarColor',
    'CarState',
    'Building',
    'CarSpawner',
    'TerminationReason',
    'check_termination',
    'encode_observation',
    'observation_size',
    'decode_grid_layer',
    'MotorwaysEnvironment'
]
