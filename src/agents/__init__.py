"""
Agentes de decisión para el entorno de tráfico.

Este módulo contiene la interfaz común y dos políticas:
- RandomAgent: Baseline aleatorio
- RoadBuilderAgent: Heurística que conecta casas con comercios
"""

from .base_agent import Agent, Action
from .random_agent import RandomAgent
from .road_builder import RoadBuilderAgent

__all__ = [
    'Agent',
    'Action',
    'RandomAgent',
    'RoadBuilderAgent'
]
