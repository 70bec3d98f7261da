"""
Agente aleatorio usado como baseline.

Elige un tipo de acción uniforme en [0, 6] (incluyendo "no hacer nada")
y una casilla uniforme en la grilla. No aprende.
"""

from typing import Dict, Optional

import numpy as np

from .base_agent import Action, Agent
from src.utils.config import AgentConfig, GridConfig


class RandomAgent(Agent):
    """Política uniforme sin estado."""

    name = "random"

    def __init__(self, width: int = GridConfig.WIDTH, height: int = GridConfig.HEIGHT,
                 seed: Optional[int] = None):
        """
        Inicializa el agente.

        Args:
            width: Columnas de la grilla
            height: Filas de la grilla
            seed: Semilla del generador aleatorio
        """
        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)
        self.decisions_made = 0

    def get_action(self, observation: np.ndarray) -> Action:
        self.decisions_made += 1
        return (int(self.rng.integers(0, AgentConfig.NUM_ACTION_TYPES)),
                int(self.rng.integers(0, self.width)),
                int(self.rng.integers(0, self.height)))

    def get_statistics(self) -> Dict:
        return {
            'agent': self.name,
            'decisions_made': self.decisions_made
        }
