"""
Interfaz común de los agentes de decisión.

El entorno solo conoce esta interfaz: recibe una acción (tipo, x, y) por
paso y, opcionalmente, le entrega al agente la transición observada.
Las políticas aprendidas extienden update/save_model/load_model.
"""

from abc import ABC, abstractmethod
from typing import Dict, Sequence, Tuple

import numpy as np

Action = Tuple[int, int, int]


class Agent(ABC):
    """Agente que elige una acción de infraestructura por paso."""

    name = "agent"

    @abstractmethod
    def get_action(self, observation: np.ndarray) -> Action:
        """
        Elige la acción para la observación dada.

        Args:
            observation: Vector producido por el entorno

        Returns:
            tuple: (tipo_de_acción, x, y)
        """

    def update(self, observation: np.ndarray, action: Sequence[int], reward: float,
               next_observation: np.ndarray, done: bool):
        """
        Recibe una transición del entorno.

        Las políticas sin aprendizaje la ignoran.
        """

    def save_model(self, filepath: str):
        """Persiste el estado del agente (no-op para políticas sin estado)."""

    def load_model(self, filepath: str):
        """Carga el estado del agente (no-op para políticas sin estado)."""

    def reset(self):
        """Se llama al comenzar cada episodio."""

    def get_statistics(self) -> Dict:
        return {'agent': self.name}
