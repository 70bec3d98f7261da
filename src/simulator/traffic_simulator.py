"""
Motor principal del entorno de tráfico en grilla.

Este módulo implementa el entorno que coordina todos los componentes:
grilla, inventario de recursos, ejecutor de acciones, búsqueda de rutas,
movimiento de autos, generación de tráfico y fin de episodio. Se controla
desde afuera con reset() / step(action).
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from .actions import apply_action, is_edit_action
from .buildings import Building
from .observation import encode_observation, observation_size
from .pathfinding import find_path
from .road_grid import Position, ResourceLedger, ResourceType, RoadGrid
from .termination import TerminationReason, check_termination, count_stuck_cars
from .traffic_generator import CarSpawner
from .vehicle import Car, CarColor
from src.utils.config import (GridConfig, SpawnConfig, TerminationConfig,
                              TrafficConfig)

logger = logging.getLogger(__name__)


class MotorwaysEnvironment:
    """
    Entorno de simulación de tráfico paso a paso.

    En cada paso se ejecuta, en orden: acción de infraestructura, movimiento
    de autos, generación de autos y evaluación de fin de episodio. Todo el
    estado pertenece a esta instancia y solo se modifica desde reset() y
    step(); los accesores de lectura retornan copias o vistas inmutables.
    """

    def __init__(self, width: int = GridConfig.WIDTH, height: int = GridConfig.HEIGHT,
                 max_steps: int = TerminationConfig.MAX_STEPS, seed: Optional[int] = None,
                 num_houses: int = SpawnConfig.NUM_HOUSES,
                 num_businesses: int = SpawnConfig.NUM_BUSINESSES,
                 initial_resources: Optional[Dict[str, int]] = None):
        """
        Inicializa el entorno. Llamar a reset() antes del primer step().

        Args:
            width: Columnas de la grilla
            height: Filas de la grilla
            max_steps: Horizonte del episodio
            seed: Semilla del generador aleatorio (None = no determinista)
            num_houses: Casas iniciales
            num_businesses: Comercios iniciales
            initial_resources: Dict {nombre_recurso: cantidad} inicial

        Raises:
            ValueError: Si la configuración no es válida
        """
        if max_steps <= 0:
            raise ValueError(f"Horizonte inválido: {max_steps}")

        self.grid = RoadGrid(width, height)
        self.ledger = ResourceLedger(initial_resources)
        self.max_steps = max_steps

        self.rng = np.random.default_rng(seed)
        self.spawner = CarSpawner(self.rng, num_houses=num_houses,
                                  num_businesses=num_businesses)

        self.buildings: List[Building] = []
        self.cars: List[Car] = []
        self.completed_cars: List[Car] = []

        # Estado del episodio
        self.score = 0
        self.current_step = 0
        self.congestion_penalty = 0
        self.game_over = False
        self.termination_reason: Optional[TerminationReason] = None
        self.closed = False

        # Métricas por paso
        self.metrics_history: List[Dict] = []

        logger.info("Entorno inicializado: grilla %dx%d, horizonte %d pasos",
                    width, height, max_steps)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def observation_size(self) -> int:
        return observation_size(self.grid.width, self.grid.height)

    # ------------------------------------------------------------------
    # Interfaz principal
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> np.ndarray:
        """
        Reinicia el episodio al estado inicial.

        Args:
            seed: Si se indica, reinicia también el generador aleatorio

        Returns:
            np.ndarray: Observación inicial
        """
        if seed is not None:
            self.rng = np.random.default_rng(seed)
            self.spawner.rng = self.rng

        self.grid.clear()
        self.ledger.reset()
        self.cars = []
        self.completed_cars = []
        self.metrics_history = []

        self.score = 0
        self.current_step = 0
        self.congestion_penalty = 0
        self.game_over = False
        self.termination_reason = None

        self.spawner.reset()
        self.buildings = self.spawner.spawn_initial_buildings(self.grid)

        logger.debug("Episodio reiniciado con %d edificios", len(self.buildings))

        return self.get_observation()

    def step(self, action: Sequence[int]) -> np.ndarray:
        """
        Ejecuta un paso de simulación.

        Args:
            action: Tupla (tipo, x, y). Un tipo >= 6 no edita la grilla
                    pero el resto del paso se ejecuta igual.

        Returns:
            np.ndarray: Observación después del paso. Si el episodio ya
                        terminó o la acción está mal formada, la
                        observación actual sin cambios.
        """
        if self.game_over or not self._is_well_formed(action):
            return self.get_observation()

        action_kind, x, y = (int(value) for value in action)

        self.current_step += 1

        # 1. Acción de infraestructura
        if is_edit_action(action_kind):
            self.execute_action(action_kind, x, y)

        # 2. Mover autos
        self.simulate_traffic()

        # 3. Generar autos nuevos
        self.spawn_cars()

        # 4. Evaluar fin de episodio
        self.game_over = self.check_game_over()

        # 5. Registrar métricas del paso
        self._record_metrics()

        return self.get_observation()

    @staticmethod
    def _is_well_formed(action) -> bool:
        """Una acción válida es una secuencia de exactamente 3 enteros."""
        if not isinstance(action, (tuple, list, np.ndarray)) or len(action) != 3:
            return False
        try:
            return all(int(value) == value for value in action)
        except (TypeError, ValueError, OverflowError):
            return False

    def execute_action(self, action_kind: int, x: int, y: int) -> bool:
        """
        Aplica una acción de infraestructura sobre el episodio actual.

        Returns:
            bool: True si se aplicó, False si fue rechazada (sin cambios)
        """
        return apply_action(self.grid, self.ledger, action_kind, x, y)

    def simulate_traffic(self):
        """
        Avanza cada auto activo una casilla sobre su ruta.

        Los autos se recorren por índice; los que llegan se marcan y se
        compactan fuera de la colección una sola vez al final.
        """
        for index in range(len(self.cars)):
            car = self.cars[index]
            if car.completed:
                continue

            # Calcular ruta solo si no tiene
            if not car.has_route():
                car.set_route(find_path(car.position, car.destination, self.grid))

            next_pos = car.next_waypoint()
            if next_pos is None:
                continue

            if self.can_move_to(next_pos):
                car.advance()
                if car.has_arrived():
                    car.mark_arrived(self.current_step)
                    self.score += 1
            else:
                car.mark_stuck()
                if car.stuck_time > TrafficConfig.CONGESTION_THRESHOLD:
                    self.congestion_penalty += 1

        arrived = [car for car in self.cars if car.completed]
        if arrived:
            self.completed_cars.extend(arrived)
            self.cars = [car for car in self.cars if not car.completed]

    def can_move_to(self, pos: Position) -> bool:
        """Verifica si la casilla existe y es transitable."""
        return self.grid.is_passable(pos[0], pos[1])

    def spawn_cars(self):
        """Genera autos nuevos desde las casas (solo en pasos elegibles)."""
        new_cars = self.spawner.spawn_cars(self.current_step, self.buildings)
        self.cars.extend(new_cars)

    def inject_car(self, origin: Position, destination: Position,
                   color: CarColor) -> Car:
        """
        Agrega un auto a la colección activa.

        Args:
            origin: Casilla de partida
            destination: Casilla de destino
            color: Color del auto

        Returns:
            Car: El auto agregado
        """
        car = self.spawner.create_car(Position(*origin), Position(*destination),
                                      color, self.current_step)
        self.cars.append(car)
        return car

    def check_game_over(self) -> bool:
        """Evalúa las condiciones de fin de episodio y registra la causa."""
        if self.game_over:
            return True

        reason = check_termination(self.cars, self.ledger, self.current_step,
                                   self.max_steps)
        if reason is not None:
            self.termination_reason = reason
            logger.debug("Fin de episodio en paso %d: %s (puntaje %d)",
                         self.current_step, reason.value, self.score)
            return True
        return False

    def get_observation(self) -> np.ndarray:
        """Retorna el vector de observación del estado actual."""
        return encode_observation(self.grid, self.cars, self.ledger, self.score,
                                  self.congestion_penalty, self.current_step,
                                  self.max_steps)

    def is_done(self) -> bool:
        """True si el episodio terminó o se cerró el entorno desde afuera."""
        return self.game_over or self.closed

    def close(self):
        """Señal externa de cierre."""
        self.closed = True

    # ------------------------------------------------------------------
    # Accesores de solo lectura
    # ------------------------------------------------------------------

    def get_grid(self) -> np.ndarray:
        return self.grid.snapshot()

    def get_buildings(self) -> List[Building]:
        """Copias de los edificios; modificarlas no afecta al episodio."""
        return [copy.copy(building) for building in self.buildings]

    def get_cars(self) -> List[Car]:
        """Copias de los autos activos (incluida su ruta)."""
        return copy.deepcopy(self.cars)

    def get_resources(self) -> Dict[str, int]:
        return self.ledger.as_dict()

    def get_score(self) -> int:
        return self.score

    def get_step(self) -> int:
        return self.current_step

    def get_car_count(self) -> int:
        return len(self.cars)

    def get_congestion_penalty(self) -> int:
        return self.congestion_penalty

    # ------------------------------------------------------------------
    # Ejecución de episodios y métricas
    # ------------------------------------------------------------------

    def run_episode(self, agent, max_steps: Optional[int] = None,
                    verbose: bool = False) -> Dict:
        """
        Ejecuta un episodio completo controlado por un agente.

        La recompensa que recibe el agente es la variación de puntaje.

        Args:
            agent: Instancia de Agent (get_action / update)
            max_steps: Corta el episodio antes del horizonte si se indica
            verbose: Si True, imprime progreso cada 10% del horizonte

        Returns:
            dict: Métricas finales del episodio
        """
        observation = self.reset()
        agent.reset()
        limit = max_steps if max_steps is not None else self.max_steps
        report_interval = max(1, self.max_steps // 10)

        while not self.is_done() and self.current_step < limit:
            action = agent.get_action(observation)
            previous_score = self.score
            next_observation = self.step(action)
            reward = float(self.score - previous_score)

            agent.update(observation, action, reward, next_observation, self.is_done())
            observation = next_observation

            if verbose and self.current_step % report_interval == 0:
                self._print_progress()

        return self.calculate_final_metrics()

    def _record_metrics(self):
        """Registra métricas instantáneas del paso."""
        self.metrics_history.append({
            'step': self.current_step,
            'score': self.score,
            'active_cars': len(self.cars),
            'stuck_cars': count_stuck_cars(self.cars),
            'congestion_penalty': self.congestion_penalty,
            'resources_left': self.ledger.total()
        })

    def calculate_final_metrics(self) -> Dict:
        """
        Calcula métricas del episodio.

        Returns:
            dict: Diccionario con todas las métricas
        """
        trip_steps = [car.get_trip_steps(self.current_step) for car in self.completed_cars]
        active_counts = [m['active_cars'] for m in self.metrics_history]

        return {
            'score': self.score,
            'steps': self.current_step,
            'congestion_penalty': self.congestion_penalty,
            'cars_generated': self.spawner.total_cars_generated,
            'cars_completed': len(self.completed_cars),
            'cars_active': len(self.cars),
            'avg_trip_steps': float(np.mean(trip_steps)) if trip_steps else 0.0,
            'avg_active_cars': float(np.mean(active_counts)) if active_counts else 0.0,
            'max_active_cars': max(active_counts) if active_counts else 0,
            'resources_left': self.ledger.total(),
            'roads_built': self.ledger.get_cap(ResourceType.ROADS) - self.ledger.get(ResourceType.ROADS),
            'termination_reason': self.termination_reason.value if self.termination_reason else None
        }

    def get_current_state(self) -> Dict:
        """
        Retorna el estado actual completo de la simulación.

        Returns:
            dict: Estado actual
        """
        return {
            'step': self.current_step,
            'score': self.score,
            'congestion_penalty': self.congestion_penalty,
            'game_over': self.game_over,
            'active_cars': len(self.cars),
            'resources': self.ledger.as_dict(),
            'grid': self.grid.get_grid_stats(),
            'spawn': self.spawner.get_spawn_statistics(self.buildings),
            'buildings': [
                {
                    'kind': b.kind.name.lower(),
                    'color': b.color.name.lower(),
                    'position': tuple(b.position),
                    'cars_spawned': b.cars_spawned
                }
                for b in self.buildings
            ]
        }

    def _print_progress(self):
        """Imprime progreso del episodio."""
        print(f"[Paso {self.current_step:4d}] "
              f"Puntaje: {self.score:3d} | "
              f"Activos: {len(self.cars):3d} | "
              f"Congestión: {self.congestion_penalty:3d} | "
              f"Recursos: {self.ledger.total():2d}")

    def __repr__(self) -> str:
        return (f"MotorwaysEnvironment({self.grid.width}x{self.grid.height}, "
                f"step={self.current_step}, score={self.score}, cars={len(self.cars)})")
