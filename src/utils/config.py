"""
Configuración global del entorno de tráfico Mini Motorways.

Este módulo contiene todas las constantes y parámetros de configuración
utilizados en el proyecto.
"""

import logging
from pathlib import Path

# Rutas del proyecto
PROJECT_ROOT = Path(__file__).parent.parent.parent
RESULTS_DIR = PROJECT_ROOT / "experiments" / "results"


# Parámetros de la grilla
class GridConfig:
    """Dimensiones de la grilla de casillas."""

    WIDTH = 20
    HEIGHT = 20


# Recursos de infraestructura
class ResourceConfig:
    """Cantidades iniciales (y topes de normalización) de cada recurso."""

    INITIAL_RESOURCES = {
        "roads": 20,
        "motorways": 3,
        "bridges": 2,
        "roundabouts": 1,
        "traffic_lights": 2,
        "upgrades": 1,
    }


# Generación de edificios y vehículos
class SpawnConfig:
    """Configuración de edificios iniciales y generación de autos."""

    NUM_HOUSES = 3
    NUM_BUSINESSES = 2
    PLACEMENT_ATTEMPTS = 100  # Intentos de muestreo antes de rendirse

    SPAWN_INTERVAL = 5  # Se generan autos cada 5 pasos
    SPAWN_PROBABILITY = 0.3
    MAX_CARS_PER_BUILDING = 5


# Movimiento de tráfico
class TrafficConfig:
    """Configuración del movimiento de vehículos."""

    CONGESTION_THRESHOLD = 10  # Pasos atascado antes de penalizar


# Condiciones de fin de episodio
class TerminationConfig:
    """Configuración del evaluador de terminación."""

    MAX_STEPS = 1000
    STUCK_THRESHOLD = 20  # Pasos atascado para contar como auto bloqueado
    MAX_STUCK_CARS = 10
    MAX_CARS_WITHOUT_RESOURCES = 15


# Normalización de la observación
class ObservationConfig:
    """Constantes de normalización del vector de observación."""

    TILE_NORMALIZER = 7.0
    CARS_PER_CELL_NORMALIZER = 5.0
    SCORE_NORMALIZER = 100.0
    CAR_COUNT_NORMALIZER = 50.0
    CONGESTION_NORMALIZER = 100.0
    NUM_RESOURCE_VALUES = 6
    NUM_SCALAR_VALUES = 4


# Agentes
class AgentConfig:
    """Configuración de los agentes de decisión."""

    NUM_ACTION_TYPES = 7  # 0-5 infraestructura, 6 = no hacer nada
    NOOP_ACTION = 6
    EMPTY_CELL_COST = 1.0  # Costo de atravesar una casilla vacía (RoadBuilder)
    PASSABLE_CELL_COST = 0.01  # Costo de atravesar una casilla transitable


# Logging
class LoggingConfig:
    """Configuración de logging."""

    LOG_LEVEL = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE = PROJECT_ROOT / "simulation.log"


def setup_logging(level: str = None, log_to_file: bool = False):
    """
    Configura el logging raíz según LoggingConfig.

    Args:
        level: Nivel de logging (por defecto LoggingConfig.LOG_LEVEL)
        log_to_file: Si True, también escribe en LoggingConfig.LOG_FILE
    """
    handlers = [logging.StreamHandler()]
    if log_to_file:
        handlers.append(logging.FileHandler(LoggingConfig.LOG_FILE, encoding="utf-8"))

    logging.basicConfig(
        level=level or LoggingConfig.LOG_LEVEL,
        format=LoggingConfig.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


# Crear directorios si no existen
def ensure_directories():
    """Crea los directorios necesarios si no existen."""
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":
    print(f"Directorio del proyecto: {PROJECT_ROOT}")
    print(f"Directorio de resultados: {RESULTS_DIR}")
    print(f"Grilla: {GridConfig.WIDTH}x{GridConfig.HEIGHT}")
    ensure_directories()
    print("Directorios verificados/creados correctamente")
