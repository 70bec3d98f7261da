"""
Script de ejemplo: Episodio completo del entorno Mini Motorways

Este script demuestra cómo usar el entorno con un agente: ejecuta un
episodio con el agente constructor de calles, muestra la grilla final y
un escenario armado a mano con un auto inyectado.
"""

import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.agents import RoadBuilderAgent
from src.simulator import ActionType, CarColor, MotorwaysEnvironment
from src.utils.config import setup_logging


def run_agent_episode(seed: int = 7):
    """
    Ejecuta un episodio con el agente constructor de calles.

    Returns:
        dict: Métricas del episodio
    """
    print("\n" + "="*70)
    print("EPISODIO - Agente Constructor de Calles")
    print("="*70)

    env = MotorwaysEnvironment(seed=seed)
    agent = RoadBuilderAgent(env.width, env.height)

    metrics = env.run_episode(agent, verbose=True)

    print("\nGrilla final:")
    print(env.grid)

    print("\nMétricas:")
    for key, value in metrics.items():
        if isinstance(value, float):
            print(f"  {key:25s}: {value:.2f}")
        else:
            print(f"  {key:25s}: {value}")

    print("\nAgente:")
    for key, value in agent.get_statistics().items():
        print(f"  {key:25s}: {value}")

    return metrics


def run_scripted_scenario():
    """Construye una calle a mano y sigue un auto hasta su destino."""
    print("\n" + "="*70)
    print("ESCENARIO MANUAL - Calle de (0,0) a (5,0)")
    print("="*70)

    env = MotorwaysEnvironment(seed=0, num_houses=0, num_businesses=0)
    env.reset()

    for x in range(6):
        placed = env.execute_action(ActionType.PLACE_ROAD, x, 0)
        print(f"  Calle en ({x}, 0): {'✓' if placed else '✗'}")

    print(f"  Calles restantes: {env.get_resources()['roads']}")

    car = env.inject_car((0, 0), (5, 0), CarColor.RED)

    while not car.completed:
        env.step((ActionType.NOOP, 0, 0))
        print(f"  Paso {env.get_step()}: {car}")

    print(f"  Puntaje final: {env.get_score()}")


def main():
    """Función principal del ejemplo."""
    setup_logging("WARNING")

    print("="*70)
    print("EJEMPLO COMPLETO DEL ENTORNO DE TRÁFICO")
    print("="*70)

    run_scripted_scenario()
    run_agent_episode()

    print("\n" + "="*70)
    print("EJEMPLO COMPLETADO")
    print("="*70)


if __name__ == "__main__":
    main()
