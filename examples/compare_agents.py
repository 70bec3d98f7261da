"""
Script de comparación: Agentes sobre varios episodios

Ejecuta el agente aleatorio (baseline) y el agente constructor de calles
sobre las mismas semillas y compara sus resultados:
1. Random (Baseline)
2. Road Builder
"""

import sys
from pathlib import Path

# Agregar src al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.agents import RandomAgent, RoadBuilderAgent
from src.simulator import MotorwaysEnvironment
from src.utils.config import RESULTS_DIR, ensure_directories, setup_logging
from src.utils.metrics import MetricsCalculator
import time as timer

NUM_EPISODES = 10
MAX_STEPS = 300


def run_agent(name: str, make_agent, seeds):
    """
    Ejecuta un agente sobre una lista de semillas.

    Args:
        name: Nombre para mostrar
        make_agent: Función que construye el agente para una semilla
        seeds: Semillas del entorno

    Returns:
        list: Métricas por episodio
    """
    print(f"\n{'='*70}")
    print(f"{name}")
    print(f"{'='*70}")

    episodes = []
    start = timer.time()

    for seed in seeds:
        env = MotorwaysEnvironment(max_steps=MAX_STEPS, seed=seed)
        agent = make_agent(seed)
        metrics = env.run_episode(agent)
        episodes.append(metrics)
        print(f"  Semilla {seed:3d}: puntaje={metrics['score']:3d} | "
              f"pasos={metrics['steps']:4d} | "
              f"fin={metrics['termination_reason']}")

    print(f"\n  Tiempo total: {timer.time() - start:.2f}s")

    return episodes


def print_comparison(results: dict):
    """Imprime tabla comparativa de resultados."""
    print(f"\n{'='*80}")
    print("TABLA COMPARATIVA DE RESULTADOS")
    print(f"{'='*80}")

    calc = MetricsCalculator()
    df = calc.create_summary_dataframe(results)

    print("\n" + df.to_string(index=False))

    print(f"\n{'='*80}")
    print("MEJORAS RESPECTO A BASELINE")
    print(f"{'='*80}")

    baseline = results['Random']
    baseline_metrics = calc.aggregate(baseline)

    for agent_name, episodes in results.items():
        if agent_name == 'Random':
            continue

        print(f"\n{agent_name}:")
        print(f"  Fin de episodio: {calc.termination_breakdown(episodes)}")
        improvements = calc.calculate_improvement(baseline_metrics, calc.aggregate(episodes))

        for metric, improvement in improvements.items():
            symbol = "✓" if improvement > 0 else "✗"
            print(f"  {symbol} {metric:25s}: {improvement:+.1f}%")

        test = calc.statistical_significance_test(
            [e['score'] for e in baseline],
            [e['score'] for e in episodes]
        )
        print(f"  {test['message']}")

    return df


def main():
    """Función principal."""
    setup_logging("WARNING")
    ensure_directories()

    print("="*80)
    print("COMPARACIÓN DE AGENTES")
    print(f"Episodios por agente: {NUM_EPISODES}")
    print(f"Pasos máximos: {MAX_STEPS}")
    print("="*80)

    seeds = list(range(NUM_EPISODES))
    results = {}

    # 1. Baseline
    results['Random'] = run_agent(
        "1. RANDOM - Baseline Aleatorio",
        lambda seed: RandomAgent(seed=seed),
        seeds
    )

    # 2. Heurística
    results['Road Builder'] = run_agent(
        "2. ROAD BUILDER - Conecta Casas con Comercios",
        lambda seed: RoadBuilderAgent(),
        seeds
    )

    df = print_comparison(results)

    output = RESULTS_DIR / "agent_comparison.csv"
    df.to_csv(output, index=False)
    print(f"\nResultados guardados en {output}")

    print(f"\n{'='*80}")
    print("COMPARACIÓN COMPLETADA")
    print(f"{'='*80}")


if __name__ == "__main__":
    main()
