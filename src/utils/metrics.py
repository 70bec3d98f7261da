"""
Sistema de métricas y análisis de resultados.

Este módulo proporciona funciones para calcular y analizar métricas
de evaluación de agentes sobre varios episodios del entorno.
"""

from typing import Dict, List

import numpy as np
import pandas as pd


class MetricsCalculator:
    """
    Calculadora de métricas de evaluación para episodios del entorno.

    Cada episodio se representa con el diccionario que retorna
    MotorwaysEnvironment.calculate_final_metrics().
    """

    @staticmethod
    def average_score(episodes: List[Dict]) -> float:
        """
        Calcula el puntaje promedio por episodio.

        Args:
            episodes: Lista de métricas de episodios

        Returns:
            float: Autos completados promedio
        """
        if not episodes:
            return 0.0

        return float(np.mean([e['score'] for e in episodes]))

    @staticmethod
    def median_score(episodes: List[Dict]) -> float:
        """Calcula el puntaje mediano por episodio."""
        if not episodes:
            return 0.0

        return float(np.median([e['score'] for e in episodes]))

    @staticmethod
    def percentile_score(episodes: List[Dict], percentile: float = 95) -> float:
        """
        Calcula el percentil del puntaje.

        Args:
            episodes: Lista de métricas de episodios
            percentile: Percentil a calcular (0-100)

        Returns:
            float: Puntaje en el percentil dado
        """
        if not episodes:
            return 0.0

        return float(np.percentile([e['score'] for e in episodes], percentile))

    @staticmethod
    def average_congestion(episodes: List[Dict]) -> float:
        """Calcula la penalización por congestión promedio."""
        if not episodes:
            return 0.0

        return float(np.mean([e['congestion_penalty'] for e in episodes]))

    @staticmethod
    def completion_rate(episodes: List[Dict]) -> float:
        """
        Calcula la fracción de autos generados que llegaron a destino.

        Args:
            episodes: Lista de métricas de episodios

        Returns:
            float: Completados / generados (0.0 a 1.0)
        """
        generated = sum(e['cars_generated'] for e in episodes)
        if generated == 0:
            return 0.0

        return sum(e['cars_completed'] for e in episodes) / generated

    @staticmethod
    def average_episode_length(episodes: List[Dict]) -> float:
        """Calcula la duración promedio de los episodios en pasos."""
        if not episodes:
            return 0.0

        return float(np.mean([e['steps'] for e in episodes]))

    @staticmethod
    def termination_breakdown(episodes: List[Dict]) -> Dict[str, int]:
        """Cuenta episodios por causa de terminación."""
        counts: Dict[str, int] = {}
        for episode in episodes:
            reason = episode.get('termination_reason') or 'not_terminated'
            counts[reason] = counts.get(reason, 0) + 1
        return counts

    @staticmethod
    def create_summary_dataframe(results: Dict[str, List[Dict]]) -> pd.DataFrame:
        """
        Crea un DataFrame con resumen comparativo de agentes.

        Args:
            results: Dict {nombre_agente: [métricas_por_episodio]}

        Returns:
            pd.DataFrame: DataFrame con métricas comparadas
        """
        calc = MetricsCalculator
        data = []

        for agent_name, episodes in results.items():
            data.append({
                'Agent': agent_name,
                'Episodes': len(episodes),
                'Avg Score': calc.average_score(episodes),
                'Median Score': calc.median_score(episodes),
                'Avg Congestion': calc.average_congestion(episodes),
                'Completion Rate': calc.completion_rate(episodes),
                'Avg Steps': calc.average_episode_length(episodes),
                'Avg Trip (steps)': float(np.mean([e['avg_trip_steps'] for e in episodes]))
                if episodes else 0.0
            })

        df = pd.DataFrame(data)

        # Ordenar por puntaje promedio (mayor es mejor)
        if not df.empty:
            df = df.sort_values('Avg Score', ascending=False)

        return df

    @staticmethod
    def episodes_dataframe(episodes: List[Dict]) -> pd.DataFrame:
        """Convierte la lista de episodios en un DataFrame (una fila por episodio)."""
        df = pd.DataFrame(episodes)
        df.index.name = 'episode'
        return df

    @staticmethod
    def calculate_improvement(baseline_metrics: Dict, candidate_metrics: Dict) -> Dict:
        """
        Calcula mejoras porcentuales respecto a baseline.

        Args:
            baseline_metrics: Métricas agregadas del agente baseline
            candidate_metrics: Métricas agregadas del agente evaluado

        Returns:
            dict: Diccionario con mejoras porcentuales
        """
        improvements = {}

        # Métricas donde mayor es mejor
        for metric in ['score', 'cars_completed']:
            baseline_val = baseline_metrics.get(metric, 0)
            candidate_val = candidate_metrics.get(metric, 0)

            if baseline_val > 0:
                improvements[metric] = ((candidate_val - baseline_val) / baseline_val) * 100
            else:
                improvements[metric] = 0.0

        # Métricas donde menor es mejor
        for metric in ['congestion_penalty', 'avg_trip_steps']:
            baseline_val = baseline_metrics.get(metric, 0)
            candidate_val = candidate_metrics.get(metric, 0)

            if baseline_val > 0:
                improvements[metric] = ((baseline_val - candidate_val) / baseline_val) * 100
            else:
                improvements[metric] = 0.0

        return improvements

    @staticmethod
    def aggregate(episodes: List[Dict]) -> Dict:
        """Promedia las métricas numéricas de una lista de episodios."""
        if not episodes:
            return {}

        df = pd.DataFrame(episodes).select_dtypes(include='number')
        return {column: float(value) for column, value in df.mean().items()}

    @staticmethod
    def statistical_significance_test(baseline_scores: List[float],
                                      candidate_scores: List[float],
                                      alpha: float = 0.05) -> Dict:
        """
        Compara los puntajes de dos agentes con un test t de Welch.

        Los episodios de agentes distintos no tienen por qué tener la misma
        varianza, por eso no se asume igualdad de varianzas.

        Args:
            baseline_scores: Puntajes por episodio del agente baseline
            candidate_scores: Puntajes por episodio del agente evaluado
            alpha: Nivel de significancia

        Returns:
            dict: Estadístico, p-value, medias y conclusión
        """
        from scipy import stats

        result = {
            'test': 'welch-t',
            'baseline_mean': float(np.mean(baseline_scores)) if baseline_scores else 0.0,
            'candidate_mean': float(np.mean(candidate_scores)) if candidate_scores else 0.0,
            'statistic': None,
            'p_value': None,
            'significant': False
        }

        if min(len(baseline_scores), len(candidate_scores)) < 2:
            result['message'] = 'Muestras insuficientes'
            return result

        statistic, p_value = stats.ttest_ind(candidate_scores, baseline_scores,
                                             equal_var=False)

        result['statistic'] = float(statistic)
        result['p_value'] = float(p_value)
        result['significant'] = bool(p_value < alpha)

        verdict = 'Diferencia significativa' if result['significant'] else 'Sin diferencia significativa'
        result['message'] = (f"{verdict}: {result['candidate_mean']:.2f} vs "
                             f"{result['baseline_mean']:.2f} (p={p_value:.4f})")
        return result
