"""Plotting functions for search runs and parameter sweeps."""

import matplotlib.pyplot as plt
import pandas as pd
from pathlib import Path
from typing import Sequence


def plot_convergence(
    cost_log: Sequence[float],
    output_path: str = 'results/convergence.png',
    title: str = 'Tabu Search convergence',
    maximize: bool = True,
):
    """
    Plot the best value found after each local-search iteration.

    Args:
        cost_log: Best cost per iteration (minimization sense)
        output_path: Path to save plot
        title: Plot title
        maximize: Negate costs back to QBF values (inverse evaluator)
    """
    if not cost_log:
        print("No iterations to plot")
        return

    values = [-c for c in cost_log] if maximize else list(cost_log)

    plt.figure(figsize=(10, 6))
    plt.plot(range(1, len(values) + 1), values)
    plt.xlabel('Iteration')
    plt.ylabel('Best QBF value' if maximize else 'Best cost')
    plt.title(title)
    plt.grid(alpha=0.3)
    plt.tight_layout()

    Path(output_path).parent.mkdir(exist_ok=True, parents=True)
    plt.savefig(output_path)
    plt.close()
    print(f"Saved plot to {output_path}")


def plot_tuning_results(results_df: pd.DataFrame, output_path: str = 'results/tabu_tuning.png'):
    """
    Bar chart of average QBF value per configuration and instance.

    Args:
        results_df: DataFrame from `tune_tabu`
        output_path: Path to save plot
    """
    if results_df.empty:
        print("No data to plot")
        return

    df = results_df.copy()
    df['config'] = (
        't=' + df['tenure'].astype(str)
        + ', p=' + df['percent'].astype(str)
        + ', ' + df['strategy']
    )
    pivot = df.pivot_table(values='avg_value', index='instance', columns='config', aggfunc='mean')

    pivot.plot(kind='bar', figsize=(12, 6))
    plt.ylabel('Average QBF value')
    plt.xlabel('Instance')
    plt.title('Tabu Search configurations')
    plt.legend(title='Configuration', fontsize='small')
    plt.xticks(rotation=45)
    plt.tight_layout()

    Path(output_path).parent.mkdir(exist_ok=True, parents=True)
    plt.savefig(output_path)
    plt.close()
    print(f"Saved plot to {output_path}")
