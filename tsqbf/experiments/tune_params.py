"""Parameter sweep for the QBF Tabu Search."""

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..heuristics.config import TabuConfig
from ..heuristics.tabu import tabu_search
from ..model.instance import QBFInstance
from ..model.instance_generator import load_instance
from ..model.qbf import QBFInverse


def tune_tabu(
    instances: List[QBFInstance],
    tenures: Sequence[int] = (5, 10, 20),
    percents: Sequence[float] = (1.0, 0.5),
    strategies: Sequence[bool] = (True, False),
    base_config: Optional[TabuConfig] = None,
    seeds: Sequence[int] = (0,),
    output_dir: Optional[str] = 'results',
) -> pd.DataFrame:
    """
    Sweep tenure x percent x first/best-improving over a list of instances.

    Args:
        instances: Instances to tune on
        tenures: Tabu tenures to try
        percents: Sampling fractions to try (< 1.0 is adaptive)
        strategies: Values of `first_improving` to try
        base_config: Remaining parameters (iterations, time limit, ...)
        seeds: Seeds per configuration; each seed is one run
        output_dir: Directory for 'tabu_tuning_results.csv' (None = don't save)

    Returns:
        DataFrame with one row per (instance, configuration)
    """
    base_config = base_config or TabuConfig(iterations=1000, time_limit=60.0)

    rows = []

    print("\n=== Tabu Search Parameter Tuning ===")

    for instance in instances:
        evaluator = QBFInverse(instance)
        print(f"\nInstance: {instance.name or instance.size} ({instance.size} variables)")

        for tenure in tenures:
            for percent in percents:
                for first in strategies:
                    values = []
                    runtimes = []
                    iterations = []
                    for seed in seeds:
                        cfg = replace(base_config, tenure=tenure, percent=percent,
                                      first_improving=first, seed=seed, verbose=False)
                        result = tabu_search(evaluator, cfg)
                        values.append(-result.best_cost)
                        runtimes.append(result.runtime)
                        iterations.append(result.iterations)

                    row = {
                        'instance': instance.name,
                        'size': instance.size,
                        'tenure': tenure,
                        'percent': percent,
                        'strategy': 'first' if first else 'best',
                        'avg_value': float(np.mean(values)),
                        'best_value': float(np.max(values)),
                        'std_value': float(np.std(values)),
                        'avg_runtime': float(np.mean(runtimes)),
                        'avg_iterations': float(np.mean(iterations)),
                        'n_runs': len(seeds),
                    }
                    rows.append(row)

                    print(f"  tenure={tenure}, percent={percent}, {row['strategy']} -> "
                          f"avg={row['avg_value']:.2f}, best={row['best_value']:.2f}, "
                          f"time={row['avg_runtime']:.2f}s")

    df = pd.DataFrame(rows)

    if output_dir is not None and not df.empty:
        output_path = Path(output_dir)
        output_path.mkdir(exist_ok=True, parents=True)
        df.to_csv(output_path / 'tabu_tuning_results.csv', index=False)

    if not df.empty:
        best_configs = best_configurations(df)
        print("\n=== Best TS Configurations ===")
        print(best_configs[['instance', 'tenure', 'percent', 'strategy', 'avg_value', 'best_value']])

    return df


def best_configurations(df: pd.DataFrame) -> pd.DataFrame:
    """Row with the highest average QBF value for each instance."""
    best_idx = df.groupby('instance')['avg_value'].idxmax()
    return df.loc[best_idx]


def load_instances_for_tuning(instances_dir: str = 'instances', n_instances: int = 3) -> List[QBFInstance]:
    """
    Load the first `n_instances` instance files of a directory.

    Files that fail to parse are reported and skipped.
    """
    instances_path = Path(instances_dir)
    instance_files = sorted(p for p in instances_path.iterdir() if p.is_file())[:n_instances]

    instances = []
    for filepath in instance_files:
        try:
            instances.append(load_instance(filepath))
            print(f"Loaded {filepath.name}")
        except (OSError, ValueError) as e:
            print(f"Error loading {filepath}: {e}")

    return instances


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Tune Tabu Search parameters on QBF instances')
    parser.add_argument('instances_dir', type=str, help='Directory with instance files')
    parser.add_argument('--n-instances', type=int, default=3)
    parser.add_argument('--tenures', type=int, nargs='+', default=[5, 10, 20])
    parser.add_argument('--percents', type=float, nargs='+', default=[1.0, 0.5])
    parser.add_argument('--iterations', type=int, default=1000)
    parser.add_argument('--time-limit', type=float, default=60.0)
    parser.add_argument('--seeds', type=int, nargs='+', default=[0])
    parser.add_argument('--output-dir', type=str, default='results')
    parser.add_argument('--plot', action='store_true', help='Save a bar chart of the sweep')
    args = parser.parse_args(argv)

    instances = load_instances_for_tuning(args.instances_dir, args.n_instances)
    df = tune_tabu(
        instances,
        tenures=args.tenures,
        percents=args.percents,
        base_config=TabuConfig(iterations=args.iterations, time_limit=args.time_limit),
        seeds=args.seeds,
        output_dir=args.output_dir,
    )

    if args.plot:
        from .plots import plot_tuning_results
        plot_tuning_results(df, output_path=str(Path(args.output_dir) / 'tabu_tuning.png'))


if __name__ == '__main__':
    main()
