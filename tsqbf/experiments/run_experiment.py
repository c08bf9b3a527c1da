"""CLI runner: tabu search on one or more QBF instance files."""

import argparse
import glob
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..heuristics.config import REMOVAL_SOURCES, TabuConfig
from ..heuristics.tabu import tabu_search
from ..model.instance_generator import load_instance
from ..model.qbf import QBFInverse
from ..model.result import SearchResult


def find_instance_files(instances_source: str) -> List[Path]:
    """
    Resolve an instance source to a sorted list of files.

    Args:
        instances_source: Path to a single file, a directory, or a glob pattern

    Returns:
        List of instance file paths
    """
    source_path = Path(instances_source)

    if source_path.is_file():
        instance_files = [source_path]
    elif source_path.is_dir():
        instance_files = sorted(p for p in source_path.iterdir() if p.is_file())
    elif '*' in instances_source:
        instance_files = sorted(Path(p) for p in glob.glob(instances_source))
    else:
        raise ValueError(f"Invalid instances source: {instances_source}")

    if not instance_files:
        raise ValueError(f"No instance files found matching: {instances_source}")

    return instance_files


def run_instance(filepath: Path, config: TabuConfig) -> SearchResult:
    """Maximize the QBF stored in `filepath` (minimizing its inverse)."""
    instance = load_instance(filepath)
    evaluator = QBFInverse(instance)
    return tabu_search(evaluator, config)


def format_result(result: SearchResult) -> str:
    # The inverse cost is negated back to the QBF value being maximized;
    # adding 0.0 turns -0.0 into 0.0
    max_val = -result.best_cost + 0.0
    return (f"maxVal = {max_val} {result.best_elements} "
            f"Time = {result.runtime:.3f} seg")


def run_experiment(
    instances_source: str,
    config: TabuConfig,
    output_path: Optional[str] = None,
    plot_dir: Optional[str] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Run tabu search on every instance matched by `instances_source`.

    A failing instance is reported and skipped; the others still run.

    Args:
        instances_source: File, directory or glob pattern
        config: Search parameters
        output_path: Optional JSON file receiving all results
        plot_dir: Optional directory receiving one convergence plot per instance

    Returns:
        Dictionary mapping instance name to its result dictionary
    """
    results: Dict[str, Dict[str, Any]] = {}

    for filepath in find_instance_files(instances_source):
        print(f"\nInstance: {filepath.name}")
        try:
            result = run_instance(filepath, config)
        except (OSError, ValueError) as e:
            print(f"  Error on {filepath}: {e}")
            results[filepath.name] = {'error': str(e)}
            continue

        print(f"  {format_result(result)}")
        print(f"  iterations={result.iterations}, constructive_cost={result.constructive_cost:.2f}")
        results[filepath.name] = result.to_dict()

        if plot_dir is not None:
            from .plots import plot_convergence
            plot_convergence(
                result.cost_log,
                output_path=str(Path(plot_dir) / f"{filepath.name}_convergence.png"),
                title=f"Tabu Search convergence ({filepath.name})",
            )

    if output_path is not None:
        out = Path(output_path)
        out.parent.mkdir(exist_ok=True, parents=True)
        with out.open('w') as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to: {out}")

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run Tabu Search on QBF instances',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single instance, default parameters
  python -m tsqbf.experiments.run_experiment instances/qbf060

  # All instances in a directory, best-improving with adaptive sampling
  python -m tsqbf.experiments.run_experiment instances/ --best-improving \\
    --percent 0.5 --tenure 20 --iterations 1000 --time-limit 60
        """
    )

    parser.add_argument(
        'instances',
        type=str,
        help='Path to instances: directory, glob pattern (e.g., "instances/qbf0*"), or single file'
    )

    # Tabu parameters
    parser.add_argument('--tenure', type=int, default=10, help='Tabu tenure (default: 10)')
    parser.add_argument(
        '--iterations',
        type=int,
        default=100000,
        help='Non-improving iterations before stopping (default: 100000)'
    )
    parser.add_argument(
        '--time-limit',
        type=float,
        default=1800.0,
        help='Time limit in seconds (default: 1800)'
    )

    # Neighborhood controls
    parser.add_argument(
        '--percent',
        type=float,
        default=1.0,
        help='Fraction of the move list scanned per iteration; < 1.0 enables adaptive sampling (default: 1.0)'
    )
    parser.add_argument(
        '--best-improving',
        action='store_true',
        help='Scan the whole sampled prefix instead of stopping at the first improving move'
    )
    parser.add_argument(
        '--removal-source',
        choices=REMOVAL_SOURCES,
        default='candidates',
        help='Where removal moves are drawn from (default: candidates)'
    )

    parser.add_argument('--seed', type=int, default=0, help='Random seed (default: 0)')

    # Output
    parser.add_argument('--output', type=str, default=None, help='JSON file for results')
    parser.add_argument('--plot-dir', type=str, default=None, help='Directory for convergence plots')
    parser.add_argument('--verbose', action='store_true', help='Verbose output')

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    config = TabuConfig(
        tenure=args.tenure,
        iterations=args.iterations,
        time_limit=args.time_limit,
        percent=args.percent,
        first_improving=not args.best_improving,
        removal_source=args.removal_source,
        seed=args.seed,
        verbose=args.verbose,
    )
    config.validate()

    print(f"\n{'='*70}")
    print(f"Tabu Search: tenure={config.tenure}, iterations={config.iterations}, "
          f"time_limit={config.time_limit}s, percent={config.percent}, "
          f"{'first' if config.first_improving else 'best'}-improving")
    print(f"{'='*70}")

    run_experiment(
        args.instances,
        config,
        output_path=args.output,
        plot_dir=args.plot_dir,
    )


if __name__ == '__main__':
    main()
