"""Basic integration test to verify all components work together."""

import json

import numpy as np
import pandas as pd

from tsqbf.model import QBFInstance, QBFInverse, SearchResult, generate_instance, save_instance
from tsqbf.heuristics import TabuConfig, tabu_search
from tsqbf.experiments.run_experiment import format_result, main as run_experiment_main
from tsqbf.experiments.tune_params import best_configurations, tune_tabu
from tsqbf.experiments.plots import plot_convergence, plot_tuning_results


def test_small_instance():
    """Test with a small instance whose optimum is known."""
    print("Testing with small instance (5 variables)...")

    # Only the diagonal rewards selection; 0, 2 and 4 are pairwise non-adjacent
    A = np.diag([3.0, 1.0, 3.0, 1.0, 3.0])
    instance = QBFInstance(size=5, A=A, name='diag5')
    instance.validate()

    result = tabu_search(QBFInverse(instance), TabuConfig(tenure=1, iterations=20))
    print(f"  Tabu search: maxVal = {-result.best_cost:.2f}, elements = {result.best_elements}")

    assert result.best_cost == -9.0
    assert result.best_elements == [0, 2, 4]
    assert result.iterations == len(result.cost_log)
    assert result.config['tenure'] == 1
    print("  Tabu search test passed")


def test_strategies_and_removal_sources():
    instance = generate_instance(n=20, seed=21)
    evaluator = QBFInverse(instance)

    for first in (True, False):
        for percent in (1.0, 0.3):
            for source in ('candidates', 'incumbent'):
                cfg = TabuConfig(tenure=3, iterations=30, percent=percent,
                                 first_improving=first, removal_source=source)
                result = tabu_search(evaluator, cfg)
                assert result.best_cost <= 0.0
                elements = set(result.best_elements)
                assert not any(e + 1 in elements for e in elements)


def test_cli_writes_results(tmp_path, capsys):
    instance = generate_instance(n=12, seed=4)
    path = tmp_path / 'qbf012'
    save_instance(instance, path)
    output = tmp_path / 'out' / 'results.json'

    run_experiment_main([
        str(path), '--tenure', '2', '--iterations', '15',
        '--time-limit', '30', '--best-improving',
        '--output', str(output), '--plot-dir', str(tmp_path / 'plots'),
    ])

    printed = capsys.readouterr().out
    assert 'maxVal = ' in printed

    with output.open() as f:
        results = json.load(f)
    assert results['qbf012']['config']['first_improving'] is False
    assert (tmp_path / 'plots' / 'qbf012_convergence.png').exists()


def test_format_result_prints_zero_without_sign():
    result = SearchResult(best_cost=0.0, best_elements=[], runtime=0.5,
                          iterations=3, constructive_cost=0.0)

    line = format_result(result)

    assert line.startswith('maxVal = 0.0 []')
    assert '-0.0' not in line


def test_cli_reports_bad_instance_and_continues(tmp_path):
    good = tmp_path / 'a_good'
    save_instance(generate_instance(n=6, seed=1), good)
    (tmp_path / 'b_bad').write_text("4\n1 2\n")

    run_experiment_main([str(tmp_path), '--iterations', '5', '--output', str(tmp_path / 'r.json')])

    results = json.loads((tmp_path / 'r.json').read_text())
    assert 'error' in results['b_bad']
    assert 'best_cost' in results['a_good']


def test_tuning_sweep(tmp_path):
    instances = [generate_instance(n=10, seed=s, name=f'inst{s}') for s in (1, 2)]

    df = tune_tabu(
        instances,
        tenures=(2,),
        percents=(1.0, 0.5),
        base_config=TabuConfig(iterations=5, time_limit=30.0),
        output_dir=str(tmp_path),
    )

    assert isinstance(df, pd.DataFrame)
    assert len(df) == 2 * 2 * 2
    assert (tmp_path / 'tabu_tuning_results.csv').exists()
    assert len(best_configurations(df)) == 2

    plot_tuning_results(df, output_path=str(tmp_path / 'tuning.png'))
    assert (tmp_path / 'tuning.png').exists()


def test_plot_convergence(tmp_path):
    out = tmp_path / 'conv.png'
    plot_convergence([0.0, -1.0, -3.0], output_path=str(out))
    assert out.exists()


if __name__ == '__main__':
    test_small_instance()
