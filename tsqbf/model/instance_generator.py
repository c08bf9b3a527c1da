"""Instance generator and text-file I/O for QBF instances."""

import numpy as np
from pathlib import Path
from typing import List, Tuple, Union

from .instance import QBFInstance


def generate_instance(
    n: int = 20,
    seed: int = 42,
    coef_range: Tuple[int, int] = (-10, 10),
    name: str = '',
) -> QBFInstance:
    """
    Generate a random QBF instance with integer upper-triangular coefficients.

    Args:
        n: Number of binary variables
        seed: Random seed for reproducibility
        coef_range: Inclusive range (low, high) for each coefficient
        name: Optional label stored on the instance

    Returns:
        QBFInstance with A[i, j] drawn uniformly for j >= i, zero below
    """
    rng = np.random.RandomState(seed)
    low, high = coef_range

    A = rng.randint(low, high + 1, size=(n, n)).astype(float)
    A = np.triu(A)

    instance = QBFInstance(size=n, A=A, name=name or f'qbf{n:03d}')
    instance.validate()
    return instance


def save_instance(instance: QBFInstance, filepath: Union[str, Path]) -> None:
    """
    Save instance in the plain-text QBF format.

    First line holds n; line i then lists A[i, i], A[i, i+1], ..., A[i, n-1].
    Integral coefficients are written without a decimal point.

    Args:
        instance: Instance to save
        filepath: Path to save file
    """
    def fmt(v: float) -> str:
        return str(int(v)) if float(v).is_integer() else repr(float(v))

    lines = [str(instance.size)]
    for i in range(instance.size):
        lines.append(' '.join(fmt(v) for v in instance.A[i, i:]))

    with open(filepath, 'w') as f:
        f.write('\n'.join(lines) + '\n')


def load_instance(filepath: Union[str, Path]) -> QBFInstance:
    """
    Load instance from a plain-text QBF file.

    The file is read as a flat stream of whitespace-separated tokens, so
    line breaks inside the triangle are not significant.

    Args:
        filepath: Path to instance file

    Returns:
        Loaded QBFInstance

    Raises:
        ValueError: If the file is empty or holds too few coefficients
    """
    path = Path(filepath)
    with open(path, 'r') as f:
        tokens = f.read().split()

    if not tokens:
        raise ValueError(f"Empty instance file: {path}")

    n = int(float(tokens[0]))
    expected = n * (n + 1) // 2
    values = tokens[1:]
    if len(values) < expected:
        raise ValueError(
            f"Instance {path} declares n={n} but holds {len(values)} of {expected} coefficients"
        )

    A = np.zeros((n, n), dtype=float)
    k = 0
    for i in range(n):
        for j in range(i, n):
            A[i, j] = float(values[k])
            k += 1

    instance = QBFInstance(size=n, A=A, name=path.stem)
    instance.validate()
    return instance


def generate_instance_set(
    output_dir: str = 'instances',
    sizes: Tuple[int, ...] = (20, 40, 60, 80, 100),
    seed: int = 100,
) -> List[Path]:
    """
    Generate one instance per size and save them as qbfNNN files.

    Args:
        output_dir: Directory to save instances
        sizes: Instance sizes to generate
        seed: Base random seed (instance k uses seed + k)

    Returns:
        List of written file paths
    """
    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True, parents=True)

    written = []
    print(f"Generating {len(sizes)} instances...")
    for k, n in enumerate(sizes):
        instance = generate_instance(n=n, seed=seed + k)
        filepath = output_path / f'qbf{n:03d}'
        save_instance(instance, filepath)
        written.append(filepath)
        print(f"  Saved {filepath}")

    return written
