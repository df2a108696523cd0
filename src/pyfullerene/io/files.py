"""
Plain-text file formats for clusters and run output.

Positions files hold one whitespace-separated ``x y z`` triple per line.
Series and histograms are written as two-column gnuplot data.
"""
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyfullerene.core import Cluster

PathLike = Union[str, Path]


def parse_positions(text: str, source: str = "<string>") -> NDArray[np.floating]:
    """
    Parse Cartesian triples from text.

    Blank lines and lines starting with '#' are skipped.

    Args:
        text: File contents.
        source: Name used in error messages.

    Returns:
        (N, 3) array of positions.

    Raises:
        ValueError: On a line that is not exactly three numbers, or if
            no positions are found.
    """
    rows = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        fields = stripped.split()
        if len(fields) != 3:
            raise ValueError(
                f"{source}:{lineno}: expected 3 coordinates, got {len(fields)}"
            )
        try:
            rows.append([float(value) for value in fields])
        except ValueError as exc:
            raise ValueError(f"{source}:{lineno}: {exc}") from exc

    if not rows:
        raise ValueError(f"{source}: no positions found")
    return np.array(rows, dtype=np.float64)


def read_positions(path: PathLike) -> NDArray[np.floating]:
    """
    Read Cartesian triples from a positions file.

    Args:
        path: File path.

    Returns:
        (N, 3) array of positions.
    """
    path = Path(path)
    with open(path, "r") as f:
        return parse_positions(f.read(), source=str(path))


def write_positions(path: PathLike, cluster: "Cluster") -> None:
    """Write one tab-separated x, y, z line per atom."""
    with open(path, "w") as f:
        for point in cluster:
            f.write(f"{point.x:<10.5f}\t{point.y:<10.5f}\t{point.z:<10.5f}\n")


def write_series(
    path: PathLike,
    values: Sequence[float],
    x: Optional[Sequence[float]] = None,
) -> None:
    """
    Write a 1D series as two gnuplot columns.

    Args:
        path: Output file.
        values: Y values.
        x: X values; defaults to 0, 1, 2, ...
    """
    values = np.asarray(values, dtype=np.float64)
    if x is None:
        x = np.arange(len(values))
    x = np.asarray(x)
    if x.shape != values.shape:
        raise ValueError(f"x shape {x.shape} does not match values shape {values.shape}")

    with open(path, "w") as f:
        for xi, yi in zip(x, values):
            f.write(f"{xi}\t{yi:.10g}\n")


def write_histogram(
    path: PathLike,
    centres: Sequence[float],
    values: Sequence[float],
) -> None:
    """Write bin centres and histogram values as two gnuplot columns."""
    centres = np.asarray(centres, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    if centres.shape != values.shape:
        raise ValueError(
            f"centres shape {centres.shape} does not match values shape {values.shape}"
        )
    with open(path, "w") as f:
        for c, v in zip(centres, values):
            f.write(f"{c:.6f}\t{v:.10g}\n")


def cluster_to_xyz(cluster: "Cluster", comment: str = "", element: str = "C") -> str:
    """Return the cluster as an XYZ-format string."""
    comment = comment or f"E={cluster.energy:.6f}"
    lines = [str(cluster.n_atoms), comment]
    for point in cluster:
        lines.append(f"{element}  {point.x:.6f}  {point.y:.6f}  {point.z:.6f}")
    return "\n".join(lines)
