"""
File input/output for clusters and run results.
"""

from .files import (
    cluster_to_xyz,
    parse_positions,
    read_positions,
    write_histogram,
    write_positions,
    write_series,
)

__all__ = [
    "parse_positions",
    "read_positions",
    "write_positions",
    "write_series",
    "write_histogram",
    "cluster_to_xyz",
]
