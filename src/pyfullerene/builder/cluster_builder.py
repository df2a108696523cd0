"""
ClusterBuilder for constructing clusters.

Provides the Builder pattern for creating Cluster objects from explicit
positions, a positions file, or a random placement on a sphere.
"""
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyfullerene.core import Cluster
from pyfullerene.io import read_positions


class ClusterBuilder:
    """
    Builder for constructing Cluster objects.

    Fluent interface with three sources for the initial configuration:
    - Explicit Cartesian positions
    - A positions file (one x y z triple per line)
    - Random placement on a sphere (requires an atom count)

    Example:
        >>> cluster = (ClusterBuilder()
        ...     .atoms(60)
        ...     .on_sphere(radius=2.5)
        ...     .rng(np.random.default_rng(7))
        ...     .build())
    """

    def __init__(self) -> None:
        """Initialize builder with default values."""
        self._n_atoms: Optional[int] = None
        self._positions: Optional[NDArray] = None
        self._radius: Optional[float] = None
        self._rng: Optional[np.random.Generator] = None

    def atoms(self, n_atoms: int) -> "ClusterBuilder":
        """
        Set the number of atoms.

        Args:
            n_atoms: Atom count (must match explicit positions if given).

        Returns:
            Self for chaining.
        """
        if n_atoms < 1:
            raise ValueError(f"n_atoms must be positive, got {n_atoms}")
        self._n_atoms = n_atoms
        return self

    def positions(self, positions: ArrayLike) -> "ClusterBuilder":
        """
        Use explicit Cartesian positions.

        Args:
            positions: (N, 3) array-like of coordinates.

        Returns:
            Self for chaining.
        """
        self._positions = np.asarray(positions, dtype=np.float64)
        return self

    def positions_file(self, path: Union[str, Path]) -> "ClusterBuilder":
        """
        Read positions from a file.

        Args:
            path: Positions file path.

        Returns:
            Self for chaining.
        """
        self._positions = read_positions(path)
        return self

    def on_sphere(self, radius: float) -> "ClusterBuilder":
        """
        Place atoms randomly on a sphere of the given radius.

        Ignored when explicit positions are set.

        Returns:
            Self for chaining.
        """
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        self._radius = radius
        return self

    def rng(self, rng: np.random.Generator) -> "ClusterBuilder":
        """Set the random generator used for sphere placement."""
        self._rng = rng
        return self

    def seed(self, seed: Optional[int]) -> "ClusterBuilder":
        """Seed a fresh random generator for sphere placement."""
        self._rng = np.random.default_rng(seed)
        return self

    def build(self) -> Cluster:
        """
        Build the cluster.

        Returns:
            New Cluster instance.

        Raises:
            ValueError: If the configuration is incomplete or inconsistent.
        """
        if self._positions is not None:
            cluster = Cluster.from_positions(self._positions)
            if self._n_atoms is not None and cluster.n_atoms != self._n_atoms:
                raise ValueError(
                    f"Got {cluster.n_atoms} positions but n_atoms={self._n_atoms}"
                )
            return cluster

        if self._n_atoms is None:
            raise ValueError("Either positions or an atom count is required")

        cluster = Cluster(self._n_atoms)
        if self._radius is not None:
            rng = self._rng if self._rng is not None else np.random.default_rng()
            cluster.randomize_on_sphere(self._radius, rng)
        return cluster
