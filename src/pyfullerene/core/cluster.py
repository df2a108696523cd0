"""
Cluster class for Monte Carlo annealing.

This module provides the Cluster container holding a fixed number of
SphericalPoint atoms, a cached total energy, and the transaction
primitive used by Monte Carlo moves.
"""
import math
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .constants import HISTOGRAM_RANGE, N_BINS
from .point import SphericalPoint

if TYPE_CHECKING:
    from pyfullerene.potential import BrennerPotential


class ClusterProposal:
    """
    Pending change to a Cluster (propose -> evaluate -> commit/rollback).

    The new points are applied to the cluster as soon as the proposal is
    created, so the caller can evaluate energies on the proposed state.
    rollback() puts back the previous points and the previous cached
    energy; commit() keeps the proposed state.

    Example:
        >>> proposal = cluster.propose({0: new_point})
        >>> if accepted:
        ...     proposal.commit()
        ... else:
        ...     proposal.rollback()
    """

    def __init__(self, cluster: "Cluster", changes: Dict[int, SphericalPoint]) -> None:
        """
        Apply *changes* to *cluster* and remember what they replaced.

        Args:
            cluster: Cluster to modify.
            changes: Mapping atom index -> new point.
        """
        self._cluster = cluster
        self._previous = {i: cluster[i] for i in changes}
        self._previous_energy = cluster.energy
        self._closed = False
        for i, point in changes.items():
            cluster._set_point(i, point)

    @property
    def indices(self) -> List[int]:
        """Atom indices touched by this proposal."""
        return list(self._previous)

    @property
    def is_open(self) -> bool:
        """True until commit() or rollback() is called."""
        return not self._closed

    def _close(self) -> None:
        if self._closed:
            raise RuntimeError("Proposal already committed or rolled back")
        self._closed = True

    def commit(self) -> None:
        """Keep the proposed state."""
        self._close()

    def rollback(self) -> None:
        """Restore the replaced points and the cached energy."""
        self._close()
        for i, point in self._previous.items():
            self._cluster._set_point(i, point)
        self._cluster.energy = self._previous_energy


class Cluster:
    """
    Fixed-size set of atoms under simulation.

    Atoms are stored as immutable SphericalPoint values, mirrored in an
    (N, 3) Cartesian array used for energy evaluation. The atom count is
    fixed at construction and index i names the same atom for the life
    of the cluster.

    The cached `energy` is only valid right after compute_energy(); the
    cluster never recomputes it on mutation.

    Attributes:
        energy: Cached total potential energy.

    Example:
        >>> cluster = Cluster.from_positions([[0, 0, 0], [1.3, 0, 0]])
        >>> cluster.n_atoms
        2
    """

    def __init__(self, n_atoms: int) -> None:
        """
        Create a cluster with all atoms at the origin.

        Args:
            n_atoms: Number of atoms.

        Raises:
            ValueError: If n_atoms is negative.
        """
        if n_atoms < 0:
            raise ValueError(f"n_atoms must be non-negative, got {n_atoms}")
        self._points: List[SphericalPoint] = [SphericalPoint.origin()] * n_atoms
        self._positions = np.zeros((n_atoms, 3), dtype=np.float64)
        self.energy = 0.0

    # ------------------------------------------------------------------ #
    #  Constructors
    # ------------------------------------------------------------------ #

    @classmethod
    def from_points(cls, points: Sequence[SphericalPoint]) -> "Cluster":
        """Create a cluster from existing points."""
        cluster = cls(len(points))
        for i, point in enumerate(points):
            cluster._set_point(i, point)
        return cluster

    @classmethod
    def from_positions(cls, positions: ArrayLike) -> "Cluster":
        """
        Create a cluster from Cartesian triples.

        Args:
            positions: (N, 3) array-like of x, y, z coordinates.

        Raises:
            ValueError: If the input is not an (N, 3) array of finite numbers.
        """
        try:
            array = np.asarray(positions, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Positions must be numeric (N, 3) data: {exc}") from exc

        if array.size == 0:
            raise ValueError("Positions must contain at least one atom")
        if array.ndim != 2 or array.shape[1] != 3:
            raise ValueError(f"Positions must be (N, 3) array, got shape {array.shape}")
        if not np.all(np.isfinite(array)):
            raise ValueError("Positions must be finite")

        return cls.from_points([SphericalPoint.from_cartesian(*row) for row in array])

    # ------------------------------------------------------------------ #
    #  Container protocol
    # ------------------------------------------------------------------ #

    @property
    def n_atoms(self) -> int:
        """Return the number of atoms."""
        return len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, i: int) -> SphericalPoint:
        return self._points[i]

    def __iter__(self) -> Iterator[SphericalPoint]:
        return iter(self._points)

    @property
    def points(self) -> List[SphericalPoint]:
        """Return a copy of the point list."""
        return list(self._points)

    @property
    def positions(self) -> NDArray[np.floating]:
        """Read-only (N, 3) view of the Cartesian positions."""
        view = self._positions.view()
        view.flags.writeable = False
        return view

    def _set_point(self, i: int, point: SphericalPoint) -> None:
        self._points[i] = point
        self._positions[i] = (point.x, point.y, point.z)

    # ------------------------------------------------------------------ #
    #  Mutation
    # ------------------------------------------------------------------ #

    def propose(self, changes: Dict[int, SphericalPoint]) -> ClusterProposal:
        """
        Apply new points to some atoms, pending commit or rollback.

        Args:
            changes: Mapping atom index -> new point.

        Returns:
            ClusterProposal controlling the change.
        """
        for i in changes:
            if not 0 <= i < self.n_atoms:
                raise IndexError(f"Atom index {i} out of range for {self.n_atoms} atoms")
        return ClusterProposal(self, changes)

    def randomize_on_sphere(self, radius: float, rng: np.random.Generator) -> None:
        """
        Place every atom on a sphere of the given radius.

        phi is drawn uniformly in [0, 2π] and theta uniformly in [0, π].
        Uniform theta is not uniform over the sphere surface; atoms are
        denser near the poles.

        Args:
            radius: Sphere radius.
            rng: Random generator; two draws per atom (phi, then theta).
        """
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        for i in range(self.n_atoms):
            phi = rng.uniform(0.0, 2.0 * math.pi)
            theta = rng.uniform(0.0, math.pi)
            self._set_point(i, SphericalPoint.from_spherical(radius, phi, theta))

    # ------------------------------------------------------------------ #
    #  Energy
    # ------------------------------------------------------------------ #

    def compute_energy(self, potential: "BrennerPotential") -> float:
        """Recompute, cache and return the total energy."""
        self.energy = potential.total_energy(self._positions)
        return self.energy

    def atom_energy(self, i: int, potential: "BrennerPotential") -> float:
        """Energy contribution of atom i (does not touch the cache)."""
        return potential.atom_energy(self._positions, i)

    # ------------------------------------------------------------------ #
    #  Diagnostics
    # ------------------------------------------------------------------ #

    def distance(self, i: int, j: int) -> float:
        """Distance between atoms i and j."""
        return float(np.linalg.norm(self._positions[j] - self._positions[i]))

    def mean_radius(self) -> float:
        """Arithmetic mean of r over all atoms."""
        if not self._points:
            return 0.0
        return sum(p.r for p in self._points) / self.n_atoms

    def pair_correlation_histogram(self, n_bins: int = N_BINS) -> NDArray[np.floating]:
        """
        Radial pair correlation histogram.

        The range is 2.5 mean radii split into n_bins bins. Every
        unordered pair at distance r adds

            2 * 4π r_mean² / (N² * 2π r * dr)

        to bin floor(r / dr). Pairs beyond the range are dropped.

        Returns:
            (n_bins,) array.
        """
        histogram = np.zeros(n_bins, dtype=np.float64)
        n = self.n_atoms
        if n < 2:
            return histogram

        r_mean = self.mean_radius()
        dr = HISTOGRAM_RANGE * r_mean / n_bins
        if dr <= 0.0:
            return histogram

        i_idx, j_idx = np.triu_indices(n, k=1)
        distances = np.linalg.norm(self._positions[j_idx] - self._positions[i_idx], axis=1)
        bins = np.floor(distances / dr).astype(np.int64)
        keep = bins < n_bins

        weights = 2.0 * 4.0 * math.pi * r_mean ** 2 / (
            n ** 2 * 2.0 * math.pi * distances[keep] * dr
        )
        np.add.at(histogram, bins[keep], weights)
        return histogram

    def pair_correlation_bins(self, n_bins: int = N_BINS) -> NDArray[np.floating]:
        """Centres of the pair_correlation_histogram() bins."""
        dr = HISTOGRAM_RANGE * self.mean_radius() / n_bins
        return (np.arange(n_bins, dtype=np.float64) + 0.5) * dr

    def copy(self) -> "Cluster":
        """Create an independent copy, cached energy included."""
        clone = Cluster.from_points(self._points)
        clone.energy = self.energy
        return clone

    def to_table(self) -> str:
        """Return a header line plus one x, y, z, r, phi, theta row per atom."""
        lines = [
            f"Cluster with {self.n_atoms} atoms, Energy: {self.energy:8.3f}",
            "\t".join(f"{name:<10}" for name in ("x", "y", "z", "r", "phi", "theta")),
        ]
        lines.extend(str(point) for point in self._points)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_table()

    def __repr__(self) -> str:
        return f"Cluster(n_atoms={self.n_atoms}, energy={self.energy:.6f})"
