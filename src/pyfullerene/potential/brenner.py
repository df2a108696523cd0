"""
Brenner-type bond-order potential.

Two-body repulsion/attraction with a three-body angular bond-order
correction and a smooth cosine cutoff. Energies are computed from an
(N, 3) array of Cartesian positions.
"""
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .parameters import DEFAULT_PARAMETERS, BrennerParameters

ArrayOrFloat = Union[float, NDArray[np.floating]]


def _as_output(values: NDArray[np.floating]) -> ArrayOrFloat:
    """Return a Python float for 0-d results, the array otherwise."""
    if values.ndim == 0:
        return float(values)
    return values


class BrennerPotential:
    """
    Bond-order potential for carbon-like clusters.

    Pair energy for atoms i, j at distance r:

        f_c(r) * [V_R(r) - B_ij * V_A(r)]

    where:
        - V_R(r) = De/(S-1) * exp(-sqrt(2S)*lambda*(r - R0))
        - V_A(r) = De*S/(S-1) * exp(-sqrt(2/S)*lambda*(r - R0))
        - B_ij = (b_ij + b_ji) / 2, b_ij = (1 + ksi_ij)^(-delta)
        - ksi_ij = sum over k of f_c(r_ik) * g(cos theta_ijk)

    The angular term g returns a fixed penalty whenever cos theta_ijk > 0,
    which suppresses near-planar 4-fold environments.

    Coincident atoms (zero pair distance) give an undefined result; the
    caller must keep atoms apart.

    Attributes:
        params: BrennerParameters in use.

    Example:
        >>> pot = BrennerPotential()
        >>> positions = np.array([[0.0, 0.0, 0.0], [1.315, 0.0, 0.0]])
        >>> round(pot.total_energy(positions), 3)
        -6.325
    """

    def __init__(self, params: Optional[BrennerParameters] = None) -> None:
        """
        Initialize the potential.

        Args:
            params: Parameter set. Defaults to the standard parametrization.
        """
        self.params = params or DEFAULT_PARAMETERS
        p = self.params
        self._repulsive_prefactor = p.de / (p.s - 1.0)
        self._attractive_prefactor = p.de * p.s / (p.s - 1.0)
        self._repulsive_decay = np.sqrt(2.0 * p.s) * p.lam
        self._attractive_decay = np.sqrt(2.0 / p.s) * p.lam

    @property
    def cutoff(self) -> float:
        """Return the outer cutoff distance."""
        return self.params.r2

    def get_name(self) -> str:
        """Return potential name with the main parameters."""
        p = self.params
        return f"Brenner(De={p.de}, S={p.s}, lambda={p.lam}, R0={p.r0})"

    # ------------------------------------------------------------------ #
    #  Two-body terms
    # ------------------------------------------------------------------ #

    def repulsive(self, r: ArrayOrFloat) -> ArrayOrFloat:
        """Repulsive pair term V_R(r)."""
        r = np.asarray(r, dtype=np.float64)
        values = self._repulsive_prefactor * np.exp(
            -self._repulsive_decay * (r - self.params.r0)
        )
        return _as_output(values)

    def attractive(self, r: ArrayOrFloat) -> ArrayOrFloat:
        """Attractive pair term V_A(r)."""
        r = np.asarray(r, dtype=np.float64)
        values = self._attractive_prefactor * np.exp(
            -self._attractive_decay * (r - self.params.r0)
        )
        return _as_output(values)

    def cutoff_weight(self, r: ArrayOrFloat) -> ArrayOrFloat:
        """
        Smooth cutoff f_c(r).

        1 up to R1, a half cosine between R1 and R2, 0 beyond R2.
        """
        p = self.params
        r = np.asarray(r, dtype=np.float64)
        switch = 0.5 * (1.0 + np.cos(np.pi * (r - p.r1) / (p.r2 - p.r1)))
        values = np.where(r <= p.r1, 1.0, np.where(r <= p.r2, switch, 0.0))
        return _as_output(values)

    # ------------------------------------------------------------------ #
    #  Three-body terms
    # ------------------------------------------------------------------ #

    def angular_term(self, cos_theta: ArrayOrFloat) -> ArrayOrFloat:
        """Angular correction g(cos theta_ijk)."""
        p = self.params
        cos_theta = np.asarray(cos_theta, dtype=np.float64)
        c2 = p.c0 ** 2
        d2 = p.d0 ** 2
        smooth = p.a0 * (1.0 + c2 / d2 - c2 / (d2 + (1.0 + cos_theta) ** 2))
        values = np.where(cos_theta > 0.0, p.angular_penalty, smooth)
        return _as_output(values)

    def bond_order(self, positions: NDArray[np.floating], i: int, j: int) -> float:
        """
        One-sided bond order b_ij = (1 + ksi_ij)^(-delta).

        ksi_ij sums the angular term over every third atom k within R2
        of atom i, weighted by f_c(r_ik).

        Args:
            positions: (N, 3) Cartesian positions.
            i: Central atom.
            j: Bond partner.

        Returns:
            Bond order b_ij (1.0 when no third atom is in range).
        """
        bonds = positions - positions[i]
        distances = np.sqrt(np.einsum("ij,ij->i", bonds, bonds))

        mask = distances <= self.params.r2
        mask[i] = False
        mask[j] = False
        if not mask.any():
            return 1.0

        r_ij = distances[j]
        r_ik = distances[mask]
        cos_ijk = bonds[mask] @ bonds[j] / (r_ik * r_ij)

        ksi = float(np.sum(self.cutoff_weight(r_ik) * self.angular_term(cos_ijk)))
        return (1.0 + ksi) ** (-self.params.delta)

    def pair_bond_order(self, positions: NDArray[np.floating], i: int, j: int) -> float:
        """Symmetrized bond order B_ij = (b_ij + b_ji) / 2."""
        return 0.5 * (self.bond_order(positions, i, j) + self.bond_order(positions, j, i))

    # ------------------------------------------------------------------ #
    #  Energies
    # ------------------------------------------------------------------ #

    def atom_energy(self, positions: NDArray[np.floating], i: int) -> float:
        """
        Energy contribution of atom i, summed over all partners j != i.

        Each bond is counted from both of its ends; see total_energy().
        """
        positions = np.asarray(positions, dtype=np.float64)
        bonds = positions - positions[i]
        distances = np.sqrt(np.einsum("ij,ij->i", bonds, bonds))

        energy = 0.0
        for j in np.flatnonzero(distances <= self.params.r2):
            if j == i:
                continue
            r_ij = distances[j]
            b_ij = self.pair_bond_order(positions, i, j)
            energy += self.cutoff_weight(r_ij) * (
                self.repulsive(r_ij) - b_ij * self.attractive(r_ij)
            )
        return float(energy)

    def atom_energies(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """Return the (N,) vector of per-atom contributions."""
        positions = np.asarray(positions, dtype=np.float64)
        return np.array(
            [self.atom_energy(positions, i) for i in range(len(positions))],
            dtype=np.float64,
        )

    def total_energy(self, positions: NDArray[np.floating]) -> float:
        """
        Total potential energy of the cluster.

        Half the sum of per-atom contributions, since every bond is seen
        from both endpoints.
        """
        return 0.5 * float(np.sum(self.atom_energies(positions)))
