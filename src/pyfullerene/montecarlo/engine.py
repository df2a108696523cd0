"""
Monte Carlo engine that orchestrates one annealing run.

Brings together Cluster, BrennerPotential, AnnealingSchedule and
Observers into the Metropolis annealing loop.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from pyfullerene.core.point import SphericalPoint, normalize_angles

from .moves import MoveSizes, MoveStatistics, acceptance_probability
from .schedule import AnnealingSchedule

if TYPE_CHECKING:
    from pyfullerene.core import Cluster
    from pyfullerene.observer import Observer
    from pyfullerene.potential import BrennerPotential

logger = logging.getLogger(__name__)


class MonteCarloEngine:
    """
    Simulated annealing driver.

    Each iteration:
    1. Compute beta from the schedule
    2. Local move for every atom, in index order 0..N-1
    3. One global radial rescale of the whole cluster
    4. Notify observers

    All randomness comes from a single generator, drawn in a fixed
    order: three proposal draws and one acceptance draw per local move,
    one scale draw and one acceptance draw per global move. The same
    seed therefore reproduces the same run.

    Example:
        >>> engine = MonteCarloEngine(
        ...     cluster=cluster,
        ...     potential=BrennerPotential(),
        ...     schedule=AnnealingSchedule(1.0, 100.0, 2.0, 10_000),
        ...     rng=np.random.default_rng(42),
        ...     observers=[EnergyObserver(interval=100)],
        ... )
        >>> engine.run()
    """

    def __init__(
        self,
        cluster: "Cluster",
        potential: "BrennerPotential",
        schedule: AnnealingSchedule,
        rng: Optional[np.random.Generator] = None,
        move_sizes: Optional[MoveSizes] = None,
        observers: Optional[List["Observer"]] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            cluster: Cluster to anneal (modified in place).
            potential: Energy model.
            schedule: Inverse temperature schedule; sets the iteration count.
            rng: Random generator (fresh unseeded generator if omitted).
            move_sizes: Step sizes (defaults to the standard ones).
            observers: Observers notified after each iteration.
        """
        self.cluster = cluster
        self.potential = potential
        self.schedule = schedule
        self.rng = rng if rng is not None else np.random.default_rng()
        self.move_sizes = move_sizes or MoveSizes()
        self.observers = observers or []
        self.statistics = MoveStatistics()
        self.iteration = 0

    @property
    def is_finished(self) -> bool:
        """True once iteration == n_iterations."""
        return self.iteration >= self.schedule.n_iterations

    # ------------------------------------------------------------------ #
    #  Moves
    # ------------------------------------------------------------------ #

    def local_move(self, i: int, beta: float) -> bool:
        """
        Propose and accept/reject a spherical perturbation of atom i.

        Args:
            i: Atom index.
            beta: Inverse temperature.

        Returns:
            True if the move was accepted.
        """
        w = self.move_sizes
        old = self.cluster[i]
        v_old = self.cluster.atom_energy(i, self.potential)

        u1 = self.rng.random()
        u2 = self.rng.random()
        u3 = self.rng.random()

        r_new = old.r * (1.0 + (2.0 * u1 - 1.0) * w.radial)
        phi_new = old.phi * (1.0 + (2.0 * u2 - 1.0) * w.azimuthal)
        theta_new = old.theta * (1.0 + (2.0 * u3 - 1.0) * w.polar)
        phi_new, theta_new = normalize_angles(phi_new, theta_new)

        proposal = self.cluster.propose(
            {i: SphericalPoint.from_spherical(r_new, phi_new, theta_new)}
        )
        v_new = self.cluster.atom_energy(i, self.potential)

        u4 = self.rng.random()
        accepted = u4 <= acceptance_probability(v_new - v_old, beta)
        if accepted:
            proposal.commit()
        else:
            proposal.rollback()

        self.statistics.record_local(accepted)
        return accepted

    def global_move(self, beta: float) -> bool:
        """
        Propose and accept/reject a uniform radial rescale of all atoms.

        The pre-move energy is recomputed from scratch, since local moves
        never update the cached value. On rejection both the positions
        and the cached energy are restored, so after this call the cache
        always matches the current positions.

        Args:
            beta: Inverse temperature.

        Returns:
            True if the move was accepted.
        """
        e_old = self.cluster.compute_energy(self.potential)

        u1 = self.rng.random()
        factor = 1.0 + self.move_sizes.global_radial * (2.0 * u1 - 1.0)

        proposal = self.cluster.propose(
            {i: point.scaled(factor) for i, point in enumerate(self.cluster)}
        )
        e_new = self.cluster.compute_energy(self.potential)

        u2 = self.rng.random()
        accepted = u2 <= acceptance_probability(e_new - e_old, beta)
        if accepted:
            proposal.commit()
        else:
            proposal.rollback()

        self.statistics.record_global(accepted)
        return accepted

    # ------------------------------------------------------------------ #
    #  Loop
    # ------------------------------------------------------------------ #

    def step(self) -> float:
        """
        Run one annealing iteration and notify observers.

        Returns:
            The beta used for this iteration.

        Raises:
            RuntimeError: If the run is already finished.
        """
        if self.is_finished:
            raise RuntimeError("Annealing run already finished")

        it = self.iteration
        beta = self.schedule.beta(it)

        for i in range(self.cluster.n_atoms):
            self.local_move(i, beta)
        self.global_move(beta)

        for observer in self.observers:
            if it % observer.interval == 0:
                observer.observe(self.cluster, it, beta)

        self.iteration += 1
        return beta

    def run(self, num_iterations: Optional[int] = None) -> None:
        """
        Run iterations until the schedule is exhausted.

        Args:
            num_iterations: Stop after this many iterations instead
                (the run can then be resumed with another call).
        """
        remaining = self.schedule.n_iterations - self.iteration
        if num_iterations is not None:
            remaining = min(remaining, num_iterations)

        logger.debug(
            "Running %d iterations from %d on %d atoms",
            remaining, self.iteration, self.cluster.n_atoms,
        )
        for _ in range(remaining):
            self.step()

        if self.is_finished:
            for observer in self.observers:
                observer.finalize()
            logger.debug(
                "Run finished: E=%.6f, local acceptance=%.3f, global acceptance=%.3f",
                self.cluster.energy,
                self.statistics.local_acceptance,
                self.statistics.global_acceptance,
            )

    def reset(self) -> None:
        """Reset the iteration counter and statistics (not the cluster)."""
        self.iteration = 0
        self.statistics.reset()
