"""
Observer module for monitoring annealing progress.

Provides the Observer pattern for energy traces, trajectory output,
and console progress during a Monte Carlo run.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

import numpy as np

if TYPE_CHECKING:
    from pyfullerene.core import Cluster


class Observer(ABC):
    """
    Abstract base for annealing observers (Observer Pattern).

    Observers are notified after each iteration to record properties
    or print progress.

    Attributes:
        interval: How often to call observe() (in iterations).

    Example:
        >>> observer = EnergyObserver(interval=100)
        >>> if iteration % observer.interval == 0:
        ...     observer.observe(cluster, iteration, beta)
    """

    def __init__(self, interval: int = 1) -> None:
        """
        Initialize observer.

        Args:
            interval: Observation interval in iterations. Default=1 (every iteration).
        """
        if interval < 1:
            raise ValueError(f"Interval must be >= 1, got {interval}")
        self.interval = interval

    @abstractmethod
    def observe(
        self,
        cluster: "Cluster",
        iteration: int,
        beta: float,
    ) -> None:
        """
        Record observation.

        Args:
            cluster: Current cluster; its cached energy is fresh.
            iteration: Current iteration number.
            beta: Inverse temperature of this iteration.
        """
        pass

    def finalize(self) -> None:
        """Called at end of the run for cleanup."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


class CompositeObserver(Observer):
    """
    Composite observer that wraps multiple observers.

    Delegates to child observers based on their individual intervals.
    """

    def __init__(self, observers: List[Observer]) -> None:
        super().__init__(interval=1)
        self.observers = observers

    def observe(
        self,
        cluster: "Cluster",
        iteration: int,
        beta: float,
    ) -> None:
        """Delegate to child observers based on their intervals."""
        for obs in self.observers:
            if iteration % obs.interval == 0:
                obs.observe(cluster, iteration, beta)

    def finalize(self) -> None:
        """Finalize all child observers."""
        for obs in self.observers:
            obs.finalize()

    def get_name(self) -> str:
        names = [o.get_name() for o in self.observers]
        return f"Composite[{', '.join(names)}]"


class EnergyObserver(Observer):
    """
    Records the energy and mean radius traces of a run.
    """

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)
        self.iterations: List[int] = []
        self.betas: List[float] = []
        self.energies: List[float] = []
        self.mean_radii: List[float] = []

    def observe(
        self,
        cluster: "Cluster",
        iteration: int,
        beta: float,
    ) -> None:
        """Record energy values."""
        self.iterations.append(iteration)
        self.betas.append(beta)
        self.energies.append(cluster.energy)
        self.mean_radii.append(cluster.mean_radius())

    def get_name(self) -> str:
        return f"EnergyObserver(interval={self.interval})"

    def get_energy_change(self) -> float:
        """
        Relative energy change over the recorded trace.

        Returns:
            (E_final - E_initial) / |E_initial|
        """
        if len(self.energies) < 2:
            return 0.0
        E0 = self.energies[0]
        E_final = self.energies[-1]
        if abs(E0) < 1e-10:
            return 0.0
        return (E_final - E0) / abs(E0)


class TrajectoryObserver(Observer):
    """
    Records atomic positions over time for trajectory output.
    """

    def __init__(self, interval: int = 100) -> None:
        super().__init__(interval)
        self.frames: List[dict] = []

    def observe(
        self,
        cluster: "Cluster",
        iteration: int,
        beta: float,
    ) -> None:
        """Record frame."""
        self.frames.append({
            "iteration": iteration,
            "beta": beta,
            "positions": np.array(cluster.positions, copy=True),
            "energy": cluster.energy,
        })

    def get_name(self) -> str:
        return f"TrajectoryObserver(interval={self.interval})"


class PrintObserver(Observer):
    """
    Prints annealing progress to console.
    """

    def __init__(self, interval: int = 100) -> None:
        super().__init__(interval)

    def observe(
        self,
        cluster: "Cluster",
        iteration: int,
        beta: float,
    ) -> None:
        """Print iteration info."""
        n = max(cluster.n_atoms, 1)
        print(
            f"It {iteration:8d} | "
            f"beta={beta:9.3f} | "
            f"E={cluster.energy:12.4f} | "
            f"E/N={cluster.energy / n:9.4f} | "
            f"r_mean={cluster.mean_radius():8.4f}"
        )

    def get_name(self) -> str:
        return f"PrintObserver(interval={self.interval})"
