"""
Annealing schedule for simulated annealing.

Maps an iteration index to the inverse temperature beta.
"""
from dataclasses import dataclass


def inverse_temperature(
    it: int,
    it_max: int,
    beta_min: float,
    beta_max: float,
    p: float,
) -> float:
    """
    beta = beta_min + (it / it_max)^p * (beta_max - beta_min)

    Args:
        it: Current iteration (0-based).
        it_max: Total number of iterations.
        beta_min: Inverse temperature at the start of the run.
        beta_max: Inverse temperature approached at the end.
        p: Schedule exponent.

    Returns:
        Inverse temperature for iteration it.
    """
    return beta_min + (it / it_max) ** p * (beta_max - beta_min)


@dataclass(frozen=True)
class AnnealingSchedule:
    """
    Power-law schedule for the inverse temperature.

    Stateless: beta depends only on the iteration index. Both move kinds
    of one iteration use the same beta.

    Attributes:
        beta_min: Starting inverse temperature.
        beta_max: Final inverse temperature.
        exponent: Power p of the schedule.
        n_iterations: Number of iterations of the run (it_max).

    Example:
        >>> schedule = AnnealingSchedule(1.0, 100.0, 2.0, 1000)
        >>> schedule.beta(0)
        1.0
    """
    beta_min: float
    beta_max: float
    exponent: float
    n_iterations: int

    def __post_init__(self) -> None:
        """Validate schedule settings."""
        if self.n_iterations <= 0:
            raise ValueError(f"n_iterations must be positive, got {self.n_iterations}")
        if self.beta_min < 0:
            raise ValueError(f"beta_min must be non-negative, got {self.beta_min}")
        if self.beta_max < self.beta_min:
            raise ValueError(
                f"beta_max ({self.beta_max}) must not be below beta_min ({self.beta_min})"
            )
        if self.exponent <= 0:
            raise ValueError(f"exponent must be positive, got {self.exponent}")

    @classmethod
    def isothermal(cls, beta: float, n_iterations: int) -> "AnnealingSchedule":
        """Constant-beta schedule."""
        return cls(beta, beta, 1.0, n_iterations)

    @property
    def is_isothermal(self) -> bool:
        return self.beta_min == self.beta_max

    def beta(self, it: int) -> float:
        """Inverse temperature at iteration it."""
        return inverse_temperature(
            it, self.n_iterations, self.beta_min, self.beta_max, self.exponent
        )
