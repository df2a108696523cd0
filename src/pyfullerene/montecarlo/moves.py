"""
Move settings, Metropolis acceptance and move bookkeeping.
"""
import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from pyfullerene.core import constants


def acceptance_probability(delta: float, beta: float) -> float:
    """
    Metropolis acceptance probability min(1, exp(-beta * delta)).

    Exactly 1 for any downhill or neutral move (delta <= 0).

    Args:
        delta: Energy change E_new - E_old.
        beta: Inverse temperature (>= 0).

    Returns:
        Probability in [0, 1].
    """
    if delta <= 0.0:
        return 1.0
    return math.exp(-beta * delta)


@dataclass(frozen=True)
class MoveSizes:
    """
    Relative step sizes of the Monte Carlo moves.

    Local moves scale each spherical coordinate by (1 + (2u - 1) * w),
    so steps are proportional to the current value.

    Attributes:
        radial: w_r for a local move.
        azimuthal: w_phi for a local move.
        polar: w_theta for a local move.
        global_radial: w_all for the global rescale.
    """
    radial: float = constants.W_R
    azimuthal: float = constants.W_PHI
    polar: float = constants.W_THETA
    global_radial: float = constants.W_ALL

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0.0 <= value < 1.0:
                raise ValueError(f"{f.name} step must be in [0, 1), got {value}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MoveSizes":
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown move sizes: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in d.items()})

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class MoveStatistics:
    """Counters of attempted and accepted moves."""

    local_attempted: int = 0
    local_accepted: int = 0
    global_attempted: int = 0
    global_accepted: int = 0

    def record_local(self, accepted: bool) -> None:
        self.local_attempted += 1
        if accepted:
            self.local_accepted += 1

    def record_global(self, accepted: bool) -> None:
        self.global_attempted += 1
        if accepted:
            self.global_accepted += 1

    @property
    def local_acceptance(self) -> float:
        """Fraction of accepted local moves (0 if none attempted)."""
        if self.local_attempted == 0:
            return 0.0
        return self.local_accepted / self.local_attempted

    @property
    def global_acceptance(self) -> float:
        """Fraction of accepted global moves (0 if none attempted)."""
        if self.global_attempted == 0:
            return 0.0
        return self.global_accepted / self.global_attempted

    def reset(self) -> None:
        self.local_attempted = 0
        self.local_accepted = 0
        self.global_attempted = 0
        self.global_accepted = 0
