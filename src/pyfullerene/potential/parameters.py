"""
Parameter set for the bond-order potential.

The model is fixed to a single parametrization, but the constants are
bundled in an immutable dataclass and passed explicitly so alternate
values can be tested.
"""
import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from pyfullerene.core import constants


@dataclass(frozen=True)
class BrennerParameters:
    """
    Physical constants of the bond-order potential.

    Attributes:
        r0: Equilibrium pair distance.
        r1: Inner cutoff radius; pairs closer than r1 interact fully.
        r2: Outer cutoff radius; pairs further than r2 do not interact.
        de: Well depth.
        s: Stiffness ratio (must exceed 1).
        lam: Decay rate.
        delta: Bond-order exponent.
        a0, c0, d0: Angular correction constants.
        angular_penalty: Angular term used when cos(theta_ijk) > 0.

    Example:
        >>> params = BrennerParameters()
        >>> params.r1 < params.r2
        True
    """
    r0: float = constants.R0
    r1: float = constants.R1
    r2: float = constants.R2
    de: float = constants.DE
    s: float = constants.S
    lam: float = constants.LAMBDA
    delta: float = constants.DELTA
    a0: float = constants.A0
    c0: float = constants.C0
    d0: float = constants.D0
    angular_penalty: float = constants.ANGULAR_PENALTY

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value}")
        if self.r0 <= 0:
            raise ValueError(f"r0 must be positive, got {self.r0}")
        if not 0 < self.r1 < self.r2:
            raise ValueError(
                f"Cutoff radii must satisfy 0 < r1 < r2, got r1={self.r1}, r2={self.r2}"
            )
        if self.de <= 0:
            raise ValueError(f"de must be positive, got {self.de}")
        if self.s <= 1:
            raise ValueError(f"s must be greater than 1, got {self.s}")
        if self.lam <= 0:
            raise ValueError(f"lam must be positive, got {self.lam}")
        if self.d0 == 0:
            raise ValueError("d0 must be non-zero")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BrennerParameters":
        """
        Build parameters from a mapping, missing keys take defaults.

        Raises:
            ValueError: On unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown potential parameters: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in d.items()})

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_PARAMETERS = BrennerParameters()
