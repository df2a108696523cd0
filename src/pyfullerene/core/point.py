"""
SphericalPoint value type.

A 3D point stored both in Cartesian and spherical form. The two
representations are always computed together by one of the named
constructors, so they never drift apart.
"""
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

TWO_PI = 2.0 * math.pi


def normalize_angles(phi: float, theta: float) -> Tuple[float, float]:
    """
    Bring phi into [0, 2π] and theta into [0, π].

    This is a single wrap-around, not a modulo: a value out of range is
    shifted by exactly one period. Values more than one period out of
    range stay invalid.

    Args:
        phi: Azimuthal angle.
        theta: Polar angle.

    Returns:
        Tuple (phi, theta) after the correction.
    """
    if phi < 0.0:
        phi += TWO_PI
    elif phi > TWO_PI:
        phi -= TWO_PI

    if theta < 0.0:
        theta += math.pi
    elif theta > math.pi:
        theta -= math.pi

    return phi, theta


@dataclass(frozen=True)
class SphericalPoint:
    """
    Immutable point with redundant Cartesian and spherical coordinates.

    Do not call the dataclass constructor directly; use
    :meth:`from_cartesian` or :meth:`from_spherical`.

    Attributes:
        x, y, z: Cartesian coordinates.
        r: Distance from the origin (r >= 0).
        phi: Azimuthal angle, in [0, 2π] once normalized.
        theta: Polar angle, in [0, π] once normalized.

    Example:
        >>> p = SphericalPoint.from_spherical(1.0, 0.0, math.pi / 2)
        >>> round(p.x, 12)
        1.0
    """
    x: float
    y: float
    z: float
    r: float
    phi: float
    theta: float

    @classmethod
    def origin(cls) -> "SphericalPoint":
        """Return the point at the origin."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float) -> "SphericalPoint":
        """
        Build a point from a Cartesian triple.

        phi comes from atan2 and is wrapped into [0, 2π). The origin maps
        to phi = theta = 0.
        """
        x, y, z = float(x), float(y), float(z)
        r = math.sqrt(x * x + y * y + z * z)
        if r == 0.0:
            return cls(x, y, z, 0.0, 0.0, 0.0)

        phi = math.atan2(y, x)
        if phi < 0.0:
            phi += TWO_PI
        theta = math.acos(max(-1.0, min(1.0, z / r)))
        return cls(x, y, z, r, phi, theta)

    @classmethod
    def from_spherical(cls, r: float, phi: float, theta: float) -> "SphericalPoint":
        """Build a point from a spherical triple (r, phi, theta)."""
        r, phi, theta = float(r), float(phi), float(theta)
        sin_theta = math.sin(theta)
        return cls(
            x=r * sin_theta * math.cos(phi),
            y=r * sin_theta * math.sin(phi),
            z=r * math.cos(theta),
            r=r,
            phi=phi,
            theta=theta,
        )

    @classmethod
    def from_sequence(cls, data: Sequence[float]) -> "SphericalPoint":
        """
        Build a point from a Cartesian (x, y, z) sequence.

        Raises:
            ValueError: If the sequence does not hold exactly 3 values.
        """
        if len(data) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(data)}")
        return cls.from_cartesian(data[0], data[1], data[2])

    def normalized(self) -> "SphericalPoint":
        """Return the point rebuilt with normalized angles."""
        phi, theta = normalize_angles(self.phi, self.theta)
        if phi == self.phi and theta == self.theta:
            return self
        return SphericalPoint.from_spherical(self.r, phi, theta)

    def scaled(self, factor: float) -> "SphericalPoint":
        """Return the point with r multiplied by *factor*, angles unchanged."""
        return SphericalPoint.from_spherical(self.r * factor, self.phi, self.theta)

    @property
    def cartesian(self) -> Tuple[float, float, float]:
        """Return (x, y, z)."""
        return (self.x, self.y, self.z)

    @property
    def spherical(self) -> Tuple[float, float, float]:
        """Return (r, phi, theta)."""
        return (self.r, self.phi, self.theta)

    def __str__(self) -> str:
        return (
            f"{self.x:<10.5f}\t{self.y:<10.5f}\t{self.z:<10.5f}\t"
            f"{self.r:<10.5f}\t{self.phi:<10.5f}\t{self.theta:<10.5f}"
        )
