"""
Model constants for cluster annealing.

This module provides the fixed parametrization of the bond-order
potential together with the default Monte Carlo step sizes and
diagnostic settings used throughout the package.
"""
from typing import Final

# Equilibrium pair distance
R0: Final[float] = 1.315

# Inner cutoff radius (full interaction below)
R1: Final[float] = 1.7

# Outer cutoff radius (no interaction above)
R2: Final[float] = 2.0

# Well depth
DE: Final[float] = 6.325

# Stiffness ratio
S: Final[float] = 1.29

# Decay rate
LAMBDA: Final[float] = 1.5

# Bond-order exponent
DELTA: Final[float] = 0.80469

# Angular correction constants
A0: Final[float] = 0.011304
C0: Final[float] = 19.0
D0: Final[float] = 2.5

# Angular term for cos(theta_ijk) > 0, forbids 4-fold coordination
ANGULAR_PENALTY: Final[float] = 20.0

# Relative step sizes of a local move (r, phi, theta)
W_R: Final[float] = 1e-4
W_PHI: Final[float] = 0.05
W_THETA: Final[float] = 0.05

# Relative step size of the global radial rescale
W_ALL: Final[float] = 1e-4

# Pair correlation histogram
N_BINS: Final[int] = 100
HISTOGRAM_RANGE: Final[float] = 2.5
