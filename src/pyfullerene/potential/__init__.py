"""
Potential energy module for cluster annealing.

The model is a single Brenner-type bond-order potential:
- BrennerPotential: pair terms, cutoff, angular bond-order correction
- BrennerParameters: immutable parameter set passed to the potential
"""

from .brenner import BrennerPotential
from .parameters import DEFAULT_PARAMETERS, BrennerParameters

__all__ = [
    "BrennerPotential",
    "BrennerParameters",
    "DEFAULT_PARAMETERS",
]
