"""
Core module for cluster annealing.

This module provides the fundamental classes:
- SphericalPoint: Atom position in Cartesian and spherical form
- Cluster: Fixed-size container of atoms with a cached energy
- ClusterProposal: Pending change with commit/rollback
"""

from .cluster import Cluster, ClusterProposal
from .point import SphericalPoint, normalize_angles

__all__ = [
    "Cluster",
    "ClusterProposal",
    "SphericalPoint",
    "normalize_angles",
]
