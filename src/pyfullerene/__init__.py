"""
pyfullerene - Monte Carlo simulated annealing of atomic clusters.

Searches for low-energy geometries of an N-atom cluster under a
Brenner-type bond-order potential, using a Metropolis random walk with
an annealed inverse temperature.

Main features:
- Bond-order potential with angular correction and smooth cutoff
- Local spherical moves plus a global radial rescale per iteration
- Power-law annealing schedule
- Energy / mean radius traces and pair correlation histogram
- YAML configuration, CLI, and an optional REST API
"""

__version__ = "0.1.0"
__author__ = "pyfullerene Team"
