"""
Monte Carlo module for simulated annealing.

Provides the annealing driver and its building blocks:
- MonteCarloEngine: Local and global Metropolis moves per iteration
- AnnealingSchedule: Iteration -> inverse temperature
- MoveSizes / MoveStatistics: Step sizes and acceptance bookkeeping
"""

from .engine import MonteCarloEngine
from .moves import MoveSizes, MoveStatistics, acceptance_probability
from .schedule import AnnealingSchedule, inverse_temperature

__all__ = [
    "MonteCarloEngine",
    "AnnealingSchedule",
    "inverse_temperature",
    "MoveSizes",
    "MoveStatistics",
    "acceptance_probability",
]
