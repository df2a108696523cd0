"""
Observer module for annealing runs.

- EnergyObserver: energy and mean radius traces
- TrajectoryObserver: position frames
- PrintObserver: console progress
- CompositeObserver: fan-out to several observers
"""

from .observer import (
    CompositeObserver,
    EnergyObserver,
    Observer,
    PrintObserver,
    TrajectoryObserver,
)

__all__ = [
    "Observer",
    "CompositeObserver",
    "EnergyObserver",
    "TrajectoryObserver",
    "PrintObserver",
]
