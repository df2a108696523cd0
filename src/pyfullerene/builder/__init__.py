"""
Builder module for constructing clusters and annealing runs.

- ClusterBuilder: Fluent construction of the initial cluster
- Config loader: YAML -> AnnealingConfig -> MonteCarloEngine
"""

from .cluster_builder import ClusterBuilder
from .config_loader import (
    build_cluster_from_config,
    build_engine_from_config,
    load_and_run,
    load_yaml,
)

__all__ = [
    "ClusterBuilder",
    "build_cluster_from_config",
    "build_engine_from_config",
    "load_and_run",
    "load_yaml",
]
