"""
Configuration loader for YAML-based annealing setup.

Provides functions to load run configuration from YAML files and turn
it into a ready-to-run MonteCarloEngine.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from pyfullerene.core import Cluster
from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.montecarlo import AnnealingSchedule, MonteCarloEngine, MoveSizes
from pyfullerene.observer import EnergyObserver, PrintObserver
from pyfullerene.potential import BrennerParameters, BrennerPotential

from .cluster_builder import ClusterBuilder

ConfigLike = Union[AnnealingConfig, Dict[str, Any]]


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration.
    """
    try:
        import yaml
    except ImportError:
        raise ImportError("PyYAML is required: pip install pyyaml")

    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level of the configuration must be a mapping")
    return data


def _as_config(config: ConfigLike) -> AnnealingConfig:
    if isinstance(config, AnnealingConfig):
        return config
    return AnnealingConfig.from_dict(config)


def _parse_potential(config: AnnealingConfig) -> BrennerPotential:
    """Parse potential parameters from config."""
    return BrennerPotential(BrennerParameters.from_dict(config.potential))


def _parse_moves(config: AnnealingConfig) -> MoveSizes:
    """Parse move step sizes from config."""
    return MoveSizes.from_dict(config.moves)


def _parse_schedule(config: AnnealingConfig) -> AnnealingSchedule:
    """Parse annealing schedule from config."""
    return AnnealingSchedule(
        beta_min=config.beta_min,
        beta_max=config.beta_max,
        exponent=config.exponent,
        n_iterations=config.n_iterations,
    )


def build_cluster_from_config(
    config: ConfigLike,
    rng: Optional[np.random.Generator] = None,
) -> Cluster:
    """
    Build the initial cluster described by *config*.

    Explicit positions win over a positions file, which wins over a
    random placement on a sphere of radius initial_radius.

    Args:
        config: AnnealingConfig or plain mapping.
        rng: Generator for the random placement.

    Returns:
        Initial Cluster.
    """
    config = _as_config(config)
    builder = ClusterBuilder()

    if config.positions is not None:
        builder.positions(config.positions)
    elif config.positions_file is not None:
        builder.positions_file(config.positions_file)
    else:
        builder.atoms(config.n_atoms).on_sphere(config.initial_radius)
        builder.rng(rng if rng is not None else np.random.default_rng(config.seed))

    return builder.build()


def build_engine_from_config(
    config: ConfigLike,
    rng: Optional[np.random.Generator] = None,
) -> MonteCarloEngine:
    """
    Build a complete MonteCarloEngine from configuration.

    The same generator seeds the initial placement and drives the run.

    Args:
        config: AnnealingConfig or mapping (typically from YAML).
        rng: Generator to use; seeded from config.seed if omitted.

    Returns:
        Configured engine with an EnergyObserver first in its observers.

    Example config:
        n_atoms: 60
        beta_min: 1.0
        beta_max: 100.0
        exponent: 2.0
        n_iterations: 100000
        sample_interval: 100
        initial_radius: 2.5
        seed: 42
        moves:
          radial: 1.0e-4
          azimuthal: 0.05
          polar: 0.05
          global_radial: 1.0e-4
        potential:
          r0: 1.315
    """
    config = _as_config(config)
    if rng is None:
        rng = np.random.default_rng(config.seed)

    potential = _parse_potential(config)
    move_sizes = _parse_moves(config)
    schedule = _parse_schedule(config)
    cluster = build_cluster_from_config(config, rng)

    observers = [EnergyObserver(interval=config.sample_interval)]
    if config.print_interval > 0:
        observers.append(PrintObserver(interval=config.print_interval))

    return MonteCarloEngine(
        cluster=cluster,
        potential=potential,
        schedule=schedule,
        rng=rng,
        move_sizes=move_sizes,
        observers=observers,
    )


def load_and_run(path: Union[str, Path]) -> MonteCarloEngine:
    """
    Load configuration from YAML and run the annealing.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Engine after the run completes.
    """
    engine = build_engine_from_config(load_yaml(path))
    engine.run()
    return engine
