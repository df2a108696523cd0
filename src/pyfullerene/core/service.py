"""
Backend service layer for pyfullerene.

Framework-independent logic consumed by the CLI, the workflow layer
and the FastAPI transport layer. No references to argparse, FastAPI,
or any transport concern belong here.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional

import numpy as np
from numpy.typing import ArrayLike

from pyfullerene.builder.config_loader import build_engine_from_config
from pyfullerene.core.cluster import Cluster
from pyfullerene.core.schemas import (
    AnnealingConfig,
    AnnealingUpdate,
    EnergyReport,
    RunResult,
    SizeScanResult,
)
from pyfullerene.io import cluster_to_xyz
from pyfullerene.montecarlo import MonteCarloEngine
from pyfullerene.observer import EnergyObserver
from pyfullerene.potential import BrennerParameters, BrennerPotential

logger = logging.getLogger(__name__)


class AnnealingService:
    """Stateful annealing backend.  One instance per session."""

    def __init__(self):
        self._engine: Optional[MonteCarloEngine] = None
        self._energy_observer: Optional[EnergyObserver] = None
        self._running = False
        self._stop_requested = False
        self._config: Optional[AnnealingConfig] = None

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_cluster(self) -> bool:
        return self._engine is not None

    @property
    def cluster(self) -> Cluster:
        if self._engine is None:
            raise RuntimeError("No cluster available. Run an annealing first.")
        return self._engine.cluster

    # ------------------------------------------------------------------ #
    #  Annealing
    # ------------------------------------------------------------------ #

    def run(
        self,
        config: AnnealingConfig,
        on_update: Optional[Callable[[AnnealingUpdate], None]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> RunResult:
        """Run one annealing described by *config*, synchronously.

        *on_update* is called every ``config.sample_interval`` iterations
        and after the last one.
        """
        if self._running:
            raise RuntimeError("An annealing run is already in progress.")

        self._running = True
        self._stop_requested = False
        try:
            return self._anneal(config, on_update, rng)
        finally:
            self._running = False

    def _anneal(
        self,
        config: AnnealingConfig,
        on_update: Optional[Callable[[AnnealingUpdate], None]],
        rng: Optional[np.random.Generator],
    ) -> RunResult:
        engine = build_engine_from_config(config, rng=rng)
        self._engine = engine
        self._energy_observer = engine.observers[0]
        self._config = config

        total = engine.schedule.n_iterations
        logger.info(
            "Annealing %d atoms for %d iterations (beta %.3g -> %.3g, p=%.3g)",
            engine.cluster.n_atoms, total,
            config.beta_min, config.beta_max, config.exponent,
        )

        while not engine.is_finished:
            if self._stop_requested:
                logger.info("Annealing stopped at iteration %d", engine.iteration)
                break
            beta = engine.step()
            done = engine.iteration
            if on_update is not None and (
                done % config.sample_interval == 0 or done == total
            ):
                on_update(self._make_update(done, total, beta))

        if engine.is_finished:
            for observer in engine.observers:
                observer.finalize()

        result = self._make_result(engine)
        logger.info(
            "Annealing finished: E=%.6f, E/N=%.6f, r_mean=%.4f",
            result.energy, result.energy_per_atom, result.mean_radius,
        )
        return result

    def stop(self) -> None:
        """Ask the current run, or the rest of a size scan, to stop."""
        self._stop_requested = True

    def scan_sizes(
        self,
        sizes: Iterable[int],
        config: AnnealingConfig,
        on_result: Optional[Callable[[int, RunResult], None]] = None,
    ) -> SizeScanResult:
        """Anneal a fresh random cluster for every size in *sizes*.

        Each run gets its own cluster and its own generator, spawned from
        ``config.seed`` so the whole scan is reproducible.
        """
        sizes = [int(n) for n in sizes]
        if not sizes:
            raise ValueError("No cluster sizes given")
        if config.positions is not None or config.positions_file is not None:
            raise ValueError("A size scan starts from random clusters; drop explicit positions")

        if self._running:
            raise RuntimeError("An annealing run is already in progress.")

        seeds = np.random.SeedSequence(config.seed).spawn(len(sizes))
        energies_per_atom = []
        mean_radii = []
        self._running = True
        self._stop_requested = False
        try:
            for n_atoms, seed in zip(sizes, seeds):
                if self._stop_requested:
                    logger.info("Size scan stopped before N = %d", n_atoms)
                    break
                run_config = AnnealingConfig.from_dict({**config.to_dict(), "n_atoms": n_atoms})
                result = self._anneal(run_config, None, np.random.default_rng(seed))
                if not self._engine.is_finished:
                    break
                logger.info("N = %d; E/N = %.6f", n_atoms, result.energy_per_atom)
                energies_per_atom.append(result.energy_per_atom)
                mean_radii.append(result.mean_radius)
                if on_result is not None:
                    on_result(n_atoms, result)
        finally:
            self._running = False

        return SizeScanResult(
            sizes=sizes[:len(energies_per_atom)],
            energies_per_atom=energies_per_atom,
            mean_radii=mean_radii,
        )

    # ------------------------------------------------------------------ #
    #  Evaluation of fixed configurations
    # ------------------------------------------------------------------ #

    def evaluate(
        self,
        positions: ArrayLike,
        potential: Optional[Dict[str, Any]] = None,
    ) -> EnergyReport:
        """Energy breakdown of the configuration given by *positions*."""
        cluster = Cluster.from_positions(positions)
        pot = (
            BrennerPotential(BrennerParameters.from_dict(potential))
            if potential
            else BrennerPotential()
        )
        atom_energies = pot.atom_energies(cluster.positions)
        cluster.energy = 0.5 * float(np.sum(atom_energies))
        n = cluster.n_atoms
        return EnergyReport(
            n_atoms=n,
            energy=cluster.energy,
            energy_per_atom=cluster.energy / n if n else 0.0,
            mean_radius=cluster.mean_radius(),
            atom_energies=[float(e) for e in atom_energies],
        )

    # ------------------------------------------------------------------ #
    #  XYZ
    # ------------------------------------------------------------------ #

    def get_xyz(self) -> str:
        """Return current positions as XYZ-format string."""
        cluster = self.cluster
        it = self._engine.iteration
        return cluster_to_xyz(cluster, comment=f"Iteration {it} E={cluster.energy:.6f}")

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _make_update(self, iteration: int, total: int, beta: float) -> AnnealingUpdate:
        cluster = self._engine.cluster
        return AnnealingUpdate(
            iteration=iteration,
            total=total,
            beta=float(beta),
            energy=float(cluster.energy),
            mean_radius=float(cluster.mean_radius()),
        )

    def _make_result(self, engine: MonteCarloEngine) -> RunResult:
        cluster = engine.cluster
        energy = cluster.compute_energy(engine.potential)
        obs = self._energy_observer
        n = cluster.n_atoms
        return RunResult(
            n_atoms=n,
            energy=float(energy),
            energy_per_atom=float(energy / n) if n else 0.0,
            mean_radius=float(cluster.mean_radius()),
            positions=cluster.positions.tolist(),
            iterations=list(obs.iterations),
            betas=[float(b) for b in obs.betas],
            energies=[float(e) for e in obs.energies],
            mean_radii=[float(r) for r in obs.mean_radii],
            histogram=cluster.pair_correlation_histogram().tolist(),
            bin_centres=cluster.pair_correlation_bins().tolist(),
            local_acceptance=engine.statistics.local_acceptance,
            global_acceptance=engine.statistics.global_acceptance,
        )
