"""Transport-agnostic annealing workflow.

Wraps :class:`AnnealingService` so that callers (API routes, CLI) pass
plain Python primitives and receive plain dicts/strings; no schema
objects cross the boundary.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.core.service import AnnealingService


class AnnealingWorkflow:
    """Stateful orchestrator; one instance per session."""

    def __init__(self, service: Optional[AnnealingService] = None):
        self._svc = service or AnnealingService()

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def is_running(self) -> bool:
        return self._svc.is_running

    @property
    def has_cluster(self) -> bool:
        return self._svc.has_cluster

    # ------------------------------------------------------------------ #
    #  Annealing
    # ------------------------------------------------------------------ #

    def anneal(
        self,
        *,
        n_atoms: int = 30,
        beta_min: float = 1.0,
        beta_max: float = 100.0,
        exponent: float = 2.0,
        n_iterations: int = 100_000,
        sample_interval: int = 100,
        initial_radius: float = 2.5,
        seed: Optional[int] = None,
        positions: Optional[List[List[float]]] = None,
        moves: Optional[Dict[str, float]] = None,
        potential: Optional[Dict[str, float]] = None,
        on_update: Optional[Callable[[dict], None]] = None,
    ) -> dict:
        cfg = AnnealingConfig(
            n_atoms=n_atoms,
            beta_min=beta_min,
            beta_max=beta_max,
            exponent=exponent,
            n_iterations=n_iterations,
            sample_interval=sample_interval,
            initial_radius=initial_radius,
            seed=seed,
            positions=positions,
            moves=moves or {},
            potential=potential or {},
        )

        def _forward(u):
            if on_update is not None:
                on_update(u.to_dict())

        result = self._svc.run(cfg, on_update=_forward)
        return result.to_dict()

    def stop(self) -> None:
        self._svc.stop()

    def scan_sizes(
        self,
        *,
        sizes: Sequence[int],
        beta_min: float = 1.0,
        beta_max: float = 100.0,
        exponent: float = 2.0,
        n_iterations: int = 100_000,
        initial_radius: float = 2.5,
        seed: Optional[int] = None,
    ) -> dict:
        cfg = AnnealingConfig(
            beta_min=beta_min,
            beta_max=beta_max,
            exponent=exponent,
            n_iterations=n_iterations,
            sample_interval=n_iterations,
            initial_radius=initial_radius,
            seed=seed,
        )
        return self._svc.scan_sizes(sizes, cfg).to_dict()

    # ------------------------------------------------------------------ #
    #  Evaluation
    # ------------------------------------------------------------------ #

    def evaluate(
        self,
        *,
        positions: List[List[float]],
        potential: Optional[Dict[str, Any]] = None,
    ) -> dict:
        return self._svc.evaluate(positions, potential).to_dict()

    # ------------------------------------------------------------------ #
    #  XYZ
    # ------------------------------------------------------------------ #

    def get_xyz(self) -> str:
        return self._svc.get_xyz()
