"""
Pydantic request / response models for the pyfullerene REST API.

All validation, field constraints, and serialisation logic lives here.
Routes import these models; they never define their own.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ------------------------------------------------------------------ #
#  Request models
# ------------------------------------------------------------------ #


class AnnealRequest(BaseModel):
    """Payload for ``POST /anneal``."""

    n_atoms: int = Field(30, gt=0, description="Atom count for a random start")
    beta_min: float = Field(1.0, ge=0.0, description="Initial inverse temperature")
    beta_max: float = Field(100.0, ge=0.0, description="Final inverse temperature")
    exponent: float = Field(2.0, gt=0.0, description="Annealing schedule exponent")
    n_iterations: int = Field(10_000, gt=0, description="Monte Carlo iterations")
    sample_interval: int = Field(100, gt=0, description="Trace sampling stride")
    initial_radius: float = Field(2.5, gt=0.0, description="Radius of the random start")
    seed: Optional[int] = Field(None, description="Random seed")
    positions: Optional[List[List[float]]] = Field(
        None, min_length=1, description="Explicit starting positions (x, y, z triples)"
    )
    moves: Dict[str, float] = Field(default_factory=dict, description="Move step sizes")
    potential: Dict[str, float] = Field(
        default_factory=dict, description="Potential parameter overrides"
    )

    @field_validator("beta_max")
    @classmethod
    def beta_max_ge_min(cls, v: float, info) -> float:
        beta_min = info.data.get("beta_min")
        if beta_min is not None and v < beta_min:
            raise ValueError("beta_max must be >= beta_min")
        return v

    @field_validator("positions")
    @classmethod
    def positions_are_triples(cls, v):
        if v is not None and any(len(p) != 3 for p in v):
            raise ValueError("every position must have exactly 3 coordinates")
        return v


class EnergyRequest(BaseModel):
    """Payload for ``POST /energy``."""

    positions: List[List[float]] = Field(..., min_length=1, description="x, y, z triples")
    potential: Dict[str, float] = Field(
        default_factory=dict, description="Potential parameter overrides"
    )

    @field_validator("positions")
    @classmethod
    def positions_are_triples(cls, v):
        if any(len(p) != 3 for p in v):
            raise ValueError("every position must have exactly 3 coordinates")
        return v


class ScanRequest(BaseModel):
    """Payload for ``POST /scan``."""

    n_min: int = Field(..., gt=1, description="Smallest cluster size")
    n_max: int = Field(..., gt=1, description="Largest cluster size (inclusive)")
    beta_min: float = Field(1.0, ge=0.0)
    beta_max: float = Field(100.0, ge=0.0)
    exponent: float = Field(2.0, gt=0.0)
    n_iterations: int = Field(1_000, gt=0)
    initial_radius: float = Field(2.5, gt=0.0)
    seed: Optional[int] = None

    @field_validator("n_max")
    @classmethod
    def n_max_ge_min(cls, v: int, info) -> int:
        n_min = info.data.get("n_min")
        if n_min is not None and v < n_min:
            raise ValueError("n_max must be >= n_min")
        return v


# ------------------------------------------------------------------ #
#  Response models
# ------------------------------------------------------------------ #


class RunResultPayload(BaseModel):
    """Final state and traces of an annealing run."""

    n_atoms: int
    energy: float
    energy_per_atom: float
    mean_radius: float
    positions: List[List[float]]
    iterations: List[int]
    betas: List[float]
    energies: List[float]
    mean_radii: List[float]
    histogram: List[float]
    bin_centres: List[float]
    local_acceptance: float
    global_acceptance: float


class AnnealResponse(BaseModel):
    """Response for ``POST /anneal``."""

    ok: bool = True
    result: RunResultPayload


class EnergyReportPayload(BaseModel):
    """Energy breakdown of a configuration."""

    n_atoms: int
    energy: float
    energy_per_atom: float
    mean_radius: float
    atom_energies: List[float]


class EnergyResponse(BaseModel):
    """Response for ``POST /energy``."""

    ok: bool = True
    report: EnergyReportPayload


class ScanResultPayload(BaseModel):
    """Energy per atom against cluster size."""

    sizes: List[int]
    energies_per_atom: List[float]
    mean_radii: List[float]


class ScanResponse(BaseModel):
    """Response for ``POST /scan``."""

    ok: bool = True
    result: ScanResultPayload


class XYZResponse(BaseModel):
    """Response for ``GET /xyz``."""

    ok: bool = True
    xyz: str


class HealthResponse(BaseModel):
    """Response for ``GET /health``."""

    status: str = "ok"
    version: str
    running: bool = False
