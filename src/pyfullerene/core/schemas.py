"""
Shared payload schemas for the service, workflow and API layers.

Defines the data structures that the CLI, the workflow and the FastAPI
transport layer consume and produce. Keeping them in one place prevents
drift between the call paths.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


# ------------------------------------------------------------------ #
#  Input schemas
# ------------------------------------------------------------------ #


@dataclass
class AnnealingConfig:
    """Everything needed to set up and run one annealing run."""

    n_atoms: int = 30
    beta_min: float = 1.0
    beta_max: float = 100.0
    exponent: float = 2.0
    n_iterations: int = 100_000
    sample_interval: int = 100
    initial_radius: float = 2.5
    seed: Optional[int] = None
    positions: Optional[List[List[float]]] = None
    positions_file: Optional[str] = None
    moves: Dict[str, float] = field(default_factory=dict)
    potential: Dict[str, float] = field(default_factory=dict)
    print_interval: int = 0

    def __post_init__(self) -> None:
        if self.n_atoms < 1 and self.positions is None and self.positions_file is None:
            raise ValueError(f"n_atoms must be positive, got {self.n_atoms}")
        if self.positions is not None and len(self.positions) == 0:
            raise ValueError("positions must contain at least one atom")
        if self.n_iterations < 1:
            raise ValueError(f"n_iterations must be positive, got {self.n_iterations}")
        if self.sample_interval < 1:
            raise ValueError(f"sample_interval must be >= 1, got {self.sample_interval}")
        if self.print_interval < 0:
            raise ValueError(f"print_interval must be >= 0, got {self.print_interval}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnnealingConfig":
        """
        Build a config from a plain mapping.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        seed = d.get("seed")
        positions = d.get("positions")
        positions_file = d.get("positions_file")
        return cls(
            n_atoms=int(d.get("n_atoms", 30)),
            beta_min=float(d.get("beta_min", 1.0)),
            beta_max=float(d.get("beta_max", 100.0)),
            exponent=float(d.get("exponent", 2.0)),
            n_iterations=int(d.get("n_iterations", 100_000)),
            sample_interval=int(d.get("sample_interval", 100)),
            initial_radius=float(d.get("initial_radius", 2.5)),
            seed=None if seed is None else int(seed),
            positions=None if positions is None else [list(map(float, p)) for p in positions],
            positions_file=None if positions_file is None else str(positions_file),
            moves=dict(d.get("moves") or {}),
            potential=dict(d.get("potential") or {}),
            print_interval=int(d.get("print_interval", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_atoms": self.n_atoms,
            "beta_min": self.beta_min,
            "beta_max": self.beta_max,
            "exponent": self.exponent,
            "n_iterations": self.n_iterations,
            "sample_interval": self.sample_interval,
            "initial_radius": self.initial_radius,
            "seed": self.seed,
            "positions": self.positions,
            "positions_file": self.positions_file,
            "moves": self.moves,
            "potential": self.potential,
            "print_interval": self.print_interval,
        }


# ------------------------------------------------------------------ #
#  Output schemas
# ------------------------------------------------------------------ #


@dataclass
class AnnealingUpdate:
    """Single progress update during an annealing run."""

    iteration: int
    total: int
    beta: float
    energy: float
    mean_radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iteration": self.iteration,
            "total": self.total,
            "beta": self.beta,
            "energy": self.energy,
            "mean_radius": self.mean_radius,
        }


@dataclass
class RunResult:
    """Final state and traces of a completed annealing run."""

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

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_atoms": self.n_atoms,
            "energy": self.energy,
            "energy_per_atom": self.energy_per_atom,
            "mean_radius": self.mean_radius,
            "positions": self.positions,
            "iterations": self.iterations,
            "betas": self.betas,
            "energies": self.energies,
            "mean_radii": self.mean_radii,
            "histogram": self.histogram,
            "bin_centres": self.bin_centres,
            "local_acceptance": self.local_acceptance,
            "global_acceptance": self.global_acceptance,
        }


@dataclass
class EnergyReport:
    """Energy breakdown of a fixed configuration."""

    n_atoms: int
    energy: float
    energy_per_atom: float
    mean_radius: float
    atom_energies: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_atoms": self.n_atoms,
            "energy": self.energy,
            "energy_per_atom": self.energy_per_atom,
            "mean_radius": self.mean_radius,
            "atom_energies": self.atom_energies,
        }


@dataclass
class SizeScanResult:
    """Final energy per atom for a range of cluster sizes."""

    sizes: List[int]
    energies_per_atom: List[float]
    mean_radii: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sizes": self.sizes,
            "energies_per_atom": self.energies_per_atom,
            "mean_radii": self.mean_radii,
        }
