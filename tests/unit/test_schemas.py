"""
Unit tests for the shared payload schemas.
"""
import pytest

from pyfullerene.core.schemas import (
    AnnealingConfig,
    AnnealingUpdate,
    EnergyReport,
    SizeScanResult,
)


class TestAnnealingConfig:
    """Tests for AnnealingConfig defaults, validation and conversion."""

    def test_defaults(self) -> None:
        cfg = AnnealingConfig()
        assert cfg.n_atoms == 30
        assert (cfg.beta_min, cfg.beta_max, cfg.exponent) == (1.0, 100.0, 2.0)
        assert cfg.n_iterations == 100_000
        assert cfg.sample_interval == 100
        assert cfg.initial_radius == 2.5
        assert cfg.seed is None

    def test_from_dict_coerces(self) -> None:
        cfg = AnnealingConfig.from_dict({"n_atoms": "12", "beta_max": 50, "seed": 3.0})
        assert cfg.n_atoms == 12
        assert cfg.beta_max == 50.0
        assert cfg.seed == 3

    def test_from_dict_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            AnnealingConfig.from_dict({"timestep": 0.1})

    def test_round_trip(self) -> None:
        cfg = AnnealingConfig(n_atoms=7, seed=1, moves={"polar": 0.1})
        assert AnnealingConfig.from_dict(cfg.to_dict()) == cfg

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"n_atoms": 0}, "n_atoms"),
            ({"n_iterations": 0}, "n_iterations"),
            ({"sample_interval": 0}, "sample_interval"),
            ({"print_interval": -1}, "print_interval"),
            ({"positions": []}, "at least one atom"),
        ],
    )
    def test_validation(self, kwargs, match) -> None:
        with pytest.raises(ValueError, match=match):
            AnnealingConfig(**kwargs)

    def test_positions_make_n_atoms_irrelevant(self) -> None:
        cfg = AnnealingConfig(n_atoms=0, positions=[[0.0, 0.0, 0.0]])
        assert cfg.positions == [[0.0, 0.0, 0.0]]


class TestOutputSchemas:
    """Tests for to_dict on the output payloads."""

    def test_update(self) -> None:
        update = AnnealingUpdate(iteration=10, total=100, beta=2.0, energy=-5.0, mean_radius=1.1)
        assert update.to_dict() == {
            "iteration": 10,
            "total": 100,
            "beta": 2.0,
            "energy": -5.0,
            "mean_radius": 1.1,
        }

    def test_energy_report(self) -> None:
        report = EnergyReport(2, -6.325, -3.1625, 0.6575, [-6.325, -6.325])
        assert report.to_dict()["atom_energies"] == [-6.325, -6.325]

    def test_scan_result(self) -> None:
        result = SizeScanResult(sizes=[3, 4], energies_per_atom=[-1.0, -2.0], mean_radii=[1.0, 1.1])
        assert result.to_dict()["sizes"] == [3, 4]
