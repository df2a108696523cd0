"""
Unit tests for the Monte Carlo module.

Tests for the annealing schedule, Metropolis acceptance, move settings
and the MonteCarloEngine moves and loop.
"""
import math

import numpy as np
import pytest

from pyfullerene.core import Cluster, SphericalPoint
from pyfullerene.montecarlo import (
    AnnealingSchedule,
    MonteCarloEngine,
    MoveSizes,
    MoveStatistics,
    acceptance_probability,
    inverse_temperature,
)
from pyfullerene.observer import EnergyObserver, TrajectoryObserver
from pyfullerene.potential import BrennerPotential

R0 = 1.315


class ScriptedRng:
    """Stands in for a Generator, returning preset uniform draws."""

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


def make_dimer(d: float) -> Cluster:
    return Cluster.from_positions([[0.5 * d, 0.0, 0.0], [-0.5 * d, 0.0, 0.0]])


class TestSchedule:
    """Tests for the power-law annealing schedule."""

    def test_endpoints(self) -> None:
        assert inverse_temperature(0, 100, 1.0, 100.0, 2.0) == 1.0
        assert inverse_temperature(100, 100, 1.0, 100.0, 2.0) == pytest.approx(100.0)

    def test_midpoint_quadratic(self) -> None:
        assert inverse_temperature(50, 100, 1.0, 100.0, 2.0) == pytest.approx(25.75)

    def test_monotonic(self) -> None:
        schedule = AnnealingSchedule(1.0, 100.0, 2.0, 1000)
        betas = [schedule.beta(it) for it in range(1000)]
        assert all(b2 >= b1 for b1, b2 in zip(betas, betas[1:]))
        assert betas[-1] < 100.0

    def test_isothermal(self) -> None:
        schedule = AnnealingSchedule.isothermal(50.0, 10)
        assert schedule.is_isothermal
        assert {schedule.beta(it) for it in range(10)} == {50.0}

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            (dict(beta_min=1.0, beta_max=10.0, exponent=2.0, n_iterations=0), "n_iterations"),
            (dict(beta_min=-1.0, beta_max=10.0, exponent=2.0, n_iterations=10), "beta_min"),
            (dict(beta_min=5.0, beta_max=1.0, exponent=2.0, n_iterations=10), "beta_max"),
            (dict(beta_min=1.0, beta_max=10.0, exponent=0.0, n_iterations=10), "exponent"),
        ],
    )
    def test_validation(self, kwargs, match) -> None:
        with pytest.raises(ValueError, match=match):
            AnnealingSchedule(**kwargs)


class TestAcceptance:
    """Tests for the Metropolis acceptance probability."""

    def test_downhill_always_accepted(self) -> None:
        assert acceptance_probability(-1.0, 100.0) == 1.0
        assert acceptance_probability(-1e6, 1e6) == 1.0

    def test_neutral_accepted(self) -> None:
        assert acceptance_probability(0.0, 10.0) == 1.0

    def test_uphill(self) -> None:
        assert acceptance_probability(1.0, 2.0) == pytest.approx(math.exp(-2.0))

    def test_infinite_temperature(self) -> None:
        assert acceptance_probability(5.0, 0.0) == 1.0


class TestMoveSettings:
    """Tests for MoveSizes and MoveStatistics."""

    def test_default_sizes(self) -> None:
        w = MoveSizes()
        assert w.radial == 1e-4
        assert w.azimuthal == 0.05
        assert w.polar == 0.05
        assert w.global_radial == 1e-4

    def test_size_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="radial step"):
            MoveSizes(radial=1.0)

    def test_from_dict(self) -> None:
        w = MoveSizes.from_dict({"polar": 0.1})
        assert w.polar == 0.1
        assert w.to_dict()["azimuthal"] == 0.05
        with pytest.raises(ValueError, match="Unknown move sizes"):
            MoveSizes.from_dict({"w_r": 0.1})

    def test_statistics(self) -> None:
        stats = MoveStatistics()
        assert stats.local_acceptance == 0.0
        for accepted in (True, False, True, True):
            stats.record_local(accepted)
        stats.record_global(False)
        assert stats.local_acceptance == pytest.approx(0.75)
        assert stats.global_acceptance == 0.0
        stats.reset()
        assert stats.local_attempted == 0


class TestEngineMoves:
    """Tests for single local and global moves with scripted draws."""

    @pytest.fixture
    def pot(self) -> BrennerPotential:
        return BrennerPotential()

    def make_engine(self, cluster, pot, draws, **sizes) -> MonteCarloEngine:
        return MonteCarloEngine(
            cluster=cluster,
            potential=pot,
            schedule=AnnealingSchedule.isothermal(100.0, 10),
            rng=ScriptedRng(draws),
            move_sizes=MoveSizes(**sizes),
        )

    def test_local_move_uphill_rejected(self, pot) -> None:
        cluster = make_dimer(R0)
        old = cluster[0]
        engine = self.make_engine(cluster, pot, [1.0, 0.5, 0.5, 0.999], radial=0.5)

        assert engine.local_move(0, beta=100.0) is False
        assert cluster[0] is old
        assert cluster.distance(0, 1) == pytest.approx(R0)
        assert engine.rng.values == []
        assert engine.statistics.local_attempted == 1
        assert engine.statistics.local_accepted == 0

    def test_local_move_downhill_accepted(self, pot) -> None:
        cluster = make_dimer(1.6)
        engine = self.make_engine(cluster, pot, [0.0, 0.5, 0.5, 0.999], radial=0.1)

        assert engine.local_move(0, beta=100.0) is True
        assert cluster[0].r == pytest.approx(0.72)
        assert cluster.distance(0, 1) == pytest.approx(1.52)
        assert engine.statistics.local_accepted == 1

    def test_local_move_perturbs_angles(self, pot) -> None:
        cluster = Cluster.from_positions([[0.5, 0.5, 0.5], [-0.5, -0.5, -0.5]])
        old = cluster[0]
        engine = self.make_engine(cluster, pot, [0.5, 1.0, 0.0, 0.0])

        engine.local_move(0, beta=100.0)
        assert cluster[0].r == pytest.approx(old.r)
        assert cluster[0].phi == pytest.approx(old.phi * 1.05)
        assert cluster[0].theta == pytest.approx(old.theta * 0.95)

    def test_local_move_wraps_angles(self, pot) -> None:
        cluster = Cluster.from_points([
            SphericalPoint.from_spherical(1.0, 6.2, 3.1),
            SphericalPoint.from_spherical(5.0, 0.0, 0.0),
        ])
        engine = self.make_engine(cluster, pot, [0.5, 1.0, 1.0, 0.0])

        assert engine.local_move(0, beta=100.0) is True
        moved = cluster[0]
        assert moved.phi == pytest.approx(6.2 * 1.05 - 2.0 * math.pi)
        assert moved.theta == pytest.approx(3.1 * 1.05 - math.pi)
        assert 0.0 <= moved.phi <= 2.0 * math.pi
        assert 0.0 <= moved.theta <= math.pi
        expected = SphericalPoint.from_spherical(1.0, moved.phi, moved.theta)
        np.testing.assert_allclose(cluster.positions[0], [expected.x, expected.y, expected.z])

    def test_global_move_uphill_restores_energy(self, pot) -> None:
        cluster = make_dimer(R0)
        positions = cluster.positions.copy()
        engine = self.make_engine(cluster, pot, [1.0, 0.999], global_radial=0.5)

        assert engine.global_move(beta=100.0) is False
        np.testing.assert_array_equal(cluster.positions, positions)
        assert cluster.energy == pytest.approx(-6.325)
        assert engine.statistics.global_attempted == 1

    def test_global_move_downhill_accepted(self, pot) -> None:
        cluster = make_dimer(1.6)
        engine = self.make_engine(cluster, pot, [0.0, 0.999], global_radial=0.2)

        assert engine.global_move(beta=100.0) is True
        assert cluster.distance(0, 1) == pytest.approx(1.28)
        assert cluster.energy == pytest.approx(pot.total_energy(cluster.positions))

    def test_draw_order_per_iteration(self, pot) -> None:
        """Four draws per atom then two for the global move."""
        cluster = make_dimer(R0)
        draws = [0.5, 0.5, 0.5, 0.0] * 2 + [0.5, 0.0]
        engine = self.make_engine(cluster, pot, draws)
        engine.step()
        assert engine.rng.values == []
        assert engine.iteration == 1


class TestEngineLoop:
    """Tests for the annealing loop."""

    @pytest.fixture
    def cluster(self) -> Cluster:
        cluster = Cluster(5)
        cluster.randomize_on_sphere(1.0, np.random.default_rng(1))
        return cluster

    def test_run_counts(self, cluster) -> None:
        observer = EnergyObserver(interval=5)
        engine = MonteCarloEngine(
            cluster=cluster,
            potential=BrennerPotential(),
            schedule=AnnealingSchedule(1.0, 100.0, 2.0, 20),
            rng=np.random.default_rng(0),
            observers=[observer],
        )
        engine.run()
        assert engine.is_finished
        assert engine.statistics.local_attempted == 20 * 5
        assert engine.statistics.global_attempted == 20
        assert observer.iterations == [0, 5, 10, 15]
        assert observer.betas[0] == 1.0

    def test_cached_energy_fresh_after_step(self, cluster) -> None:
        pot = BrennerPotential()
        engine = MonteCarloEngine(
            cluster, pot, AnnealingSchedule(1.0, 10.0, 2.0, 5), rng=np.random.default_rng(2)
        )
        for _ in range(5):
            engine.step()
            assert cluster.energy == pytest.approx(pot.total_energy(cluster.positions))

    def test_step_after_finish(self, cluster) -> None:
        engine = MonteCarloEngine(
            cluster, BrennerPotential(), AnnealingSchedule.isothermal(1.0, 1),
            rng=np.random.default_rng(0),
        )
        engine.run()
        with pytest.raises(RuntimeError, match="already finished"):
            engine.step()

    def test_partial_run_and_reset(self, cluster) -> None:
        engine = MonteCarloEngine(
            cluster, BrennerPotential(), AnnealingSchedule.isothermal(1.0, 10),
            rng=np.random.default_rng(0),
        )
        engine.run(num_iterations=4)
        assert engine.iteration == 4
        assert not engine.is_finished
        engine.reset()
        assert engine.iteration == 0
        assert engine.statistics.global_attempted == 0

    def test_same_seed_same_run(self) -> None:
        results = []
        for _ in range(2):
            cluster = Cluster(4)
            rng = np.random.default_rng(123)
            cluster.randomize_on_sphere(1.0, rng)
            engine = MonteCarloEngine(
                cluster, BrennerPotential(), AnnealingSchedule(1.0, 50.0, 2.0, 30), rng=rng
            )
            engine.run()
            results.append((cluster.positions.copy(), cluster.energy))
        np.testing.assert_array_equal(results[0][0], results[1][0])
        assert results[0][1] == results[1][1]

    def test_isothermal_dimer_settles_at_r0(self) -> None:
        """At high beta a stretched dimer relaxes to the pair minimum."""
        cluster = Cluster.from_points([
            SphericalPoint.from_spherical(0.75, 0.5, 1.0),
            SphericalPoint.from_spherical(0.75, 0.5 + math.pi, math.pi - 1.0),
        ])
        assert cluster.distance(0, 1) == pytest.approx(1.5)

        trajectory = TrajectoryObserver(interval=1)
        engine = MonteCarloEngine(
            cluster,
            BrennerPotential(),
            AnnealingSchedule.isothermal(100.0, 2000),
            rng=np.random.default_rng(2024),
            observers=[trajectory],
        )
        engine.run()

        assert abs(cluster.distance(0, 1) - R0) < 0.08
        tail = [
            np.linalg.norm(frame["positions"][0] - frame["positions"][1])
            for frame in trajectory.frames[1000:]
        ]
        assert abs(np.mean(tail) - R0) < 0.03
