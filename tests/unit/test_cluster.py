"""
Unit tests for the Cluster container and its proposals.
"""
import math

import numpy as np
import pytest

from pyfullerene.core import Cluster, SphericalPoint
from pyfullerene.potential import BrennerPotential


@pytest.fixture
def pot() -> BrennerPotential:
    return BrennerPotential()


@pytest.fixture
def dimer() -> Cluster:
    return Cluster.from_positions([[0.0, 0.0, 0.0], [1.315, 0.0, 0.0]])


class TestClusterCreation:
    """Tests for Cluster constructors."""

    def test_empty_cluster_at_origin(self) -> None:
        cluster = Cluster(4)
        assert cluster.n_atoms == 4
        assert len(cluster) == 4
        assert all(p == SphericalPoint.origin() for p in cluster)
        assert cluster.energy == 0.0
        np.testing.assert_array_equal(cluster.positions, np.zeros((4, 3)))

    def test_negative_size(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Cluster(-1)

    def test_from_positions(self) -> None:
        cluster = Cluster.from_positions([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
        assert cluster[1].r == pytest.approx(2.0)
        assert cluster[1].phi == pytest.approx(math.pi / 2)
        np.testing.assert_array_almost_equal(
            cluster.positions, [[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]
        )

    def test_from_positions_wrong_shape(self) -> None:
        with pytest.raises(ValueError, match="Positions must be"):
            Cluster.from_positions([[1.0, 2.0], [3.0, 4.0]])

    def test_from_positions_not_numeric(self) -> None:
        with pytest.raises(ValueError, match="numeric"):
            Cluster.from_positions([["a", "b", "c"]])

    def test_from_positions_non_finite(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            Cluster.from_positions([[0.0, 0.0, float("inf")]])

    def test_from_positions_empty(self) -> None:
        with pytest.raises(ValueError, match="at least one atom"):
            Cluster.from_positions([])
        with pytest.raises(ValueError, match="at least one atom"):
            Cluster.from_positions(np.zeros((0, 3)))

    def test_positions_are_read_only(self, dimer: Cluster) -> None:
        with pytest.raises(ValueError):
            dimer.positions[1, 0] = 1.6
        assert dimer[1].x == pytest.approx(1.315)
        assert dimer.positions[1, 0] == pytest.approx(1.315)

    def test_from_points(self) -> None:
        points = [SphericalPoint.from_spherical(1.0, 0.5, 0.5)] * 3
        cluster = Cluster.from_points(points)
        assert cluster.points == points
        assert cluster.mean_radius() == pytest.approx(1.0)

    def test_randomize_on_sphere(self) -> None:
        cluster = Cluster(50)
        cluster.randomize_on_sphere(2.5, np.random.default_rng(0))
        radii = np.linalg.norm(cluster.positions, axis=1)
        np.testing.assert_allclose(radii, 2.5)
        assert all(0.0 <= p.phi <= 2.0 * math.pi for p in cluster)
        assert all(0.0 <= p.theta <= math.pi for p in cluster)

    def test_randomize_is_reproducible(self) -> None:
        a, b = Cluster(10), Cluster(10)
        a.randomize_on_sphere(1.0, np.random.default_rng(11))
        b.randomize_on_sphere(1.0, np.random.default_rng(11))
        np.testing.assert_array_equal(a.positions, b.positions)


class TestClusterProposal:
    """Tests for propose / commit / rollback."""

    def test_proposal_applies_immediately(self, dimer: Cluster) -> None:
        new = SphericalPoint.from_cartesian(0.0, 0.0, 1.0)
        proposal = dimer.propose({0: new})
        assert dimer[0] is new
        np.testing.assert_array_almost_equal(dimer.positions[0], [0.0, 0.0, 1.0])
        assert proposal.indices == [0]
        assert proposal.is_open

    def test_commit_keeps_change(self, dimer: Cluster) -> None:
        new = SphericalPoint.from_cartesian(0.0, 0.0, 1.0)
        proposal = dimer.propose({0: new})
        proposal.commit()
        assert dimer[0] is new
        assert not proposal.is_open

    def test_rollback_restores_points_and_energy(self, dimer: Cluster, pot) -> None:
        old_points = dimer.points
        old_positions = dimer.positions.copy()
        e_old = dimer.compute_energy(pot)

        proposal = dimer.propose({i: p.scaled(1.5) for i, p in enumerate(dimer)})
        dimer.compute_energy(pot)
        assert dimer.energy != pytest.approx(e_old)

        proposal.rollback()
        assert dimer.points == old_points
        np.testing.assert_array_equal(dimer.positions, old_positions)
        assert dimer.energy == e_old

    def test_close_twice(self, dimer: Cluster) -> None:
        proposal = dimer.propose({1: dimer[1].scaled(1.1)})
        proposal.commit()
        with pytest.raises(RuntimeError, match="already"):
            proposal.rollback()

    def test_bad_index(self, dimer: Cluster) -> None:
        with pytest.raises(IndexError):
            dimer.propose({2: SphericalPoint.origin()})


class TestClusterEnergy:
    """Tests for the cached energy."""

    def test_compute_energy_caches(self, dimer: Cluster, pot) -> None:
        e = dimer.compute_energy(pot)
        assert e == pytest.approx(-6.325)
        assert dimer.energy == e

    def test_cache_not_refreshed_on_mutation(self, dimer: Cluster, pot) -> None:
        e = dimer.compute_energy(pot)
        dimer.propose({1: SphericalPoint.from_cartesian(5.0, 0.0, 0.0)}).commit()
        assert dimer.energy == e
        assert dimer.compute_energy(pot) == 0.0

    def test_atom_energy(self, dimer: Cluster, pot) -> None:
        assert dimer.atom_energy(0, pot) == pytest.approx(-6.325)


class TestClusterDiagnostics:
    """Tests for distances, mean radius and the pair correlation histogram."""

    def test_distance(self, dimer: Cluster) -> None:
        assert dimer.distance(0, 1) == pytest.approx(1.315)

    def test_mean_radius(self) -> None:
        cluster = Cluster.from_positions([[1.0, 0.0, 0.0], [0.0, 0.0, -3.0]])
        assert cluster.mean_radius() == pytest.approx(2.0)
        assert Cluster(0).mean_radius() == 0.0

    def test_histogram_single_pair(self) -> None:
        a = 1.0
        cluster = Cluster.from_positions([[a, 0.0, 0.0], [0.0, a, 0.0]])
        hist = cluster.pair_correlation_histogram()
        dr = 2.5 * a / 100
        d = a * math.sqrt(2.0)

        assert hist.shape == (100,)
        assert hist[56] == pytest.approx(4.0 * a ** 2 / (4.0 * d * dr))
        assert np.count_nonzero(hist) == 1

    def test_histogram_scales_with_inverse_n_squared(self) -> None:
        """Four times as many √2 pairs at twice the N give the same bin value."""
        a = 1.0
        two = Cluster.from_positions([[a, 0.0, 0.0], [0.0, a, 0.0]])
        four = Cluster.from_positions(
            [[a, 0.0, 0.0], [0.0, a, 0.0], [-a, 0.0, 0.0], [0.0, -a, 0.0]]
        )
        hist_two = two.pair_correlation_histogram()
        hist_four = four.pair_correlation_histogram()
        assert hist_four[56] == pytest.approx(hist_two[56])

        dr = 2.5 * a / 100
        expected_total = (
            4.0 * (4.0 * a ** 2 / (16.0 * a * math.sqrt(2.0) * dr))
            + 2.0 * (4.0 * a ** 2 / (16.0 * 2.0 * a * dr))
        )
        assert hist_four.sum() == pytest.approx(expected_total)

    def test_histogram_drops_overflow(self) -> None:
        # mean radius 3.4 gives a range of 8.5; the far atom is out of range
        cluster = Cluster.from_positions(
            [[0.1, 0.0, 0.0], [-0.1, 0.0, 0.0], [10.0, 0.0, 0.0]]
        )
        hist = cluster.pair_correlation_histogram()
        assert np.flatnonzero(hist).tolist() == [2]

    def test_histogram_small_clusters(self) -> None:
        assert Cluster(1).pair_correlation_histogram().sum() == 0.0
        assert Cluster(3).pair_correlation_histogram().sum() == 0.0

    def test_histogram_bins(self) -> None:
        cluster = Cluster.from_positions([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        centres = cluster.pair_correlation_bins()
        assert centres.shape == (100,)
        assert centres[0] == pytest.approx(0.0125)
        assert centres[-1] == pytest.approx(2.5 - 0.0125)


class TestClusterMisc:
    """Tests for copy and printout."""

    def test_copy_is_independent(self, dimer: Cluster, pot) -> None:
        dimer.compute_energy(pot)
        clone = dimer.copy()
        assert clone.energy == dimer.energy
        clone.propose({0: SphericalPoint.from_cartesian(0.0, 1.0, 0.0)}).commit()
        assert dimer[0] == SphericalPoint.from_cartesian(0.0, 0.0, 0.0)

    def test_table(self, dimer: Cluster, pot) -> None:
        dimer.compute_energy(pot)
        lines = str(dimer).splitlines()
        assert lines[0].startswith("Cluster with 2 atoms, Energy:")
        assert "-6.325" in lines[0]
        assert len(lines) == 4

    def test_repr(self, dimer: Cluster) -> None:
        assert repr(dimer) == "Cluster(n_atoms=2, energy=0.000000)"
