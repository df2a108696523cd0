"""
Integration tests: verify that the direct service path and the FastAPI
path produce consistent outputs for the same inputs.
"""
import pytest

from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.core.service import AnnealingService

# Skip API tests if fastapi/httpx are not installed.
fastapi = pytest.importorskip("fastapi")
httpx = pytest.importorskip("httpx")

from fastapi.testclient import TestClient
from pyfullerene.api.app import create_app


# ------------------------------------------------------------------ #
#  Fixtures
# ------------------------------------------------------------------ #

TRIANGLE = [
    [0.0, 0.0, 0.0],
    [1.4, 0.0, 0.0],
    [0.7, 1.2124355652982142, 0.0],
]

ANNEAL_CONFIG = {
    "n_atoms": 4,
    "n_iterations": 30,
    "sample_interval": 10,
    "initial_radius": 1.0,
    "seed": 3,
}


@pytest.fixture
def direct_service():
    return AnnealingService()


@pytest.fixture
def api_client():
    app = create_app()
    return TestClient(app)


# ------------------------------------------------------------------ #
#  Tests
# ------------------------------------------------------------------ #


class TestHealth:
    def test_health(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["version"]


class TestEnergyConsistency:
    """Energy evaluation must agree via both paths."""

    def test_energy_direct(self, direct_service):
        report = direct_service.evaluate(TRIANGLE)
        assert report.n_atoms == 3
        assert len(report.atom_energies) == 3

    def test_energy_api(self, api_client, direct_service):
        resp = api_client.post("/api/energy", json={"positions": TRIANGLE})
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert body["report"]["energy"] == pytest.approx(
            direct_service.evaluate(TRIANGLE).energy
        )

    def test_energy_rejects_bad_arity(self, api_client):
        resp = api_client.post("/api/energy", json={"positions": [[0.0, 0.0]]})
        assert resp.status_code == 422

    def test_energy_rejects_empty(self, api_client):
        resp = api_client.post("/api/energy", json={"positions": []})
        assert resp.status_code == 422

    def test_energy_rejects_unknown_parameter(self, api_client):
        resp = api_client.post(
            "/api/energy", json={"positions": TRIANGLE, "potential": {"sigma": 1.0}}
        )
        assert resp.status_code == 400
        assert "Unknown potential parameters" in resp.json()["detail"]


class TestAnnealConsistency:
    """Seeded annealing must give the same cluster via both paths."""

    def test_anneal_direct_vs_api(self, direct_service, api_client):
        direct = direct_service.run(AnnealingConfig.from_dict(ANNEAL_CONFIG))

        resp = api_client.post("/api/anneal", json=ANNEAL_CONFIG)
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert body["result"]["energy"] == pytest.approx(direct.energy)
        assert body["result"]["iterations"] == direct.iterations

    def test_xyz_after_anneal(self, api_client):
        api_client.post("/api/anneal", json=ANNEAL_CONFIG)
        resp = api_client.get("/api/xyz")
        assert resp.status_code == 200
        assert resp.json()["xyz"].splitlines()[0] == "4"

    def test_anneal_rejects_inverted_betas(self, api_client):
        resp = api_client.post(
            "/api/anneal", json={**ANNEAL_CONFIG, "beta_min": 10.0, "beta_max": 1.0}
        )
        assert resp.status_code == 422

    def test_anneal_rejects_empty_positions(self, api_client):
        resp = api_client.post("/api/anneal", json={**ANNEAL_CONFIG, "positions": []})
        assert resp.status_code == 422

    def test_anneal_rejects_bad_moves(self, api_client):
        resp = api_client.post("/api/anneal", json={**ANNEAL_CONFIG, "moves": {"radial": 2.0}})
        assert resp.status_code == 400

    def test_stop(self, api_client):
        resp = api_client.post("/api/stop")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}


class TestScanConsistency:
    """Size scans through the API."""

    def test_scan(self, api_client):
        resp = api_client.post(
            "/api/scan",
            json={"n_min": 3, "n_max": 4, "n_iterations": 10, "initial_radius": 1.0, "seed": 1},
        )
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert result["sizes"] == [3, 4]
        assert len(result["energies_per_atom"]) == 2

    def test_scan_inverted_range(self, api_client):
        resp = api_client.post("/api/scan", json={"n_min": 5, "n_max": 3})
        assert resp.status_code == 422


class TestSharedService:
    """Every request to one app works on the service it was created with."""

    def test_anneal_lands_in_injected_service(self, direct_service):
        client = TestClient(create_app(direct_service))
        assert client.get("/health").json()["running"] is False

        resp = client.post("/api/anneal", json=ANNEAL_CONFIG)
        assert resp.status_code == 200
        assert direct_service.has_cluster
        assert direct_service.cluster.energy == pytest.approx(resp.json()["result"]["energy"])

    def test_apps_do_not_share_state(self):
        first = TestClient(create_app())
        second = TestClient(create_app())
        first.post("/api/anneal", json=ANNEAL_CONFIG)
        assert first.get("/api/xyz").status_code == 200
        assert second.get("/api/xyz").status_code == 400
