"""
Tests for the LeadView FastAPI service (via TestClient).

Covers:
- Health probe and request id header
- Analysis modal HTML / JSON for the demo leads
- Error pages for unknown leads and unconfigured analysis types
- Lead upsert, layouts, fragments and tier endpoints
"""

import pytest
from fastapi.testclient import TestClient

from service.main import app, modal_builder
from service.store import LeadStore
from leadview import extensions


@pytest.fixture(scope="class")
def client():
    with TestClient(app) as client:
        yield client


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["layouts_loaded"] is True
        assert data["checks"]["extensions_drained"] is True
        assert "X-Request-ID" in response.headers

    def test_global_queue_closed_after_startup(self):
        assert extensions.extension_queue.drained
        assert "personalityOverview" in modal_builder.registry


class TestAnalysisHtml:

    def test_light_demo(self, client):
        response = client.get("/leads/demo-light/analysis")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Light Analysis Complete" in response.text
        assert 'role="tablist"' not in response.text

    def test_deep_demo_has_tabs(self, client):
        response = client.get("/leads/demo-deep/analysis")
        assert response.status_code == 200
        assert 'role="tablist"' in response.text
        assert "Mia Torres" in response.text

    def test_unknown_lead(self, client):
        response = client.get("/leads/nope/analysis")
        assert response.status_code == 404
        assert "LV_LEAD_NOT_FOUND" in response.text
        assert 'href="/leads/nope/analysis"' in response.text

    def test_unconfigured_analysis_type(self, client):
        client.post("/leads", json={
            "lead_id": "odd-type",
            "username": "odd",
            "runs": [{"run_id": "r", "analysis_type": "quantum", "created_at": "2026-01-01"}],
        })
        response = client.get("/leads/odd-type/analysis")
        assert response.status_code == 500
        assert "LV_LAYOUT_NOT_FOUND" in response.text
        assert "Retry" in response.text


class TestAnalysisJson:

    def test_xray_demo(self, client):
        response = client.get("/leads/demo-xray/analysis/json")
        assert response.status_code == 200
        data = response.json()
        assert data["analysis_type"] == "xray"
        assert data["is_high_tier_score"] is True
        assert data["payload_source"] == "run_payload"
        assert "commercialIntelligence" in data["rendered"]
        assert data["tabs"] == ["analysis", "personality"]
        assert data["tier"]["label"] == "Excellent"

    def test_latest_run_is_used(self, client):
        data = client.get("/leads/demo-deep/analysis/json").json()
        assert data["analysis_type"] == "deep"
        assert data["score"] == 78
        assert "deepSummary" in data["rendered"]
        assert "personalityOverview" in data["rendered"]

    def test_legacy_shape(self, client):
        data = client.get("/leads/demo-legacy/analysis/json").json()
        assert data["payload_source"] == "deep_payload"
        assert "deepSummary" in data["rendered"]

    def test_malformed_run_still_renders(self, client):
        client.post("/leads", json={
            "lead_id": "messy",
            "username": "messy",
            "runs": [{
                "run_id": "r",
                "analysis_type": "xray",
                "overall_score": "92",
                "payloads": ["oops"],
                "created_at": "2026-01-01",
            }],
        })
        response = client.get("/leads/messy/analysis/json")
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 92.0
        assert data["is_high_tier_score"] is True

    def test_unknown_lead(self, client):
        response = client.get("/leads/nope/analysis/json")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "LV_LEAD_NOT_FOUND"


class TestLeadsAndConfig:

    def test_upsert_and_list(self, client):
        response = client.post("/leads", json={"lead_id": "new-lead", "username": "fresh"})
        assert response.status_code == 201
        leads = {lead["lead_id"]: lead for lead in client.get("/leads").json()}
        assert leads["new-lead"]["analysis_type"] == "light"
        assert "demo-xray" in leads

    def test_upsert_requires_username(self, client):
        response = client.post("/leads", json={"lead_id": "x"})
        assert response.status_code == 422

    def test_layouts(self, client):
        data = client.get("/layouts").json()
        assert set(data) == {"light", "deep", "xray"}
        assert data["deep"]["missing_fragments"] == []
        assert data["light"]["layout"]["has_tabs"] is False

    def test_fragments(self, client):
        data = client.get("/fragments").json()
        assert data["count"] == len(data["fragments"])
        assert "heroHeader" in data["fragments"]

    @pytest.mark.parametrize("score,label", [(-10, "Bad"), (45, "Medium"), (150, "Excellent")])
    def test_tiers(self, client, score, label):
        data = client.get(f"/tiers/{score}").json()
        assert data["label"] == label
        assert 0 <= data["score"] <= 100


class TestLeadStore:

    def test_eviction(self):
        store = LeadStore(max_leads=2)
        for lead_id in ("a", "b", "c"):
            store.put({"lead_id": lead_id, "username": lead_id})
        assert "a" not in store
        assert len(store) == 2

    def test_put_requires_id(self):
        with pytest.raises(ValueError):
            LeadStore().put({"username": "x"})
