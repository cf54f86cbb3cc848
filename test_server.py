"""Tests for the HTTP surface."""

import json

import pytest
from fastapi.testclient import TestClient

from claim_predictor import ClaimLifecyclePredictor
from claim_predictor.agents import FALLBACK_BEHAVIOR
from conftest import FailingTextClient, FakeTextClient
from server import app, get_predictor


@pytest.fixture
def client_with():
    def build(text_client):
        predictor = ClaimLifecyclePredictor(text_client)
        app.dependency_overrides[get_predictor] = lambda: predictor
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_predict_returns_prediction(client_with):
    carrier_reply = json.dumps({"likelyStrategy": "Desk review.", "commonTactics": [], "timeline": "1 week"})
    client = client_with(FakeTextClient(carrier_reply, "The carrier will likely pay."))

    response = client.post(
        "/api/claims/CLM-42/predict",
        json={"orgId": "org_roofing", "stormImpact": {"hailSize": 2.5}, "hasVideo": True, "photoCount": 25},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["claimId"] == "CLM-42"
    prediction = body["prediction"]
    assert prediction["probabilityFull"] + prediction["probabilityPart"] + prediction["probabilityDeny"] == 100
    assert prediction["carrierBehavior"]["likelyStrategy"] == "Desk review."
    assert prediction["aiSummary"] == "The carrier will likely pay."
    assert len(prediction["successPath"]) == 6


def test_path_claim_id_wins_over_body(client_with):
    client = client_with(FakeTextClient())
    response = client.post("/api/claims/CLM-7/predict", json={"claimId": "other", "orgId": "org"})
    assert response.json()["claimId"] == "CLM-7"


def test_generation_outage_still_returns_prediction(client_with):
    client = client_with(FailingTextClient())

    response = client.post("/api/claims/CLM-1/predict", json={"orgId": "org_roofing"})

    assert response.status_code == 200
    prediction = response.json()["prediction"]
    assert prediction["carrierBehavior"] == FALLBACK_BEHAVIOR.to_dict()
    assert prediction["aiSummary"].startswith("Based on current data")


@pytest.mark.parametrize("payload", [
    {},
    {"orgId": "org", "photoCount": -2},
    {"orgId": "org", "stormImpact": {"hailSize": "large"}},
])
def test_invalid_input_is_rejected(client_with, payload):
    client = client_with(FakeTextClient())

    response = client.post("/api/claims/CLM-1/predict", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["error_type"] == "INVALID_PREDICTION_INPUT"


def test_healthz():
    assert TestClient(app).get("/healthz").json() == {"status": "ok"}
