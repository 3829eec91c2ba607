import pytest
from conftest import FakeSimilarityService
from fastapi.testclient import TestClient

from intent_analyzer.core.dependencies import get_analyzer, get_history, get_lexicon, get_similarity
from intent_analyzer.main import app
from intent_analyzer.modules.analysis import AnalysisHistory
from intent_analyzer.modules.lexicon import get_default_lexicon


@pytest.fixture
def service():
    return FakeSimilarityService()


@pytest.fixture
def client(service, make_analyzer):
    history = AnalysisHistory(max_size=10)
    analyzer = make_analyzer(service)
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    app.dependency_overrides[get_history] = lambda: history
    app.dependency_overrides[get_similarity] = lambda: service
    app.dependency_overrides[get_lexicon] = get_default_lexicon
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client, service):
    service.point_count = 42
    resp = client.get("/health/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["point_count"] == 42
    assert body["lexicon_version"] == get_default_lexicon().version


def test_health_degraded_when_index_unreachable(client, service):
    service.fail = True
    body = client.get("/health/").json()
    assert body["status"] == "degraded"
    assert body["point_count"] is None


def test_analyze(client):
    resp = client.post("/api/analyze", json={"sentence": "I want to create an objective"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["intent"] == {"status": "Clear", "value": "menu", "reply": "Your intent is clear."}
    assert body["final_analysis"] == "Your intent is clear to create on objective."
    assert body["proceed_button"] is True
    assert body["redirect_flag"] is False
    assert body["validation_logs"] == []


def test_analyze_help_redirect(client):
    body = client.post("/api/analyze", json={"sentence": "how do i create an objective"}).json()
    assert body["redirect_flag"] is True
    assert body["redirect_url"] == "/docs/objective-help.html"
    assert body["proceed_button"] is False


def test_analyze_rejects_empty_sentence(client):
    resp = client.post("/api/analyze", json={"sentence": "   "})
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "InputValidationError"


def test_analyze_rejects_oversized_sentence(client):
    resp = client.post("/api/analyze", json={"sentence": "a" * 501})
    assert resp.status_code == 400
    assert resp.json()["detail"]["details"]["max_length"] == 500


def test_logs_newest_first_and_clear(client):
    client.post("/api/analyze", json={"sentence": "I want to create an objective"})
    client.post("/api/analyze", json={"sentence": "asdf qwer"})

    body = client.get("/api/logs").json()
    assert body["count"] == 2
    assert body["logs"][0]["user_input"] == "asdf qwer"
    assert client.get("/api/logs", params={"limit": 1}).json()["count"] == 1

    assert client.delete("/api/logs").json() == {"success": True, "cleared": 2}
    assert client.get("/api/logs").json()["count"] == 0


def test_add_phrase(client, service):
    resp = client.post("/api/phrases", json={"category": "process", "text": "Quarterly Aim", "value": "objective"})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1_000_000, "category": "process", "text": "quarterly aim", "value": "objective"}
    assert service.upserts == [("process", "quarterly aim", "objective")]


def test_add_phrase_unknown_category(client):
    resp = client.post("/api/phrases", json={"category": "colour", "text": "red", "value": "red"})
    assert resp.status_code == 400


def test_add_phrase_unknown_value(client):
    resp = client.post("/api/phrases", json={"category": "action", "text": "spin up", "value": "launch"})
    assert resp.status_code == 400
    assert "create" in resp.json()["detail"]["details"]["values"]


def test_add_phrase_for_value_without_references(client, service):
    resp = client.post("/api/phrases", json={"category": "filter_value", "text": "third quarter", "value": "q3"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["details"] == {"value": "q3"}
    assert resp.json()["detail"]["timestamp"].endswith("+00:00")
    assert service.upserts == []


def test_add_filter_value_phrase(client, service):
    resp = client.post("/api/phrases", json={"category": "filter_value", "text": "so-so", "value": "medium"})
    assert resp.status_code == 200
    assert service.upserts == [("filter_value", "so-so", "medium")]
