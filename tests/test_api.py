"""Tests for the HTTP and WebSocket surface."""

import time

import httpx
import pytest
from fastapi.testclient import TestClient

from config.settings import ApiConfig, AppConfig, DebateDefaults, SystemConfig
from models.providers import CustomProvider
from web.api import create_app


def _answer(request: httpx.Request) -> httpx.Response:
    if b"SCORE: [number from 1-10]" in request.content:
        return httpx.Response(200, json={"content": "SCORE: 7\nCOMMENTS: Even match."})
    return httpx.Response(200, json={"content": "An argument worth hearing."})


@pytest.fixture
def client(tmp_path):
    api_config = ApiConfig(
        id="custom-config",
        name="Local model",
        provider="custom",
        model="local-model",
        api_key="super-secret",
        base_url="http://models.local/generate",
    )
    config = AppConfig(
        debate=DebateDefaults(max_rounds=2, max_words_per_turn=40, turn_delay_seconds=0),
        system=SystemConfig(database_path=str(tmp_path / "api.db")),
        api_configs={api_config.id: api_config},
    )

    with TestClient(create_app(config)) as test_client:
        provider = CustomProvider(
            api_config,
            config.system,
            client=httpx.AsyncClient(transport=httpx.MockTransport(_answer)),
        )
        test_client.app.state.debate_manager.model_manager.register_provider(api_config, provider)
        yield test_client


def _create_debate(client: TestClient) -> str:
    pro = client.post(
        "/api/participants",
        json={"name": "Advocate", "api_config_id": "custom-config", "stance": "pro"},
    ).json()
    con = client.post(
        "/api/participants",
        json={"name": "Skeptic", "api_config_id": "custom-config", "stance": "con"},
    ).json()
    judge = client.post(
        "/api/judges", json={"name": "Chief Judge", "api_config_id": "custom-config"}
    ).json()

    response = client.post(
        "/api/sessions",
        json={
            "topic": "Should cities ban cars?",
            "participant_ids": [pro["id"], con["id"]],
            "judge_ids": [judge["id"]],
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def _wait_for_status(client: TestClient, session_id: str, status: str) -> dict:
    deadline = time.monotonic() + 5
    while time.monotonic() < deadline:
        body = client.get(f"/api/sessions/{session_id}/status").json()
        if body["status"] == status:
            return body
        time.sleep(0.05)
    raise AssertionError(f"Session {session_id} never reached {status}")


def test_health_check(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["isAlive"] is True


def test_api_configs_are_redacted(client: TestClient) -> None:
    response = client.get("/api/api-configs")

    assert response.json() == [
        {
            "id": "custom-config",
            "name": "Local model",
            "provider": "custom",
            "model": "local-model",
            "base_url": "http://models.local/generate",
            "has_api_key": True,
            "is_active": True,
        }
    ]
    assert "super-secret" not in response.text


def test_judge_gets_default_criteria(client: TestClient) -> None:
    judge = client.post(
        "/api/judges", json={"name": "Chief Judge", "api_config_id": "custom-config"}
    ).json()

    assert judge["criteria"] == ["logic", "evidence", "persuasiveness"]


def test_unknown_references_are_rejected(client: TestClient) -> None:
    participant = client.post(
        "/api/participants",
        json={"name": "Ghost", "api_config_id": "nowhere", "stance": "pro"},
    )
    session = client.post(
        "/api/sessions", json={"topic": "Anything", "participant_ids": ["missing"]}
    )

    assert participant.status_code == 400
    assert session.status_code == 400


def test_session_defaults_and_state_errors(client: TestClient) -> None:
    session_id = _create_debate(client)

    session = client.get(f"/api/sessions/{session_id}").json()
    assert session["status"] == "created"
    assert session["max_rounds"] == 2
    assert session["max_words_per_turn"] == 40

    response = client.post(f"/api/sessions/{session_id}/pause")
    assert response.status_code == 400
    assert "Cannot pause a debate that is created" in response.json()["detail"]

    assert client.get("/api/sessions/missing/status").status_code == 404
    assert client.post("/api/sessions/missing/start").status_code == 404


def test_full_debate_over_http(client: TestClient) -> None:
    session_id = _create_debate(client)

    started = client.post(f"/api/sessions/{session_id}/start")
    assert started.status_code == 200
    assert started.json()["status"] == "running"

    status = _wait_for_status(client, session_id, "completed")
    assert (status["current_round"], status["is_running"]) == (2, False)

    messages = client.get(f"/api/sessions/{session_id}/messages").json()
    assert [(m["round"], m["turn"]) for m in messages] == [(1, 1), (1, 2), (2, 1), (2, 2)]

    scores = client.get(f"/api/sessions/{session_id}/scores").json()
    assert [s["score"] for s in scores] == [7, 7]

    result = client.get(f"/api/sessions/{session_id}/result").json()
    assert result["winner"] == "tie"
    assert result["summary"] == "Final result: TIE with a total score of 7 vs 7"

    assert client.post(f"/api/sessions/{session_id}/stop").status_code == 400

    export = client.get(f"/api/sessions/{session_id}/export")
    assert export.headers["content-type"].startswith("text/markdown")
    assert export.text.startswith("# Debate Report: Should cities ban cars?")
    assert "- **Winner**: TIE" in export.text


def test_websocket_subscription_protocol(client: TestClient) -> None:
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "subscribe", "session_id": "abc"})
        assert websocket.receive_json() == {"type": "subscribed", "session_id": "abc"}

        websocket.send_json({"type": "unsubscribe", "session_id": "abc"})
        assert websocket.receive_json() == {"type": "unsubscribed", "session_id": "abc"}

        websocket.send_json({"type": "dance"})
        assert websocket.receive_json()["type"] == "error"

        for bad_id in (["abc"], {"id": "abc"}, 7, ""):
            websocket.send_json({"type": "subscribe", "session_id": bad_id})
            assert websocket.receive_json() == {
                "type": "error",
                "message": "session_id must be a non-empty string",
            }

        # The socket is still usable afterwards
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_debate_websocket_sends_snapshot_and_events(client: TestClient) -> None:
    session_id = _create_debate(client)

    with client.websocket_connect(f"/ws/debate/{session_id}") as websocket:
        connected = websocket.receive_json()
        assert connected["type"] == "connected"
        assert connected["status"] == "created"

        client.post(f"/api/sessions/{session_id}/start")

        first = websocket.receive_json()
        assert first == {"type": "status_changed", "session_id": session_id, "status": "running"}

        seen = [first["type"]]
        while seen[-1] != "debate_completed":
            seen.append(websocket.receive_json()["type"])

    assert seen.count("turn_generated") == 4
