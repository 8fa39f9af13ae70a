"""
Tests for latex_quiz.server.api_server

Sessions use a ManualScheduler so the reveal delay is driven by the test.
"""

import random

import pytest
from fastapi.testclient import TestClient

from latex_quiz.constants.network_constants import SESSION_COOKIE_NAME
from latex_quiz.core.scheduler import ManualScheduler
from latex_quiz.server.api_server import create_api_app


@pytest.fixture
def client(mixed_store, scheduler):
    app = create_api_app(
        mixed_store,
        scheduler_factory=lambda: scheduler,
        rng_factory=lambda: random.Random(99),
    )
    with TestClient(app) as test_client:
        yield test_client


def test_player_page_is_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "LaTeX Symbol Quiz" in response.text
    assert 'id="answer"' in response.text


def test_translations_endpoint(client):
    assert client.get("/translations/ja").json()["submit"] == "送信"
    assert client.get("/translations/xx").status_code == 404


def test_difficulties_endpoint_reports_counts(client):
    assert client.get("/difficulties").json() == {"easy": 12, "medium": 4, "hard": 1}


def test_state_creates_session_cookie(client):
    response = client.get("/state")

    assert response.status_code == 200
    assert SESSION_COOKIE_NAME in response.cookies
    assert response.json()["state"] == "idle"


def test_session_persists_between_requests(client):
    client.post("/start", json={"difficulty": "medium"})

    state = client.get("/state").json()

    assert state["state"] == "in_progress"
    assert state["total"] == 4
    assert state["question_html"].startswith("<math")
    assert state["invalid_markup"] is False


def test_separate_clients_get_separate_sessions(client):
    client.post("/start", json={"difficulty": "easy"})

    with TestClient(client.app) as other:
        assert other.get("/state").json()["state"] == "idle"


def test_input_is_sanitized(client):
    client.post("/start", json={"difficulty": "easy"})

    state = client.post("/input", json={"text": "\\al pha"}).json()

    assert state["user_input"] == "alpha"


def test_player_page_sanitizes_locally_and_ignores_stale_replies(client):
    page = client.get("/").text

    assert "function sanitizeAnswer(text)" in page
    assert "replace(/\\\\/g, '').replace(/\\s+/g, '')" in page
    assert "api('/input', { text: sent })" in page
    assert "if (input.value === sent && snapshot.user_input !== sent)" in page


def test_locally_sanitized_input_is_accepted_unchanged(client):
    client.post("/start", json={"difficulty": "easy"})

    state = client.post("/input", json={"text": "alpha"}).json()

    assert state["user_input"] == "alpha"


def test_submit_reveals_and_advances(client, scheduler):
    client.post("/start", json={"difficulty": "hard"})

    revealed = client.post("/submit", json={"text": "xyz"}).json()

    assert revealed["state"] == "revealing"
    assert revealed["outcome"] == "incorrect"
    assert revealed["revealed_answers"] == ["cdot"]

    scheduler.advance(2000)
    finished = client.get("/state").json()

    assert finished["finished"] is True
    assert finished["score"] == 0
    assert finished["tier"] == "keep_trying"


def test_second_submit_during_reveal_is_ignored(client):
    client.post("/start", json={"difficulty": "hard"})
    client.post("/submit", json={"text": "cdot"})

    again = client.post("/submit", json={"text": "cdot"}).json()

    assert again["score"] == 1
    assert again["state"] == "revealing"


def test_invalid_transitions_map_to_http_errors(client):
    assert client.post("/submit", json={"text": "x"}).status_code == 409
    assert client.post("/start", json={"difficulty": "expert"}).status_code == 422

    client.post("/start", json={"difficulty": "easy"})
    assert client.post("/start", json={"difficulty": "easy"}).status_code == 409


def test_restart_resets_session(client, scheduler):
    client.post("/start", json={"difficulty": "easy"})
    client.post("/submit", json={"text": "anything"})

    state = client.post("/restart", json={}).json()

    assert state["state"] == "idle"
    assert state["total"] == 0
    assert scheduler.run_all() == 0


def test_broken_markup_degrades_to_fallback(client, monkeypatch):
    from latex_quiz.core import latex_renderer

    def broken_convert(markup, display):
        raise ValueError("bad markup")

    monkeypatch.setattr(latex_renderer, "convert", broken_convert)
    client.post("/start", json={"difficulty": "hard"})

    state = client.get("/state").json()

    assert state["invalid_markup"] is True
    assert state["question_html"] == "Invalid LaTeX"
    assert client.post("/submit", json={"text": "cdot"}).json()["outcome"] == "correct"


def test_registry_evicts_oldest_sessions(mixed_store):
    from latex_quiz.server.session_registry import SessionRegistry

    registry = SessionRegistry(mixed_store, ManualScheduler, max_sessions=2)
    first_id, _ = registry.get_or_create(None)
    second_id, _ = registry.get_or_create(None)
    registry.get_or_create(first_id)
    third_id, _ = registry.get_or_create(None)

    assert len(registry) == 2
    assert first_id in registry
    assert second_id not in registry
    assert third_id in registry


def test_seeded_registry_sessions_draw_the_same_questions(mixed_store):
    from latex_quiz.core.models import Difficulty
    from latex_quiz.server.session_registry import SessionRegistry

    registry = SessionRegistry(
        mixed_store,
        ManualScheduler,
        rng_factory=lambda: random.Random(5),
        max_sessions=4,
    )
    _, first = registry.get_or_create(None)
    _, second = registry.get_or_create(None)

    first.start(Difficulty.EASY)
    second.start(Difficulty.EASY)

    assert first is not second
    assert first.active_questions == second.active_questions
