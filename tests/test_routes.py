import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_parse_transcript_with_markers(client):
    """Segments come back with labels and the active index for the playback position"""
    response = client.post("/api/transcript/parse", json={
        "sourceKey": "video-1",
        "transcript": "__RAW__\r\n[0:05] Hello\n[1:00:10] World",
        "currentTimeSec": 7,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["format"] == "markers"
    assert data["transcript"] == "[0:05] Hello\n[1:00:10] World"
    assert data["activeIndex"] == 0
    assert [s["id"] for s in data["segments"]] == ["video-1-0", "video-1-1"]
    assert [s["startLabel"] for s in data["segments"]] == ["00:05", "1:00:10"]
    assert data["segments"][0]["endSec"] == 3610
    assert data["segments"][1]["endSec"] is None


def test_parse_transcript_with_duration(client):
    response = client.post("/api/transcript/parse", json={
        "sourceKey": "topic",
        "transcript": "Hello there. How are you?",
        "durationSec": 10,
    })

    data = response.json()
    assert data["format"] == "estimated"
    assert data["activeIndex"] is None
    assert data["segments"][-1]["endSec"] == 10


def test_parse_empty_transcript(client):
    response = client.post("/api/transcript/parse", json={
        "sourceKey": "video-2",
        "transcript": "   ",
    })

    assert response.status_code == 200
    assert response.json()["format"] == "empty"
    assert response.json()["segments"] == []


def test_parse_rejects_negative_duration(client):
    response = client.post("/api/transcript/parse", json={
        "sourceKey": "video-3",
        "transcript": "text",
        "durationSec": -1,
    })

    assert response.status_code == 422


def test_parse_requires_body(client):
    response = client.post("/api/transcript/parse")

    assert response.status_code == 422


def test_check_answer(client):
    response = client.post("/api/listen-type/check", json={
        "user": "the cat sat",
        "answer": "The big cat sat.",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["correct"] is False
    assert data["normalizedAnswer"] == "the big cat sat"
    assert data["answerWordCount"] == 4
    assert [t["type"] for t in data["tokens"]] == [
        "delete", "insert", "insert", "equal", "delete", "insert",
    ]


def test_check_correct_answer(client):
    response = client.post("/api/listen-type/check", json={
        "user": "cafe, s'il vous plait",
        "answer": "Café, s'il vous plaît!",
    })

    assert response.json()["correct"] is True


def test_check_rejects_oversized_input(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_COMPARE_WORDS", 3)

    response = client.post("/api/listen-type/check", json={
        "user": "one two three four",
        "answer": "one",
    })

    assert response.status_code == 413


def test_check_batch(client):
    response = client.post("/api/listen-type/check-batch", json={
        "items": [
            {"user": "Hello world", "answer": "hello, world!"},
            {"user": "good bye", "answer": "goodbye"},
        ],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["correctCount"] == 1
    assert data["total"] == 2
    assert [r["status"] for r in data["results"]] == ["correct", "incorrect"]
    assert [r["index"] for r in data["results"]] == [0, 1]


def test_check_batch_rejects_too_many_items(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_BATCH_ITEMS", 1)

    response = client.post("/api/listen-type/check-batch", json={
        "items": [{"user": "a", "answer": "a"}, {"user": "b", "answer": "b"}],
    })

    assert response.status_code == 413


def test_normalize_route(client):
    response = client.post("/api/listen-type/normalize", json={"text": "Ça va?"})

    assert response.json() == {"normalized": "ca va"}


@pytest.mark.parametrize("duration", ["Infinity", "-Infinity", "NaN"])
def test_parse_rejects_non_finite_duration(client, duration):
    body = '{"sourceKey": "video-4", "transcript": "Hello. Bye.", "durationSec": %s}' % duration

    response = client.post(
        "/api/transcript/parse",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422


def test_check_uses_tolerant_equality(client):
    response = client.post("/api/listen-type/check", json={
        "user": "IT'S fine",
        "answer": "it's fine!",
    })

    data = response.json()
    assert data["correct"] is True
    assert data["normalizedUser"] == data["normalizedAnswer"] == "it's fine"
