import json

import pytest
from fastapi.testclient import TestClient

from main import app
from core.domain import LandmarkSet


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def to_payload(frame: LandmarkSet):
    return [
        {"x": lm.x, "y": lm.y, "visibility": lm.visibility} if lm is not None else None
        for lm in frame.landmarks
    ]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["websocket"] == "/ws/session"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert set(body["exercises"]) == {"squat", "pushup"}


def test_list_exercises(client):
    response = client.get("/api/exercises")
    assert response.status_code == 200
    squat = next(p for p in response.json() if p["id"] == "squat")
    assert squat["down_angle"] == 100.0
    assert squat["up_angle"] == 160.0
    assert squat["fault_angle"] == 70.0
    assert 25 in squat["required_joints"]


def test_unknown_exercise_is_404(client):
    assert client.get("/api/exercises/lunge").status_code == 404


def test_classify(client, landmarks):
    response = client.post("/api/analysis/classify", json={
        "exercise": "squat",
        "landmarks": to_payload(landmarks(knee_angle=65.0)),
    })
    assert response.status_code == 200
    body = response.json()
    assert body["recognized"]
    assert body["classification"]["phase"] == "down"
    assert body["classification"]["fault_flags"] == ["deep_squat"]
    assert body["feedback"]["severity"] == "warning"
    assert {r["joint"] for r in body["classification"]["readouts"]} == {"left_knee", "right_knee"}


def test_classify_without_pose(client):
    response = client.post("/api/analysis/classify", json={"exercise": "pushup", "landmarks": None})
    assert response.status_code == 200
    assert response.json()["recognized"] is False


def test_classify_unknown_exercise(client, landmarks):
    response = client.post("/api/analysis/classify", json={
        "exercise": "lunge",
        "landmarks": to_payload(landmarks()),
    })
    assert response.status_code == 404


def test_classify_rejects_non_finite_coordinates(client, landmarks):
    points = to_payload(landmarks(knee_angle=90.0))
    points[25] = {"x": float("nan"), "y": 0.7}
    points[26] = {"x": 0.6, "y": float("inf")}
    response = client.post(
        "/api/analysis/classify",
        content=json.dumps({"exercise": "squat", "landmarks": points}),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


class TestWebSocketSession:

    def send(self, ws, msg_type, data=None):
        ws.send_json({"type": msg_type, "data": data or {}, "timestamp": 0})
        return ws.receive_json()

    def test_squat_session(self, client, landmarks):
        with client.websocket_connect("/ws/session") as ws:
            ready = ws.receive_json()
            assert ready["type"] == "session_ready"
            assert ready["data"]["running"] is False

            started = self.send(ws, "start_session", {"exercise": "squat"})
            assert started["type"] == "session_started"
            assert started["data"]["rep_count"] == 0

            results = [
                self.send(ws, "frame", {"landmarks": to_payload(landmarks(knee_angle=a)), "frame_number": i})
                for i, a in enumerate((170.0, 90.0, 165.0))
            ]
            assert all(r["type"] == "feedback" for r in results)
            assert [r["data"]["phase"] for r in results] == ["up", "down", "up"]
            assert results[1]["data"]["phase_label"] == "Down"
            assert [r["data"]["rep_count"] for r in results] == [0, 0, 1]
            assert results[2]["data"]["feedback"]["severity"] == "good"
            assert results[2]["data"]["frame_number"] == 2

            missing = self.send(ws, "frame", {"landmarks": None})
            assert missing["data"]["classification"] is None
            assert missing["data"]["rep_count"] == 1

            stopped = self.send(ws, "stop_session")
            assert stopped["type"] == "session_stopped"
            assert stopped["data"]["rep_count"] == 1

            ended = self.send(ws, "end_session")
            assert ended["type"] == "session_ended"

    def test_errors_keep_connection_open(self, client):
        with client.websocket_connect("/ws/session") as ws:
            ws.receive_json()

            error = self.send(ws, "start_session", {"exercise": "burpee"})
            assert error["type"] == "error"

            error = self.send(ws, "dance")
            assert error["type"] == "error"

            error = self.send(ws, "start_session", {})
            assert error["type"] == "error"

            selected = self.send(ws, "select_exercise", {"exercise": "pushup"})
            assert selected["type"] == "exercise_selected"
            assert selected["data"]["exercise"] == "pushup"

    def test_malformed_messages_keep_session(self, client, landmarks):
        with client.websocket_connect("/ws/session") as ws:
            ws.receive_json()

            ws.send_json({"type": "frame", "data": [1, 2]})
            assert ws.receive_json()["type"] == "error"

            ws.send_json([1])
            assert ws.receive_json()["type"] == "error"

            ws.send_json({"type": "start_session", "data": "squat"})
            assert ws.receive_json()["type"] == "error"

            started = self.send(ws, "start_session", {"exercise": "squat"})
            assert started["type"] == "session_started"

            down = self.send(ws, "frame", {"landmarks": to_payload(landmarks(knee_angle=90.0))})
            assert down["data"]["phase"] == "down"

    def test_non_finite_frame_leaves_state_untouched(self, client, landmarks):
        with client.websocket_connect("/ws/session") as ws:
            ws.receive_json()
            self.send(ws, "start_session", {"exercise": "squat"})
            self.send(ws, "frame", {"landmarks": to_payload(landmarks(knee_angle=90.0))})

            points = to_payload(landmarks(knee_angle=170.0))
            points[27] = {"x": float("nan"), "y": 0.9}
            ws.send_text(json.dumps({"type": "frame", "data": {"landmarks": points}}))
            assert ws.receive_json()["type"] == "error"

            stopped = self.send(ws, "stop_session")
            assert stopped["data"]["rep_count"] == 0
            assert stopped["data"]["current_phase"] == "down"
