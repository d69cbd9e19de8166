"""
Integration tests for game routes (/api/*).

Covers:
- /api/state and /api/effects
- /api/proximity (present, re-trigger, unknown id)
- /api/answer (correct / wrong / game-over / stale)
- /api/move, /api/tick
- /api/abandon, /api/restart, /api/start
- /api/overlay and /api/overlay/close
"""


def _challenge_ids(client):
    return [c["id"] for c in client.get("/api/state").json()["session"]["challenges"]]


def _present(client, object_id):
    resp = client.post("/api/proximity", json={"object_id": object_id})
    assert resp.status_code == 200
    return resp.json()["overlay"]


def _region(overlay, correct: bool):
    # The test bank always marks the first candidate correct.
    return overlay["regions"][0 if correct else 1]["id"]


class TestState:
    def test_initial_state(self, client):
        data = client.get("/api/state").json()
        assert data["phase"] == "Playing"
        assert data["session"]["score"] == 0
        assert data["session"]["lives"] == 2
        assert len(data["session"]["challenges"]) == 2
        assert len(data["scene"]["visible"]) == 2
        assert data["host"]["can_move"] is True
        assert data["scene"]["score_text"] == "Score: 0"
        assert data["scene"]["lives_text"] == "Lives: 2"

    def test_state_never_exposes_correct_answer(self, client):
        object_id = _challenge_ids(client)[0]
        _present(client, object_id)
        text = client.get("/api/state").text
        assert "correct_answer" not in text


class TestProximity:
    def test_presents_overlay(self, client):
        overlay = _present(client, _challenge_ids(client)[0])
        assert overlay["prompt"] == "Question 1?"
        assert [r["text"] for r in overlay["regions"]] == [
            "answer 1-0", "answer 1-1", "answer 1-2", "answer 1-3",
        ]

    def test_second_object_ignored_while_active(self, client):
        first, second = _challenge_ids(client)
        _present(client, first)
        resp = client.post("/api/proximity", json={"object_id": second})
        assert resp.json() == {"presented": False, "overlay": None}
        assert client.get("/api/state").json()["session"]["active_challenge"] == first

    def test_unknown_object_ignored(self, client):
        resp = client.post("/api/proximity", json={"object_id": "challenge-0"})
        assert resp.status_code == 200
        assert resp.json()["presented"] is False

    def test_empty_object_id_rejected(self, client):
        resp = client.post("/api/proximity", json={"object_id": ""})
        assert resp.status_code == 422


class TestAnswer:
    def test_correct_answer(self, client):
        overlay = _present(client, _challenge_ids(client)[0])
        resp = client.post("/api/answer", json={"region_id": _region(overlay, True)})
        assert resp.json() == {"outcome": "correct", "phase": "Playing", "score": 10, "lives": 2}
        effects = client.get("/api/effects").json()["effects"]
        assert effects == [{"type": "score", "points": 10, "score": 10}]

    def test_wrong_answer(self, client):
        overlay = _present(client, _challenge_ids(client)[0])
        resp = client.post("/api/answer", json={"region_id": _region(overlay, False)})
        assert resp.json()["outcome"] == "wrong"
        assert resp.json()["lives"] == 1

    def test_stale_region_ignored(self, client):
        first, second = _challenge_ids(client)
        overlay = _present(client, first)
        stale = _region(overlay, True)
        client.post("/api/answer", json={"region_id": stale})
        _present(client, second)
        resp = client.post("/api/answer", json={"region_id": stale})
        assert resp.json()["outcome"] == "ignored"
        assert resp.json()["score"] == 10

    def test_game_over_on_last_life(self, client):
        first, second = _challenge_ids(client)
        overlay = _present(client, first)
        client.post("/api/answer", json={"region_id": _region(overlay, False)})
        overlay = _present(client, second)
        resp = client.post("/api/answer", json={"region_id": _region(overlay, False)})
        body = resp.json()
        assert body["outcome"] == "game_over"
        assert body["phase"] == "Terminal"
        assert body["lives"] == 1
        state = client.get("/api/state").json()
        assert state["payload"] == {"score": 0}
        assert state["scene"]["visible"] == []


class TestTick:
    def test_regeneration_after_delay(self, client):
        for object_id in _challenge_ids(client):
            overlay = _present(client, object_id)
            client.post("/api/answer", json={"region_id": _region(overlay, True)})
        old_ids = _challenge_ids(client)
        assert client.get("/api/state").json()["session"]["remaining"] == 0

        client.post("/api/tick", json={"elapsed_ms": 1000})
        state = client.get("/api/state").json()
        assert state["session"]["remaining"] == 2
        assert not set(_challenge_ids(client)) & set(old_ids)

    def test_negative_elapsed_rejected(self, client):
        assert client.post("/api/tick", json={"elapsed_ms": -1}).status_code == 422


class TestMove:
    def test_move_then_tick(self, client):
        resp = client.post("/api/move", json={"direction": "down"})
        assert resp.json()["direction"] == "down"
        client.post("/api/tick", json={"elapsed_ms": 1000})
        assert client.get("/api/state").json()["player"]["position"] == [200.0, 400.0]

    def test_invalid_direction_rejected(self, client):
        assert client.post("/api/move", json={"direction": "sideways"}).status_code == 422


class TestLifecycle:
    def test_abandon_then_restart(self, client):
        overlay = _present(client, _challenge_ids(client)[0])
        client.post("/api/answer", json={"region_id": _region(overlay, True)})

        resp = client.post("/api/abandon")
        assert resp.json() == {"ended": True, "phase": "Terminal", "payload": {"score": 10}}
        assert client.post("/api/abandon").json()["ended"] is False

        resp = client.post("/api/restart")
        assert resp.status_code == 200
        assert resp.json()["phase"] == "Playing"
        assert resp.json()["session"]["score"] == 0
        assert resp.json()["session"]["lives"] == 2
        assert resp.json()["scene"]["score_text"] == "Score: 0"

    def test_restart_while_playing_conflicts(self, client):
        resp = client.post("/api/restart")
        assert resp.status_code == 409
        assert "not over" in resp.json()["detail"]

    def test_start_outside_menu_conflicts(self, client):
        assert client.post("/api/start").status_code == 409


class TestOverlay:
    def test_request_and_close(self, client, game_app):
        resp = client.post("/api/overlay")
        assert resp.json() == {"requested": True, "dialog_open": True}
        client.post("/api/overlay")
        assert game_app.state.bridge.dialogs_opened == 1
        assert client.post("/api/overlay/close").json() == {"dialog_open": False}

    def test_not_requested_after_game_ends(self, client):
        client.post("/api/abandon")
        assert client.post("/api/overlay").json()["requested"] is False
