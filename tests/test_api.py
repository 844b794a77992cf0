"""
HTTP API tests.

Uses TestClient with the database dependency pointed at a per-test
in-memory store.
"""

from tests.conftest import TEST_EMAIL, TEST_PASSWORD

BLOCK = {
    "start": "2023-05-09T07:00:00Z",
    "end": "2023-05-09T15:30:00Z",
    "homeoffice": False,
    "pauses": [{"start": "2023-05-09T12:00:00Z", "end": "2023-05-09T12:30:00Z"}],
}


class TestAuth:
    def test_login(self, client):
        response = client.post("/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"

        headers = {"Authorization": f"Bearer {data['access_token']}"}
        assert client.get("/block", headers=headers).status_code == 200

    def test_login_wrong_password(self, client):
        response = client.post("/login", json={"email": TEST_EMAIL, "password": "nope"})
        assert response.status_code == 401

    def test_missing_token(self, client):
        assert client.get("/block").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/block", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401

    def test_refresh_fresh_token(self, client, auth_headers):
        response = client.post("/refresh", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "token still valid"


class TestBlockEndpoints:
    def test_add_and_get_block(self, client, auth_headers):
        created = client.post("/block", json=BLOCK, headers=auth_headers)
        assert created.status_code == 200
        body = created.json()
        assert body["id"] == 1
        assert body["pauses"] == [
            {"id": 1, "start": "2023-05-09T12:00:00Z", "end": "2023-05-09T12:30:00Z", "blockID": 1}
        ]

        fetched = client.get("/block/1", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json() == body

    def test_add_block_invalid_datetime(self, client, auth_headers):
        bad = dict(BLOCK, start="9 o'clock")
        response = client.post("/block", json=bad, headers=auth_headers)
        assert response.status_code == 400
        assert "invalid datetime" in response.json()["detail"]

    def test_get_missing_block(self, client, auth_headers):
        assert client.get("/block/9", headers=auth_headers).status_code == 404

    def test_update_block(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        payload = {"id": 1, "start": "2023-05-09T08:00:00Z", "end": "2023-05-09T16:00:00Z", "homeoffice": True}
        response = client.put("/block", json=payload, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"rows_affected": 1}

        block = client.get("/block/1", headers=auth_headers).json()
        assert block["homeoffice"] is True
        assert block["start"] == "2023-05-09T08:00:00Z"

    def test_update_missing_block(self, client, auth_headers):
        payload = {"id": 5, "start": "2023-05-09T08:00:00Z", "end": "2023-05-09T16:00:00Z"}
        assert client.put("/block", json=payload, headers=auth_headers).status_code == 404

    def test_single_field_updates(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        assert client.put("/block_start/1", json={"start": "2023-05-09T06:00:00Z"},
                          headers=auth_headers).status_code == 200
        assert client.put("/block_end/1", json={"end": "2023-05-09T18:00:00Z"},
                          headers=auth_headers).status_code == 200
        assert client.put("/block_homeoffice/1", json={"homeoffice": True},
                          headers=auth_headers).status_code == 200

        block = client.get("/block/1", headers=auth_headers).json()
        assert (block["start"], block["end"], block["homeoffice"]) == (
            "2023-05-09T06:00:00Z",
            "2023-05-09T18:00:00Z",
            True,
        )

    def test_single_field_update_rejects_bad_datetime(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        response = client.put("/block_start/1", json={"start": "2023-05-09"}, headers=auth_headers)
        assert response.status_code == 400

    def test_delete_block(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        assert client.delete("/block/1", headers=auth_headers).status_code == 200
        assert client.get("/block/1", headers=auth_headers).status_code == 404
        assert client.get("/pause/1", headers=auth_headers).status_code == 404
        assert client.delete("/block/1", headers=auth_headers).status_code == 404

    def test_range_queries(self, client, auth_headers):
        for day in ("08", "09", "10"):
            block = dict(BLOCK, start=f"2023-05-{day}T07:00:00Z", end=f"2023-05-{day}T15:00:00Z", pauses=[])
            client.post("/block", json=block, headers=auth_headers)

        def ids(params):
            response = client.get("/block", params=params, headers=auth_headers)
            assert response.status_code == 200
            return [b["id"] for b in response.json()]

        assert ids({}) == [1, 2, 3]
        assert ids({"start": "2023-05-09T00:00:00Z"}) == [2, 3]
        assert ids({"end": "2023-05-10T00:00:00Z"}) == [1, 2]
        assert ids({"start": "2023-05-09T00:00:00Z", "end": "2023-05-10T00:00:00Z"}) == [2]

    def test_range_query_rejects_bad_datetime(self, client, auth_headers):
        assert client.get("/block", params={"start": "monday"}, headers=auth_headers).status_code == 400

    def test_block_pauses(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        response = client.get("/block/1/pauses", headers=auth_headers)
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [1]


class TestPauseEndpoints:
    def test_add_pause(self, client, auth_headers):
        client.post("/block", json=dict(BLOCK, pauses=[]), headers=auth_headers)
        pause = {"start": "2023-05-09T10:00:00Z", "end": "2023-05-09T10:15:00Z", "blockID": 1}
        response = client.post("/pause", json=pause, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == dict(pause, id=1)

    def test_add_pause_to_missing_block(self, client, auth_headers):
        pause = {"start": "2023-05-09T10:00:00Z", "end": "2023-05-09T10:15:00Z", "blockID": 3}
        response = client.post("/pause", json=pause, headers=auth_headers)
        assert response.status_code == 400
        assert client.get("/pause/1", headers=auth_headers).status_code == 404

    def test_update_and_delete_pause(self, client, auth_headers):
        client.post("/block", json=BLOCK, headers=auth_headers)
        update = {"id": 1, "start": "2023-05-09T12:05:00Z", "end": "2023-05-09T12:35:00Z", "blockID": 1}
        assert client.put("/pause", json=update, headers=auth_headers).status_code == 200
        assert client.put("/pause_start/1", json={"start": "2023-05-09T12:10:00Z"},
                          headers=auth_headers).status_code == 200
        assert client.put("/pause_end/1", json={"end": "2023-05-09T12:40:00Z"},
                          headers=auth_headers).status_code == 200

        pause = client.get("/pause/1", headers=auth_headers).json()
        assert (pause["start"], pause["end"]) == ("2023-05-09T12:10:00Z", "2023-05-09T12:40:00Z")

        assert client.delete("/pause/1", headers=auth_headers).status_code == 200
        assert client.delete("/pause/1", headers=auth_headers).status_code == 404
        assert client.put("/pause_start/1", json={"start": "2023-05-09T12:10:00Z"},
                          headers=auth_headers).status_code == 404


class TestCurrentEndpoints:
    def test_session_flow(self, client, auth_headers):
        def current():
            return client.get("/current", headers=auth_headers).json()

        assert current() == {"currentBlockId": -1, "currentPauseId": -1}
        assert client.get("/block_current", headers=auth_headers).status_code == 404

        started = client.post("/current_block_start", params={"homeoffice": "true"}, headers=auth_headers)
        assert started.status_code == 200
        block_id = started.json()["id"]
        assert started.json()["homeoffice"] is True
        assert started.json()["end"] is None

        again = client.post("/current_block_start", params={"homeoffice": "false"}, headers=auth_headers)
        assert again.status_code == 400
        assert again.json()["detail"] == "block already active"

        pause = client.post("/current_pause_start", headers=auth_headers).json()
        assert current() == {"currentBlockId": block_id, "currentPauseId": pause["id"]}

        blocked = client.post("/current_block_end", headers=auth_headers)
        assert blocked.status_code == 400
        assert blocked.json()["detail"] == "pause not ended"

        ended_pause = client.post("/current_pause_end", headers=auth_headers)
        assert ended_pause.status_code == 200
        assert ended_pause.json()["end"]

        current_block = client.get("/block_current", headers=auth_headers).json()
        assert [p["id"] for p in current_block["pauses"]] == [pause["id"]]

        ended = client.post("/current_block_end", headers=auth_headers)
        assert ended.status_code == 200
        assert ended.json()["id"] == block_id
        assert current() == {"currentBlockId": -1, "currentPauseId": -1}

    def test_start_block_requires_flag(self, client, auth_headers):
        assert client.post("/current_block_start", headers=auth_headers).status_code == 400

    def test_transitions_from_idle(self, client, auth_headers):
        for path in ("/current_block_end", "/current_pause_start", "/current_pause_end"):
            assert client.post(path, headers=auth_headers).status_code == 400
