"""Tests for the match REST API.

Critical scenarios tested:
- Match creation, lookup and deletion
- Player commands: accepted, rule rejections, malformed payloads
- Admin grants behind the admin password
- Weapon catalog listing
"""

import pytest
from fastapi.testclient import TestClient

from tower_siege.config import get_settings
from tower_siege.main import app

MATCH_BODY = {
    "player1": {"name": "Alice", "color": "#3b82f6"},
    "player2": {"name": "Bob", "color": "#ef4444"},
    "seed": 11,
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "letmein")
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()


@pytest.fixture
def match_id(client: TestClient) -> str:
    response = client.post("/api/v1/matches", json=MATCH_BODY)
    assert response.status_code == 201
    return response.json()["match_id"]


class TestMatchEndpoints:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_create_match(self, client: TestClient):
        response = client.post("/api/v1/matches", json=MATCH_BODY)

        assert response.status_code == 201
        state = response.json()["state"]
        assert state["phase"] == "in_progress"
        assert state["active_player_id"] == "player_1"
        assert state["players"]["player_1"]["total_power"] == 5
        assert state["board"]["tiles"][2][0]["structure"] == {"kind": "tower", "owner": "player_1"}

    def test_create_match_duplicate_names(self, client: TestClient):
        body = {**MATCH_BODY, "player2": {"name": "Alice", "color": "#ef4444"}}

        response = client.post("/api/v1/matches", json=body)

        assert response.status_code == 400

    def test_get_match(self, client: TestClient, match_id: str):
        response = client.get(f"/api/v1/matches/{match_id}")

        assert response.status_code == 200
        assert response.json()["match_id"] == match_id

    def test_get_unknown_match(self, client: TestClient):
        assert client.get("/api/v1/matches/nope").status_code == 404

    def test_delete_match(self, client: TestClient, match_id: str):
        assert client.delete(f"/api/v1/matches/{match_id}").status_code == 204
        assert client.get(f"/api/v1/matches/{match_id}").status_code == 404


class TestActionEndpoint:
    def test_end_turn(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/actions",
            json={"player_id": "player_1", "action": {"action_type": "end_turn"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"]
        assert body["turn_effect"] == "advances_turn"
        assert body["state"]["active_player_id"] == "player_2"
        assert body["events"][-1]["event_type"] == "turn_ended"

    def test_rule_rejection_is_not_http_error(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/actions",
            json={"player_id": "player_2", "action": {"action_type": "end_turn"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert not body["accepted"]
        assert body["error_code"] == "NOT_YOUR_TURN"

    def test_unknown_action_type(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/actions",
            json={"player_id": "player_1", "action": {"action_type": "teleport"}},
        )

        assert response.status_code == 422

    def test_malformed_action(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/actions",
            json={"player_id": "player_1", "action": {"action_type": "move", "x": "left"}},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("action_type", [["move"], {"kind": "move"}, None, 3])
    def test_non_string_action_type(self, client: TestClient, match_id: str, action_type):
        response = client.post(
            f"/api/v1/matches/{match_id}/actions",
            json={"player_id": "player_1", "action": {"action_type": action_type}},
        )

        assert response.status_code == 422

    def test_unknown_match(self, client: TestClient):
        response = client.post(
            "/api/v1/matches/nope/actions",
            json={"player_id": "player_1", "action": {"action_type": "end_turn"}},
        )

        assert response.status_code == 404


class TestAdminGrants:
    def test_grant_with_password(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/admin/grants",
            json={"player_id": "player_2", "resource": "gold", "amount": 50},
            headers={"X-Admin-Password": "letmein"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"]
        assert body["turn_effect"] == "free"
        assert body["state"]["players"]["player_2"]["stats"]["gold"] == 70

    def test_wrong_password(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/admin/grants",
            json={"player_id": "player_2", "resource": "gold", "amount": 50},
            headers={"X-Admin-Password": "guess"},
        )

        assert response.status_code == 403

    def test_missing_password_header(self, client: TestClient, match_id: str):
        response = client.post(
            f"/api/v1/matches/{match_id}/admin/grants",
            json={"player_id": "player_2", "resource": "gold", "amount": 50},
        )

        assert response.status_code == 403
        state = client.get(f"/api/v1/matches/{match_id}").json()["state"]
        assert state["players"]["player_2"]["stats"]["gold"] == 20

    def test_disabled_without_password(self, client: TestClient, match_id: str, monkeypatch):
        monkeypatch.delenv("ADMIN_PASSWORD")
        get_settings.cache_clear()

        response = client.post(
            f"/api/v1/matches/{match_id}/admin/grants",
            json={"player_id": "player_1", "resource": "coins", "amount": 1},
            headers={"X-Admin-Password": "letmein"},
        )

        assert response.status_code == 404


class TestWeaponCatalog:
    def test_list_weapons(self, client: TestClient):
        response = client.get("/api/v1/weapons")

        assert response.status_code == 200
        weapons = response.json()["weapons"]
        assert len(weapons) == 8
        assert weapons[0] == {
            "weapon_id": "w1",
            "name": "Rusty Dagger",
            "power": 2,
            "cost": 10,
            "tier": 1,
            "icon_type": "dagger",
            "color": "#94a3b8",
        }
