import pytest

from datetime import datetime

from backend.app.models import Game, Group, GroupMember, User, UserGameEntry
from core.enums import GameStatus, GroupRole


@pytest.fixture
def game_ids(authorized_client):
    _, _, session_factory = authorized_client
    session = session_factory()
    games = [Game(provider="IGDB", provider_game_id=str(i), name=f"Game {i}") for i in range(3)]
    session.add_all(games)
    session.commit()
    ids = [g.id for g in games]
    session.close()
    return ids


def test_create_and_list_entries(authorized_client, game_ids):
    client, _, _ = authorized_client

    resp = client.post(
        "/api/v1/lists",
        json={"gameId": game_ids[0], "status": "BACKLOG", "platform": "PC", "rating": 8},
    )
    client.post("/api/v1/lists", json={"gameId": game_ids[1], "status": "WISHLIST"})

    assert resp.status_code == 201
    assert resp.json()["entry"]["status"] == "BACKLOG"
    assert resp.json()["entry"]["platform"] == "PC"

    entries = client.get("/api/v1/lists").json()["entries"]
    assert [e["gameId"] for e in entries] == [game_ids[1], game_ids[0]]

    backlog = client.get("/api/v1/lists", params={"status": "BACKLOG"}).json()["entries"]
    assert [e["game"]["name"] for e in backlog] == ["Game 0"]


def test_create_entry_validation(authorized_client, game_ids):
    client, _, session_factory = authorized_client
    session = session_factory()
    group = Group(name="Strangers")
    session.add(group)
    session.commit()
    group_id = group.id
    session.close()

    assert client.post("/api/v1/lists", json={"gameId": game_ids[0], "status": "PLAYING?"}).status_code == 400
    assert client.post("/api/v1/lists", json={"gameId": 999999, "status": "BACKLOG"}).status_code == 404
    assert (
        client.post(
            "/api/v1/lists", json={"gameId": game_ids[0], "status": "BACKLOG", "groupId": group_id}
        ).status_code
        == 403
    )

    assert client.post("/api/v1/lists", json={"gameId": game_ids[0], "status": "BACKLOG"}).status_code == 201
    assert client.post("/api/v1/lists", json={"gameId": game_ids[0], "status": "FINISHED"}).status_code == 400


def test_invalid_status_filter(authorized_client):
    client, _, _ = authorized_client

    assert client.get("/api/v1/lists", params={"status": "nope"}).status_code == 400


def _stranger_entry(session_factory, game_id) -> int:
    session = session_factory()
    stranger = User(email="stranger@example.com")
    session.add(stranger)
    session.flush()
    entry = UserGameEntry(user_id=stranger.id, game_id=game_id, status=GameStatus.BACKLOG)
    session.add(entry)
    session.commit()
    entry_id = entry.id
    session.close()
    return entry_id


def test_delete_only_own_entries(authorized_client, game_ids):
    client, _, session_factory = authorized_client
    theirs_id = _stranger_entry(session_factory, game_ids[2])

    mine = client.post("/api/v1/lists", json={"gameId": game_ids[0], "status": "BACKLOG"}).json()["entry"]

    assert client.delete(f"/api/v1/lists/{theirs_id}").status_code == 404
    assert client.delete(f"/api/v1/lists/{mine['id']}").json() == {"success": True}
    assert client.get("/api/v1/lists").json()["entries"] == []


def test_get_entry(authorized_client, game_ids):
    client, current_user, session_factory = authorized_client
    user_id = current_user().id
    session = session_factory()
    group = Group(name="Crew")
    session.add(group)
    session.flush()
    session.add(GroupMember(group_id=group.id, user_id=user_id, role=GroupRole.MEMBER))
    session.commit()
    group_id = group.id
    session.close()
    mine = client.post(
        "/api/v1/lists", json={"gameId": game_ids[0], "status": "BACKLOG", "groupId": group_id}
    ).json()["entry"]
    theirs_id = _stranger_entry(session_factory, game_ids[1])

    resp = client.get(f"/api/v1/lists/{mine['id']}")

    assert resp.status_code == 200
    entry = resp.json()["entry"]
    assert entry["game"]["name"] == "Game 0"
    assert entry["group"] == {"id": group_id, "name": "Crew"}
    assert client.get(f"/api/v1/lists/{theirs_id}").status_code == 403
    assert client.get("/api/v1/lists/999999").status_code == 404


def test_update_entry_moves_game_to_now_playing(authorized_client, game_ids):
    client, _, _ = authorized_client
    created = client.post(
        "/api/v1/lists", json={"gameId": game_ids[0], "status": "WISHLIST", "platform": "PC", "notes": "gift"}
    ).json()["entry"]

    resp = client.patch(
        f"/api/v1/lists/{created['id']}",
        json={"status": "NOW_PLAYING", "startedAt": "2024-03-01T12:00:00+02:00", "notes": ""},
    )

    assert resp.status_code == 200
    entry = resp.json()["entry"]
    assert entry["status"] == "NOW_PLAYING"
    assert datetime.fromisoformat(entry["startedAt"]) == datetime.fromisoformat("2024-03-01T10:00:00+00:00")
    assert entry["notes"] is None
    # Keys missing from the body are left alone
    assert entry["platform"] == "PC"
    assert entry["game"]["name"] == "Game 0"
    assert datetime.fromisoformat(entry["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])

    now_playing = client.get("/api/v1/lists", params={"status": "NOW_PLAYING"}).json()["entries"]
    assert [e["id"] for e in now_playing] == [created["id"]]


def test_update_entry_validation_and_ownership(authorized_client, game_ids):
    client, _, session_factory = authorized_client
    mine = client.post("/api/v1/lists", json={"gameId": game_ids[0], "status": "BACKLOG"}).json()["entry"]
    theirs_id = _stranger_entry(session_factory, game_ids[1])

    bad = client.patch(f"/api/v1/lists/{mine['id']}", json={"status": "PLAYING?"})
    assert bad.status_code == 400
    assert bad.json()["detail"].startswith("Invalid status")
    assert client.get(f"/api/v1/lists/{mine['id']}").json()["entry"]["status"] == "BACKLOG"

    assert client.patch(f"/api/v1/lists/{theirs_id}", json={"status": "DROPPED"}).status_code == 403
    assert client.patch("/api/v1/lists/999999", json={"status": "DROPPED"}).status_code == 404
    assert client.patch(f"/api/v1/lists/{mine['id']}", json={"rating": 11}).status_code == 422
