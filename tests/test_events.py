from fastapi.testclient import TestClient

from eventhub.models import CATEGORIES, Event

from .conftest import current_user_id, event_payload


def create(client: TestClient, headers: dict, **overrides) -> dict:
    response = client.post("/api/events", json=event_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_event(client: TestClient, alice):
    payload = event_payload(minutes=180)

    response = client.post("/api/events", json=payload, headers=alice)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Jazz Night"
    assert data["date"] == payload["date"]
    assert data["time"] == payload["time"]
    assert data["category"] == "Music"
    assert data["isPast"] is False
    assert data["organizer"]["name"] == "Alice"
    assert data["organizer"]["id"] == current_user_id(client, alice)


def test_create_event_requires_auth(client: TestClient):
    response = client.post("/api/events", json=event_payload())

    assert response.status_code == 401


def test_create_event_ignores_client_supplied_organizer(client: TestClient, alice, bob):
    bob_id = current_user_id(client, bob)

    response = client.post("/api/events", json=event_payload(organizer=bob_id), headers=alice)

    assert response.status_code == 201
    assert response.json()["data"]["organizer"]["id"] == current_user_id(client, alice)


def test_create_event_rejects_start_within_an_hour(client: TestClient, alice, session):
    response = client.post("/api/events", json=event_payload(minutes=30), headers=alice)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "at least 60 minutes" in body["message"]
    assert session.query(Event).count() == 0


def test_create_event_rejects_past_date(client: TestClient, alice, session):
    response = client.post("/api/events", json=event_payload(date="2020-01-01"), headers=alice)

    assert response.status_code == 400
    assert session.query(Event).count() == 0


def test_create_event_validation_errors(client: TestClient, alice):
    response = client.post(
        "/api/events",
        json={"name": "", "description": "x", "date": "01/02/2030", "time": "25:00", "location": "Here",
              "category": "Nope"},
        headers=alice,
    )

    assert response.status_code == 400
    fields = {err["field"] for err in response.json()["errors"]}
    assert fields == {"name", "date", "time", "category"}


def test_get_event(client: TestClient, alice):
    created = create(client, alice)

    response = client.get(f"/api/events/{created['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["organizer"] == {
        "id": created["organizer"]["id"],
        "name": "Alice",
        "email": "alice@example.com",
    }


def test_get_event_not_found(client: TestClient):
    response = client.get("/api/events/65a1f0c2e4b0a1b2c3d4e5f6")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Event not found"}


def test_get_event_invalid_id(client: TestClient):
    response = client.get("/api/events/not-an-id")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid event id"


def test_update_event_by_owner(client: TestClient, alice):
    created = create(client, alice)

    response = client.put(f"/api/events/{created['id']}", json={"name": "Blues Night", "category": "Arts"},
                          headers=alice)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Blues Night"
    assert data["category"] == "Arts"
    assert data["description"] == created["description"]
    assert data["date"] == created["date"]


def test_update_event_rechecks_lead_time_using_stored_date(client: TestClient, alice):
    created = create(client, alice, minutes=24 * 60 * 3)

    # keep stored date, move time; still days away
    ok = client.put(f"/api/events/{created['id']}", json={"time": "23:59"}, headers=alice)
    assert ok.status_code == 200
    assert ok.json()["data"]["date"] == created["date"]

    too_soon = client.put(f"/api/events/{created['id']}", json={"date": "2020-1-1"}, headers=alice)
    assert too_soon.status_code == 400

    unchanged = client.get(f"/api/events/{created['id']}").json()["data"]
    assert unchanged["date"] == created["date"]
    assert unchanged["time"] == "23:59"


def test_update_event_by_non_owner_is_forbidden(client: TestClient, alice, bob):
    created = create(client, alice)

    response = client.put(f"/api/events/{created['id']}", json={"name": "Hijacked"}, headers=bob)

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to update this event"
    assert client.get(f"/api/events/{created['id']}").json()["data"]["name"] == "Jazz Night"


def test_update_missing_event(client: TestClient, alice):
    response = client.put("/api/events/65a1f0c2e4b0a1b2c3d4e5f6", json={"name": "x"}, headers=alice)

    assert response.status_code == 404


def test_delete_event(client: TestClient, alice):
    created = create(client, alice)

    response = client.delete(f"/api/events/{created['id']}", headers=alice)

    assert response.status_code == 200
    assert response.json()["message"] == "Event deleted successfully"
    assert client.get(f"/api/events/{created['id']}").status_code == 404


def test_delete_event_by_non_owner_is_forbidden(client: TestClient, alice, bob):
    created = create(client, alice)

    response = client.delete(f"/api/events/{created['id']}", headers=bob)

    assert response.status_code == 403
    assert client.get(f"/api/events/{created['id']}").status_code == 200


def test_list_events_filters(client: TestClient, alice):
    create(client, alice, name="Rock Festival", category="Music", location="Berlin Arena")
    create(client, alice, name="Startup Pitch", category="Business", location="berlin hub")
    create(client, alice, name="City Marathon", category="Sports", location="Paris")

    by_category = client.get("/api/events", params={"category": "Music"}).json()
    assert [e["name"] for e in by_category["data"]] == ["Rock Festival"]

    by_location = client.get("/api/events", params={"location": "BERLIN"}).json()
    assert {e["name"] for e in by_location["data"]} == {"Rock Festival", "Startup Pitch"}

    by_name = client.get("/api/events", params={"search": "marath"}).json()
    assert [e["name"] for e in by_name["data"]] == ["City Marathon"]


def test_list_events_sorted_by_date(client: TestClient, alice):
    create(client, alice, name="Later", minutes=60 * 24 * 5)
    create(client, alice, name="Sooner", minutes=60 * 24 * 2)

    body = client.get("/api/events").json()

    assert [e["name"] for e in body["data"]] == ["Sooner", "Later"]


def test_list_events_pagination(client: TestClient, alice):
    for i in range(25):
        create(client, alice, name=f"Event {i}", minutes=120 + i)

    body = client.get("/api/events", params={"page": 2, "limit": 10}).json()

    assert body["success"] is True
    assert body["count"] == 10
    assert body["total"] == 25
    assert body["page"] == 2
    assert body["pages"] == 3
    assert body["data"][0]["name"] == "Event 10"


def test_list_events_default_limit(client: TestClient, alice):
    for i in range(12):
        create(client, alice, name=f"Event {i}", minutes=120 + i)

    body = client.get("/api/events").json()

    assert body["count"] == 10
    assert body["pages"] == 2


def test_list_events_rejects_bad_paging(client: TestClient):
    assert client.get("/api/events", params={"page": 0}).status_code == 400
    assert client.get("/api/events", params={"limit": 51}).status_code == 400
    assert client.get("/api/events", params={"limit": 0}).status_code == 400


def test_list_events_hides_past_unless_asked(client: TestClient, alice, make_event):
    user_id = current_user_id(client, alice)
    make_event(user_id, -120, name="Yesterday's Gig")
    create(client, alice, name="Tonight")

    default = client.get("/api/events").json()
    assert [e["name"] for e in default["data"]] == ["Tonight"]

    everything = client.get("/api/events", params={"includePast": "true"}).json()
    names = {e["name"]: e["isPast"] for e in everything["data"]}
    assert names == {"Yesterday's Gig": True, "Tonight": False}


def test_categories(client: TestClient):
    response = client.get("/api/events/categories")

    assert response.status_code == 200
    assert response.json()["data"] == CATEGORIES
    assert "Entertainment" in CATEGORIES


def test_my_events_partitioned(client: TestClient, alice, bob, make_event):
    alice_id = current_user_id(client, alice)
    make_event(alice_id, -60 * 24, name="Old")
    create(client, alice, name="New")
    create(client, bob, name="Not mine")

    response = client.get("/api/events/user/my-events", headers=alice)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [e["name"] for e in body["data"]["upcoming"]] == ["New"]
    assert [e["name"] for e in body["data"]["past"]] == ["Old"]


def test_my_events_requires_auth(client: TestClient):
    assert client.get("/api/events/user/my-events").status_code == 401


def test_user_stats(client: TestClient, alice, bob, make_event):
    alice_id = current_user_id(client, alice)
    make_event(alice_id, -60, name="Old")
    create(client, alice, name="New")
    create(client, alice, name="Newer", minutes=300)
    bobs = create(client, bob, name="Bob's")
    client.post(f"/api/saved/{bobs['id']}", headers=alice)

    response = client.get("/api/events/user/stats", headers=alice)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "createdCount": 3,
        "upcomingCount": 2,
        "pastCount": 1,
        "savedCount": 1,
    }


def test_end_to_end_flow(client: TestClient):
    client.post("/api/auth/register", json={"name": "A", "email": "a@x.com", "password": "secret1"})
    client.cookies.clear()
    login = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert login.status_code == 200

    created = client.post("/api/events", json=event_payload(minutes=120))
    assert created.status_code == 201
    event_id = created.json()["data"]["id"]

    listed = client.get("/api/events").json()
    assert event_id in [e["id"] for e in listed["data"]]

    other = client.post("/api/auth/register", json={"name": "B", "email": "b@x.com", "password": "secret1"})
    other_headers = {"Authorization": f"Bearer {other.json()['token']}"}
    response = client.delete(f"/api/events/{event_id}", headers=other_headers)
    assert response.status_code == 403
