import re

from conftest import create_booking, signup


def send(client, headers, content, booking_id=1):
    return client.post("/messages", json={"bookingId": booking_id, "content": content}, headers=headers)


def test_client_can_message_before_assignment(client, alice):
    create_booking(client, alice)
    response = send(client, alice, "Hi")
    assert response.status_code == 201
    message = response.json()["message"]
    assert message["id"] == 1
    assert message["bookingId"] == 1
    assert message["sender"] == "alice"
    assert message["recipient"] is None
    assert message["content"] == "Hi"
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", message["timestamp"])


def test_recipient_is_the_other_party(client, alice, bob):
    create_booking(client, alice)
    client.put("/bookings", json={"bookingId": 1}, headers=bob)
    assert send(client, alice, "Key is under the mat").json()["message"]["recipient"] == "bob"
    assert send(client, bob, "Thanks").json()["message"]["recipient"] == "alice"


def test_outsiders_cannot_send(client, alice, bob, carol, admin):
    create_booking(client, alice)
    # An unassigned booking has no cleaner participant yet.
    response = send(client, bob, "Can I help?")
    assert response.status_code == 403
    assert response.json() == {"error": "Not part of the booking"}

    client.put("/bookings", json={"bookingId": 1}, headers=bob)
    for headers in (carol, admin):
        assert send(client, headers, "hello").status_code == 403


def test_send_to_unknown_booking(client, alice):
    response = send(client, alice, "Hi", booking_id=99)
    assert response.status_code == 404
    assert response.json() == {"error": "Booking not found"}


def test_send_requires_booking_and_content(client, alice):
    create_booking(client, alice)
    response = client.post("/messages", json={"bookingId": 1}, headers=alice)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing bookingId or content"}
    assert send(client, alice, "").status_code == 400


def test_send_requires_auth(client):
    assert client.post("/messages", json={"bookingId": 1, "content": "Hi"}).status_code == 401


def test_list_messages_in_timestamp_order(client, alice, bob):
    create_booking(client, alice)
    client.put("/bookings", json={"bookingId": 1}, headers=bob)
    for i in range(5):
        send(client, alice if i % 2 == 0 else bob, f"message {i}")
    response = client.get("/messages", params={"bookingId": 1}, headers=bob)
    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [m["content"] for m in messages] == [f"message {i}" for i in range(5)]
    timestamps = [m["timestamp"] for m in messages]
    assert timestamps == sorted(timestamps)


def test_list_sorts_stored_messages_by_timestamp(client, alice, store):
    create_booking(client, alice)
    db = store.load()
    db["messages"] = [
        {"id": 1, "bookingId": 1, "sender": "alice", "recipient": None, "content": "late",
         "timestamp": "2024-01-01T10:00:00.000Z"},
        {"id": 2, "bookingId": 1, "sender": "alice", "recipient": None, "content": "early",
         "timestamp": "2024-01-01T09:00:00.000Z"},
        {"id": 3, "bookingId": 1, "sender": "alice", "recipient": None, "content": "tie",
         "timestamp": "2024-01-01T10:00:00.000Z"},
        {"id": 4, "bookingId": 2, "sender": "dave", "recipient": None, "content": "other booking",
         "timestamp": "2024-01-01T08:00:00.000Z"},
    ]
    store.save(db)
    messages = client.get("/messages", params={"bookingId": 1}, headers=alice).json()["messages"]
    assert [m["content"] for m in messages] == ["early", "late", "tie"]


def test_admin_can_read_but_outsiders_cannot(client, alice, bob, carol, admin):
    create_booking(client, alice)
    client.put("/bookings", json={"bookingId": 1}, headers=bob)
    send(client, alice, "Hi")
    assert len(client.get("/messages", params={"bookingId": 1}, headers=admin).json()["messages"]) == 1
    response = client.get("/messages", params={"bookingId": 1}, headers=carol)
    assert response.status_code == 403
    assert response.json() == {"error": "Not authorised to view messages"}


def test_list_messages_errors(client, alice):
    response = client.get("/messages", headers=alice)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing bookingId query parameter"}
    assert client.get("/messages", params={"bookingId": "abc"}, headers=alice).status_code == 400
    assert client.get("/messages", params={"bookingId": 7}, headers=alice).status_code == 404


def test_other_client_cannot_read(client, alice):
    dave = signup(client, "dave", "client")
    create_booking(client, alice)
    assert client.get("/messages", params={"bookingId": 1}, headers=dave).status_code == 403


def test_unreadable_timestamp_sorts_last(client, alice, store):
    create_booking(client, alice)
    db = store.load()
    db["messages"] = [
        {"id": 1, "bookingId": 1, "sender": "alice", "recipient": None, "content": "broken",
         "timestamp": "garbage"},
        {"id": 2, "bookingId": 1, "sender": "alice", "recipient": None, "content": "fine",
         "timestamp": "2024-01-01T09:00:00.000Z"},
    ]
    store.save(db)
    response = client.get("/messages", params={"bookingId": 1}, headers=alice)
    assert response.status_code == 200
    assert [m["content"] for m in response.json()["messages"]] == ["fine", "broken"]
