import pytest
import requests

from brightidy_client import BrightidyAPI, BrightidyAPIError


@pytest.fixture
def api(client):
    return BrightidyAPI(base_url="http://testserver", session=client)


def test_client_walks_through_a_booking(api, client):
    assert api.register("alice", "pw1", "client") == "User created"
    BrightidyAPI(base_url="http://testserver", session=client).register("bob", "pw2", "cleaner")

    assert api.login("alice", "pw1") == {"id": 1, "username": "alice", "role": "client"}
    assert [c["username"] for c in api.list_cleaners()] == ["bob"]
    booking = api.create_booking("1 Main St", "apartment", "2024-01-01", "09:00", 2)
    api.send_message(booking["id"], "Hi")

    cleaner = BrightidyAPI(base_url="http://testserver", session=client)
    cleaner.login("bob", "pw2")
    assert cleaner.update_booking(booking["id"])["status"] == "accepted"
    assert cleaner.update_booking(booking["id"], "completed")["status"] == "completed"
    assert [m["content"] for m in cleaner.list_messages(booking["id"])] == ["Hi"]
    assert [b["id"] for b in cleaner.list_bookings()] == [booking["id"]]

    rated = api.rate_booking(booking["id"], 5, tip=10)
    assert rated["rating"] == 5
    assert rated["tip"] == 10


def test_client_raises_api_errors(api):
    api.register("alice", "pw1", "client")
    with pytest.raises(BrightidyAPIError) as excinfo:
        api.login("alice", "wrong")
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid credentials"

    with pytest.raises(BrightidyAPIError) as excinfo:
        api.list_bookings()
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Unauthorised"


def test_client_logout_forgets_token(api):
    api.register("alice", "pw1", "client")
    api.login("alice", "pw1")
    api.logout()
    assert api.token is None
    with pytest.raises(BrightidyAPIError):
        api.list_bookings()


def test_client_transport_error():
    class FailingSession:
        def request(self, *args, **kwargs):
            raise requests.ConnectionError("connection refused")

    api = BrightidyAPI(base_url="http://localhost:1", session=FailingSession())
    with pytest.raises(BrightidyAPIError) as excinfo:
        api.list_cleaners()
    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message
