"""WebSocket delivery of balance and notification events."""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from palmpay.infrastructure.database.session import session_scope
from palmpay.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository
from palmpay.interfaces.ws import routes

SIGNUPS = [
    {
        "email": "ali@example.com",
        "password": "Secret123",
        "full_name": "Ali Raza",
        "father_name": "Raza Ahmed",
        "cnic": "35202-1234567-1",
    },
    {
        "email": "sara@example.com",
        "password": "Secret123",
        "full_name": "Sara Khan",
        "father_name": "Imran Khan",
        "cnic": "42101-7654321-2",
    },
]


async def _fund(container, account_id, amount_cents):
    async with session_scope(container.session_factory) as session:
        await SqlLedgerRepository(session).credit(account_id, amount_cents)


@pytest.fixture
def live_client(app):
    """Synchronous client; its lifespan creates the schema on the app's own loop."""
    with TestClient(app) as client:
        yield client


def _register(client, payload):
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    body = response.json()
    return body["account"]["id"], body["access_token"]


def test_socket_receives_transfer_events(app, live_client):
    ali_id, ali_token = _register(live_client, SIGNUPS[0])
    sara_id, sara_token = _register(live_client, SIGNUPS[1])
    live_client.portal.call(_fund, app.state.container, ali_id, 100_000)

    with live_client.websocket_connect(f"/ws?token={sara_token}") as websocket:
        snapshot = websocket.receive_json()
        assert snapshot == {
            "type": "account",
            "data": {"account_id": sara_id, "balance_cents": 0, "currency": "PKR"},
        }

        response = live_client.post(
            "/api/transfers",
            json={"recipient_id": sara_id, "amount": "300"},
            headers={"Authorization": f"Bearer {ali_token}"},
        )
        assert response.status_code == 201

        balance = websocket.receive_json()
        notification = websocket.receive_json()

    assert balance["type"] == "account"
    assert balance["data"]["balance_cents"] == 30_000
    assert balance["data"]["transfer_id"] == response.json()["transfer_id"]
    assert notification["type"] == "notification"
    assert notification["data"]["title"] == "Money Received"
    assert notification["data"]["body"] == "You received Rs. 300 from Ali Raza"


def test_snapshot_includes_credit_committed_during_sign_in(live_client, monkeypatch):
    sara_id, sara_token = _register(live_client, SIGNUPS[1])
    authenticate = routes._authenticate

    async def authenticate_then_credit(container, token):
        authenticated = await authenticate(container, token)
        await _fund(container, sara_id, 5_000)
        return authenticated

    monkeypatch.setattr(routes, "_authenticate", authenticate_then_credit)

    with live_client.websocket_connect(f"/ws?token={sara_token}") as websocket:
        snapshot = websocket.receive_json()

    assert snapshot["data"]["balance_cents"] == 5_000


def test_socket_answers_ping(live_client):
    _, token = _register(live_client, SIGNUPS[0])

    with live_client.websocket_connect(f"/ws?token={token}") as websocket:
        websocket.receive_json()
        websocket.send_text("ping")
        assert websocket.receive_json() == {"type": "pong"}


def test_socket_rejects_bad_token(live_client):
    with pytest.raises(WebSocketDisconnect):
        with live_client.websocket_connect("/ws?token=not-a-token") as websocket:
            websocket.receive_json()
