import logging
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from .. import main
from ..core import db as core_db
from ..core.config import DEFAULT_JWT_SECRET


def _login(client: TestClient, email: str) -> dict[str, str]:
    register = client.post("/auth/register", json={"email": email, "password": "secret123"})
    assert register.status_code == 201
    login = client.post("/auth/login", json={"email": email, "password": "secret123"})
    assert login.status_code == 200
    return {"Authorization": f"Bearer {login.json()['token']}"}

def _open_account(client: TestClient, headers: dict[str, str], account_type: str = "checking") -> int:
    response = client.post("/accounts", json={"accountType": account_type}, headers=headers)
    assert response.status_code == 201
    return response.json()["account"]["id"]

def _balance(client: TestClient, headers: dict[str, str], account_id: int) -> Decimal:
    response = client.get(f"/accounts/{account_id}", headers=headers)
    return Decimal(response.json()["account"]["balance"])


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

def test_register_duplicate_and_bad_login(client: TestClient) -> None:
    _login(client, "alice@example.com")

    duplicate = client.post(
        "/auth/register", json={"email": "alice@example.com", "password": "secret123"}
    )
    assert duplicate.status_code == 409

    bad = client.post("/auth/login", json={"email": "alice@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid credentials"

def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/accounts").status_code == 401
    response = client.get("/accounts", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"

def test_create_and_list_accounts(client: TestClient) -> None:
    headers = _login(client, "bob@example.com")
    checking_id = _open_account(client, headers)
    savings_id = _open_account(client, headers, "savings")

    listing = client.get("/accounts", headers=headers)
    assert listing.status_code == 200
    accounts = listing.json()["accounts"]
    assert [a["id"] for a in accounts] == [checking_id, savings_id]
    assert [a["account_type"] for a in accounts] == ["checking", "savings"]
    assert Decimal(accounts[0]["balance"]) == Decimal("0")

    invalid = client.post("/accounts", json={"accountType": "brokerage"}, headers=headers)
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid account type"

def test_deposit_withdraw_and_history(client: TestClient) -> None:
    headers = _login(client, "carol@example.com")
    account_id = _open_account(client, headers)

    deposit = client.post(
        "/transactions/deposit",
        json={"accountId": account_id, "amount": "500.00"},
        headers=headers,
    )
    assert deposit.status_code == 201
    transaction = deposit.json()["transaction"]
    assert transaction["type"] == "deposit"
    assert Decimal(transaction["amount"]) == Decimal("500.00")
    assert transaction["description"] == "Deposit"
    assert transaction["to_account_id"] is None

    withdraw = client.post(
        "/transactions/withdraw",
        json={"accountId": account_id, "amount": 120.5, "description": "Groceries"},
        headers=headers,
    )
    assert withdraw.status_code == 201
    assert withdraw.json()["transaction"]["description"] == "Groceries"
    assert _balance(client, headers, account_id) == Decimal("379.50")

    history = client.get(f"/transactions/{account_id}", headers=headers)
    assert history.status_code == 200
    assert [t["type"] for t in history.json()["transactions"]] == ["withdrawal", "deposit"]

    limited = client.get(f"/transactions/{account_id}", params={"limit": 1}, headers=headers)
    assert len(limited.json()["transactions"]) == 1

def test_withdraw_insufficient_funds(client: TestClient) -> None:
    headers = _login(client, "dave@example.com")
    account_id = _open_account(client, headers)

    response = client.post(
        "/transactions/withdraw",
        json={"accountId": account_id, "amount": "1.00"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient funds"
    assert client.get(f"/transactions/{account_id}", headers=headers).json()["transactions"] == []

def test_non_positive_amount_returns_400(client: TestClient) -> None:
    headers = _login(client, "erin@example.com")
    account_id = _open_account(client, headers)

    response = client.post(
        "/transactions/deposit",
        json={"accountId": account_id, "amount": "-10.00"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Amount must be greater than 0"

def test_transfer_between_users(client: TestClient) -> None:
    alice = _login(client, "frank@example.com")
    bob = _login(client, "grace@example.com")
    source_id = _open_account(client, alice)
    dest_id = _open_account(client, bob)
    client.post(
        "/transactions/deposit",
        json={"accountId": source_id, "amount": "700.00"},
        headers=alice,
    )
    client.post(
        "/transactions/deposit",
        json={"accountId": dest_id, "amount": "50.00"},
        headers=bob,
    )

    transfer = client.post(
        "/transactions/transfer",
        json={"fromAccountId": source_id, "toAccountId": dest_id, "amount": "300.00"},
        headers=alice,
    )
    assert transfer.status_code == 201
    transaction = transfer.json()["transaction"]
    assert transaction["type"] == "transfer"
    assert transaction["account_id"] == source_id
    assert transaction["to_account_id"] == dest_id
    assert _balance(client, alice, source_id) == Decimal("400.00")
    assert _balance(client, bob, dest_id) == Decimal("350.00")

    # The destination's own history does not show the incoming transfer.
    dest_history = client.get(f"/transactions/{dest_id}", headers=bob).json()["transactions"]
    assert [t["type"] for t in dest_history] == ["deposit"]

def test_transfer_rejects_self_transfer(client: TestClient) -> None:
    headers = _login(client, "heidi@example.com")
    account_id = _open_account(client, headers)

    response = client.post(
        "/transactions/transfer",
        json={"fromAccountId": account_id, "toAccountId": account_id, "amount": "1.00"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot transfer to the same account"

def test_transfer_to_missing_account_returns_404(client: TestClient) -> None:
    headers = _login(client, "ivan@example.com")
    account_id = _open_account(client, headers)
    client.post(
        "/transactions/deposit",
        json={"accountId": account_id, "amount": "10.00"},
        headers=headers,
    )

    response = client.post(
        "/transactions/transfer",
        json={"fromAccountId": account_id, "toAccountId": 9999, "amount": "1.00"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Destination account not found"
    assert _balance(client, headers, account_id) == Decimal("10.00")

def test_other_users_account_is_forbidden(client: TestClient) -> None:
    owner = _login(client, "judy@example.com")
    intruder = _login(client, "ken@example.com")
    account_id = _open_account(client, owner)

    assert client.get(f"/accounts/{account_id}", headers=intruder).status_code == 403
    assert client.get(f"/transactions/{account_id}", headers=intruder).status_code == 403
    deposit = client.post(
        "/transactions/deposit",
        json={"accountId": account_id, "amount": "5.00"},
        headers=intruder,
    )
    assert deposit.status_code == 403
    assert client.get("/transactions/9999", headers=intruder).status_code == 404

def test_notifications_list_and_mark_read(client: TestClient) -> None:
    headers = _login(client, "leo@example.com")
    other = _login(client, "mia@example.com")
    account_id = _open_account(client, headers)
    client.post(
        "/transactions/deposit",
        json={"accountId": account_id, "amount": "25.00"},
        headers=headers,
    )

    listing = client.get("/notifications", headers=headers)
    assert listing.status_code == 200
    notifications = listing.json()["notifications"]
    assert len(notifications) == 1
    assert notifications[0]["message"] == "Deposit of $25.00 completed successfully"
    assert notifications[0]["read"] is False
    notification_id = notifications[0]["id"]

    assert client.patch(f"/notifications/{notification_id}/read", headers=other).status_code == 404

    marked = client.patch(f"/notifications/{notification_id}/read", headers=headers)
    assert marked.status_code == 200
    assert marked.json()["notification"]["read"] is True
    assert client.get("/notifications", headers=other).json()["notifications"] == []

@pytest.mark.parametrize(
    "secret, warned",
    [(DEFAULT_JWT_SECRET, True), ("a-real-deployment-secret", False)],
)
def test_startup_warns_when_jwt_secret_is_default(engine, monkeypatch, caplog, secret, warned) -> None:
    monkeypatch.setattr(main.settings, "jwt_secret", secret)
    original_engine = core_db.engine
    core_db.set_engine(engine)
    try:
        with caplog.at_level(logging.WARNING, logger=main.logger.name):
            with TestClient(main.app):
                pass
    finally:
        core_db.set_engine(original_engine)

    messages = [record.getMessage() for record in caplog.records if record.name == main.logger.name]
    assert ("config.default_jwt_secret" in messages) is warned
