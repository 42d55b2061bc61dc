"""Tests for authentication, authorization and account endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from pousada_api.api.app import create_app
from pousada_api.domain.models import Role
from pousada_api.services.tokens import TokenService
from tests.conftest import add_account, bearer, frozen_clock


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_signup_then_login(container) -> None:
    client = TestClient(create_app(container))

    signup = client.post(
        "/signup", json={"email": "new@example.com", "password": "secret123"}
    )
    login = client.post(
        "/login", json={"email": "new@example.com", "password": "secret123"}
    )

    assert signup.status_code == 201
    body = signup.json()
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "cliente"
    assert "passwordHash" not in body["user"]
    assert login.status_code == 200
    assert login.json()["user"]["id"] == body["user"]["id"]


def test_signup_ignores_requested_role(container, account_repository) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/signup",
        json={"email": "sneaky@example.com", "password": "secret123", "role": "admin"},
    )

    assert response.status_code == 201
    assert account_repository.accounts["sneaky@example.com"].role is Role.GUEST


def test_signup_duplicate_returns_conflict(container) -> None:
    client = TestClient(create_app(container))
    payload = {"email": "dup@example.com", "password": "secret123"}
    client.post("/signup", json=payload)

    response = client.post("/signup", json=payload)

    assert response.status_code == 409
    assert "message" in response.json()


def test_signup_missing_field_returns_400(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/signup", json={"email": "x@example.com"})

    assert response.status_code == 400
    assert "password" in response.json()["message"]


def test_signup_password_length_limit(container, account_repository) -> None:
    client = TestClient(create_app(container))

    too_long = client.post(
        "/signup", json={"email": "long@example.com", "password": "x" * 80}
    )
    at_limit = client.post(
        "/signup", json={"email": "edge@example.com", "password": "x" * 72}
    )

    assert too_long.status_code == 400
    assert too_long.json() == {"message": "Password must be at most 72 bytes long"}
    assert "long@example.com" not in account_repository.accounts
    assert at_limit.status_code == 201


def test_login_wrong_password_returns_401(container) -> None:
    client = TestClient(create_app(container))
    client.post("/signup", json={"email": "a@example.com", "password": "secret123"})

    response = client.post(
        "/login", json={"email": "a@example.com", "password": "nope-nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password"}


def test_users_requires_admin(container, admin_token, guest_token) -> None:
    client = TestClient(create_app(container))

    anonymous = client.get("/users")
    guest = client.get("/users", headers=bearer(guest_token))
    admin = client.get("/users", headers=bearer(admin_token))

    assert anonymous.status_code == 401
    assert anonymous.headers["www-authenticate"] == "Bearer"
    assert guest.status_code == 403
    assert admin.status_code == 200
    emails = {user["email"] for user in admin.json()}
    assert emails == {"admin@pousada.example", "guest@example.com"}
    assert all("passwordHash" not in user for user in admin.json())
    assert all("password_hash" not in user for user in admin.json())


def test_expired_token_is_rejected_without_store_mutation(
    container, account_repository, booking_repository, settings
) -> None:
    account = add_account(account_repository, "late@example.com")
    past = datetime.now(tz=UTC) - timedelta(hours=2)
    expired = TokenService(
        secret=settings.token_secret, ttl_seconds=3600, clock=frozen_clock(past)
    ).issue(account.email, account.role, account.id)
    client = TestClient(create_app(container))

    response = client.post(
        "/bookings",
        json={"startDate": "2024-01-01", "endDate": "2024-01-03"},
        headers=bearer(expired),
    )

    assert response.status_code == 401
    assert booking_repository.bookings == {}


def test_malformed_token_is_rejected_without_store_mutation(
    container, booking_repository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/bookings",
        json={"startDate": "2024-01-01", "endDate": "2024-01-03"},
        headers=bearer("garbage.token.value"),
    )

    assert response.status_code == 401
    assert booking_repository.bookings == {}


def test_non_bearer_scheme_is_rejected(container, guest_token) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/bookings", headers={"Authorization": f"Basic {guest_token}"}
    )

    assert response.status_code == 401


def test_update_profile(container, guest_token, account_repository) -> None:
    client = TestClient(create_app(container))

    response = client.patch(
        "/profile",
        json={"phoneNumber": "(11) 90000-1111"},
        headers=bearer(guest_token),
    )

    assert response.status_code == 200
    assert response.json()["phoneNumber"] == "(11) 90000-1111"
    assert (
        account_repository.accounts["guest@example.com"].phone_number
        == "(11) 90000-1111"
    )


def test_unknown_route_returns_404_message(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/nowhere")

    assert response.status_code == 404
    assert "message" in response.json()
