"""Tests for account signup, login and profile updates."""

import asyncio

import pytest

from pousada_api.domain.models import Role
from pousada_api.errors import (
    DuplicateAccount,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from pousada_api.services.accounts import AccountService
from tests.conftest import make_identity


def test_signup_creates_guest_with_hashed_password(
    container, account_repository
) -> None:
    service: AccountService = container.account_service

    result = asyncio.run(service.signup(" new@example.com ", "secret123"))

    stored = account_repository.accounts["new@example.com"]
    assert result.account.role is Role.GUEST
    assert stored.password_hash != "secret123"
    assert stored.password_hash.startswith("$2")
    claims = container.token_service.verify(result.token)
    assert claims.subject == "new@example.com"
    assert claims.account_id == stored.id


def test_signup_rejects_duplicate_email(container) -> None:
    service: AccountService = container.account_service
    asyncio.run(service.signup("dup@example.com", "secret123"))

    with pytest.raises(DuplicateAccount):
        asyncio.run(service.signup("dup@example.com", "another1"))


def test_email_key_is_case_sensitive(container, account_repository) -> None:
    service: AccountService = container.account_service
    asyncio.run(service.signup("case@example.com", "secret123"))

    asyncio.run(service.signup("Case@example.com", "secret123"))

    assert len(account_repository.accounts) == 2


@pytest.mark.parametrize(
    ("email", "password"),
    [
        ("not-an-email", "secret123"),
        ("ok@example.com", "123"),
        ("ok@example.com", "x" * 73),
        ("ok@example.com", "é" * 37),
    ],
)
def test_signup_validates_input(container, email: str, password: str) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(container.account_service.signup(email, password))


def test_login_returns_token_for_valid_credentials(container) -> None:
    service: AccountService = container.account_service
    created = asyncio.run(service.signup("login@example.com", "secret123"))

    result = asyncio.run(service.login("login@example.com", "secret123"))

    assert result.account.id == created.account.id
    assert container.token_service.verify(result.token).role is Role.GUEST


@pytest.mark.parametrize(
    ("email", "password"),
    [("login@example.com", "wrong-password"), ("ghost@example.com", "secret123")],
)
def test_login_rejects_bad_credentials(container, email: str, password: str) -> None:
    service: AccountService = container.account_service
    asyncio.run(service.signup("login@example.com", "secret123"))

    with pytest.raises(Unauthenticated):
        asyncio.run(service.login(email, password))


def test_update_profile_sets_phone_number(container) -> None:
    service: AccountService = container.account_service
    created = asyncio.run(service.signup("phone@example.com", "secret123"))
    identity = container.token_service.verify(created.token).to_identity()

    account = asyncio.run(service.update_profile(identity, "(21) 98765-4321"))

    assert account.phone_number == "(21) 98765-4321"


def test_update_profile_rejects_bad_phone(container) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(
            container.account_service.update_profile(make_identity(), "12345")
        )


def test_update_profile_for_unknown_account(container) -> None:
    with pytest.raises(NotFound):
        asyncio.run(
            container.account_service.update_profile(
                make_identity(), "(21) 98765-4321"
            )
        )
