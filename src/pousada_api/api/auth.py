"""Signup, login and account endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from pousada_api.api.schemas import AuthOut, CredentialsIn, ProfileUpdateIn, UserOut
from pousada_api.api.security import require_admin, require_identity
from pousada_api.domain.models import Identity

if TYPE_CHECKING:
    from pousada_api.containers import AppContainer

router = APIRouter(tags=["accounts"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: CredentialsIn, request: Request) -> AuthOut:
    """Create a guest account and return a token for it."""
    container: AppContainer = request.app.state.container
    result = await container.account_service.signup(payload.email, payload.password)
    return AuthOut(token=result.token, user=UserOut.from_record(result.account))


@router.post("/login")
async def login(payload: CredentialsIn, request: Request) -> AuthOut:
    """Exchange credentials for a token."""
    container: AppContainer = request.app.state.container
    result = await container.account_service.login(payload.email, payload.password)
    return AuthOut(token=result.token, user=UserOut.from_record(result.account))


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(request: Request) -> list[UserOut]:
    """Return every account without credentials."""
    container: AppContainer = request.app.state.container
    accounts = await container.account_service.list_accounts()
    return [UserOut.from_record(account) for account in accounts]


@router.patch("/profile")
async def update_profile(
    payload: ProfileUpdateIn,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> UserOut:
    """Update the caller's contact phone."""
    container: AppContainer = request.app.state.container
    account = await container.account_service.update_profile(
        identity, payload.phone_number
    )
    return UserOut.from_record(account)
