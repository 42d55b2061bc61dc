"""Bearer authentication and role guards."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pousada_api.domain.models import Identity, Role
from pousada_api.errors import Forbidden, Unauthenticated
from pousada_api.services.tokens import InvalidToken

if TYPE_CHECKING:
    from pousada_api.containers import AppContainer

bearer_scheme = HTTPBearer(auto_error=False)


async def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """Verify the bearer token and attach the caller identity to the request."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    container: AppContainer = request.app.state.container
    try:
        claims = container.token_service.verify(credentials.credentials)
    except InvalidToken as exc:
        raise Unauthenticated("Invalid or expired token") from exc
    identity = claims.to_identity()
    request.state.identity = identity
    return identity


def require_roles(*roles: Role) -> Callable[..., Awaitable[Identity]]:
    """Build a dependency that admits only the given roles."""
    allowed = frozenset(roles)

    async def _guard(identity: Identity = Depends(require_identity)) -> Identity:
        if identity.role not in allowed:
            raise Forbidden()
        return identity

    return _guard


require_admin = require_roles(Role.ADMIN)
