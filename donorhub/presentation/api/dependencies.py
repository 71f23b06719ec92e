from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...application.services.auth_guard import AuthGuard
from ...core.config import Settings
from ...core.dependencies import get_auth_guard, get_settings
from ...domain.errors import UnauthenticatedError
from ...domain.models import Identity

_bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    auth_guard: AuthGuard = Depends(get_auth_guard),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError("Unauthorized access")
    return auth_guard.authenticate(credentials.credentials)


def optional_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    auth_guard: AuthGuard = Depends(get_auth_guard),
) -> Optional[Identity]:
    """Callers without an Authorization header pass through as anonymous.

    A header that is present must carry a valid bearer credential.
    """
    if credentials is None:
        if request.headers.get("Authorization"):
            raise UnauthenticatedError("Unauthorized access")
        return None
    return auth_guard.authenticate(credentials.credentials)


def require_admin(
    identity: Identity = Depends(require_identity),
    auth_guard: AuthGuard = Depends(get_auth_guard),
) -> Identity:
    auth_guard.require_admin(identity)
    return identity


def require_listing_access(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    auth_guard: AuthGuard = Depends(get_auth_guard),
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    """Admin-only unless ``ADMIN_LISTING_PUBLIC`` opens the full listing."""
    if settings.admin_listing_public:
        return None
    identity = require_identity(credentials, auth_guard)
    auth_guard.require_admin(identity)
    return identity
