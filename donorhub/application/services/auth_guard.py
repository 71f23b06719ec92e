from __future__ import annotations

import logging

from ...domain.errors import ForbiddenError, UnauthenticatedError
from ...domain.models import Identity, User
from ...domain.ports.identity import IdentityProvider
from ...domain.ports.persistence import UserRepository

logger = logging.getLogger(__name__)


class AuthGuard:
    """Two-stage access check: verify the bearer token, then the stored role."""

    def __init__(self, identity_provider: IdentityProvider, users: UserRepository) -> None:
        self._identity_provider = identity_provider
        self._users = users

    def authenticate(self, token: str) -> Identity:
        if not token or not token.strip():
            raise UnauthenticatedError("Unauthorized access")
        return self._identity_provider.verify(token.strip())

    def require_admin(self, identity: Identity) -> User:
        # Role is mutable store-side state, so it is re-read on every call.
        user = self._users.get_user_by_email(identity.email)
        if user is None or not user.is_admin:
            logger.warning("Admin access refused for %s", identity.email)
            raise ForbiddenError("Forbidden access")
        if user.is_blocked:
            logger.warning("Blocked administrator %s refused", identity.email)
            raise ForbiddenError("Forbidden access")
        return user

    def is_admin(self, identity: Identity) -> bool:
        user = self._users.get_user_by_email(identity.email)
        return bool(user and user.is_admin and not user.is_blocked)
