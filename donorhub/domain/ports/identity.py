from __future__ import annotations

from typing import Protocol

from ..models import Identity


class IdentityProvider(Protocol):
    """Verifies an opaque bearer credential issued by the identity service."""

    def verify(self, token: str) -> Identity:
        """Return the resolved identity or raise ``UnauthenticatedError``."""
        ...
