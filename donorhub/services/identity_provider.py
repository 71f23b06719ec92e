"""Bearer token verification against the identity provider's signing key."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from ..domain.errors import UnauthenticatedError
from ..domain.models import Identity

logger = logging.getLogger(__name__)


class JWTIdentityProvider:
    """Resolves caller identities from signed JWTs issued by the identity service."""

    def __init__(
        self,
        key: str,
        algorithms: Optional[List[str]] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        if not key:
            raise RuntimeError("IDENTITY_TOKEN_SECRET not configured.")
        if key == "change-me":
            logger.warning(
                "IDENTITY_TOKEN_SECRET is using the default value. Configure a real key in production."
            )
        self._key = key
        self._algorithms = algorithms or ["HS256"]
        self._audience = audience
        self._issuer = issuer

    def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self._key,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_aud": self._audience is not None},
            )
        except ExpiredSignatureError as exc:
            raise UnauthenticatedError("Token expired") from exc
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise UnauthenticatedError("Invalid token") from exc
        return _identity_from_claims(claims)


def _identity_from_claims(claims: Dict[str, Any]) -> Identity:
    email = claims.get("email")
    if not isinstance(email, str) or not email.strip():
        raise UnauthenticatedError("Token does not carry an email")
    name = claims.get("name")
    return Identity(
        email=email.strip().lower(),
        name=name if isinstance(name, str) and name.strip() else None,
        claims=dict(claims),
    )
