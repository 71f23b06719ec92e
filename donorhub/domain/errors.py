"""Error taxonomy shared by every service; the HTTP layer maps each to a status code."""

from __future__ import annotations


class DonorHubError(Exception):
    """Base class for failures reported to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(DonorHubError):
    """Malformed identifier, missing required field or disallowed value."""

    status_code = 400


class UnauthenticatedError(DonorHubError):
    """Missing, malformed, invalid or expired credential."""

    status_code = 401


class ForbiddenError(DonorHubError):
    """Valid identity lacking the required role or ownership."""

    status_code = 403


class NotFoundError(DonorHubError):
    """No matching record, or a guarded update matched nothing."""

    status_code = 404


class UnexpectedError(DonorHubError):
    """A collaborator (database, identity or payment provider) failed."""

    status_code = 500
