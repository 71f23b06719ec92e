"""Service for donor registration, profiles and admin user management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ...domain.errors import InvalidInputError, NotFoundError
from ...domain.models import Identity, User
from ...domain.models.user import ROLE_DONOR, STATUS_ACTIVE, USER_ROLES, USER_STATUSES
from ...domain.ports.persistence import UserRepository
from .listing import Page, PageRequest, Pagination, build_donor_query, build_user_query

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bloodGroup", "district", "upazila", "photoURL")


def normalize_email(email: Optional[str]) -> str:
    clean = (email or "").strip().lower()
    if not clean:
        raise InvalidInputError("Email is required")
    return clean


class UserService:
    """Manages user profiles stored in the users collection."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def register(self, email: str, profile: Mapping[str, Any]) -> Tuple[User, bool]:
        """
        Register a user, or return the existing record for the same email.

        Returns:
            Tuple of (User, created)
        """
        email_clean = normalize_email(email)
        document = _pick(profile, PROFILE_FIELDS)
        document["role"] = ROLE_DONOR
        document["status"] = STATUS_ACTIVE
        user, created = self._users.register_user(email_clean, document, datetime.now(timezone.utc))
        if created:
            logger.info("Registered user %s", email_clean)
        return user, created

    def get_role(self, email: str) -> Dict[str, str]:
        user = self._users.get_user_by_email(normalize_email(email))
        if user is None:
            return {"role": ROLE_DONOR, "status": STATUS_ACTIVE}
        return {"role": user.role, "status": user.status}

    def get_profile(self, identity: Identity) -> User:
        user = self._users.get_user_by_email(identity.email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, identity: Identity, changes: Mapping[str, Any]) -> User:
        allowed = _pick(changes, PROFILE_FIELDS)
        if not allowed:
            raise InvalidInputError("No updatable profile fields supplied")
        user = self._users.update_user_profile(identity.email, allowed)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def set_role(self, user_id: str, role: str) -> User:
        if role not in USER_ROLES:
            raise InvalidInputError(f"Invalid role: {role}")
        user = self._users.update_user(user_id, {"role": role})
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s role set to %s", user.email, role)
        return user

    def set_status(self, user_id: str, status: str) -> User:
        if status not in USER_STATUSES:
            raise InvalidInputError(f"Invalid status: {status}")
        user = self._users.update_user(user_id, {"status": status})
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s status set to %s", user.email, status)
        return user

    def list_users(self, page: PageRequest, *, status: Optional[str] = None) -> Page[User]:
        query = build_user_query(status=status)
        total = self._users.count_users(query)
        items = self._users.find_users(query, skip=page.skip, limit=page.limit)
        return Page(items=items, pagination=Pagination.build(page, total))

    def search_donors(
        self,
        *,
        blood_group: Optional[str] = None,
        district: Optional[str] = None,
        upazila: Optional[str] = None,
    ) -> List[User]:
        query = build_donor_query(blood_group=blood_group, district=district, upazila=upazila)
        return self._users.find_users(query)

    def count_donors(self) -> int:
        return self._users.count_users({"role": ROLE_DONOR})


def _pick(source: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    return {key: source[key] for key in fields if key in source and source[key] is not None}
