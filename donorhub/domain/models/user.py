"""User domain model for donor and administrator profiles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ROLE_DONOR = "donor"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_DONOR, ROLE_ADMIN)

STATUS_ACTIVE = "active"
STATUS_BLOCKED = "blocked"
USER_STATUSES = (STATUS_ACTIVE, STATUS_BLOCKED)


@dataclass(slots=True)
class User:
    """
    Registered platform user.

    Attributes:
        id: Store-generated identifier (hex string)
        email: Lowercased, unique lookup key
        role: ``donor`` or ``admin``
        status: ``active`` or ``blocked``
        created_at: Registration timestamp, never changed afterwards
    """

    id: str
    email: str
    role: str = ROLE_DONOR
    status: str = STATUS_ACTIVE
    name: Optional[str] = None
    blood_group: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_blocked(self) -> bool:
        return self.status == STATUS_BLOCKED
