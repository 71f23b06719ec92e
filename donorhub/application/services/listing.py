"""Query builders and pagination helpers shared by the listing endpoints."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ...domain.errors import InvalidInputError
from ...domain.models.user import ROLE_DONOR, STATUS_ACTIVE

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidInputError("page must be at least 1")
        if self.limit < 1 or self.limit > MAX_LIMIT:
            raise InvalidInputError(f"limit must be between 1 and {MAX_LIMIT}")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class Pagination:
    current_page: int
    total_pages: int
    total: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: PageRequest, total: int) -> "Pagination":
        total_pages = math.ceil(total / page.limit) if total else 0
        return cls(
            current_page=page.page,
            total_pages=total_pages,
            total=total,
            has_next=page.page < total_pages,
            has_prev=page.page > 1,
        )

    def to_dict(self, total_key: str = "totalRequests") -> Dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            total_key: self.total,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass
class Page(Generic[T]):
    items: List[T]
    pagination: Pagination


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def build_request_query(
    *,
    status: Optional[str] = None,
    blood_group: Optional[str] = None,
    district: Optional[str] = None,
) -> Dict[str, Any]:
    """Conjunctive filter over donation requests; blank values add no constraint."""
    query: Dict[str, Any] = {}
    status_value = _clean(status)
    if status_value:
        query["status"] = status_value
    blood_group_value = _clean(blood_group)
    if blood_group_value:
        query["bloodGroup"] = blood_group_value
    district_value = _clean(district)
    if district_value:
        query["district"] = {"$regex": re.escape(district_value), "$options": "i"}
    return query


def build_owner_query(requester_email: str) -> Dict[str, Any]:
    return {"requesterEmail": requester_email.strip().lower()}


def build_donor_query(
    *,
    blood_group: Optional[str] = None,
    district: Optional[str] = None,
    upazila: Optional[str] = None,
) -> Dict[str, Any]:
    """Active donors only, narrowed by exact profile matches."""
    query: Dict[str, Any] = {"role": ROLE_DONOR, "status": STATUS_ACTIVE}
    for key, value in (("bloodGroup", blood_group), ("district", district), ("upazila", upazila)):
        cleaned = _clean(value)
        if cleaned:
            query[key] = cleaned
    return query


def build_user_query(*, status: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    status_value = _clean(status)
    if status_value:
        query["status"] = status_value
    return query
