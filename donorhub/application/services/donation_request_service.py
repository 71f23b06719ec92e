from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import ForbiddenError, InvalidInputError, NotFoundError
from ...domain.models import DonationRequest, Identity
from ...domain.models.donation_request import (
    CLOSE_OUT_SOURCES,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
)
from ...domain.ports.persistence import DonationRequestRepository, UserRepository
from .listing import Page, PageRequest, Pagination, build_owner_query, build_request_query

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "recipientName",
    "hospitalName",
    "bloodGroup",
    "district",
    "upazila",
    "donationDate",
    "donationTime",
)
OPTIONAL_FIELDS = ("fullAddress", "requestMessage")
EDITABLE_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

NOT_FOUND_OR_TAKEN = "Donation request not found or already taken"


class DonationRequestService:
    """Owns the donation request status lifecycle and its guarded updates."""

    def __init__(self, requests: DonationRequestRepository, users: UserRepository) -> None:
        self._requests = requests
        self._users = users

    # Creation and lookup --------------------------------------------------
    def create(self, identity: Identity, payload: Mapping[str, Any]) -> DonationRequest:
        requester = self._users.get_user_by_email(identity.email)
        if requester is not None and requester.is_blocked:
            raise ForbiddenError("Blocked users cannot create donation requests")

        document: Dict[str, Any] = {}
        for key in REQUIRED_FIELDS:
            value = payload.get(key)
            if not isinstance(value, str) or not value.strip():
                raise InvalidInputError(f"{key} is required")
            document[key] = value.strip()
        for key in OPTIONAL_FIELDS:
            value = payload.get(key)
            if value is not None:
                document[key] = value

        now = _now()
        document.update(
            {
                "requesterEmail": identity.email,
                "requesterName": identity.name or (requester.name if requester else None),
                "status": STATUS_PENDING,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        request = self._requests.create_donation_request(document)
        logger.info("Donation request %s created by %s", request.id, identity.email)
        return request

    def get(self, request_id: str) -> DonationRequest:
        request = self._requests.get_donation_request(request_id)
        if request is None:
            raise NotFoundError("Donation request not found")
        return request

    # Listings -------------------------------------------------------------
    def list_requests(
        self,
        page: PageRequest,
        *,
        status: Optional[str] = None,
        blood_group: Optional[str] = None,
        district: Optional[str] = None,
    ) -> Page[DonationRequest]:
        query = build_request_query(status=status, blood_group=blood_group, district=district)
        total = self._requests.count_donation_requests(query)
        items = self._requests.find_donation_requests(query, skip=page.skip, limit=page.limit)
        return Page(items=items, pagination=Pagination.build(page, total))

    def list_pending(
        self,
        page: PageRequest,
        *,
        blood_group: Optional[str] = None,
        district: Optional[str] = None,
    ) -> Page[DonationRequest]:
        return self.list_requests(page, status=STATUS_PENDING, blood_group=blood_group, district=district)

    def list_for_requester(self, identity: Identity, *, limit: Optional[int] = None) -> List[DonationRequest]:
        if limit is not None and limit < 1:
            raise InvalidInputError("limit must be at least 1")
        return self._requests.find_donation_requests(build_owner_query(identity.email), limit=limit or 0)

    def count_all(self) -> int:
        return self._requests.count_donation_requests({})

    # Transitions ----------------------------------------------------------
    def claim(self, request_id: str, donor: Identity, donor_name: Optional[str] = None) -> DonationRequest:
        """Move a pending request to ``inprogress`` for the calling donor.

        The update is keyed on ``status == pending`` so that of two racing
        claimants only one can match.
        """
        claimant = self._users.get_user_by_email(donor.email)
        if claimant is not None and claimant.is_blocked:
            raise ForbiddenError("Blocked users cannot donate")

        now = _now()
        changes = {
            "status": STATUS_IN_PROGRESS,
            "donorName": donor.name or donor_name,
            "donorEmail": donor.email,
            "donatedAt": now,
            "updatedAt": now,
        }
        updated = self._requests.update_donation_request(
            request_id,
            {"status": STATUS_PENDING},
            changes,
        )
        if updated is None:
            raise NotFoundError(NOT_FOUND_OR_TAKEN)
        logger.info("Donation request %s claimed by %s", request_id, donor.email)
        return updated

    def close(self, request_id: str, identity: Identity, target_status: str) -> DonationRequest:
        sources = CLOSE_OUT_SOURCES.get(target_status)
        if sources is None:
            raise InvalidInputError(f"Invalid status: {target_status}")
        request = self.get(request_id)
        if not request.is_owned_by(identity.email):
            raise ForbiddenError("Only the requester can change this request's status")
        if request.status not in sources:
            raise InvalidInputError(f"Cannot move a {request.status} request to {target_status}")

        updated = self._requests.update_donation_request(
            request_id,
            {"requesterEmail": identity.email, "status": {"$in": list(sources)}},
            {"status": target_status, "updatedAt": _now()},
        )
        if updated is None:
            raise NotFoundError("Donation request not found or its status changed")
        logger.info("Donation request %s marked %s", request_id, target_status)
        return updated

    def edit(self, request_id: str, identity: Identity, changes: Mapping[str, Any]) -> DonationRequest:
        allowed = {key: changes[key] for key in EDITABLE_FIELDS if key in changes and changes[key] is not None}
        if not allowed:
            raise InvalidInputError("No editable fields supplied")
        for key in REQUIRED_FIELDS:
            if key not in allowed:
                continue
            if not isinstance(allowed[key], str) or not allowed[key].strip():
                raise InvalidInputError(f"{key} cannot be empty")
            allowed[key] = allowed[key].strip()

        request = self.get(request_id)
        if not request.is_owned_by(identity.email):
            raise ForbiddenError("Only the requester can edit this request")
        if not request.is_pending:
            raise InvalidInputError("Only pending requests can be edited")

        allowed["updatedAt"] = _now()
        updated = self._requests.update_donation_request(
            request_id,
            {"requesterEmail": identity.email, "status": STATUS_PENDING},
            allowed,
        )
        if updated is None:
            raise NotFoundError("Donation request not found or no longer pending")
        return updated

    def delete(self, request_id: str, identity: Identity, *, is_admin: bool) -> None:
        if is_admin:
            if not self._requests.delete_donation_request(request_id):
                raise NotFoundError("Donation request not found")
            logger.info("Donation request %s deleted by admin %s", request_id, identity.email)
            return

        request = self.get(request_id)
        if not request.is_owned_by(identity.email) or not request.is_pending:
            raise ForbiddenError("Only the requester can delete a pending request")
        deleted = self._requests.delete_donation_request(
            request_id,
            {"requesterEmail": identity.email, "status": STATUS_PENDING},
        )
        if not deleted:
            raise NotFoundError("Donation request not found or no longer pending")
        logger.info("Donation request %s deleted by %s", request_id, identity.email)


def _now() -> datetime:
    return datetime.now(timezone.utc)
