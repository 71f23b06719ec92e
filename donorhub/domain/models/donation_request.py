"""Donation request domain model and its status lifecycle constants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "inprogress"
STATUS_DONE = "done"
STATUS_CANCELED = "canceled"

OPEN_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS)

# Close-out target -> statuses it may be reached from.
CLOSE_OUT_SOURCES = {
    STATUS_DONE: (STATUS_IN_PROGRESS,),
    STATUS_CANCELED: OPEN_STATUSES,
}


@dataclass(slots=True)
class DonationRequest:
    id: str
    requester_email: str
    recipient_name: str
    hospital_name: str
    blood_group: str
    district: str
    upazila: str
    donation_date: str
    donation_time: str
    status: str = STATUS_PENDING
    requester_name: Optional[str] = None
    full_address: Optional[str] = None
    request_message: Optional[str] = None
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    donated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def is_owned_by(self, email: str) -> bool:
        return self.requester_email == email.strip().lower()
