from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

from ..models import DonationRequest, Funding, User

Query = Mapping[str, Any]


class UserRepository(Protocol):
    """Persistence functions related to user profiles."""

    def register_user(self, email: str, profile: Dict[str, Any], created_at: datetime) -> Tuple[User, bool]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def update_user_profile(self, email: str, changes: Dict[str, Any]) -> Optional[User]:
        ...

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        ...

    def find_users(self, query: Query, *, skip: int = 0, limit: int = 0) -> List[User]:
        ...

    def count_users(self, query: Query) -> int:
        ...


class DonationRequestRepository(Protocol):
    """Persistence functions related to donation requests."""

    def create_donation_request(self, document: Dict[str, Any]) -> DonationRequest:
        ...

    def get_donation_request(self, request_id: str) -> Optional[DonationRequest]:
        ...

    def find_donation_requests(self, query: Query, *, skip: int = 0, limit: int = 0) -> List[DonationRequest]:
        ...

    def count_donation_requests(self, query: Query) -> int:
        ...

    def update_donation_request(
        self,
        request_id: str,
        precondition: Query,
        changes: Dict[str, Any],
    ) -> Optional[DonationRequest]:
        ...

    def delete_donation_request(self, request_id: str, precondition: Optional[Query] = None) -> bool:
        ...


class FundingRepository(Protocol):
    """Persistence functions related to monetary contributions."""

    def create_funding(self, document: Dict[str, Any]) -> Funding:
        ...

    def list_fundings(self) -> List[Funding]:
        ...

    def total_funding_amount(self) -> int:
        ...


class PersistenceGateway(
    UserRepository,
    DonationRequestRepository,
    FundingRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    def ping(self) -> bool:
        ...
