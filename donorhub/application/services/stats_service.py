from typing import Dict

from .donation_request_service import DonationRequestService
from .funding_service import FundingService
from .user_service import UserService


class AdminStatsService:
    """Aggregates dashboard counters for administrators."""

    def __init__(
        self,
        user_service: UserService,
        request_service: DonationRequestService,
        funding_service: FundingService,
    ) -> None:
        self._users = user_service
        self._requests = request_service
        self._fundings = funding_service

    def overview(self) -> Dict[str, int]:
        return {
            "totalDonors": self._users.count_donors(),
            "totalRequests": self._requests.count_all(),
            "totalFunding": self._fundings.total_amount(),
        }
