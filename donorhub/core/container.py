from dataclasses import dataclass

from ..application.services.auth_guard import AuthGuard
from ..application.services.donation_request_service import DonationRequestService
from ..application.services.funding_service import FundingService
from ..application.services.stats_service import AdminStatsService
from ..application.services.user_service import UserService
from .config import Settings
from ..domain.ports.identity import IdentityProvider
from ..domain.ports.payments import PaymentGateway
from ..domain.ports.persistence import PersistenceGateway


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    identity_provider: IdentityProvider
    payment_gateway: PaymentGateway
    auth_guard: AuthGuard
    user_service: UserService
    donation_request_service: DonationRequestService
    funding_service: FundingService
    stats_service: AdminStatsService


def build_container(
    settings: Settings,
    persistence: PersistenceGateway,
    identity_provider: IdentityProvider,
    payment_gateway: PaymentGateway,
) -> ApplicationContainer:
    user_service = UserService(persistence)
    donation_request_service = DonationRequestService(persistence, persistence)
    funding_service = FundingService(
        persistence,
        payment_gateway,
        currency=settings.funding_currency,
        min_amount=settings.funding_min_amount,
    )
    return ApplicationContainer(
        settings=settings,
        persistence=persistence,
        identity_provider=identity_provider,
        payment_gateway=payment_gateway,
        auth_guard=AuthGuard(identity_provider, persistence),
        user_service=user_service,
        donation_request_service=donation_request_service,
        funding_service=funding_service,
        stats_service=AdminStatsService(user_service, donation_request_service, funding_service),
    )
