"""Domain models for the donorhub application."""

from .donation_request import DonationRequest
from .funding import Funding
from .identity import Identity
from .user import User

__all__ = [
    "DonationRequest",
    "Funding",
    "Identity",
    "User",
]
