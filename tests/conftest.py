from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import mongomock
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from donorhub.core.app_factory import create_application
from donorhub.core.config import Settings
from donorhub.core.container import build_container
from donorhub.infrastructure.persistence.mongo import MongoPersistence
from donorhub.services.identity_provider import JWTIdentityProvider

TOKEN_SECRET = "test-identity-secret"

REQUEST_PAYLOAD: Dict[str, Any] = {
    "recipientName": "Rahim Uddin",
    "hospitalName": "Dhaka Medical College Hospital",
    "fullAddress": "Secretariat Rd, Dhaka 1000",
    "bloodGroup": "O+",
    "district": "Dhaka",
    "upazila": "Shahbagh",
    "donationDate": "2026-11-02",
    "donationTime": "10:30",
    "requestMessage": "Patient needs two bags before surgery.",
}

_ENV_KEYS = (
    "APP_ENV",
    "MONGODB_URI",
    "MONGODB_DATABASE",
    "IDENTITY_TOKEN_SECRET",
    "IDENTITY_TOKEN_ALGORITHMS",
    "IDENTITY_TOKEN_AUDIENCE",
    "IDENTITY_TOKEN_ISSUER",
    "STRIPE_SECRET_KEY",
    "FUNDING_CURRENCY",
    "FUNDING_MIN_AMOUNT",
    "ADMIN_LISTING_PUBLIC",
    "CORS_ALLOW_ORIGINS",
)


class FakePaymentGateway:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        *,
        receipt_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        self.calls.append({"amount": amount, "currency": currency, "receipt_email": receipt_email})
        return {"client_secret": "pi_123_secret_456", "payment_intent_id": "pi_123"}


def make_token(email: str, name: Optional[str] = None, *, secret: str = TOKEN_SECRET, **claims: Any) -> str:
    payload: Dict[str, Any] = {
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        "iat": datetime.now(timezone.utc),
    }
    if name:
        payload["name"] = name
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(email: str, name: Optional[str] = None) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email, name)}"}


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    result = Settings()
    result.identity_token_secret = TOKEN_SECRET
    return result


@pytest.fixture
def persistence() -> MongoPersistence:
    client = mongomock.MongoClient()
    return MongoPersistence(client["blood_db_test"])


@pytest.fixture
def payments() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def container(settings, persistence, payments):
    return build_container(settings, persistence, JWTIdentityProvider(TOKEN_SECRET), payments)


@pytest.fixture
def client(container):
    app = create_application(container=container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(persistence):
    def _make_user(email: str, *, role: str = "donor", status: str = "active", **profile: Any):
        document = {"role": role, "status": status}
        document.update(profile)
        user, _ = persistence.register_user(email, document, datetime.now(timezone.utc))
        return user

    return _make_user
