import os
from typing import List, Optional

from dotenv import load_dotenv


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.environment = os.getenv("APP_ENV", "development").strip().lower()
        self.mongodb_uri = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.mongodb_database = os.getenv("MONGODB_DATABASE", "blood_db")
        self.identity_token_secret = os.getenv("IDENTITY_TOKEN_SECRET", "change-me")
        self.identity_token_algorithms = self._get_list("IDENTITY_TOKEN_ALGORITHMS", ["HS256"])
        self.identity_token_audience = os.getenv("IDENTITY_TOKEN_AUDIENCE") or None
        self.identity_token_issuer = os.getenv("IDENTITY_TOKEN_ISSUER") or None
        self.stripe_secret_key = os.getenv("STRIPE_SECRET_KEY") or None
        self.funding_currency = os.getenv("FUNDING_CURRENCY", "usd").strip().lower()
        self.funding_min_amount = self._get_int("FUNDING_MIN_AMOUNT", default=1)
        self.admin_listing_public = self._get_bool("ADMIN_LISTING_PUBLIC", default=False)
        self.cors_allow_origins = self._get_list("CORS_ALLOW_ORIGINS", ["*"])

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        normalized = value.strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return True
        if normalized in ("0", "false", "no", "off"):
            return False
        raise RuntimeError(f"Environment variable {key} must be a boolean")

    @staticmethod
    def _get_list(key: str, default: List[str]) -> List[str]:
        value = os.getenv(key)
        if not value:
            return list(default)
        items = [item.strip() for item in value.split(",") if item.strip()]
        return items or list(default)
