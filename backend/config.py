import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")

PAYSTACK_BASE_URL = "https://api.paystack.co"
HUBTEL_SMS_URL = "https://sms.hubtel.com/v1/messages/send"


def _get_env(name: str, fallback: str | None = None) -> str | None:
    value = os.getenv(name)
    if not value:
        return fallback
    return value.strip()


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    paystack_secret_key: str | None = _get_env("PAYSTACK_SECRET_KEY")
    paystack_base_url: str = _get_env("PAYSTACK_BASE_URL", PAYSTACK_BASE_URL)
    supabase_url: str | None = _get_env("SUPABASE_URL")
    supabase_service_key: str | None = _get_env(
        "SUPABASE_SERVICE_KEY", _get_env("SUPABASE_SERVICE_ROLE_KEY")
    )
    hubtel_client_id: str | None = _get_env("HUBTEL_CLIENT_ID")
    hubtel_client_secret: str | None = _get_env("HUBTEL_CLIENT_SECRET")
    hubtel_from: str | None = _get_env("HUBTEL_FROM")
    hubtel_sms_url: str = _get_env("HUBTEL_SMS_URL", HUBTEL_SMS_URL)
    frontend_url: str | None = _get_env("FRONTEND_URL")
    port: int = int(os.getenv("PORT", "5000"))
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    orders_table: str = _get_env("ORDERS_TABLE", "orders")
    reservations_table: str = _get_env("RESERVATIONS_TABLE", "reservations")
    extra_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "http://127.0.0.1:5500")
    )

    @property
    def allowed_origins(self) -> List[str]:
        origins = [self.frontend_url] if self.frontend_url else []
        return origins + [item for item in self.extra_origins if item not in origins]

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    @property
    def settlement_configured(self) -> bool:
        return bool(self.paystack_secret_key) and self.store_configured

    @property
    def sms_configured(self) -> bool:
        return bool(self.hubtel_client_id and self.hubtel_client_secret and self.hubtel_from)

    def missing_for_settlement(self) -> List[str]:
        missing = []
        if not self.paystack_secret_key:
            missing.append("PAYSTACK_SECRET_KEY")
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_service_key:
            missing.append("SUPABASE_SERVICE_KEY")
        return missing


settings = Settings()
