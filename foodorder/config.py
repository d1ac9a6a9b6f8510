import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
import json
from typing import Optional

from dotenv import load_dotenv


GATEWAYS = {"simulated", "http"}


@dataclass
class AppConfig:
    database_url: str
    secret_key: str
    log_level: str
    currency: str
    payment_gateway: str = "simulated"
    payment_gateway_url: str = ""
    payment_access_key: str = ""
    payment_secret_key: str = ""
    payment_approval_limit: Decimal = Decimal("500.00")
    payment_timeout: float = 10.0


def validate_currency(value: Optional[str]) -> str:
    v = (value or "USD").strip().upper()
    if len(v) != 3 or not v.isalpha():
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


def validate_gateway(value: Optional[str]) -> str:
    v = (value or "simulated").strip().lower()
    if v not in GATEWAYS:
        raise ValueError(f"Unknown payment gateway: {v}")
    return v


def _decimal(value: Optional[str], default: str) -> Decimal:
    try:
        return Decimal(str(value or default))
    except InvalidOperation:
        raise ValueError(f"Invalid decimal value: {value}") from None


def _load_settings_file() -> dict:
    path = Path(__file__).resolve().parents[1] / "data" / "settings.json"
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def load_env() -> AppConfig:
    # the process environment (and .env) wins over data/settings.json
    load_dotenv()
    s = _load_settings_file()

    def get(key: str, default: str = "") -> str:
        return str(os.getenv(key) or s.get(key) or default)

    gateway = validate_gateway(get("PAYMENT_GATEWAY", "simulated"))
    config = AppConfig(
        database_url=get("DATABASE_URL", "sqlite:///data/foodorder.db"),
        secret_key=get("SECRET_KEY", "dev_secret"),
        log_level=get("LOG_LEVEL", "INFO"),
        currency=validate_currency(get("CURRENCY", "USD")),
        payment_gateway=gateway,
        payment_gateway_url=get("PAYMENT_GATEWAY_URL"),
        payment_access_key=get("PAYMENT_ACCESS_KEY"),
        payment_secret_key=get("PAYMENT_SECRET_KEY"),
        payment_approval_limit=_decimal(get("PAYMENT_APPROVAL_LIMIT"), "500.00"),
        payment_timeout=float(get("PAYMENT_TIMEOUT", "10")),
    )
    if gateway == "http" and not config.payment_gateway_url:
        raise ValueError("PAYMENT_GATEWAY_URL is required for the http gateway")
    return config
