"""
Payment gateway clients.

The order pipeline only needs ``authorize(amount, currency, reference)``;
how the charge is actually approved is up to the gateway:

- ``SimulatedPaymentGateway`` approves anything up to a configured limit
- ``HttpPaymentGateway`` calls a remote charges API authenticated with an
  HS256 JWT (issuer = access key, signed with the secret key)
"""
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

import jwt
import requests

from .logging import log_event


@dataclass
class PaymentAuthorization:
    approved: bool
    reference: Optional[str] = None
    reason: Optional[str] = None


class SimulatedPaymentGateway:
    """Approves positive charges up to ``approval_limit``."""

    def __init__(self, approval_limit: Decimal = Decimal("500.00")) -> None:
        self.approval_limit = Decimal(str(approval_limit))

    def authorize(self, amount: Decimal, currency: str, reference: str) -> PaymentAuthorization:
        if amount <= 0:
            return PaymentAuthorization(approved=False, reason="amount must be greater than zero")
        if amount > self.approval_limit:
            return PaymentAuthorization(
                approved=False,
                reason=f"amount {amount} {currency} exceeds approval limit {self.approval_limit}",
            )
        return PaymentAuthorization(approved=True, reference=f"sim-{reference}")


class HttpPaymentGateway:
    """Remote charges API client."""

    CHARGES_PATH = "/v1/charges"
    TOKEN_TTL_SECONDS = 1800

    def __init__(self, base_url: str, access_key: str, secret_key: str, timeout: float = 10) -> None:
        if not base_url:
            raise ValueError("payment gateway base_url required")
        self.base_url = base_url.rstrip("/")
        self.access_key = access_key
        self.secret_key = secret_key
        self.timeout = timeout

    def _generate_jwt_token(self) -> str:
        if not self.access_key or not self.secret_key:
            return ""
        current_time = int(time.time())
        payload = {
            "iss": self.access_key,
            "exp": current_time + self.TOKEN_TTL_SECONDS,
            "nbf": current_time - 5,  # tolerate small clock skew
        }
        return jwt.encode(payload, self.secret_key, algorithm="HS256", headers={"alg": "HS256", "typ": "JWT"})

    def _get_headers(self) -> Dict[str, str]:
        token = self._generate_jwt_token()
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def authorize(self, amount: Decimal, currency: str, reference: str) -> PaymentAuthorization:
        url = f"{self.base_url}{self.CHARGES_PATH}"
        body = {"amount": str(amount), "currency": currency, "reference": reference}
        try:
            response = requests.post(url, json=body, headers=self._get_headers(), timeout=self.timeout)
        except requests.exceptions.Timeout:
            log_event("warning", "payment.gateway.timeout", reference=reference)
            return PaymentAuthorization(approved=False, reason="payment gateway timeout")
        except requests.exceptions.RequestException as exc:
            log_event("warning", "payment.gateway.unreachable", reference=reference, error=type(exc).__name__)
            return PaymentAuthorization(approved=False, reason="payment gateway unreachable")

        if response.status_code >= 500:
            return PaymentAuthorization(approved=False, reason=f"payment gateway error {response.status_code}")
        try:
            data = response.json()
        except ValueError:
            return PaymentAuthorization(approved=False, reason="invalid payment gateway response")
        if not isinstance(data, dict):
            return PaymentAuthorization(approved=False, reason="invalid payment gateway response")

        if data.get("status") == "approved":
            return PaymentAuthorization(approved=True, reference=str(data.get("id") or reference))
        return PaymentAuthorization(approved=False, reason=str(data.get("reason") or "declined"))


def build_payment_gateway(config):
    """Pick the gateway named by ``config.payment_gateway``."""
    if config.payment_gateway == "http":
        return HttpPaymentGateway(
            config.payment_gateway_url,
            config.payment_access_key,
            config.payment_secret_key,
            timeout=config.payment_timeout,
        )
    return SimulatedPaymentGateway(config.payment_approval_limit)
