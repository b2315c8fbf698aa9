import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from config import PAYSTACK_BASE_URL
from errors import PaystackResponseError
from schemas import PaystackVerifyResponse, VerificationResult

logger = logging.getLogger("order-relay")

SUCCESS_STATUS = "success"


def interpret_verification(body: Any) -> VerificationResult:
    """Turn a decoded ``/transaction/verify`` body into a VerificationResult.

    Raises PaystackResponseError when the body does not have the documented
    shape, including a confirmed transaction without an amount.
    """
    try:
        parsed = PaystackVerifyResponse.model_validate(body)
    except ValidationError as exc:
        raise PaystackResponseError(f"Unexpected Paystack response: {exc}") from exc

    if not parsed.status:
        return VerificationResult(verified=False, paid_amount_minor_units=None)
    if parsed.data is None:
        raise PaystackResponseError("Paystack response is missing transaction data")

    transaction = parsed.data
    return VerificationResult(
        verified=transaction.status == SUCCESS_STATUS,
        paid_amount_minor_units=transaction.amount,
        gateway_response=transaction.gateway_response,
        currency=transaction.currency,
    )


class PaystackVerifier:
    def __init__(
        self,
        secret_key: Optional[str],
        *,
        http_client: httpx.AsyncClient,
        base_url: str = PAYSTACK_BASE_URL,
    ) -> None:
        self._secret_key = secret_key
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client

    def _verify_url(self, reference: str) -> str:
        return f"{self._base_url}/transaction/verify/{quote(reference, safe='')}"

    async def _get(self, url: str) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._secret_key}"}
        return await self._http_client.get(url, headers=headers)

    async def verify(self, reference: str) -> VerificationResult:
        response = await self._get(self._verify_url(reference))
        body = response.json()
        result = interpret_verification(body)
        logger.info(
            "Paystack verification ref=%s http=%s verified=%s amount=%s",
            reference,
            response.status_code,
            result.verified,
            result.paid_amount_minor_units,
        )
        return result
