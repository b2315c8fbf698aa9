import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Protocol

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError

from constants import INITIAL_ORDER_STATUS
from errors import (
    AmountMismatchError,
    InputValidationError,
    PaymentVerificationError,
    PersistenceError,
    SettlementOutcome,
)
from schemas import PaystackCallbackRequest, VerificationResult

logger = logging.getLogger("order-relay")

MINOR_UNITS_PER_MAJOR = Decimal(100)


class Verifier(Protocol):
    async def verify(self, reference: str) -> VerificationResult: ...


class OrderStore(Protocol):
    def insert_order(self, record: Dict[str, Any]) -> Dict[str, Any]: ...


def to_minor_units(amount: Decimal) -> int:
    return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _parse_request(payload: Any) -> PaystackCallbackRequest:
    if not isinstance(payload, dict):
        raise InputValidationError("Callback body must be a JSON object")
    try:
        return PaystackCallbackRequest.model_validate(payload)
    except ValidationError as exc:
        raise InputValidationError(str(exc)) from exc


class SettlementService:
    """Verifies a Paystack payment and records the order it paid for."""

    def __init__(self, verifier: Verifier, orders: OrderStore) -> None:
        self._verifier = verifier
        self._orders = orders

    async def settle(self, payload: Any) -> Dict[str, Any]:
        request = _parse_request(payload)
        reference = request.reference

        result = await self._verifier.verify(reference)
        if not result.verified:
            logger.warning("Payment verification failed for ref=%s", reference)
            raise PaymentVerificationError(f"Paystack did not confirm ref={reference}")

        expected = to_minor_units(request.order.total)
        paid = result.paid_amount_minor_units
        if paid is None or paid < expected:
            # overpayment (tips) is accepted; underpayment never is
            logger.warning(
                "Payment amount mismatch for ref=%s: paid=%s expected=%s",
                reference,
                paid,
                expected,
            )
            raise AmountMismatchError(paid or 0, expected)

        record = {
            **payload["order"],
            "payment_reference": reference,
            "status": INITIAL_ORDER_STATUS,
            "seen": False,
        }
        try:
            saved = await asyncio.to_thread(self._orders.insert_order, record)
        except (APIError, RuntimeError, httpx.HTTPError) as exc:
            logger.critical(
                "[CRITICAL] DB insert failed for verified payment ref: %s. Order: %s. Error: %s",
                reference,
                payload["order"],
                exc,
            )
            raise PersistenceError(f"Insert failed for ref={reference}") from exc

        logger.info("Settlement ended with %s for ref=%s", SettlementOutcome.PERSISTED.value, reference)
        return saved
