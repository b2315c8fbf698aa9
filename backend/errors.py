"""Error taxonomy for the order relay.

Each error raised by the settlement workflow carries the HTTP status and
the message the storefront is allowed to see. Internal detail stays in the
logs.
"""

from enum import Enum

from constants import (
    AMOUNT_MISMATCH_MESSAGE,
    INVALID_ORDER_MESSAGE,
    PAYMENT_VERIFICATION_FAILED_MESSAGE,
    PERSISTENCE_FAILED_MESSAGE,
)


class SettlementOutcome(str, Enum):
    REJECTED_INPUT = "rejected_input"
    REJECTED_PAYMENT = "rejected_payment"
    REJECTED_AMOUNT_MISMATCH = "rejected_amount_mismatch"
    PERSIST_FAILED = "persist_failed"
    PERSISTED = "persisted"


class RelayError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code = 500
    public_message = "Internal Server Error"
    outcome: SettlementOutcome | None = None

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InputValidationError(RelayError):
    """Raised when the callback payload is missing or malformed."""

    status_code = 400
    public_message = INVALID_ORDER_MESSAGE
    outcome = SettlementOutcome.REJECTED_INPUT


class PaymentVerificationError(RelayError):
    """Raised when Paystack does not confirm a successful payment."""

    status_code = 400
    public_message = PAYMENT_VERIFICATION_FAILED_MESSAGE
    outcome = SettlementOutcome.REJECTED_PAYMENT


class PaystackResponseError(PaymentVerificationError):
    """Raised when a Paystack response does not match the expected shape."""


class AmountMismatchError(PaymentVerificationError):
    """Raised when the amount paid is below the order total."""

    public_message = AMOUNT_MISMATCH_MESSAGE
    outcome = SettlementOutcome.REJECTED_AMOUNT_MISMATCH

    def __init__(self, paid: int, expected: int) -> None:
        super().__init__(f"Paid {paid} minor units, expected at least {expected}")
        self.paid = paid
        self.expected = expected


class PersistenceError(RelayError):
    """Raised when a verified order could not be written to the store."""

    status_code = 500
    public_message = PERSISTENCE_FAILED_MESSAGE
    outcome = SettlementOutcome.PERSIST_FAILED


class NotificationError(RelayError):
    """Raised inside the SMS client; converted to a failed SmsResult there."""
