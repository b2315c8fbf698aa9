import logging
from typing import Any, Dict, Optional, Protocol

from constants import RESERVATION_STATUS_MESSAGES
from schemas import ReservationChangeEvent, SmsResult

logger = logging.getLogger("order-relay")


class SmsSender(Protocol):
    async def send(self, to: Any, message: Any) -> SmsResult: ...


def _normalize_status(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip().lower() or None


class ReservationStatusReactor:
    """Texts the guest when a reservation moves into a tracked status."""

    def __init__(
        self,
        sms_client: SmsSender,
        status_messages: Optional[Dict[str, str]] = None,
    ) -> None:
        self._sms_client = sms_client
        self._status_messages = dict(status_messages or RESERVATION_STATUS_MESSAGES)

    async def handle(self, event: ReservationChangeEvent) -> Optional[SmsResult]:
        try:
            return await self._handle(event)
        except Exception as exc:  # subscription must outlive any single event
            logger.exception(
                "Error processing status change for reservation %s: %s", event.id, exc
            )
            return None

    async def _handle(self, event: ReservationChangeEvent) -> Optional[SmsResult]:
        new_status = _normalize_status(event.new_status)
        if not new_status or new_status not in self._status_messages:
            logger.info('Status "%s" does not require SMS notification.', event.new_status)
            return None

        old_status = _normalize_status(event.old_status)
        if old_status == new_status:
            logger.info(
                "Status unchanged for reservation %s (%s), skipping SMS.", event.id, new_status
            )
            return None

        phone = event.phone
        if not isinstance(phone, str) or not phone.strip():
            logger.warning(
                "No valid phone number found for reservation %s, cannot send SMS.", event.id
            )
            return None

        logger.info(
            "Sending SMS to %s for reservation %s (status: %s -> %s)",
            phone,
            event.id,
            event.old_status,
            new_status,
        )
        result = await self._sms_client.send(phone, self._status_messages[new_status])
        if result.success:
            logger.info("SMS sent to %s for reservation %s", phone, event.id)
        else:
            logger.error(
                "Failed to send SMS to %s for reservation %s: %s", phone, event.id, result.error
            )
        return result
