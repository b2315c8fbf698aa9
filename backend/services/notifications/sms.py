import logging
from typing import Any, Optional

import httpx

from config import HUBTEL_SMS_URL
from errors import NotificationError
from schemas import HubtelSendResponse, SmsResult

from .phone import normalize_phone

logger = logging.getLogger("order-relay")

PLAIN_TEXT_TYPE = 0
REQUEST_DELIVERY_RECEIPT = 1


def _error_from_response(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        body = {}
    parsed = HubtelSendResponse.parse_lenient(body)
    return parsed.message or parsed.error or f"HTTP {response.status_code}: {response.reason_phrase}"


class HubtelSmsClient:
    """Sends plain-text SMS through the Hubtel messaging API.

    ``send`` never raises: every failure is reported as an unsuccessful
    ``SmsResult`` so callers running in long-lived loops stay alive.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        sender_id: Optional[str],
        *,
        http_client: httpx.AsyncClient,
        url: str = HUBTEL_SMS_URL,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._sender_id = sender_id
        self._url = url
        self._http_client = http_client

    @property
    def configured(self) -> bool:
        return bool(self._client_id and self._client_secret and self._sender_id)

    def _check_credentials(self) -> None:
        if not self.configured:
            raise NotificationError(
                "Hubtel credentials not configured. Please set HUBTEL_CLIENT_ID, "
                "HUBTEL_CLIENT_SECRET, and HUBTEL_FROM environment variables."
            )

    async def _post(self, payload: dict) -> httpx.Response:
        auth = (self._client_id, self._client_secret)
        return await self._http_client.post(self._url, json=payload, auth=auth)

    async def send(self, to: Any, message: Any) -> SmsResult:
        try:
            self._check_credentials()
            phone = normalize_phone(to)
            if not phone:
                raise NotificationError(f"Invalid phone number: {to}")
            if not isinstance(message, str) or not message.strip():
                raise NotificationError("Message cannot be empty")
        except NotificationError as exc:
            logger.error("SMS not sent: %s", exc.detail)
            return SmsResult(success=False, error=exc.detail)

        payload = {
            "From": self._sender_id,
            "To": phone,
            "Content": message.strip(),
            "Type": PLAIN_TEXT_TYPE,
            "RegisteredDelivery": REQUEST_DELIVERY_RECEIPT,
        }
        try:
            response = await self._post(payload)
            if not response.is_success:
                error = _error_from_response(response)
                logger.error("Failed to send SMS to %s: %s", phone, error)
                return SmsResult(success=False, error=error)
            try:
                body: Any = response.json()
            except ValueError:
                body = {}
        except Exception as exc:
            error = str(exc) or exc.__class__.__name__
            logger.error("Exception while sending SMS to %s: %s", phone, error)
            return SmsResult(success=False, error=error)

        parsed = HubtelSendResponse.parse_lenient(body)
        logger.info(
            "SMS sent to %s. Response ID: %s", phone, parsed.reference or "N/A"
        )
        return SmsResult(success=True, message_id=parsed.reference)
