from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class OrderPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    items: List[Any] = Field(..., min_length=1)
    total: Decimal = Field(..., gt=0)

    @field_validator("total", mode="before")
    @classmethod
    def _reject_bool_total(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("total must be a number")
        return value


class PaystackCallbackRequest(BaseModel):
    reference: str = Field(..., min_length=1)
    order: OrderPayload

    @field_validator("reference")
    @classmethod
    def _strip_reference(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("reference must not be blank")
        return value


class SettlementResponse(BaseModel):
    ok: bool = True
    message: str
    order: Dict[str, Any]


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    settlement_enabled: bool
    sms_enabled: bool
    realtime_enabled: bool


class PaystackTransaction(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str
    amount: int
    currency: Optional[str] = None
    gateway_response: Optional[str] = None


class PaystackVerifyResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: bool
    message: Optional[str] = None
    data: Optional[PaystackTransaction] = None


class HubtelSendResponse(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message_id: Optional[str] = Field(default=None, alias="messageId")
    legacy_message_id: Optional[str] = Field(default=None, alias="MessageId")
    response_code: Optional[str] = Field(default=None, alias="ResponseCode")
    message: Optional[str] = None
    error: Optional[str] = None

    @field_validator("message_id", "legacy_message_id", "response_code", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @classmethod
    def parse_lenient(cls, body: Any) -> "HubtelSendResponse":
        try:
            return cls.model_validate(body)
        except ValidationError:
            return cls()

    @property
    def reference(self) -> Optional[str]:
        return self.message_id or self.legacy_message_id or self.response_code


@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    paid_amount_minor_units: Optional[int]
    gateway_response: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class SmsResult:
    success: bool
    error: Optional[str] = None
    message_id: Optional[str] = None


def _status_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class ReservationChangeEvent:
    id: Any
    old_status: Optional[str]
    new_status: Optional[str]
    phone: Optional[Any]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ReservationChangeEvent":
        """Build an event from a realtime UPDATE payload.

        Accepts both the nested ``{"data": {"record", "old_record"}}`` shape
        delivered by the Python realtime client and the flat
        ``{"new", "old"}`` shape.
        """
        data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
        new = data.get("record") or data.get("new") or {}
        old = data.get("old_record") or data.get("old") or {}
        if not isinstance(new, dict):
            new = {}
        if not isinstance(old, dict):
            old = {}
        return cls(
            id=new.get("id"),
            old_status=_status_or_none(old.get("status")),
            new_status=_status_or_none(new.get("status")),
            phone=new.get("phone"),
        )
