"""
SMS notification helpers split by responsibility.
phone.py normalizes Ghanaian numbers, sms.py talks to Hubtel and
reservations.py decides which reservation updates deserve a text.
"""

from .phone import normalize_phone
from .reservations import ReservationStatusReactor
from .sms import HubtelSmsClient

__all__ = ["HubtelSmsClient", "ReservationStatusReactor", "normalize_phone"]
