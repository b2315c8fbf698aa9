import re
from typing import Any, Optional

GHANA_COUNTRY_CODE = "233"
LOCAL_NUMBER_LENGTH = 9

_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"[^0-9]")


def _digits(text: str) -> str:
    return _NON_DIGITS.sub("", text)


def normalize_phone(raw: Any) -> Optional[str]:
    """Map a raw phone string to ``+233XXXXXXXXX`` where the shape allows it.

    Returns ``None`` only for non-string or blank input. Anything that does
    not match a known Ghanaian shape is returned with whitespace removed.
    """
    if not isinstance(raw, str):
        return None
    cleaned = _WHITESPACE.sub("", raw)
    if not cleaned:
        return None

    international_length = len(GHANA_COUNTRY_CODE) + LOCAL_NUMBER_LENGTH

    if cleaned.startswith(f"+{GHANA_COUNTRY_CODE}"):
        digits = _digits(cleaned[1:])
        if len(digits) == international_length and digits.startswith(GHANA_COUNTRY_CODE):
            return cleaned

    if cleaned.startswith("0"):
        local = _digits(cleaned[1:])
        if len(local) == LOCAL_NUMBER_LENGTH:
            return f"+{GHANA_COUNTRY_CODE}{local}"

    if cleaned.startswith(GHANA_COUNTRY_CODE) and len(cleaned) == international_length:
        return f"+{cleaned}"

    digits = _digits(cleaned)
    if len(digits) == LOCAL_NUMBER_LENGTH:
        return f"+{GHANA_COUNTRY_CODE}{digits}"

    return cleaned
