"""Phone number normalization."""
import re
from typing import Optional

from fastapi import HTTPException

from healfit.config import get_settings

settings = get_settings()

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: Optional[str], country_code: Optional[str] = None) -> Optional[str]:
    """
    Reduce a phone number to its 10 local digits.

    Strips a leading country code (``+91`` by default) and any formatting
    characters. Returns None when the result is not exactly 10 digits.

    Args:
        phone: Raw phone number as typed by the user
        country_code: Country code prefix to strip

    Returns:
        Normalized 10-digit phone number, or None if invalid
    """
    if phone is None:
        return None

    code = country_code if country_code is not None else settings.default_country_code
    value = phone.strip()
    if code and value.startswith(code):
        value = value[len(code):]

    digits = _NON_DIGITS.sub("", value)

    # "0091..." or "91..." without the plus sign
    code_digits = _NON_DIGITS.sub("", code or "")
    if code_digits and len(digits) == 10 + len(code_digits) and digits.startswith(code_digits):
        digits = digits[len(code_digits):]

    if len(digits) != 10:
        return None
    return digits


def require_phone(phone: Optional[str]) -> str:
    """Normalize a phone number for use in a pydantic validator.

    Raises:
        ValueError: If the phone number is not a valid 10-digit number.
    """
    normalized = normalize_phone(phone)
    if normalized is None:
        raise ValueError("Phone must be exactly 10 digits")
    return normalized


def phone_param(phone: str) -> str:
    """Normalize a phone number taken from a path or query parameter.

    Raises:
        HTTPException: 422 if the phone number is invalid
    """
    normalized = normalize_phone(phone)
    if normalized is None:
        raise HTTPException(status_code=422, detail="Phone must be exactly 10 digits")
    return normalized
