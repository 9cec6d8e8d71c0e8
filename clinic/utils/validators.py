"""Input validation utilities for patient contact details."""

import re
from typing import Optional

# Characters people type between phone digits
_PHONE_SEPARATORS = re.compile(r"[\s\-().]")
_PHONE_DIGITS = re.compile(r"^[0-9]{10,15}$")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Maximum lengths for free-text fields
MAX_LENGTHS = {
    "name": 100,
    "phone": 20,
    "email": 254,
    "notes": 1000,
}


def normalize_phone_digits(phone: Optional[str]) -> str:
    """
    Strip separators and a leading '+' from a phone number.

    Args:
        phone: Phone number as typed

    Returns:
        The remaining characters (digits, if the input was well formed)

    Examples:
        >>> normalize_phone_digits("+20 109 100 3965")
        '201091003965'
    """
    if not phone:
        return ""
    value = _PHONE_SEPARATORS.sub("", phone.strip())
    if value.startswith("+"):
        value = value[1:]
    return value


def validate_phone(phone: Optional[str]) -> bool:
    """Validate phone number: 10-15 digits once separators are removed."""
    return bool(_PHONE_DIGITS.match(normalize_phone_digits(phone)))


def validate_email(email: Optional[str]) -> bool:
    """
    Validate an optional email address.

    An empty value is valid; anything else must look like local@domain.tld.
    """
    if not email or not email.strip():
        return True
    return bool(_EMAIL.match(email.strip()))


def sanitize_text(value: Optional[str], field_type: str) -> str:
    """Trim surrounding whitespace and truncate to the field's maximum length."""
    if not value:
        return ""
    return value.strip()[: MAX_LENGTHS.get(field_type, 255)]
