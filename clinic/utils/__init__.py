"""Utility helpers."""

from .dates import format_arabic_date, parse_schedule_date
from .masking import mask_email, mask_phone
from .validators import normalize_phone_digits, validate_email, validate_phone

__all__ = [
    "format_arabic_date",
    "parse_schedule_date",
    "mask_email",
    "mask_phone",
    "normalize_phone_digits",
    "validate_email",
    "validate_phone",
]
