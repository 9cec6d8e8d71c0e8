"""Utility functions for masking patient data in logs and outputs."""

from typing import Optional


def mask_phone(phone: Optional[str]) -> str:
    """
    Mask a phone number for logging, keeping the last three digits.

    Examples:
        >>> mask_phone("01091003965")
        '********965'
        >>> mask_phone("12")
        '***'
    """
    if not phone:
        return ""
    if len(phone) <= 4:
        return "***"
    return "*" * (len(phone) - 3) + phone[-3:]


def mask_email(email: Optional[str]) -> str:
    """
    Mask an email address for logging.

    Examples:
        >>> mask_email("patient@example.com")
        'p***@example.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email:
        return ""
    local, sep, domain = email.partition("@")
    if not sep or not local:
        return "***"
    return f"{local[0]}***@{domain}"
