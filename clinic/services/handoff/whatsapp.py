"""WhatsApp hand-off: deep-links the patient into a chat with the clinic."""

from typing import Any, Callable, Optional
from urllib.parse import quote

from loguru import logger

from clinic.core.config import ClinicSettings, get_settings

from .templates import BookingMessageTemplates

# Characters encodeURIComponent leaves as-is, so links match the web front-end
_URI_COMPONENT_SAFE = "-_.!~*'()"

Launcher = Callable[[str], Any]


def build_whatsapp_url(number: str, message: str) -> str:
    """Build a ``wa.me`` link with a pre-filled message."""
    return f"https://wa.me/{number}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


class WhatsAppHandoff:
    """
    Composes the booking message and launches the WhatsApp deep link.

    The launcher is whatever opens the link for the patient (a browser
    redirect, a push to the front-end). Without one, the URL is only
    returned, and the caller forwards it.
    """

    def __init__(
        self,
        number: Optional[str] = None,
        clinic_name: Optional[str] = None,
        clinic_phone: Optional[str] = None,
        launcher: Optional[Launcher] = None,
        settings: Optional[ClinicSettings] = None,
    ):
        settings = settings or get_settings()
        self.number = number or settings.whatsapp_number
        self.clinic_name = clinic_name or settings.clinic_name
        self.clinic_phone = clinic_phone or settings.clinic_phone
        self._launcher = launcher

    def compose(
        self,
        doctor_name: str,
        specialty_name: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Return the deep link for these booking details without launching it."""
        message = BookingMessageTemplates.booking_request(
            clinic_name=self.clinic_name,
            clinic_phone=self.clinic_phone,
            doctor_name=doctor_name,
            specialty_name=specialty_name,
            date=date,
            time=time,
            name=name,
            phone=phone,
            email=email,
            notes=notes,
        )
        return build_whatsapp_url(self.number, message)

    def open(
        self,
        doctor_name: str,
        specialty_name: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """
        Compose the message and launch the hand-off.

        Synchronous and fire-and-forget: the launcher's return value is
        ignored, but an exception from it propagates.

        Returns:
            The launched URL
        """
        url = self.compose(doctor_name, specialty_name, date, time, name, phone, email, notes)
        if self._launcher is not None:
            self._launcher(url)
        logger.info(f"WhatsApp hand-off opened for doctor '{doctor_name}'")
        return url
