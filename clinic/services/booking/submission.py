"""Submission coordinator: runs the channel side effects and reconciles one outcome."""

from typing import Any, Mapping, Optional, Protocol

from loguru import logger

from clinic.core.enums import BookingMethod, SubmissionErrorKind
from clinic.core.exceptions import ClinicApiError, SubmissionError
from clinic.models import BookingDraft, HandoffContext, SlotKey, SubmissionOutcome
from clinic.services.api.models import BookingPayload
from clinic.utils.masking import mask_phone
from clinic.utils.validators import normalize_phone_digits, sanitize_text

# Length of the reference shown to the patient
REFERENCE_LENGTH = 8


class BookingStore(Protocol):
    async def create_booking(self, payload: BookingPayload) -> Mapping[str, Any]: ...


class Handoff(Protocol):
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
    ) -> Optional[str]: ...


def build_booking_payload(
    draft: BookingDraft, channel: BookingMethod, context: HandoffContext
) -> BookingPayload:
    """Map a completed draft onto the bookings table."""
    try:
        day_code = SlotKey.parse(draft.booking_day).day_code
    except ValueError:
        day_code = draft.booking_day
    return {
        "user_name": sanitize_text(draft.user_name, "name"),
        "user_phone": normalize_phone_digits(draft.user_phone),
        "user_email": sanitize_text(draft.user_email, "email") or None,
        "notes": sanitize_text(draft.notes, "notes") or None,
        "specialty_id": draft.specialty_id,
        "doctor_id": draft.doctor_id,
        "booking_day": day_code,
        "booking_time": draft.booking_time,
        "booking_date": context.booking_date,
        "booking_method": channel.value,
    }


class SubmissionCoordinator:
    """
    Submits a completed draft through one channel.

    ``online`` persists once and fails hard. ``whatsapp`` launches the
    hand-off first; persistence follows and its failure only degrades the
    outcome. The hand-off result dominates.
    """

    def __init__(self, store: BookingStore, handoff: Handoff):
        self._store = store
        self._handoff = handoff

    async def submit(
        self, draft: BookingDraft, channel: BookingMethod, context: HandoffContext
    ) -> SubmissionOutcome:
        """
        Submit a draft.

        Args:
            draft: Validated draft
            channel: Submission channel
            context: Display values for the hand-off message and the stored date

        Returns:
            Reconciled outcome

        Raises:
            SubmissionError: ``persistence_failed`` (online), ``handoff_failed``
                (whatsapp) or ``unsupported_channel``
        """
        channel = BookingMethod(channel)
        if channel == BookingMethod.ONLINE:
            return await self._submit_online(draft, context)
        if channel == BookingMethod.WHATSAPP:
            return await self._submit_whatsapp(draft, context)

        raise SubmissionError(
            SubmissionErrorKind.UNSUPPORTED_CHANNEL,
            f"Channel '{channel.value}' cannot submit bookings",
            channel=channel.value,
        )

    async def _persist(
        self, draft: BookingDraft, channel: BookingMethod, context: HandoffContext
    ) -> str:
        record = await self._store.create_booking(build_booking_payload(draft, channel, context))
        return str(record["id"])

    async def _submit_online(
        self, draft: BookingDraft, context: HandoffContext
    ) -> SubmissionOutcome:
        try:
            record_id = await self._persist(draft, BookingMethod.ONLINE, context)
        except (ClinicApiError, KeyError, TypeError) as e:
            logger.error(
                f"Online booking for {mask_phone(draft.user_phone)} could not be saved: {e}"
            )
            raise SubmissionError(
                SubmissionErrorKind.PERSISTENCE_FAILED,
                "Booking could not be saved",
                channel=BookingMethod.ONLINE.value,
            ) from e

        return SubmissionOutcome(
            channel=BookingMethod.ONLINE,
            reference=record_id[:REFERENCE_LENGTH],
            record_id=record_id,
        )

    async def _submit_whatsapp(
        self, draft: BookingDraft, context: HandoffContext
    ) -> SubmissionOutcome:
        try:
            url = self._handoff.open(
                doctor_name=context.doctor_name,
                specialty_name=context.specialty_name or None,
                date=context.formatted_date or None,
                time=draft.booking_time or None,
                name=draft.user_name,
                phone=draft.user_phone,
                email=draft.user_email or None,
                notes=draft.notes or None,
            )
        except Exception as e:
            logger.error(f"WhatsApp hand-off failed: {e}")
            raise SubmissionError(
                SubmissionErrorKind.HANDOFF_FAILED,
                "Could not open WhatsApp",
                channel=BookingMethod.WHATSAPP.value,
            ) from e

        try:
            record_id = await self._persist(draft, BookingMethod.WHATSAPP, context)
        except Exception as e:  # isolated: the hand-off already happened
            logger.warning(
                f"WhatsApp booking for {mask_phone(draft.user_phone)} was handed off "
                f"but not saved: {e}"
            )
            return SubmissionOutcome(
                channel=BookingMethod.WHATSAPP,
                persistence_degraded=True,
                handoff_url=url,
            )

        return SubmissionOutcome(
            channel=BookingMethod.WHATSAPP,
            reference=record_id[:REFERENCE_LENGTH],
            record_id=record_id,
            handoff_url=url,
        )
