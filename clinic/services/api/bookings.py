"""Bookings Module - Persists and looks up patient bookings."""

from typing import List

from loguru import logger

from clinic.core.enums import BookingStatus
from clinic.core.exceptions import ClinicApiError, NotFoundError
from clinic.utils.masking import mask_phone
from clinic.utils.validators import normalize_phone_digits

from .base import ApiResource
from .models import BookingPayload, BookingRecord

# PostgREST returns the affected rows only when asked to
_RETURN_ROWS = {"Prefer": "return=representation"}


class ClinicBookings(ApiResource):
    """Handles booking persistence. Writes are never retried automatically."""

    async def create_booking(self, payload: BookingPayload) -> BookingRecord:
        """
        Insert one booking.

        Args:
            payload: Booking fields

        Returns:
            The stored record, including its generated ``id``

        Raises:
            ClinicApiError: If the insert fails or returns no id
        """
        body = dict(payload)
        body.setdefault("status", BookingStatus.PENDING.value)
        rows = await self._request("POST", "bookings", payload=body, headers=_RETURN_ROWS)
        record = rows[0] if isinstance(rows, list) and rows else rows
        if not isinstance(record, dict) or not record.get("id"):
            raise ClinicApiError("Booking insert returned no record id", recoverable=False)

        logger.info(
            f"Booking {record['id']} created for {mask_phone(body.get('user_phone'))} "
            f"via {body.get('booking_method')}"
        )
        result: BookingRecord = record
        return result

    async def get_bookings_by_phone(self, phone: str) -> List[BookingRecord]:
        """Get a patient's bookings, newest first."""
        digits = normalize_phone_digits(phone)
        rows: List[BookingRecord] = await self._request(
            "GET",
            "bookings",
            params={
                "select": "*",
                "user_phone": f"eq.{digits}",
                "order": "created_at.desc",
            },
        )
        logger.debug(f"Found {len(rows)} bookings for {mask_phone(digits)}")
        return rows

    async def cancel_booking(self, booking_id: str) -> BookingRecord:
        """
        Mark a booking as cancelled.

        Raises:
            NotFoundError: If no booking has this id
        """
        rows = await self._request(
            "PATCH",
            "bookings",
            params={"id": f"eq.{booking_id}"},
            payload={"status": BookingStatus.CANCELLED.value},
            headers=_RETURN_ROWS,
        )
        if not rows:
            raise NotFoundError("Booking", booking_id)
        logger.info(f"Booking {booking_id} cancelled")
        record: BookingRecord = rows[0]
        return record
