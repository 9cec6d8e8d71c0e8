"""Stored booking lookup and cancellation routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from clinic.services.api import ClinicApiClient
from clinic.utils.validators import validate_phone
from web.dependencies import get_api_client

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("", response_model=List[Dict[str, Any]])
async def get_bookings_by_phone(
    phone: str = Query(..., max_length=20),
    client: ClinicApiClient = Depends(get_api_client),
):
    """
    Get a patient's bookings, newest first.

    Raises:
        HTTPException: If the phone number is malformed
    """
    if not validate_phone(phone):
        raise HTTPException(status_code=400, detail="Invalid phone number")
    return await client.get_bookings_by_phone(phone)


@router.post("/{booking_id}/cancel", response_model=Dict[str, Any])
async def cancel_booking(booking_id: str, client: ClinicApiClient = Depends(get_api_client)):
    """
    Cancel a booking.

    Raises:
        NotFoundError: If no booking has this id
    """
    return await client.cancel_booking(booking_id)
