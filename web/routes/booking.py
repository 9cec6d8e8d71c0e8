"""Booking wizard routes: one wizard per booking session."""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from loguru import logger

from clinic.core.config import ClinicSettings
from clinic.core.enums import AvailabilityStatus
from clinic.core.logger import session_id_ctx
from clinic.models import StepCheck
from clinic.services.api import ClinicApiClient
from clinic.services.booking import BookingWizard
from web.dependencies import (
    get_api_client,
    get_app_settings,
    get_booking_session,
    get_session_registry,
)
from web.models.booking import (
    BookingSessionResponse,
    ContactUpdateRequest,
    DoctorSelectRequest,
    SessionCreateRequest,
    SlotSelectRequest,
    SpecialtySelectRequest,
    SubmitRequest,
    WizardActionResponse,
)
from web.state.sessions import BookingSession, BookingSessionRegistry

router = APIRouter(prefix="/api/booking/sessions", tags=["booking"])


def _respond(
    session: BookingSession, ok: bool = True, check: Optional[StepCheck] = None
) -> WizardActionResponse:
    """Build an action response; a failed action reports the wizard's last error."""
    state = session.wizard.snapshot()
    error = None
    if check is not None:
        ok = check.ok
    if not ok:
        error = state["last_error"]
        if check is not None and check.reason is not None:
            error = {
                "type": "validation",
                "code": check.reason.value,
                "message": check.reason.message,
            }
    return WizardActionResponse(
        session_id=session.session_id, ok=ok, error=error, state=state
    )


@router.post("", response_model=BookingSessionResponse, status_code=201)
async def create_session(
    request: SessionCreateRequest,
    client: ClinicApiClient = Depends(get_api_client),
    settings: ClinicSettings = Depends(get_app_settings),
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    """
    Start a booking session.

    A ``doctor_id`` seeds the wizard at the appointment step and loads its
    availability; a ``specialty_id`` alone seeds the doctor step.

    Raises:
        NotFoundError: If a seed id does not exist
    """
    specialty = None
    doctor = None
    if request.doctor_id is not None:
        doctor = await client.get_doctor(request.doctor_id)
    if request.specialty_id is not None:
        specialty = await client.get_specialty(request.specialty_id)
    elif doctor is not None:
        specialty = await client.get_specialty(doctor.specialty_id)

    wizard = BookingWizard.for_client(client, settings=settings, specialty=specialty, doctor=doctor)
    await registry.purge_expired()
    session = await registry.create(wizard)
    session_id_ctx.set(session.session_id)
    await wizard.start()
    return BookingSessionResponse(session_id=session.session_id, state=wizard.snapshot())


@router.get("/{session_id}", response_model=BookingSessionResponse)
async def get_session(session: BookingSession = Depends(get_booking_session)):
    """Get the wizard's current view."""
    return BookingSessionResponse(session_id=session.session_id, state=session.wizard.snapshot())


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session: BookingSession = Depends(get_booking_session),
    registry: BookingSessionRegistry = Depends(get_session_registry),
):
    """Close a booking session."""
    await registry.remove(session.session_id)
    return Response(status_code=204)


@router.post("/{session_id}/next", response_model=WizardActionResponse)
async def next_step(session: BookingSession = Depends(get_booking_session)):
    """Advance one step; rejected drafts return ``ok: false`` with the reason."""
    check = await session.wizard.next()
    return _respond(session, check=check)


@router.post("/{session_id}/previous", response_model=WizardActionResponse)
async def previous_step(session: BookingSession = Depends(get_booking_session)):
    session.wizard.previous()
    return _respond(session)


@router.post("/{session_id}/reset", response_model=WizardActionResponse)
async def reset_wizard(session: BookingSession = Depends(get_booking_session)):
    session.wizard.reset()
    return _respond(session)


@router.post("/{session_id}/specialty", response_model=WizardActionResponse)
async def select_specialty(
    request: SpecialtySelectRequest,
    session: BookingSession = Depends(get_booking_session),
    client: ClinicApiClient = Depends(get_api_client),
):
    specialty = await client.get_specialty(request.specialty_id)
    session.wizard.select_specialty(specialty)
    return _respond(session)


@router.post("/{session_id}/doctor", response_model=WizardActionResponse)
async def select_doctor(
    request: DoctorSelectRequest,
    session: BookingSession = Depends(get_booking_session),
    client: ClinicApiClient = Depends(get_api_client),
):
    """Select a doctor; at the appointment step its availability is loaded right away."""
    doctor = await client.get_doctor(request.doctor_id)
    await session.wizard.select_doctor(doctor)
    return _respond(session)


@router.post("/{session_id}/slot", response_model=WizardActionResponse)
async def select_slot(
    request: SlotSelectRequest,
    session: BookingSession = Depends(get_booking_session),
):
    check = session.wizard.select_slot(request.unique_id, request.time)
    return _respond(session, check=check)


@router.post("/{session_id}/contact", response_model=WizardActionResponse)
async def update_contact(
    request: ContactUpdateRequest,
    session: BookingSession = Depends(get_booking_session),
):
    """Store contact fields and return the live contact check."""
    check = session.wizard.update_contact(
        name=request.name, phone=request.phone, email=request.email, notes=request.notes
    )
    return _respond(session, check=check)


@router.post("/{session_id}/availability/retry", response_model=WizardActionResponse)
async def retry_availability(session: BookingSession = Depends(get_booking_session)):
    """Manual retry after the availability panel failed."""
    state = await session.wizard.retry_availability()
    return _respond(session, ok=state.status != AvailabilityStatus.FAILED)


@router.post("/{session_id}/submit", response_model=WizardActionResponse)
async def submit_booking(
    request: SubmitRequest,
    session: BookingSession = Depends(get_booking_session),
):
    """
    Submit from the confirm step.

    For the WhatsApp channel the response's ``state.handoff_url`` is the link
    the browser must open.
    """
    outcome = await session.wizard.submit(request.channel)
    if outcome is None:
        logger.info(f"Submission via {request.channel.value} did not complete")
    return _respond(session, ok=outcome is not None)
