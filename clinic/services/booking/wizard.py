"""
Booking wizard controller.

One instance per booking session. It owns the draft and the current step,
and is the only place the draft is mutated. Availability fetches are tagged
with the doctor they were issued for and a generation counter; a result is
applied only while both still match.
"""

from datetime import tzinfo
from typing import Any, Callable, Dict, Optional, Union

from loguru import logger

from clinic.constants import AVAILABILITY_MESSAGES
from clinic.core.config import ClinicSettings, get_settings
from clinic.core.enums import (
    AvailabilityStatus,
    BookingMethod,
    SubmissionWarning,
    ValidationError,
    WizardStep,
)
from clinic.core.exceptions import (
    AvailabilityError,
    ClinicError,
    SubmissionError,
    WizardStateError,
)
from clinic.models import (
    AvailabilityState,
    BookingDraft,
    BookingResult,
    Doctor,
    HandoffContext,
    SlotKey,
    Specialty,
    StepCheck,
    SubmissionOutcome,
)
from clinic.utils.dates import format_arabic_date, today
from clinic.utils.masking import mask_email, mask_phone

from .availability import AvailabilityResolver
from .step_validator import can_advance, check_contact
from .submission import SubmissionCoordinator


class BookingWizard:
    """State machine driving one patient through the booking steps."""

    def __init__(
        self,
        resolver: AvailabilityResolver,
        coordinator: SubmissionCoordinator,
        tz: tzinfo,
        revalidate_slot_on_submit: bool = True,
    ):
        """
        Initialize wizard.

        Args:
            resolver: Availability resolver
            coordinator: Submission coordinator
            tz: Clinic timezone (slot freshness, display dates)
            revalidate_slot_on_submit: Reject slots whose date has passed at submit
        """
        self._resolver = resolver
        self._coordinator = coordinator
        self._tz = tz
        self._revalidate_slot_on_submit = revalidate_slot_on_submit
        self._generation = 0
        self._submission = 0
        self._clear()

    def _clear(self) -> None:
        self._step = WizardStep.SPECIALTY
        self._draft = BookingDraft()
        self._availability = AvailabilityState(error=AVAILABILITY_MESSAGES["no_doctor"])
        self._selected_specialty: Optional[Specialty] = None
        self._selected_doctor: Optional[Doctor] = None
        self._formatted_date = ""
        self._pending = False
        self._last_error: Optional[Union[ValidationError, ClinicError]] = None
        self._result: Optional[BookingResult] = None
        self._warning: Optional[SubmissionWarning] = None
        self._outcome: Optional[SubmissionOutcome] = None

    @classmethod
    def seeded(
        cls,
        resolver: AvailabilityResolver,
        coordinator: SubmissionCoordinator,
        tz: tzinfo,
        specialty: Optional[Specialty] = None,
        doctor: Optional[Doctor] = None,
        revalidate_slot_on_submit: bool = True,
    ) -> "BookingWizard":
        """
        Build a wizard starting past the steps an external link already answered.

        A doctor seeds the appointment step, a specialty alone the doctor
        step. Call ``start()`` afterwards to load availability.
        """
        wizard = cls(resolver, coordinator, tz, revalidate_slot_on_submit)
        if specialty is not None:
            wizard._selected_specialty = specialty
            wizard._draft.specialty_id = specialty.id
            wizard._step = WizardStep.DOCTOR
        if doctor is not None:
            wizard._apply_doctor(doctor)
            wizard._step = WizardStep.APPOINTMENT
        return wizard

    @classmethod
    def for_client(
        cls,
        client: Any,
        settings: Optional[ClinicSettings] = None,
        launcher: Optional[Callable[[str], Any]] = None,
        specialty: Optional[Specialty] = None,
        doctor: Optional[Doctor] = None,
    ) -> "BookingWizard":
        """Wire a wizard to a ClinicApiClient and the WhatsApp hand-off."""
        from clinic.services.handoff import WhatsAppHandoff

        settings = settings or get_settings()
        return cls.seeded(
            resolver=AvailabilityResolver(client, tz=settings.tz),
            coordinator=SubmissionCoordinator(
                client, WhatsAppHandoff(launcher=launcher, settings=settings)
            ),
            tz=settings.tz,
            specialty=specialty,
            doctor=doctor,
            revalidate_slot_on_submit=settings.revalidate_slot_on_submit,
        )

    async def start(self) -> None:
        """Run the entry side effect of the initial step."""
        if self._step == WizardStep.APPOINTMENT:
            await self.load_availability()

    # Read-only view state

    @property
    def current_step(self) -> WizardStep:
        return self._step

    @property
    def draft(self) -> BookingDraft:
        """Copy of the draft; mutate through the actions only."""
        return self._draft.copy()

    @property
    def availability(self) -> AvailabilityState:
        return self._availability

    @property
    def pending(self) -> bool:
        """True while a submission is in flight."""
        return self._pending

    @property
    def availability_pending(self) -> bool:
        return self._availability.status == AvailabilityStatus.PENDING

    @property
    def last_error(self) -> Optional[Union[ValidationError, ClinicError]]:
        return self._last_error

    @property
    def result(self) -> Optional[BookingResult]:
        return self._result

    @property
    def warning(self) -> Optional[SubmissionWarning]:
        return self._warning

    @property
    def outcome(self) -> Optional[SubmissionOutcome]:
        return self._outcome

    @property
    def selected_specialty(self) -> Optional[Specialty]:
        return self._selected_specialty

    @property
    def selected_doctor(self) -> Optional[Doctor]:
        return self._selected_doctor

    @property
    def formatted_date(self) -> str:
        return self._formatted_date

    # Navigation

    async def next(self) -> StepCheck:
        """
        Advance one step if the current step's check accepts the draft.

        Raises:
            WizardStateError: At ``confirm`` (submit instead) or ``done``
        """
        if self._step >= WizardStep.CONFIRM:
            raise WizardStateError("next", self._step.label)

        check = can_advance(self._step, self._draft, self._selected_doctor)
        if not check.ok:
            self._last_error = check.reason
            logger.debug(f"Step '{self._step.label}' rejected: {check.reason.value}")
            return check

        self._last_error = None
        self._step = WizardStep(self._step + 1)
        logger.debug(f"Advanced to step '{self._step.label}'")

        if self._step == WizardStep.APPOINTMENT and self._needs_availability():
            await self.load_availability()
        return check

    def previous(self) -> WizardStep:
        """
        Go back one step; no validation.

        Raises:
            WizardStateError: At ``specialty`` or ``done``, or while submitting
        """
        if self._step in (WizardStep.SPECIALTY, WizardStep.DONE) or self._pending:
            raise WizardStateError("previous", self._step.label)
        self._step = WizardStep(self._step - 1)
        self._last_error = None
        return self._step

    def reset(self) -> None:
        """
        Discard everything, including any in-flight fetch, and start over.

        Raises:
            WizardStateError: While a submission is pending
        """
        if self._pending:
            raise WizardStateError("reset", self._step.label)
        self._generation += 1
        self._submission += 1
        self._clear()
        logger.debug("Wizard reset")

    # Selections

    def select_specialty(self, specialty: Specialty) -> None:
        """
        Choose a specialty.

        A change of specialty drops the doctor and slot; a wizard past the
        doctor step falls back to it.
        """
        self._ensure_editable("select_specialty")
        self._selected_specialty = specialty
        if self._draft.specialty_id == specialty.id:
            return

        self._draft.specialty_id = specialty.id
        if self._draft.doctor_id is not None:
            self._draft.doctor_id = None
            self._selected_doctor = None
            self._drop_slot()
            self._invalidate_availability(AvailabilityStatus.NO_DOCTOR)
        if self._step > WizardStep.DOCTOR:
            self._step = WizardStep.DOCTOR

    async def select_doctor(self, doctor: Doctor, specialty: Optional[Specialty] = None) -> None:
        """
        Choose a doctor.

        Changing the doctor clears the slot and discards the current
        availability, including a fetch still in flight. A wizard past the
        appointment step falls back to it. At the appointment step the new
        doctor's availability is loaded before returning.

        Args:
            doctor: Selected doctor
            specialty: The doctor's specialty object, when the caller has it
        """
        self._ensure_editable("select_doctor")
        if self._draft.doctor_id == doctor.id:
            self._selected_doctor = doctor
        else:
            self._apply_doctor(doctor, specialty)
            if self._step > WizardStep.APPOINTMENT:
                self._step = WizardStep.APPOINTMENT

        if self._step == WizardStep.APPOINTMENT and self._needs_availability():
            await self.load_availability()

    def _apply_doctor(self, doctor: Doctor, specialty: Optional[Specialty] = None) -> None:
        self._draft.doctor_id = doctor.id
        self._selected_doctor = doctor
        if self._draft.specialty_id is None:
            self._draft.specialty_id = doctor.specialty_id
            if specialty is not None and specialty.id == doctor.specialty_id:
                self._selected_specialty = specialty
        self._drop_slot()
        self._invalidate_availability(AvailabilityStatus.IDLE)

    def select_slot(self, unique_id: str, time: Optional[str] = None) -> StepCheck:
        """
        Choose a day and time from the current availability.

        Args:
            unique_id: DayInfo unique id
            time: Time of day; defaults to the day's first slot

        Returns:
            Accepted check, or ``missing_slot`` when the pair is not offered
        """
        self._ensure_editable("select_slot")
        day = None
        if self._availability.doctor_id == self._draft.doctor_id:
            day = self._availability.find_day(unique_id)
        chosen = time or (day.default_time if day else None)
        if day is None or not chosen or not day.has_time(chosen):
            self._last_error = ValidationError.MISSING_SLOT
            return StepCheck.reject(ValidationError.MISSING_SLOT)

        self._draft.booking_day = day.unique_id
        self._draft.booking_time = chosen
        self._formatted_date = format_arabic_date(day.date)
        self._last_error = None
        return StepCheck.accept()

    def update_contact(
        self,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> StepCheck:
        """
        Store contact fields; None leaves a field unchanged.

        Returns:
            The contact step's check against the updated draft
        """
        self._ensure_editable("update_contact")
        if name is not None:
            self._draft.user_name = name
        if phone is not None:
            self._draft.user_phone = phone
        if email is not None:
            self._draft.user_email = email or None
        if notes is not None:
            self._draft.notes = notes or None
        logger.debug(
            f"Contact updated: phone={mask_phone(self._draft.user_phone)}, "
            f"email={mask_email(self._draft.user_email) or '-'}"
        )
        return check_contact(self._draft)

    def _ensure_editable(self, action: str) -> None:
        if self._step == WizardStep.DONE or self._pending:
            raise WizardStateError(action, self._step.label)

    def _drop_slot(self) -> None:
        self._draft.clear_slot()
        self._formatted_date = ""

    # Availability

    def _invalidate_availability(self, status: AvailabilityStatus) -> None:
        self._generation += 1
        error = None
        if status == AvailabilityStatus.NO_DOCTOR:
            error = AVAILABILITY_MESSAGES["no_doctor"]
        self._availability = AvailabilityState(
            status=status, doctor_id=self._draft.doctor_id, error=error
        )

    def _needs_availability(self) -> bool:
        state = self._availability
        return state.doctor_id != self._draft.doctor_id or state.status in (
            AvailabilityStatus.NO_DOCTOR,
            AvailabilityStatus.IDLE,
            AvailabilityStatus.FAILED,
        )

    def _is_current(self, generation: int, doctor_id: int) -> bool:
        return generation == self._generation and doctor_id == self._draft.doctor_id

    async def load_availability(self, force: bool = False) -> AvailabilityState:
        """
        Fetch availability for the selected doctor.

        A load already pending for the same doctor is not repeated unless
        forced. A result arriving after the doctor changed is discarded.
        """
        doctor_id = self._draft.doctor_id
        if doctor_id is None:
            self._invalidate_availability(AvailabilityStatus.NO_DOCTOR)
            return self._availability
        if self.availability_pending and self._availability.doctor_id == doctor_id and not force:
            return self._availability

        self._generation += 1
        generation = self._generation
        self._availability = AvailabilityState(
            status=AvailabilityStatus.PENDING, doctor_id=doctor_id
        )

        try:
            days = await self._resolver.resolve(doctor_id)
        except AvailabilityError as e:
            if not self._is_current(generation, doctor_id):
                logger.debug(f"Ignoring failed availability for superseded doctor {doctor_id}")
                return self._availability
            self._availability = AvailabilityState(
                status=AvailabilityStatus.FAILED,
                doctor_id=doctor_id,
                error=AVAILABILITY_MESSAGES["failed"],
            )
            self._last_error = e
            return self._availability

        if not self._is_current(generation, doctor_id):
            logger.info(f"Discarding stale availability for doctor {doctor_id}")
            return self._availability

        self._availability = AvailabilityState(
            status=AvailabilityStatus.READY if days else AvailabilityStatus.EMPTY,
            doctor_id=doctor_id,
            days=list(days),
            error=None if days else AVAILABILITY_MESSAGES["empty"],
        )
        if isinstance(self._last_error, AvailabilityError):
            self._last_error = None
        self._reconcile_slot()
        return self._availability

    async def retry_availability(self) -> AvailabilityState:
        """User-initiated retry after a failed or stale availability load."""
        self._ensure_editable("retry_availability")
        return await self.load_availability(force=True)

    def _reconcile_slot(self) -> None:
        if not self._draft.booking_day:
            return
        day = self._availability.find_day(self._draft.booking_day)
        if day is None or not day.has_time(self._draft.booking_time):
            logger.debug("Previously selected slot is no longer offered, clearing it")
            self._drop_slot()
            if self._step > WizardStep.APPOINTMENT:
                self._step = WizardStep.APPOINTMENT

    # Submission

    def _slot_is_stale(self) -> bool:
        try:
            key = SlotKey.parse(self._draft.booking_day)
        except ValueError:
            return True
        return key.date.astimezone(self._tz).date() < today(self._tz)

    def _handoff_context(self) -> HandoffContext:
        doctor = self._selected_doctor
        specialty_name = ""
        if self._selected_specialty is not None:
            specialty_name = self._selected_specialty.name
        elif doctor is not None:
            specialty_name = doctor.specialty_name

        booking_date = None
        day = self._availability.find_day(self._draft.booking_day)
        if day is not None:
            booking_date = day.date.date().isoformat()

        return HandoffContext(
            doctor_name=doctor.name if doctor else "",
            specialty_name=specialty_name,
            formatted_date=self._formatted_date,
            booking_date=booking_date,
        )

    async def submit(self, channel: Union[BookingMethod, str]) -> Optional[SubmissionOutcome]:
        """
        Submit the draft from the confirm step.

        Calls made while a submission is pending are ignored. On success
        the wizard moves to ``done``; on failure it stays at ``confirm``
        with ``last_error`` set and the draft intact.

        Returns:
            The outcome, or None when ignored, rejected or failed

        Raises:
            WizardStateError: Outside the confirm step
            ValueError: For an unknown channel name
        """
        if self._pending:
            logger.warning("Submission already in progress, ignoring repeated submit")
            return None
        if self._step != WizardStep.CONFIRM:
            raise WizardStateError("submit", self._step.label)

        method = BookingMethod(channel)
        check = can_advance(WizardStep.CONFIRM, self._draft, self._selected_doctor)
        if not check.ok:
            self._last_error = check.reason
            return None
        if self._revalidate_slot_on_submit and self._slot_is_stale():
            logger.info(f"Slot {self._draft.booking_day} has passed, rejecting submission")
            self._last_error = ValidationError.STALE_SLOT
            return None

        self._pending = True
        self._submission += 1
        submission = self._submission
        self._draft.booking_method = method
        try:
            outcome = await self._coordinator.submit(
                self._draft.copy(), method, self._handoff_context()
            )
        except SubmissionError as e:
            if submission == self._submission:
                self._last_error = e
            return None
        finally:
            if submission == self._submission:
                self._pending = False

        if submission != self._submission or self._step != WizardStep.CONFIRM:
            logger.warning(
                "Discarding outcome of superseded submission "
                f"(reference={outcome.reference or '-'}, step={self._step.label})"
            )
            return outcome

        self._outcome = outcome
        self._result = BookingResult(
            reference=outcome.reference,
            formatted_date=self._formatted_date,
            formatted_time=self._draft.booking_time,
        )
        self._warning = None
        if outcome.persistence_degraded:
            self._warning = SubmissionWarning.PERSISTENCE_DEGRADED
        self._last_error = None
        self._step = WizardStep.DONE
        logger.info(
            f"Booking submitted via {method.value} for {mask_phone(self._draft.user_phone)} "
            f"(reference={outcome.reference or '-'}, degraded={outcome.persistence_degraded})"
        )
        return outcome

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the wizard."""
        return {
            "step": self._step.label,
            "step_index": int(self._step),
            "draft": self._draft.to_dict(),
            "availability": self._availability.to_dict(),
            "pending": self._pending,
            "availability_pending": self.availability_pending,
            "last_error": _describe_error(self._last_error),
            "result": self._result.to_dict() if self._result else None,
            "warning": (
                {"code": self._warning.value, "message": self._warning.message}
                if self._warning
                else None
            ),
            "handoff_url": self._outcome.handoff_url if self._outcome else None,
            "selected_specialty": (
                self._selected_specialty.to_dict() if self._selected_specialty else None
            ),
            "selected_doctor": self._selected_doctor.to_dict() if self._selected_doctor else None,
            "formatted_date": self._formatted_date,
        }


def _describe_error(
    error: Optional[Union[ValidationError, ClinicError]],
) -> Optional[Dict[str, Any]]:
    if error is None:
        return None
    if isinstance(error, ValidationError):
        return {"type": "validation", "code": error.value, "message": error.message}
    data = error.to_dict()
    data["type"] = "availability" if isinstance(error, AvailabilityError) else "submission"
    return data
