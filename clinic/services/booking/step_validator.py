"""Pure predicates gating the booking wizard's forward transitions."""

from typing import Callable, Dict, Optional

from clinic.core.enums import ValidationError, WizardStep
from clinic.models import BookingDraft, Doctor, StepCheck
from clinic.utils.validators import validate_email, validate_phone


def check_specialty(draft: BookingDraft, doctor: Optional[Doctor] = None) -> StepCheck:
    if draft.specialty_id is None:
        return StepCheck.reject(ValidationError.MISSING_SPECIALTY)
    return StepCheck.accept()


def check_doctor(draft: BookingDraft, doctor: Optional[Doctor] = None) -> StepCheck:
    """Doctor must be set and, when known, belong to the chosen specialty."""
    if draft.doctor_id is None:
        return StepCheck.reject(ValidationError.MISSING_DOCTOR)
    if doctor is not None and doctor.id != draft.doctor_id:
        return StepCheck.reject(ValidationError.MISSING_DOCTOR)
    if (
        draft.specialty_id is not None
        and doctor is not None
        and doctor.specialty_id != draft.specialty_id
    ):
        return StepCheck.reject(ValidationError.MISSING_DOCTOR)
    return StepCheck.accept()


def check_appointment(draft: BookingDraft, doctor: Optional[Doctor] = None) -> StepCheck:
    if not draft.booking_day or not draft.booking_time:
        return StepCheck.reject(ValidationError.MISSING_SLOT)
    return StepCheck.accept()


def check_contact(draft: BookingDraft, doctor: Optional[Doctor] = None) -> StepCheck:
    if not (draft.user_name or "").strip():
        return StepCheck.reject(ValidationError.MISSING_NAME)
    if not validate_phone(draft.user_phone):
        return StepCheck.reject(ValidationError.BAD_PHONE)
    if not validate_email(draft.user_email):
        return StepCheck.reject(ValidationError.BAD_EMAIL)
    return StepCheck.accept()


def check_confirm(draft: BookingDraft, doctor: Optional[Doctor] = None) -> StepCheck:
    """Everything the earlier steps require, first failure wins."""
    for check in (check_specialty, check_doctor, check_appointment, check_contact):
        result = check(draft, doctor)
        if not result.ok:
            return result
    return StepCheck.accept()


_CHECKS: Dict[WizardStep, Callable[[BookingDraft, Optional[Doctor]], StepCheck]] = {
    WizardStep.SPECIALTY: check_specialty,
    WizardStep.DOCTOR: check_doctor,
    WizardStep.APPOINTMENT: check_appointment,
    WizardStep.CONTACT: check_contact,
    WizardStep.CONFIRM: check_confirm,
}


def can_advance(
    step: WizardStep, draft: BookingDraft, doctor: Optional[Doctor] = None
) -> StepCheck:
    """
    Decide whether the wizard may leave ``step`` going forward.

    Args:
        step: Current wizard step
        draft: Draft as it stands at this step
        doctor: Selected doctor object, when known (enables the specialty match)

    Returns:
        StepCheck with the first failing reason, if any

    Raises:
        ValueError: For ``done``, which has no forward transition
    """
    check = _CHECKS.get(step)
    if check is None:
        raise ValueError(f"No forward transition from step '{step.label}'")
    return check(draft, doctor)
