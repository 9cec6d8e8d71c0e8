"""Tests for the booking step validator."""

import pytest

from clinic.core.enums import ValidationError, WizardStep
from clinic.models import BookingDraft
from clinic.services.booking.step_validator import can_advance


def complete_draft(**overrides) -> BookingDraft:
    values = dict(
        specialty_id=1,
        doctor_id=1,
        booking_day="Wed:1714514400000",
        booking_time="10:00",
        user_name="محمد علي",
        user_phone="01091003965",
        user_email=None,
        notes=None,
    )
    values.update(overrides)
    return BookingDraft(**values)


class TestSpecialtyStep:
    def test_requires_specialty(self):
        check = can_advance(WizardStep.SPECIALTY, BookingDraft())
        assert not check.ok
        assert check.reason == ValidationError.MISSING_SPECIALTY

    def test_accepts_specialty(self):
        assert can_advance(WizardStep.SPECIALTY, BookingDraft(specialty_id=1)).ok


class TestDoctorStep:
    """Doctor must be chosen and belong to the chosen specialty."""

    def test_requires_doctor(self):
        check = can_advance(WizardStep.DOCTOR, BookingDraft(specialty_id=1))
        assert check.reason == ValidationError.MISSING_DOCTOR

    def test_doctor_of_chosen_specialty(self, doctor):
        draft = BookingDraft(specialty_id=1, doctor_id=doctor.id)
        assert can_advance(WizardStep.DOCTOR, draft, doctor).ok

    def test_doctor_of_another_specialty_rejected(self, skin_doctor):
        draft = BookingDraft(specialty_id=1, doctor_id=skin_doctor.id)
        check = can_advance(WizardStep.DOCTOR, draft, skin_doctor)
        assert check.reason == ValidationError.MISSING_DOCTOR

    def test_specialty_less_flow_accepts_any_doctor(self, skin_doctor):
        draft = BookingDraft(doctor_id=skin_doctor.id)
        assert can_advance(WizardStep.DOCTOR, draft, skin_doctor).ok

    def test_unknown_doctor_object_accepts_id(self):
        assert can_advance(WizardStep.DOCTOR, BookingDraft(specialty_id=1, doctor_id=9)).ok


class TestAppointmentStep:
    """ok iff both slot fields are non-empty, whatever else the draft holds."""

    @pytest.mark.parametrize(
        "day,time,expected",
        [
            ("", "", False),
            ("Wed:1714514400000", "", False),
            ("", "10:00", False),
            ("Wed:1714514400000", "10:00", True),
        ],
    )
    def test_slot_fields(self, day, time, expected):
        for draft in (
            BookingDraft(booking_day=day, booking_time=time),
            complete_draft(booking_day=day, booking_time=time),
            BookingDraft(booking_day=day, booking_time=time, user_phone="12"),
        ):
            check = can_advance(WizardStep.APPOINTMENT, draft)
            assert check.ok is expected
            if not expected:
                assert check.reason == ValidationError.MISSING_SLOT


class TestContactStep:
    def test_complete_contact(self):
        assert can_advance(WizardStep.CONTACT, complete_draft()).ok

    def test_blank_name(self):
        check = can_advance(WizardStep.CONTACT, complete_draft(user_name="   "))
        assert check.reason == ValidationError.MISSING_NAME

    @pytest.mark.parametrize("phone", ["0109100396", "+20 109 100 3965"])
    def test_valid_phones(self, phone):
        assert can_advance(WizardStep.CONTACT, complete_draft(user_phone=phone)).ok

    def test_short_phone(self):
        check = can_advance(WizardStep.CONTACT, complete_draft(user_phone="12345"))
        assert check.reason == ValidationError.BAD_PHONE

    @pytest.mark.parametrize("email", ["", None, "a@b.com"])
    def test_valid_emails(self, email):
        assert can_advance(WizardStep.CONTACT, complete_draft(user_email=email)).ok

    def test_bad_email(self):
        check = can_advance(WizardStep.CONTACT, complete_draft(user_email="a@b"))
        assert check.reason == ValidationError.BAD_EMAIL

    def test_name_checked_before_phone(self):
        check = can_advance(WizardStep.CONTACT, complete_draft(user_name="", user_phone="1"))
        assert check.reason == ValidationError.MISSING_NAME


class TestConfirmStep:
    def test_complete_draft_accepted(self, doctor):
        assert can_advance(WizardStep.CONFIRM, complete_draft(), doctor).ok

    def test_first_failure_reported(self):
        check = can_advance(WizardStep.CONFIRM, complete_draft(booking_time="", user_phone="1"))
        assert check.reason == ValidationError.MISSING_SLOT


def test_done_has_no_forward_transition():
    with pytest.raises(ValueError):
        can_advance(WizardStep.DONE, complete_draft())


def test_reasons_have_localized_messages():
    for reason in ValidationError:
        assert reason.message
