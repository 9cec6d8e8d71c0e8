"""Tests for custom exceptions."""

from clinic.core.enums import SubmissionErrorKind
from clinic.core.exceptions import (
    AvailabilityError,
    ClinicApiError,
    ClinicError,
    ConfigurationError,
    NotFoundError,
    SessionNotFoundError,
    SubmissionError,
    WizardStateError,
)


def test_clinic_error():
    """Test ClinicError base exception."""
    error = ClinicError("Test error")
    assert error.message == "Test error"
    assert error.recoverable is True
    assert str(error) == "Test error"


def test_clinic_error_to_dict():
    error = ClinicError("Boom", recoverable=False, details={"a": 1})
    data = error.to_dict()
    assert data["error"] == "ClinicError"
    assert data["recoverable"] is False
    assert data["details"] == {"a": 1}
    assert "timestamp" in data


def test_configuration_error_not_recoverable():
    assert ConfigurationError().recoverable is False


def test_api_error_status():
    error = ClinicApiError("Unavailable", status=503)
    assert error.status == 503
    assert error.details == {"status": 503}


def test_not_found_error():
    error = NotFoundError("Doctor", 7)
    assert isinstance(error, ClinicApiError)
    assert error.status == 404
    assert error.recoverable is False
    assert "Doctor '7'" in error.message


def test_availability_error_is_recoverable():
    error = AvailabilityError(doctor_id=3)
    assert error.recoverable is True
    assert error.details == {"doctor_id": 3}
    assert error.message == "Could not retrieve availability"


def test_submission_error_kinds():
    persistence = SubmissionError(SubmissionErrorKind.PERSISTENCE_FAILED, channel="online")
    assert persistence.recoverable is True
    assert persistence.details == {"kind": "persistence_failed", "channel": "online"}

    unsupported = SubmissionError(SubmissionErrorKind.UNSUPPORTED_CHANNEL, channel="phone")
    assert unsupported.recoverable is False


def test_session_not_found_error():
    error = SessionNotFoundError("abc")
    assert error.session_id == "abc"
    assert error.recoverable is False


def test_wizard_state_error():
    error = WizardStateError("next", "confirm")
    assert error.details == {"action": "next", "step": "confirm"}
