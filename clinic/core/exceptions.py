"""Custom exception classes for the clinic booking service."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .enums import SubmissionErrorKind


class ClinicError(Exception):
    """Base exception for the clinic booking service."""

    def __init__(
        self, message: str, recoverable: bool = True, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize clinic error.

        Args:
            message: Error message
            recoverable: Whether the error is recoverable with retry
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


# Configuration Errors
class ConfigurationError(ClinicError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


# Backend API Errors
class ClinicApiError(ClinicError):
    """Request to the clinic data backend failed."""

    def __init__(
        self,
        message: str = "Clinic API error occurred",
        recoverable: bool = True,
        status: Optional[int] = None,
    ):
        """
        Initialize clinic API error.

        Args:
            message: Error message
            recoverable: Whether the request may succeed if repeated
            status: HTTP status code, when a response was received
        """
        self.status = status
        super().__init__(message, recoverable, details={"status": status} if status else {})


class NotFoundError(ClinicApiError):
    """Requested record does not exist."""

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found", recoverable=False, status=404)


# Booking Flow Errors
class AvailabilityError(ClinicError):
    """Doctor availability could not be retrieved.

    Recoverable by a user-initiated retry; the resolver never retries itself.
    """

    def __init__(self, message: str = "Could not retrieve availability", doctor_id: Any = None):
        self.doctor_id = doctor_id
        super().__init__(message, recoverable=True, details={"doctor_id": doctor_id})


class SubmissionError(ClinicError):
    """Booking submission failed."""

    def __init__(
        self,
        kind: SubmissionErrorKind,
        message: str = "Booking submission failed",
        channel: Optional[str] = None,
    ):
        """
        Initialize submission error.

        Args:
            kind: Failure kind
            message: Error message
            channel: Submission channel the failure belongs to
        """
        self.kind = kind
        self.channel = channel
        super().__init__(
            message,
            recoverable=kind != SubmissionErrorKind.UNSUPPORTED_CHANNEL,
            details={"kind": kind.value, "channel": channel},
        )


class SessionNotFoundError(ClinicError):
    """Booking session is unknown or expired."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Booking session '{session_id}' not found or expired",
            recoverable=False,
            details={"session_id": session_id},
        )


class WizardStateError(ClinicError):
    """Navigation action not allowed from the wizard's current step."""

    def __init__(self, action: str, step: str):
        self.action = action
        self.step = step
        super().__init__(
            f"Action '{action}' is not allowed at step '{step}'",
            recoverable=True,
            details={"action": action, "step": step},
        )
