"""Shared exceptions for the career coach services.

This module defines a consistent exception hierarchy used across all modules
to standardize error handling and provide clear error semantics. Messages are
meant to be shown to end users; low-level causes belong in logs or ``details``.
"""

from typing import Any
from uuid import UUID


class CareerCoachException(Exception):
    """Base exception for all application errors.

    All domain-specific exceptions should inherit from this class
    so callers can handle them uniformly.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ===================
# Identity Errors
# ===================

class AuthenticationError(CareerCoachException):
    """Base class for identity-related errors."""
    pass


class UnauthorizedError(AuthenticationError):
    """Raised when no authenticated user identifier is available."""

    def __init__(self) -> None:
        super().__init__("Unauthorized")


# ===================
# Resource Errors
# ===================

class ResourceNotFoundError(CareerCoachException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: UUID | str,
    ) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": str(resource_id)}
        )


class ProfileNotFoundError(ResourceNotFoundError):
    """Raised when the authenticated user has no usable profile."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__("Profile", user_id)
        self.message = "User profile not found. Complete onboarding first."


class QuizSessionNotFoundError(ResourceNotFoundError):
    """Raised when a quiz session is not found for the user."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__("QuizSession", session_id)


class CoverLetterNotFoundError(ResourceNotFoundError):
    """Raised when a cover letter is not found for the user."""

    def __init__(self, cover_letter_id: UUID) -> None:
        super().__init__("CoverLetter", cover_letter_id)


# ===================
# State Errors
# ===================

class InvalidStateError(CareerCoachException):
    """Raised when an operation is invalid for the current state."""
    pass


class SessionStateError(InvalidStateError):
    """Raised when a quiz session operation is not valid in its current status."""

    def __init__(self, operation: str, current_status: str) -> None:
        super().__init__(
            f"Cannot {operation} a quiz that is {current_status.replace('_', ' ')}",
            {"operation": operation, "status": current_status}
        )


class IncompleteAnswerError(InvalidStateError):
    """Raised when advancing past a question that has not been answered."""

    def __init__(self, index: int) -> None:
        super().__init__(
            "Please select an answer before continuing",
            {"index": index}
        )


class LengthMismatchError(InvalidStateError):
    """Raised when answers and questions cannot be aligned for scoring."""

    def __init__(self, question_count: int, answer_count: int) -> None:
        super().__init__(
            f"Cannot score quiz: {answer_count} answers for {question_count} questions",
            {"question_count": question_count, "answer_count": answer_count}
        )


class RequestInProgressError(InvalidStateError):
    """Raised when a second long-running request overlaps one already in flight."""

    def __init__(self, key: UUID | str) -> None:
        super().__init__(
            "Another request is already in progress. Please wait for it to finish.",
            {"key": str(key)}
        )


class AssessmentAlreadySavedError(InvalidStateError):
    """Raised when saving a quiz result that has already been recorded."""

    def __init__(self, session_id: UUID, assessment_id: UUID) -> None:
        super().__init__(
            "This quiz result has already been saved",
            {"session_id": str(session_id), "assessment_id": str(assessment_id)}
        )


# ===================
# Validation Errors
# ===================

class ValidationError(CareerCoachException):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(
            f"Validation error for '{field}': {message}",
            {"field": field}
        )


# ===================
# Integration Errors
# ===================

class ExternalServiceError(CareerCoachException):
    """Raised when an external service call fails."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(
            f"External service error ({service}): {message}",
            {"service": service}
        )


class LLMServiceError(ExternalServiceError):
    """Raised when the text completion service fails."""

    def __init__(self, message: str) -> None:
        super().__init__("LLM", message)
        self.message = "The AI service is unavailable. Please try again."


class GenerationError(CareerCoachException):
    """Raised when generated content is missing, unparseable or malformed."""

    def __init__(self, subject: str, reason: str) -> None:
        super().__init__(
            f"Failed to generate {subject}",
            {"subject": subject, "reason": reason}
        )


class PersistenceError(CareerCoachException):
    """Raised when a store write fails."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        message = f"Failed to {operation}"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"operation": operation})
