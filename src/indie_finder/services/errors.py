"""Error types and central error handling for the Indie Game Finder service.

Route handlers pass every failure to ``ErrorHandlingService.handle_error``.
It classifies the failure, logs the technical details and records it for the
health endpoint. The ``UserFriendlyError`` it returns is all a route may use
to build its response: technical details stay in the logs.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    UPSTREAM = "upstream"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class UserFriendlyError:
    """The part of an error that may be shown to API callers."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity


def _details(*parts: str | None) -> str | None:
    present = [part for part in parts if part]
    return "\n".join(present) if present else None


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        technical_details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.technical_details = technical_details

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(message=self.message, category=self.category, severity=self.severity)


class UpstreamError(AppError):
    """The metadata API answered with a non-success status, or could not be reached."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.UPSTREAM,
            technical_details=_details(
                f"Status: {status_code}" if status_code else None,
                f"URL: {url}" if url else None,
                f"{type(original_error).__name__}: {original_error}" if original_error else None,
            ),
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class ValidationError(AppError):
    """Inbound filter parameters failed shape or range checks."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            technical_details=_details(
                f"Field: {field}" if field else None,
                f"Value: {str(value)[:100]}" if value is not None else None,  # Truncate long query strings
                "Violations: " + "; ".join(constraints) if constraints else None,
            ),
        )
        self.field = field
        self.value = value
        self.constraints = constraints or []


class NotFoundError(AppError):
    """A lookup finished normally but produced nothing to return."""

    def __init__(self, message: str, criteria: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.WARNING,
            technical_details=f"Criteria: {criteria}" if criteria else None,
        )
        self.criteria = criteria or {}


class ConfigurationError(AppError):
    """A configuration cannot be used or stored."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            technical_details="Problems: " + "; ".join(problems) if problems else None,
        )
        self.problems = problems or []


class ErrorHandlingService:
    """Classifies, logs and counts request failures."""

    def __init__(self, max_history_size: int = 100) -> None:
        """Initialize the error handling service.

        Args:
            max_history_size: Number of recent errors counted by category
        """
        self._history: deque[AppError] = deque(maxlen=max_history_size)
        log.info("Error handling service initialized", max_history_size=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Record a failure and return what the caller may be told about it.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Request details worth logging

        Returns:
            User-friendly error representation
        """
        app_error = self.classify(error)
        self._history.append(app_error)

        log_method = log.warning if app_error.severity == ErrorSeverity.WARNING else log.error
        log_method(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            severity=app_error.severity.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            context=context,
        )

        return app_error.to_user_friendly()

    @staticmethod
    def classify(error: Exception) -> AppError:
        """Application errors pass through; anything else is unexpected."""
        if isinstance(error, AppError):
            return error
        return AppError(
            "An unexpected error occurred.",
            technical_details=f"{type(error).__name__}: {error}",
        )

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        """Count the recorded errors by category."""
        counts: dict[ErrorCategory, int] = {}
        for error in self._history:
            counts[error.category] = counts.get(error.category, 0) + 1
        return counts
