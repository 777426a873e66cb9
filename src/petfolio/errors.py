"""
Error classification and handling for petfolio.

Every failure the content core can surface is a PetfolioError subclass
carrying a category, a severity, a machine-readable code and a message
suitable for showing to the site owner.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .logging_config import get_logger, log_error, log_security_event

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    IMAGE_PROCESSING = "image_processing"
    UPLOAD = "upload"
    STORAGE = "storage"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
        }


USER_MESSAGES = {
    ErrorCategory.AUTHORIZATION: "You need to be logged in as the site owner to do that.",
    ErrorCategory.NOT_FOUND: "That item no longer exists.",
    ErrorCategory.VALIDATION: "Some required fields are missing.",
    ErrorCategory.IMAGE_PROCESSING: "The image could not be read. Please choose another file.",
    ErrorCategory.UPLOAD: "Failed to upload image. Please try again.",
    ErrorCategory.STORAGE: "Saved content could not be accessed.",
    ErrorCategory.UNKNOWN: "Something went wrong.",
}


class PetfolioError(Exception):
    """Base exception class for petfolio."""

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.MEDIUM
    default_code = "unknown_error"
    recoverable = True

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.user_message = user_message or USER_MESSAGES[self.category]
        self.details = details or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        """Log the error with its classification."""
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        if self.category is ErrorCategory.AUTHORIZATION:
            log_security_event(self.code, **error_context)
        else:
            log_error(self, error_context)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
        )


class PermissionDeniedError(PetfolioError):
    """A mutation was attempted without the owner capability."""

    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.HIGH
    default_code = "permission_denied"
    recoverable = False


class EntityNotFoundError(PetfolioError):
    """No entity with the requested identity exists in the collection."""

    category = ErrorCategory.NOT_FOUND
    severity = ErrorSeverity.LOW
    default_code = "entity_not_found"


class ValidationError(PetfolioError):
    """A required field is missing or a value is outside its enumeration."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.LOW
    default_code = "validation_failed"


class ImageProcessingError(PetfolioError):
    """Raw bytes could not be decoded, cropped or re-encoded."""

    category = ErrorCategory.IMAGE_PROCESSING
    default_code = "image_processing_failed"


class UploadError(PetfolioError):
    """The upload transport did not return an image reference."""

    category = ErrorCategory.UPLOAD
    default_code = "upload_failed"


class StorageError(PetfolioError):
    """The key-value store could not be read or written."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.HIGH
    default_code = "storage_error"


class ErrorHandler:
    """Turns arbitrary exceptions into ErrorInfo for display."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}

    def handle_error(self, error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
        """
        Handle and classify errors.

        Args:
            error: Exception to handle
            context: Additional context information

        Returns:
            ErrorInfo: Structured error information
        """
        if isinstance(error, PetfolioError):
            error_info = error.get_error_info()
        else:
            wrapped = PetfolioError(
                str(error),
                details={"original_type": type(error).__name__, **(context or {})},
                original_exception=error,
            )
            error_info = wrapped.get_error_info()

        self.error_counts[error_info.code] = self.error_counts.get(error_info.code, 0) + 1
        return error_info

    def get_error_statistics(self) -> dict[str, int]:
        """Get error occurrence statistics."""
        return self.error_counts.copy()


error_handler = ErrorHandler()


def handle_error(error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
    """Global error handling function."""
    return error_handler.handle_error(error, context)
