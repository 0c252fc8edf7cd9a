"""
Centralized error handling and classification for socialgallery application.

Every error raised by the application derives from ``GalleryError`` and
carries a category, a severity, a machine-readable code and a message that
is safe to show to the user.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from socialgallery.logging_config import get_logger, log_error

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    IMAGE_PROCESSING = "image_processing"
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


DEFAULT_USER_MESSAGES = {
    ErrorCategory.VALIDATION: "Revisa los datos introducidos.",
    ErrorCategory.NOT_FOUND: "La imagen ya no está disponible.",
    ErrorCategory.STORAGE: "No se pudieron leer los datos guardados de la galería.",
    ErrorCategory.IMAGE_PROCESSING: "No se pudo leer la imagen seleccionada.",
    ErrorCategory.UNKNOWN: "Ha ocurrido un error inesperado.",
}


class GalleryError(Exception):
    """Base exception class for socialgallery application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or DEFAULT_USER_MESSAGES[category]
        self.details = details or {}
        self.recoverable = recoverable
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

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


class ValidationError(GalleryError):
    """Rejected user input: blank nickname or title, missing image, unsupported file."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            code=code or "validation_failed",
            user_message=user_message,
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


class NotFoundError(GalleryError):
    """An image id that is not part of the collection."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            code=code or "image_not_found",
            user_message=user_message,
            details=details,
            recoverable=True,
        )


class StorageError(GalleryError):
    """Persisted gallery data could not be read, parsed or written."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.HIGH,
            code=code or "storage_error",
            user_message=user_message,
            details=details,
            recoverable=recoverable,
            original_exception=original_exception,
        )


# Persisted JSON that fails to parse
MalformedStorageError = StorageError


class ImageProcessingError(GalleryError):
    """Image decoding errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.IMAGE_PROCESSING,
            severity=ErrorSeverity.MEDIUM,
            code=code or "image_processing_failed",
            user_message=user_message,
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


def handle_error(error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
    """
    Turn any exception into structured error information.

    Application errors keep their own classification; anything else is
    wrapped as an unknown error so the UI can still show a safe message.

    Args:
        error: Exception to handle
        context: Additional context information

    Returns:
        ErrorInfo: Structured error information
    """
    if isinstance(error, GalleryError):
        return error.get_error_info()

    wrapped = GalleryError(
        message=str(error),
        category=ErrorCategory.UNKNOWN,
        severity=ErrorSeverity.MEDIUM,
        details={"original_type": type(error).__name__, **(context or {})},
        original_exception=error,
    )
    return wrapped.get_error_info()
