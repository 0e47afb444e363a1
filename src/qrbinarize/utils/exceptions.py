"""
QrBinarize - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the QrBinarize package.
"""


class QrBinarizeError(Exception):
    """Base exception for all QrBinarize errors.

    All custom exceptions should inherit from this class to allow
    catching any QrBinarize-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ContrastFailureError(QrBinarizeError):
    """Raised when no reliable black point can be found.

    The luminance histogram did not show two sufficiently separated peaks.
    Callers scanning a live feed should drop the frame and try the next one.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Not enough contrast to pick a black point")


class InvalidLuminanceDataError(QrBinarizeError, ValueError):
    """Raised when luminance data or a request on it is malformed."""

    def __init__(self, reason: str, shape: tuple[int, ...] | None = None) -> None:
        """Initialize the exception.

        Args:
            reason: What is wrong with the data
            shape: Optional shape of the offending buffer
        """
        self.reason = reason
        self.shape = shape

        details = None
        if shape is not None:
            details = f"shape={shape}"

        super().__init__(f"Invalid luminance data: {reason}", details=details)


class ImageLoadError(QrBinarizeError):
    """Raised when an image file cannot be read or decoded."""

    def __init__(self, file_path: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            file_path: Path to the image that failed to load
            reason: Optional reason for the failure
        """
        self.file_path = file_path
        self.reason = reason

        msg = f"Cannot load image: {file_path}"
        if reason:
            msg += f" - {reason}"

        super().__init__(msg, details=f"path={file_path}")


class ConfigurationError(QrBinarizeError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


# Exception hierarchy summary:
# QrBinarizeError (base)
# ├── ContrastFailureError
# ├── InvalidLuminanceDataError (also ValueError)
# ├── ImageLoadError
# └── ConfigurationError
