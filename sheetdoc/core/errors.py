"""Custom exceptions used across the SheetDoc application."""


class SheetDocAppError(Exception):
    """Base error for the application."""


class ConfigError(SheetDocAppError):
    """Configuration related error."""


class ConversionError(SheetDocAppError):
    """Raised when a sheet cannot be converted or written."""

    def __init__(self, message: str, sheet: str | None = None) -> None:
        super().__init__(message)
        self.sheet = sheet
