from __future__ import annotations


class IntakeValidationError(Exception):
    """Raised when an intake request fails validation. Never reaches the provider."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResponseParseError(Exception):
    """Raised when the model's reply is not a JSON object."""

    def __init__(self, message: str, *, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class UnhandledOperationError(Exception):
    """Wraps any unexpected failure inside an intake operation."""
