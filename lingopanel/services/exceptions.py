# lingopanel/services/exceptions.py
"""
Exception types for the translation and clipboard paths.

Validation and clipboard errors carry a message meant for the user.
Transport and format errors are reported to the user with a generic message;
their details are only logged.
"""


class TranslationError(Exception):
    """Base class for failures of a translation request."""

    pass


class TranslationValidationError(TranslationError):
    """Raised when the request is rejected before any network call."""

    pass


class ResponseFormatError(TranslationError):
    """Raised when the API payload is not a JSON object with a non-empty 'translation'."""

    def __init__(self, message: str = "Invalid response format from API."):
        super().__init__(message)


class TransportError(TranslationError):
    """Raised when the call to the translation API fails (network, auth, quota...)."""

    pass


class ClipboardError(Exception):
    """Raised when the browser refuses or fails a clipboard write."""

    pass
