from typing import Optional


class ContactError(Exception):
    """Base class for failures while handling a contact form submission."""


class ConfigError(ContactError):
    """Required configuration is missing. Raised at startup, never per request."""


class SubmissionValidationError(ContactError):
    """The submitted form is incomplete or malformed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderError(ContactError):
    """The email provider answered with a structured error."""

    def __init__(
        self, name: str, message: str, status_code: Optional[int] = None
    ):
        super().__init__(f"{name}: {message}")
        self.name = name
        self.message = message
        self.status_code = status_code


class TransportError(ContactError):
    """The provider could not be reached or its answer could not be read."""


class RendererUnavailableError(ContactError):
    """A template content source was given but no renderer is configured."""
