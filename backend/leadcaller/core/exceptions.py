"""
Error Taxonomy
Exceptions raised by services and converted to HTTP responses by the endpoints.

- InvalidInput: user-correctable request problems (HTTP 400)
- UpstreamError: failures reported by Twilio, Ultravox or the CRM (HTTP 500)
- ConfigurationError: missing credentials at startup (fatal)
"""
from typing import Optional


class LeadCallerError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidInput(LeadCallerError):
    """Raised when a request is missing fields or carries malformed values."""


class InvalidRecipient(InvalidInput):
    """Raised when a phone number cannot be mapped to a dialable E.164 number."""

    def __init__(self, raw_phone: Optional[str]):
        self.raw_phone = raw_phone
        super().__init__(f"Invalid phone number format: {raw_phone!r}")


class UpstreamError(LeadCallerError):
    """Raised when an external provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class DeliveryError(UpstreamError):
    """SMS could not be delivered to the telephony provider."""


class DialError(UpstreamError):
    """The telephony provider refused to place the call."""


class SessionCreateError(UpstreamError):
    """The voice-AI provider did not create a conversation session."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"Ultravox API error: {status_code} - {body}",
            status_code=status_code,
            body=body
        )


class CRMError(UpstreamError):
    """Base class for CRM stage failures."""

    stage = "request"

    def __init__(self, status_code: Optional[int], body: Optional[str]):
        super().__init__(
            f"Failed to {self.stage}: {status_code} - {body}",
            status_code=status_code,
            body=body
        )


class ContactLookupError(CRMError):
    stage = "search contact"


class ContactCreateError(CRMError):
    stage = "create contact"


class TagApplyError(CRMError):
    stage = "add tag"


class ConfigurationError(RuntimeError):
    """Raised at startup when required credentials are missing."""
