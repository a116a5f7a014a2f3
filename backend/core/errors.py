"""Error taxonomy shared by the proxy, the history API and the client."""
from typing import Optional


class AppError(Exception):
    """Base error carrying the HTTP status it maps to at the handler boundary."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or invalid request fields."""
    status_code = 400


class AuthError(AppError):
    """Missing, malformed or rejected bearer token."""
    status_code = 401


class ConfigError(AppError):
    """A required setting (provider credential, signing secret) is not configured."""
    status_code = 500


class UpstreamError(AppError):
    """The generative model call failed or produced no usable image."""
    status_code = 500


class UpstreamBlockedError(UpstreamError):
    """The provider's safety layer blocked the request."""

    def __init__(self, reason: str, detail: Optional[str] = None):
        message = f"Request was blocked. Reason: {reason}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


class UpstreamAbnormalStopError(UpstreamError):
    """Generation halted for a reason other than normal completion."""

    def __init__(self, finish_reason: str):
        super().__init__(f"Image generation stopped unexpectedly. Reason: {finish_reason}.")
        self.finish_reason = finish_reason


class UpstreamNoImageError(UpstreamError):
    """The model finished normally but returned no image."""

    def __init__(self, text: Optional[str] = None):
        if text:
            message = f'The AI model did not return an image. It responded with text: "{text}"'
        else:
            message = (
                "The AI model did not return an image. "
                "This can happen because of safety filters or an overly complex request."
            )
        super().__init__(message)
        self.text = text


BlockedError = UpstreamBlockedError
AbnormalStopError = UpstreamAbnormalStopError
NoImageReturnedError = UpstreamNoImageError


# Client side

class ReadError(AppError):
    """An image could not be read or decoded."""
    status_code = 400


class StorageError(AppError):
    """Device-local history could not be read or written."""


class TransportError(AppError):
    """The edit proxy could not be reached."""


class ProxyError(AppError):
    """The edit proxy answered with a non-success status."""


class MissingResultError(AppError):
    """The edit proxy answered 2xx without an image reference."""
