# utils/errors.py
from typing import Optional


class RiskBriefError(Exception):
    """Base class for every failure the analysis flow can surface."""

    kind = "unknown"


class ConfigurationError(RiskBriefError):
    kind = "configuration"


class TransportError(RiskBriefError):
    kind = "transport"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(RiskBriefError):
    kind = "parse"


class MissingFieldError(RiskBriefError):
    kind = "missing_field"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class UnknownError(RiskBriefError):
    kind = "unknown"


class InvalidInputError(RiskBriefError, ValueError):
    kind = "invalid_input"


GENERIC_MESSAGE = "An unexpected error occurred. Please try again."


def user_message(err: BaseException) -> str:
    """Pick the one human-readable line the UI shows for a failure."""
    if isinstance(err, ConfigurationError):
        return "API key not configured. Please check your environment setup."

    if isinstance(err, TransportError):
        status = err.status_code
        if status is None:
            return "Unable to connect to the server. Please check your internet connection."
        if status in (401, 403):
            return "Authentication failed. Please check your API key."
        if status == 429:
            return "Too many requests. Please wait a moment and try again."
        if status >= 500:
            return "Server error. Please try again later."
        return str(err) or GENERIC_MESSAGE

    if isinstance(err, ParseError):
        return "Could not parse the response. Please try again."
    if isinstance(err, MissingFieldError):
        return "Received incomplete response. Please try again."
    if isinstance(err, InvalidInputError):
        return str(err)

    return GENERIC_MESSAGE
