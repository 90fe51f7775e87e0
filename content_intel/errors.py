"""
Error taxonomy for the content-intelligence pipeline.

Every failure the pipeline can report maps onto one of these classes. The
orchestrator catches them and turns them into a failed OperationResult.
``str(exc)`` is the diagnostic message; ``user_message`` is the generic text
shown to the end user for failures the user cannot fix themselves.
"""

from typing import Optional


class ContentIntelError(Exception):
    """Base exception for content-intelligence errors."""

    kind = "ContentIntelError"
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None, user_message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.user_message = user_message or self.default_message


class MissingInput(ContentIntelError):
    """Raised when a required field (title, content) is absent or blank."""

    kind = "MissingInput"
    default_message = "Required input is missing."


class InvalidInput(ContentIntelError):
    """Raised when the readability analyzer gets no text to work with."""

    kind = "InvalidInput"
    default_message = "Content is required for analysis."


class EmptyResponse(ContentIntelError):
    """Raised when the oracle returned nothing usable."""

    kind = "EmptyResponse"
    default_message = "Generated content is too short or empty. Please try again."


class TooShort(EmptyResponse):
    """Raised when the oracle returned text below the minimum viable length."""

    kind = "TooShort"


class MalformedResponse(ContentIntelError):
    """Raised when no decodable structured payload is found in a response."""

    kind = "MalformedResponse"
    default_message = "Failed to parse the AI response. Please try again."


class OracleUnavailable(ContentIntelError):
    """Raised for quota, rate-limit and credential failures of the oracle."""

    kind = "OracleUnavailable"
    default_message = "AI service is temporarily unavailable. Please try again later."


class OracleError(ContentIntelError):
    """Raised for any other failure of the text-generation call."""

    kind = "OracleError"
    default_message = "AI request failed. Please try again."
