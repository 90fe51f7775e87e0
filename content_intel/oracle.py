import logging
from typing import Optional, Protocol, runtime_checkable

from .errors import ContentIntelError, OracleError, OracleUnavailable

logger = logging.getLogger(__name__)

CONFIG_ERROR_MESSAGE = "AI service configuration error. Please try again later."
RATE_LIMIT_MESSAGE = "AI service is temporarily unavailable. Please try again later."


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt into raw response text."""

    def generate(self, prompt: str) -> Optional[str]:
        ...


def classify_failure(exc: Exception) -> ContentIntelError:
    """Map a generator failure onto OracleUnavailable or OracleError by its message."""
    message = str(exc)
    if "API key" in message:
        return OracleUnavailable(message, user_message=CONFIG_ERROR_MESSAGE)
    if "quota" in message or "limit" in message:
        return OracleUnavailable(message, user_message=RATE_LIMIT_MESSAGE)
    return OracleError(message)


class OracleAdapter:
    """Single-call wrapper around an injected TextGenerator.

    No retries and no timeouts here: callers own both.
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def invoke(self, prompt: str) -> str:
        try:
            text = self.generator.generate(prompt)
        except Exception as e:
            error = classify_failure(e)
            logger.warning(f"Oracle call failed ({error.kind}): {e}")
            raise error from e
        return text or ""
