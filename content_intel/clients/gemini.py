import logging
import os
from typing import Optional

import httpx
from google import genai
from google.genai import types
from google.genai.errors import ServerError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

# OpenRouter Model Mapping
OPENROUTER_MODEL_MAP = {
    "gemini-2.5-flash": "google/gemini-2.5-flash",
    "gemini-2.5-pro": "google/gemini-2.5-pro",
    "gemini-2.0-flash": "google/gemini-2.0-flash-001",
}


def _is_transient(exc: BaseException) -> bool:
    """Server-side and transport failures are worth retrying; client errors are not."""
    if isinstance(exc, ServerError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class GeminiClient:
    """Text-generation capability backed by Gemini.

    Supports:
    - Google AI API (API key)
    - OpenRouter API (alternative backend)

    Implements ``generate(prompt) -> str`` so it can be handed to an
    OracleAdapter. Transient server/transport failures are retried with
    exponential backoff; quota and credential errors are raised at once.
    """

    OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL,
                 openrouter_api_key: Optional[str] = None, temperature: Optional[float] = None):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.openrouter_api_key = openrouter_api_key or os.environ.get("OPENROUTER_API_KEY")
        self.model = model
        self.temperature = temperature
        self._using_openrouter = False
        self.client = self._initialize_client()

    def _initialize_client(self) -> Optional[genai.Client]:
        """Initialize the GenAI client with preferred authentication.

        Priority:
        1. OpenRouter (if OPENROUTER_API_KEY is set)
        2. Google AI API (if GEMINI_API_KEY is set)
        """
        if self.openrouter_api_key:
            logger.info("Initializing Gemini with OpenRouter backend")
            self._using_openrouter = True
            return None  # No genai.Client needed for OpenRouter

        if self.api_key:
            logger.info("Initializing Gemini with API key")
            return genai.Client(api_key=self.api_key)

        logger.error("No valid Gemini credentials found")
        return None

    def is_using_openrouter(self) -> bool:
        """Check if the client is using OpenRouter backend."""
        return self._using_openrouter

    def _map_model_to_openrouter(self, model: str) -> str:
        """Map a Gemini model name to its OpenRouter equivalent."""
        return OPENROUTER_MODEL_MAP.get(model, f"google/{model}")

    def _generate_openrouter_content(self, prompt: str) -> str:
        """Generate content using OpenRouter API."""
        openrouter_model = self._map_model_to_openrouter(self.model)
        logger.info(f"Calling OpenRouter API (Model: {openrouter_model})")

        payload = {
            "model": openrouter_model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature

        headers = {
            "Authorization": f"Bearer {self.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": os.environ.get("SITE_URL", "https://example.com"),
            "X-Title": os.environ.get("SITE_NAME", "Content Intel"),
        }

        with httpx.Client(timeout=120.0) as http_client:
            response = http_client.post(
                f"{self.OPENROUTER_BASE_URL}/chat/completions",
                headers=headers,
                json=payload
            )
            # Name the failure so the oracle adapter can classify it.
            if response.status_code in (401, 403):
                raise RuntimeError(f"OpenRouter rejected the API key (HTTP {response.status_code})")
            if response.status_code == 429:
                raise RuntimeError("OpenRouter rate limit exceeded (HTTP 429)")
            response.raise_for_status()
            data = response.json()

        choice = (data.get("choices") or [{}])[0]
        return choice.get("message", {}).get("content") or ""

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=30),
        retry=retry_if_exception(_is_transient),
        reraise=True
    )
    def generate(self, prompt: str) -> str:
        """Send a single prompt and return the raw response text."""
        if self._using_openrouter:
            return self._generate_openrouter_content(prompt)

        if not self.client:
            raise RuntimeError("Gemini client not initialized: API key missing")

        config = None
        if self.temperature is not None:
            config = types.GenerateContentConfig(temperature=self.temperature)

        logger.info(f"Calling Gemini API (Model: {self.model})")
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=config
        )
        return response.text or ""
