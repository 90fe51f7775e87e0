"""
Content-intelligence operations.

Each generative operation follows the same path:
build prompt → invoke oracle → decode response → shape-check,
and returns an OperationResult instead of raising. Nothing is partially
applied: either the whole payload decodes or the operation fails.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .decoding import decode_array, decode_object, decode_prose
from .errors import (
    ContentIntelError,
    EmptyResponse,
    InvalidInput,
    MalformedResponse,
    MissingInput,
    OracleUnavailable,
)
from .oracle import OracleAdapter
from .outline import extract_outline, outline_to_dicts
from .prompts import ContentPromptBuilder
from .readability import analyze_readability
from .schemas import ContentInsights, SeoMetadata
from .utils import normalize_payload_keys

logger = logging.getLogger(__name__)

MIN_DRAFT_LENGTH = 100


@dataclass
class OperationResult:
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, kind: str) -> "OperationResult":
        return cls(success=False, error=message, error_kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error, "errorKind": self.error_kind}


def user_message(error: ContentIntelError, subject: str) -> str:
    """Pick the message shown to the user for a classified failure."""
    if isinstance(error, (MissingInput, InvalidInput)):
        return str(error)
    if isinstance(error, MalformedResponse):
        return f"Failed to parse {subject}. Please try again."
    if isinstance(error, (EmptyResponse, OracleUnavailable)):
        return error.user_message
    return f"Failed to generate {subject}. Please try again."


class ContentIntelligence:
    """Orchestrates prompt building, the oracle call and response decoding."""

    def __init__(self, oracle: OracleAdapter, prompt_builder: Optional[ContentPromptBuilder] = None):
        self.oracle = oracle
        self.prompts = prompt_builder or ContentPromptBuilder()

    def _run(self, subject: str, operation: Callable[[], Any]) -> OperationResult:
        try:
            return OperationResult.ok(operation())
        except ContentIntelError as e:
            logger.error(f"❌ {subject} failed ({e.kind}): {e}")
            return OperationResult.fail(user_message(e, subject), e.kind)
        except Exception as e:
            logger.exception(f"❌ Unexpected error during {subject}: {e}")
            return OperationResult.fail(f"Failed to generate {subject}. Please try again.", "OracleError")

    # --- Generative operations ---

    def generate_draft(self, title: str, category: Optional[str] = None,
                       tags: Optional[List[str]] = None) -> OperationResult:
        """Write a full HTML blog post for ``title``."""
        def operation():
            prompt = self.prompts.build_draft_prompt(title, category, tags)
            content = decode_prose(self.oracle.invoke(prompt), min_length=MIN_DRAFT_LENGTH)
            logger.info(f"✅ Draft generated for '{title}' ({len(content)} chars)")
            return content

        return self._run("content", operation)

    def improve_draft(self, content: str, mode: Optional[str] = "enhance") -> OperationResult:
        """Revise HTML content; unknown modes behave like ``enhance``."""
        def operation():
            prompt = self.prompts.build_improve_prompt(content, mode)
            return decode_prose(self.oracle.invoke(prompt))

        return self._run("improved content", operation)

    def generate_seo_metadata(self, title: str, content: str) -> OperationResult:
        """Meta description, keywords, social preview and slug as a wire dict."""
        def operation():
            prompt = self.prompts.build_seo_prompt(title, content)
            data = decode_object(self.oracle.invoke(prompt))
            return normalize_payload_keys(data, SeoMetadata)

        return self._run("SEO metadata", operation)

    def generate_title_variants(self, title: str, content: Optional[str] = None) -> OperationResult:
        """Alternative titles; the list is returned as decoded, whatever its length."""
        def operation():
            prompt = self.prompts.build_titles_prompt(title, content)
            return decode_array(self.oracle.invoke(prompt))

        return self._run("title variations", operation)

    def generate_content_insights(self, title: str, content: str,
                                  metrics: Optional[Dict[str, Optional[int]]] = None) -> OperationResult:
        """Qualitative performance insights as a wire dict."""
        def operation():
            prompt = self.prompts.build_insights_prompt(title, content, metrics)
            data = decode_object(self.oracle.invoke(prompt))
            return normalize_payload_keys(data, ContentInsights)

        return self._run("insights", operation)

    # --- Deterministic operations ---

    def analyze_readability(self, content: str) -> OperationResult:
        return self._run("readability analysis", lambda: analyze_readability(content).to_wire())

    def extract_table_of_contents(self, content: str, id_prefix: str = "heading-") -> OperationResult:
        return self._run("table of contents", lambda: outline_to_dicts(extract_outline(content, id_prefix)))
