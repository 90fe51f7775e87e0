"""
Reading time and readability scoring for article HTML.

The score is a simple Flesch-like heuristic on a 0-100 scale (higher is
easier to read):

    score = 100 - 1.5 * avg_sentence_length - 10 * avg_word_length

No tokenizer is involved: words are whitespace-separated tokens (punctuation
included) and sentences are fragments between runs of ``.``, ``!`` and ``?``.
"""

import logging
import math
import re
from typing import Optional

from .errors import InvalidInput
from .schemas import ReadabilityMetrics

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
EASY_THRESHOLD = 70
MEDIUM_THRESHOLD = 50


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upwards (68.5 → 69), unlike the built-in banker's round()."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def html_to_text(html: str) -> str:
    """Replace tags with spaces, collapse whitespace and trim."""
    text = re.sub(r'<[^>]*>', ' ', html)
    return re.sub(r'\s+', ' ', text).strip()


def readability_level(score: int) -> str:
    if score >= EASY_THRESHOLD:
        return "Easy"
    if score >= MEDIUM_THRESHOLD:
        return "Medium"
    return "Advanced"


def analyze_readability(html: Optional[str]) -> ReadabilityMetrics:
    """
    Calculate reading time and readability score.

    Args:
        html: Article body as HTML.

    Returns:
        ReadabilityMetrics for the text content.

    Raises:
        InvalidInput: If there is no text once markup and whitespace are removed.
    """
    text = html_to_text(html or "")
    if not text:
        raise InvalidInput("Content is required for analysis")

    words = [w for w in text.split(' ') if w]
    word_count = len(words)
    sentences = [s for s in re.split(r'[.!?]+', text) if s.strip()]
    sentence_count = len(sentences) or 1

    reading_time = math.ceil(word_count / WORDS_PER_MINUTE)
    avg_sentence_length = word_count / sentence_count
    avg_word_length = sum(len(w) for w in words) / word_count

    raw_score = 100 - avg_sentence_length * 1.5 - avg_word_length * 10
    score = int(max(0, min(100, round_half_up(raw_score))))

    metrics = ReadabilityMetrics(
        word_count=word_count,
        sentence_count=sentence_count,
        reading_time=reading_time,
        readability_score=score,
        readability_level=readability_level(score),
        avg_sentence_length=round_half_up(avg_sentence_length, 1),
    )
    logger.debug(f"Readability: {word_count} words, score {score} ({metrics.readability_level})")
    return metrics
