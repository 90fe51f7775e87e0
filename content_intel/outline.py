"""
Table-of-contents extraction from article HTML.
"""

import re
from typing import Dict, List, Optional

from .schemas import OutlineEntry

HEADING_PATTERN = re.compile(r'<h([1-3])[^>]*>(.*?)</h[1-3]>', re.IGNORECASE)
TAG_PATTERN = re.compile(r'<[^>]*>')

DEFAULT_ID_PREFIX = "heading-"


def strip_tags(html: str) -> str:
    return TAG_PATTERN.sub('', html)


def extract_outline(html: Optional[str], id_prefix: str = DEFAULT_ID_PREFIX) -> List[OutlineEntry]:
    """
    Extract h1-h3 headings from HTML content, in document order.

    Headings whose text is empty once inner markup is stripped are skipped, and
    identifiers number only the headings that are kept, so they stay gapless:
    ``heading-0``, ``heading-1``, ...

    Args:
        html: Article body as HTML. ``None`` or empty gives an empty outline.
        id_prefix: Prefix for entry identifiers (the reader widget uses
            ``toc-heading-``).

    Returns:
        List of OutlineEntry objects.
    """
    if not html:
        return []

    entries = []
    for match in HEADING_PATTERN.finditer(html):
        text = strip_tags(match.group(2)).strip()
        if not text:
            continue
        entries.append(OutlineEntry(
            id=f"{id_prefix}{len(entries)}",
            text=text,
            level=int(match.group(1)),
        ))
    return entries


def outline_to_dicts(entries: List[OutlineEntry]) -> List[Dict]:
    """Wire form of an outline: ``[{"id", "text", "level"}, ...]``."""
    return [entry.to_wire() for entry in entries]
