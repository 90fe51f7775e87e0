"""
Utility functions for the content-intel project.
"""

import re
from typing import Type

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Field alias mapping: common AI-generated key names → canonical snake_case
# field names of the wire models.
#
# After converting raw AI keys to snake_case we apply these aliases so that,
# e.g., a model that returns "DESCRIPTION" (→ "description") is mapped to the
# canonical "meta_description" field, which then renders as "metaDescription".
# ---------------------------------------------------------------------------
FIELD_ALIASES: dict = {
    # meta_description
    "description": "meta_description",
    "seo_description": "meta_description",
    "meta_desc": "meta_description",
    # keywords
    "seo_keywords": "keywords",
    "keyword_list": "keywords",
    "tags": "keywords",
    # social_preview_text
    "social_preview": "social_preview_text",
    "social_text": "social_preview_text",
    "social_description": "social_preview_text",
    # suggested_slug
    "slug": "suggested_slug",
    "url_slug": "suggested_slug",
    "post_slug": "suggested_slug",
    # insights
    "score": "overall_score",
    "quality_score": "overall_score",
    "weaknesses": "improvements",
    "engagement": "engagement_tips",
    "seo_tips": "seo_suggestions",
    "virality": "viral_potential",
    "publish_time": "best_publish_time",
    "best_time_to_publish": "best_publish_time",
}


def to_snake_case(key: str) -> str:
    """
    Convert a key to snake_case.

    Examples:
        'META_DESCRIPTION'   → 'meta_description'
        'metaDescription'    → 'meta_description'
        'SEOKeywords'        → 'seo_keywords'
        'suggested_slug'     → 'suggested_slug'
    """
    # Step 1 – split "ABCDef" → "ABC_Def"
    s1 = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', str(key))
    # Step 2 – split "camelCase" → "camel_Case"
    s2 = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.lower().replace("-", "_").replace(" ", "_")


def normalize_payload_keys(data: dict, model: Type[BaseModel]) -> dict:
    """
    Map the keys of a decoded AI payload onto the wire (camelCase) names of
    ``model``.

    Keys are converted to snake_case, run through :data:`FIELD_ALIASES`, and
    renamed to the field's alias when they name a field of ``model``. Keys that
    match no field are kept as they came. Values are never touched.

    Returns the input unchanged if it is not a dict.
    """
    if not isinstance(data, dict):
        return data

    fields = model.model_fields
    normalized = {}
    for key, value in data.items():
        snake_key = FIELD_ALIASES.get(to_snake_case(key), to_snake_case(key))
        if snake_key in fields:
            normalized[fields[snake_key].alias or snake_key] = value
        else:
            normalized[key] = value

    return normalized
