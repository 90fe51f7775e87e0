from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ArticleDraft(WireModel):
    title: str = Field(description="Article title")
    body_html: str = Field(default="", description="Article body as HTML")
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    views: Optional[int] = Field(default=None, description="Prior view count")
    likes: Optional[int] = Field(default=None, description="Prior like count")
    status: Optional[str] = Field(default=None, description="Publication status, e.g. 'published'")

    @property
    def metrics(self) -> dict:
        return {"views": self.views, "likes": self.likes}


class OutlineEntry(WireModel):
    id: str = Field(description="Sequential identifier, e.g. heading-0")
    text: str = Field(description="Heading text with markup stripped")
    level: int = Field(ge=1, le=3)


class ReadabilityMetrics(WireModel):
    word_count: int = Field(ge=0)
    sentence_count: int = Field(ge=1)
    reading_time: int = Field(ge=1, description="Minutes at 200 words per minute")
    readability_score: int = Field(ge=0, le=100)
    readability_level: str = Field(description="Easy, Medium or Advanced")
    avg_sentence_length: float = Field(ge=0)


class SeoMetadata(WireModel):
    meta_description: str = Field(description="A compelling 150-160 character meta description for search engines")
    keywords: List[str] = Field(description="5-8 relevant SEO keywords")
    social_preview_text: str = Field(description="An engaging 200-250 character preview for social media sharing")
    suggested_slug: str = Field(description="URL-friendly slug for the post")


class ContentInsights(WireModel):
    overall_score: int = Field(ge=0, le=100)
    strengths: List[str]
    improvements: List[str]
    engagement_tips: List[str]
    seo_suggestions: List[str]
    viral_potential: str = Field(description="Low, Medium or High")
    best_publish_time: str


class PersistedSeoRecord(WireModel):
    post_id: str
    meta_description: Optional[str] = None
    keywords: Optional[List[str]] = None
    social_preview_text: Optional[str] = None
    suggested_slug: Optional[str] = None
    word_count: Optional[int] = None
    sentence_count: Optional[int] = None
    reading_time: Optional[int] = None
    readability_score: Optional[int] = None
    readability_level: Optional[str] = None
    avg_sentence_length: Optional[float] = None
    generated_titles: Optional[List[str]] = None
    table_of_contents: Optional[List[OutlineEntry]] = None
    created_at: datetime
    updated_at: datetime


# Fields a caller may write through the metadata gateway.
RECORD_FIELDS = frozenset(
    name for name in PersistedSeoRecord.model_fields
    if name not in ("post_id", "created_at", "updated_at")
)
