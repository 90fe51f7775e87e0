"""
Prompt construction for the content-intelligence operations.

This module provides one builder method per operation:
- Full blog post drafts (HTML)
- Draft revisions (expand / simplify / enhance)
- SEO metadata (JSON object)
- Alternative titles (JSON array)
- Performance insights (JSON object)
"""

import logging
from typing import Dict, List, Optional

from .errors import MissingInput

logger = logging.getLogger(__name__)

SEO_EXCERPT_CHARS = 3000
INSIGHTS_EXCERPT_CHARS = 2000
TITLES_EXCERPT_CHARS = 2000

IMPROVE_MODES = ("expand", "simplify", "enhance")
DEFAULT_IMPROVE_MODE = "enhance"


def _require(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise MissingInput(message)
    return value


def excerpt(content: Optional[str], limit: int) -> str:
    """Prefix cut of ``content`` to at most ``limit`` characters."""
    return (content or "")[:limit]


class ContentPromptBuilder:
    """Builds the prompts sent to the text-generation oracle."""

    def __init__(self, seo_excerpt_chars: int = SEO_EXCERPT_CHARS,
                 insights_excerpt_chars: int = INSIGHTS_EXCERPT_CHARS,
                 titles_excerpt_chars: int = TITLES_EXCERPT_CHARS):
        self.seo_excerpt_chars = seo_excerpt_chars
        self.insights_excerpt_chars = insights_excerpt_chars
        self.titles_excerpt_chars = titles_excerpt_chars

    def build_draft_prompt(self, title: str, category: Optional[str] = None,
                           tags: Optional[List[str]] = None) -> str:
        """
        Build the prompt for a full blog post draft.

        Args:
            title: Post title (required)
            category: Optional category name
            tags: Optional list of tags

        Returns:
            Prompt string asking for HTML body content
        """
        _require(title, "Title is required to generate content")
        category_line = f"Category: {category}" if category else ""
        tags_line = f"Tags: {', '.join(tags)}" if tags else ""

        return f"""
Write a comprehensive blog post with the title: "{title}"

{category_line}
{tags_line}

Requirements:
- Write engaging, informative content that matches the title
- Use proper HTML formatting with headers (h2, h3), paragraphs, lists, and emphasis
- Include 3-5 main sections with clear subheadings
- Write in a conversational yet professional tone
- Make it approximately 800-1200 words
- Include practical insights, examples, or actionable advice where relevant
- Use <h2> for main sections and <h3> for subsections
- Use <p> tags for paragraphs
- Use <ul> and <li> for bullet points when appropriate
- Use <strong> and <em> for emphasis
- Ensure the content is original and valuable to readers

Do not include the title in the content as it will be added separately.
Start directly with the introduction paragraph.
"""

    def resolve_improve_mode(self, mode: Optional[str]) -> str:
        """Unknown modes fall back to ``enhance``."""
        if mode in IMPROVE_MODES:
            return mode
        if mode:
            logger.debug(f"Unknown improvement mode '{mode}', using '{DEFAULT_IMPROVE_MODE}'")
        return DEFAULT_IMPROVE_MODE

    def build_improve_prompt(self, content: str, mode: Optional[str] = DEFAULT_IMPROVE_MODE) -> str:
        """Build the prompt for revising existing HTML content."""
        _require(content, "Content is required for improvement")
        mode = self.resolve_improve_mode(mode)

        if mode == "expand":
            return f"""
Take this blog content and expand it with more details, examples, and insights:

{content}

Requirements:
- Keep the existing structure and main points
- Add more depth and detail to each section
- Include practical examples and insights
- Maintain the original tone and style
- Return the improved content in the same HTML format
"""

        if mode == "simplify":
            return f"""
Take this blog content and make it more concise and easier to read:

{content}

Requirements:
- Keep all main points but make them clearer
- Remove unnecessary complexity
- Use simpler language where possible
- Maintain the HTML formatting
- Keep the essential information
"""

        return f"""
Improve this blog content by making it more engaging and well-structured:

{content}

Requirements:
- Improve the flow and readability
- Add engaging transitions between sections
- Enhance with better examples or explanations
- Maintain the original HTML structure
- Keep the same length approximately
- Make it more compelling to read
"""

    def build_seo_prompt(self, title: str, content: str) -> str:
        """Build the prompt for meta description, keywords, social preview and slug."""
        if not (title and title.strip()) or not (content and content.strip()):
            raise MissingInput("Title and content are required for SEO optimization")

        return f"""
Analyze this blog post and generate SEO metadata:

Title: "{title}"
Content: {excerpt(content, self.seo_excerpt_chars)}

Generate the following in JSON format (return ONLY valid JSON, no markdown):
{{
  "metaDescription": "A compelling 150-160 character meta description for search engines",
  "keywords": ["array", "of", "5-8", "relevant", "seo", "keywords"],
  "socialPreviewText": "An engaging 200-250 character preview for social media sharing",
  "suggestedSlug": "url-friendly-slug-for-the-post"
}}

Requirements:
- Meta description should be compelling and include primary keyword
- Keywords should be relevant and searchable terms
- Social preview should be engaging and shareable
- All text should be natural and not keyword-stuffed
"""

    def build_titles_prompt(self, title: str, content: Optional[str] = None) -> str:
        """Build the prompt for five alternative titles."""
        _require(title, "Current title is required")
        preview = excerpt(content, self.titles_excerpt_chars)
        preview_line = f"Content Preview: {preview}" if preview else ""

        return f"""
Generate 5 alternative catchy titles for this blog post:

Current Title: "{title}"
{preview_line}

Requirements:
- Each title should be unique and engaging
- Mix different styles: question-based, how-to, numbered lists, intriguing statements
- Keep titles under 60 characters for SEO
- Make them click-worthy but not clickbait
- Return ONLY a JSON array of strings, no markdown

Example format: ["Title 1", "Title 2", "Title 3", "Title 4", "Title 5"]
"""

    def build_insights_prompt(self, title: str, content: str,
                              metrics: Optional[Dict[str, Optional[int]]] = None) -> str:
        """
        Build the prompt for performance insights.

        ``metrics`` may carry ``views`` and ``likes``; each is included only
        when present and positive.
        """
        if not (title and title.strip()) or not (content and content.strip()):
            raise MissingInput("Title and content are required for insights")

        metrics = metrics or {}
        metric_lines = []
        if (metrics.get("views") or 0) > 0:
            metric_lines.append(f"Current Views: {metrics['views']}")
        if (metrics.get("likes") or 0) > 0:
            metric_lines.append(f"Current Likes: {metrics['likes']}")
        metrics_block = "\n".join(metric_lines)

        return f"""
Analyze this blog post and provide performance insights:

Title: "{title}"
Content: {excerpt(content, self.insights_excerpt_chars)}
{metrics_block}

Provide actionable insights in JSON format (return ONLY valid JSON, no markdown):
{{
  "overallScore": 85,
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "improvements": ["improvement suggestion 1", "improvement suggestion 2"],
  "engagementTips": ["tip 1", "tip 2"],
  "seoSuggestions": ["seo tip 1", "seo tip 2"],
  "viralPotential": "Medium",
  "bestPublishTime": "Tuesday 10 AM EST"
}}

Requirements:
- overallScore should be 0-100 based on content quality
- Provide 2-4 items for each array
- Be specific and actionable
- viralPotential should be "Low", "Medium", or "High"
"""
