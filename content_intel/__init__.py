"""
Content intelligence for blog posts: reading time, readability, outline,
and AI-generated drafts, SEO metadata, title variants and insights.
"""
