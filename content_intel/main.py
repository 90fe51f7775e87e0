"""
Content Intel - command-line front end.
Reads posts from WordPress, runs the content-intelligence operations and
stores derived metadata back on the post.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from content_intel.clients.gemini import GeminiClient
from content_intel.clients.wordpress import WordPressClient
from content_intel.config import Settings
from content_intel.errors import InvalidInput
from content_intel.oracle import OracleAdapter
from content_intel.outline import extract_outline
from content_intel.pipeline import ContentIntelligence, OperationResult
from content_intel.readability import analyze_readability
from content_intel.store import SeoMetadataGateway, WordPressMetaBackend

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')


# --- INITIALIZATION ---
def initialize_system(settings: Settings) -> Dict:
    """Initialize all clients and services."""
    gemini = GeminiClient(settings.gemini_api_key, model=settings.gemini_model,
                          openrouter_api_key=settings.openrouter_api_key)
    intel = ContentIntelligence(OracleAdapter(gemini))

    wp = WordPressClient(settings.wp_url, settings.wp_user, settings.wp_app_password)
    gateway = SeoMetadataGateway(WordPressMetaBackend(wp, settings.seo_meta_key))

    return {
        "gemini": gemini,
        "intel": intel,
        "wp": wp,
        "gateway": gateway,
    }


def emit(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def read_file(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


# --- PROCESSES ---

def run_analyze(path: str) -> int:
    """Readability stats for a local HTML file (no AI, no WordPress)."""
    try:
        metrics = analyze_readability(read_file(path))
    except InvalidInput as e:
        logger.error(f"❌ {e}")
        return 1
    emit(metrics.to_wire())
    return 0


def run_outline(path: str) -> int:
    emit([entry.to_wire() for entry in extract_outline(read_file(path))])
    return 0


def report(result: OperationResult) -> int:
    emit(result.to_dict())
    return 0 if result.success else 1


def run_for_post(components: Dict, command: str, post_id: str) -> int:
    """Generate metadata for a WordPress post and save it on the post."""
    article = components["wp"].fetch_article(post_id)
    if not article:
        logger.error(f"Post {post_id} not found.")
        return 1

    intel: ContentIntelligence = components["intel"]
    gateway: SeoMetadataGateway = components["gateway"]
    logger.info(f"🎯 Post {post_id}: {article.title}")

    try:
        if command == "seo":
            result = intel.generate_seo_metadata(article.title, article.body_html)
            if result.success:
                gateway.save_seo_metadata(post_id, result.data)
                try:
                    gateway.update_readability_stats(post_id, analyze_readability(article.body_html))
                except InvalidInput:
                    logger.warning("Post has no text; skipping readability stats")
                gateway.save_table_of_contents(post_id, extract_outline(article.body_html))
        elif command == "titles":
            result = intel.generate_title_variants(article.title, article.body_html)
            if result.success:
                gateway.save_generated_titles(post_id, result.data)
        else:
            result = intel.generate_content_insights(article.title, article.body_html, article.metrics)
    except (IOError, ValueError) as e:
        logger.error(f"❌ Failed to save metadata for post {post_id}: {e}")
        return 1

    return report(result)


def check_config(settings: Settings) -> int:
    missing = settings.missing()
    for name in missing:
        logger.error(f"{name}: NOT FOUND")
    if not missing:
        logger.info("✅ All required environment variables are set.")
    return 1 if missing else 0


def show_help():
    """Display usage information."""
    help_text = """
Content Intel - Usage Guide

Commands:
  python main.py analyze FILE             Reading time and readability of an HTML file
  python main.py outline FILE             Table of contents of an HTML file
  python main.py draft "TITLE" [CATEGORY] Generate a blog post draft
  python main.py improve FILE [MODE]      Improve an HTML file (expand | simplify | enhance)
  python main.py seo POST_ID              Generate and save SEO metadata for a post
  python main.py titles POST_ID           Generate and save alternative titles for a post
  python main.py insights POST_ID         Performance insights for a post
  python main.py check-config             Verify environment variables
  python main.py help                     Show this help message

Environment Variables (Required):
  GEMINI_API_KEY          Google Gemini API key (or OPENROUTER_API_KEY)
  WP_URL                  WordPress site URL
  WP_USER                 WordPress username
  WP_APP_PASSWORD         WordPress application password

Environment Variables (Optional):
  GEMINI_MODEL            Model name (default: gemini-2.5-flash)
  SEO_META_KEY            Post-meta key for stored metadata (default: content_intel_seo)
  LOG_LEVEL               Logging level (default: INFO)
"""
    print(help_text)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    command = argv[0].lower() if argv else "help"
    args = argv[1:]

    if command in ["help", "-h", "--help"]:
        show_help()
        return 0
    if command == "check-config":
        return check_config(settings)
    if command in ["analyze", "outline", "improve", "seo", "titles", "insights", "draft"] and not args:
        logger.error(f"'{command}' needs an argument. See: python main.py help")
        return 2
    if command == "analyze":
        return run_analyze(args[0])
    if command == "outline":
        return run_outline(args[0])

    components = initialize_system(settings)
    intel: ContentIntelligence = components["intel"]

    if command == "draft":
        category = args[1] if len(args) > 1 else None
        return report(intel.generate_draft(args[0], category=category))
    if command == "improve":
        mode = args[1] if len(args) > 1 else "enhance"
        return report(intel.improve_draft(read_file(args[0]), mode))
    if command in ["seo", "titles", "insights"]:
        return run_for_post(components, command, args[0])

    logger.error(f"Unknown command: {command}")
    show_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
