import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

REQUIRED_VARS = ["GEMINI_API_KEY", "WP_URL", "WP_USER", "WP_APP_PASSWORD"]


@dataclass
class Settings:
    gemini_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    wp_url: Optional[str] = None
    wp_user: Optional[str] = None
    wp_app_password: Optional[str] = None
    seo_meta_key: str = "content_intel_seo"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load: bool = True) -> "Settings":
        """Read settings from the environment (and ``.env`` when ``load`` is set)."""
        if load:
            load_dotenv(override=True)
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY"),
            openrouter_api_key=os.environ.get("OPENROUTER_API_KEY"),
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-2.5-flash"),
            wp_url=os.environ.get("WP_URL"),
            wp_user=os.environ.get("WP_USER"),
            wp_app_password=os.environ.get("WP_APP_PASSWORD"),
            seo_meta_key=os.environ.get("SEO_META_KEY", "content_intel_seo"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    def missing(self) -> List[str]:
        """Names of required variables that are unset. An OpenRouter key stands in for the Gemini key."""
        values = {
            "GEMINI_API_KEY": self.gemini_api_key or self.openrouter_api_key,
            "WP_URL": self.wp_url,
            "WP_USER": self.wp_user,
            "WP_APP_PASSWORD": self.wp_app_password,
        }
        return [name for name in REQUIRED_VARS if not values[name]]
