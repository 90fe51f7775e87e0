import base64
import logging
import requests
from typing import Any, Dict, Optional

from ..schemas import ArticleDraft

logger = logging.getLogger(__name__)


def _rendered(field: Any) -> str:
    if isinstance(field, dict):
        return field.get('raw') or field.get('rendered') or ""
    return field or ""


class WordPressClient:
    """Article source and post-meta store over the WordPress REST API."""

    def __init__(self, wp_url: Optional[str], wp_user: Optional[str], wp_app_password: Optional[str]):
        if not wp_url:
            self.wp_url = ""
            logger.warning("WordPress URL is missing.")
        else:
            self.wp_url = wp_url.rstrip('/')

        self.wp_user = wp_user
        self.wp_app_password = wp_app_password
        self.session = requests.Session()

        if wp_user and wp_app_password:
            auth = f"{wp_user}:{wp_app_password}"
            self.token = base64.b64encode(auth.encode()).decode('utf-8')
            self.headers = {
                "Authorization": f"Basic {self.token}"
            }
        else:
            self.headers = {}
            logger.warning("WordPress credentials missing.")

    def _post_url(self, post_id: Any) -> str:
        return f"{self.wp_url}/wp-json/wp/v2/posts/{post_id}"

    def fetch_post(self, post_id: Any, params: Dict = None) -> Optional[Dict]:
        if not self.wp_url: return None
        params = params or {"_embed": 1}
        try:
            response = self.session.get(self._post_url(post_id), headers=self.headers, params=params, timeout=30)
            if response.status_code == 200:
                return response.json()
            logger.error(f"Failed to fetch post {post_id}: {response.status_code}")
        except requests.RequestException as e:
            logger.error(f"Error fetching post {post_id}: {e}")
        return None

    def fetch_article(self, post_id: Any) -> Optional[ArticleDraft]:
        """Read a post as an ArticleDraft (title, HTML body, terms, engagement metrics)."""
        post = self.fetch_post(post_id)
        if not post:
            return None

        terms = [t for group in post.get('_embedded', {}).get('wp:term', []) for t in group]
        categories = [t['name'] for t in terms if t.get('taxonomy') == 'category']
        tags = [t['name'] for t in terms if t.get('taxonomy') == 'post_tag']
        meta = post.get('meta') or {}
        status = post.get('status')

        return ArticleDraft(
            title=_rendered(post.get('title')),
            body_html=_rendered(post.get('content')),
            category=categories[0] if categories else None,
            tags=tags,
            views=meta.get('views'),
            likes=meta.get('likes'),
            status="published" if status == "publish" else status,
        )

    def get_post_meta(self, post_id: Any, key: str) -> Optional[Any]:
        post = self.fetch_post(post_id, params={"context": "edit", "_fields": "id,meta"})
        if not post:
            return None
        return (post.get('meta') or {}).get(key) or None

    def update_post_meta(self, post_id: Any, key: str, value: Any) -> bool:
        if not self.wp_url: return False
        try:
            response = self.session.post(self._post_url(post_id), headers=self.headers,
                                         json={"meta": {key: value}}, timeout=30)
            if response.status_code == 200:
                return True
            logger.error(f"Failed to update meta for post {post_id}: {response.status_code} - {response.text}")
        except requests.RequestException as e:
            logger.error(f"Error updating post {post_id}: {e}")
        return False
