import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

from .schemas import ArticleDraft

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@dataclass
class Bookmark:
    user_id: str
    post_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Insertion order breaks created_at ties when listing newest-first.
    seq: int = 0


@dataclass
class BookmarkEntry:
    bookmark: Bookmark
    post: ArticleDraft


class BookmarkStore:
    """The user → post "saved" relation, at most one entry per pair."""

    def __init__(self, post_lookup: Callable[[Any], Optional[ArticleDraft]]):
        self.post_lookup = post_lookup
        self._bookmarks: Dict[Tuple[str, str], Bookmark] = {}
        self._lock = Lock()
        self._sequence = count()

    def toggle(self, user_id: Any, post_id: Any) -> bool:
        """Add the bookmark if absent, remove it if present. Returns the new state."""
        key = (str(user_id), str(post_id))
        with self._lock:
            if key in self._bookmarks:
                del self._bookmarks[key]
                return False
            self._bookmarks[key] = Bookmark(user_id=key[0], post_id=key[1], seq=next(self._sequence))
            return True

    def exists(self, user_id: Any, post_id: Any) -> bool:
        with self._lock:
            return (str(user_id), str(post_id)) in self._bookmarks

    def remove(self, user_id: Any, post_id: Any) -> None:
        with self._lock:
            self._bookmarks.pop((str(user_id), str(post_id)), None)

    def list_for_user(self, user_id: Any, limit: int = DEFAULT_PAGE_SIZE) -> Tuple[List[BookmarkEntry], bool]:
        """
        Newest-first bookmarks of a user, with a "more available" flag.

        The page is cut before unpublished or missing posts are dropped, so a
        page can hold fewer than ``limit`` entries while ``has_more`` is true.
        """
        limit = limit or DEFAULT_PAGE_SIZE
        with self._lock:
            mine = [b for b in self._bookmarks.values() if b.user_id == str(user_id)]
        mine.sort(key=lambda b: (b.created_at, b.seq), reverse=True)

        has_more = len(mine) > limit
        entries = []
        for bookmark in mine[:limit]:
            post = self.post_lookup(bookmark.post_id)
            if post is None or post.status != "published":
                continue
            entries.append(BookmarkEntry(bookmark=bookmark, post=post))
        return entries, has_more

    def count_for_post(self, post_id: Any) -> int:
        with self._lock:
            return sum(1 for b in self._bookmarks.values() if b.post_id == str(post_id))

    def __len__(self) -> int:
        return len(self._bookmarks)
