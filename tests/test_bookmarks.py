import threading
import unittest
from datetime import datetime, timedelta, timezone

from content_intel.bookmarks import Bookmark, BookmarkStore
from content_intel.schemas import ArticleDraft


class TestBookmarkStore(unittest.TestCase):

    def setUp(self):
        self.posts = {
            str(i): ArticleDraft(title=f"Post {i}", status="published") for i in range(1, 6)
        }
        self.posts["draft"] = ArticleDraft(title="Unfinished", status="draft")
        self.store = BookmarkStore(self.posts.get)

    def test_toggle_twice_restores_state(self):
        self.assertTrue(self.store.toggle("u1", 1))
        self.assertTrue(self.store.exists("u1", "1"))
        self.assertEqual(self.store.count_for_post(1), 1)

        self.assertFalse(self.store.toggle("u1", 1))
        self.assertFalse(self.store.exists("u1", 1))
        self.assertEqual(self.store.count_for_post(1), 0)
        self.assertEqual(len(self.store), 0)

    def test_one_bookmark_per_pair(self):
        self.store.toggle("u1", 1)
        self.store.toggle("u2", 1)
        self.assertEqual(self.store.count_for_post(1), 2)
        self.assertEqual(len(self.store), 2)

    def test_remove_is_idempotent(self):
        self.store.toggle("u1", 2)
        self.store.remove("u1", 2)
        self.store.remove("u1", 2)
        self.assertFalse(self.store.exists("u1", 2))

    def test_list_is_newest_first_with_has_more(self):
        for post_id in ["1", "2", "3"]:
            self.store.toggle("u1", post_id)

        entries, has_more = self.store.list_for_user("u1", limit=2)

        self.assertTrue(has_more)
        self.assertEqual([e.post.title for e in entries], ["Post 3", "Post 2"])

        entries, has_more = self.store.list_for_user("u1", limit=3)
        self.assertFalse(has_more)
        self.assertEqual(len(entries), 3)

    def test_list_orders_by_created_at(self):
        now = datetime.now(timezone.utc)
        self.store._bookmarks[("u1", "1")] = Bookmark("u1", "1", created_at=now)
        self.store._bookmarks[("u1", "2")] = Bookmark("u1", "2", created_at=now - timedelta(days=1))

        entries, _ = self.store.list_for_user("u1")
        self.assertEqual([e.bookmark.post_id for e in entries], ["1", "2"])

    def test_unpublished_and_missing_posts_are_skipped(self):
        self.store.toggle("u1", "1")
        self.store.toggle("u1", "draft")
        self.store.toggle("u1", "deleted")

        entries, has_more = self.store.list_for_user("u1")

        self.assertFalse(has_more)
        self.assertEqual([e.bookmark.post_id for e in entries], ["1"])

    def test_lists_only_own_bookmarks(self):
        self.store.toggle("u1", "1")
        self.store.toggle("u2", "2")
        entries, _ = self.store.list_for_user("u2")
        self.assertEqual([e.post.title for e in entries], ["Post 2"])

    def test_count_while_toggling(self):
        store = BookmarkStore(self.posts.get)
        for i in range(5000):
            store.toggle(f"reader-{i}", "p")

        errors = []
        stop = threading.Event()

        def writer():
            i = 0
            while not stop.is_set():
                store.toggle(f"writer-{i % 500}", "p")
                i += 1

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(200):
                try:
                    store.count_for_post("p")
                    store.exists("reader-1", "p")
                except RuntimeError as e:
                    errors.append(str(e))
        finally:
            stop.set()
            thread.join()

        self.assertEqual(errors, [])

    def test_sequence_is_per_store(self):
        other = BookmarkStore(self.posts.get)
        other.toggle("u9", "1")
        other.toggle("u9", "2")

        self.store.toggle("u1", "1")
        entries, _ = self.store.list_for_user("u1")
        self.assertEqual(entries[0].bookmark.seq, 0)


if __name__ == '__main__':
    unittest.main()
