import json
import unittest
from unittest.mock import MagicMock

from content_intel.outline import extract_outline
from content_intel.readability import analyze_readability
from content_intel.schemas import SeoMetadata
from content_intel.store import InMemoryRecordBackend, SeoMetadataGateway, WordPressMetaBackend

SEO = {
    "metaDescription": "A description of the post",
    "keywords": ["remote", "work", "tips", "home", "office"],
    "socialPreviewText": "Read this",
    "suggestedSlug": "remote-work-tips",
}


class TestSeoMetadataGateway(unittest.TestCase):

    def setUp(self):
        self.backend = InMemoryRecordBackend()
        self.gateway = SeoMetadataGateway(self.backend)

    def test_titles_after_seo_keep_seo_fields(self):
        self.gateway.save_seo_metadata(42, SEO)
        record = self.gateway.save_generated_titles(42, ["T1", "T2", "T3", "T4", "T5"])

        self.assertEqual(record.meta_description, "A description of the post")
        self.assertEqual(record.suggested_slug, "remote-work-tips")
        self.assertEqual(record.generated_titles, ["T1", "T2", "T3", "T4", "T5"])
        self.assertEqual(len(self.backend), 1)

    def test_created_at_is_kept_and_updated_at_moves(self):
        first = self.gateway.save_seo_metadata("7", SEO)
        second = self.gateway.save_generated_titles("7", ["A"])

        self.assertEqual(first.created_at, second.created_at)
        self.assertGreaterEqual(second.updated_at, first.updated_at)

    def test_none_values_do_not_blank_fields(self):
        self.gateway.save_seo_metadata(1, SEO)
        record = self.gateway.upsert(1, {"meta_description": None, "suggested_slug": "new-slug"})

        self.assertEqual(record.meta_description, "A description of the post")
        self.assertEqual(record.suggested_slug, "new-slug")

    def test_unknown_field_is_rejected(self):
        with self.assertRaises(ValueError):
            self.gateway.upsert(1, {"author": "someone"})
        self.assertIsNone(self.gateway.get(1))

    def test_camel_and_snake_keys(self):
        self.gateway.upsert(3, {"readingTime": 4})
        record = self.gateway.upsert(3, {"word_count": 700})
        self.assertEqual(record.reading_time, 4)
        self.assertEqual(record.word_count, 700)

    def test_get_missing_post(self):
        self.assertIsNone(self.gateway.get("nope"))

    def test_new_record_leaves_unset_fields_out(self):
        record = self.gateway.save_generated_titles(5, ["Only titles"])
        self.assertIsNone(record.keywords)
        self.assertIsNone(record.meta_description)
        self.assertNotIn("keywords", record.to_wire())

    def test_rejected_patch_leaves_record_intact(self):
        self.gateway.save_generated_titles("p1", ["A", "B"])

        with self.assertRaises(ValueError):
            self.gateway.save_seo_metadata("p1", {"metaDescription": "d", "keywords": "a, b, c"})

        record = self.gateway.get("p1")
        self.assertEqual(record.generated_titles, ["A", "B"])
        self.assertIsNone(record.meta_description)
        self.assertIsNone(record.keywords)

    def test_rejected_patch_on_new_post_creates_nothing(self):
        with self.assertRaises(ValueError):
            self.gateway.upsert("p2", {"readability_score": "very high"})
        self.assertIsNone(self.gateway.get("p2"))
        self.assertEqual(len(self.backend), 0)

    def test_save_seo_metadata_drops_foreign_keys(self):
        payload = dict(SEO, extra="ignored")
        record = self.gateway.save_seo_metadata(8, payload)
        self.assertEqual(record.keywords, SEO["keywords"])

    def test_save_seo_metadata_accepts_model(self):
        seo = SeoMetadata.model_validate(SEO)
        record = self.gateway.save_seo_metadata(9, seo)
        self.assertEqual(record.social_preview_text, "Read this")

    def test_readability_and_outline(self):
        html = "<h2>Intro</h2><p>One sentence here.</p><h3>Detail</h3>"
        self.gateway.update_readability_stats(10, analyze_readability(html))
        record = self.gateway.save_table_of_contents(10, extract_outline(html))

        self.assertEqual(record.word_count, 5)
        self.assertEqual(record.reading_time, 1)
        self.assertEqual([e.text for e in record.table_of_contents], ["Intro", "Detail"])
        self.assertEqual(record.table_of_contents[1].level, 3)

    def test_wire_form(self):
        wire = self.gateway.save_seo_metadata(11, SEO).to_wire()
        self.assertEqual(wire["postId"], "11")
        self.assertIn("createdAt", wire)
        self.assertNotIn("generatedTitles", wire)


class TestWordPressMetaBackend(unittest.TestCase):

    def setUp(self):
        self.wp = MagicMock()
        self.gateway = SeoMetadataGateway(WordPressMetaBackend(self.wp, meta_key="seo_meta"))

    def test_insert_writes_json_meta(self):
        self.wp.get_post_meta.return_value = None
        self.wp.update_post_meta.return_value = True

        record = self.gateway.save_generated_titles(12, ["A", "B"])

        self.assertEqual(record.generated_titles, ["A", "B"])
        post_id, key, value = self.wp.update_post_meta.call_args[0]
        self.assertEqual((post_id, key), ("12", "seo_meta"))
        stored = json.loads(value)
        self.assertEqual(stored["generated_titles"], ["A", "B"])
        self.assertNotIn("keywords", stored)

    def test_patch_merges_existing_record(self):
        existing = {
            "post_id": "12",
            "keywords": ["k"],
            "meta_description": "old",
            "created_at": "2026-01-01T00:00:00+00:00",
            "updated_at": "2026-01-01T00:00:00+00:00",
        }
        self.wp.get_post_meta.return_value = json.dumps(existing)
        self.wp.update_post_meta.return_value = True

        record = self.gateway.save_generated_titles(12, ["New"])

        self.assertEqual(record.meta_description, "old")
        self.assertEqual(record.keywords, ["k"])
        self.assertEqual(record.created_at.year, 2026)
        self.assertEqual(record.generated_titles, ["New"])

    def test_failed_write_raises(self):
        self.wp.get_post_meta.return_value = None
        self.wp.update_post_meta.return_value = False
        with self.assertRaises(IOError):
            self.gateway.save_generated_titles(12, ["A"])

    def test_rejected_patch_is_never_written(self):
        self.wp.get_post_meta.return_value = None

        with self.assertRaises(ValueError):
            self.gateway.save_seo_metadata(12, {"keywords": "one, two"})
        self.wp.update_post_meta.assert_not_called()


if __name__ == '__main__':
    unittest.main()
