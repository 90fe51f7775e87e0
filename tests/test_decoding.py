"""
Tests for decoding raw model responses.
"""

import unittest

from content_intel.decoding import decode_array, decode_object, decode_prose
from content_intel.errors import EmptyResponse, MalformedResponse, TooShort


class TestDecodeObject(unittest.TestCase):

    def test_tolerates_prose_and_code_fence(self):
        raw = "Here you go:\n```json\n{\"a\":1}\n```"
        self.assertEqual(decode_object(raw), {"a": 1})

    def test_plain_json(self):
        self.assertEqual(decode_object('{"keywords": ["x", "y"]}'), {"keywords": ["x", "y"]})

    def test_nested_object(self):
        raw = 'Result: {"outer": {"inner": [1, 2]}} Thanks!'
        self.assertEqual(decode_object(raw), {"outer": {"inner": [1, 2]}})

    def test_no_braces(self):
        with self.assertRaises(MalformedResponse):
            decode_object("no braces here")

    def test_empty_and_none(self):
        with self.assertRaises(MalformedResponse):
            decode_object("")
        with self.assertRaises(MalformedResponse):
            decode_object(None)

    def test_invalid_json_span(self):
        with self.assertRaises(MalformedResponse):
            decode_object("{not: json,}")

    def test_reversed_braces(self):
        with self.assertRaises(MalformedResponse):
            decode_object("} oops {")

    def test_two_objects_are_not_salvaged(self):
        with self.assertRaises(MalformedResponse):
            decode_object('{"a": 1} and also {"b": 2}')


class TestDecodeArray(unittest.TestCase):

    def test_tolerates_code_fence(self):
        raw = '```json\n["One", "Two", "Three"]\n```'
        self.assertEqual(decode_array(raw), ["One", "Two", "Three"])

    def test_no_brackets(self):
        with self.assertRaises(MalformedResponse):
            decode_array('{"titles": "none"}')

    def test_invalid_json(self):
        with self.assertRaises(MalformedResponse):
            decode_array("[Title 1, Title 2]")


class TestDecodeProse(unittest.TestCase):

    def test_trims(self):
        self.assertEqual(decode_prose("  <p>Hi</p>\n"), "<p>Hi</p>")

    def test_no_minimum_by_default(self):
        self.assertEqual(decode_prose("x"), "x")
        self.assertEqual(decode_prose(None), "")

    def test_minimum_length(self):
        text = "<p>" + "x" * 100 + "</p>"
        self.assertEqual(decode_prose(text, min_length=100), text)
        with self.assertRaises(TooShort):
            decode_prose("<p>short</p>", min_length=100)

    def test_empty_with_minimum(self):
        with self.assertRaises(EmptyResponse) as ctx:
            decode_prose("   ", min_length=100)
        self.assertNotIsInstance(ctx.exception, TooShort)

    def test_too_short_is_an_empty_response(self):
        self.assertTrue(issubclass(TooShort, EmptyResponse))


if __name__ == '__main__':
    unittest.main()
