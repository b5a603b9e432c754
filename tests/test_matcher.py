import datetime as dt
import unittest

import pandas as pd

from response_schema import UNDEFINED
from response_schema.matcher import TYPE_TAGS, matches


class PrimitiveTagTests(unittest.TestCase):
    def test_string(self):
        self.assertTrue(matches("x", "string"))
        self.assertTrue(matches("", "string"))
        self.assertFalse(matches(1, "string"))
        self.assertFalse(matches(None, "string"))

    def test_number_excludes_nan_and_booleans(self):
        for good in (0, 1, -3, 1.5, -0.0, float("inf")):
            self.assertTrue(matches(good, "number"), good)
        for bad in (float("nan"), True, False, "1", None, [1]):
            self.assertFalse(matches(bad, "number"), bad)

    def test_boolean(self):
        self.assertTrue(matches(True, "boolean"))
        self.assertTrue(matches(False, "boolean"))
        self.assertFalse(matches(0, "boolean"))
        self.assertFalse(matches("true", "boolean"))

    def test_object_is_non_null_non_array_mapping(self):
        self.assertTrue(matches({}, "object"))
        self.assertTrue(matches({"a": 1}, "object"))
        self.assertFalse(matches([], "object"))
        self.assertFalse(matches(None, "object"))
        self.assertFalse(matches("{}", "object"))

    def test_array(self):
        self.assertTrue(matches([], "array"))
        self.assertTrue(matches((1, 2), "array"))
        self.assertFalse(matches("ab", "array"))
        self.assertFalse(matches({}, "array"))

    def test_null_and_undefined_are_distinct(self):
        self.assertTrue(matches(None, "null"))
        self.assertFalse(matches(UNDEFINED, "null"))
        self.assertTrue(matches(UNDEFINED, "undefined"))
        self.assertFalse(matches(None, "undefined"))

    def test_function(self):
        self.assertTrue(matches(len, "function"))
        self.assertTrue(matches(lambda: None, "function"))
        self.assertFalse(matches("len", "function"))

    def test_date_rejects_invalid_instants(self):
        self.assertTrue(matches(dt.datetime(2024, 1, 31, 12, 0), "date"))
        self.assertTrue(matches(dt.date(2024, 1, 31), "date"))
        self.assertTrue(matches(pd.Timestamp("2024-01-31"), "date"))
        self.assertFalse(matches(pd.NaT, "date"))
        self.assertFalse(matches("2024-01-31", "date"))
        self.assertFalse(matches(None, "date"))

    def test_dataframe(self):
        self.assertTrue(matches(pd.DataFrame({"a": [1]}), "dataframe"))
        self.assertFalse(matches({"a": [1]}, "dataframe"))


class FormatTagTests(unittest.TestCase):
    def test_email(self):
        self.assertTrue(matches("jane@example.com", "email"))
        self.assertTrue(matches("a@b.co", "email"))
        for bad in ("jane@example", "jane example@x.com", "@x.com", "a@b.co\n", 5):
            self.assertFalse(matches(bad, "email"), bad)

    def test_url(self):
        good = [
            "https://example.com",
            "https://example.com:8443/path?q=1#frag",
            "ftp://files.example.org",
            "mailto:jane@example.com",
            "urn:isbn:0451450523",
            # special schemes tolerate a missing "//" before the host
            "http:example.com",
            "http:/example.com",
            "https:example.com:8443/x",
        ]
        bad = [
            "example.com",
            "/relative/path",
            "http://",
            "http:",
            "https:exa mple.com",
            "https://exa mple.com",
            "https://example.com:port",
            "not a url",
            "",
            42,
            None,
        ]
        for g in good:
            self.assertTrue(matches(g, "url"), g)
        for b in bad:
            self.assertFalse(matches(b, "url"), str(b))

    def test_uuid(self):
        self.assertTrue(matches("123e4567-e89b-12d3-a456-426614174000", "uuid"))
        self.assertTrue(matches("123E4567-E89B-42D3-B456-426614174000", "uuid"))
        # version nibble 6 and 0 are out of range
        self.assertFalse(matches("123e4567-e89b-62d3-a456-426614174000", "uuid"))
        self.assertFalse(matches("00000000-0000-0000-0000-000000000000", "uuid"))
        # variant nibble must be 8, 9, a or b
        self.assertFalse(matches("123e4567-e89b-12d3-c456-426614174000", "uuid"))
        self.assertFalse(matches("123e4567e89b12d3a456426614174000", "uuid"))

    def test_iso_date(self):
        good = [
            "2024-01-31",
            "2024-01-31T10:20:30",
            "2024-01-31T10:20:30Z",
            "2024-01-31T10:20:30.123Z",
            "2024-01-31T10:20:30.123",
        ]
        bad = [
            "2024-1-31",
            "2024-01-31T10:20",
            "2024-01-31T10:20:30+00:00",
            "2024-01-31T10:20:30.12Z",
            "2024-01-31 10:20:30",
            "２０２４-01-31",  # full-width digits
            dt.date(2024, 1, 31),
        ]
        for g in good:
            self.assertTrue(matches(g, "iso-date"), g)
        for b in bad:
            self.assertFalse(matches(b, "iso-date"), str(b))


class UnknownTagTests(unittest.TestCase):
    def test_unknown_tag_never_matches(self):
        for value in ("x", 1, None, {}, []):
            self.assertFalse(matches(value, "integer"))
            self.assertFalse(matches(value, ""))

    def test_non_string_tag_never_matches(self):
        self.assertFalse(matches("x", None))
        self.assertFalse(matches("x", ["string"]))

    def test_tag_catalogue(self):
        self.assertEqual(
            TYPE_TAGS,
            {
                "string", "number", "boolean", "object", "array", "null",
                "undefined", "function", "date", "email", "url", "uuid",
                "iso-date", "dataframe",
            },
        )
