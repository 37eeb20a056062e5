import datetime
import json
import unittest

from lunr_custom_search.artifact import serialize
from lunr_custom_search.config import ConfigError

DOCS = {"a": {"slug": "a", "title": "Café", "tags": ["x", "y"]}}
INDEX = {"version": "2.3.9", "fields": ["title"], "invertedIndex": [], "fieldVectors": [], "pipeline": []}
SETTINGS = {"fields": [{"searchfield": "title", "jekyllfields": ["title"], "boost": 10}], "collections": ["posts"]}


class SerializeTests(unittest.TestCase):
    def test_json_format(self):
        payload = serialize(DOCS, INDEX, "/blog", SETTINGS, "json")
        self.assertIsInstance(payload, bytes)
        data = json.loads(payload.decode("utf-8"))
        self.assertEqual(set(data), {"docs", "index", "baseurl", "lunr_settings"})
        self.assertEqual(data["docs"], DOCS)
        self.assertEqual(data["index"], INDEX)
        self.assertEqual(data["baseurl"], "/blog")
        self.assertEqual(data["lunr_settings"], SETTINGS)

    def test_script_format(self):
        lines = serialize(DOCS, INDEX, None, SETTINGS).decode("utf-8").split("\n")
        self.assertEqual(len(lines), 4)
        parsed = {}
        for line in lines:
            self.assertTrue(line.startswith("var "))
            name, _, value = line[len("var "):].partition(" = ")
            parsed[name] = json.loads(value)
        self.assertEqual(list(parsed), ["docs", "index", "baseurl", "lunr_settings"])
        self.assertEqual(parsed["docs"], DOCS)
        self.assertEqual(parsed["index"], INDEX)
        self.assertIsNone(parsed["baseurl"])
        self.assertEqual(parsed["lunr_settings"], SETTINGS)

    def test_non_ascii_kept(self):
        self.assertIn("Café".encode("utf-8"), serialize(DOCS, INDEX, "", SETTINGS, "json"))

    def test_dates_are_written_as_strings(self):
        docs = {"a": {"date": datetime.date(2020, 1, 2)}}
        data = json.loads(serialize(docs, INDEX, "", SETTINGS, "json"))
        self.assertEqual(data["docs"]["a"]["date"], "2020-01-02")

    def test_unknown_format(self):
        with self.assertRaises(ConfigError):
            serialize(DOCS, INDEX, "", SETTINGS, "xml")


if __name__ == "__main__":
    unittest.main()
