import json
import os
import runpy
import tempfile
import unittest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "build_lunr_index.py")

CONFIG = """\
baseurl: /docs
lunr_settings:
  collections: [posts]
  format: json
  fields:
    - searchfield: title
      jekyllfields: [title]
      boost: 10
    - searchfield: people
      jekyllfields: [name]
      widget: relational
      collection: people
      matchfield: posts
"""


class ScriptTests(unittest.TestCase):
    def setUp(self):
        self.main = runpy.run_path(SCRIPT, run_name="build_lunr_index")["main"]

    def test_builds_from_disk(self):
        with tempfile.TemporaryDirectory() as root:
            config = os.path.join(root, "_config.yml")
            with open(config, "w", encoding="utf-8") as f:
                f.write(CONFIG)
            os.makedirs(os.path.join(root, "_posts"))
            with open(os.path.join(root, "_posts", "launch.md"), "w", encoding="utf-8") as f:
                f.write("---\ntitle: Launch day\nrecordstatus: inactive\n---\nWe *launched*.\n")
            with open(os.path.join(root, "_posts", "welcome.md"), "w", encoding="utf-8") as f:
                f.write("---\ntitle: Welcome\n---\nHello.\n")
            with open(os.path.join(root, "people.ndjson"), "w", encoding="utf-8") as f:
                f.write('{"slug": "ada", "name": "Ada", "posts": ["launch"]}\n')
            dest = os.path.join(root, "_site")

            code = self.main(["--config", config, "--source", root, "--dest", dest, "--env", "development"])
            self.assertEqual(code, 0)
            with open(os.path.join(dest, "js", "index.json"), encoding="utf-8") as f:
                data = json.load(f)
            self.assertEqual(data["docs"]["launch"]["people"], ["Ada"])
            self.assertEqual(data["docs"]["launch"]["content"], "We launched.")

            code = self.main(["--config", config, "--source", root, "--dest", dest, "--env", "production"])
            self.assertEqual(code, 0)
            with open(os.path.join(dest, "js", "index.json"), encoding="utf-8") as f:
                self.assertEqual(list(json.load(f)["docs"]), ["welcome"])

    def test_bad_config_returns_error(self):
        with tempfile.TemporaryDirectory() as root:
            config = os.path.join(root, "_config.yml")
            with open(config, "w", encoding="utf-8") as f:
                f.write(CONFIG.replace("format: json", "format: xml"))
            self.assertEqual(self.main(["--config", config, "--source", root, "--dest", root]), 1)


if __name__ == "__main__":
    unittest.main()
