import importlib.util
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from blog_api.db import SqlDbClient

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "seed_blog_posts.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("seed_blog_posts", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class SeedScriptTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.script = _load_script()

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        db_path = os.path.join(self.tmpdir.name, "seed.db")
        self.database_url = f"sqlite+pysqlite:///{db_path}"

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, *args: str):
        argv = ["seed_blog_posts.py", "--database-url", self.database_url, *args]
        with patch("sys.argv", argv):
            return self.script.main()

    def _count_posts(self) -> int:
        db = SqlDbClient(self.database_url)
        try:
            return db.count_posts()
        finally:
            db.close()

    def test_seeds_requested_count(self):
        self.assertEqual(self._run("--count", "3"), 0)
        self.assertEqual(self._count_posts(), 3)

    def test_appends_without_drop(self):
        self._run("--count", "2")
        self._run("--count", "3")
        self.assertEqual(self._count_posts(), 5)

    def test_drop_replaces_existing_posts(self):
        self._run("--count", "4")
        self.assertEqual(self._run("--count", "2", "--drop"), 0)
        self.assertEqual(self._count_posts(), 2)

    def test_negative_count_is_rejected(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("--count", "-1")
        self.assertEqual(ctx.exception.code, 2)

    def test_unusable_database_returns_1(self):
        self.database_url = "bogus://x"
        with self.assertLogs(level="ERROR") as logs:
            self.assertEqual(self._run("--count", "1"), 1)
        self.assertIn("Seeding failed", logs.output[0])


if __name__ == "__main__":
    unittest.main()
