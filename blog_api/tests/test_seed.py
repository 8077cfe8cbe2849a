import unittest
from unittest.mock import patch

from faker import Faker

from blog_api.config import Settings
from blog_api.db import InMemoryDbClient
from blog_api.seed import generate_blog_post, seed_blog_posts, tear_down_db


class SeedTests(unittest.TestCase):
    def test_generate_blog_post_shape(self):
        fake = Faker()
        Faker.seed(1234)
        post = generate_blog_post(fake)
        self.assertEqual(set(post), {"author", "title", "content"})
        self.assertEqual(set(post["author"]), {"firstName", "lastName"})
        self.assertTrue(post["title"])
        self.assertTrue(post["content"])

    @patch("blog_api.seed.get_settings")
    def test_seed_count_defaults_to_settings(self, mock_settings):
        mock_settings.return_value = Settings(_env_file=None, seed_count=4)
        db = InMemoryDbClient()
        with self.assertLogs("blog_api.seed", level="INFO"):
            posts = seed_blog_posts(db)
        self.assertEqual(len(posts), 4)
        self.assertEqual(db.count_posts(), 4)

    def test_default_seed_count_is_ten(self):
        self.assertEqual(Settings(_env_file=None).seed_count, 10)

    def test_tear_down_empties_store(self):
        db = InMemoryDbClient()
        seed_blog_posts(db, count=3)
        with self.assertLogs("blog_api.seed", level="WARNING") as logs:
            tear_down_db(db)
        self.assertIn("Deleting database", logs.output[0])
        self.assertEqual(db.count_posts(), 0)


if __name__ == "__main__":
    unittest.main()
