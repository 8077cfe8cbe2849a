"""
Synthetic blog posts for tests and local development.
"""

from __future__ import annotations

import logging
from typing import Optional

from faker import Faker

from blog_api.config import get_settings
from blog_api.db import BlogPostRecord, DbClient

logger = logging.getLogger(__name__)


def generate_blog_post(fake: Faker) -> dict:
    return {
        "author": {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
        },
        "title": fake.sentence(),
        "content": fake.paragraph(nb_sentences=5),
    }


def seed_blog_posts(
    db: DbClient,
    count: Optional[int] = None,
    fake: Optional[Faker] = None,
) -> list[BlogPostRecord]:
    """
    Bulk-insert generated posts and return the stored records.

    ``count`` defaults to the configured ``SEED_COUNT``.
    """
    if count is None:
        count = get_settings().seed_count
    logger.info("seeding blog post data")
    fake = fake or Faker()
    return db.insert_many(generate_blog_post(fake) for _ in range(count))


def tear_down_db(db: DbClient) -> None:
    logger.warning("Deleting database")
    db.drop_database()
