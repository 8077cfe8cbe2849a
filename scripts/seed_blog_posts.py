"""
Seed a blog posts database with synthetic posts for local development.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog_api.config import get_settings
from blog_api.dependencies import close_db_client, connect_db
from blog_api.errors import StoreError
from blog_api.seed import seed_blog_posts, tear_down_db

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--count",
        type=int,
        default=settings.seed_count,
        help="Number of posts to insert",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL to seed (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Delete existing posts before seeding",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    if args.count < 0:
        parser.error("--count must be zero or more")

    try:
        db = connect_db(args.database_url)
        if args.drop:
            tear_down_db(db)
        posts = seed_blog_posts(db, count=args.count)
        logger.info("Inserted %d posts (%d total)", len(posts), db.count_posts())
    except StoreError as exc:
        logger.error("Seeding failed: %s", exc.message)
        return 1
    finally:
        close_db_client()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
