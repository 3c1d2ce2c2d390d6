#!/usr/bin/env python3
"""Detect and cache the language of posts that have none yet.

Posts only show a translate button once their language is known, so run this
after enabling the translator on an existing forum. Stops at the first
provider error (bad key, quota) rather than hammering the API.

Usage:
    python scripts/detect_post_languages.py [--limit N]
"""

import argparse
import logging
import os
import sys

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from forum_translator import create_app, db
from forum_translator.constants import DETECTED_LANG_CUSTOM_FIELD
from forum_translator.models import Post, PostCustomField
from forum_translator.services.translator import TranslatorError, get_translator

logger = logging.getLogger('detect_post_languages')


def posts_without_language(limit=None):
    """Posts with no detected language custom field, oldest first."""
    detected = db.select(PostCustomField.post_id).where(
        PostCustomField.name == DETECTED_LANG_CUSTOM_FIELD
    )
    query = Post.query.filter(Post.id.not_in(detected)).order_by(Post.id)
    if limit:
        query = query.limit(limit)
    return query.all()


def detect_post_languages(limit=None):
    """Detect languages for pending posts. Returns (detected, failed)."""
    translator = get_translator()
    detected = 0

    for post in posts_without_language(limit):
        try:
            lang = translator.detect(post)
        except TranslatorError as e:
            logger.error(f"Detection failed for post {post.id}: {e}")
            return detected, 1
        logger.info(f"Post {post.id}: {lang}")
        detected += 1

    return detected, 0


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--limit', type=int, default=None, help='Maximum number of posts to process')
    args = parser.parse_args(argv)

    app = create_app(os.getenv('FLASK_ENV', 'development'))
    with app.app_context():
        if not app.config.get('TRANSLATOR_ENABLED'):
            logger.warning("TRANSLATOR_ENABLED is off; nothing to do")
            return 0

        detected, failed = detect_post_languages(args.limit)
        logger.info(f"Detected {detected} post language(s)")
        return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
