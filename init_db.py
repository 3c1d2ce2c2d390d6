#!/usr/bin/env python
"""Database initialization script for the forum backend.

Creates all tables from the SQLAlchemy models. Run this once before starting
the application for the first time (or use `flask db upgrade`).

Usage:
    python init_db.py
"""

import os
import sys
from forum_translator import create_app, db

TABLES_INFO = [
    ("users", "User accounts and locale preferences"),
    ("topics", "Discussion topics"),
    ("posts", "Posts inside topics"),
    ("topic_custom_fields", "Topic metadata (detected title language, translations)"),
    ("post_custom_fields", "Post metadata (detected language, translations)"),
]


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            db.create_all()

            print("Created tables:")
            for table_name, description in TABLES_INFO:
                print(f"  - {table_name:<25} {description}")

            print("\nNext steps:")
            print("  1. Set TRANSLATOR_ENABLED=true and TRANSLATOR_GOOGLE_API_KEY")
            print("  2. Start the Flask server: python wsgi.py")
            return True
        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
