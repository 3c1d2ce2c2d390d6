"""
Pytest configuration and fixtures for testing the forum API and translator.
"""

import json
import os
import sys
from unittest.mock import MagicMock
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from forum_translator import create_app, db
from forum_translator.models import User, Topic, Post
from forum_translator.models.post import cook
from forum_translator.services.translator import GoogleTranslator
from forum_translator.utils import generate_token

fake = Faker()

API_KEY = '12345'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Fresh database and an app context for the duration of the test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def translator_enabled(app, monkeypatch):
    """Turn the translator on for one test."""
    monkeypatch.setitem(app.config, 'TRANSLATOR_ENABLED', True)
    monkeypatch.setitem(app.config, 'TRANSLATOR_GOOGLE_API_KEY', API_KEY)
    return app.config


def _create_user(password='testpassword123', **overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'username': fake.user_name()[:20] + fake.pystr(min_chars=4, max_chars=6),
        'email': fake.unique.email(),
    }
    data.update(overrides)
    user = User(**data)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def _create_topic(user, title=None, raw=None):
    """Helper to create a topic with its first post."""
    raw = raw or fake.paragraph()
    topic = Topic(title=title or fake.sentence(nb_words=5), user_id=user.id)
    Post(topic=topic, user_id=user.id, post_number=1, raw=raw, cooked=cook(raw))
    db.session.add(topic)
    db.session.commit()
    return topic


@pytest.fixture
def test_user(db_session):
    """A user reading the forum in Japanese."""
    return _create_user(locale='ja')


@pytest.fixture
def second_user(db_session):
    """A user on the site default locale."""
    return _create_user(password='testpassword456')


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers for test user."""
    return {'Authorization': f'Bearer {generate_token(test_user)}'}


@pytest.fixture
def test_topic(db_session, second_user):
    """A topic by second_user with one post."""
    return _create_topic(second_user)


@pytest.fixture
def test_post(test_topic):
    """The first post of test_topic."""
    return test_topic.posts[0]


@pytest.fixture
def create_user(db_session):
    return _create_user


@pytest.fixture
def create_topic(db_session):
    return _create_topic


# ============================================================
#  TRANSLATION PROVIDER STUBS
# ============================================================

def provider_response(body, status=200):
    """(status, body text) as returned by a transport's post_form."""
    return status, body if isinstance(body, str) else json.dumps(body)


def detect_response(language='en', confidence=0.18397073):
    return provider_response({
        'data': {'detections': [[
            {'language': language, 'isReliable': False, 'confidence': confidence}
        ]]}
    })


def translate_response(translated_text):
    return provider_response({
        'data': {'translations': [{'translatedText': translated_text}]}
    })


@pytest.fixture
def transport():
    """Stand-in HTTP transport; set `post_form.return_value` / `side_effect`."""
    return MagicMock()


@pytest.fixture
def translator(transport):
    return GoogleTranslator(api_key=API_KEY, transport=transport, default_locale='en')
