"""
Tests for scripts/detect_post_languages.py
"""

from unittest.mock import patch
import pytest

from forum_translator.constants import DETECTED_LANG_CUSTOM_FIELD
from scripts import detect_post_languages as script
from conftest import detect_response, provider_response


@pytest.fixture
def stub_translator(translator):
    with patch.object(script, 'get_translator', return_value=translator):
        yield translator


class TestDetectPostLanguages:

    def test_only_pending_posts_are_selected(self, test_post, create_topic, second_user):
        other = create_topic(second_user).posts[0]
        test_post.custom_fields[DETECTED_LANG_CUSTOM_FIELD] = 'en'
        test_post.save_custom_fields()

        assert script.posts_without_language() == [other]

    def test_detects_and_caches(self, test_post, create_topic, second_user, stub_translator, transport):
        other = create_topic(second_user).posts[0]
        transport.post_form.side_effect = [detect_response('fr'), detect_response('de')]

        assert script.detect_post_languages() == (2, 0)

        assert test_post.custom_fields[DETECTED_LANG_CUSTOM_FIELD] == 'fr'
        assert other.custom_fields[DETECTED_LANG_CUSTOM_FIELD] == 'de'
        assert script.posts_without_language() == []

    def test_limit(self, test_post, create_topic, second_user, stub_translator, transport):
        create_topic(second_user)
        transport.post_form.return_value = detect_response('en')

        assert script.detect_post_languages(limit=1) == (1, 0)
        assert transport.post_form.call_count == 1

    def test_stops_at_first_error(self, test_post, create_topic, second_user, stub_translator, transport):
        create_topic(second_user)
        transport.post_form.return_value = provider_response({'error': {'code': 403}}, status=403)

        assert script.detect_post_languages() == (0, 1)
        assert transport.post_form.call_count == 1
