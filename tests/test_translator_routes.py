"""
Tests for POST /api/translator/translate
"""

from unittest.mock import patch
import pytest

from forum_translator import limiter
from forum_translator.constants import TRANSLATED_CUSTOM_FIELD
from forum_translator.services.translator import TranslatorError
from forum_translator.utils import generate_token
from conftest import detect_response, provider_response, translate_response

URL = '/api/translator/translate'


@pytest.fixture
def stub_translator(translator):
    with patch('forum_translator.routes.translator.get_translator', return_value=translator):
        yield translator


class TestTranslateEndpoint:

    def test_disabled(self, client, auth_headers, test_post):
        response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Translator is disabled'

    def test_unauthenticated(self, client, test_post, translator_enabled):
        response = client.post(URL, json={'post_id': test_post.id})

        assert response.status_code == 401

    def test_missing_post_id(self, client, auth_headers, translator_enabled):
        response = client.post(URL, json={}, headers=auth_headers)

        assert response.status_code == 400

    def test_invalid_post_id(self, client, auth_headers, translator_enabled):
        response = client.post(URL, json={'post_id': 'abc'}, headers=auth_headers)

        assert response.status_code == 400

    def test_post_not_found(self, client, auth_headers, translator_enabled):
        response = client.post(URL, json={'post_id': 99999}, headers=auth_headers)

        assert response.status_code == 404

    def test_translates_first_post_and_title(self, client, auth_headers, test_post, test_topic,
                                             translator_enabled, stub_translator, transport):
        transport.post_form.side_effect = [
            detect_response('en'),
            translate_response('<p>投稿</p>'),
            detect_response('en'),
            translate_response('題名'),
        ]

        response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {
            'translation': '<p>投稿</p>',
            'detected_lang': 'en',
            'title_translation': '題名',
        }
        # Cached under the user's locale
        assert test_post.custom_fields[TRANSLATED_CUSTOM_FIELD] == {'ja': '<p>投稿</p>'}
        assert test_topic.custom_fields[TRANSLATED_CUSTOM_FIELD] == {'ja': '題名'}

    def test_reply_has_no_title_translation(self, client, auth_headers, test_topic, create_user,
                                            translator_enabled, stub_translator, transport, db_session):
        from forum_translator.models import Post
        reply = Post(topic_id=test_topic.id, user_id=test_topic.user_id, post_number=2,
                     raw='Second', cooked='<p>Second</p>')
        db_session.add(reply)
        db_session.commit()
        transport.post_form.side_effect = [detect_response('en'), translate_response('<p>二番目</p>')]

        response = client.post(URL, json={'post_id': reply.id}, headers=auth_headers)

        assert response.status_code == 200
        assert 'title_translation' not in response.get_json()

    def test_same_language_returns_no_translation(self, client, test_post, create_user,
                                                  translator_enabled, stub_translator, transport):
        from forum_translator.utils import generate_token
        user = create_user(locale='en')
        transport.post_form.return_value = detect_response('en')

        response = client.post(
            URL, json={'post_id': test_post.id},
            headers={'Authorization': f'Bearer {generate_token(user)}'}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data['translation'] is None
        assert data['detected_lang'] == 'en'
        assert data['title_translation'] is None

    def test_provider_error_is_unprocessable(self, client, auth_headers, test_post,
                                             translator_enabled, stub_translator, transport):
        error_body = {'error': {'code': 403, 'message': 'Daily Limit Exceeded'}}
        transport.post_form.return_value = provider_response(error_body, status=403)

        response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 422
        assert response.get_json()['details'] == error_body

    def test_missing_api_key_is_unprocessable(self, app, client, auth_headers, test_post,
                                              translator_enabled, monkeypatch):
        monkeypatch.setitem(app.config, 'TRANSLATOR_GOOGLE_API_KEY', '')

        response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 422
        assert response.get_json()['error'] == 'NotFound: Google Api Key not set.'

    def test_unknown_provider_is_unprocessable(self, client, auth_headers, test_post, translator_enabled):
        with patch('forum_translator.routes.translator.get_translator',
                   side_effect=TranslatorError('Unknown translator provider: Nope')):
            response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 422

    def test_malformed_provider_response_is_unprocessable(self, client, auth_headers, test_post,
                                                          translator_enabled, stub_translator, transport):
        transport.post_form.side_effect = [
            detect_response('en'),
            provider_response({'data': {'translations': []}}),
        ]

        response = client.post(URL, json={'post_id': test_post.id}, headers=auth_headers)

        assert response.status_code == 422
        assert response.get_json()['error'].startswith('Unexpected response from Google')


@pytest.fixture
def rate_limited(monkeypatch):
    """Rate limiting switched on, with empty counters before and after."""
    monkeypatch.setattr(limiter, 'enabled', True)
    limiter.reset()
    yield limiter
    limiter.reset()


class TestTranslateRateLimit:

    def _statuses(self, client, headers, post_id, count):
        return [
            client.post(URL, json={'post_id': post_id}, headers=headers).status_code
            for _ in range(count)
        ]

    def test_user_is_limited_to_three_per_minute(self, client, auth_headers, test_post, translator_enabled,
                                                 stub_translator, transport, rate_limited):
        transport.post_form.return_value = detect_response('ja')

        assert self._statuses(client, auth_headers, test_post.id, 4) == [200, 200, 200, 429]

    def test_staff_is_exempt(self, client, test_post, create_user, translator_enabled,
                             stub_translator, transport, rate_limited):
        admin = create_user(is_admin=True, locale='ja')
        headers = {'Authorization': f'Bearer {generate_token(admin)}'}
        transport.post_form.return_value = detect_response('ja')

        assert self._statuses(client, headers, test_post.id, 5) == [200] * 5
