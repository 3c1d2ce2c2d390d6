"""Translation-aware serializers for posts and topics.

Each function starts from the model's `to_dict()` and overlays the
translator fields when the relevant settings are on. Nothing here talks to
the translation provider; only cached custom fields are read.
"""

from flask import current_app
from forum_translator.constants import (
    DETECTED_LANG_CUSTOM_FIELD,
    DETECTED_TITLE_LANG_CUSTOM_FIELD,
    TRANSLATED_CUSTOM_FIELD,
    normalize_locale,
)
from forum_translator.services.translator import PROVIDERS


def user_locale(user):
    """Locale to present content in for `user` (None = anonymous)."""
    locale = normalize_locale(user.locale) if user is not None else None
    return locale or current_app.config.get('DEFAULT_LOCALE', 'en')


def _lang_mapping():
    provider = PROVIDERS.get(current_app.config.get('TRANSLATOR_PROVIDER', 'Google'))
    return provider.SUPPORTED_LANG_MAPPING if provider else {}


def _translator_enabled():
    return bool(current_app.config.get('TRANSLATOR_ENABLED'))


def _show_translated_titles():
    return _translator_enabled() and bool(
        current_app.config.get('TRANSLATOR_SHOW_TOPIC_TITLES_IN_USER_LOCALE')
    )


def _translated_title(topic, locale):
    translations = topic.custom_fields.get(TRANSLATED_CUSTOM_FIELD)
    if not isinstance(translations, dict):
        return None
    return translations.get(locale)


def _apply_title_translation(data, topic, user):
    if not _show_translated_titles():
        return data

    detected_lang = topic.custom_fields.get(DETECTED_TITLE_LANG_CUSTOM_FIELD)
    translated_title = _translated_title(topic, user_locale(user))
    if not detected_lang or not translated_title:
        return data

    data['original_title'] = topic.title
    data['title'] = translated_title
    data['fancy_title'] = translated_title
    data['title_translated'] = True
    data['title_language'] = detected_lang
    return data


def serialize_post(post, user=None):
    """Post dict with `can_translate`."""
    data = post.to_dict()
    data['can_translate'] = False

    if _translator_enabled():
        detected_lang = post.custom_fields.get(DETECTED_LANG_CUSTOM_FIELD)
        if detected_lang:
            data['can_translate'] = detected_lang != _lang_mapping().get(user_locale(user))

    return data


def serialize_topic_list_item(topic, user=None):
    """Topic dict for topic lists, title shown in the user's locale when cached."""
    return _apply_title_translation(topic.to_dict(), topic, user)


def serialize_topic_view(topic, user=None):
    """Full topic dict with posts and `can_translate_title`."""
    data = _apply_title_translation(topic.to_dict(), topic, user)

    can_translate_title = False
    if _translator_enabled():
        detected_lang = topic.custom_fields.get(DETECTED_TITLE_LANG_CUSTOM_FIELD)
        if detected_lang:
            can_translate_title = detected_lang != _lang_mapping().get(user_locale(user))
    data['can_translate_title'] = can_translate_title

    data['posts'] = [serialize_post(post, user) for post in topic.posts]
    return data
