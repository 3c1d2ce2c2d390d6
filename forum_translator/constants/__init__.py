"""Shared constants for the application."""

from forum_translator.constants.translator import (
    DETECTED_LANG_CUSTOM_FIELD,
    DETECTED_TITLE_LANG_CUSTOM_FIELD,
    TRANSLATED_CUSTOM_FIELD,
    normalize_locale,
)

__all__ = [
    'DETECTED_LANG_CUSTOM_FIELD',
    'DETECTED_TITLE_LANG_CUSTOM_FIELD',
    'TRANSLATED_CUSTOM_FIELD',
    'normalize_locale',
]
