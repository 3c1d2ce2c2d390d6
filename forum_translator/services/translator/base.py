"""Provider-independent translator plumbing: errors, credentials, caching."""

import logging
from forum_translator.constants import TRANSLATED_CUSTOM_FIELD, normalize_locale
from forum_translator.services.translator.transport import RequestsTransport

logger = logging.getLogger(__name__)


class TranslatorError(Exception):
    """Raised for any translation failure.

    `payload` is the parsed provider error body when there is one, otherwise
    the message string.
    """

    def __init__(self, payload):
        self.payload = payload
        super().__init__(payload if isinstance(payload, str) else str(payload))


class TranslatorBase:
    """Shared behaviour for translation providers.

    Records passed in must expose `custom_fields`, `save_custom_fields()`,
    `translatable_text(max_length)` and `detected_lang_field`.
    """

    name = None
    MAXLENGTH = 5000
    SUPPORTED_LANG_MAPPING = {}

    def __init__(self, api_key=None, transport=None, default_locale='en'):
        self.api_key = api_key
        self.transport = transport or RequestsTransport()
        self.default_locale = default_locale

    def resolve_access_token(self) -> tuple[str | None, str | None]:
        """Return (key, None) when a key is configured, else (None, error message)."""
        if self.api_key and self.api_key.strip():
            return self.api_key.strip(), None
        return None, f"NotFound: {self.name} Api Key not set."

    def map_locale(self, locale):
        """Provider code for a host locale, or None when the locale is unsupported."""
        locale = normalize_locale(locale)
        if not locale:
            return None
        return self.SUPPORTED_LANG_MAPPING.get(locale)

    @staticmethod
    def get_text(record, max_length):
        return record.translatable_text(max_length)

    @staticmethod
    def get_detected_lang(record):
        return record.custom_fields.get(record.detected_lang_field)

    @staticmethod
    def set_detected_lang(record, lang):
        record.custom_fields[record.detected_lang_field] = lang
        record.save_custom_fields()

    @staticmethod
    def from_custom_fields(record, target_lang, compute):
        """Cached translation of `record` for `target_lang`, computing it on a miss."""
        translations = record.custom_fields.get(TRANSLATED_CUSTOM_FIELD)
        if not isinstance(translations, dict):
            translations = {}

        if target_lang in translations:
            return translations[target_lang]

        translated_text = compute()
        translations = dict(translations)
        translations[target_lang] = translated_text
        record.custom_fields[TRANSLATED_CUSTOM_FIELD] = translations
        record.save_custom_fields()
        return translated_text

    def detect(self, record):
        raise NotImplementedError

    def translate_supported(self, source, target):
        raise NotImplementedError

    def translate(self, record, target_lang=None):
        raise NotImplementedError

    # Longer names for detect / translate_supported
    def detect_language(self, record):
        return self.detect(record)

    def is_target_supported(self, source, target):
        return self.translate_supported(source, target)
