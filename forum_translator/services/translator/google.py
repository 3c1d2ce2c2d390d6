"""Google Cloud Translation (v2 REST) provider."""

import json
import logging
from types import MappingProxyType
import requests
from forum_translator.constants import normalize_locale
from forum_translator.services.translator.base import TranslatorBase, TranslatorError

logger = logging.getLogger(__name__)


class GoogleTranslator(TranslatorBase):
    """Translate posts and topic titles with Google Translate.

    Detected languages and translations are cached in the record's custom
    fields, so each record costs at most one detect call and one translate
    call per target locale.
    """

    name = 'Google'

    TRANSLATE_URI = 'https://www.googleapis.com/language/translate/v2'
    DETECT_URI = 'https://www.googleapis.com/language/translate/v2/detect'
    SUPPORT_URI = 'https://www.googleapis.com/language/translate/v2/languages'
    MAXLENGTH = 5000

    # Host locale -> Google language code
    # https://cloud.google.com/translate/docs/languages
    SUPPORTED_LANG_MAPPING = MappingProxyType({
        'en': 'en',
        'en_GB': 'en',
        'en_US': 'en',
        'ar': 'ar',
        'bg': 'bg',
        'bs_BA': 'bs',
        'ca': 'ca',
        'cs': 'cs',
        'da': 'da',
        'de': 'de',
        'el': 'el',
        'es': 'es',
        'et': 'et',
        'fi': 'fi',
        'fr': 'fr',
        'he': 'iw',
        'hr': 'hr',
        'hu': 'hu',
        'hy': 'hy',
        'id': 'id',
        'it': 'it',
        'ja': 'ja',
        'ka': 'ka',
        'kk': 'kk',
        'ko': 'ko',
        'ky': 'ky',
        'lv': 'lv',
        'mk': 'mk',
        'nl': 'nl',
        'pt': 'pt',
        'ro': 'ro',
        'ru': 'ru',
        'sk': 'sk',
        'sl': 'sl',
        'sq': 'sq',
        'sr': 'sr',
        'sv': 'sv',
        'tg': 'tg',
        'te': 'te',
        'th': 'th',
        'uk': 'uk',
        'uz': 'uz',
        'zh_CN': 'zh-CN',
        'zh_TW': 'zh-TW',
        'tr_TR': 'tr',
        'pt_BR': 'pt',
        'pl_PL': 'pl',
        'no_NO': 'no',
        'nb_NO': 'no',
        'fa_IR': 'fa',
    })

    def detect(self, record):
        """Language code of the record's text, detected once and cached."""
        detected_lang = self.get_detected_lang(record)
        if detected_lang:
            return detected_lang

        data = self.result(self.DETECT_URI, {'q': self.get_text(record, self.MAXLENGTH)})
        detections = data.get('detections') or [[]]
        candidates = detections[0]
        if not candidates:
            raise TranslatorError("Google could not detect the language")
        # max() keeps the first of equally confident candidates
        best = max(candidates, key=lambda candidate: candidate.get('confidence', 0))
        detected_lang = best['language']

        self.set_detected_lang(record, detected_lang)
        return detected_lang

    def translate_supported(self, source, target):
        """True when Google can translate `source` into the host locale `target`."""
        target_lang_map = self.map_locale(target)
        if not target_lang_map:
            return False

        data = self.result(self.SUPPORT_URI, {'target': target_lang_map})
        languages = data.get('languages')
        if not isinstance(languages, list):
            raise TranslatorError(f"Unexpected response from Google: {data!r}")
        return any(language.get('language') == source for language in languages)

    def translate(self, record, target_lang=None):
        """Translate the record into `target_lang` (a host locale).

        Returns (detected_lang, translated_text), or None when the target
        locale is unsupported or already the record's language.
        """
        target_lang = normalize_locale(target_lang) or normalize_locale(self.default_locale)
        detected_lang = self.detect(record)
        target_lang_map = self.map_locale(target_lang)

        logger.info(f"Translating {record!r}: {detected_lang} -> {target_lang_map}")

        if not target_lang_map or detected_lang == target_lang_map:
            return None

        def _request_translation():
            data = self.result(self.TRANSLATE_URI, {
                'q': self.get_text(record, self.MAXLENGTH),
                'source': detected_lang,
                'target': target_lang_map,
            })
            translations = data.get('translations') or [{}]
            translated_text = translations[0].get('translatedText')
            if translated_text is None:
                raise TranslatorError(f"Unexpected response from Google: {data!r}")
            return translated_text

        translated_text = self.from_custom_fields(record, target_lang, _request_translation)
        logger.debug(f"Translated text for {record!r}: {translated_text}")

        return detected_lang, translated_text

    def result(self, url, params):
        """POST `params` plus the API key to `url` and return the `data` object."""
        key, error = self.resolve_access_token()
        if error:
            raise TranslatorError(error)

        body = dict(params)
        body['key'] = key

        try:
            status, raw = self.transport.post_form(url, body)
        except requests.RequestException as e:
            logger.warning(f"Google Translate request failed: {e}")
            raise TranslatorError(f"Google Translate request failed: {e}") from e

        parsed = None
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            pass

        logger.debug(f"Raw response from Google: {parsed if parsed is not None else raw!r}")

        if not 200 <= status < 300:
            logger.warning(f"Google Translate returned HTTP {status}")
            raise TranslatorError(
                parsed if parsed is not None else f"<Response status={status} body={raw!r}>"
            )

        if not isinstance(parsed, dict) or 'data' not in parsed:
            raise TranslatorError(f"Unexpected response from Google: {raw!r}")
        return parsed['data']
