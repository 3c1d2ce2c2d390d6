"""Translation providers with custom-field caching.

Usage:
    translator = get_translator()
    result = translator.translate(post, 'ja')
    if result:
        detected_lang, translated_text = result
"""

from flask import current_app
from forum_translator.services.translator.base import TranslatorBase, TranslatorError
from forum_translator.services.translator.google import GoogleTranslator
from forum_translator.services.translator.transport import RequestsTransport

PROVIDERS = {
    'Google': GoogleTranslator,
}


def get_translator(name=None):
    """Build the configured provider from the current app's settings."""
    config = current_app.config
    name = name or config.get('TRANSLATOR_PROVIDER', 'Google')

    provider = PROVIDERS.get(name)
    if provider is None:
        raise TranslatorError(f"Unknown translator provider: {name}")

    return provider(
        api_key=config.get(f'TRANSLATOR_{name.upper()}_API_KEY'),
        transport=RequestsTransport(timeout=config.get('TRANSLATOR_HTTP_TIMEOUT', 10)),
        default_locale=config.get('DEFAULT_LOCALE', 'en'),
    )


__all__ = [
    'GoogleTranslator',
    'PROVIDERS',
    'RequestsTransport',
    'TranslatorBase',
    'TranslatorError',
    'get_translator',
]
