"""Custom field names used by the translator — single source of truth.

Posts and topics keep the translator cache in their custom fields, so these
names are persisted in the database. Do not rename without a migration.
"""

# Language the provider detected for a post body
DETECTED_LANG_CUSTOM_FIELD = 'detected_lang'

# Language the provider detected for a topic title
DETECTED_TITLE_LANG_CUSTOM_FIELD = 'detected_title_lang'

# JSON map of host locale -> translated text
TRANSLATED_CUSTOM_FIELD = 'translated_text_by_target_lang'


def normalize_locale(locale):
    """Normalize a host locale code ('pt-br', 'PT_BR') to the 'pt_BR' form.

    Returns None for empty input.
    """
    if not locale:
        return None
    locale = str(locale).strip().replace('-', '_')
    if '_' not in locale:
        return locale.lower()
    language, region = locale.split('_', 1)
    return f"{language.lower()}_{region.upper()}"
