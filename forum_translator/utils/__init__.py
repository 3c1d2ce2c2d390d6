"""Shared utilities for the forum backend."""

from forum_translator.utils.auth import (
    generate_token,
    current_user_from_request,
    token_required_g,
    token_optional_g,
)

__all__ = [
    'generate_token',
    'current_user_from_request',
    'token_required_g',
    'token_optional_g',
]
