"""Shared authentication utilities.

JWT decorators used across route files, plus the helpers Flask-Limiter uses
to key and exempt requests by user.
"""

from datetime import datetime, timedelta
from functools import wraps
from flask import request, jsonify, current_app, g
from flask_limiter.util import get_remote_address
import jwt

TOKEN_LIFETIME = timedelta(hours=24)


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def generate_token(user):
    """Issue an HS256 token for `user`."""
    payload = {
        'user_id': user.id,
        'username': user.username,
        'exp': datetime.utcnow() + TOKEN_LIFETIME
    }
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def _bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1].strip() or None


def _load_user(payload):
    from forum_translator import db
    from forum_translator.models import User

    user_id = payload.get('user_id')
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def current_user_from_request():
    """User for the request's bearer token, or None if absent or invalid."""
    token = _bearer_token()
    if not token:
        return None
    try:
        payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
    except jwt.InvalidTokenError:
        return None
    return _load_user(payload)


def rate_limit_key():
    """Per-user limiter key; anonymous requests fall back to the client address."""
    user = getattr(g, 'current_user', None) or current_user_from_request()
    if user is not None:
        return f"user:{user.id}"
    return get_remote_address()


def is_staff_request():
    """Limiter exemption: staff are not rate limited."""
    user = getattr(g, 'current_user', None) or current_user_from_request()
    return bool(user is not None and user.is_staff)


def token_required_g(f):
    """
    Decorator to require valid JWT token, setting g.current_user.

    Usage:
        @bp.route('/protected')
        @token_required_g
        def protected_route():
            user = g.current_user
            return jsonify({'user_id': user.id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({'error': 'Token is missing'}), 401

        try:
            payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except jwt.InvalidTokenError:
            return jsonify({'error': 'Invalid token'}), 401

        current_user = _load_user(payload)
        if not current_user or not current_user.is_active:
            return jsonify({'error': 'User not found'}), 401
        g.current_user = current_user

        return f(*args, **kwargs)
    return decorated


def token_optional_g(f):
    """
    Decorator for optional JWT authentication, setting g.current_user.

    g.current_user is the User when a valid token is sent, None otherwise.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        g.current_user = current_user_from_request()
        return f(*args, **kwargs)
    return decorated
