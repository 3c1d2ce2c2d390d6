"""Authentication routes: registration, login and profile locale."""

import re
from flask import Blueprint, request, jsonify, g
from forum_translator import db, limiter
from forum_translator.constants import normalize_locale
from forum_translator.models import User
from forum_translator.utils import generate_token, token_required_g

auth_bp = Blueprint('auth', __name__)

# Email validation regex
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

# Username validation: 3-30 chars, alphanumeric + underscores
USERNAME_REGEX = re.compile(r'^[a-zA-Z0-9_]{3,30}$')

# Locale validation: 'ja', 'pt_BR', 'zh-TW'
LOCALE_REGEX = re.compile(r'^[a-zA-Z]{2,3}([_-][a-zA-Z]{2,4})?$')


def _validate_locale(locale):
    """Return (normalized locale, error message)."""
    if locale is None:
        return None, None
    if not isinstance(locale, str) or not LOCALE_REGEX.match(locale):
        return None, 'Invalid locale'
    return normalize_locale(locale), None


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a new user account."""
    try:
        data = request.get_json(silent=True)

        if not data or not all(k in data for k in ['username', 'email', 'password']):
            return jsonify({'error': 'Missing required fields'}), 400

        username = str(data['username']).strip()
        email = str(data['email']).strip().lower()
        password = str(data['password'])

        if not USERNAME_REGEX.match(username):
            return jsonify({'error': 'Username must be 3-30 characters and contain only letters, numbers, and underscores'}), 400

        if not EMAIL_REGEX.match(email) or len(email) > 120:
            return jsonify({'error': 'Invalid email format'}), 400

        if len(password) < 6 or len(password) > 128:
            return jsonify({'error': 'Password must be 6-128 characters'}), 400

        locale, error = _validate_locale(data.get('locale'))
        if error:
            return jsonify({'error': error}), 400

        if User.query.filter_by(username=username).first():
            return jsonify({'error': 'Username already exists'}), 409

        if User.query.filter_by(email=email).first():
            return jsonify({'error': 'Email already exists'}), 409

        user = User(username=username, email=email, locale=locale)
        user.set_password(password)

        db.session.add(user)
        db.session.commit()

        return jsonify({
            'message': 'User registered successfully',
            'token': generate_token(user),
            'user': user.to_dict()
        }), 201
    except Exception:
        db.session.rollback()
        raise


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Authenticate user and return JWT token."""
    data = request.get_json(silent=True)

    if not data or not all(k in data for k in ['email', 'password']):
        return jsonify({'error': 'Missing email or password'}), 400

    user = User.query.filter_by(email=str(data['email']).strip().lower()).first()

    if not user or not user.check_password(data['password']):
        return jsonify({'error': 'Invalid email or password'}), 401

    if not user.is_active:
        return jsonify({'error': 'Account is disabled'}), 403

    return jsonify({
        'message': 'Login successful',
        'token': generate_token(user),
        'user': user.to_dict()
    }), 200


@auth_bp.route('/profile', methods=['GET'])
@token_required_g
def get_profile():
    """Current user's profile."""
    return jsonify(g.current_user.to_dict()), 200


@auth_bp.route('/profile', methods=['PUT'])
@token_required_g
def update_profile():
    """Update the current user's locale (null resets to the site default)."""
    data = request.get_json(silent=True) or {}

    unknown = set(data.keys()) - {'locale'}
    if unknown:
        return jsonify({'error': f"Unknown fields: {', '.join(sorted(unknown))}"}), 400

    locale, error = _validate_locale(data.get('locale'))
    if error:
        return jsonify({'error': error}), 400

    try:
        user = g.current_user
        user.locale = locale
        db.session.commit()
        return jsonify({'message': 'Profile updated', 'user': user.to_dict()}), 200
    except Exception:
        db.session.rollback()
        raise
