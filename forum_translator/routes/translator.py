"""On-demand post translation."""

import logging
from flask import Blueprint, request, jsonify, current_app, g
from forum_translator import db, limiter
from forum_translator.models import Post
from forum_translator.serializers import user_locale
from forum_translator.services.translator import TranslatorError, get_translator
from forum_translator.utils import token_required_g
from forum_translator.utils.auth import is_staff_request

logger = logging.getLogger(__name__)

translator_bp = Blueprint('translator', __name__)


@translator_bp.route('/translate', methods=['POST'])
@token_required_g
@limiter.limit("3 per minute", exempt_when=is_staff_request)
def translate():
    """Translate a post (and the topic title for a first post) into the user's locale.

    Body: {"post_id": <int>}
    Returns: {"translation", "detected_lang"[, "title_translation"]}
    """
    if not current_app.config.get('TRANSLATOR_ENABLED'):
        return jsonify({'error': 'Translator is disabled'}), 400

    data = request.get_json(silent=True) or {}
    post_id = data.get('post_id')
    if post_id is None:
        return jsonify({'error': 'post_id is required'}), 400

    try:
        post_id = int(post_id)
    except (TypeError, ValueError):
        return jsonify({'error': 'post_id must be an integer'}), 400

    post = db.session.get(Post, post_id)
    if not post:
        return jsonify({'error': 'Post not found'}), 404

    target_lang = user_locale(g.current_user)

    try:
        translator = get_translator()

        result = translator.translate(post, target_lang)
        detected_lang, translation = result if result else (translator.detect(post), None)
        response = {'translation': translation, 'detected_lang': detected_lang}

        if post.is_first_post():
            title_result = translator.translate(post.topic, target_lang)
            response['title_translation'] = title_result[1] if title_result else None

        return jsonify(response), 200
    except TranslatorError as e:
        logger.warning(f"Translation of post {post.id} failed: {e}")
        if isinstance(e.payload, str):
            return jsonify({'error': e.payload}), 422
        return jsonify({'error': 'Translation failed', 'details': e.payload}), 422
