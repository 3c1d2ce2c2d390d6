"""Topic and post routes."""

from flask import Blueprint, request, jsonify, g
from forum_translator import db
from forum_translator.models import Topic, Post
from forum_translator.models.post import cook
from forum_translator.serializers import (
    serialize_post,
    serialize_topic_list_item,
    serialize_topic_view,
)
from forum_translator.utils import token_optional_g, token_required_g

topics_bp = Blueprint('topics', __name__)

MAX_TITLE_LENGTH = 255
MAX_RAW_LENGTH = 32000


def _validate_raw(raw):
    if not isinstance(raw, str) or not raw.strip():
        return 'Post body is required'
    if len(raw) > MAX_RAW_LENGTH:
        return f'Post body must be less than {MAX_RAW_LENGTH} characters'
    return None


@topics_bp.route('', methods=['GET'])
@token_optional_g
def get_topics():
    """Latest topics, titles in the viewer's locale where translated."""
    page = request.args.get('page', 1, type=int)
    per_page = min(request.args.get('per_page', 20, type=int), 100)

    topics = Topic.query.order_by(Topic.created_at.desc()).paginate(
        page=page, per_page=per_page, error_out=False
    )

    return jsonify({
        'topics': [serialize_topic_list_item(topic, g.current_user) for topic in topics.items],
        'total': topics.total,
        'pages': topics.pages,
        'current_page': page
    }), 200


@topics_bp.route('/<int:topic_id>', methods=['GET'])
@token_optional_g
def get_topic(topic_id):
    """Topic with its posts."""
    topic = db.session.get(Topic, topic_id)
    if not topic:
        return jsonify({'error': 'Topic not found'}), 404

    return jsonify(serialize_topic_view(topic, g.current_user)), 200


@topics_bp.route('', methods=['POST'])
@token_required_g
def create_topic():
    """Create a topic and its first post."""
    data = request.get_json(silent=True) or {}

    title = data.get('title')
    if not isinstance(title, str) or not title.strip():
        return jsonify({'error': 'Title is required'}), 400
    if len(title) > MAX_TITLE_LENGTH:
        return jsonify({'error': f'Title must be less than {MAX_TITLE_LENGTH} characters'}), 400

    error = _validate_raw(data.get('raw'))
    if error:
        return jsonify({'error': error}), 400

    try:
        topic = Topic(title=title.strip(), user_id=g.current_user.id)
        post = Post(
            topic=topic,
            user_id=g.current_user.id,
            post_number=1,
            raw=data['raw'],
            cooked=cook(data['raw'])
        )
        db.session.add(topic)
        db.session.add(post)
        db.session.commit()

        return jsonify({
            'message': 'Topic created successfully',
            'topic': serialize_topic_view(topic, g.current_user)
        }), 201
    except Exception:
        db.session.rollback()
        raise


@topics_bp.route('/<int:topic_id>/posts', methods=['POST'])
@token_required_g
def create_post(topic_id):
    """Reply to a topic."""
    topic = db.session.get(Topic, topic_id)
    if not topic:
        return jsonify({'error': 'Topic not found'}), 404

    data = request.get_json(silent=True) or {}
    error = _validate_raw(data.get('raw'))
    if error:
        return jsonify({'error': error}), 400

    try:
        last_number = db.session.query(db.func.max(Post.post_number)).filter(
            Post.topic_id == topic.id
        ).scalar() or 0

        post = Post(
            topic_id=topic.id,
            user_id=g.current_user.id,
            post_number=last_number + 1,
            raw=data['raw'],
            cooked=cook(data['raw'])
        )
        db.session.add(post)
        db.session.commit()

        return jsonify({
            'message': 'Post created successfully',
            'post': serialize_post(post, g.current_user)
        }), 201
    except Exception:
        db.session.rollback()
        raise
