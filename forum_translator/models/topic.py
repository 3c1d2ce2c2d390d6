"""Topic model: a titled discussion made of posts."""

from datetime import datetime
from markupsafe import escape
from forum_translator import db
from forum_translator.constants import DETECTED_TITLE_LANG_CUSTOM_FIELD
from forum_translator.models.custom_field import HasCustomFields, TopicCustomField


class Topic(HasCustomFields, db.Model):
    """Forum topic. Its title is the translatable text."""

    __tablename__ = 'topics'

    custom_field_class = TopicCustomField
    detected_lang_field = DETECTED_TITLE_LANG_CUSTOM_FIELD

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    posts = db.relationship(
        'Post', backref='topic', lazy=True,
        order_by='Post.post_number', cascade='all, delete-orphan'
    )
    custom_field_rows = db.relationship(
        'TopicCustomField', backref='topic', lazy=True, cascade='all, delete-orphan'
    )

    @property
    def fancy_title(self):
        """HTML-safe title."""
        return str(escape(self.title or ''))

    @property
    def posts_count(self):
        return len(self.posts)

    def translatable_text(self, max_length):
        return (self.title or '')[:max_length]

    def to_dict(self):
        """Convert topic to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'fancy_title': self.fancy_title,
            'user_id': self.user_id,
            'username': self.user.username if self.user else None,
            'posts_count': self.posts_count,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat()
        }

    def __repr__(self):
        return f'<Topic {self.id}: {self.title}>'
