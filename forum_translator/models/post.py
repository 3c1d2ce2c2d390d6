"""Post model: one message in a topic."""

from datetime import datetime
from markupsafe import escape
from forum_translator import db
from forum_translator.constants import DETECTED_LANG_CUSTOM_FIELD
from forum_translator.models.custom_field import HasCustomFields, PostCustomField


def cook(raw):
    """Render raw post text to HTML: one <p> per blank-line separated block."""
    paragraphs = []
    for block in (raw or '').split('\n\n'):
        block = block.strip()
        if block:
            html = str(escape(block)).replace('\n', '<br>')
            paragraphs.append(f'<p>{html}</p>')
    return '\n'.join(paragraphs)


class Post(HasCustomFields, db.Model):
    """Forum post. Its cooked HTML is the translatable text."""

    __tablename__ = 'posts'

    custom_field_class = PostCustomField
    detected_lang_field = DETECTED_LANG_CUSTOM_FIELD

    id = db.Column(db.Integer, primary_key=True)
    topic_id = db.Column(db.Integer, db.ForeignKey('topics.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    post_number = db.Column(db.Integer, nullable=False)
    raw = db.Column(db.Text, nullable=False)
    cooked = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    custom_field_rows = db.relationship(
        'PostCustomField', backref='post', lazy=True, cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.UniqueConstraint('topic_id', 'post_number', name='unique_post_number'),
    )

    def is_first_post(self):
        return self.post_number == 1

    def translatable_text(self, max_length):
        return (self.cooked or '')[:max_length]

    def to_dict(self):
        """Convert post to dictionary."""
        return {
            'id': self.id,
            'topic_id': self.topic_id,
            'post_number': self.post_number,
            'user_id': self.user_id,
            'username': self.user.username if self.user else None,
            'raw': self.raw,
            'cooked': self.cooked,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat()
        }

    def __repr__(self):
        return f'<Post {self.id}: topic {self.topic_id} #{self.post_number}>'
