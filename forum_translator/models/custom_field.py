"""Per-record key/value metadata ("custom fields") for posts and topics."""

import json
import logging
from datetime import datetime
from forum_translator import db
from forum_translator.constants import TRANSLATED_CUSTOM_FIELD

logger = logging.getLogger(__name__)

# Field name -> storage type. Unlisted fields are stored as plain text.
CUSTOM_FIELD_TYPES = {
    TRANSLATED_CUSTOM_FIELD: 'json',
}


def _encode(name, value):
    if CUSTOM_FIELD_TYPES.get(name) == 'json':
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def _decode(name, value):
    if value is None or CUSTOM_FIELD_TYPES.get(name) != 'json':
        return value
    try:
        return json.loads(value)
    except ValueError:
        logger.warning(f"Custom field {name!r} holds invalid JSON, returning raw value")
        return value


class PostCustomField(db.Model):
    """One key/value pair attached to a post."""

    __tablename__ = 'post_custom_fields'

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False, index=True)
    name = db.Column(db.String(256), nullable=False)
    value = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('post_id', 'name', name='unique_post_custom_field'),
    )

    def __repr__(self):
        return f'<PostCustomField {self.post_id}:{self.name}>'


class TopicCustomField(db.Model):
    """One key/value pair attached to a topic."""

    __tablename__ = 'topic_custom_fields'

    id = db.Column(db.Integer, primary_key=True)
    topic_id = db.Column(db.Integer, db.ForeignKey('topics.id'), nullable=False, index=True)
    name = db.Column(db.String(256), nullable=False)
    value = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('topic_id', 'name', name='unique_topic_custom_field'),
    )

    def __repr__(self):
        return f'<TopicCustomField {self.topic_id}:{self.name}>'


class HasCustomFields:
    """Mixin giving a model a lazily loaded `custom_fields` dict.

    The model must define a `custom_field_rows` relationship and set
    `custom_field_class` to the row model. Changes made to the dict stay in
    memory until `save_custom_fields()` is called.
    """

    custom_field_class = None

    @property
    def custom_fields(self) -> dict:
        fields = getattr(self, '_custom_fields', None)
        if fields is None:
            fields = {row.name: _decode(row.name, row.value) for row in self.custom_field_rows}
            self._custom_fields = fields
        return fields

    def refresh_custom_fields(self):
        """Drop the in-memory copy; the next access reloads from the database."""
        self._custom_fields = None

    def save_custom_fields(self):
        """Persist the custom fields dict and commit."""
        fields = self.custom_fields
        existing = {row.name: row for row in self.custom_field_rows}

        for name, row in existing.items():
            if fields.get(name) is None:
                self.custom_field_rows.remove(row)

        for name, value in fields.items():
            if value is None:
                continue
            encoded = _encode(name, value)
            row = existing.get(name)
            if row is None:
                self.custom_field_rows.append(self.custom_field_class(name=name, value=encoded))
            elif row.value != encoded:
                row.value = encoded

        try:
            db.session.add(self)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
