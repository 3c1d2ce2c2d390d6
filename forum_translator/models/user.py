"""User model for authentication and locale preferences."""

from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from forum_translator import db


class User(db.Model):
    """Forum user."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    locale = db.Column(db.String(10), nullable=True)  # e.g. 'ja', 'pt_BR'; None = site default
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    is_moderator = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    topics = db.relationship('Topic', backref='user', lazy=True)
    posts = db.relationship('Post', backref='user', lazy=True)

    @property
    def is_staff(self):
        return bool(self.is_admin or self.is_moderator)

    def set_password(self, password):
        """Hash and set the user password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if the provided password matches the hash."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Convert user to dictionary."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'locale': self.locale,
            'is_admin': self.is_admin,
            'is_moderator': self.is_moderator,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat()
        }

    def __repr__(self):
        return f'<User {self.username}>'
