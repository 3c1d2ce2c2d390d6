"""Database models for the forum application."""

from .user import User
from .custom_field import PostCustomField, TopicCustomField, HasCustomFields
from .topic import Topic
from .post import Post

__all__ = ['User', 'Topic', 'Post', 'PostCustomField', 'TopicCustomField', 'HasCustomFields']
