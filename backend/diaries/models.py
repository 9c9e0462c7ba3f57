# Database models (User, Story, Comment)
import re
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import validates

from . import db
from .errors import ValidationError

ROLES = ('user', 'admin')

CATEGORIES = (
    'Serial Killers',
    'Cold Cases',
    'Heists',
    'Unsolved Mysteries',
    'Criminal Psychology',
    'True Crime',
    'Forensic Science',
    'Conspiracies',
)

DEFAULT_STORY_IMAGE = '/placeholder.svg?height=400&width=600'
DEFAULT_PROFILE_PICTURE = '/placeholder.svg?height=100&width=100'
DEFAULT_READ_TIME = '5 min read'

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _new_id():
    return uuid.uuid4().hex


def _now():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


def _require_text(field, value, max_length=None):
    if value is None or not str(value).strip():
        raise ValidationError(f'Please provide {field}')
    value = str(value).strip()
    if max_length and len(value) > max_length:
        raise ValidationError(f'{field.capitalize()} cannot be more than {max_length} characters')
    return value


# Composite primary key keeps each user at most once per story
story_likes = db.Table(
    'story_likes',
    db.Column('story_id', db.String(32), db.ForeignKey('story.id'), primary_key=True),
    db.Column('user_id', db.String(32), db.ForeignKey('user.id'), primary_key=True),
)


class User(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    username = db.Column(db.String(30), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(10), nullable=False, default='user')
    profile_picture = db.Column(db.String(255), nullable=False, default=DEFAULT_PROFILE_PICTURE)
    created_at = db.Column(db.DateTime, nullable=False, default=_now)

    stories = db.relationship('Story', backref='author', cascade='all, delete-orphan', lazy=True)
    comments = db.relationship('Comment', backref='user', cascade='all, delete-orphan', lazy=True)

    @validates('username')
    def validate_username(self, key, value):
        return _require_text('a username', value, max_length=30)

    @validates('email')
    def validate_email(self, key, value):
        value = _require_text('an email', value).lower()
        if not EMAIL_RE.match(value):
            raise ValidationError('Please provide a valid email')
        return value

    @validates('role')
    def validate_role(self, key, value):
        if value not in ROLES:
            raise ValidationError('Please provide a valid role (user or admin)')
        return value

    @property
    def is_admin(self):
        return self.role == 'admin'

    def summary(self):
        return {'_id': self.id, 'username': self.username, 'profilePicture': self.profile_picture}

    def to_dict(self):
        return {
            '_id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'profilePicture': self.profile_picture,
            'createdAt': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'


class Story(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    title = db.Column(db.String(100), nullable=False)
    excerpt = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(255), nullable=False, default=DEFAULT_STORY_IMAGE)
    category = db.Column(db.String(40), nullable=False)
    author_id = db.Column(db.String(32), db.ForeignKey('user.id'), nullable=False, index=True)
    read_time = db.Column(db.String(40), nullable=False, default=DEFAULT_READ_TIME)
    created_at = db.Column(db.DateTime, nullable=False, default=_now, index=True)

    likers = db.relationship('User', secondary=story_likes, backref='liked_stories', lazy=True)
    comments = db.relationship(
        'Comment',
        backref='story',
        cascade='all, delete-orphan',
        order_by='Comment.created_at.desc()',
        lazy=True,
    )

    @validates('title')
    def validate_title(self, key, value):
        return _require_text('a title', value, max_length=100)

    @validates('excerpt')
    def validate_excerpt(self, key, value):
        return _require_text('an excerpt', value, max_length=200)

    @validates('content')
    def validate_content(self, key, value):
        return _require_text('content', value)

    @validates('category')
    def validate_category(self, key, value):
        if value not in CATEGORIES:
            raise ValidationError(f'Please provide a category, one of: {", ".join(CATEGORIES)}')
        return value

    @validates('author_id')
    def validate_author(self, key, value):
        if self.author_id is not None and value != self.author_id:
            raise ValidationError('Story author cannot be changed')
        return value

    @property
    def owner_id(self):
        return self.author_id

    @property
    def like_ids(self):
        return [user.id for user in self.likers]

    def to_dict(self, include_comments=False):
        data = {
            '_id': self.id,
            'title': self.title,
            'excerpt': self.excerpt,
            'content': self.content,
            'image': self.image,
            'category': self.category,
            'author': self.author.summary() if self.author else self.author_id,
            'likes': self.like_ids,
            'readTime': self.read_time,
            'createdAt': _isoformat(self.created_at),
        }
        if include_comments:
            data['comments'] = [comment.to_dict() for comment in self.comments]
        return data

    def __repr__(self):
        return f'<Story {self.id} title={self.title!r}>'


class Comment(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    content = db.Column(db.String(500), nullable=False)
    story_id = db.Column(db.String(32), db.ForeignKey('story.id'), nullable=False, index=True)
    user_id = db.Column(db.String(32), db.ForeignKey('user.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=_now, index=True)

    @validates('content')
    def validate_content(self, key, value):
        return _require_text('comment content', value, max_length=500)

    @validates('story_id', 'user_id')
    def validate_reference(self, key, value):
        if getattr(self, key) is not None and value != getattr(self, key):
            raise ValidationError('Comment references cannot be changed')
        return value

    @property
    def owner_id(self):
        return self.user_id

    def to_dict(self, include_story_title=False):
        data = {
            '_id': self.id,
            'content': self.content,
            'story': self.story_id,
            'user': self.user.summary() if self.user else self.user_id,
            'createdAt': _isoformat(self.created_at),
        }
        if include_story_title and self.story is not None:
            data['story'] = {'_id': self.story.id, 'title': self.story.title}
        return data

    def __repr__(self):
        return f'<Comment {self.id} story={self.story_id}>'
