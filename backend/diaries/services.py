# Store operations on stories, comments and users
import logging

from . import db
from .errors import NotFound, ValidationError
from .models import ROLES, Comment, Story, User
from .policy import authorize, ensure_admin_remains

# Request field -> Story attribute
STORY_FIELDS = {
    'title': 'title',
    'excerpt': 'excerpt',
    'content': 'content',
    'image': 'image',
    'category': 'category',
    'readTime': 'read_time',
}
REQUIRED_STORY_FIELDS = ('title', 'excerpt', 'content', 'category')


def get_or_404(model, record_id):
    record = db.session.get(model, record_id) if record_id else None
    if record is None:
        raise NotFound(f'{model.__name__} not found')
    return record


def _story_values(payload):
    values = {}
    for key, attr in STORY_FIELDS.items():
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValidationError(f'{key} must be a string')
        values[attr] = value
    return values


def list_stories():
    return Story.query.order_by(Story.created_at.desc()).all()


def create_story(caller, payload):
    missing = [field for field in REQUIRED_STORY_FIELDS if not payload.get(field)]
    if missing:
        raise ValidationError(f'Please provide {", ".join(missing)}')
    story = Story(author_id=caller.id, **_story_values(payload))
    db.session.add(story)
    db.session.commit()
    logging.debug(f'Story {story.id} created by {caller.id}')
    return story


def update_story(caller, story_id, payload):
    story = get_or_404(Story, story_id)
    authorize(caller, story, 'update')
    for attr, value in _story_values(payload).items():
        setattr(story, attr, value)
    db.session.commit()
    return story


def delete_story(caller, story_id):
    """Delete a story together with its comments and likes."""
    story = get_or_404(Story, story_id)
    authorize(caller, story, 'delete')
    comment_count = len(story.comments)
    db.session.delete(story)
    db.session.commit()
    logging.debug(f'Story {story_id} deleted with {comment_count} comments')


def toggle_like(caller, story_id):
    """Add the caller to the story's likes, or remove them if already there.

    Returns the story and whether it is now liked.
    """
    story = get_or_404(Story, story_id)
    if caller in story.likers:
        story.likers.remove(caller)
        liked = False
    else:
        story.likers.append(caller)
        liked = True
    db.session.commit()
    return story, liked


def list_comments(story_id=None):
    query = Comment.query
    if story_id is not None:
        query = query.filter_by(story_id=story_id)
    return query.order_by(Comment.created_at.desc()).all()


def create_comment(caller, content, story_id):
    story = get_or_404(Story, story_id)
    comment = Comment(content=content, story_id=story.id, user_id=caller.id)
    db.session.add(comment)
    db.session.commit()
    return comment


def delete_comment(caller, comment_id):
    comment = get_or_404(Comment, comment_id)
    authorize(caller, comment, 'delete')
    db.session.delete(comment)
    db.session.commit()


def list_users():
    return User.query.order_by(User.created_at.desc()).all()


def update_role(user_id, role):
    if not role or role not in ROLES:
        raise ValidationError('Please provide a valid role (user or admin)')
    user = get_or_404(User, user_id)
    if user.role == role:
        return user
    if role != 'admin':
        ensure_admin_remains(user, action='demote')
    user.role = role
    db.session.commit()
    logging.info(f'User {user.username} role set to {role}')
    return user


def delete_user(caller, user_id):
    """Delete a user with their stories, comments and likes."""
    user = get_or_404(User, user_id)
    authorize(caller, user, 'delete')
    ensure_admin_remains(user)
    caller_id = caller.id
    db.session.delete(user)
    db.session.commit()
    logging.info(f'User {user_id} deleted by {caller_id}')
