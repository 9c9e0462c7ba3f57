# Ownership and role checks shared by every endpoint
import logging

from .errors import Conflict, Forbidden
from .models import Comment, Story, User

ACTIONS = ('update', 'delete')


def owner_id(resource):
    """Return the id of the user who owns ``resource``.

    Stories are owned by their author, comments by their commenter and
    user records by the user themself.
    """
    if isinstance(resource, User):
        return resource.id
    if isinstance(resource, (Story, Comment)):
        return resource.owner_id
    raise TypeError(f'No ownership rule for {type(resource).__name__}')


def is_allowed(caller, resource, action):
    if caller is None:
        return False
    if caller.is_admin:
        return True
    return owner_id(resource) == caller.id


def authorize(caller, resource, action):
    """Raise ``Forbidden`` unless ``caller`` owns ``resource`` or is an admin."""
    if action not in ACTIONS:
        raise ValueError(f'Unknown action: {action}')
    if not is_allowed(caller, resource, action):
        kind = type(resource).__name__.lower()
        logging.info(f'Denied {action} on {kind} {resource.id} for user {getattr(caller, "id", None)}')
        raise Forbidden(f'Not authorized to {action} this {kind}')


def require_admin(caller):
    if caller is None or not caller.is_admin:
        raise Forbidden(f'User role {getattr(caller, "role", None)} is not authorized to access this route')


def ensure_admin_remains(target, action='delete'):
    """Reject removing or demoting the only remaining admin account."""
    if not target.is_admin:
        return
    admin_count = User.query.filter_by(role='admin').count()
    if admin_count <= 1:
        raise Conflict(f'Cannot {action} the last admin account')
