import pytest

from diaries import db
from diaries.errors import Conflict, Forbidden
from diaries.models import Comment, Story, User
from diaries.policy import authorize, ensure_admin_remains, is_allowed, require_admin


def _user(user_id, role='user'):
    return User(id=user_id, username=user_id, email=f'{user_id}@example.com',
                role=role, password_hash='x')


def test_owner_or_admin_is_allowed_on_every_resource():
    owner = _user('owner')
    stranger = _user('stranger')
    boss = _user('boss', role='admin')
    story = Story(id='s1', title='t', excerpt='e', content='c', category='Heists', author_id='owner')
    comment = Comment(id='c1', content='hi', story_id='s1', user_id='owner')

    for resource in (story, comment, owner):
        for action in ('update', 'delete'):
            assert is_allowed(owner, resource, action)
            assert is_allowed(boss, resource, action)
            assert not is_allowed(stranger, resource, action)
            assert not is_allowed(None, resource, action)


def test_authorize_raises_forbidden():
    story = Story(id='s1', title='t', excerpt='e', content='c', category='Heists', author_id='owner')
    with pytest.raises(Forbidden, match='update this story'):
        authorize(_user('stranger'), story, 'update')
    authorize(_user('owner'), story, 'update')


def test_authorize_rejects_unknown_action():
    with pytest.raises(ValueError):
        authorize(_user('owner'), _user('owner'), 'publish')


def test_require_admin():
    require_admin(_user('boss', role='admin'))
    with pytest.raises(Forbidden):
        require_admin(_user('someone'))
    with pytest.raises(Forbidden):
        require_admin(None)


def test_last_admin_cannot_be_removed(app):
    with app.app_context():
        only_admin = User.query.filter_by(role='admin').one()
        with pytest.raises(Conflict):
            ensure_admin_remains(only_admin)

        second = _user('deputy', role='admin')
        db.session.add(second)
        db.session.commit()
        ensure_admin_remains(only_admin)
        ensure_admin_remains(_user('plain'))
