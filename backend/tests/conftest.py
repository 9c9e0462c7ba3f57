import pytest

from diaries import create_app, db
from diaries.config import Config

ADMIN_EMAIL = 'admin@criminaldiaries.com'
ADMIN_PASSWORD = 'admin123'


class TestingConfig(Config):
    __test__ = False
    TESTING = True
    SECRET_KEY = 'test-secret-key-with-enough-length-0123456789'
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    LOG_LEVEL = 'DEBUG'
    ADMIN_USERNAME = 'admin'
    ADMIN_EMAIL = ADMIN_EMAIL
    ADMIN_PASSWORD = ADMIN_PASSWORD
    FRONTEND_BUILD_DIR = '/nonexistent/frontend/build'


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(client):
    res = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    body = res.get_json()
    return body['token'], body['user']


@pytest.fixture
def make_user(client):
    """Sign up a user and return (token, user dict)."""
    def _make_user(username):
        res = client.post('/api/auth/signup', json={
            'username': username,
            'email': f'{username}@example.com',
            'password': 'secret123',
        })
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return body['token'], body['user']
    return _make_user


@pytest.fixture
def make_story(client):
    """Create a story as the token's owner and return its JSON."""
    def _make_story(token, **overrides):
        payload = {
            'title': 'The Golden State Killer',
            'excerpt': 'Decades later, a genealogy database closed the case.',
            'content': 'Between 1974 and 1986 ...',
            'category': 'Cold Cases',
        }
        payload.update(overrides)
        res = client.post('/api/stories', json=payload, headers=bearer(token))
        assert res.status_code == 201, res.get_json()
        return res.get_json()['data']
    return _make_story


@pytest.fixture
def make_comment(client):
    def _make_comment(token, story_id, content='Chilling read.'):
        res = client.post('/api/comments', json={'content': content, 'storyId': story_id},
                          headers=bearer(token))
        assert res.status_code == 201, res.get_json()
        return res.get_json()['data']
    return _make_comment
