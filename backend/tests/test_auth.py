from datetime import timedelta

from conftest import ADMIN_EMAIL, TestingConfig, bearer

from diaries import create_app, db
from diaries.models import User


def test_signup_creates_plain_user_with_hashed_password(app, client):
    res = client.post('/api/auth/signup', json={
        'username': 'sleuth', 'email': 'Sleuth@Example.com', 'password': 'secret123',
    })
    body = res.get_json()

    assert res.status_code == 201
    assert body['success'] is True
    assert body['token']
    assert body['user']['role'] == 'user'
    assert body['user']['email'] == 'sleuth@example.com'
    assert 'password' not in body['user'] and 'password_hash' not in body['user']
    with app.app_context():
        user = User.query.filter_by(username='sleuth').one()
        assert user.password_hash != 'secret123'


def test_signup_rejects_duplicates(client, make_user):
    make_user('sleuth')

    same_email = client.post('/api/auth/signup', json={
        'username': 'other', 'email': 'sleuth@example.com', 'password': 'secret123',
    })
    same_name = client.post('/api/auth/signup', json={
        'username': 'sleuth', 'email': 'other@example.com', 'password': 'secret123',
    })

    assert same_email.status_code == 400
    assert same_email.get_json() == {'success': False, 'message': 'User already exists'}
    assert same_name.status_code == 400


def test_signup_validates_fields(client):
    missing = client.post('/api/auth/signup', json={'username': 'x', 'password': 'secret123'})
    bad_email = client.post('/api/auth/signup', json={
        'username': 'x', 'email': 'not-an-email', 'password': 'secret123',
    })
    short_password = client.post('/api/auth/signup', json={
        'username': 'x', 'email': 'x@example.com', 'password': '123',
    })

    for res in (missing, bad_email, short_password):
        assert res.status_code == 400
        assert res.get_json()['success'] is False


def test_login_returns_token_and_user(client, make_user):
    make_user('sleuth')

    res = client.post('/api/auth/login', json={'email': 'sleuth@example.com', 'password': 'secret123'})
    body = res.get_json()

    assert res.status_code == 200
    assert body['token']
    assert body['user']['username'] == 'sleuth'


def test_login_with_wrong_password_or_unknown_email_fails(client, make_user):
    make_user('sleuth')

    wrong = client.post('/api/auth/login', json={'email': 'sleuth@example.com', 'password': 'nope123'})
    unknown = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'secret123'})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.get_json()['message'] == unknown.get_json()['message'] == 'Invalid credentials'


def test_me_requires_a_valid_token(client, make_user):
    token, user = make_user('sleuth')

    assert client.get('/api/auth/me').status_code == 401
    assert client.get('/api/auth/me', headers=bearer('garbage')).status_code == 401

    res = client.get('/api/auth/me', headers=bearer(token))
    assert res.status_code == 200
    assert res.get_json()['user']['_id'] == user['_id']


def test_role_change_applies_without_new_login(client, admin, make_user):
    admin_token, _ = admin
    token, user = make_user('sleuth')
    assert client.get('/api/admin/users', headers=bearer(token)).status_code == 403

    client.put(f'/api/admin/users/{user["_id"]}', json={'role': 'admin'}, headers=bearer(admin_token))

    assert client.get('/api/admin/users', headers=bearer(token)).status_code == 200
    assert client.get('/api/auth/me', headers=bearer(token)).get_json()['user']['role'] == 'admin'


def test_token_of_deleted_user_is_rejected(app, client, make_user):
    token, user = make_user('sleuth')
    with app.app_context():
        db.session.delete(db.session.get(User, user['_id']))
        db.session.commit()

    res = client.get('/api/auth/me', headers=bearer(token))
    assert res.status_code == 401
    assert res.get_json()['success'] is False


def test_bootstrap_admin_exists_once(app):
    with app.app_context():
        admins = User.query.filter_by(role='admin').all()
        assert [a.email for a in admins] == [ADMIN_EMAIL]


def test_expired_token_is_rejected():
    class ExpiredTokenConfig(TestingConfig):
        JWT_ACCESS_TOKEN_EXPIRES = timedelta(seconds=-1)

    client = create_app(ExpiredTokenConfig).test_client()
    token = client.post('/api/auth/signup', json={
        'username': 'sleuth', 'email': 'sleuth@example.com', 'password': 'secret123',
    }).get_json()['token']

    res = client.get('/api/auth/me', headers=bearer(token))
    assert res.status_code == 401
    assert res.get_json() == {'success': False, 'message': 'Token has expired'}


def test_startup_survives_unusable_admin_password():
    class ShortPasswordConfig(TestingConfig):
        ADMIN_PASSWORD = '123'

    app = create_app(ShortPasswordConfig)

    with app.app_context():
        assert User.query.filter_by(role='admin').count() == 0
    assert app.test_client().get('/api/health').status_code == 200


def test_startup_survives_admin_name_taken_by_plain_user(tmp_path):
    class FileDatabaseConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{tmp_path / "diaries.db"}'

    first = create_app(FileDatabaseConfig)
    with first.app_context():
        admin = User.query.filter_by(email=ADMIN_EMAIL).one()
        admin.role = 'user'
        db.session.commit()

    second = create_app(FileDatabaseConfig)

    with second.app_context():
        assert User.query.filter_by(role='admin').count() == 0
        assert User.query.filter_by(email=ADMIN_EMAIL).one().role == 'user'
