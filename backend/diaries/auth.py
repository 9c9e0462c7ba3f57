# Login, signup and per-request user lookup
import logging

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError

from . import db, jwt
from .errors import ApiError, DuplicateUser, InvalidCredentials, ValidationError
from .models import User
from .security import hash_password, verify_password

MIN_PASSWORD_LENGTH = 6


def issue_token(user):
    return create_access_token(identity=user.id)


def create_user(username, email, password, role='user'):
    """Insert a user with a hashed password. Caller commits."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    user = User(
        username=username,
        email=email,
        role=role,
        password_hash=hash_password(password, current_app.config['PASSWORD_HASH_METHOD']),
    )
    taken = User.query.filter(
        (User.email == user.email) | (User.username == user.username)
    ).first()
    if taken is not None:
        raise DuplicateUser()
    db.session.add(user)
    return user


def signup(username, email, password):
    if not username or not email or not password:
        raise ValidationError('Please provide username, email and password')
    user = create_user(username, email, password)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateUser()
    logging.info(f'New user signed up: {user.username}')
    return issue_token(user), user


def login(email, password):
    if not email or not password:
        raise ValidationError('Please provide an email and password')
    user = User.query.filter_by(email=str(email).strip().lower()).first()
    if user is None or not verify_password(password, user.password_hash):
        logging.info(f'Login failed for {email}')
        raise InvalidCredentials()
    return issue_token(user), user


def ensure_admin_account(app):
    """Create the bootstrap admin from config when no admin exists."""
    if User.query.filter_by(role='admin').first() is not None:
        return None
    try:
        admin = create_user(
            app.config['ADMIN_USERNAME'],
            app.config['ADMIN_EMAIL'],
            app.config['ADMIN_PASSWORD'],
            role='admin',
        )
        db.session.commit()
    except (ApiError, IntegrityError) as e:
        db.session.rollback()
        app.logger.error(f'Admin account not created: {e}')
        return None
    app.logger.info(f'Admin account created: {admin.email}')
    return admin


# Token validation: flask-jwt-extended verifies the signature and expiry,
# the loaders below resolve the identity and shape the 401 responses.

@jwt.user_lookup_loader
def load_current_user(_jwt_header, jwt_data):
    return db.session.get(User, jwt_data['sub'])


def _unauthenticated(message):
    return jsonify({'success': False, 'message': message}), 401


@jwt.unauthorized_loader
def missing_token(reason):
    logging.debug(f'Request without usable token: {reason}')
    return _unauthenticated('Not authorized to access this route')


@jwt.invalid_token_loader
def invalid_token(reason):
    logging.debug(f'Invalid token: {reason}')
    return _unauthenticated('Not authorized to access this route')


@jwt.expired_token_loader
def expired_token(_jwt_header, _jwt_data):
    return _unauthenticated('Token has expired')


@jwt.user_lookup_error_loader
def unknown_user(_jwt_header, jwt_data):
    logging.debug(f'Token refers to missing user {jwt_data.get("sub")}')
    return _unauthenticated('User no longer exists')
