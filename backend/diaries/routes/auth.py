# Signup, login and current user
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, jwt_required

from .. import auth
from . import json_body, text_field

auth_api = Blueprint('auth', __name__)


def _session_response(token, user, status):
    return jsonify({'success': True, 'token': token, 'user': user.to_dict()}), status


@auth_api.route('/signup', methods=['POST'])
def signup():
    current_app.logger.debug('POST /api/auth/signup invoked')
    body = json_body()
    token, user = auth.signup(
        text_field(body, 'username'),
        text_field(body, 'email'),
        text_field(body, 'password'),
    )
    return _session_response(token, user, 201)


@auth_api.route('/login', methods=['POST'])
def login():
    current_app.logger.debug('POST /api/auth/login invoked')
    body = json_body()
    token, user = auth.login(text_field(body, 'email'), text_field(body, 'password'))
    return _session_response(token, user, 200)


@auth_api.route('/me', methods=['GET'])
@jwt_required()
def me():
    current_app.logger.debug(f'GET /api/auth/me invoked by {current_user.id}')
    return jsonify({'success': True, 'user': current_user.to_dict()}), 200
