# API blueprints, one per resource
from flask import jsonify, request

from ..errors import ValidationError


def respond(data=None, status=200, count=None, **extra):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if count is not None:
        body['count'] = count
    body.update(extra)
    return jsonify(body), status


def json_body():
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')
    return body


def text_field(body, name):
    value = body.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{name} must be a string')
    return value


def register_blueprints(app):
    from .index import api
    from .auth import auth_api
    from .stories import stories_api
    from .comments import comments_api
    from .admin import admin_api

    app.register_blueprint(api, url_prefix='/api')
    app.register_blueprint(auth_api, url_prefix='/api/auth')
    app.register_blueprint(stories_api, url_prefix='/api/stories')
    app.register_blueprint(comments_api, url_prefix='/api/comments')
    app.register_blueprint(admin_api, url_prefix='/api/admin')
