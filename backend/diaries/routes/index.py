# Index and health endpoints for quick checks
from flask import Blueprint, current_app, jsonify

api = Blueprint('api', __name__)


@api.route('', methods=['GET'])
@api.route('/', methods=['GET'])
def api_index():
    current_app.logger.debug('GET /api invoked for index')
    return jsonify({
        'name': 'Criminal Diaries API',
        'version': 1,
        'endpoints': [
            'POST /api/auth/signup',
            'POST /api/auth/login',
            'GET  /api/auth/me',
            'GET  /api/stories',
            'GET  /api/stories/<id>',
            'POST /api/stories',
            'PUT  /api/stories/<id>',
            'DELETE /api/stories/<id>',
            'PUT  /api/stories/<id>/like',
            'POST /api/comments',
            'GET  /api/comments/story/<storyId>',
            'DELETE /api/comments/<id>',
            'GET  /api/admin/users',
            'GET  /api/admin/stats',
            'GET  /api/health'
        ]
    }), 200


@api.route('/health', methods=['GET'])
def api_health():
    current_app.logger.debug('GET /api/health invoked')
    return jsonify({'status': 'ok'}), 200
