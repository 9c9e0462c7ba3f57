# Admin console endpoints; every route requires an admin caller
from flask import Blueprint, current_app, request
from flask_jwt_extended import current_user, get_current_user, verify_jwt_in_request

from .. import services, stats
from ..policy import require_admin
from . import json_body, respond, text_field

admin_api = Blueprint('admin', __name__)


@admin_api.before_request
def admin_only():
    if request.method == 'OPTIONS':
        return None
    verify_jwt_in_request()
    require_admin(get_current_user())


@admin_api.route('/users', methods=['GET'])
def list_users():
    current_app.logger.debug('GET /api/admin/users invoked')
    users = services.list_users()
    return respond([user.to_dict() for user in users], count=len(users))


@admin_api.route('/users/<user_id>', methods=['PUT'])
def update_user_role(user_id):
    current_app.logger.debug(f'PUT /api/admin/users/{user_id} invoked')
    user = services.update_role(user_id, text_field(json_body(), 'role'))
    return respond(user.to_dict())


@admin_api.route('/users/<user_id>', methods=['DELETE'])
def delete_user(user_id):
    current_app.logger.debug(f'DELETE /api/admin/users/{user_id} invoked by {current_user.id}')
    services.delete_user(get_current_user(), user_id)
    return respond({})


@admin_api.route('/stories', methods=['GET'])
def list_stories():
    current_app.logger.debug('GET /api/admin/stories invoked')
    stories = services.list_stories()
    return respond([story.to_dict() for story in stories], count=len(stories))


@admin_api.route('/stories/<story_id>', methods=['DELETE'])
def delete_story(story_id):
    current_app.logger.debug(f'DELETE /api/admin/stories/{story_id} invoked')
    services.delete_story(get_current_user(), story_id)
    return respond({})


@admin_api.route('/comments', methods=['GET'])
def list_comments():
    current_app.logger.debug('GET /api/admin/comments invoked')
    comments = services.list_comments()
    return respond(
        [comment.to_dict(include_story_title=True) for comment in comments],
        count=len(comments),
    )


@admin_api.route('/comments/<comment_id>', methods=['DELETE'])
def delete_comment(comment_id):
    current_app.logger.debug(f'DELETE /api/admin/comments/{comment_id} invoked')
    services.delete_comment(get_current_user(), comment_id)
    return respond({})


@admin_api.route('/stats', methods=['GET'])
def site_stats():
    current_app.logger.debug('GET /api/admin/stats invoked')
    return respond(stats.site_stats())
