# Comment endpoints
from flask import Blueprint, current_app
from flask_jwt_extended import current_user, get_current_user, jwt_required

from .. import services
from . import json_body, respond, text_field

comments_api = Blueprint('comments', __name__)


@comments_api.route('', methods=['POST'])
@comments_api.route('/', methods=['POST'])
@jwt_required()
def create_comment():
    current_app.logger.debug(f'POST /api/comments invoked by {current_user.id}')
    body = json_body()
    comment = services.create_comment(
        get_current_user(), text_field(body, 'content'), text_field(body, 'storyId')
    )
    return respond(comment.to_dict(), status=201)


@comments_api.route('/story/<story_id>', methods=['GET'])
def list_story_comments(story_id):
    current_app.logger.debug(f'GET /api/comments/story/{story_id} invoked')
    comments = services.list_comments(story_id)
    return respond([comment.to_dict() for comment in comments], count=len(comments))


@comments_api.route('/<comment_id>', methods=['DELETE'])
@jwt_required()
def delete_comment(comment_id):
    current_app.logger.debug(f'DELETE /api/comments/{comment_id} invoked by {current_user.id}')
    services.delete_comment(get_current_user(), comment_id)
    return respond({})
