# Story endpoints: public reads, owner/admin writes, like toggle
from flask import Blueprint, current_app
from flask_jwt_extended import current_user, get_current_user, jwt_required

from .. import services
from ..models import Story
from . import json_body, respond

stories_api = Blueprint('stories', __name__)


@stories_api.route('', methods=['GET'])
@stories_api.route('/', methods=['GET'])
def list_stories():
    current_app.logger.debug('GET /api/stories invoked')
    stories = services.list_stories()
    return respond([story.to_dict() for story in stories], count=len(stories))


@stories_api.route('/<story_id>', methods=['GET'])
def get_story(story_id):
    current_app.logger.debug(f'GET /api/stories/{story_id} invoked')
    story = services.get_or_404(Story, story_id)
    return respond(story.to_dict(include_comments=True))


@stories_api.route('', methods=['POST'])
@stories_api.route('/', methods=['POST'])
@jwt_required()
def create_story():
    current_app.logger.debug(f'POST /api/stories invoked by {current_user.id}')
    story = services.create_story(get_current_user(), json_body())
    return respond(story.to_dict(), status=201)


@stories_api.route('/<story_id>', methods=['PUT'])
@jwt_required()
def update_story(story_id):
    current_app.logger.debug(f'PUT /api/stories/{story_id} invoked by {current_user.id}')
    story = services.update_story(get_current_user(), story_id, json_body())
    return respond(story.to_dict())


@stories_api.route('/<story_id>', methods=['DELETE'])
@jwt_required()
def delete_story(story_id):
    current_app.logger.debug(f'DELETE /api/stories/{story_id} invoked by {current_user.id}')
    services.delete_story(get_current_user(), story_id)
    return respond({})


@stories_api.route('/<story_id>/like', methods=['PUT'])
@jwt_required()
def like_story(story_id):
    current_app.logger.debug(f'PUT /api/stories/{story_id}/like invoked by {current_user.id}')
    story, liked = services.toggle_like(get_current_user(), story_id)
    return respond(story.to_dict(), message='Story liked' if liked else 'Story unliked')
