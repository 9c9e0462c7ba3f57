# Read-only reporting queries for the admin dashboard
from sqlalchemy import func

from . import db
from .models import Comment, Story, User, story_likes

TOP_N = 5


def category_counts():
    count = func.count(Story.id).label('count')
    rows = (
        db.session.query(Story.category, count)
        .group_by(Story.category)
        .order_by(count.desc(), Story.category)
        .all()
    )
    return [{'_id': category, 'count': total} for category, total in rows]


def popular_stories(limit=TOP_N):
    """Stories ranked by the number of rows they have in the like table."""
    like_count = func.count(story_likes.c.user_id).label('like_count')
    rows = (
        db.session.query(Story, like_count)
        .outerjoin(story_likes, story_likes.c.story_id == Story.id)
        .group_by(Story.id)
        .order_by(like_count.desc(), Story.created_at.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            '_id': story.id,
            'title': story.title,
            'excerpt': story.excerpt,
            'likes': story.like_ids,
            'likeCount': total,
            'author': {'_id': story.author.id, 'username': story.author.username},
        }
        for story, total in rows
    ]


def active_users(limit=TOP_N):
    comment_count = func.count(Comment.id).label('comment_count')
    rows = (
        db.session.query(Comment.user_id, comment_count)
        .group_by(Comment.user_id)
        .order_by(comment_count.desc(), Comment.user_id)
        .limit(limit)
        .all()
    )
    users = {user.id: user for user in User.query.filter(User.id.in_([r[0] for r in rows])).all()}
    return [
        {
            'user': users[user_id].summary(),
            'commentCount': total,
        }
        for user_id, total in rows
    ]


def site_stats():
    return {
        'userCount': User.query.count(),
        'storyCount': Story.query.count(),
        'commentCount': Comment.query.count(),
        'categories': category_counts(),
        'popularStories': popular_stories(),
        'activeUsers': active_users(),
    }
