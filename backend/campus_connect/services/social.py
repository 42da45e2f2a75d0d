import logging

from sqlalchemy.orm import Session

from campus_connect.core.errors import InvalidInput
from campus_connect.core.security import require_role
from campus_connect.db.models import Comment, Like, Post
from campus_connect.services.profiles import find_profile

logger = logging.getLogger(__name__)


def like(db: Session, post_id, user_id) -> Like:
    row = Like(post_id=post_id, user_id=user_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def unlike(db: Session, post_id, user_id) -> int:
    deleted = (
        db.query(Like)
        .filter(Like.post_id == post_id, Like.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def comment(db: Session, post_id, user_id, content) -> Comment:
    if not content or not content.strip():
        raise InvalidInput("Comment content is required")

    row = Comment(post_id=post_id, user_id=user_id, content=content)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_post(db: Session, user_id, content, image=None) -> Post:
    require_role(find_profile(db, user_id), "admin")

    post = Post(user_id=user_id, content=content, image=image)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, user_id, post_id):
    require_role(find_profile(db, user_id), "admin")

    post = db.query(Post).filter(Post.id == post_id).first()
    if post:
        db.delete(post)
        db.commit()
        logger.info("Admin %s deleted post %s", user_id, post_id)
