from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from campus_connect.core.security import get_current_user, get_optional_user
from campus_connect.db.database import get_db
from campus_connect.db.models import AuthUser
from campus_connect.schemas.social import CommentSchema, CreatePostSchema
from campus_connect.services import feed, social
from campus_connect.services.serialize import to_public

router = APIRouter(prefix="/auth", tags=["Feed"])


@router.get("/feed")
def list_feed(
    request: Request,
    page: int = 1,
    filter: Optional[str] = None,
    user: Optional[AuthUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    posts = feed.list_feed(
        db,
        viewer_id=user.id if user else None,
        page=page,
        filter=filter,
        page_size=request.app.state.settings.FEED_PAGE_SIZE,
    )
    return {"data": posts}


@router.post("/like/{post_id}", status_code=201)
def like_post(post_id: int, user: AuthUser = Depends(get_current_user),
              db: Session = Depends(get_db)):

    row = social.like(db, post_id, user.id)
    return {"message": "Post liked", "data": to_public(row)}


@router.delete("/like/{post_id}")
def unlike_post(post_id: int, user: AuthUser = Depends(get_current_user),
                db: Session = Depends(get_db)):

    social.unlike(db, post_id, user.id)
    return {"message": "Post unliked"}


@router.post("/comment/{post_id}", status_code=201)
def comment_post(post_id: int, data: CommentSchema, user: AuthUser = Depends(get_current_user),
                 db: Session = Depends(get_db)):

    row = social.comment(db, post_id, user.id, data.content)
    return {"message": "Comment added", "data": to_public(row)}


@router.post("/create-post", status_code=201)
def create_post(data: CreatePostSchema, user: AuthUser = Depends(get_current_user),
                db: Session = Depends(get_db)):

    post = social.create_post(db, user.id, data.content, data.image)
    return {"message": "Post created successfully", "data": to_public(post)}


@router.delete("/delete-post/{post_id}")
def delete_post(post_id: int, user: AuthUser = Depends(get_current_user),
                db: Session = Depends(get_db)):

    social.delete_post(db, user.id, post_id)
    return {"message": "Post deleted successfully"}
