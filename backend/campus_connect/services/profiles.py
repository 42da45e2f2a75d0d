import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_connect.core.errors import Conflict, NotFound
from campus_connect.db.models import AuthUser, Profile
from campus_connect.services.serialize import to_public

logger = logging.getLogger(__name__)

PROFILE_MUTABLE_FIELDS = ("username", "full_name")


def create_profile(db: Session, user_id, full_name=None, username=None) -> Profile:
    profile = Profile(user_id=user_id, full_name=full_name, username=username)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def get_profile(db: Session, user_id) -> Profile:
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if not profile:
        raise NotFound("Profile not found")
    return profile


def get_profile_by_username(db: Session, username) -> Profile:
    profile = db.query(Profile).filter(Profile.username == username).first()
    if not profile:
        raise NotFound("Profile not found")
    return profile


def find_profile(db: Session, user_id):
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def update_profile(db: Session, user_id, fields: dict) -> Profile:
    """Write the allowed subset of ``fields`` onto the caller's profile.

    Keys outside PROFILE_MUTABLE_FIELDS (role flags, ids) are dropped.
    """
    profile = get_profile(db, user_id)
    for key in PROFILE_MUTABLE_FIELDS:
        if key in fields:
            setattr(profile, key, fields[key])

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username already taken")
    db.refresh(profile)
    return profile


def compose_current_user(user: AuthUser, profile) -> dict:
    merged = to_public(user, exclude=("hashed_password",))
    if profile is not None:
        merged.update(to_public(profile, exclude=("id",)))
    return merged


def become_tutor(db: Session, user_id) -> Profile:
    profile = get_profile(db, user_id)
    if not profile.is_tutor:
        profile.is_tutor = True
        db.commit()
        db.refresh(profile)
        logger.info("User %s became a tutor", user_id)
    return profile
