import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_connect.core.errors import RegistrationIncomplete
from campus_connect.core.security import AuthProvider, get_auth, get_current_user
from campus_connect.db.database import get_db
from campus_connect.db.models import AuthUser
from campus_connect.schemas.auth import LoginSchema, ProfileUpdateSchema, RegisterSchema
from campus_connect.services import profiles
from campus_connect.services.serialize import to_public

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register(data: RegisterSchema, auth: AuthProvider = Depends(get_auth),
             db: Session = Depends(get_db)):

    user = auth.sign_up(db, data.email, data.password)

    try:
        profile = profiles.create_profile(db, user.id, data.full_name, data.username)
    except SQLAlchemyError as exc:
        db.rollback()
        reason = str(getattr(exc, "orig", None) or exc)
        logger.warning("Profile creation failed for user %s: %s", user.id, reason)
        raise RegistrationIncomplete(user.id, reason)

    return {
        "message": "User registered successfully",
        "user": {"id": user.id, "email": user.email},
        "data": to_public(profile),
    }


@router.post("/login")
def login(data: LoginSchema, auth: AuthProvider = Depends(get_auth),
          db: Session = Depends(get_db)):

    session = auth.sign_in(db, data.email, data.password)
    logger.info("User %s logged in", session["user"]["id"])
    return {"message": "Login successful", "data": session}


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "AUTH health working"


@router.get("/profile")
def get_profile(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"data": to_public(profiles.get_profile(db, user.id))}


@router.put("/profile")
def update_profile(data: ProfileUpdateSchema, user: AuthUser = Depends(get_current_user),
                   db: Session = Depends(get_db)):

    fields = data.model_dump(exclude_unset=True)
    profile = profiles.update_profile(db, user.id, fields)
    return {"message": "Profile updated successfully", "data": to_public(profile)}


@router.get("/current-user")
def current_user(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = profiles.find_profile(db, user.id)
    return {"data": profiles.compose_current_user(user, profile)}


@router.get("/profile/{username}")
def get_profile_by_username(username: str, db: Session = Depends(get_db)):
    return {"data": to_public(profiles.get_profile_by_username(db, username))}


@router.post("/become-tutor")
def become_tutor(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = profiles.become_tutor(db, user.id)
    return {"message": "You are now a tutor", "data": to_public(profile)}
