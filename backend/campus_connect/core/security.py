import logging
from datetime import datetime, timedelta

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from campus_connect.core.errors import Forbidden, Unauthenticated, UpstreamFailure
from campus_connect.db.database import get_db
from campus_connect.db.models import AuthUser

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


class AuthProvider:
    """Sign-up, password sign-in and token-to-identity resolution.

    One instance is built per application and reached through
    ``request.app.state.auth``.
    """

    def __init__(self, settings):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
        )

    def hash_password(self, password):
        return self.pwd_context.hash(password)

    def verify_password(self, password, hashed):
        return self.pwd_context.verify(password, hashed)

    def create_access_token(self, user: AuthUser):
        expire = datetime.utcnow() + timedelta(minutes=self.expire_minutes)
        data = {"sub": user.id, "email": user.email, "exp": expire}
        return jwt.encode(data, self.secret_key, algorithm=self.algorithm)

    def sign_up(self, db: Session, email: str, password: str) -> AuthUser:
        if db.query(AuthUser).filter(AuthUser.email == email).first():
            raise UpstreamFailure("User already registered")

        user = AuthUser(email=email, hashed_password=self.hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def sign_in(self, db: Session, email: str, password: str) -> dict:
        user = db.query(AuthUser).filter(AuthUser.email == email).first()
        if not user or not self.verify_password(password, user.hashed_password):
            logger.warning("Failed login for %s", email)
            raise UpstreamFailure("Invalid login credentials")

        return {
            "access_token": self.create_access_token(user),
            "token_type": "bearer",
            "expires_in": self.expire_minutes * 60,
            "user": {"id": user.id, "email": user.email},
        }

    def decode_token(self, token: str):
        """User id carried by a valid, unexpired token, else None."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        return payload.get("sub") or None

    def get_user(self, db: Session, token: str):
        user_id = self.decode_token(token)
        if not user_id:
            return None
        return db.query(AuthUser).filter(AuthUser.id == user_id).first()


def get_auth(request: Request) -> AuthProvider:
    return request.app.state.auth


def get_current_user(
    token: str = Depends(oauth2_scheme),
    auth: AuthProvider = Depends(get_auth),
    db: Session = Depends(get_db),
) -> AuthUser:
    if not token:
        raise Unauthenticated("Authorization token missing")
    user_id = auth.decode_token(token.strip())
    if not user_id:
        logger.warning("Rejected bearer token")
        raise Unauthenticated("Invalid or expired token")
    user = db.query(AuthUser).filter(AuthUser.id == user_id).first()
    if not user:
        raise Unauthenticated("User not found")
    return user


def get_optional_user(
    token: str = Depends(oauth2_scheme),
    auth: AuthProvider = Depends(get_auth),
    db: Session = Depends(get_db),
):
    if not token:
        return None
    return auth.get_user(db, token.strip())


def require_role(profile, role):
    if profile is None or not getattr(profile, f"is_{role}", False):
        raise Forbidden(f"Only {role}s can perform this action")
