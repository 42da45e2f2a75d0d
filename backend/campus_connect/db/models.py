from uuid import uuid4
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from campus_connect.db.database import Base


def new_user_id():
    return str(uuid4())


class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(String(36), primary_key=True, default=new_user_id)
    email = Column(String(150), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Profile(Base):
    __tablename__ = "user_data"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("auth_users.id"), unique=True, nullable=False, index=True)
    username = Column(String(100), unique=True, nullable=True, index=True)
    full_name = Column(String(150))
    is_tutor = Column(Boolean, default=False, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    image = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    comments = relationship("Comment", cascade="all, delete-orphan")
    likes = relationship("Like", cascade="all, delete-orphan")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Like(Base):
    # no unique constraint on (post_id, user_id)
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class TutorSlot(Base):
    __tablename__ = "tutor_slots"

    id = Column(Integer, primary_key=True)
    tutor_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    topic = Column(String(200), nullable=False)
    date = Column(String(20), nullable=False)
    time = Column(String(20), nullable=False)
    duration = Column(Integer, nullable=False)
    max_students = Column(Integer, nullable=False)
    current_students = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class TutorBooking(Base):
    __tablename__ = "tutor_bookings"

    id = Column(Integer, primary_key=True)
    slot_id = Column(Integer, ForeignKey("tutor_slots.id"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    booked_at = Column(DateTime, default=datetime.utcnow)
