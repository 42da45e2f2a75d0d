from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RegisterSchema(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None
    username: Optional[str] = Field(None, max_length=100)

    @field_validator("username")
    @classmethod
    def blank_username_is_unset(cls, value):
        # forms submit "" for an empty field
        if value is not None and not value.strip():
            return None
        return value


class LoginSchema(BaseModel):
    email: str
    password: str


class ProfileUpdateSchema(BaseModel):
    # role flags are not accepted here; see /auth/become-tutor
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    full_name: Optional[str] = Field(None, max_length=150)
