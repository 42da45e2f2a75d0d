from typing import Optional

from pydantic import BaseModel


class CreatePostSchema(BaseModel):
    content: str
    image: Optional[str] = None


class CommentSchema(BaseModel):
    content: Optional[str] = None
