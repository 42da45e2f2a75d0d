from pydantic import BaseModel, Field


class CreateSlotSchema(BaseModel):
    topic: str = Field(..., min_length=1)
    date: str
    time: str
    duration: int = Field(..., ge=1, description="Length in minutes")
    max_students: int = Field(..., ge=1)


class BookSlotSchema(BaseModel):
    slot_id: int
