from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_connect.core.security import get_current_user
from campus_connect.db.database import get_db
from campus_connect.db.models import AuthUser
from campus_connect.schemas.tutor import BookSlotSchema, CreateSlotSchema
from campus_connect.services import tutoring
from campus_connect.services.serialize import to_public

router = APIRouter(prefix="/auth/tutor", tags=["Tutor"])


@router.get("/slots")
def list_slots(db: Session = Depends(get_db)):
    return {"data": tutoring.list_slots(db)}


@router.post("/slots", status_code=201)
def create_slot(
    data: CreateSlotSchema,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    slot = tutoring.create_slot(
        db,
        user.id,
        topic=data.topic,
        date=data.date,
        time=data.time,
        duration=data.duration,
        max_students=data.max_students,
    )
    return {"message": "Slot created successfully", "data": to_public(slot)}


@router.post("/book", status_code=201)
def book_slot(
    data: BookSlotSchema,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    booking = tutoring.book_slot(db, user.id, data.slot_id)
    return {"message": "Slot booked successfully", "data": to_public(booking)}


@router.get("/bookings")
def list_bookings(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"data": tutoring.list_bookings(db, user.id)}


@router.delete("/slots/{slot_id}")
def delete_slot(
    slot_id: int,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tutoring.delete_slot(db, user.id, slot_id)
    return {"message": "Slot deleted successfully"}
