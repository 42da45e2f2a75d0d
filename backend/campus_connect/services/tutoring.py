import logging

from sqlalchemy.orm import Session, aliased

from campus_connect.core.errors import CapacityExceeded, Conflict, Forbidden, NotFound
from campus_connect.core.security import require_role
from campus_connect.db.models import Profile, TutorBooking, TutorSlot
from campus_connect.services.profiles import find_profile
from campus_connect.services.serialize import to_public

logger = logging.getLogger(__name__)


def list_slots(db: Session):
    rows = (
        db.query(TutorSlot, Profile.full_name)
        .outerjoin(Profile, Profile.user_id == TutorSlot.tutor_id)
        .order_by(TutorSlot.date, TutorSlot.time, TutorSlot.id)
        .all()
    )
    slots = []
    for slot, full_name in rows:
        s = to_public(slot)
        s["tutor_name"] = full_name
        slots.append(s)
    return slots


def create_slot(db: Session, user_id, topic, date, time, duration, max_students) -> TutorSlot:
    require_role(find_profile(db, user_id), "tutor")

    slot = TutorSlot(
        tutor_id=user_id,
        topic=topic,
        date=date,
        time=time,
        duration=duration,
        max_students=max_students,
        current_students=0,
    )
    db.add(slot)
    db.commit()
    db.refresh(slot)
    return slot


def book_slot(db: Session, student_id, slot_id) -> TutorBooking:
    """Reserve one seat in a slot.

    The capacity check and the increment are a single guarded UPDATE, committed
    together with the booking row, so a slot never exceeds max_students.
    """
    if not db.query(TutorSlot.id).filter(TutorSlot.id == slot_id).first():
        raise NotFound("Slot not found")

    claimed = (
        db.query(TutorSlot)
        .filter(TutorSlot.id == slot_id, TutorSlot.current_students < TutorSlot.max_students)
        .update(
            {TutorSlot.current_students: TutorSlot.current_students + 1},
            synchronize_session=False,
        )
    )
    if claimed != 1:
        db.rollback()
        raise CapacityExceeded("Slot is fully booked")

    booking = TutorBooking(slot_id=slot_id, student_id=student_id)
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("User %s booked slot %s", student_id, slot_id)
    return booking


def list_bookings(db: Session, tutor_id):
    require_role(find_profile(db, tutor_id), "tutor")

    student = aliased(Profile)
    rows = (
        db.query(TutorBooking, TutorSlot, student.full_name)
        .join(TutorSlot, TutorSlot.id == TutorBooking.slot_id)
        .outerjoin(student, student.user_id == TutorBooking.student_id)
        .filter(TutorSlot.tutor_id == tutor_id)
        .order_by(TutorBooking.booked_at.desc(), TutorBooking.id.desc())
        .all()
    )
    bookings = []
    for booking, slot, full_name in rows:
        b = to_public(booking)
        b["student_name"] = full_name
        b["slot"] = {"topic": slot.topic, "date": slot.date, "time": slot.time}
        bookings.append(b)
    return bookings


def delete_slot(db: Session, user_id, slot_id):
    slot = db.query(TutorSlot).filter(TutorSlot.id == slot_id).first()
    if not slot:
        raise NotFound("Slot not found")
    if slot.current_students > 0:
        raise Conflict("Cannot delete a slot that has bookings")
    if slot.tutor_id != user_id:
        raise Forbidden("You can only delete your own slots")

    db.delete(slot)
    db.commit()
    logger.info("Tutor %s deleted slot %s", user_id, slot_id)
