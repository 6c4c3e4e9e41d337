import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from eventhub.exceptions import ConflictError, NotFoundError
from eventhub.models import Event, SavedEvent

logger = logging.getLogger(__name__)


def _find(db: Session, event_id: str, user_id: str):
    return (
        db.query(SavedEvent)
        .filter(SavedEvent.user_id == user_id, SavedEvent.event_id == event_id)
        .first()
    )


def save_event(db: Session, event_id: str, user_id: str) -> SavedEvent:
    if db.get(Event, event_id) is None:
        raise NotFoundError("Event not found")
    if _find(db, event_id, user_id) is not None:
        raise ConflictError("Event already saved")

    saved = SavedEvent(user_id=user_id, event_id=event_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent save of the same pair
        db.rollback()
        raise ConflictError("Event already saved")
    db.refresh(saved)
    logger.info("User %s saved event %s", user_id, event_id)
    return saved


def unsave_event(db: Session, event_id: str, user_id: str) -> None:
    saved = _find(db, event_id, user_id)
    if saved is None:
        raise NotFoundError("Saved event not found")
    db.delete(saved)
    db.commit()
    logger.info("User %s unsaved event %s", user_id, event_id)


def list_saved(db: Session, user_id: str) -> Tuple[List[SavedEvent], List[SavedEvent]]:
    """Saved rows, most recently saved first, split into (upcoming, past).

    Rows whose event no longer exists are left out.
    """
    rows = (
        db.query(SavedEvent)
        .options(selectinload(SavedEvent.event).selectinload(Event.organizer))
        .filter(SavedEvent.user_id == user_id)
        .order_by(SavedEvent.saved_at.desc())
        .all()
    )

    upcoming, past = [], []
    for row in rows:
        if row.event is None:
            continue
        (past if row.event.is_past else upcoming).append(row)
    return upcoming, past


def is_saved(db: Session, event_id: str, user_id: str) -> bool:
    return _find(db, event_id, user_id) is not None


def count_saved(db: Session, user_id: str) -> int:
    return db.query(SavedEvent).filter(SavedEvent.user_id == user_id).count()
