import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi_pagination import Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, selectinload

from eventhub.config import settings
from eventhub.exceptions import AuthorizationError, NotFoundError, ValidationError
from eventhub.models import CATEGORIES, Event
from eventhub.schemas import EventCreate, EventUpdate
from eventhub.services import saved_event_service
from eventhub.utils import combine_date_time, is_far_enough_ahead, now_local

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def upcoming_clause(now: datetime):
    """SQL condition matching events whose date+time is not before ``now``."""
    today = now.date()
    hhmm = now.strftime("%H:%M")
    # Times are stored as zero padded HH:MM, so text comparison is chronological
    same_day = Event.time >= hhmm if now.second == 0 else Event.time > hhmm
    return or_(Event.date > today, and_(Event.date == today, same_day))


def _check_lead_time(starts_at: datetime) -> None:
    if not is_far_enough_ahead(starts_at, now_local()):
        raise ValidationError.for_field(
            "date",
            f"Event date and time must be at least {settings.MIN_LEAD_MINUTES} minutes in the future",
        )


def list_events(
    db: Session,
    category: Optional[str] = None,
    location: Optional[str] = None,
    search: Optional[str] = None,
    include_past: bool = False,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
):
    """Filtered, date-ordered page of events with organizers loaded."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)

    query = db.query(Event).options(selectinload(Event.organizer))
    if category:
        query = query.filter(Event.category == category)
    if location:
        query = query.filter(func.lower(Event.location).contains(location.lower(), autoescape=True))
    if search:
        query = query.filter(func.lower(Event.name).contains(search.lower(), autoescape=True))
    if not include_past:
        query = query.filter(upcoming_clause(now_local()))
    query = query.order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())

    return paginate(db, query, params=Params(page=page, size=limit))


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).options(selectinload(Event.organizer)).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError("Event not found")
    return event


def _get_owned_event(db: Session, event_id: str, user_id: str, action: str) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    if event.organizer_id != user_id:
        raise AuthorizationError(f"Not authorized to {action} this event")
    return event


def create_event(db: Session, data: EventCreate, user_id: str) -> Event:
    _check_lead_time(combine_date_time(data.date, data.time))

    event = Event(
        name=data.name,
        description=data.description,
        date=data.date,
        time=data.time,
        location=data.location,
        category=data.category,
        organizer_id=user_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Event %s created by user %s", event.id, user_id)
    return event


def update_event(db: Session, event_id: str, changes: EventUpdate, user_id: str) -> Event:
    event = _get_owned_event(db, event_id, user_id, "update")

    update_data = changes.model_dump(exclude_unset=True)
    if "date" in update_data or "time" in update_data:
        starts_at = combine_date_time(
            update_data.get("date", event.date),
            update_data.get("time", event.time),
        )
        _check_lead_time(starts_at)

    for field, value in update_data.items():
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    logger.info("Event %s updated by user %s (%s)", event.id, user_id, ", ".join(sorted(update_data)))
    return event


def delete_event(db: Session, event_id: str, user_id: str) -> None:
    event = _get_owned_event(db, event_id, user_id, "delete")
    # saved_by rows go with it (delete-orphan cascade)
    db.delete(event)
    db.commit()
    logger.info("Event %s deleted by user %s", event_id, user_id)


def list_user_events(db: Session, user_id: str) -> Tuple[List[Event], List[Event]]:
    """The user's own events, newest first, split into (upcoming, past)."""
    events = (
        db.query(Event)
        .options(selectinload(Event.organizer))
        .filter(Event.organizer_id == user_id)
        .order_by(Event.created_at.desc())
        .all()
    )

    upcoming, past = [], []
    for event in events:
        (past if event.is_past else upcoming).append(event)
    return upcoming, past


def list_categories() -> List[str]:
    return list(CATEGORIES)


def user_stats(db: Session, user_id: str) -> dict:
    own_events = db.query(Event).filter(Event.organizer_id == user_id)
    created = own_events.count()
    upcoming = own_events.filter(upcoming_clause(now_local())).count()
    return {
        "createdCount": created,
        "upcomingCount": upcoming,
        "pastCount": created - upcoming,
        "savedCount": saved_event_service.count_saved(db, user_id),
    }
