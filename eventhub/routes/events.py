from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventhub.auth import get_current_user_id
from eventhub.database import get_db
from eventhub.exceptions import ValidationError
from eventhub.responses import dump, success_response
from eventhub.schemas import EventCreate, EventOut, EventUpdate
from eventhub.services import event_service
from eventhub.utils import is_object_id, sanitize_input

router = APIRouter()


def valid_event_id(event_id: str) -> str:
    if not is_object_id(event_id):
        raise ValidationError.for_field("id", "Invalid event id")
    return event_id.lower()


def serialize_event(event) -> dict:
    return dump(EventOut.model_validate(event))


@router.get("")
def list_events(
        db: Session = Depends(get_db),
        page: int = Query(1, ge=1),
        limit: int = Query(event_service.DEFAULT_LIMIT, ge=1, le=event_service.MAX_LIMIT),
        category: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
        include_past: bool = Query(False, alias="includePast"),
):
    page_data = event_service.list_events(
        db,
        category=category,
        location=sanitize_input(location),
        search=sanitize_input(search),
        include_past=include_past,
        page=page,
        limit=limit,
    )
    return success_response(
        data=[serialize_event(e) for e in page_data.items],
        count=len(page_data.items),
        total=page_data.total,
        page=page_data.page,
        pages=page_data.pages,
    )


@router.get("/categories")
def list_categories():
    return success_response(data=event_service.list_categories())


@router.get("/user/my-events")
def my_events(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    upcoming, past = event_service.list_user_events(db, user_id)
    return success_response(
        data={
            "upcoming": [serialize_event(e) for e in upcoming],
            "past": [serialize_event(e) for e in past],
        },
        count=len(upcoming) + len(past),
    )


@router.get("/user/stats")
def stats(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return success_response(data=event_service.user_stats(db, user_id))


@router.get("/{event_id}")
def get_event(event_id: str = Depends(valid_event_id), db: Session = Depends(get_db)):
    return success_response(data=serialize_event(event_service.get_event(db, event_id)))


@router.post("")
def create_event(
        data: EventCreate,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
):
    event = event_service.create_event(db, data, user_id)
    return success_response(data=serialize_event(event), status_code=status.HTTP_201_CREATED)


@router.put("/{event_id}")
def update_event(
        data: EventUpdate,
        user_id: str = Depends(get_current_user_id),
        event_id: str = Depends(valid_event_id),
        db: Session = Depends(get_db),
):
    event = event_service.update_event(db, event_id, data, user_id)
    return success_response(data=serialize_event(event))


@router.delete("/{event_id}")
def delete_event(
        user_id: str = Depends(get_current_user_id),
        event_id: str = Depends(valid_event_id),
        db: Session = Depends(get_db),
):
    event_service.delete_event(db, event_id, user_id)
    return success_response(message="Event deleted successfully")
