from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.auth import get_current_user_id
from eventhub.database import get_db
from eventhub.responses import dump, success_response
from eventhub.routes.events import valid_event_id
from eventhub.schemas import SavedEventOut, SavedEventWithEvent
from eventhub.services import saved_event_service

router = APIRouter()


@router.get("")
def list_saved(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    upcoming, past = saved_event_service.list_saved(db, user_id)
    return success_response(
        data={
            "upcoming": [dump(SavedEventWithEvent.model_validate(row)) for row in upcoming],
            "past": [dump(SavedEventWithEvent.model_validate(row)) for row in past],
        },
        count=len(upcoming) + len(past),
    )


@router.get("/check/{event_id}")
def check_saved(
        user_id: str = Depends(get_current_user_id),
        event_id: str = Depends(valid_event_id),
        db: Session = Depends(get_db),
):
    return success_response(isSaved=saved_event_service.is_saved(db, event_id, user_id))


@router.post("/{event_id}")
def save_event(
        user_id: str = Depends(get_current_user_id),
        event_id: str = Depends(valid_event_id),
        db: Session = Depends(get_db),
):
    saved = saved_event_service.save_event(db, event_id, user_id)
    return success_response(
        data=dump(SavedEventOut.model_validate(saved)),
        message="Event saved successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.delete("/{event_id}")
def unsave_event(
        user_id: str = Depends(get_current_user_id),
        event_id: str = Depends(valid_event_id),
        db: Session = Depends(get_db),
):
    saved_event_service.unsave_event(db, event_id, user_id)
    return success_response(message="Event removed from saved list")
