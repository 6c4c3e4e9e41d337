from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .event import EventOut


class SavedEventOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    saved_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class SavedEventWithEvent(SavedEventOut):
    event: EventOut
