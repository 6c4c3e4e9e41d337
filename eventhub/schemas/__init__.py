from .user import LoginRequest, OrganizerOut, RegisterRequest, UserOut
from .event import EventCreate, EventOut, EventUpdate
from .saved_event import SavedEventOut, SavedEventWithEvent

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserOut",
    "OrganizerOut",
    "EventCreate",
    "EventUpdate",
    "EventOut",
    "SavedEventOut",
    "SavedEventWithEvent",
]
