from eventhub.database import Base
from .user import User
from .event import CATEGORIES, Event, EventCategory
from .saved_event import SavedEvent

# This list helps when you do "from models import *"
__all__ = ["Base", "User", "Event", "EventCategory", "CATEGORIES", "SavedEvent"]
