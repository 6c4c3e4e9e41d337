from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from eventhub.database import Base
from eventhub.utils import generate_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # bcrypt hash, never serialised
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Use string "Event" instead of the class Event to avoid circular imports
    events = relationship("Event", back_populates="organizer")
    saved_events = relationship("SavedEvent", back_populates="user", cascade="all, delete-orphan")
