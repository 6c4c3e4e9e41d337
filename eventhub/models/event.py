from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from eventhub.database import Base
from eventhub.utils import combine_date_time, generate_id, now_local


class EventCategory(str, Enum):
    music = "Music"
    sports = "Sports"
    arts = "Arts"
    technology = "Technology"
    business = "Business"
    food = "Food"
    health = "Health"
    education = "Education"
    lifestyle = "Lifestyle"
    environment = "Environment"
    entertainment = "Entertainment"
    other = "Other"


CATEGORIES = [c.value for c in EventCategory]


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_category_date", "category", "date"),
    )

    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    date = Column(Date, nullable=False, index=True)
    # "HH:MM", 24-hour, zero padded so it sorts and compares as text
    time = Column(String(5), nullable=False)
    location = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False)
    organizer_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    organizer = relationship("User", back_populates="events")
    saved_by = relationship("SavedEvent", back_populates="event", cascade="all, delete-orphan")

    @property
    def starts_at(self) -> datetime:
        return combine_date_time(self.date, self.time)

    @property
    def is_past(self) -> bool:
        return self.starts_at < now_local()
