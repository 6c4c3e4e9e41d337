from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from eventhub.database import Base
from eventhub.utils import generate_id


class SavedEvent(Base):
    __tablename__ = "saved_events"
    # One row per (user, event); concurrent duplicate saves fail on insert
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_saved_user_event"),)

    id = Column(String(24), primary_key=True, default=generate_id)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(String(24), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    saved_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="saved_events")
    event = relationship("Event", back_populates="saved_by")
