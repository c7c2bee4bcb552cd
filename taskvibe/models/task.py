import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from taskvibe.db.base import Base


class Urgency(str, enum.Enum):
    IMMEDIATE = "immediate"
    MEDIUM = "medium"
    DELAYED = "delayed"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    # Stored as the plain urgency string; see Urgency for the accepted values
    urgency = Column(String, index=True, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    priority = Column(Integer, default=0, nullable=False)  # order within the urgency bucket
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    owner = relationship("User", back_populates="tasks")
