import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from taskvibe.db.base import Base


class Achievement(Base):
    """An unlock record. Rows are only ever inserted."""

    __tablename__ = "achievements"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    type = Column(String, nullable=False)  # welcome, level, ...
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String, nullable=False)
    unlocked_at = Column(DateTime, default=datetime.now, nullable=False)

    user = relationship("User", back_populates="achievements")
