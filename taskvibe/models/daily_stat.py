import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from taskvibe.db.base import Base


class DailyStat(Base):
    __tablename__ = "daily_stats"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_stats_user_date"),)

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    date = Column(DateTime, nullable=False)  # local midnight of the day
    tasks_completed = Column(Integer, default=0, nullable=False)
    immediate_completed = Column(Integer, default=0, nullable=False)
    medium_completed = Column(Integer, default=0, nullable=False)
    delayed_completed = Column(Integer, default=0, nullable=False)
    xp_earned = Column(Integer, default=0, nullable=False)

    user = relationship("User", back_populates="daily_stats")
