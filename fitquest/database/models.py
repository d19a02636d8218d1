"""SQLAlchemy ORM models for FitQuest."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, JSON, Index, UniqueConstraint
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Character(Base):
    """One RPG character per client."""

    __tablename__ = "characters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    xp = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    strength = Column(Integer, nullable=False, default=0)
    endurance = Column(Integer, nullable=False, default=0)
    discipline = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_workout_date = Column(DateTime, nullable=True)
    avatar_config = Column(JSON, nullable=True)
    public_profile = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<Character user={self.user_id} level={self.level} "
            f"xp={self.xp} streak={self.current_streak}>"
        )


class XPLog(Base):
    """Every XP award, positive or negative."""

    __tablename__ = "xp_log"
    __table_args__ = (
        # one award per (user, source, reference); NULL references never collide
        Index("uq_xp_log_award", "user_id", "source", "reference_id", unique=True),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    source = Column(String(64), nullable=False)       # session_complete | streak_bonus | admin_manual ...
    reference_id = Column(String(64), nullable=True)  # e.g. the completed session's id
    note = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<XPLog user={self.user_id} amount={self.amount} "
            f"source={self.source}>"
        )


class Unlock(Base):
    """Milestone rewards a character has earned."""

    __tablename__ = "unlocks"
    __table_args__ = (UniqueConstraint("user_id", "unlock_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    level = Column(Integer, nullable=False)
    unlock_key = Column(String(64), nullable=False)   # e.g. "avatar_accessories"
    name = Column(String(255), nullable=False)
    unlocked_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<Unlock user={self.user_id} key={self.unlock_key} "
            f"level={self.level}>"
        )
