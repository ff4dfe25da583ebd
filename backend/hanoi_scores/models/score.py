"""Score ORM: one persisted game result.

Invariants:
    - id is an auto-increment integer primary key (database generated)
    - creation_date is set by the database on insert (server default now())
    - Rows are never updated or deleted by this service

Design Decisions:
    - creation_date is a naive timestamp (no time zone), rendered as text as-is
"""

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from hanoi_scores.db.base import Base


class Score(Base):
    """Score entity: player, turn count, disk count, median move time."""
    __tablename__ = "scores"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    player: Mapped[str] = mapped_column(String, nullable=False)
    n_turn: Mapped[int] = mapped_column(Integer, nullable=False)
    median_time: Mapped[int] = mapped_column(Integer, nullable=False)
    disks: Mapped[int] = mapped_column(Integer, nullable=False)
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Score id={self.id} player={self.player!r} disks={self.disks}>"
