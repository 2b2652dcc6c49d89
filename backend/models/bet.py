"""Bet database model."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from database.base import Base
from models.base import UUIDMixin

BET_STATUSES = ("pending", "won", "lost")


class Bet(Base, UUIDMixin):
    """Individual wager on a team for a prize."""

    __tablename__ = "hackathon_bets"

    # Foreign keys
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hackathon_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("hackathons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    team_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("hackathon_teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    prize_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("hackathon_prizes.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Bet details, captured at placement
    bet_amount = Column(Integer, nullable=False)
    odds_american = Column(Integer, nullable=True)
    odds_decimal = Column(Numeric(6, 2), nullable=True)

    # Resolution, written once
    status = Column(String(10), nullable=False, default="pending")
    payout_multiplier = Column(Numeric(4, 2), nullable=True)
    final_payout = Column(Integer, nullable=True)
    team_final_position = Column(Integer, nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamp
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="bets")

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'won', 'lost')",
            name="valid_bet_status",
        ),
        CheckConstraint("bet_amount > 0", name="positive_bet_amount"),
        Index("idx_hackathon_bets_hackathon_status", "hackathon_id", "status"),
    )

    @property
    def is_resolved(self) -> bool:
        return self.status != "pending"

    def __repr__(self) -> str:
        return f"<Bet {self.bet_amount} HC on {self.team_id} ({self.status})>"
