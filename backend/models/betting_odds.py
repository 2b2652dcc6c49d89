"""Betting odds database model."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    UniqueConstraint,
    Uuid,
    func,
)

from database.base import Base
from models.base import UUIDMixin


class BettingOdds(Base, UUIDMixin):
    """Current odds for a team winning a prize."""

    __tablename__ = "betting_odds"

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
        index=True,
    )

    odds_american = Column(Integer, nullable=False)
    odds_decimal = Column(Numeric(6, 2), nullable=False)
    implied_probability = Column(Numeric(4, 2), nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("team_id", "prize_id", name="uq_betting_odds_team_prize"),
    )

    def __repr__(self) -> str:
        return f"<BettingOdds {self.odds_american:+d} ({self.odds_decimal})>"
