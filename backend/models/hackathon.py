"""Hackathon, team and prize database models."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from database.base import Base
from models.base import TimestampMixin, UUIDMixin


class Hackathon(Base, UUIDMixin, TimestampMixin):
    """A hackathon that users can bet on."""

    __tablename__ = "hackathons"

    name = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="upcoming")

    teams = relationship("HackathonTeam", back_populates="hackathon", lazy="raise")
    prizes = relationship("HackathonPrize", back_populates="hackathon", lazy="raise")

    def __repr__(self) -> str:
        return f"<Hackathon {self.name} ({self.status})>"


class HackathonTeam(Base, UUIDMixin, TimestampMixin):
    """A competing team."""

    __tablename__ = "hackathon_teams"

    hackathon_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("hackathons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)
    github_url = Column(String(500), nullable=True)

    # Aggregated member rating (0-100), null until stats are computed
    avg_overall_rating = Column(Numeric(5, 2), nullable=True)
    # Activity count used when no GitHub repository is linked
    commit_count = Column(Integer, nullable=False, default=0)

    hackathon = relationship("Hackathon", back_populates="teams")

    def __repr__(self) -> str:
        return f"<HackathonTeam {self.name}>"


class HackathonPrize(Base, UUIDMixin, TimestampMixin):
    """A prize track teams compete for."""

    __tablename__ = "hackathon_prizes"

    hackathon_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("hackathons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category = Column(String(100), nullable=False)
    amount = Column(Integer, nullable=True)

    hackathon = relationship("Hackathon", back_populates="prizes")

    def __repr__(self) -> str:
        return f"<HackathonPrize {self.category}>"
