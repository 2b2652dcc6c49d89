"""Hackathon, team and prize lookups."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Hackathon, HackathonPrize, HackathonTeam

logger = logging.getLogger(__name__)


class HackathonService:
    """Reads and creates the hackathon records bets refer to."""

    async def get_hackathon(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> Optional[Hackathon]:
        """Fetch single hackathon by ID."""
        result = await db.execute(
            select(Hackathon).where(Hackathon.id == hackathon_id)
        )
        return result.scalar_one_or_none()

    async def get_teams(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> list[HackathonTeam]:
        """All teams competing in a hackathon."""
        result = await db.execute(
            select(HackathonTeam)
            .where(HackathonTeam.hackathon_id == hackathon_id)
            .order_by(HackathonTeam.name)
        )
        return list(result.scalars().all())

    async def get_prizes(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> list[HackathonPrize]:
        """All prize tracks of a hackathon."""
        result = await db.execute(
            select(HackathonPrize)
            .where(HackathonPrize.hackathon_id == hackathon_id)
            .order_by(HackathonPrize.category)
        )
        return list(result.scalars().all())

    async def get_team(
        self, db: AsyncSession, team_id: UUID
    ) -> Optional[HackathonTeam]:
        result = await db.execute(
            select(HackathonTeam).where(HackathonTeam.id == team_id)
        )
        return result.scalar_one_or_none()

    async def get_prize(
        self, db: AsyncSession, prize_id: UUID
    ) -> Optional[HackathonPrize]:
        result = await db.execute(
            select(HackathonPrize).where(HackathonPrize.id == prize_id)
        )
        return result.scalar_one_or_none()

    async def create_hackathon(
        self, db: AsyncSession, name: str, status: str = "upcoming"
    ) -> Hackathon:
        hackathon = Hackathon(name=name, status=status)
        db.add(hackathon)
        await db.commit()
        await db.refresh(hackathon)
        logger.info(f"Created hackathon {name}")
        return hackathon

    async def add_team(
        self,
        db: AsyncSession,
        hackathon_id: UUID,
        name: str,
        category: Optional[str] = None,
        github_url: Optional[str] = None,
        avg_overall_rating: Optional[Decimal] = None,
        commit_count: int = 0,
    ) -> HackathonTeam:
        team = HackathonTeam(
            hackathon_id=hackathon_id,
            name=name,
            category=category,
            github_url=github_url,
            avg_overall_rating=avg_overall_rating,
            commit_count=commit_count,
        )
        db.add(team)
        await db.commit()
        await db.refresh(team)
        return team

    async def add_prize(
        self,
        db: AsyncSession,
        hackathon_id: UUID,
        category: str,
        amount: Optional[int] = None,
    ) -> HackathonPrize:
        prize = HackathonPrize(
            hackathon_id=hackathon_id,
            category=category,
            amount=amount,
        )
        db.add(prize)
        await db.commit()
        await db.refresh(prize)
        return prize


# Singleton instance
hackathon_service = HackathonService()
