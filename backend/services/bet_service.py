"""Bet placement and tracking service."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import Bet
from services.hackathon_service import hackathon_service
from services.user_service import user_service
from utils.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)


class BetService:
    """
    Handles bet placement and bet history queries.
    """

    async def place_bet(
        self,
        db: AsyncSession,
        user_id: UUID,
        hackathon_id: UUID,
        team_id: UUID,
        prize_id: UUID,
        bet_amount: int,
        odds_american: Optional[int] = None,
        odds_decimal: Optional[Decimal] = None,
    ) -> tuple[Bet, int]:
        """
        Place a bet for a user.

        Process:
        1. Debit the stake (only if the wallet covers it)
        2. Record a bet_placed ledger entry
        3. Create the pending bet with the odds shown to the user

        All three writes commit together. Returns (bet, new_balance).
        """
        if bet_amount is None or bet_amount <= 0:
            raise InvalidRequestError("Bet amount must be a positive integer")

        hackathon = await hackathon_service.get_hackathon(db, hackathon_id)
        if not hackathon:
            raise NotFoundError(f"Hackathon {hackathon_id} not found")

        # Team and prize must both belong to the hackathon being bet on
        team = await hackathon_service.get_team(db, team_id)
        if not team or team.hackathon_id != hackathon_id:
            raise NotFoundError(
                f"Team {team_id} not found in hackathon {hackathon_id}"
            )
        prize = await hackathon_service.get_prize(db, prize_id)
        if not prize or prize.hackathon_id != hackathon_id:
            raise NotFoundError(
                f"Prize {prize_id} not found in hackathon {hackathon_id}"
            )

        try:
            new_balance = await user_service.debit_for_bet(
                db, user_id, bet_amount, xp=settings.bet_placement_xp
            )

            user_service.add_transaction(
                db,
                user_id=user_id,
                amount=-bet_amount,
                transaction_type="bet_placed",
                description="Bet placed on team for prize",
                reference_id=team_id,
            )

            bet = Bet(
                user_id=user_id,
                hackathon_id=hackathon_id,
                team_id=team_id,
                prize_id=prize_id,
                bet_amount=bet_amount,
                odds_american=odds_american,
                odds_decimal=odds_decimal,
                status="pending",
            )
            db.add(bet)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(bet)

        logger.info(
            f"Placed bet: user {user_id} {bet_amount} HC on team {team_id} "
            f"@ {odds_american} (balance {new_balance})"
        )
        return bet, new_balance

    async def get_bet(self, db: AsyncSession, bet_id: UUID) -> Optional[Bet]:
        """Get a bet by ID."""
        result = await db.execute(
            select(Bet)
            .where(Bet.id == bet_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_pending_bets_for_hackathon(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> list[Bet]:
        """Get all unresolved bets for a hackathon, oldest first."""
        result = await db.execute(
            select(Bet)
            .where(Bet.hackathon_id == hackathon_id)
            .where(Bet.status == "pending")
            .order_by(Bet.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_hackathon_bets(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> list[Bet]:
        """Get all bets on a hackathon, in any status."""
        result = await db.execute(
            select(Bet)
            .where(Bet.hackathon_id == hackathon_id)
            .order_by(Bet.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_user_bets(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Bet], int]:
        """Get a page of betting history for a user plus the total count."""
        query = select(Bet).where(Bet.user_id == user_id)
        if status is not None:
            query = query.where(Bet.status == status)

        total = await db.scalar(
            select(func.count()).select_from(query.subquery())
        )

        query = (
            query.order_by(Bet.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await db.execute(query)
        return list(result.scalars().all()), total or 0


# Singleton instance
bet_service = BetService()
