"""Builders for betting test data."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from models import Bet, Hackathon, HackathonPrize, HackathonTeam, User


@dataclass
class World:
    hackathon_id: UUID
    prize_id: UUID
    team_ids: list[UUID]


async def make_user(db: AsyncSession, username: str, balance: int = 1000) -> UUID:
    user = User(
        username=username,
        wallet_balance=balance,
        total_bets=0,
        total_predictions=0,
        won_bets=0,
        correct_predictions=0,
        accuracy_rate=Decimal("0.00"),
        xp=0,
    )
    db.add(user)
    await db.commit()
    return user.id


async def make_world(db: AsyncSession, team_count: int = 4) -> World:
    hackathon = Hackathon(name="HackMIT", status="live")
    db.add(hackathon)
    await db.flush()

    prize = HackathonPrize(hackathon_id=hackathon.id, category="Overall")
    db.add(prize)

    teams = [
        HackathonTeam(hackathon_id=hackathon.id, name=f"Team {i + 1}", commit_count=0)
        for i in range(team_count)
    ]
    db.add_all(teams)
    await db.commit()

    return World(
        hackathon_id=hackathon.id,
        prize_id=prize.id,
        team_ids=[t.id for t in teams],
    )


async def make_bet(
    db: AsyncSession,
    world: World,
    user_id: UUID,
    team_id: UUID,
    amount: int,
    status: str = "pending",
    final_payout: Optional[int] = None,
) -> UUID:
    """Insert a bet directly, without touching the wallet."""
    bet = Bet(
        id=uuid4(),
        user_id=user_id,
        hackathon_id=world.hackathon_id,
        team_id=team_id,
        prize_id=world.prize_id,
        bet_amount=amount,
        odds_american=120,
        odds_decimal=Decimal("2.20"),
        status=status,
        final_payout=final_payout,
    )
    db.add(bet)
    await db.commit()
    return bet.id
