"""Betting odds calculation service."""

import logging
import math
import random
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import BettingOdds, HackathonPrize, HackathonTeam
from services.github_service import GitHubService
from services.hackathon_service import hackathon_service
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TEAM_RATING = 50.0
# Keeps every implied probability above zero
MIN_TEAM_RATING = 1.0
MAX_ACTIVITY_BONUS = 15.0
ALIGNMENT_BONUS = 20.0

# American odds are compressed by this factor, then clamped
ODDS_SCALE_DIVISOR = 6
MIN_AMERICAN_ODDS = -120
MAX_AMERICAN_ODDS = 150

# Prize category key -> team keywords that earn the alignment bonus
ALIGNMENT_KEYWORDS: dict[str, list[str]] = {
    "defi": ["defi", "decentralized finance", "finance", "yield", "yieldfarm"],
    "nft": ["nft", "non-fungible", "marketplace", "collectibles", "art"],
    "dao": ["dao", "governance", "gov", "governance tool", "builder"],
    "public goods": ["public goods", "social impact", "public", "infrastructure"],
    "infrastructure": ["infrastructure", "tooling", "tools", "developer", "infra"],
    "overall": [],
}

_CENT = Decimal("0.01")

# Dialect inserts that support ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class OddsReport:
    """Result of an odds calculation run."""

    hackathon_id: UUID
    calculated: int
    prizes: int
    teams: int
    message: str


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def activity_bonus(commit_count: int) -> float:
    """
    Rating bonus for recent commits.

    0-10 commits earn up to 5 points, 11-30 up to 10, beyond that one
    more point per 10 commits, capped at 15.
    """
    if commit_count <= 0:
        return 0.0
    if commit_count <= 10:
        bonus = commit_count / 10 * 5
    elif commit_count <= 30:
        bonus = 5 + (commit_count - 10) / 20 * 5
    else:
        bonus = 10 + min(5.0, (commit_count - 30) / 10)
    return min(MAX_ACTIVITY_BONUS, bonus)


def alignment_bonus(
    prize_category: Optional[str],
    team_category: Optional[str],
    team_name: Optional[str],
) -> float:
    """Bonus when the team's category or name matches the prize track."""
    prize_category = (prize_category or "").lower()
    team_category = (team_category or "").lower()
    team_name = (team_name or "").lower()

    for key, keywords in ALIGNMENT_KEYWORDS.items():
        if key not in prize_category:
            continue
        if any(kw in team_category or kw in team_name for kw in keywords):
            return ALIGNMENT_BONUS
    return 0.0


def american_odds_from_probability(probability: float) -> int:
    """
    Convert a win probability to compressed American odds.

    Favourites (p >= 0.5) get negative odds, underdogs positive; the raw
    value is divided by 6 and clamped to [-120, +150].
    """
    if probability >= 1:
        return MIN_AMERICAN_ODDS
    if probability <= 0:
        return MAX_AMERICAN_ODDS

    if probability >= 0.5:
        raw = _round_half_up(-100 * probability / (1 - probability))
    else:
        raw = _round_half_up((1 - probability) * 100 / probability)

    scaled = _round_half_up(raw / ODDS_SCALE_DIVISOR)
    return max(MIN_AMERICAN_ODDS, min(MAX_AMERICAN_ODDS, scaled))


def decimal_odds_from_american(american: int) -> Decimal:
    """Decimal (European) odds for American odds, to 2 places."""
    if american > 0:
        value = 1 + Decimal(american) / 100
    elif american < 0:
        value = 1 + Decimal(100) / Decimal(abs(american))
    else:
        value = Decimal(1)
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def implied_probabilities(ratings: dict[UUID, float]) -> dict[UUID, float]:
    """Each team's share of the summed rating. Empty when the sum is not positive."""
    total = sum(ratings.values())
    if total <= 0:
        return {}
    return {team_id: rating / total for team_id, rating in ratings.items()}


class OddsService:
    """
    Prices every team for every prize of a hackathon.

    A team's rating is its average member rating (50 when unknown) plus an
    activity bonus from commits, an alignment bonus for matching the prize
    track and a small random variation to separate identical teams.
    """

    async def calculate_odds(
        self,
        db: AsyncSession,
        hackathon_id: UUID,
        rng: Optional[random.Random] = None,
        github: Optional[GitHubService] = None,
    ) -> OddsReport:
        """Recalculate and store odds for all (team, prize) pairs."""
        hackathon = await hackathon_service.get_hackathon(db, hackathon_id)
        if not hackathon:
            raise NotFoundError(f"Hackathon {hackathon_id} not found")

        logger.info(f"Calculating betting odds for hackathon {hackathon_id}")

        prizes = await hackathon_service.get_prizes(db, hackathon_id)
        if not prizes:
            logger.info("No prizes found for this hackathon")
            return OddsReport(hackathon_id, 0, 0, 0, "No prizes found")

        teams = await hackathon_service.get_teams(db, hackathon_id)
        if not teams:
            logger.info("No teams found for this hackathon")
            return OddsReport(hackathon_id, 0, len(prizes), 0, "No teams found")

        rng = rng or random.Random()
        commit_counts = await self._get_commit_counts(teams, github)

        calculated = 0
        for prize in prizes:
            ratings = {
                team.id: self._team_rating(team, prize, commit_counts[team.id], rng)
                for team in teams
            }
            probabilities = implied_probabilities(ratings)
            if not probabilities:
                logger.warning(f"Ratings sum to zero for prize {prize.category}")
                continue

            for team_id, probability in probabilities.items():
                await self._upsert_odds(db, team_id, prize.id, probability)
                calculated += 1

        await db.commit()

        message = (
            f"Calculated {calculated} betting odds for {len(prizes)} prizes "
            f"and {len(teams)} teams"
        )
        logger.info(message)
        return OddsReport(hackathon_id, calculated, len(prizes), len(teams), message)

    async def get_hackathon_odds(
        self, db: AsyncSession, hackathon_id: UUID
    ) -> list[BettingOdds]:
        """Current odds for every prize of a hackathon."""
        result = await db.execute(
            select(BettingOdds)
            .join(HackathonPrize, BettingOdds.prize_id == HackathonPrize.id)
            .where(HackathonPrize.hackathon_id == hackathon_id)
            .order_by(BettingOdds.prize_id, BettingOdds.odds_american)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    def _team_rating(
        self,
        team: HackathonTeam,
        prize: HackathonPrize,
        commit_count: int,
        rng: random.Random,
    ) -> float:
        base = (
            float(team.avg_overall_rating)
            if team.avg_overall_rating is not None
            else DEFAULT_TEAM_RATING
        )
        jitter = settings.odds_rating_jitter
        variation = rng.uniform(-jitter, jitter) if jitter else 0.0
        rating = (
            base
            + activity_bonus(commit_count)
            + alignment_bonus(prize.category, team.category, team.name)
            + variation
        )
        return max(MIN_TEAM_RATING, rating)

    async def _get_commit_counts(
        self,
        teams: list[HackathonTeam],
        github: Optional[GitHubService],
    ) -> dict[UUID, int]:
        """GitHub commits for linked repositories, stored counts otherwise."""
        counts: dict[UUID, int] = {}
        owns_client = False

        try:
            for team in teams:
                if not team.github_url:
                    counts[team.id] = team.commit_count or 0
                    continue
                if github is None:
                    github = GitHubService()
                    owns_client = True
                counts[team.id] = await github.get_commit_count(team.github_url)
        finally:
            if owns_client:
                await github.close()

        return counts

    async def _upsert_odds(
        self,
        db: AsyncSession,
        team_id: UUID,
        prize_id: UUID,
        probability: float,
    ) -> None:
        american = american_odds_from_probability(probability)
        values = {
            "odds_american": american,
            "odds_decimal": decimal_odds_from_american(american),
            "implied_probability": Decimal(str(probability)).quantize(
                _CENT, rounding=ROUND_HALF_UP
            ),
        }

        insert = _UPSERT_INSERTS[db.get_bind().dialect.name]
        stmt = insert(BettingOdds).values(
            team_id=team_id, prize_id=prize_id, **values
        )
        await db.execute(
            stmt.on_conflict_do_update(
                index_elements=[BettingOdds.team_id, BettingOdds.prize_id],
                set_={**values, "updated_at": func.now()},
            )
        )

        logger.debug(
            f"Odds for team {team_id} / prize {prize_id}: "
            f"{american:+d} ({values['odds_decimal']}), p={probability:.3f}"
        )


# Singleton instance
odds_service = OddsService()
