"""Bet settlement calculation and processing service."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Mapping, NamedTuple, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import Bet
from services.bet_service import bet_service
from services.hackathon_service import hackathon_service
from services.user_service import user_service
from utils.errors import InvalidRequestError, NotFoundError, format_log_error

logger = logging.getLogger(__name__)


# Finishing position -> payout multiplier. Anything else pays the
# unplaced multiplier and counts as a loss.
PLACEMENT_MULTIPLIERS: dict[int, Decimal] = {
    1: Decimal("1.5"),
    2: Decimal("1.3"),
    3: Decimal("1.1"),
}


@dataclass(frozen=True)
class SettlementOutcome:
    """How a single bet resolves."""

    status: str
    multiplier: Decimal
    payout: int
    position: Optional[int]

    @property
    def is_win(self) -> bool:
        return self.status == "won"


@dataclass
class SettlementReport:
    """Result of a settlement run for one hackathon."""

    hackathon_id: UUID
    resolved_count: int = 0
    total_payout: int = 0
    skipped_count: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class _PendingBet(NamedTuple):
    id: UUID
    user_id: UUID
    team_id: UUID
    bet_amount: int


def calculate_settlement(
    stake: int,
    position: Optional[int],
    unplaced_multiplier: Optional[Decimal] = None,
) -> SettlementOutcome:
    """
    Resolve a stake against the team's final position.

    1st/2nd/3rd win and pay 1.5x/1.3x/1.1x. 4th or worse, or no position,
    lose and pay the unplaced multiplier (0.9x by default). The payout is
    floor(stake * multiplier) in exact decimal arithmetic.
    """
    if stake is None or stake <= 0:
        raise InvalidRequestError(f"Stake must be positive, got {stake}")
    if position is not None and position < 1:
        raise InvalidRequestError(f"Position must be 1 or greater, got {position}")

    if unplaced_multiplier is None:
        unplaced_multiplier = settings.settlement_unplaced_multiplier

    if position in PLACEMENT_MULTIPLIERS:
        multiplier = PLACEMENT_MULTIPLIERS[position]
        status = "won"
    else:
        multiplier = Decimal(unplaced_multiplier)
        status = "lost"

    payout = int(
        (Decimal(stake) * multiplier).to_integral_value(rounding=ROUND_FLOOR)
    )
    return SettlementOutcome(
        status=status,
        multiplier=multiplier,
        payout=payout,
        position=position,
    )


def normalize_placements(
    winner_results: Mapping[Any, Any],
) -> dict[UUID, int]:
    """
    Turn a results mapping into team_id -> position.

    Values may be a mapping with a "position" key, an object with a
    position attribute, or a bare integer. Keys may be UUIDs or strings.
    """
    placements: dict[UUID, int] = {}
    for team_id, placement in winner_results.items():
        if isinstance(placement, Mapping):
            position = placement.get("position")
        elif isinstance(placement, int):
            position = placement
        else:
            position = getattr(placement, "position", None)

        if not isinstance(position, int) or isinstance(position, bool):
            raise InvalidRequestError(
                f"Missing or invalid position for team {team_id}"
            )
        if position < 1:
            raise InvalidRequestError(
                f"Position must be 1 or greater for team {team_id}"
            )
        try:
            key = team_id if isinstance(team_id, UUID) else UUID(str(team_id))
        except ValueError:
            raise InvalidRequestError(f"Invalid team id: {team_id}")
        placements[key] = position
    return placements


class SettlementService:
    """
    Settles a hackathon's pending bets once final placements are known.

    Each bet is its own transaction: the bet is claimed with a conditional
    UPDATE (status must still be pending), the wallet credited with an atomic
    increment, the ledger entry written and stats updated, then committed.
    A failing bet is rolled back, stays pending and is reported; the rest of
    the batch continues.
    """

    async def resolve_bets(
        self,
        db: AsyncSession,
        hackathon_id: UUID,
        winner_results: Optional[Mapping[Any, Any]],
    ) -> SettlementReport:
        """
        Settle all pending bets for a hackathon.

        Process:
        1. Validate input and the hackathon
        2. Load pending bets
        3. Settle each bet in its own transaction
        4. Report resolved count, total payout and per-bet errors
        """
        if hackathon_id is None:
            raise InvalidRequestError("Missing hackathon id")
        if winner_results is None:
            raise InvalidRequestError("Missing winner results")

        placements = normalize_placements(winner_results)

        hackathon = await hackathon_service.get_hackathon(db, hackathon_id)
        if not hackathon:
            raise NotFoundError(f"Hackathon {hackathon_id} not found")

        logger.info(
            f"Resolving bets for hackathon {hackathon_id} "
            f"({len(placements)} placed teams)"
        )

        bets = await bet_service.get_pending_bets_for_hackathon(db, hackathon_id)
        # Rollbacks expire ORM instances, so work from plain values
        pending = [
            _PendingBet(b.id, b.user_id, b.team_id, b.bet_amount) for b in bets
        ]
        await db.commit()

        report = SettlementReport(hackathon_id=hackathon_id)
        if not pending:
            logger.info(f"No pending bets for hackathon {hackathon_id}")
            return report

        logger.info(f"Found {len(pending)} pending bets")

        for bet in pending:
            try:
                outcome = calculate_settlement(
                    bet.bet_amount, placements.get(bet.team_id)
                )
                claimed = await self._settle_bet(db, bet, outcome)
                if not claimed:
                    await db.rollback()
                    report.skipped_count += 1
                    logger.info(f"Bet {bet.id} already resolved, skipping")
                    continue
                await db.commit()
            except Exception as e:
                await db.rollback()
                logger.error(
                    f"Failed to settle bet {bet.id}: {e}",
                    extra=format_log_error(e, bet_id=str(bet.id)),
                )
                report.errors.append({"bet_id": bet.id, "error": str(e)})
                continue

            report.resolved_count += 1
            report.total_payout += outcome.payout

            logger.info(
                f"Settled bet {bet.id}: position {outcome.position} -> "
                f"{outcome.status.upper()} x{outcome.multiplier} = {outcome.payout} HC"
            )

        logger.info(
            f"Resolved {report.resolved_count} bets with total payout of "
            f"{report.total_payout} HC ({len(report.errors)} failed, "
            f"{report.skipped_count} skipped)"
        )
        return report

    async def _settle_bet(
        self,
        db: AsyncSession,
        bet: _PendingBet,
        outcome: SettlementOutcome,
    ) -> bool:
        """
        Apply one outcome inside the current transaction.
        Returns False when the bet is no longer pending.
        """
        claimed = await db.execute(
            update(Bet)
            .where(Bet.id == bet.id)
            .where(Bet.status == "pending")
            .values(
                status=outcome.status,
                payout_multiplier=outcome.multiplier,
                final_payout=outcome.payout,
                team_final_position=outcome.position,
                resolved_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount == 0:
            return False

        await user_service.credit_wallet(db, bet.user_id, outcome.payout)

        if outcome.position is None:
            description = "Bet resolved - team did not place"
        else:
            description = f"Bet resolved - team placed {outcome.position}"

        user_service.add_transaction(
            db,
            user_id=bet.user_id,
            amount=outcome.payout,
            transaction_type="bet_won" if outcome.is_win else "bet_lost",
            description=description,
            reference_id=bet.id,
        )

        if outcome.is_win:
            await user_service.record_win(db, bet.user_id)

        # Surface constraint violations while the bet can still roll back
        await db.flush()
        return True


# Singleton instance
settlement_service = SettlementService()
