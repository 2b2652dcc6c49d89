"""Admin API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database.dependencies import get_db
from schemas import (
    BetSettlementError,
    CalculateOddsResponse,
    ResolveBetsRequest,
    ResolveBetsResponse,
)
from services import odds_service, settlement_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/hackathons/{hackathon_id}/resolve-bets",
    response_model=ResolveBetsResponse,
)
async def resolve_bets(
    hackathon_id: UUID,
    request: ResolveBetsRequest,
    db: AsyncSession = Depends(get_db),
):
    """Settle every pending bet on a hackathon from its final placements."""
    report = await settlement_service.resolve_bets(
        db, hackathon_id, request.winner_results
    )

    if report.resolved_count == 0 and not report.errors:
        message = "No pending bets to resolve"
    else:
        message = (
            f"Resolved {report.resolved_count} bets with total payout of "
            f"{report.total_payout}"
        )

    return ResolveBetsResponse(
        success=report.success,
        resolved_count=report.resolved_count,
        total_payout=report.total_payout,
        errors=[BetSettlementError(**e) for e in report.errors],
        message=message,
    )


@router.post(
    "/hackathons/{hackathon_id}/odds",
    response_model=CalculateOddsResponse,
)
async def calculate_odds(
    hackathon_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Recalculate betting odds for every team and prize of a hackathon."""
    report = await odds_service.calculate_odds(db, hackathon_id)

    return CalculateOddsResponse(
        message=report.message,
        calculated=report.calculated,
        prizes=report.prizes,
        teams=report.teams,
    )
