"""Hackathon odds API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database.dependencies import get_db
from schemas import BettingOddsResponse
from services import hackathon_service, odds_service

router = APIRouter(prefix="/hackathons", tags=["Hackathons"])


@router.get("/{hackathon_id}/odds", response_model=list[BettingOddsResponse])
async def get_hackathon_odds(
    hackathon_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Current betting odds for every team and prize."""
    hackathon = await hackathon_service.get_hackathon(db, hackathon_id)
    if not hackathon:
        raise HTTPException(status_code=404, detail="Hackathon not found")

    odds = await odds_service.get_hackathon_odds(db, hackathon_id)
    return [BettingOddsResponse.model_validate(o) for o in odds]
