"""Bet API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database.dependencies import get_db
from schemas import BetCreate, BetResponse, PlaceBetResponse
from services import bet_service

router = APIRouter(prefix="/bets", tags=["Bets"])


@router.post("", response_model=PlaceBetResponse)
async def place_bet(request: BetCreate, db: AsyncSession = Depends(get_db)):
    """Place a bet, debiting the stake from the user's wallet."""
    bet, new_balance = await bet_service.place_bet(
        db,
        user_id=request.user_id,
        hackathon_id=request.hackathon_id,
        team_id=request.team_id,
        prize_id=request.prize_id,
        bet_amount=request.bet_amount,
        odds_american=request.odds_american,
        odds_decimal=request.odds_decimal,
    )

    return PlaceBetResponse(
        bet=BetResponse.model_validate(bet),
        new_balance=new_balance,
    )


@router.get("/{bet_id}", response_model=BetResponse)
async def get_bet(bet_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get a single bet."""
    bet = await bet_service.get_bet(db, bet_id)

    if not bet:
        raise HTTPException(status_code=404, detail="Bet not found")

    return BetResponse.model_validate(bet)
