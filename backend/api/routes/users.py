"""User wallet API routes."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database.dependencies import get_db
from schemas import (
    BetResponse,
    BetStatus,
    PaginatedResponse,
    UserResponse,
    WalletTransactionResponse,
)
from services import bet_service, user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get a user's wallet balance and prediction stats."""
    user = await user_service.get_user(db, user_id)

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return UserResponse.model_validate(user)


@router.get("/{user_id}/bets", response_model=PaginatedResponse[BetResponse])
async def get_user_bets(
    user_id: UUID,
    status: Optional[BetStatus] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(
        settings.pagination_default_limit,
        ge=1,
        le=settings.pagination_max_limit,
    ),
    db: AsyncSession = Depends(get_db),
):
    """Get betting history for a user."""
    user = await user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    bets, total = await bet_service.get_user_bets(
        db,
        user_id,
        status=status.value if status else None,
        page=page,
        page_size=page_size,
    )

    return PaginatedResponse[BetResponse].build(
        items=[BetResponse.model_validate(b) for b in bets],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{user_id}/transactions",
    response_model=list[WalletTransactionResponse],
)
async def get_user_transactions(
    user_id: UUID,
    limit: int = Query(
        settings.pagination_default_limit,
        ge=1,
        le=settings.pagination_max_limit,
    ),
    db: AsyncSession = Depends(get_db),
):
    """Get a user's wallet ledger, newest first."""
    user = await user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    transactions = await user_service.get_transactions(db, user_id, limit=limit)
    return [WalletTransactionResponse.model_validate(t) for t in transactions]
