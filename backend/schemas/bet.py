"""Bet Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import Field

from schemas.common import BaseSchema


class BetStatus(str, Enum):
    """Bet lifecycle status."""

    PENDING = "pending"
    WON = "won"
    LOST = "lost"


class BetCreate(BaseSchema):
    """Bet placement request."""

    user_id: UUID
    hackathon_id: UUID
    team_id: UUID
    prize_id: UUID
    bet_amount: int = Field(gt=0)
    odds_american: Optional[int] = None
    odds_decimal: Optional[Decimal] = Field(default=None, gt=0)


class BetResponse(BaseSchema):
    """Bet response schema."""

    id: UUID
    user_id: UUID
    hackathon_id: UUID
    team_id: UUID
    prize_id: UUID
    bet_amount: int
    odds_american: Optional[int]
    odds_decimal: Optional[Decimal]
    status: BetStatus
    payout_multiplier: Optional[Decimal]
    final_payout: Optional[int]
    team_final_position: Optional[int]
    resolved_at: Optional[datetime]
    created_at: datetime


class PlaceBetResponse(BaseSchema):
    """Result of a successful bet placement."""

    success: bool = True
    bet: BetResponse
    new_balance: int
