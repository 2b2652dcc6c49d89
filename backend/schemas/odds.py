"""Betting odds Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from schemas.common import BaseSchema


class BettingOddsResponse(BaseSchema):
    """Odds for one team and prize."""

    team_id: UUID
    prize_id: UUID
    odds_american: int
    odds_decimal: Decimal
    implied_probability: Decimal
    updated_at: datetime


class CalculateOddsResponse(BaseSchema):
    """Odds calculation run report."""

    success: bool = True
    message: str
    calculated: int
    prizes: int
    teams: int
