"""Pydantic request and response schemas."""

from schemas.bet import BetCreate, BetResponse, BetStatus, PlaceBetResponse
from schemas.common import BaseSchema, PaginatedResponse
from schemas.odds import BettingOddsResponse, CalculateOddsResponse
from schemas.settlement import (
    BetSettlementError,
    ResolveBetsRequest,
    ResolveBetsResponse,
    TeamPlacement,
)
from schemas.user import UserResponse, WalletTransactionResponse

__all__ = [
    "BaseSchema",
    "BetCreate",
    "BetResponse",
    "BetSettlementError",
    "BetStatus",
    "BettingOddsResponse",
    "CalculateOddsResponse",
    "PaginatedResponse",
    "PlaceBetResponse",
    "ResolveBetsRequest",
    "ResolveBetsResponse",
    "TeamPlacement",
    "UserResponse",
    "WalletTransactionResponse",
]
