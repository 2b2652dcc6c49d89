"""User and wallet Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from schemas.common import BaseSchema


class UserResponse(BaseSchema):
    """User wallet and prediction stats."""

    id: UUID
    username: str
    wallet_balance: int
    total_bets: int
    total_predictions: int
    won_bets: int
    correct_predictions: int
    accuracy_rate: Decimal
    xp: int


class WalletTransactionResponse(BaseSchema):
    """Wallet ledger entry."""

    id: UUID
    user_id: UUID
    amount: int
    transaction_type: str
    description: Optional[str]
    reference_id: Optional[UUID]
    created_at: datetime
