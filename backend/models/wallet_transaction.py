"""Wallet transaction (audit ledger) database model."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from database.base import Base
from models.base import UUIDMixin

TRANSACTION_TYPES = ("bet_placed", "bet_won", "bet_lost")


class WalletTransaction(Base, UUIDMixin):
    """Append-only record of a wallet balance change."""

    __tablename__ = "wallet_transactions"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Signed: negative for debits
    amount = Column(Integer, nullable=False)
    transaction_type = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    reference_id = Column(Uuid(as_uuid=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="transactions")

    __table_args__ = (
        CheckConstraint(
            "transaction_type IN ('bet_placed', 'bet_won', 'bet_lost')",
            name="valid_transaction_type",
        ),
    )

    def __repr__(self) -> str:
        return f"<WalletTransaction {self.transaction_type} {self.amount:+d}>"
