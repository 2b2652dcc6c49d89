"""User database model."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String
from sqlalchemy.orm import relationship

from database.base import Base
from models.base import TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """Bettor profile with HackCoin wallet and prediction stats."""

    __tablename__ = "users"

    username = Column(String(100), nullable=False, unique=True)

    # Wallet
    wallet_balance = Column(Integer, nullable=False, default=0)

    # Prediction stats
    total_bets = Column(Integer, nullable=False, default=0)
    total_predictions = Column(Integer, nullable=False, default=0)
    won_bets = Column(Integer, nullable=False, default=0)
    correct_predictions = Column(Integer, nullable=False, default=0)
    accuracy_rate = Column(
        Numeric(5, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    xp = Column(Integer, nullable=False, default=0)

    # Relationships
    bets = relationship("Bet", back_populates="user", lazy="raise")
    transactions = relationship(
        "WalletTransaction",
        back_populates="user",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("wallet_balance >= 0", name="wallet_balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.wallet_balance} HC)>"
