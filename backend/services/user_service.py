"""User wallet and prediction stats service."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import User, WalletTransaction
from utils.errors import InsufficientBalanceError, NotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    Manages HackCoin wallets, the transaction ledger and prediction stats.

    Balance changes are single UPDATE statements evaluated by the database
    (balance = balance + n), never read-modify-write in Python. Methods here
    do not commit; the calling service owns the transaction.
    """

    async def create_user(
        self,
        db: AsyncSession,
        username: str,
        wallet_balance: Optional[int] = None,
    ) -> User:
        """Create a user with the starting wallet balance."""
        user = User(
            username=username,
            wallet_balance=(
                settings.initial_wallet_balance
                if wallet_balance is None
                else wallet_balance
            ),
            total_bets=0,
            total_predictions=0,
            won_bets=0,
            correct_predictions=0,
            accuracy_rate=Decimal("0.00"),
            xp=0,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"Created user {username} with {user.wallet_balance} HC")
        return user

    async def get_user(self, db: AsyncSession, user_id: UUID) -> Optional[User]:
        """Fetch single user by ID, refreshed past any identity-map copy."""
        result = await db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_balance(self, db: AsyncSession, user_id: UUID) -> int:
        """Read the current wallet balance straight from the database."""
        result = await db.execute(
            select(User.wallet_balance).where(User.id == user_id)
        )
        balance = result.scalar_one_or_none()
        if balance is None:
            raise NotFoundError(f"User {user_id} not found")
        return balance

    async def debit_for_bet(
        self,
        db: AsyncSession,
        user_id: UUID,
        amount: int,
        xp: int,
    ) -> int:
        """
        Debit a stake and bump bet counters in one conditional UPDATE.

        Matches no row when the balance cannot cover the stake, so concurrent
        placements can never drive the wallet negative. Returns the new balance.
        """
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.wallet_balance >= amount)
            .values(
                wallet_balance=User.wallet_balance - amount,
                total_bets=User.total_bets + 1,
                total_predictions=User.total_predictions + 1,
                xp=User.xp + xp,
            )
            .returning(User.wallet_balance)
            .execution_options(synchronize_session=False)
        )
        new_balance = result.scalar_one_or_none()
        if new_balance is None:
            balance = await self.get_balance(db, user_id)
            raise InsufficientBalanceError(balance, amount)
        return new_balance

    async def credit_wallet(
        self,
        db: AsyncSession,
        user_id: UUID,
        amount: int,
    ) -> int:
        """Atomically add to a wallet. Returns the new balance."""
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(wallet_balance=User.wallet_balance + amount)
            .returning(User.wallet_balance)
            .execution_options(synchronize_session=False)
        )
        new_balance = result.scalar_one_or_none()
        if new_balance is None:
            raise NotFoundError(f"User {user_id} not found")
        return new_balance

    async def record_win(self, db: AsyncSession, user_id: UUID) -> None:
        """
        Count a won bet and recompute the accuracy rate.

        accuracy_rate = won_bets / total_bets * 100, with total_bets floored
        at 1, all evaluated against the row's current values.
        """
        won_bets = User.won_bets + 1
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(
                won_bets=won_bets,
                correct_predictions=User.correct_predictions + 1,
                accuracy_rate=won_bets * 100.0 / case(
                    (User.total_bets > 0, User.total_bets), else_=1
                ),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"User {user_id} not found")

    def add_transaction(
        self,
        db: AsyncSession,
        user_id: UUID,
        amount: int,
        transaction_type: str,
        description: str,
        reference_id: Optional[UUID] = None,
    ) -> WalletTransaction:
        """Append a ledger record to the current transaction."""
        transaction = WalletTransaction(
            user_id=user_id,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
            reference_id=reference_id,
        )
        db.add(transaction)
        return transaction

    async def get_transactions(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: int = 100,
    ) -> list[WalletTransaction]:
        """Get wallet ledger for a user, newest first."""
        result = await db.execute(
            select(WalletTransaction)
            .where(WalletTransaction.user_id == user_id)
            .order_by(WalletTransaction.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


# Singleton instance
user_service = UserService()
