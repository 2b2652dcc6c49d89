"""Database models module."""

from models.bet import BET_STATUSES, Bet
from models.betting_odds import BettingOdds
from models.hackathon import Hackathon, HackathonPrize, HackathonTeam
from models.user import User
from models.wallet_transaction import TRANSACTION_TYPES, WalletTransaction

__all__ = [
    "BET_STATUSES",
    "Bet",
    "BettingOdds",
    "Hackathon",
    "HackathonPrize",
    "HackathonTeam",
    "TRANSACTION_TYPES",
    "User",
    "WalletTransaction",
]
