"""Services module."""

from services.bet_service import bet_service
from services.github_service import GitHubService
from services.hackathon_service import hackathon_service
from services.odds_service import odds_service
from services.settlement_service import (
    calculate_settlement,
    settlement_service,
)
from services.user_service import user_service

__all__ = [
    "bet_service",
    "GitHubService",
    "hackathon_service",
    "odds_service",
    "calculate_settlement",
    "settlement_service",
    "user_service",
]
