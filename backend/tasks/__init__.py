"""Celery tasks module."""

from tasks.odds_tasks import calculate_odds
from tasks.settlement_tasks import resolve_bets

__all__ = [
    "calculate_odds",
    "resolve_bets",
]
