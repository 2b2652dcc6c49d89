"""Settlement-related Celery tasks."""

import asyncio
import logging
from uuid import UUID

from celery_config import celery_app
from database.session import dispose_engine, get_db_session

logger = logging.getLogger(__name__)


@celery_app.task(
    name="tasks.resolve_bets",
    queue="settlements",
    bind=True,
    max_retries=3,
    default_retry_delay=60,
)
def resolve_bets(self, hackathon_id: str, winner_results: dict):
    """
    Settles every pending bet on a hackathon.

    winner_results maps team id -> {"position": n}. Invalid input and
    unknown hackathons are not retried; already settled bets are skipped,
    so a retry never pays twice.
    """
    from services.settlement_service import settlement_service

    async def _resolve():
        try:
            async with get_db_session() as db:
                report = await settlement_service.resolve_bets(
                    db, UUID(hackathon_id), winner_results
                )
        finally:
            # Each task runs in a fresh event loop
            await dispose_engine()

        return {
            "hackathon_id": hackathon_id,
            "success": report.success,
            "resolved_count": report.resolved_count,
            "total_payout": report.total_payout,
            "errors": [
                {"bet_id": str(e["bet_id"]), "error": e["error"]}
                for e in report.errors
            ],
        }

    try:
        return asyncio.run(_resolve())
    except ValueError as e:
        # Non-retryable error (bad input, unknown hackathon)
        logger.warning(f"Settlement skipped for {hackathon_id}: {e}")
        return {"hackathon_id": hackathon_id, "skipped": True, "reason": str(e)}
    except Exception as e:
        logger.error(f"Settlement failed for {hackathon_id}: {e}")
        raise self.retry(exc=e)
