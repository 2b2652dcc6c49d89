"""Odds-related Celery tasks."""

import asyncio
import logging
from uuid import UUID

from celery_config import celery_app
from database.session import dispose_engine, get_db_session

logger = logging.getLogger(__name__)


@celery_app.task(
    name="tasks.calculate_odds",
    queue="odds",
    bind=True,
    max_retries=3,
    default_retry_delay=120,
)
def calculate_odds(self, hackathon_id: str):
    """Recalculates betting odds for a hackathon."""
    from services.odds_service import odds_service

    async def _calculate():
        try:
            async with get_db_session() as db:
                report = await odds_service.calculate_odds(db, UUID(hackathon_id))
        finally:
            await dispose_engine()

        return {
            "hackathon_id": hackathon_id,
            "calculated": report.calculated,
            "prizes": report.prizes,
            "teams": report.teams,
        }

    try:
        return asyncio.run(_calculate())
    except ValueError as e:
        logger.warning(f"Odds calculation skipped for {hackathon_id}: {e}")
        return {"hackathon_id": hackathon_id, "skipped": True, "reason": str(e)}
    except Exception as e:
        logger.error(f"Odds calculation failed for {hackathon_id}: {e}")
        raise self.retry(exc=e)
