# apps/analytics/tasks.py
import logging

from celery import shared_task

from .services import refresh_seller_totals

logger = logging.getLogger(__name__)


@shared_task
def refresh_seller_totals_task():
    """
    Nightly (Celery beat) recompute of seller sales totals and product sales counts.
    """
    logger.info("Starting seller totals refresh")
    updated = refresh_seller_totals()
    logger.info("Completed seller totals refresh")
    return updated
