"""
Core Celery tasks for VetConnect.

These are background tasks that should NOT block API requests.
"""
from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def send_sms_async(self, phone_number: str, message: str):
    """
    Send SMS asynchronously via Celery.

    Provider failures come back as a failed result and are retried with
    exponential backoff.

    Usage:
        from core.tasks import send_sms_async
        send_sms_async.delay('0788123456', 'Your message here')
    """
    from core.sms_service import build_sms_gateway

    result = build_sms_gateway().send(phone_number, message)
    if result.success:
        logger.info(f"SMS sent to {result.phone}: {result.status}")
        return result.as_dict()

    logger.error(f"SMS sending failed for {result.phone}: {result.error}")
    if self.request.retries >= self.max_retries:
        return result.as_dict()
    raise self.retry(
        exc=RuntimeError(result.error),
        countdown=60 * (2 ** self.request.retries)
    )
