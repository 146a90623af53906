# agrimart/services/notification_service.py
from agrimart.celery_worker import celery_app
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, delivered asynchronously through Celery.
    """

    @staticmethod
    def send_order_placed(user_id: int, order_id: int) -> None:
        send_order_placed_task.delay(user_id, order_id)


@celery_app.task(name="agrimart.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: int, order_id: int):
    """
    Only logs for now; the buyer-facing channel (email/WhatsApp) plugs in here.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, waiting for payment")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
