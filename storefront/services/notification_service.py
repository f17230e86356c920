# storefront/services/notification_service.py
import asyncio

from kombu.exceptions import OperationalError
from redis.exceptions import RedisError

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger
from storefront.utils.retry import broker_retry

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień o zamowieniach.
    Używa Celery do asynchronicznego przetwarzania.
    """

    async def notify_order_status(self, user_id: int, order_id: int, status: str) -> bool:
        """
        Wrzuca task do brokera po commicie zamowienia.
        Zamowienie juz istnieje, wiec blad brokera tylko logujemy.
        """
        try:
            await asyncio.to_thread(self._publish, user_id, order_id, status)
            return True
        except (OperationalError, RedisError) as e:
            logger.warning(f"Nie udalo sie wyslac powiadomienia dla zamowienia {order_id}: {e}")
            return False

    @staticmethod
    @broker_retry()
    def _publish(user_id: int, order_id: int, status: str):
        send_order_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    Celery task - w prawdziwym systemie wysłałby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status, "sent": True}
