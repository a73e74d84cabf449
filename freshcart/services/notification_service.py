# freshcart/services/notification_service.py
from freshcart.celery_worker import celery_app
from freshcart.data.database import SessionLocal
from freshcart.domain.checkout import status_label
from freshcart.repos.order_repo import OrderRepo
from freshcart.repos.user_repo import UserRepo
from freshcart.services.email_client import EmailClient
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zmianie statusu zamowienia.
    Uzywa Celery do asynchronicznego przetwarzania, best effort.
    """

    @staticmethod
    def send_status_notification(user_id: str, order_id: str):
        try:
            send_status_notification_task.delay(user_id, order_id)
        except Exception as e:
            # broker niedostepny - status i tak jest juz zapisany
            logger.warning(f"Nie udalo sie zakolejkowac powiadomienia o zamowieniu {order_id}: {e}")


def render_status_email(order_id: str, status: str, customer_name: str) -> tuple[str, str]:
    label = status_label(status)
    subject = f"FreshCart Order #{order_id[:8]}: {label}"
    html = (
        f"<h1>Hi {customer_name},</h1>"
        f"<p>Your order <strong>#{order_id[:8]}</strong> is now <strong>{label}</strong>.</p>"
        "<p>Thank you for shopping with FreshCart!</p>"
    )
    return subject, html


@celery_app.task(name="freshcart.services.notification_service.send_status_notification_task")
def send_status_notification_task(user_id: str, order_id: str):
    """
    Celery task - mail o nowym statusie zamowienia.
    """
    db = SessionLocal()
    try:
        user = UserRepo(db).get_user(user_id)
        order = OrderRepo(db).get_order(order_id)
        if not user or not order:
            logger.warning(f"[NOTIFICATION] Brak uzytkownika {user_id} albo zamowienia {order_id}")
            return {"user_id": user_id, "order_id": order_id, "status": "skipped"}

        subject, html = render_status_email(order.id, order.status, user.name)
        EmailClient().send(user.email, subject, html)
        logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is {order.status}")

        return {"user_id": user_id, "order_id": order_id, "status": "sent"}
    finally:
        db.close()
