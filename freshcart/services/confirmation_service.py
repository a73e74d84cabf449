# freshcart/services/confirmation_service.py
from html import escape

from sqlalchemy.orm import Session

from freshcart.data.models.order import OrderModel
from freshcart.domain.checkout import payment_label, status_label
from freshcart.domain.errors import AuthRequiredError, OrderNotFoundError
from freshcart.domain.schemas import UserRead
from freshcart.repos.order_repo import OrderRepo
from freshcart.repos.profile_repo import ProfileRepo
from freshcart.services.email_client import EmailClient
from freshcart.services.order_service import order_totals
from freshcart.services.pricing import format_money
from freshcart.services.toasts import Notifier, ToastFeed
from freshcart.utils.settings import STORE_URL
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


class ConfirmationService:
    """
    Mail z potwierdzeniem zamowienia, wolany ze strony potwierdzenia.

    Zamowienie jest juz zapisane, wiec blad wysylki nie jest krytyczny -
    uzytkownik moze ponowic.
    """

    def __init__(self, db: Session, email_client: EmailClient, notifier: Notifier | None = None):
        self.orders = OrderRepo(db)
        self.profiles = ProfileRepo(db)
        self.email_client = email_client
        self.notifier = notifier or ToastFeed()

    def find_order(self, user_id: str, order_id: str | None) -> OrderModel:
        order = None
        if order_id:
            order = self.orders.get_user_order(order_id, user_id)

        if order is None:
            #fallback: ostatnie zamowienie uzytkownika
            logger.info(f"Brak zamowienia {order_id} dla {user_id}, biore ostatnie")
            order = self.orders.get_latest_order(user_id)

        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def send_confirmation(self, user: UserRead | None, order_id: str | None) -> OrderModel:
        if user is None:
            raise AuthRequiredError()

        order = self.find_order(user.id, order_id)

        profile = self.profiles.get_profile(user.id)
        customer_name = (profile.full_name if profile else None) or user.name or "Valued Customer"

        subject, html = render_confirmation_email(order, customer_name)
        self.email_client.send(user.email, subject, html)

        logger.info(f"Order confirmation email sent for order {order.id}")
        self.notifier.notify("Confirmation sent", f"A confirmation email has been sent to {user.email}")
        return order


def render_confirmation_email(order: OrderModel, customer_name: str, currency: str | None = None) -> tuple[str, str]:
    order_number = order.id[:8]
    totals = order_totals(order)

    rows = "".join(
        "<tr>"
        f"<td>{escape(item.product_name)}</td>"
        f"<td style=\"text-align: center;\">{item.quantity}</td>"
        f"<td style=\"text-align: right;\">{format_money(item.price, currency)}</td>"
        f"<td style=\"text-align: right;\">{format_money(item.price * item.quantity, currency)}</td>"
        "</tr>"
        for item in order.items
    )

    html = f"""
<h1>Thank you for your order, {escape(customer_name)}!</h1>
<p>Order #{order_number} placed on {order.created_at:%B %d, %Y}</p>
<p><strong>Shipping to:</strong> {escape(order.shipping_address or "No address provided")}</p>
<p><strong>Payment:</strong> {payment_label(order.payment_method)}</p>
<p><strong>Status:</strong> {status_label(order.status)}</p>
<table>
  <thead><tr><th>Item</th><th>Qty</th><th>Price</th><th>Total</th></tr></thead>
  <tbody>{rows}</tbody>
</table>
<p>Subtotal: {format_money(totals.subtotal, currency)}</p>
<p>Shipping: {format_money(totals.shipping, currency)}</p>
<p>Tax: {format_money(totals.tax, currency)}</p>
<p><strong>Total: {format_money(totals.total, currency)}</strong></p>
<p><a href="{STORE_URL}">Continue shopping</a></p>
"""
    return f"FreshCart Order Confirmation #{order_number}", html
