"""Tests for the order confirmation email."""

from decimal import Decimal

import pytest

from freshcart.data.models import ProfileModel
from freshcart.domain.checkout import PaymentMethod
from freshcart.domain.errors import AuthRequiredError, EmailDispatchError, OrderNotFoundError
from freshcart.services import pricing
from freshcart.services.confirmation_service import ConfirmationService, render_confirmation_email

from conftest import RecordingEmailClient


@pytest.fixture
def placed(order_service, user, draft, cart, apples, bread):
    cart.add_to_cart(apples, 2)
    cart.add_to_cart(bread)
    return order_service.place_order(user, draft, cart)


@pytest.fixture
def confirmations(db_session, email_client, toasts):
    return ConfirmationService(db_session, email_client, toasts)


class TestFindOrder:
    def test_by_id(self, confirmations, placed, user):
        assert confirmations.find_order(user.id, placed.order_id).id == placed.order_id

    def test_unknown_id_falls_back_to_latest(self, confirmations, placed, user):
        assert confirmations.find_order(user.id, "not-a-real-id").id == placed.order_id

    def test_missing_id_falls_back_to_latest(self, confirmations, placed, user):
        assert confirmations.find_order(user.id, None).id == placed.order_id

    def test_other_users_order_not_visible(self, confirmations, placed, admin):
        with pytest.raises(OrderNotFoundError):
            confirmations.find_order(admin.id, placed.order_id)

    def test_no_orders_at_all(self, confirmations, user):
        with pytest.raises(OrderNotFoundError):
            confirmations.find_order(user.id, None)


class TestSendConfirmation:
    def test_sends_to_user_email(self, confirmations, placed, user, email_client, toasts):
        toasts.drain()
        confirmations.send_confirmation(user, placed.order_id)

        [sent] = email_client.sent
        assert sent["to"] == "jane@example.com"
        assert sent["subject"] == f"FreshCart Order Confirmation #{placed.order_id[:8]}"
        assert [t.title for t in toasts.drain()] == ["Confirmation sent"]

    def test_name_from_profile(self, confirmations, placed, user, email_client, db_session):
        profile = db_session.get(ProfileModel, user.id)
        profile.full_name = "Janet Doe"
        db_session.commit()

        confirmations.send_confirmation(user, placed.order_id)
        assert "Janet Doe" in email_client.sent[0]["html"]

    def test_requires_user(self, confirmations, placed, email_client):
        with pytest.raises(AuthRequiredError):
            confirmations.send_confirmation(None, placed.order_id)
        assert email_client.sent == []

    def test_dispatch_failure_is_retryable(self, db_session, placed, user, toasts):
        service = ConfirmationService(db_session, RecordingEmailClient(fail=True), toasts)

        with pytest.raises(EmailDispatchError) as exc:
            service.send_confirmation(user, placed.order_id)

        assert exc.value.retryable is True

    def test_retry_after_failure(self, db_session, placed, user, toasts):
        client = RecordingEmailClient(fail=True)
        service = ConfirmationService(db_session, client, toasts)

        with pytest.raises(EmailDispatchError):
            service.send_confirmation(user, placed.order_id)

        client.fail = False
        service.send_confirmation(user, placed.order_id)
        assert len(client.sent) == 1


class TestRenderEmail:
    def test_lines_and_totals(self, confirmations, placed, user):
        order = confirmations.find_order(user.id, placed.order_id)

        subject, html = render_confirmation_email(order, "Jane Doe", currency="USD")

        assert placed.order_id[:8] in subject
        assert "Fresh Organic Apples" in html
        assert "Artisan Sourdough Bread" in html
        assert "$12.98" in html
        assert "$4.99" in html
        assert "$0.91" in html
        assert "$18.88" in html
        assert "Credit/Debit Card" in html
        assert "12 Market St, Springfield, IL 62701" in html

    def test_escapes_customer_name(self, confirmations, placed, user):
        order = confirmations.find_order(user.id, placed.order_id)
        _, html = render_confirmation_email(order, "<script>x</script>")
        assert "<script>" not in html

    def test_cash_status_label(self, order_service, confirmations, user, draft, cart, salmon):
        cart.add_to_cart(salmon)
        draft.payment_method = PaymentMethod.CASH
        placed = order_service.place_order(user, draft, cart)

        _, html = render_confirmation_email(confirmations.find_order(user.id, placed.order_id), "Jane")
        assert "Pending (Cash on Delivery)" in html
        assert "Cash on Delivery" in html

    def test_uses_totals_stored_with_order(self, confirmations, placed, user, monkeypatch):
        monkeypatch.setattr(pricing, "TAX_RATE", Decimal("0.20"))
        monkeypatch.setattr(pricing, "SHIPPING_FEE", Decimal("9.99"))

        _, html = render_confirmation_email(confirmations.find_order(user.id, placed.order_id), "Jane", currency="USD")

        assert "Shipping: $4.99" in html
        assert "Tax: $0.91" in html
        assert "Total: $18.88" in html
