"""Tests for the HTTP clients, the checkout lock and the redis snapshot storage."""

import json

import pytest
import requests

from freshcart.domain.errors import CatalogUnavailableError, EmailDispatchError, ProductNotFoundError
from freshcart.services.email_client import EmailClient
from freshcart.services.lock_service import LocalLockService, LockService
from freshcart.services.notification_service import render_status_email, send_status_notification_task
from freshcart.services.product_client import ProductClient
from freshcart.services.snapshot_storage import (
    InMemorySnapshotStorage,
    RedisSnapshotStorage,
    create_snapshot_storage,
)
from freshcart.utils.settings import HTTP_RETRY_ATTEMPTS

from conftest import FakeRedis


def make_response(status_code, payload=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "http://test.local"
    resp._content = json.dumps(payload).encode() if payload is not None else b""
    return resp


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


class TestEmailClient:
    def test_posts_message(self):
        session = FakeSession(make_response(200, {"id": "abc"}))
        client = EmailClient(api_url="http://mail/emails", api_key="key", sender="shop@example.com", session=session)

        assert client.send("jane@example.com", "Hi", "<p>hi</p>") == {"id": "abc"}

        [(method, url, kwargs)] = session.calls
        assert (method, url) == ("POST", "http://mail/emails")
        assert kwargs["json"]["to"] == ["jane@example.com"]
        assert kwargs["json"]["from"] == "shop@example.com"
        assert kwargs["headers"]["Authorization"] == "Bearer key"

    def test_missing_key(self):
        session = FakeSession()
        client = EmailClient(api_key="", session=session)

        with pytest.raises(EmailDispatchError) as exc:
            client.send("jane@example.com", "Hi", "<p>hi</p>")

        assert exc.value.reason == "email service not configured"
        assert session.calls == []

    def test_error_status(self):
        session = FakeSession(make_response(503))
        client = EmailClient(api_key="key", session=session)

        with pytest.raises(EmailDispatchError):
            client.send("jane@example.com", "Hi", "<p>hi</p>")

    def test_connection_error_not_retried(self):
        session = FakeSession(requests.ConnectionError("refused"))
        client = EmailClient(api_key="key", session=session)

        with pytest.raises(EmailDispatchError):
            client.send("jane@example.com", "Hi", "<p>hi</p>")
        assert len(session.calls) == 1


class TestProductClient:
    def test_fetch_product(self):
        session = FakeSession(make_response(200, {"id": "1", "name": "Apples", "price": "3.99", "stock": 5}))
        client = ProductClient(base_url="http://catalog/", session=session)

        product = client.fetch_product("1")

        assert product.name == "Apples"
        assert str(product.price) == "3.99"
        assert session.calls[0][1] == "http://catalog/products/1"

    def test_not_found_is_not_retried(self):
        session = FakeSession(make_response(404, {"detail": "Product not found"}))
        client = ProductClient(base_url="http://catalog", session=session)

        with pytest.raises(ProductNotFoundError):
            client.fetch_product("999")
        assert len(session.calls) == 1

    def test_network_error_retried(self):
        session = FakeSession(
            requests.ConnectionError("reset"),
            make_response(200, [{"id": "3", "name": "Spinach", "price": "2.99"}]),
        )
        client = ProductClient(base_url="http://catalog", session=session)

        products = client.list_products(category="Vegetables")

        assert [p.id for p in products] == ["3"]
        assert len(session.calls) == 2
        assert session.calls[1][2]["params"] == {"category": "Vegetables"}

    def test_server_error_is_catalog_unavailable(self):
        session = FakeSession(make_response(503))
        client = ProductClient(base_url="http://catalog", session=session)

        with pytest.raises(CatalogUnavailableError) as exc:
            client.fetch_product("1")

        assert exc.value.retryable is True
        assert len(session.calls) == 1

    def test_gives_up_after_configured_attempts(self):
        session = FakeSession(*[requests.ConnectionError("down") for _ in range(HTTP_RETRY_ATTEMPTS)])
        client = ProductClient(base_url="http://catalog", session=session)

        with pytest.raises(CatalogUnavailableError):
            client.list_products()

        assert len(session.calls) == HTTP_RETRY_ATTEMPTS


class TestLockService:
    def test_second_acquire_fails(self):
        locks = LockService(client=FakeRedis())
        assert locks.acquire_checkout_lock("u1", "a")
        assert not locks.acquire_checkout_lock("u1", "b")
        assert locks.acquire_checkout_lock("u2", "c")

    def test_only_owner_releases(self):
        locks = LockService(client=FakeRedis())
        locks.acquire_checkout_lock("u1", "a")

        assert not locks.release_checkout_lock("u1", "b")
        assert locks.release_checkout_lock("u1", "a")
        assert locks.acquire_checkout_lock("u1", "b")


class TestLocalLockService:
    def test_same_rules_as_redis_lock(self):
        locks = LocalLockService()
        assert locks.acquire_checkout_lock("u1", "a")
        assert not locks.acquire_checkout_lock("u1", "b")
        assert not locks.release_checkout_lock("u1", "b")
        assert locks.release_checkout_lock("u1", "a")

    def test_expired_lock_can_be_taken(self):
        locks = LocalLockService()
        locks.acquire_checkout_lock("u1", "a", ttl=-1)
        assert locks.acquire_checkout_lock("u1", "b")


class TestSnapshotStorage:
    def test_redis_storage(self):
        storage = RedisSnapshotStorage(client=FakeRedis())
        storage.set("k", "v")
        assert storage.get("k") == "v"
        storage.delete("k")
        assert storage.get("k") is None

    def test_factory(self):
        assert isinstance(create_snapshot_storage("memory"), InMemorySnapshotStorage)
        with pytest.raises(ValueError):
            create_snapshot_storage("sqlite")


class TestStatusNotification:
    def test_render(self):
        subject, html = render_status_email("abcdef1234", "pending_cod", "Jane")
        assert subject == "FreshCart Order #abcdef12: Pending (Cash on Delivery)"
        assert "Hi Jane" in html

    def test_task_sends_email(self, order_service, user, draft, cart, apples, monkeypatch):
        cart.add_to_cart(apples)
        placed = order_service.place_order(user, draft, cart)

        sent = []
        monkeypatch.setattr(EmailClient, "send", lambda self, to, subject, html: sent.append((to, subject)))

        result = send_status_notification_task.run(user.id, placed.order_id)

        assert result["status"] == "sent"
        assert sent == [("jane@example.com", f"FreshCart Order #{placed.order_id[:8]}: Pending")]

    def test_task_skips_unknown_order(self, db_session, user):
        result = send_status_notification_task.run(user.id, "missing")
        assert result["status"] == "skipped"
