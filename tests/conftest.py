"""Pytest fixtures for freshcart tests."""

import os

# przed importem freshcart - settings czytaja env przy imporcie
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SNAPSHOT_BACKEND", "memory")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")
os.environ.setdefault("EMAIL_API_KEY", "")
os.environ.setdefault("ALLOW_ADMIN_SIGNUP", "1")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from freshcart.api import create_app
from freshcart.api import deps
from freshcart.data.database import Base, SessionLocal, engine, get_db
from freshcart.data.models import UserModel
from freshcart.domain.checkout import CheckoutDraft, PaymentMethod
from freshcart.domain.errors import EmailDispatchError, ProductNotFoundError
from freshcart.domain.schemas import Product, UserRead
from freshcart.product_service.catalog import PRODUCTS
from freshcart.services.cart_store import CartStore
from freshcart.services.email_client import EmailClient
from freshcart.services.lock_service import LocalLockService, LockService
from freshcart.services.order_service import OrderService
from freshcart.services.snapshot_storage import InMemorySnapshotStorage
from freshcart.services.toasts import ToastFeed


class FakeRedis:
    """Minimal redis client for the lock: SET NX EX and the compare-and-delete script."""

    def __init__(self):
        self.data = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.data:
            return None
        self.data[name] = value
        return True

    def get(self, name):
        return self.data.get(name)

    def delete(self, name):
        return 1 if self.data.pop(name, None) is not None else 0

    def eval(self, script, numkeys, key, token):
        if self.data.get(key) == token:
            del self.data[key]
            return 1
        return 0


class RecordingEmailClient(EmailClient):
    def __init__(self, fail: bool = False):
        super().__init__(api_key="test-key")
        self.fail = fail
        self.sent = []

    def send(self, to, subject, html):
        if self.fail:
            raise EmailDispatchError("503 Service Unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})
        return {"id": "email-1"}


class RecordingNotificationService:
    def __init__(self):
        self.calls = []

    def send_status_notification(self, user_id, order_id):
        self.calls.append((user_id, order_id))


class CatalogProductClient:
    """Serves products from the static catalog without HTTP."""

    def fetch_product(self, product_id):
        data = PRODUCTS.get(product_id)
        if data is None:
            raise ProductNotFoundError(product_id)
        return Product.model_validate(data)


def make_product(id="p1", name="Product", price="1.00", **kwargs):
    return Product(id=id, name=name, price=Decimal(price), **kwargs)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return InMemorySnapshotStorage()


@pytest.fixture
def toasts():
    return ToastFeed()


@pytest.fixture
def cart(storage, toasts):
    return CartStore(storage, "client-1", toasts)


@pytest.fixture
def apples():
    return make_product("1", "Fresh Organic Apples", "3.99", stock=50, image="apples.jpg")


@pytest.fixture
def bread():
    return make_product("4", "Artisan Sourdough Bread", "5.00", stock=20, image="bread.jpg")


@pytest.fixture
def salmon():
    return make_product("6", "Wild-Caught Salmon Fillets", "12.99", stock=15)


@pytest.fixture
def lock_service():
    return LockService(client=FakeRedis())


@pytest.fixture
def user(db_session):
    model = UserModel(id="user-1", name="Jane Doe", email="jane@example.com", is_admin=False)
    db_session.add(model)
    db_session.commit()
    return UserRead.model_validate(model)


@pytest.fixture
def admin(db_session):
    model = UserModel(id="admin-1", name="Store Admin", email="admin@example.com", is_admin=True)
    db_session.add(model)
    db_session.commit()
    return UserRead.model_validate(model)


@pytest.fixture
def notifications():
    return RecordingNotificationService()


@pytest.fixture
def order_service(db_session, lock_service, toasts, notifications):
    return OrderService(db_session, lock_service, toasts, notification_service=notifications)


@pytest.fixture
def draft():
    return CheckoutDraft(
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        phone="555-0100",
        street="12 Market St",
        city="Springfield",
        state="IL",
        postal_code="62701",
        payment_method=PaymentMethod.CARD,
    )


@pytest.fixture
def email_client():
    return RecordingEmailClient()


@pytest.fixture
def api_client(db_session, storage, email_client):
    """Test client with the database, storage and collaborators swapped for local ones."""
    app = create_app()

    def override_db():
        yield db_session

    lock = LocalLockService()
    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[deps.get_storage] = lambda: storage
    app.dependency_overrides[deps.get_lock_service] = lambda: lock
    app.dependency_overrides[deps.get_product_client] = lambda: CatalogProductClient()
    app.dependency_overrides[deps.get_email_client] = lambda: email_client

    with TestClient(app) as client:
        yield client
