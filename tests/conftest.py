from types import SimpleNamespace

import mongomock
import pytest

from storefront.app import create_app
from storefront.config.settings import Config
from storefront.models.database import utcnow
from storefront.models.documents import new_user, role_for_email
from storefront.services.auth_service import AuthService
from storefront.services.product_service import ProductService


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET = "test-secret-key-for-the-storefront-suite"
    BCRYPT_ROUNDS = 4
    RATELIMIT_ENABLED = False
    MONGO_DATABASE = "storefront_test"
    STORE_NAME = "Test Store"
    LOG_LEVEL = "WARNING"


class FakeChatClient:
    """Stands in for the OpenAI client's chat.completions API."""

    def __init__(self):
        self.reply = "Try the flannel shirt."
        self.error = None
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, model, messages):
        self.calls.append({"model": model, "messages": messages})
        if self.error is not None:
            raise self.error
        if self.reply is None:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def chat_client():
    return FakeChatClient()


@pytest.fixture
def app(chat_client):
    return create_app(
        TestingConfig,
        mongo_client=mongomock.MongoClient(),
        assistant_client=chat_client,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mongo(app):
    return app.extensions["mongo_db"]


@pytest.fixture
def make_user(app, mongo):
    def _make(email, password="secret123", name="Test User", role=None):
        with app.app_context():
            user = new_user(
                name,
                email,
                AuthService.hash_password(password),
                role or role_for_email(email),
                utcnow(),
            )
            user_id = str(mongo.users.insert_one(user).inserted_id)
            token = AuthService.generate_token(user_id, user["role"])
        return user_id, {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def customer(make_user):
    return make_user("alice@test.com")


@pytest.fixture
def admin(make_user):
    return make_user("boss.admin@test.com")


@pytest.fixture
def make_product(app):
    def _make(name="Flannel Shirt", price=10.0, stock=5, category="Clothing", **extra):
        fields = {
            "name": name,
            "description": extra.get("description", f"{name} description"),
            "price": price,
            "stock": stock,
            "category": category,
            "image_url": extra.get("image_url", ""),
        }
        with app.app_context():
            return str(ProductService.create_product(fields)["_id"])
    return _make
