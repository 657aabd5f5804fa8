import os
import tempfile

# storefront.main builds a module-level app on import; keep it off disk
os.environ.setdefault("DATABASE_URL", "memory://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="storefront-uploads-"))

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.db.store import MemoryDocumentStore
from storefront.main import create_app
from storefront.models.catalog import Catalog

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret-pass"

CATALOG_DATA = {
    "subscriptions": [
        {"id": 1, "name": "Netflix", "basePrice": 150, "duration": "monthly"},
        {"id": 2, "name": "Shahid", "basePrice": 100, "duration": "yearly"},
    ],
    "plans": {
        "1": [
            {"key": "basic", "name": "Netflix Basic", "duration": "monthly", "price": 150},
            {"key": "premium_yearly", "name": "Netflix Premium", "duration": "yearly", "price": 3200},
        ],
    },
}

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    async def send(self, text: str) -> None:
        self.messages.append(text)


class FailingNotifier:
    def __init__(self):
        self.calls = 0

    async def send(self, text: str) -> None:
        self.calls += 1
        raise RuntimeError("telegram is down")


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.model_validate(CATALOG_DATA)


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def make_settings(upload_dir, tmp_path):
    def _make(**overrides) -> Settings:
        values = dict(
            database_url="memory://",
            jwt_secret="test-secret",
            admin_username=ADMIN_USERNAME,
            admin_password=ADMIN_PASSWORD,
            admin_password_hash="",
            upload_dir=str(upload_dir),
            public_dir=str(tmp_path / "public"),
            app_base_url="https://shop.example",
            telegram_bot_token="",
            telegram_chat_id="",
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_client(store, catalog, notifier, make_settings):
    def _make(store=store, notifier=notifier, **overrides) -> TestClient:
        app = create_app(make_settings(**overrides), store=store, catalog=catalog, notifier=notifier)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


def csrf_headers(client: TestClient) -> dict[str, str]:
    token = client.get("/api/csrf-token").json()["csrfToken"]
    return {"X-CSRF-Token": token}


def login(client: TestClient, password: str = ADMIN_PASSWORD) -> dict[str, str]:
    headers = csrf_headers(client)
    r = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": password},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    return headers


@pytest.fixture
def admin_client(client) -> TestClient:
    login(client)
    return client


def order_form(**overrides) -> dict[str, str]:
    form = {
        "subscriptionId": "1",
        "planKey": "basic",
        "accountName": "ahmed.k",
        "email": "ahmed@example.com",
        "phone": "01000000000",
        "transferNumber": "TX-1001",
    }
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}


def screenshot_file(name: str = "proof.png", content: bytes = PNG_BYTES, content_type: str = "image/png"):
    return {"transferScreenshot": (name, content, content_type)}
