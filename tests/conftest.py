import os

# settings are read at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from storefront.main import create_app
from storefront.utils import settings


def create_access_token(data, expires_minutes=60):
    """Token in the auth service format (id + userType)."""
    payload = dict(data, exp=datetime.now(timezone.utc) + timedelta(minutes=expires_minutes))
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id, role="customer"):
    token = create_access_token({"id": user_id, "userType": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def app():
    return create_app(
        database_url="sqlite+aiosqlite://",
        auto_create_tables=True,
        seed_demo_data=True,
    )


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def ada():
    return auth_headers(1)


@pytest.fixture()
def ben():
    return auth_headers(2)


@pytest.fixture()
def admin():
    return auth_headers(3, role="admin")


@pytest.fixture()
def notifications(monkeypatch):
    """Records order notifications instead of publishing them."""
    from storefront.services.notification_service import NotificationService

    sent = []

    async def fake_notify(self, user_id, order_id, status):
        sent.append((user_id, order_id, status))
        return True

    monkeypatch.setattr(NotificationService, "notify_order_status", fake_notify)
    return sent
