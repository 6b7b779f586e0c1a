"""Shared test fixtures — patched Mongo collections, identities, HTTP client.

Every motor collection the app touches is replaced by a MagicMock whose
async methods are AsyncMocks, so no test needs a running MongoDB.
"""

from __future__ import annotations

import os

# Settings are read at import time, set them before any app module loads
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("SECRET_KEY", "test-secret-for-ci-do-not-use-in-production")

from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from main import app as fastapi_app
from schemas.employee import Identity
from utils.app_utils import get_current_identity

UTC = timezone.utc

# module attributes holding each collection, per collection
COLLECTION_TARGETS = {
    "leaves": [
        "utils.leave_utils.leaves_collection",
        "utils.approval_utils.leaves_collection",
        "utils.visibility_utils.leaves_collection",
    ],
    "employees": [
        "utils.visibility_utils.employees_collection",
        "utils.app_utils.employees_collection",
    ],
    "holidays": ["utils.leave_utils.holidays_collection"],
    "notifications": [
        "utils.notification_utils.notifications_collection",
        "routers.notifications.notifications_collection",
    ],
    "activity": ["utils.activity_utils.system_activity_collection"],
}


def make_collection() -> MagicMock:
    collection = MagicMock()
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.aggregate.return_value.to_list = AsyncMock(return_value=[])
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock(return_value=update_result(1, 1))
    collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id="x"))
    return collection


def update_result(matched: int, modified: int) -> SimpleNamespace:
    return SimpleNamespace(matched_count=matched, modified_count=modified)


def stored_leave(leave_id: str, start: date, end: date, approved=None, approver: str = "boss") -> dict:
    """A leave element as motor hands it back (naive UTC datetimes)."""
    return {
        "id": leave_id,
        "start_date": datetime.combine(start, datetime.min.time()),
        "end_date": datetime.combine(end, datetime.min.time()),
        "approved": approved,
        "approver": approver,
        "created_at": datetime(2024, 1, 1),
    }


@pytest.fixture(autouse=True)
def collections():
    """Patch every collection handle with a fresh mock for the test."""
    mocks = {name: make_collection() for name in COLLECTION_TARGETS}
    patchers = [
        patch(target, mocks[name])
        for name, targets in COLLECTION_TARGETS.items()
        for target in targets
    ]
    for patcher in patchers:
        patcher.start()
    yield SimpleNamespace(**mocks)
    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def identity() -> Identity:
    return Identity(username="jdoe", team="platform", approver_name="boss", country="in")


@pytest.fixture
def approver_identity() -> Identity:
    return Identity(username="boss", team="platform", approver_name="cto", country="in")


@pytest.fixture
async def app():
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the app, no identity override."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def login_as(app):
    """Make every request run as the given identity."""

    def _login(who: Identity) -> None:
        app.dependency_overrides[get_current_identity] = lambda: who

    return _login
