"""
Pytest configuration.

Adds the project root to the Python path so that tests can import the
api, domain, repositories and services packages, and provides shared
fixtures for a mocked Supabase store.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.settings import Settings  # noqa: E402
from repositories.client import Store  # noqa: E402

USER_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def admin():
    """Mocked supabase-py client used for data queries."""
    return MagicMock(name="admin")


@pytest.fixture
def store(admin):
    return Store(admin=admin, sessions=MagicMock(name="sessions"))


@pytest.fixture
def make_user():
    """Factory for objects shaped like supabase-py `User`."""

    def _make(user_id=USER_ID, **overrides):
        fields = {
            "id": user_id,
            "email": "jane@example.com",
            "phone": "",
            "role": "authenticated",
            "user_metadata": {},
            "created_at": "2025-01-01T00:00:00Z",
            "updated_at": "2025-01-02T00:00:00Z",
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    return _make


@pytest.fixture
def settings():
    return Settings(supabase_url=None, supabase_key=None, frontend_url="http://localhost:3000")
