"""
Shared test fixtures.

Provides: a MagicMock Supabase client with chainable query builders, Supabase
Auth user/session doubles, and application contexts with or without a
signed-in user.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.core.context import AppContext

QUERY_METHODS = ("select", "insert", "update", "delete", "eq", "order", "limit", "single")


def make_query(data=None, error=None) -> MagicMock:
    """PostgREST builder double: every filter returns itself, execute() returns data."""
    query = MagicMock(name="query")
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = SimpleNamespace(data=data)
    return query


def make_auth_user(
    user_id: str = "u1",
    email: str = "alice@gmail.com",
    metadata: dict = None,
    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
) -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id,
        email=email,
        user_metadata=metadata if metadata is not None else {"full_name": "Alice"},
        created_at=created_at,
    )


def make_row(todo_id: int = 1, title: str = "A", status: str = "en_cours", **overrides) -> dict:
    row = {
        "id": todo_id,
        "created_at": "2024-01-01T00:00:00Z",
        "title": title,
        "description": None,
        "status": status,
        "user_id": "u1",
    }
    row.update(overrides)
    return row


class FakeApiError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@pytest.fixture
def mock_supabase() -> MagicMock:
    """Supabase client double with an empty todos table."""
    client = MagicMock(name="supabase")
    client.table.return_value = make_query(data=[])
    return client


@pytest.fixture
def context(mock_supabase: MagicMock) -> AppContext:
    return AppContext(mock_supabase)


@pytest.fixture
def signed_in_context(context: AppContext, mock_supabase: MagicMock) -> AppContext:
    """Context whose auth state holds user u1."""
    mock_supabase.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=make_auth_user(), session=SimpleNamespace(access_token="token")
    )
    result = context.auth.sign_in("alice@gmail.com", "secret-password")
    assert result.success
    mock_supabase.reset_mock()
    mock_supabase.table.return_value = make_query(data=[])
    return context
