"""
Helpers that wire services to an application context
"""

from app.core.context import AppContext
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.todos.service import TodoService
from supabase import Client
from typing import Optional


def create_context(supabase: Optional[Client] = None) -> AppContext:
    """Build a context around the given client, or the configured shared client."""
    return AppContext(supabase if supabase is not None else get_supabase())


def get_auth_service(context: AppContext) -> AuthService:
    return context.auth


def get_todo_service(context: AppContext) -> TodoService:
    return context.todos
