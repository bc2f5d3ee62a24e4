"""
Explicit application context.

Owns the Supabase client and the keyed state slots shared between services, so
consumers receive everything they need from one object instead of looking up
process-wide globals. Services created from the same context share state.
"""

import logging
from supabase import Client
from app.core.state import State, StateRegistry
from app.modules.auth.service import AuthService
from app.modules.todos.service import TodoService
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AppContext:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.states = StateRegistry()
        self._auth: Optional[AuthService] = None
        self._todos: Optional[TodoService] = None

    def state(self, key: str, factory: Callable[[], T]) -> State[T]:
        return self.states.get(key, factory)

    @property
    def auth(self) -> AuthService:
        if self._auth is None:
            self._auth = AuthService(self.supabase, self.states)
        return self._auth

    @property
    def todos(self) -> TodoService:
        if self._todos is None:
            self._todos = TodoService(self.supabase, self.states, self.auth)
        return self._todos

    def reset(self) -> None:
        """Return all state to its initial values.

        Services and their subscriptions stay attached to the same State objects,
        so auth listeners registered earlier keep updating this context.
        """
        self.states.reset()
        logger.debug("Application context reset")
