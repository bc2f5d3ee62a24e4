import logging
from supabase import Client
from app.core.errors import NO_DATA_RETURNED, NOT_AUTHENTICATED, TODO_NOT_FOUND, error_message
from app.core.results import OperationResult
from app.core.state import ReadonlyState, StateRegistry
from app.modules.auth.service import AuthService
from app.modules.todos.schemas import (
    DbTodo, DbTodoInsert, DbTodoUpdate, Todo, TodoStatus, TodoUpdate,
    STATUS_DONE, STATUS_IN_PROGRESS
)
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

TABLE = "todos"


def map_db_todo_to_todo(db_todo: Union[DbTodo, Dict[str, Any]]) -> Todo:
    """Convert a todos row into the application Todo"""
    if not isinstance(db_todo, DbTodo):
        db_todo = DbTodo(**db_todo)
    return Todo(
        id=db_todo.id,
        title=db_todo.title,
        description=db_todo.description,
        status=db_todo.status,
        created_at=db_todo.created_at,
        user_id=db_todo.user_id,
    )


class TodoService:
    def __init__(self, supabase: Client, states: StateRegistry, auth: AuthService):
        self.supabase = supabase
        self.auth = auth
        self._todos = states.get("todos-list", tuple)
        self._is_loading = states.get("todos-is-loading", lambda: False)
        self._error = states.get("todos-error", lambda: None)

    @property
    def todos(self) -> ReadonlyState[Tuple[Todo, ...]]:
        return self._todos.readonly()

    @property
    def is_loading(self) -> ReadonlyState[bool]:
        return self._is_loading.readonly()

    @property
    def error(self) -> ReadonlyState[Optional[str]]:
        return self._error.readonly()

    def _current_user_id(self) -> Optional[str]:
        user = self.auth.user.value
        return user.id if user else None

    def _not_authenticated(self) -> OperationResult:
        self._error.value = NOT_AUTHENTICATED
        return OperationResult.fail(NOT_AUTHENTICATED)

    def _fail(self, exc: Exception, fallback: str) -> OperationResult:
        message = error_message(exc, fallback)
        logger.error(f"{fallback}: {message}")
        self._error.value = message
        return OperationResult.fail(message)

    def fetch_todos(self) -> OperationResult:
        """Load every todo of the signed-in user, newest first"""
        user_id = self._current_user_id()
        if user_id is None:
            return self._not_authenticated()

        self._error.value = None
        self._is_loading.value = True
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()

            self._todos.value = tuple(map_db_todo_to_todo(row) for row in result.data or [])
            logger.debug(f"Fetched {len(self._todos.value)} todos for user {user_id}")
            return OperationResult.ok(self._todos.value)
        except Exception as e:
            return self._fail(e, "Erreur lors de la récupération des todos")
        finally:
            self._is_loading.value = False

    def create_todo(
        self,
        title: str,
        description: Optional[str] = None,
        status: TodoStatus = STATUS_IN_PROGRESS
    ) -> OperationResult:
        """Insert a todo owned by the signed-in user and put it first in the list"""
        user_id = self._current_user_id()
        if user_id is None:
            return self._not_authenticated()

        self._error.value = None
        try:
            payload = DbTodoInsert(
                title=title,
                description=description,
                status=status,
                user_id=user_id,
            ).model_dump(exclude_unset=True)

            result = self.supabase.table(TABLE).insert(payload).execute()

            if not result.data:
                return OperationResult.fail(NO_DATA_RETURNED)

            todo = map_db_todo_to_todo(result.data[0])
            self._todos.value = (todo, *self._todos.value)
            return OperationResult.ok(todo)
        except Exception as e:
            return self._fail(e, "Erreur lors de la création de la todo")

    def update_todo(self, todo_id: int, updates: TodoUpdate) -> OperationResult:
        """Send only the fields set on ``updates``; replace the local entry with the stored row"""
        user_id = self._current_user_id()
        if user_id is None:
            return self._not_authenticated()

        self._error.value = None
        try:
            update_data = DbTodoUpdate(**updates.model_dump(exclude_unset=True))\
                .model_dump(exclude_unset=True)

            result = self.supabase.table(TABLE)\
                .update(update_data)\
                .eq("id", todo_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                return OperationResult.fail(NO_DATA_RETURNED)

            updated_todo = map_db_todo_to_todo(result.data[0])
            self._todos.value = tuple(
                updated_todo if t.id == todo_id else t for t in self._todos.value
            )
            return OperationResult.ok(updated_todo)
        except Exception as e:
            return self._fail(e, "Erreur lors de la mise à jour de la todo")

    def delete_todo(self, todo_id: int) -> OperationResult:
        user_id = self._current_user_id()
        if user_id is None:
            return self._not_authenticated()

        self._error.value = None
        try:
            self.supabase.table(TABLE)\
                .delete()\
                .eq("id", todo_id)\
                .eq("user_id", user_id)\
                .execute()

            self._todos.value = tuple(t for t in self._todos.value if t.id != todo_id)
            return OperationResult.ok()
        except Exception as e:
            return self._fail(e, "Erreur lors de la suppression de la todo")

    def toggle_todo_status(self, todo_id: int) -> OperationResult:
        todo = next((t for t in self._todos.value if t.id == todo_id), None)
        if todo is None:
            self._error.value = TODO_NOT_FOUND
            return OperationResult.fail(TODO_NOT_FOUND)

        new_status = STATUS_DONE if todo.status == STATUS_IN_PROGRESS else STATUS_IN_PROGRESS
        return self.update_todo(todo_id, TodoUpdate(status=new_status))

    def clear_todos(self) -> None:
        """Reset the todo state, e.g. after sign-out"""
        self._todos.value = ()
        self._error.value = None
