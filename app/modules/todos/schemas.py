from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Literal, Optional
from datetime import datetime

TodoStatus = Literal["en_cours", "termine"]

STATUS_IN_PROGRESS: TodoStatus = "en_cours"
STATUS_DONE: TodoStatus = "termine"

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class DbTodo(BaseModel):
    """Row of the todos table as returned by PostgREST."""
    id: int
    created_at: str
    title: str
    description: Optional[str] = None
    status: TodoStatus
    user_id: str


class DbTodoInsert(BaseModel):
    id: Optional[int] = None
    created_at: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: Optional[TodoStatus] = None
    user_id: str


class DbTodoUpdate(BaseModel):
    id: Optional[int] = None
    created_at: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TodoStatus] = None
    user_id: Optional[str] = None


class Todo(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TodoStatus
    created_at: datetime
    user_id: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TodoUpdate(BaseModel):
    """Fields to change on a todo; only explicitly set fields are sent."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TodoStatus] = None


class TodoInput(BaseModel):
    """Create/edit form for a todo."""
    title: str
    description: Optional[str] = None
    status: TodoStatus

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Le titre est requis")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Le titre ne peut pas dépasser {TITLE_MAX_LENGTH} caractères")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"La description ne peut pas dépasser {DESCRIPTION_MAX_LENGTH} caractères"
            )
        return v
