from pydantic import BaseModel
from typing import Any, Optional


class OperationResult(BaseModel):
    success: bool
    error: Optional[str] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        """Plain mapping in the {success, error?, data?} shape the UI consumes."""
        return self.model_dump(exclude_none=True)
