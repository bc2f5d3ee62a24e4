from pydantic import BaseModel, ValidationError
from typing import Dict, Optional, Tuple, Type, TypeVar

M = TypeVar("M", bound=BaseModel)

FormErrors = Dict[str, str]


def form_errors(exc: ValidationError) -> FormErrors:
    """Flatten a ValidationError into {field: first message} for form display."""
    errors: FormErrors = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        if field in errors:
            continue
        cause = (err.get("ctx") or {}).get("error")
        errors[field] = str(cause) if cause is not None else err["msg"]
    return errors


def validate_form(model: Type[M], data: dict) -> Tuple[Optional[M], FormErrors]:
    """Validate raw form data; returns (model, {}) or (None, errors)."""
    try:
        return model.model_validate(data), {}
    except ValidationError as e:
        return None, form_errors(e)
