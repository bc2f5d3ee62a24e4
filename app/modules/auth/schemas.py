from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from typing import Optional
from datetime import datetime

INVALID_EMAIL = "Adresse email invalide"


def _check_email(value: str) -> str:
    try:
        validate_email(value)
    except (PydanticCustomError, ValueError):
        raise ValueError(INVALID_EMAIL)
    return value


class User(BaseModel):
    """Authenticated user as seen by the application."""
    id: str
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Le mot de passe est requis")
        return v


class RegisterRequest(BaseModel):
    full_name: str
    email: str
    password: str
    confirm_password: str

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Le nom complet doit contenir au moins 2 caractères")
        if len(v) > 100:
            raise ValueError("Le nom complet ne peut pas dépasser 100 caractères")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Le mot de passe doit contenir au moins 8 caractères")
        if len(v) > 72:
            raise ValueError("Le mot de passe ne peut pas dépasser 72 caractères")
        return v

    @field_validator("confirm_password")
    @classmethod
    def validate_confirm_password(cls, v: str, info: ValidationInfo) -> str:
        # fields that failed validation are missing from info.data
        if not all(field in info.data for field in ("full_name", "email", "password")):
            return v
        if v != info.data["password"]:
            raise ValueError("Les mots de passe ne correspondent pas")
        return v

