import pytest
from pydantic import ValidationError

from app.core.validation import form_errors, validate_form
from app.modules.auth.schemas import LoginRequest, RegisterRequest
from app.modules.todos.schemas import TodoInput


def _register(**overrides) -> dict:
    data = {
        "full_name": "Alice Martin",
        "email": "alice@gmail.com",
        "password": "correct-horse",
        "confirm_password": "correct-horse",
    }
    data.update(overrides)
    return data


class TestRegisterRequest:
    def test_valid_form(self):
        form, errors = validate_form(RegisterRequest, _register())

        assert errors == {}
        assert form.full_name == "Alice Martin"

    def test_passwords_must_match(self):
        form, errors = validate_form(RegisterRequest, _register(confirm_password="other-horse"))

        assert form is None
        assert errors == {"confirm_password": "Les mots de passe ne correspondent pas"}

    def test_mismatch_not_reported_when_other_fields_fail(self):
        form, errors = validate_form(
            RegisterRequest, _register(email="nope", confirm_password="other-horse")
        )

        assert form is None
        assert errors == {"email": "Adresse email invalide"}

    @pytest.mark.parametrize(
        "overrides,field,message",
        [
            ({"full_name": "A"}, "full_name", "Le nom complet doit contenir au moins 2 caractères"),
            ({"full_name": "A" * 101}, "full_name", "Le nom complet ne peut pas dépasser 100 caractères"),
            ({"email": "not-an-email"}, "email", "Adresse email invalide"),
            ({"password": "short", "confirm_password": "short"}, "password",
             "Le mot de passe doit contenir au moins 8 caractères"),
            ({"password": "x" * 73, "confirm_password": "x" * 73}, "password",
             "Le mot de passe ne peut pas dépasser 72 caractères"),
        ],
    )
    def test_field_rules(self, overrides, field, message):
        _, errors = validate_form(RegisterRequest, _register(**overrides))

        assert errors[field] == message


class TestLoginRequest:
    def test_password_required(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest(email="alice@gmail.com", password="")

        assert form_errors(exc_info.value) == {"password": "Le mot de passe est requis"}

    def test_both_fields_reported(self):
        _, errors = validate_form(LoginRequest, {"email": "nope", "password": ""})

        assert errors == {
            "email": "Adresse email invalide",
            "password": "Le mot de passe est requis",
        }


class TestTodoInput:
    def test_valid(self):
        form, errors = validate_form(TodoInput, {"title": "Courses", "status": "en_cours"})

        assert errors == {}
        assert form.description is None

    def test_title_rules(self):
        _, empty = validate_form(TodoInput, {"title": "", "status": "termine"})
        _, long = validate_form(TodoInput, {"title": "t" * 201, "status": "termine"})

        assert empty == {"title": "Le titre est requis"}
        assert long == {"title": "Le titre ne peut pas dépasser 200 caractères"}

    def test_description_limit(self):
        _, errors = validate_form(
            TodoInput, {"title": "ok", "description": "d" * 1001, "status": "en_cours"}
        )

        assert errors == {"description": "La description ne peut pas dépasser 1000 caractères"}

    def test_unknown_status_rejected(self):
        _, errors = validate_form(TodoInput, {"title": "ok", "status": "archived"})

        assert set(errors) == {"status"}
