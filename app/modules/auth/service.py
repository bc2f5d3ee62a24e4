import logging
import mimetypes
from supabase import Client
from app.config.settings import settings
from app.core.errors import NOT_AUTHENTICATED, error_message
from app.core.results import OperationResult
from app.core.state import ReadonlyState, StateRegistry
from app.modules.auth.schemas import User
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_FULL_NAME = "Utilisateur"

AuthCallback = Callable[[bool, Optional[User]], None]

_KEEP = object()


def map_auth_user(auth_user: Any, fallback_name: str = DEFAULT_FULL_NAME, avatar_url: Any = _KEEP) -> User:
    """Build the application User from a Supabase Auth user object."""
    metadata = getattr(auth_user, "user_metadata", None) or {}
    if avatar_url is _KEEP:
        avatar_url = metadata.get("avatar_url") or None
    return User(
        id=auth_user.id,
        email=auth_user.email or "",
        full_name=metadata.get("full_name") or fallback_name,
        avatar_url=avatar_url,
        created_at=auth_user.created_at,
    )


class AuthService:
    def __init__(self, supabase: Client, states: StateRegistry):
        self.supabase = supabase
        self._user = states.get("auth-user", lambda: None)
        self._is_authenticated = states.get("auth-is-authenticated", lambda: False)
        self._is_loading = states.get("auth-is-loading", lambda: True)
        self._error = states.get("auth-error", lambda: None)

    @property
    def user(self) -> ReadonlyState[Optional[User]]:
        return self._user.readonly()

    @property
    def is_authenticated(self) -> ReadonlyState[bool]:
        return self._is_authenticated.readonly()

    @property
    def is_loading(self) -> ReadonlyState[bool]:
        return self._is_loading.readonly()

    @property
    def error(self) -> ReadonlyState[Optional[str]]:
        return self._error.readonly()

    def _set_user(self, user: Optional[User]) -> None:
        self._user.value = user
        self._is_authenticated.value = user is not None

    def _fail(self, exc: Exception, fallback: str) -> OperationResult:
        message = error_message(exc, fallback)
        logger.error(f"{fallback}: {message}")
        self._error.value = message
        return OperationResult.fail(message)

    def sign_up(self, email: str, password: str, full_name: str) -> OperationResult:
        """Register a new user with Supabase Auth"""
        self._error.value = None
        self._is_loading.value = True
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": email,
                "password": password,
                "options": {
                    "data": {"full_name": full_name}
                }
            })

            if auth_response.user:
                self._set_user(map_auth_user(auth_response.user, fallback_name=full_name))
                logger.info("User %s signed up", auth_response.user.id)

            return OperationResult.ok(auth_response)
        except Exception as e:
            return self._fail(e, "Erreur lors de l'inscription")
        finally:
            self._is_loading.value = False

    def sign_in(self, email: str, password: str) -> OperationResult:
        """Authenticate an existing user with email and password"""
        self._error.value = None
        self._is_loading.value = True
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": email,
                "password": password
            })

            if auth_response.user:
                self._set_user(map_auth_user(auth_response.user))
                logger.info("User %s signed in", auth_response.user.id)

            return OperationResult.ok(auth_response)
        except Exception as e:
            return self._fail(e, "Erreur lors de la connexion")
        finally:
            self._is_loading.value = False

    def sign_out(self) -> OperationResult:
        self._error.value = None
        self._is_loading.value = True
        try:
            self.supabase.auth.sign_out()
            self._set_user(None)
            return OperationResult.ok()
        except Exception as e:
            return self._fail(e, "Erreur lors de la déconnexion")
        finally:
            self._is_loading.value = False

    def get_session(self) -> OperationResult:
        """Load the current session, if any, into the auth state"""
        self._is_loading.value = True
        try:
            session = self.supabase.auth.get_session()
            if session and session.user:
                self._set_user(map_auth_user(session.user))
            else:
                self._set_user(None)
            return OperationResult.ok(session)
        except Exception as e:
            self._set_user(None)
            return self._fail(e, "Erreur lors de la récupération de la session")
        finally:
            self._is_loading.value = False

    def on_auth_state_change(self, callback: AuthCallback):
        """Mirror platform session changes into the auth state and notify callback.

        Returns the Supabase subscription; call its ``unsubscribe()`` to stop.
        """
        def _listener(event, session) -> None:
            logger.debug(f"Auth state change: {event}")
            if session and session.user:
                current_user = map_auth_user(session.user)
                self._set_user(current_user)
                callback(True, current_user)
            else:
                self._set_user(None)
                callback(False, None)

        return self.supabase.auth.on_auth_state_change(_listener)

    def update_profile(self, full_name: str, email: str) -> OperationResult:
        self._error.value = None
        try:
            user_response = self.supabase.auth.update_user({
                "email": email,
                "data": {"full_name": full_name}
            })
            if user_response.user:
                self._user.value = map_auth_user(user_response.user, fallback_name=full_name)
            return OperationResult.ok(user_response)
        except Exception as e:
            return self._fail(e, "Erreur lors de la mise à jour du profil")

    def update_password(self, new_password: str) -> OperationResult:
        self._error.value = None
        try:
            user_response = self.supabase.auth.update_user({"password": new_password})
            return OperationResult.ok(user_response)
        except Exception as e:
            return self._fail(e, "Erreur lors du changement de mot de passe")

    def upload_avatar(self, file_name: str, content: bytes, content_type: Optional[str] = None) -> OperationResult:
        """Store the avatar under <user_id>/avatar.<ext> and record its public URL.

        Returns the public URL as ``data`` on success.
        """
        self._error.value = None
        if self._user.value is None:
            self._error.value = NOT_AUTHENTICATED
            return OperationResult.fail(NOT_AUTHENTICATED)

        try:
            user_id = self._user.value.id
            file_ext = file_name.rsplit(".", 1)[-1]
            file_path = f"{user_id}/avatar.{file_ext}"
            bucket = self.supabase.storage.from_(settings.avatars_bucket)

            try:
                bucket.remove([file_path])
            except Exception as e:
                logger.warning(f"Could not remove previous avatar {file_path}: {e}")

            bucket.upload(
                path=file_path,
                file=content,
                file_options={
                    "cache-control": settings.avatar_cache_control,
                    "upsert": "true",
                    "content-type": content_type or mimetypes.guess_type(file_name)[0] or "application/octet-stream",
                },
            )
            avatar_url = bucket.get_public_url(file_path)

            user_response = self.supabase.auth.update_user({
                "data": {"avatar_url": avatar_url}
            })
            if user_response.user:
                self._user.value = map_auth_user(user_response.user, avatar_url=avatar_url)

            logger.info("Avatar uploaded to %s", file_path)
            return OperationResult.ok(avatar_url)
        except Exception as e:
            return self._fail(e, "Erreur lors de l'upload de l'avatar")

    def remove_avatar(self) -> OperationResult:
        self._error.value = None
        if self._user.value is None:
            self._error.value = NOT_AUTHENTICATED
            return OperationResult.fail(NOT_AUTHENTICATED)

        try:
            user_id = self._user.value.id
            bucket = self.supabase.storage.from_(settings.avatars_bucket)

            try:
                files = bucket.list(user_id)
                if files:
                    bucket.remove([f"{user_id}/{f['name']}" for f in files])
            except Exception as e:
                logger.warning(f"Could not clear avatar files for {user_id}: {e}")

            user_response = self.supabase.auth.update_user({
                "data": {"avatar_url": None}
            })
            if user_response.user:
                self._user.value = map_auth_user(user_response.user, avatar_url=None)

            return OperationResult.ok()
        except Exception as e:
            return self._fail(e, "Erreur lors de la suppression de l'avatar")
