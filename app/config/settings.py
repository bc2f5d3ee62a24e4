from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # publishable (anon) key; RLS scopes rows to the signed-in user

    # Storage
    avatars_bucket: str = "avatars"
    avatar_cache_control: str = "3600"

    # App
    app_name: str = "todo-supabase-client"
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
