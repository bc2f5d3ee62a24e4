import logging
from typing import Optional

from supabase import Client

from app.config import settings
from app.core.context import AppContext
from app.core.dependencies import create_context

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )


def startup(supabase: Optional[Client] = None) -> AppContext:
    """Configure logging, build the context and restore any existing session."""
    configure_logging()
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    context = create_context(supabase)
    result = context.auth.get_session()
    if result.success and context.auth.is_authenticated.value:
        logger.info("Restored session for user %s", context.auth.user.value.id)
    return context


def shutdown(context: AppContext) -> None:
    context.todos.clear_todos()
    context.reset()
    logger.info("Application shutdown")
