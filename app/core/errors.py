"""User-facing error messages and helpers for turning SDK failures into them."""

NOT_AUTHENTICATED = "Utilisateur non connecté"
TODO_NOT_FOUND = "Todo non trouvée"
NO_DATA_RETURNED = "Aucune donnée retournée"


def error_message(exc: BaseException, fallback: str) -> str:
    """Message carried by an SDK exception, or fallback when it has none."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or fallback
