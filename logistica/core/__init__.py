from .config import settings, get_settings, Settings
from .exceptions import (
    LogisticaError,
    ValidationFailure,
    EmptyUpdateError,
    NotFoundError,
    BusinessRuleError,
    ConflictError,
    SchemaDriftError
)
from .sql import build_update, get_pagination

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "LogisticaError",
    "ValidationFailure",
    "EmptyUpdateError",
    "NotFoundError",
    "BusinessRuleError",
    "ConflictError",
    "SchemaDriftError",
    "build_update",
    "get_pagination"
]
