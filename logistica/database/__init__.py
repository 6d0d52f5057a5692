from .session import Base, Database, get_db, transacao

__all__ = [
    "Base",
    "Database",
    "get_db",
    "transacao"
]
