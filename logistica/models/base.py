"""
Logistica Server - Helpers compartilhados pelos models
"""
from datetime import date, datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """UTC naive, como as colunas DateTime armazenam"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value else None
