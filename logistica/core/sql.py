"""
Logistica Server - SQL helpers
Montagem de updates parciais (whitelist) e paginação
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import settings


def build_update(
    data: Dict[str, Any],
    allowed_fields: Sequence[str]
) -> Tuple[List[str], List[Any]]:
    """
    Projeta um change-set esparso sobre a whitelist de colunas mutáveis.

    Percorre allowed_fields na ordem declarada e inclui o campo quando a chave
    está presente em data (None é um valor válido). Chaves fora da whitelist
    são descartadas. Lista vazia significa que nada reconhecido foi enviado -
    quem chama deve responder 400.

    Returns:
        (fields, values) com correspondência posicional
    """
    fields: List[str] = []
    values: List[Any] = []

    for field in allowed_fields:
        if field in data:
            fields.append(field)
            values.append(data[field])

    return fields, values


def as_assignments(fields: List[str], values: List[Any]) -> Dict[str, Any]:
    """Converte o par (fields, values) para o dict aceito por update().values()"""
    return dict(zip(fields, values))


# Maior OFFSET aceito pelos bancos (BIGINT com sinal)
MAX_OFFSET = 2 ** 63 - 1


def _positive_int(raw: Any) -> Optional[int]:
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return None
    return value if value > 0 else None


def get_pagination(
    page: Any = None,
    limit: Any = None,
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None
) -> Tuple[int, int, int]:
    """Retorna (page, limit, offset); valores inválidos caem no padrão"""
    default_limit = default_limit or settings.PAGE_DEFAULT_LIMIT
    max_limit = max_limit or settings.PAGE_MAX_LIMIT

    page = _positive_int(page) or 1
    limit = _positive_int(limit)
    limit = min(limit, max_limit) if limit else default_limit

    # Página cujo offset não cabe no banco é tratada como inválida
    if (page - 1) * limit > MAX_OFFSET:
        page = 1

    return page, limit, (page - 1) * limit



def page_meta(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": max(1, math.ceil(total / limit)),
    }
