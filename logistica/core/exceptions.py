"""
Logistica Server - Exceptions
Erros de domínio mapeados para respostas HTTP no envelope padrão
"""
from typing import Optional, List, Dict, Any


class LogisticaError(Exception):
    """Erro base da aplicação"""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.errors = errors

    def to_dict(self) -> dict:
        body = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationFailure(LogisticaError):
    """Payload viola uma regra de validação (inclusive regras entre campos)"""
    status_code = 400
    code = "VALIDATION_ERROR"

    @classmethod
    def campo(cls, field: str, message: str, code: str = "invalid") -> "ValidationFailure":
        return cls(
            "Dados inválidos",
            errors=[{"field": field, "message": message, "code": code}]
        )


class EmptyUpdateError(LogisticaError):
    status_code = 400
    code = "EMPTY_UPDATE"

    def __init__(self, message: str = "Nenhum campo valido para atualizar"):
        super().__init__(message)


class NotFoundError(LogisticaError):
    status_code = 404
    code = "NOT_FOUND"


class BusinessRuleError(LogisticaError):
    """Conflito de estado de negócio (ex: frete já pago)"""
    status_code = 400
    code = "BUSINESS_RULE"


class ConflictError(LogisticaError):
    """Violação de unicidade"""
    status_code = 409
    code = "CONFLICT"


class SchemaDriftError(LogisticaError):
    """Banco sem uma coluna esperada - operador precisa rodar a migration"""
    status_code = 400
    code = "DB_SCHEMA_OUTDATED"


MISSING_COLUMN_MARKERS = ("no such column", "unknown column", "does not exist", "has no column")


def is_missing_column(error: Exception) -> bool:
    """Identifica erros de banco causados por coluna inexistente"""
    text = str(getattr(error, "orig", None) or error).lower()
    return "column" in text and any(marker in text for marker in MISSING_COLUMN_MARKERS)
