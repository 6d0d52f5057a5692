"""
Logistica Server - Schema base
Normalização declarativa de payloads e envelope de resposta
"""
import re
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator


def vazio_para_nulo(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def somente_digitos(value: Any) -> Any:
    if isinstance(value, str):
        return re.sub(r"\D", "", value)
    return value


def maiusculas(value: Any) -> Any:
    if isinstance(value, str):
        return value.upper()
    return value


def aparar(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


REGRAS: Dict[str, Callable[[Any], Any]] = {
    "vazio_para_nulo": vazio_para_nulo,
    "somente_digitos": somente_digitos,
    "maiusculas": maiusculas,
    "aparar": aparar,
}

# Combinação mais comum para campos de texto livre
TEXTO = ("aparar", "vazio_para_nulo", "maiusculas")

Regra = Union[str, Tuple[str, ...]]


def normalizar(data: Dict[str, Any], regras: Dict[str, Regra]) -> Dict[str, Any]:
    """
    Aplica as regras de normalização campo a campo.

    Só toca chaves presentes no payload; ausência continua sendo ausência
    (importante para updates parciais).
    """
    saida = dict(data)
    for campo, regra in regras.items():
        if campo not in saida:
            continue
        nomes = (regra,) if isinstance(regra, str) else regra
        valor = saida[campo]
        for nome in nomes:
            valor = REGRAS[nome](valor)
        saida[campo] = valor
    return saida


class NormalizedModel(BaseModel):
    """
    Base dos payloads de entrada.

    Subclasses declaram __normalizacao__ = {campo: regra | (regras...)};
    a normalização roda antes da validação dos campos.
    """
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    __normalizacao__: ClassVar[Dict[str, Regra]] = {}

    @model_validator(mode="before")
    @classmethod
    def _aplicar_normalizacao(cls, data: Any) -> Any:
        if isinstance(data, dict) and cls.__normalizacao__:
            return normalizar(data, cls.__normalizacao__)
        return data

    def alteracoes(self) -> Dict[str, Any]:
        """Somente os campos enviados pelo cliente (base para updates parciais)"""
        return self.model_dump(exclude_unset=True)


def resposta(
    message: str,
    data: Any = None,
    meta: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Envelope padrão de sucesso"""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body
