"""
Logistica Server - Pagamento Schemas
"""
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import Field, field_validator

from logistica.models.pagamento import PagamentoStatus, MetodoPagamento
from .base import NormalizedModel, TEXTO
from .validators import normalizar_data


def _ler_fretes(v: Union[str, List[int], None]) -> Optional[List[int]]:
    """Aceita lista de ids ou string separada por vírgula"""
    if v is None:
        return v
    if isinstance(v, str):
        partes = [p.strip() for p in v.split(",") if p.strip()]
        if not all(p.isdigit() for p in partes):
            raise ValueError("fretes_incluidos deve conter ids numéricos separados por vírgula")
        return [int(p) for p in partes]
    return v


class _PagamentoNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "motorista_nome": TEXTO,
        "periodo_fretes": TEXTO,
        "fretes_incluidos": "vazio_para_nulo",
        "comprovante_nome": ("aparar", "vazio_para_nulo"),
        "comprovante_url": ("aparar", "vazio_para_nulo"),
        "comprovante_data_upload": "vazio_para_nulo",
        "observacoes": ("aparar", "vazio_para_nulo"),
    }

    @field_validator("fretes_incluidos", mode="before", check_fields=False)
    @classmethod
    def parse_fretes(cls, v):
        return _ler_fretes(v)

    @field_validator("data_pagamento", mode="before", check_fields=False)
    @classmethod
    def validate_data_pagamento(cls, v):
        return normalizar_data(v)


class PagamentoCreate(_PagamentoNormalizacao):
    motorista_id: int
    motorista_nome: Optional[str] = Field(None, min_length=3, max_length=255)
    periodo_fretes: str = Field(..., min_length=3, max_length=100)
    quantidade_fretes: Optional[int] = Field(None, ge=0)
    fretes_incluidos: Optional[List[int]] = None
    total_toneladas: float = Field(..., gt=0)
    valor_por_tonelada: float = Field(..., gt=0)
    valor_total: float = Field(..., gt=0)
    data_pagamento: date
    status: Optional[PagamentoStatus] = None
    metodo_pagamento: MetodoPagamento
    comprovante_nome: Optional[str] = Field(None, max_length=255)
    comprovante_url: Optional[str] = Field(None, max_length=500)
    comprovante_data_upload: Optional[datetime] = None
    observacoes: Optional[str] = None

    @field_validator("fretes_incluidos")
    @classmethod
    def validate_sem_repeticao(cls, v):
        if v and len(set(v)) != len(v):
            raise ValueError("fretes_incluidos contém ids repetidos")
        return v


class PagamentoUpdate(_PagamentoNormalizacao):
    # motorista_id, quantidade_fretes e fretes_incluidos são aceitos mas
    # ficam fora da whitelist: o conjunto acertado é fixo após a criação
    motorista_id: int = None
    motorista_nome: Optional[str] = Field(None, min_length=3, max_length=255)
    periodo_fretes: str = Field(None, min_length=3, max_length=100)
    quantidade_fretes: int = Field(None, gt=0)
    fretes_incluidos: List[int] = None
    total_toneladas: float = Field(None, gt=0)
    valor_por_tonelada: float = Field(None, gt=0)
    valor_total: float = Field(None, gt=0)
    data_pagamento: date = None
    status: PagamentoStatus = None
    metodo_pagamento: MetodoPagamento = None
    comprovante_nome: Optional[str] = Field(None, max_length=255)
    comprovante_url: Optional[str] = Field(None, max_length=500)
    comprovante_data_upload: Optional[datetime] = None
    observacoes: Optional[str] = None
