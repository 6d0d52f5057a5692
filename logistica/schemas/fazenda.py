"""
Logistica Server - Fazenda Schemas
"""
from datetime import date
from typing import Literal, Optional

from pydantic import AliasChoices, Field

from .base import NormalizedModel, TEXTO

Estado = Literal["SP", "MS", "MT"]


class _FazendaNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "fazenda": TEXTO,
        "estado": ("aparar", "maiusculas"),
        "proprietario": TEXTO,
        "mercadoria": TEXTO,
        "variedade": TEXTO,
        "safra": TEXTO,
        "ultimo_frete": "vazio_para_nulo",
    }


class FazendaCreate(_FazendaNormalizacao):
    fazenda: str = Field(..., min_length=3, max_length=255)
    estado: Estado
    proprietario: str = Field(..., min_length=3, max_length=255)
    mercadoria: str = Field(..., min_length=1, max_length=100)
    variedade: Optional[str] = Field(None, max_length=100)
    safra: str = Field(..., min_length=4, max_length=20)
    preco_por_tonelada: float = Field(..., gt=0)
    peso_medio_saca: Optional[float] = Field(None, gt=0)
    total_sacas_carregadas: Optional[int] = Field(None, ge=0)
    total_toneladas: Optional[float] = Field(None, ge=0)
    faturamento_total: Optional[float] = Field(None, ge=0)
    ultimo_frete: Optional[date] = None
    colheita_finalizada: Optional[bool] = None


class FazendaUpdate(_FazendaNormalizacao):
    fazenda: str = Field(None, min_length=3, max_length=255)
    estado: Estado = None
    proprietario: str = Field(None, min_length=3, max_length=255)
    mercadoria: str = Field(None, min_length=1, max_length=100)
    variedade: Optional[str] = Field(None, max_length=100)
    safra: str = Field(None, min_length=4, max_length=20)
    preco_por_tonelada: float = Field(None, gt=0)
    peso_medio_saca: Optional[float] = Field(None, gt=0)
    total_sacas_carregadas: int = Field(None, ge=0)
    total_toneladas: float = Field(None, ge=0)
    faturamento_total: float = Field(None, ge=0)
    ultimo_frete: Optional[date] = None
    colheita_finalizada: Optional[bool] = None


class IncrementoVolume(NormalizedModel):
    """Incremento manual dos totais da fazenda (nomes legados aceitos)"""
    toneladas: float = Field(..., gt=0)
    quantidade_sacas: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("quantidadeSacas", "sacas", "quantidade_sacas")
    )
    receita_total: float = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("receitaTotal", "faturamentoTotal", "faturamento", "receita_total")
    )
