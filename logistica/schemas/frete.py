"""
Logistica Server - Frete e Custo Schemas
"""
from datetime import date
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator

from logistica.models.frete import TipoCusto
from .base import NormalizedModel, TEXTO
from .validators import normalizar_data

# data_frete também chega como dataFrete
DATA_FRETE_ALIAS = AliasChoices("data_frete", "dataFrete")

TipoCombustivelCusto = Literal["gasolina", "diesel", "etanol", "gnv"]


class _FreteNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "origem": TEXTO,
        "destino": TEXTO,
        "motorista_nome": TEXTO,
        "caminhao_placa": TEXTO,
        "ticket": ("aparar", "vazio_para_nulo"),
        "numero_nota_fiscal": ("aparar", "vazio_para_nulo"),
        "fazenda_id": "vazio_para_nulo",
        "fazenda_nome": TEXTO,
        "mercadoria": TEXTO,
        "mercadoria_id": ("aparar", "vazio_para_nulo"),
        "variedade": TEXTO,
    }

    @field_validator("data_frete", mode="before", check_fields=False)
    @classmethod
    def validate_data_frete(cls, v):
        return normalizar_data(v)


class FreteCreate(_FreteNormalizacao):
    origem: str = Field(..., min_length=3, max_length=255)
    destino: str = Field(..., min_length=3, max_length=255)
    motorista_id: int
    motorista_nome: Optional[str] = Field(None, min_length=3, max_length=255)
    caminhao_id: int
    caminhao_placa: Optional[str] = Field(None, min_length=5, max_length=10)
    ticket: Optional[str] = Field(None, pattern=r"^\d+$", max_length=50)
    numero_nota_fiscal: Optional[str] = Field(None, pattern=r"^[\d.]+$", max_length=50)
    fazenda_id: Optional[int] = None
    fazenda_nome: Optional[str] = Field(None, max_length=255)
    mercadoria: str = Field(..., min_length=1, max_length=100)
    mercadoria_id: Optional[str] = Field(None, max_length=36)
    variedade: Optional[str] = Field(None, max_length=100)
    data_frete: date = Field(..., validation_alias=DATA_FRETE_ALIAS)
    quantidade_sacas: int = Field(..., gt=0)
    toneladas: float = Field(..., gt=0)
    valor_por_tonelada: float = Field(..., gt=0)
    receita: Optional[float] = Field(None, gt=0)
    custos: Optional[float] = Field(None, ge=0)
    resultado: Optional[float] = None


class FreteUpdate(_FreteNormalizacao):
    origem: str = Field(None, min_length=3, max_length=255)
    destino: str = Field(None, min_length=3, max_length=255)
    motorista_id: int = None
    motorista_nome: Optional[str] = Field(None, min_length=3, max_length=255)
    caminhao_id: int = None
    caminhao_placa: Optional[str] = Field(None, min_length=5, max_length=10)
    ticket: Optional[str] = Field(None, pattern=r"^\d+$", max_length=50)
    numero_nota_fiscal: Optional[str] = Field(None, pattern=r"^[\d.]+$", max_length=50)
    fazenda_id: Optional[int] = None
    fazenda_nome: Optional[str] = Field(None, max_length=255)
    mercadoria: str = Field(None, min_length=1, max_length=100)
    mercadoria_id: Optional[str] = Field(None, max_length=36)
    variedade: Optional[str] = Field(None, max_length=100)
    data_frete: date = Field(None, validation_alias=DATA_FRETE_ALIAS)
    quantidade_sacas: int = Field(None, gt=0)
    toneladas: float = Field(None, gt=0)
    valor_por_tonelada: float = Field(None, gt=0)
    receita: Optional[float] = Field(None, gt=0)
    custos: float = Field(None, ge=0)
    resultado: Optional[float] = None


class _CustoNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "tipo": ("aparar", "vazio_para_nulo"),
        "descricao": TEXTO,
        "observacoes": TEXTO,
        "motorista": TEXTO,
        "caminhao": TEXTO,
        "rota": TEXTO,
        "tipo_combustivel": ("aparar", "vazio_para_nulo"),
        "data": "vazio_para_nulo",
    }

    @field_validator("data", mode="before", check_fields=False)
    @classmethod
    def validate_data(cls, v):
        return normalizar_data(v)


class CustoCreate(_CustoNormalizacao):
    frete_id: int
    tipo: TipoCusto
    descricao: str = Field(..., min_length=3, max_length=255)
    valor: float = Field(..., gt=0)
    data: date
    comprovante: Optional[bool] = None
    observacoes: Optional[str] = None
    motorista: Optional[str] = Field(None, max_length=255)
    caminhao: Optional[str] = Field(None, max_length=50)
    rota: Optional[str] = Field(None, max_length=255)
    litros: Optional[float] = Field(None, gt=0)
    tipo_combustivel: Optional[TipoCombustivelCusto] = None


class CustoUpdate(_CustoNormalizacao):
    frete_id: int = None
    tipo: TipoCusto = None
    descricao: str = Field(None, min_length=3, max_length=255)
    valor: float = Field(None, gt=0)
    data: date = None
    comprovante: Optional[bool] = None
    observacoes: Optional[str] = None
    motorista: Optional[str] = Field(None, max_length=255)
    caminhao: Optional[str] = Field(None, max_length=50)
    rota: Optional[str] = Field(None, max_length=255)
    litros: Optional[float] = Field(None, gt=0)
    tipo_combustivel: Optional[TipoCombustivelCusto] = None
