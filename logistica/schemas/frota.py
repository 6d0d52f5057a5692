"""
Logistica Server - Frota Schemas
"""
from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from logistica.models.frota import VehicleStatus, TipoVeiculo, TipoCombustivel, ProprietarioTipo
from .base import NormalizedModel, TEXTO
from .validators import validar_placa

DOCUMENTO = ("aparar", "vazio_para_nulo")


class _VeiculoNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "placa": ("aparar", "maiusculas"),
        "placa_carreta": TEXTO,
        "modelo": TEXTO,
        "tipo_veiculo": ("aparar", "maiusculas"),
        "tipo_combustivel": ("aparar", "vazio_para_nulo", "maiusculas"),
        "proprietario_tipo": ("aparar", "vazio_para_nulo", "maiusculas"),
        "renavam": DOCUMENTO,
        "renavam_carreta": DOCUMENTO,
        "chassi": TEXTO,
        "registro_antt": DOCUMENTO,
        "validade_seguro": "vazio_para_nulo",
        "validade_licenciamento": "vazio_para_nulo",
        "ultima_manutencao_data": "vazio_para_nulo",
    }

    @field_validator("placa", "placa_carreta", check_fields=False)
    @classmethod
    def validate_placa(cls, v):
        return validar_placa(v)


class VeiculoCreate(_VeiculoNormalizacao):
    placa: str
    placa_carreta: Optional[str] = None
    modelo: str = Field(..., min_length=3, max_length=100)
    ano_fabricacao: Optional[int] = Field(None, gt=0)
    tipo_veiculo: TipoVeiculo
    status: Optional[VehicleStatus] = None
    motorista_fixo_id: Optional[int] = None
    capacidade_toneladas: Optional[float] = Field(None, gt=0)
    km_atual: Optional[int] = Field(None, ge=0)
    tipo_combustivel: Optional[TipoCombustivel] = None
    renavam: Optional[str] = Field(None, max_length=20)
    renavam_carreta: Optional[str] = Field(None, max_length=20)
    chassi: Optional[str] = Field(None, max_length=30)
    registro_antt: Optional[str] = Field(None, max_length=30)
    validade_seguro: Optional[date] = None
    validade_licenciamento: Optional[date] = None
    proprietario_tipo: Optional[ProprietarioTipo] = None
    ultima_manutencao_data: Optional[date] = None
    proxima_manutencao_km: Optional[int] = Field(None, ge=0)


class VeiculoUpdate(_VeiculoNormalizacao):
    # Campos NOT NULL usam default None sem Optional: null explícito é rejeitado
    placa: str = None
    placa_carreta: Optional[str] = None
    modelo: str = Field(None, min_length=3, max_length=100)
    ano_fabricacao: Optional[int] = Field(None, gt=0)
    tipo_veiculo: TipoVeiculo = None
    status: VehicleStatus = None
    motorista_fixo_id: Optional[int] = None
    capacidade_toneladas: Optional[float] = Field(None, gt=0)
    km_atual: Optional[int] = Field(None, ge=0)
    tipo_combustivel: Optional[TipoCombustivel] = None
    renavam: Optional[str] = Field(None, max_length=20)
    renavam_carreta: Optional[str] = Field(None, max_length=20)
    chassi: Optional[str] = Field(None, max_length=30)
    registro_antt: Optional[str] = Field(None, max_length=30)
    validade_seguro: Optional[date] = None
    validade_licenciamento: Optional[date] = None
    proprietario_tipo: Optional[ProprietarioTipo] = None
    ultima_manutencao_data: Optional[date] = None
    proxima_manutencao_km: Optional[int] = Field(None, ge=0)
