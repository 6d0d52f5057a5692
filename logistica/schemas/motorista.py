"""
Logistica Server - Motorista Schemas
"""
from datetime import date
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from logistica.models.motorista import MotoristaStatus, TipoMotorista, TipoPagamento
from .base import NormalizedModel, TEXTO
from .validators import validar_documento

ChavePixTipo = Literal["cpf", "email", "telefone", "aleatoria", "cnpj"]
TipoConta = Literal["corrente", "poupanca"]

OPCIONAL = ("aparar", "vazio_para_nulo")


class _MotoristaNormalizacao(NormalizedModel):
    __normalizacao__ = {
        "nome": TEXTO,
        "documento": ("vazio_para_nulo", "somente_digitos"),
        "rg": OPCIONAL,
        "telefone": ("vazio_para_nulo", "somente_digitos"),
        "email": OPCIONAL,
        "endereco": TEXTO,
        "cnh": ("vazio_para_nulo", "somente_digitos"),
        "cnh_categoria": TEXTO,
        "cnh_validade": "vazio_para_nulo",
        "data_nascimento": "vazio_para_nulo",
        "data_admissao": "vazio_para_nulo",
        "data_desligamento": "vazio_para_nulo",
        "chave_pix_tipo": "vazio_para_nulo",
        "chave_pix": OPCIONAL,
        "banco": TEXTO,
        "agencia": OPCIONAL,
        "conta": OPCIONAL,
        "tipo_conta": "vazio_para_nulo",
        "veiculo_id": "vazio_para_nulo",
    }

    @field_validator("documento", check_fields=False)
    @classmethod
    def validate_documento(cls, v):
        return validar_documento(v)

    @field_validator("telefone", check_fields=False)
    @classmethod
    def validate_telefone(cls, v):
        if v is not None and not 10 <= len(v) <= 11:
            raise ValueError("Telefone deve ter 10 ou 11 dígitos")
        return v


class MotoristaCreate(_MotoristaNormalizacao):
    nome: str = Field(..., min_length=3, max_length=255)
    documento: Optional[str] = None
    rg: Optional[str] = Field(None, max_length=20)
    data_nascimento: Optional[date] = None
    telefone: str
    email: Optional[EmailStr] = None
    endereco: Optional[str] = None
    cnh: Optional[str] = Field(None, min_length=5, max_length=20)
    cnh_validade: Optional[date] = None
    cnh_categoria: Optional[str] = Field(None, max_length=5)
    status: MotoristaStatus = MotoristaStatus.ATIVO.value
    tipo: TipoMotorista
    data_admissao: Optional[date] = None
    data_desligamento: Optional[date] = None
    tipo_pagamento: TipoPagamento
    chave_pix_tipo: Optional[ChavePixTipo] = None
    chave_pix: Optional[str] = Field(None, max_length=255)
    banco: Optional[str] = Field(None, max_length=100)
    agencia: Optional[str] = Field(None, max_length=20)
    conta: Optional[str] = Field(None, max_length=30)
    tipo_conta: Optional[TipoConta] = None
    receita_gerada: Optional[float] = Field(None, ge=0)
    viagens_realizadas: Optional[int] = Field(None, ge=0)

    # Veículo a vincular (obrigatório para terceirizado/agregado)
    veiculo_id: Optional[int] = None


class MotoristaUpdate(_MotoristaNormalizacao):
    nome: str = Field(None, min_length=3, max_length=255)
    documento: Optional[str] = None
    rg: Optional[str] = Field(None, max_length=20)
    data_nascimento: Optional[date] = None
    telefone: Optional[str] = None
    email: Optional[EmailStr] = None
    endereco: Optional[str] = None
    cnh: Optional[str] = Field(None, min_length=5, max_length=20)
    cnh_validade: Optional[date] = None
    cnh_categoria: Optional[str] = Field(None, max_length=5)
    status: MotoristaStatus = None
    tipo: TipoMotorista = None
    data_admissao: Optional[date] = None
    data_desligamento: Optional[date] = None
    tipo_pagamento: Optional[TipoPagamento] = None
    chave_pix_tipo: Optional[ChavePixTipo] = None
    chave_pix: Optional[str] = Field(None, max_length=255)
    banco: Optional[str] = Field(None, max_length=100)
    agencia: Optional[str] = Field(None, max_length=20)
    conta: Optional[str] = Field(None, max_length=30)
    tipo_conta: Optional[TipoConta] = None
    receita_gerada: Optional[float] = Field(None, ge=0)
    viagens_realizadas: Optional[int] = Field(None, ge=0)
    veiculo_id: Optional[int] = None
