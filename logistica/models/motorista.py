"""
Logistica Server - Motorista Model
"""
import enum
from sqlalchemy import Column, String, DateTime, Date, Integer, Float, Text

from logistica.database import Base
from .base import utcnow, iso


class MotoristaStatus(str, enum.Enum):
    ATIVO = "ativo"
    INATIVO = "inativo"
    FERIAS = "ferias"


class TipoMotorista(str, enum.Enum):
    """Vínculo empregatício"""
    PROPRIO = "proprio"
    TERCEIRIZADO = "terceirizado"
    AGREGADO = "agregado"


# Tipos que precisam de um veículo vinculado
TIPOS_COM_VEICULO = frozenset({
    TipoMotorista.TERCEIRIZADO.value,
    TipoMotorista.AGREGADO.value,
})


class TipoPagamento(str, enum.Enum):
    PIX = "pix"
    TRANSFERENCIA_BANCARIA = "transferencia_bancaria"


class Motorista(Base):
    """Modelo de Motorista"""
    __tablename__ = "motoristas"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Código legível (MOT-2026-001)
    codigo_motorista = Column(String(40), unique=True, index=True)

    # Dados pessoais
    nome = Column(String(255), nullable=False, index=True)
    documento = Column(String(14), unique=True, index=True)  # CPF/CNPJ só dígitos
    rg = Column(String(20))
    data_nascimento = Column(Date)
    telefone = Column(String(20))
    email = Column(String(255))
    endereco = Column(Text)

    # Habilitação
    cnh = Column(String(20))
    cnh_validade = Column(Date)
    cnh_categoria = Column(String(5))

    # Vínculo
    status = Column(String(20), default=MotoristaStatus.ATIVO.value, index=True)
    tipo = Column(String(20), nullable=False)
    data_admissao = Column(Date)
    data_desligamento = Column(Date)

    # Pagamento
    tipo_pagamento = Column(String(30))
    chave_pix_tipo = Column(String(20))
    chave_pix = Column(String(255))
    banco = Column(String(100))
    agencia = Column(String(20))
    conta = Column(String(30))
    tipo_conta = Column(String(20))

    # Acumulados
    receita_gerada = Column(Float, default=0)
    viagens_realizadas = Column(Integer, default=0)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "codigo_motorista": self.codigo_motorista,
            "nome": self.nome,
            "documento": self.documento,
            "rg": self.rg,
            "data_nascimento": iso(self.data_nascimento),
            "telefone": self.telefone,
            "email": self.email,
            "endereco": self.endereco,
            "cnh": self.cnh,
            "cnh_validade": iso(self.cnh_validade),
            "cnh_categoria": self.cnh_categoria,
            "status": self.status,
            "tipo": self.tipo,
            "data_admissao": iso(self.data_admissao),
            "data_desligamento": iso(self.data_desligamento),
            "tipo_pagamento": self.tipo_pagamento,
            "chave_pix_tipo": self.chave_pix_tipo,
            "chave_pix": self.chave_pix,
            "banco": self.banco,
            "agencia": self.agencia,
            "conta": self.conta,
            "tipo_conta": self.tipo_conta,
            "receita_gerada": self.receita_gerada or 0,
            "viagens_realizadas": self.viagens_realizadas or 0,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
