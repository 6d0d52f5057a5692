"""
Logistica Server - Pagamento e Anexo Models
"""
import enum
from typing import List
from sqlalchemy import Column, String, DateTime, Date, Integer, Float, Text, ForeignKey, Index

from logistica.database import Base
from .base import utcnow, iso


class PagamentoStatus(str, enum.Enum):
    PENDENTE = "pendente"
    PROCESSANDO = "processando"
    PAGO = "pago"
    CANCELADO = "cancelado"


class MetodoPagamento(str, enum.Enum):
    PIX = "pix"
    TRANSFERENCIA_BANCARIA = "transferencia_bancaria"


def parse_fretes_incluidos(raw) -> List[int]:
    """'1, 2,3' -> [1, 2, 3]"""
    if not raw:
        return []
    return [int(part) for part in str(raw).split(",") if part.strip()]


class Pagamento(Base):
    """Pagamento a motorista cobrindo um conjunto fixo de fretes"""
    __tablename__ = "pagamentos"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Código legível (PAG-2026-001)
    codigo_pagamento = Column(String(40), unique=True, index=True)

    motorista_id = Column(Integer, ForeignKey("motoristas.id"), nullable=False, index=True)
    motorista_nome = Column(String(255))

    # Fretes acertados (ids separados por vírgula)
    periodo_fretes = Column(String(100))
    quantidade_fretes = Column(Integer, nullable=False)
    fretes_incluidos = Column(Text)

    # Valores
    total_toneladas = Column(Float, nullable=False)
    valor_por_tonelada = Column(Float, nullable=False)
    valor_total = Column(Float, nullable=False)

    data_pagamento = Column(Date, nullable=False)
    status = Column(String(20), default=PagamentoStatus.PENDENTE.value, index=True)
    metodo_pagamento = Column(String(30), nullable=False)

    # Comprovante
    comprovante_nome = Column(String(255))
    comprovante_url = Column(String(500))
    comprovante_data_upload = Column(DateTime)

    observacoes = Column(Text)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def fretes_ids(self) -> List[int]:
        return parse_fretes_incluidos(self.fretes_incluidos)

    def to_dict(self):
        return {
            "id": self.id,
            "codigo_pagamento": self.codigo_pagamento,
            "motorista_id": self.motorista_id,
            "motorista_nome": self.motorista_nome,
            "periodo_fretes": self.periodo_fretes,
            "quantidade_fretes": self.quantidade_fretes,
            "fretes_incluidos": self.fretes_incluidos,
            "total_toneladas": self.total_toneladas,
            "valor_por_tonelada": self.valor_por_tonelada,
            "valor_total": self.valor_total,
            "data_pagamento": iso(self.data_pagamento),
            "status": self.status,
            "metodo_pagamento": self.metodo_pagamento,
            "comprovante_nome": self.comprovante_nome,
            "comprovante_url": self.comprovante_url,
            "comprovante_data_upload": iso(self.comprovante_data_upload),
            "observacoes": self.observacoes,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }


class Anexo(Base):
    """Metadados de arquivo associado a qualquer entidade (tipo + id)"""
    __tablename__ = "anexos"
    __table_args__ = (
        Index("ix_anexos_entidade", "entidade_tipo", "entidade_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_anexo = Column(String(40), unique=True, index=True)

    nome_original = Column(String(255), nullable=False)
    nome_arquivo = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    tipo_mime = Column(String(100))
    tamanho = Column(Integer)

    entidade_tipo = Column(String(30), nullable=False)
    entidade_id = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "codigo_anexo": self.codigo_anexo,
            "nome_original": self.nome_original,
            "nome_arquivo": self.nome_arquivo,
            "url": self.url,
            "tipo_mime": self.tipo_mime,
            "tamanho": self.tamanho,
            "entidade_tipo": self.entidade_tipo,
            "entidade_id": self.entidade_id,
            "created_at": iso(self.created_at),
        }
