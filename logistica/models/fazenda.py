"""
Logistica Server - Fazenda Model
Origem da carga, com totais acumulados por safra
"""
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Float

from logistica.database import Base
from .base import utcnow, iso


class Fazenda(Base):
    __tablename__ = "fazendas"

    id = Column(Integer, primary_key=True, autoincrement=True)

    fazenda = Column(String(255), nullable=False, index=True)
    estado = Column(String(2), nullable=False)
    proprietario = Column(String(255), nullable=False)
    mercadoria = Column(String(100), nullable=False)
    variedade = Column(String(100))
    safra = Column(String(20), nullable=False)
    preco_por_tonelada = Column(Float, nullable=False)
    peso_medio_saca = Column(Float)

    # Totais acumulados pelos fretes
    total_sacas_carregadas = Column(Integer, default=0, nullable=False)
    total_toneladas = Column(Float, default=0, nullable=False)
    faturamento_total = Column(Float, default=0, nullable=False)
    ultimo_frete = Column(Date)
    colheita_finalizada = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "fazenda": self.fazenda,
            "estado": self.estado,
            "proprietario": self.proprietario,
            "mercadoria": self.mercadoria,
            "variedade": self.variedade,
            "safra": self.safra,
            "preco_por_tonelada": self.preco_por_tonelada,
            "peso_medio_saca": self.peso_medio_saca,
            "total_sacas_carregadas": self.total_sacas_carregadas or 0,
            "total_toneladas": self.total_toneladas or 0,
            "faturamento_total": self.faturamento_total or 0,
            "ultimo_frete": iso(self.ultimo_frete),
            "colheita_finalizada": bool(self.colheita_finalizada),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
