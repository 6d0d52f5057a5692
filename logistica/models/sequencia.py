"""
Logistica Server - Sequencia Model
Contador persistido por escopo (ex: "FRT-2026", "FROTA")
"""
from sqlalchemy import Column, String, Integer, DateTime

from logistica.database import Base
from .base import utcnow


class Sequencia(Base):
    __tablename__ = "sequencias"

    escopo = Column(String(50), primary_key=True)
    valor = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
