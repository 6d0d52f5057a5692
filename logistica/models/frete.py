"""
Logistica Server - Frete e Custo Models
O frete é o registro transacional central; custos se acumulam nele.
"""
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Float, Text, ForeignKey

from logistica.database import Base
from .base import utcnow, iso


class Frete(Base):
    """Modelo de Frete (uma viagem origem -> destino)"""
    __tablename__ = "fretes"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Código legível (FRT-2026-001)
    codigo_frete = Column(String(40), unique=True, index=True)

    # Rota
    origem = Column(String(255), nullable=False)
    destino = Column(String(255), nullable=False)

    # Motorista e veículo (nome/placa em cache)
    motorista_id = Column(Integer, ForeignKey("motoristas.id"), nullable=False, index=True)
    motorista_nome = Column(String(255))
    caminhao_id = Column(Integer, ForeignKey("frota.id"), nullable=False, index=True)
    caminhao_placa = Column(String(10))

    # Documentos
    ticket = Column(String(50))
    numero_nota_fiscal = Column(String(50))

    # Origem da carga
    fazenda_id = Column(Integer, ForeignKey("fazendas.id"), index=True)
    fazenda_nome = Column(String(255))
    mercadoria = Column(String(100), nullable=False)
    mercadoria_id = Column(String(36))
    variedade = Column(String(100))

    # Carga
    data_frete = Column(Date, nullable=False, index=True)
    quantidade_sacas = Column(Integer, nullable=False)
    toneladas = Column(Float, nullable=False)
    valor_por_tonelada = Column(Float, nullable=False)

    # Financeiro
    receita = Column(Float)
    custos = Column(Float, default=0)
    resultado = Column(Float)

    # Acerto: nulo = pendente de pagamento
    pagamento_id = Column(Integer, ForeignKey("pagamentos.id", ondelete="SET NULL"), index=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "codigo_frete": self.codigo_frete,
            "origem": self.origem,
            "destino": self.destino,
            "motorista_id": self.motorista_id,
            "motorista_nome": self.motorista_nome,
            "caminhao_id": self.caminhao_id,
            "caminhao_placa": self.caminhao_placa,
            "ticket": self.ticket,
            "numero_nota_fiscal": self.numero_nota_fiscal,
            "fazenda_id": self.fazenda_id,
            "fazenda_nome": self.fazenda_nome,
            "mercadoria": self.mercadoria,
            "mercadoria_id": self.mercadoria_id,
            "variedade": self.variedade,
            "data_frete": iso(self.data_frete),
            "quantidade_sacas": self.quantidade_sacas,
            "toneladas": self.toneladas,
            "valor_por_tonelada": self.valor_por_tonelada,
            "receita": self.receita,
            "custos": self.custos or 0,
            "resultado": self.resultado,
            "pagamento_id": self.pagamento_id,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }


class TipoCusto(str, enum.Enum):
    COMBUSTIVEL = "combustivel"
    MANUTENCAO = "manutencao"
    PEDAGIO = "pedagio"
    OUTROS = "outros"


class Custo(Base):
    """Custo lançado contra um frete"""
    __tablename__ = "custos"

    id = Column(Integer, primary_key=True, autoincrement=True)

    frete_id = Column(Integer, ForeignKey("fretes.id", ondelete="CASCADE"), nullable=False, index=True)
    tipo = Column(String(20), nullable=False)
    descricao = Column(String(255), nullable=False)
    valor = Column(Float, nullable=False)
    data = Column(Date, nullable=False)
    comprovante = Column(Boolean, default=False)
    observacoes = Column(Text)

    # Referências textuais livres
    motorista = Column(String(255))
    caminhao = Column(String(50))
    rota = Column(String(255))

    # Só para combustível
    litros = Column(Float)
    tipo_combustivel = Column(String(20))

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "frete_id": self.frete_id,
            "tipo": self.tipo,
            "descricao": self.descricao,
            "valor": self.valor,
            "data": iso(self.data),
            "comprovante": bool(self.comprovante),
            "observacoes": self.observacoes,
            "motorista": self.motorista,
            "caminhao": self.caminhao,
            "rota": self.rota,
            "litros": self.litros,
            "tipo_combustivel": self.tipo_combustivel,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
