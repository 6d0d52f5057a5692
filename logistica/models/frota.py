"""
Logistica Server - Frota Model
Veículos da frota (cavalo + carreta)
"""
import enum
from sqlalchemy import Column, String, DateTime, Date, Integer, Float, ForeignKey

from logistica.database import Base
from .base import utcnow, iso


class VehicleStatus(str, enum.Enum):
    """Status operacional do veículo"""
    DISPONIVEL = "disponivel"
    EM_VIAGEM = "em_viagem"
    MANUTENCAO = "manutencao"


class TipoVeiculo(str, enum.Enum):
    TRUCADO = "TRUCADO"
    TOCO = "TOCO"
    CARRETA = "CARRETA"
    BITREM = "BITREM"
    RODOTREM = "RODOTREM"


# Tipos que exigem placa da carreta
TIPOS_COM_CARRETA = frozenset({
    TipoVeiculo.CARRETA.value,
    TipoVeiculo.BITREM.value,
    TipoVeiculo.RODOTREM.value,
})


class TipoCombustivel(str, enum.Enum):
    DIESEL = "DIESEL"
    S10 = "S10"
    ARLA = "ARLA"
    OUTRO = "OUTRO"


class ProprietarioTipo(str, enum.Enum):
    PROPRIO = "PROPRIO"
    TERCEIRO = "TERCEIRO"
    AGREGADO = "AGREGADO"


class Veiculo(Base):
    """Modelo de Veículo"""
    __tablename__ = "frota"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Código legível (FROTA-001)
    codigo_frota = Column(String(40), unique=True, index=True)

    # Identificação
    placa = Column(String(10), nullable=False, unique=True, index=True)
    placa_carreta = Column(String(10))
    modelo = Column(String(100), nullable=False)
    ano_fabricacao = Column(Integer)
    tipo_veiculo = Column(String(20), nullable=False)

    # Operação
    status = Column(String(20), default=VehicleStatus.DISPONIVEL.value, index=True)
    # Vínculo fraco com o motorista fixo (no máximo um veículo por motorista)
    motorista_fixo_id = Column(
        Integer,
        ForeignKey("motoristas.id", ondelete="SET NULL"),
        unique=True,
        index=True
    )
    capacidade_toneladas = Column(Float)
    km_atual = Column(Integer)
    tipo_combustivel = Column(String(10), default=TipoCombustivel.S10.value)

    # Documentação
    renavam = Column(String(20))
    renavam_carreta = Column(String(20))
    chassi = Column(String(30))
    registro_antt = Column(String(30))
    validade_seguro = Column(Date)
    validade_licenciamento = Column(Date)
    proprietario_tipo = Column(String(20), default=ProprietarioTipo.PROPRIO.value)

    # Manutenção
    ultima_manutencao_data = Column(Date)
    proxima_manutencao_km = Column(Integer)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "codigo_frota": self.codigo_frota,
            "placa": self.placa,
            "placa_carreta": self.placa_carreta,
            "modelo": self.modelo,
            "ano_fabricacao": self.ano_fabricacao,
            "tipo_veiculo": self.tipo_veiculo,
            "status": self.status,
            "motorista_fixo_id": self.motorista_fixo_id,
            "capacidade_toneladas": self.capacidade_toneladas,
            "km_atual": self.km_atual,
            "tipo_combustivel": self.tipo_combustivel,
            "renavam": self.renavam,
            "renavam_carreta": self.renavam_carreta,
            "chassi": self.chassi,
            "registro_antt": self.registro_antt,
            "validade_seguro": iso(self.validade_seguro),
            "validade_licenciamento": iso(self.validade_licenciamento),
            "proprietario_tipo": self.proprietario_tipo,
            "ultima_manutencao_data": iso(self.ultima_manutencao_data),
            "proxima_manutencao_km": self.proxima_manutencao_km,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
