from .base import NormalizedModel, normalizar, resposta
from .frota import VeiculoCreate, VeiculoUpdate
from .motorista import MotoristaCreate, MotoristaUpdate
from .frete import FreteCreate, FreteUpdate, CustoCreate, CustoUpdate
from .pagamento import PagamentoCreate, PagamentoUpdate
from .fazenda import FazendaCreate, FazendaUpdate, IncrementoVolume

__all__ = [
    "NormalizedModel",
    "normalizar",
    "resposta",
    "VeiculoCreate",
    "VeiculoUpdate",
    "MotoristaCreate",
    "MotoristaUpdate",
    "FreteCreate",
    "FreteUpdate",
    "CustoCreate",
    "CustoUpdate",
    "PagamentoCreate",
    "PagamentoUpdate",
    "FazendaCreate",
    "FazendaUpdate",
    "IncrementoVolume"
]
