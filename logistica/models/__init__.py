from .frota import Veiculo, VehicleStatus, TipoVeiculo, TipoCombustivel, ProprietarioTipo, TIPOS_COM_CARRETA
from .motorista import Motorista, MotoristaStatus, TipoMotorista, TipoPagamento, TIPOS_COM_VEICULO
from .fazenda import Fazenda
from .frete import Frete, Custo, TipoCusto
from .pagamento import Pagamento, Anexo, PagamentoStatus, MetodoPagamento, parse_fretes_incluidos
from .sequencia import Sequencia

__all__ = [
    "Veiculo",
    "VehicleStatus",
    "TipoVeiculo",
    "TipoCombustivel",
    "ProprietarioTipo",
    "TIPOS_COM_CARRETA",
    "Motorista",
    "MotoristaStatus",
    "TipoMotorista",
    "TipoPagamento",
    "TIPOS_COM_VEICULO",
    "Fazenda",
    "Frete",
    "Custo",
    "TipoCusto",
    "Pagamento",
    "Anexo",
    "PagamentoStatus",
    "MetodoPagamento",
    "parse_fretes_incluidos",
    "Sequencia"
]
