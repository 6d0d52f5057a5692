from .sequencias import SequenceAllocator, formatar_codigo
from .frota_service import FrotaService
from .motorista_service import MotoristaService
from .frete_service import FreteService
from .custo_service import CustoService
from .pagamento_service import PagamentoService
from .fazenda_service import FazendaService
from .dashboard_service import DashboardService

__all__ = [
    "SequenceAllocator",
    "formatar_codigo",
    "FrotaService",
    "MotoristaService",
    "FreteService",
    "CustoService",
    "PagamentoService",
    "FazendaService",
    "DashboardService"
]
