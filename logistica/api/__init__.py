from .frota import router as frota_router
from .motoristas import router as motoristas_router
from .fretes import router as fretes_router
from .custos import router as custos_router
from .pagamentos import router as pagamentos_router
from .fazendas import router as fazendas_router
from .dashboard import router as dashboard_router
from .health import router as health_router

__all__ = [
    "frota_router",
    "motoristas_router",
    "fretes_router",
    "custos_router",
    "pagamentos_router",
    "fazendas_router",
    "dashboard_router",
    "health_router"
]
