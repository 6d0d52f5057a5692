"""
Logistica Server - Dashboard API
"""
from fastapi import APIRouter, Depends

from logistica.schemas import resposta
from logistica.services import DashboardService
from .deps import get_dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _mensagem(base: str, cached: bool) -> str:
    return f"{base} (cache)" if cached else base


@router.get("/kpis")
async def get_kpis(service: DashboardService = Depends(get_dashboard_service)):
    """Indicadores gerais da operação"""
    data, cached = await service.kpis()
    return resposta(_mensagem("KPIs carregados com sucesso", cached), data)


@router.get("/estatisticas-rotas")
async def get_estatisticas_rotas(service: DashboardService = Depends(get_dashboard_service)):
    """Receita, custos e lucro por par origem/destino"""
    data, cached = await service.estatisticas_rotas()
    return resposta(_mensagem("Estatisticas por rota carregadas com sucesso", cached), data)
