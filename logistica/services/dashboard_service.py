"""
Logistica Server - Dashboard Service
Indicadores calculados das tabelas, com cache read-through
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logistica.core.cache import Cache
from logistica.models import Frete, Motorista, Veiculo, MotoristaStatus, VehicleStatus

logger = logging.getLogger(__name__)

KPIS_KEY = "dashboard:kpis"
ROTAS_KEY = "dashboard:estatisticas-rotas"


def margem_lucro(lucro: float, receita: float) -> float:
    """Percentual com 2 casas; 0 quando não há receita"""
    if not receita or receita <= 0:
        return 0
    return round((lucro / receita) * 100, 2)


class DashboardService:
    def __init__(self, session: AsyncSession, cache: Optional[Cache] = None, ttl_seconds: Optional[int] = None):
        self.session = session
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def _do_cache(self, key: str) -> Optional[Any]:
        if self.cache is None:
            return None
        return await self.cache.get(key)

    async def _guardar(self, key: str, value: Any):
        if self.cache is not None:
            await self.cache.set(key, value, self.ttl_seconds)

    async def kpis(self) -> Tuple[Dict[str, Any], bool]:
        """Retorna (kpis, veio_do_cache)"""
        cached = await self._do_cache(KPIS_KEY)
        if cached is not None:
            return cached, True

        custos = func.coalesce(Frete.custos, 0)
        fretes = (await self.session.execute(
            select(
                func.coalesce(func.sum(Frete.receita), 0).label("receita_total"),
                func.coalesce(func.sum(custos), 0).label("custos_total"),
                func.coalesce(func.sum(func.coalesce(Frete.receita, 0) - custos), 0).label("lucro_total"),
                func.count(Frete.id).label("total_fretes"),
            )
        )).one()

        motoristas_ativos = await self.session.scalar(
            select(func.count(Motorista.id)).where(Motorista.status == MotoristaStatus.ATIVO.value)
        )
        caminhoes_disponiveis = await self.session.scalar(
            select(func.count(Veiculo.id)).where(Veiculo.status == VehicleStatus.DISPONIVEL.value)
        )

        receita = float(fretes.receita_total or 0)
        lucro = float(fretes.lucro_total or 0)
        data = {
            "receitaTotal": receita,
            "custosTotal": float(fretes.custos_total or 0),
            "lucroTotal": lucro,
            "margemLucro": margem_lucro(lucro, receita),
            "totalFretes": fretes.total_fretes or 0,
            "motoristasAtivos": motoristas_ativos or 0,
            "caminhoesDisponiveis": caminhoes_disponiveis or 0,
        }

        await self._guardar(KPIS_KEY, data)
        return data, False

    async def estatisticas_rotas(self) -> Tuple[List[Dict[str, Any]], bool]:
        cached = await self._do_cache(ROTAS_KEY)
        if cached is not None:
            return cached, True

        custos = func.coalesce(Frete.custos, 0)
        lucro_total = func.coalesce(func.sum(func.coalesce(Frete.receita, 0) - custos), 0).label("lucro_total")
        result = await self.session.execute(
            select(
                Frete.origem,
                Frete.destino,
                func.count(Frete.id).label("total_fretes"),
                func.coalesce(func.sum(Frete.receita), 0).label("receita_total"),
                func.coalesce(func.sum(custos), 0).label("custos_total"),
                lucro_total,
            )
            .group_by(Frete.origem, Frete.destino)
            .order_by(lucro_total.desc())
        )

        data = [
            {
                "origem": row.origem,
                "destino": row.destino,
                "total_fretes": row.total_fretes,
                "receita_total": float(row.receita_total or 0),
                "custos_total": float(row.custos_total or 0),
                "lucro_total": float(row.lucro_total or 0),
            }
            for row in result
        ]

        await self._guardar(ROTAS_KEY, data)
        return data, False
