"""
Logistica Server - Fazenda Service
"""
import logging

from logistica.database import transacao
from logistica.models import Fazenda
from logistica.models.base import utcnow
from logistica.schemas import FazendaCreate, FazendaUpdate, IncrementoVolume
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class FazendaService(EntityService):
    model = Fazenda
    nome = "Fazenda"
    afeta_dashboard = False
    campos_atualizaveis = (
        "fazenda",
        "estado",
        "proprietario",
        "mercadoria",
        "variedade",
        "safra",
        "preco_por_tonelada",
        "peso_medio_saca",
        "total_sacas_carregadas",
        "total_toneladas",
        "faturamento_total",
        "ultimo_frete",
        "colheita_finalizada",
    )

    def ordenacao(self):
        return (Fazenda.fazenda.asc(), Fazenda.id.asc())

    async def criar(self, payload: FazendaCreate) -> Fazenda:
        async with transacao(self.session):
            fazenda = Fazenda(**payload.model_dump(exclude_none=True))
            self.session.add(fazenda)
            await self.session.flush()

        logger.info(f"Fazenda {fazenda.id} ({fazenda.fazenda}) cadastrada")
        return fazenda

    async def atualizar(self, fazenda_id: int, payload: FazendaUpdate) -> Fazenda:
        valores = self.montar_update(payload.alteracoes())

        async with transacao(self.session):
            fazenda = await self.obter(fazenda_id, for_update=True)
            await self.aplicar_update(fazenda_id, valores)
            fazenda = await self.recarregar(fazenda)

        return fazenda

    async def remover(self, fazenda_id: int):
        async with transacao(self.session):
            await self.excluir(fazenda_id)

    async def incrementar_volume(self, fazenda_id: int, payload: IncrementoVolume) -> Fazenda:
        """Lançamento manual de volume (fora do fluxo de fretes)"""
        async with transacao(self.session):
            fazenda = await regras.acumular_fazenda(
                self.session,
                fazenda_id,
                sacas=payload.quantidade_sacas,
                toneladas=payload.toneladas,
                receita=payload.receita_total,
                data_frete=utcnow().date(),
            )
            fazenda = await self.recarregar(fazenda)

        logger.info(
            f"Fazenda {fazenda_id}: +{payload.toneladas} t, +{payload.quantidade_sacas} sacas "
            f"(manual)"
        )
        return fazenda
