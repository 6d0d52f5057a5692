"""
Logistica Server - Custo Service
Todo custo gravado, alterado ou removido reflete nos custos/resultado do frete
"""
import logging

from logistica.database import transacao
from logistica.models import Custo
from logistica.schemas import CustoCreate, CustoUpdate
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class CustoService(EntityService):
    model = Custo
    nome = "Custo"
    campos_atualizaveis = (
        "frete_id",
        "tipo",
        "descricao",
        "valor",
        "data",
        "comprovante",
        "observacoes",
        "motorista",
        "caminhao",
        "rota",
        "litros",
        "tipo_combustivel",
    )

    async def criar(self, payload: CustoCreate) -> Custo:
        dados = payload.model_dump(exclude_none=True)

        async with transacao(self.session):
            await regras.aplicar_custo(self.session, dados["frete_id"], dados["valor"])

            custo = Custo(**dados)
            self.session.add(custo)
            await self.session.flush()

        logger.info(f"Custo {custo.id} ({custo.tipo}) de {custo.valor} lançado no frete {custo.frete_id}")
        await self.invalidar_dashboard()
        return custo

    async def atualizar(self, custo_id: int, payload: CustoUpdate) -> Custo:
        valores = self.montar_update(payload.alteracoes())

        async with transacao(self.session):
            custo = await self.obter(custo_id, for_update=True)

            frete_anterior, valor_anterior = custo.frete_id, custo.valor or 0
            frete_novo = valores.get("frete_id", frete_anterior)
            valor_novo = valores.get("valor", valor_anterior)

            if frete_novo != frete_anterior:
                # Custo mudou de frete: sai de um, entra no outro
                await regras.aplicar_custo(self.session, frete_anterior, -valor_anterior)
                await regras.aplicar_custo(self.session, frete_novo, valor_novo)
            elif valor_novo != valor_anterior:
                await regras.aplicar_custo(self.session, frete_anterior, valor_novo - valor_anterior)

            await self.aplicar_update(custo_id, valores)
            custo = await self.recarregar(custo)

        await self.invalidar_dashboard()
        return custo

    async def remover(self, custo_id: int):
        async with transacao(self.session):
            custo = await self.obter(custo_id, for_update=True)
            await regras.aplicar_custo(self.session, custo.frete_id, -(custo.valor or 0))
            await self.session.delete(custo)
            await self.session.flush()

        logger.info(f"Custo {custo_id} removido, estornado do frete {custo.frete_id}")
        await self.invalidar_dashboard()
