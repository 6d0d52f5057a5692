"""
Logistica Server - Frota Service
"""
import logging
from typing import Any

from logistica.database import transacao
from logistica.models import Motorista, Veiculo
from logistica.core.exceptions import NotFoundError
from logistica.schemas import VeiculoCreate, VeiculoUpdate
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class FrotaService(EntityService):
    model = Veiculo
    nome = "Veículo"
    campos_atualizaveis = (
        "placa",
        "placa_carreta",
        "modelo",
        "ano_fabricacao",
        "tipo_veiculo",
        "status",
        "motorista_fixo_id",
        "capacidade_toneladas",
        "km_atual",
        "tipo_combustivel",
        "renavam",
        "renavam_carreta",
        "chassi",
        "registro_antt",
        "validade_seguro",
        "validade_licenciamento",
        "proprietario_tipo",
        "ultima_manutencao_data",
        "proxima_manutencao_km",
    )

    async def listar_frota(self, page: Any = None, limit: Any = None, vagos: bool = False):
        filtros = [Veiculo.motorista_fixo_id.is_(None)] if vagos else []
        return await self.listar(page, limit, filtros)

    async def criar(self, payload: VeiculoCreate) -> Veiculo:
        dados = payload.model_dump(exclude_none=True)
        regras.exigir_placa_carreta(dados.get("tipo_veiculo"), dados.get("placa_carreta"))

        motorista_id = dados.pop("motorista_fixo_id", None)

        async with transacao(self.session):
            if motorista_id is not None and await self.session.get(Motorista, motorista_id) is None:
                raise NotFoundError("Motorista não encontrado")

            async def inserir(codigo: str) -> Veiculo:
                veiculo = Veiculo(codigo_frota=codigo, **dados)
                self.session.add(veiculo)
                await self.session.flush()
                return veiculo

            veiculo = await self.sequencias.inserir_com_codigo(self.session, "FROTA", inserir)

            if motorista_id is not None:
                await regras.vincular_veiculo(self.session, motorista_id, veiculo.id)

        logger.info(f"Veículo {veiculo.codigo_frota} ({veiculo.placa}) cadastrado")
        await self.invalidar_dashboard()
        return veiculo

    async def atualizar(self, veiculo_id: int, payload: VeiculoUpdate) -> Veiculo:
        alteracoes = payload.alteracoes()
        valores = self.montar_update(alteracoes)

        async with transacao(self.session):
            veiculo = await self.obter(veiculo_id, for_update=True)
            regras.validar_carreta_atualizacao(alteracoes, veiculo)

            motorista_id = valores.pop("motorista_fixo_id", None)
            if valores:
                await self.aplicar_update(veiculo_id, valores)

            if "motorista_fixo_id" in alteracoes:
                if motorista_id is None:
                    await self.aplicar_update(veiculo_id, {"motorista_fixo_id": None})
                else:
                    if await self.session.get(Motorista, motorista_id) is None:
                        raise NotFoundError("Motorista não encontrado")
                    await regras.vincular_veiculo(self.session, motorista_id, veiculo_id)

            veiculo = await self.recarregar(veiculo)

        await self.invalidar_dashboard()
        return veiculo

    async def remover(self, veiculo_id: int):
        async with transacao(self.session):
            await self.excluir(veiculo_id)
        await self.invalidar_dashboard()
