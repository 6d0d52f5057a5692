"""
Logistica Server - Motorista Service
"""
import logging
from typing import Any, Dict

from sqlalchemy import select

from logistica.database import transacao
from logistica.models import Motorista, Veiculo
from logistica.core.exceptions import EmptyUpdateError, NotFoundError
from logistica.core.sql import build_update, as_assignments
from logistica.schemas import MotoristaCreate, MotoristaUpdate
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class MotoristaService(EntityService):
    model = Motorista
    nome = "Motorista"
    campos_atualizaveis = (
        "nome",
        "documento",
        "rg",
        "data_nascimento",
        "telefone",
        "email",
        "endereco",
        "cnh",
        "cnh_validade",
        "cnh_categoria",
        "status",
        "tipo",
        "data_admissao",
        "data_desligamento",
        "tipo_pagamento",
        "chave_pix_tipo",
        "chave_pix",
        "banco",
        "agencia",
        "conta",
        "tipo_conta",
        "receita_gerada",
        "viagens_realizadas",
    )

    def ordenacao(self):
        return (Motorista.nome.asc(), Motorista.id.asc())

    async def detalhar(self, motorista_id: int) -> Dict[str, Any]:
        """Motorista + veículo vinculado (se houver)"""
        motorista = await self.obter(motorista_id)
        veiculo = await self.session.scalar(
            select(Veiculo).where(Veiculo.motorista_fixo_id == motorista_id).limit(1)
        )

        data = motorista.to_dict()
        data["veiculo_vinculado"] = None
        if veiculo is not None:
            data["veiculo_vinculado"] = {
                "id": veiculo.id,
                "placa": veiculo.placa,
                "modelo": veiculo.modelo,
                "motorista_fixo_id": veiculo.motorista_fixo_id,
            }
        return data

    async def criar(self, payload: MotoristaCreate) -> Motorista:
        dados = payload.model_dump(exclude_none=True)
        regras.exigir_veiculo_para_tipo(dados)

        veiculo_id = dados.pop("veiculo_id", None)

        async with transacao(self.session):
            # Confere o veículo antes de consumir um código
            if veiculo_id is not None and await self.session.get(Veiculo, veiculo_id) is None:
                raise NotFoundError("Veículo não encontrado")

            async def inserir(codigo: str) -> Motorista:
                motorista = Motorista(codigo_motorista=codigo, **dados)
                self.session.add(motorista)
                await self.session.flush()
                return motorista

            motorista = await self.sequencias.inserir_com_codigo(self.session, "MOT", inserir)

            if veiculo_id is not None:
                veiculo = await regras.vincular_veiculo(self.session, motorista.id, veiculo_id)
                logger.info(f"Motorista {motorista.codigo_motorista} vinculado ao veículo {veiculo.placa}")

        logger.info(f"Motorista {motorista.codigo_motorista} cadastrado")
        await self.invalidar_dashboard()
        return motorista

    async def atualizar(self, motorista_id: int, payload: MotoristaUpdate) -> Motorista:
        alteracoes = payload.alteracoes()
        regras.exigir_veiculo_para_tipo(alteracoes)

        veiculo_id = alteracoes.pop("veiculo_id", None)
        fields, values = build_update(alteracoes, self.campos_atualizaveis)
        # Só veiculo_id também é uma alteração válida (troca de vínculo)
        if not fields and veiculo_id is None:
            raise EmptyUpdateError()

        async with transacao(self.session):
            motorista = await self.obter(motorista_id, for_update=True)

            if fields:
                await self.aplicar_update(motorista_id, as_assignments(fields, values))

            if veiculo_id is not None:
                veiculo = await regras.vincular_veiculo(self.session, motorista_id, veiculo_id)
                logger.info(f"Motorista {motorista_id} vinculado ao veículo {veiculo.placa}")

            motorista = await self.recarregar(motorista)

        await self.invalidar_dashboard()
        return motorista

    async def remover(self, motorista_id: int):
        async with transacao(self.session):
            liberados = await regras.liberar_vinculos(self.session, motorista_id)
            await self.excluir(motorista_id)

        if liberados:
            logger.info(f"Motorista {motorista_id}: {liberados} veículo(s) liberado(s)")
        await self.invalidar_dashboard()
