"""
Logistica Server - Frete Service
Criação de frete com acumulados de fazenda e motorista na mesma transação
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select

from logistica.database import transacao
from logistica.models import Custo, Fazenda, Frete, Motorista, Veiculo
from logistica.core.exceptions import NotFoundError
from logistica.core.sql import get_pagination, page_meta
from logistica.schemas import FreteCreate, FreteUpdate
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class FreteService(EntityService):
    model = Frete
    nome = "Frete"
    campos_atualizaveis = (
        "origem",
        "destino",
        "motorista_id",
        "motorista_nome",
        "caminhao_id",
        "caminhao_placa",
        "ticket",
        "numero_nota_fiscal",
        "fazenda_id",
        "fazenda_nome",
        "mercadoria",
        "mercadoria_id",
        "variedade",
        "data_frete",
        "quantidade_sacas",
        "toneladas",
        "valor_por_tonelada",
        "receita",
        "custos",
        "resultado",
    )

    def ordenacao(self):
        return (Frete.data_frete.desc(), Frete.created_at.desc(), Frete.id.desc())

    def _com_relacionados(self):
        """SELECT do frete com dados atuais de motorista e veículo"""
        return (
            select(
                Frete,
                Motorista.nome.label("m_nome"),
                Motorista.tipo.label("m_tipo"),
                Motorista.telefone.label("m_telefone"),
                Veiculo.placa.label("v_placa"),
                Veiculo.modelo.label("v_modelo"),
                Veiculo.tipo_veiculo.label("v_tipo"),
            )
            .outerjoin(Motorista, Motorista.id == Frete.motorista_id)
            .outerjoin(Veiculo, Veiculo.id == Frete.caminhao_id)
        )

    @staticmethod
    def _montar(row) -> Dict[str, Any]:
        data = row.Frete.to_dict()
        # Nome/placa gravados no frete têm prioridade sobre o cadastro atual
        data["motorista_nome"] = data["motorista_nome"] or row.m_nome
        data["caminhao_placa"] = data["caminhao_placa"] or row.v_placa
        data["motorista_tipo"] = row.m_tipo
        data["motorista_telefone"] = row.m_telefone
        data["caminhao_modelo"] = row.v_modelo
        data["caminhao_tipo"] = row.v_tipo
        return data

    async def listar_fretes(
        self,
        page: Any = None,
        limit: Any = None,
        data_inicio: Optional[date] = None,
        data_fim: Optional[date] = None,
        motorista_id: Optional[int] = None,
        fazenda_id: Optional[int] = None
    ):
        page, limit, offset = get_pagination(page, limit)

        filtros = []
        if data_inicio is not None:
            filtros.append(Frete.data_frete >= data_inicio)
        if data_fim is not None:
            filtros.append(Frete.data_frete <= data_fim)
        if motorista_id is not None:
            filtros.append(Frete.motorista_id == motorista_id)
        if fazenda_id is not None:
            filtros.append(Frete.fazenda_id == fazenda_id)

        result = await self.session.execute(
            self._com_relacionados()
            .where(*filtros)
            .order_by(*self.ordenacao())
            .offset(offset)
            .limit(limit)
        )
        total = await self.session.scalar(
            select(func.count()).select_from(Frete).where(*filtros)
        ) or 0

        return [self._montar(row) for row in result], page_meta(page, limit, total)

    async def pendentes(self, motorista_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Fretes sem pagamento, do mais antigo para o mais novo"""
        query = select(Frete).where(Frete.pagamento_id.is_(None))
        if motorista_id is not None:
            query = query.where(Frete.motorista_id == motorista_id)

        result = await self.session.execute(
            query.order_by(Frete.data_frete.asc(), Frete.created_at.asc(), Frete.id.asc())
        )
        return [frete.to_dict() for frete in result.scalars()]

    async def detalhar(self, frete_id: int) -> Dict[str, Any]:
        result = await self.session.execute(
            self._com_relacionados().where(Frete.id == frete_id)
        )
        row = result.first()
        if row is None:
            raise NotFoundError("Frete não encontrado")
        return self._montar(row)

    async def criar(self, payload: FreteCreate) -> Frete:
        dados = regras.derivar_financeiro(payload.model_dump(exclude_none=True))

        async with transacao(self.session):
            motorista = await self.session.get(Motorista, dados["motorista_id"])
            if motorista is None:
                raise NotFoundError("Motorista não encontrado")

            veiculo = await self.session.get(Veiculo, dados["caminhao_id"])
            if veiculo is None:
                raise NotFoundError("Veículo não encontrado")

            dados.setdefault("motorista_nome", motorista.nome)
            dados.setdefault("caminhao_placa", veiculo.placa)

            fazenda_id = dados.get("fazenda_id")
            if fazenda_id is not None:
                fazenda = await regras.acumular_fazenda(
                    self.session,
                    fazenda_id,
                    sacas=dados["quantidade_sacas"],
                    toneladas=dados["toneladas"],
                    receita=dados.get("receita") or 0,
                    data_frete=dados["data_frete"],
                )
                dados.setdefault("fazenda_nome", fazenda.fazenda)

            async def inserir(codigo: str) -> Frete:
                frete = Frete(codigo_frete=codigo, **dados)
                self.session.add(frete)
                await self.session.flush()
                return frete

            frete = await self.sequencias.inserir_com_codigo(self.session, "FRT", inserir)

            await regras.registrar_viagem(self.session, motorista.id, dados.get("receita") or 0)

        logger.info(
            f"Frete {frete.codigo_frete} criado: {frete.origem} -> {frete.destino}, "
            f"{frete.toneladas} t, receita {frete.receita}"
        )
        await self.invalidar_dashboard()
        return frete

    async def atualizar(self, frete_id: int, payload: FreteUpdate) -> Frete:
        alteracoes = payload.alteracoes()
        self.montar_update(alteracoes)

        async with transacao(self.session):
            frete = await self.obter(frete_id, for_update=True)

            # Troca de referência sem nome/placa explícitos renova a cópia gravada
            if "motorista_id" in alteracoes:
                motorista = await self.session.get(Motorista, alteracoes["motorista_id"])
                if motorista is None:
                    raise NotFoundError("Motorista não encontrado")
                alteracoes.setdefault("motorista_nome", motorista.nome)
            if "caminhao_id" in alteracoes:
                veiculo = await self.session.get(Veiculo, alteracoes["caminhao_id"])
                if veiculo is None:
                    raise NotFoundError("Veículo não encontrado")
                alteracoes.setdefault("caminhao_placa", veiculo.placa)
            if alteracoes.get("fazenda_id") is not None:
                fazenda = await self.session.get(Fazenda, alteracoes["fazenda_id"])
                if fazenda is None:
                    raise NotFoundError("Fazenda não encontrada")
                alteracoes.setdefault("fazenda_nome", fazenda.fazenda)

            valores = self.montar_update(regras.derivar_financeiro(alteracoes, frete))
            await self.aplicar_update(frete_id, valores)
            frete = await self.recarregar(frete)

        await self.invalidar_dashboard()
        return frete

    async def remover(self, frete_id: int):
        """Exclui o frete e seus custos; totais de fazenda/motorista não são estornados"""
        async with transacao(self.session):
            frete = await self.obter(frete_id)
            custos = await self.session.execute(
                delete(Custo).where(Custo.frete_id == frete_id)
            )
            await self.session.delete(frete)
            await self.session.flush()

        logger.info(f"Frete {frete_id} removido ({custos.rowcount} custo(s))")
        await self.invalidar_dashboard()
