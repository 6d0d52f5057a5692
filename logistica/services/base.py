"""
Logistica Server - Base dos serviços de entidade
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from logistica.core.cache import Cache
from logistica.core.exceptions import EmptyUpdateError, NotFoundError
from logistica.core.sql import as_assignments, build_update, get_pagination, page_meta
from .dashboard_service import KPIS_KEY, ROTAS_KEY
from .sequencias import SequenceAllocator

logger = logging.getLogger(__name__)

# Chaves do dashboard invalidadas por qualquer escrita que afete os agregados
DASHBOARD_KEYS = (KPIS_KEY, ROTAS_KEY)


class EntityService:
    """
    CRUD comum: paginação, busca por id, update por whitelist, exclusão.
    Subclasses definem model, campos_atualizaveis e as regras próprias.
    """
    model: Type = None
    nome: str = "Registro"
    campos_atualizaveis: Sequence[str] = ()
    afeta_dashboard: bool = True

    def __init__(
        self,
        session: AsyncSession,
        cache: Optional[Cache] = None,
        sequencias: Optional[SequenceAllocator] = None
    ):
        self.session = session
        self.cache = cache
        self.sequencias = sequencias or SequenceAllocator()

    def ordenacao(self) -> Tuple:
        return (self.model.created_at.desc(), self.model.id.desc())

    async def listar(self, page: Any = None, limit: Any = None, filtros: Sequence = ()) -> Tuple[List, Dict]:
        page, limit, offset = get_pagination(page, limit)

        query = select(self.model)
        count_query = select(func.count()).select_from(self.model)
        for filtro in filtros:
            query = query.where(filtro)
            count_query = count_query.where(filtro)

        result = await self.session.execute(
            query.order_by(*self.ordenacao()).offset(offset).limit(limit)
        )
        total = await self.session.scalar(count_query) or 0

        return list(result.scalars().all()), page_meta(page, limit, total)

    async def obter(self, entity_id: int, for_update: bool = False):
        entity = await self.session.get(self.model, entity_id, with_for_update=for_update)
        if entity is None:
            raise NotFoundError(f"{self.nome} não encontrado")
        return entity

    def montar_update(self, alteracoes: Dict[str, Any]) -> Dict[str, Any]:
        """Whitelist + 400 quando nada reconhecido foi enviado"""
        fields, values = build_update(alteracoes, self.campos_atualizaveis)
        if not fields:
            raise EmptyUpdateError()
        return as_assignments(fields, values)

    async def aplicar_update(self, entity_id: int, valores: Dict[str, Any]):
        await self.session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**valores)
            .execution_options(synchronize_session=False)
        )

    async def recarregar(self, entity):
        await self.session.refresh(entity)
        return entity

    async def excluir(self, entity_id: int):
        entity = await self.obter(entity_id)
        await self.session.delete(entity)
        await self.session.flush()
        logger.info(f"{self.nome} {entity_id} removido")

    async def invalidar_dashboard(self):
        if self.cache is not None and self.afeta_dashboard:
            await self.cache.delete(*DASHBOARD_KEYS)
