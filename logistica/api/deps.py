"""
Logistica Server - Dependencies
Serviços montados por request a partir dos recursos em app.state
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from logistica.core.cache import Cache, get_cache
from logistica.core.config import Settings
from logistica.database import get_db
from logistica.services import (
    CustoService,
    DashboardService,
    FazendaService,
    FreteService,
    FrotaService,
    MotoristaService,
    PagamentoService,
    SequenceAllocator,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sequencias(request: Request) -> SequenceAllocator:
    return request.app.state.sequencias


def _factory(service_cls):
    def dependency(
        db: AsyncSession = Depends(get_db),
        cache: Cache = Depends(get_cache),
        sequencias: SequenceAllocator = Depends(get_sequencias)
    ):
        return service_cls(db, cache, sequencias)

    dependency.__name__ = f"get_{service_cls.__name__}"
    return dependency


get_frota_service = _factory(FrotaService)
get_motorista_service = _factory(MotoristaService)
get_frete_service = _factory(FreteService)
get_custo_service = _factory(CustoService)
get_pagamento_service = _factory(PagamentoService)
get_fazenda_service = _factory(FazendaService)


def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    settings: Settings = Depends(get_app_settings)
) -> DashboardService:
    return DashboardService(db, cache, settings.CACHE_TTL_SECONDS)
