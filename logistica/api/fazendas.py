"""
Logistica Server - Fazendas API
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from logistica.schemas import FazendaCreate, FazendaUpdate, IncrementoVolume, resposta
from logistica.services import FazendaService
from .deps import get_fazenda_service

router = APIRouter(prefix="/fazendas", tags=["Fazendas"])


@router.get("")
async def list_fazendas(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: FazendaService = Depends(get_fazenda_service)
):
    fazendas, meta = await service.listar(page, limit)
    return resposta("Fazendas listadas com sucesso", [f.to_dict() for f in fazendas], meta)


@router.get("/{fazenda_id}")
async def get_fazenda(fazenda_id: int, service: FazendaService = Depends(get_fazenda_service)):
    fazenda = await service.obter(fazenda_id)
    return resposta("Fazenda carregada com sucesso", fazenda.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_fazenda(request: FazendaCreate, service: FazendaService = Depends(get_fazenda_service)):
    fazenda = await service.criar(request)
    return resposta("Fazenda criada com sucesso", fazenda.to_dict())


@router.put("/{fazenda_id}")
async def update_fazenda(
    fazenda_id: int,
    request: FazendaUpdate,
    service: FazendaService = Depends(get_fazenda_service)
):
    fazenda = await service.atualizar(fazenda_id, request)
    return resposta("Fazenda atualizada com sucesso", fazenda.to_dict())


@router.delete("/{fazenda_id}")
async def delete_fazenda(fazenda_id: int, service: FazendaService = Depends(get_fazenda_service)):
    await service.remover(fazenda_id)
    return resposta("Fazenda removida com sucesso")


@router.post("/{fazenda_id}/incrementar-volume")
async def incrementar_volume(
    fazenda_id: int,
    request: IncrementoVolume,
    service: FazendaService = Depends(get_fazenda_service)
):
    """Soma toneladas/sacas/faturamento aos totais da fazenda"""
    fazenda = await service.incrementar_volume(fazenda_id, request)
    return resposta("Volume incrementado com sucesso", fazenda.to_dict())
