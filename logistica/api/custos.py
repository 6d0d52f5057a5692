"""
Logistica Server - Custos API
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from logistica.schemas import CustoCreate, CustoUpdate, resposta
from logistica.services import CustoService
from .deps import get_custo_service

router = APIRouter(prefix="/custos", tags=["Custos"])


@router.get("")
async def list_custos(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: CustoService = Depends(get_custo_service)
):
    custos, meta = await service.listar(page, limit)
    return resposta("Custos listados com sucesso", [c.to_dict() for c in custos], meta)


@router.get("/{custo_id}")
async def get_custo(custo_id: int, service: CustoService = Depends(get_custo_service)):
    custo = await service.obter(custo_id)
    return resposta("Custo carregado com sucesso", custo.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_custo(request: CustoCreate, service: CustoService = Depends(get_custo_service)):
    """Lança custo e atualiza custos/resultado do frete"""
    custo = await service.criar(request)
    return resposta("Custo criado com sucesso", custo.to_dict())


@router.put("/{custo_id}")
async def update_custo(
    custo_id: int,
    request: CustoUpdate,
    service: CustoService = Depends(get_custo_service)
):
    custo = await service.atualizar(custo_id, request)
    return resposta("Custo atualizado com sucesso", custo.to_dict())


@router.delete("/{custo_id}")
async def delete_custo(custo_id: int, service: CustoService = Depends(get_custo_service)):
    await service.remover(custo_id)
    return resposta("Custo removido com sucesso")
