"""
Logistica Server - Frota API
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from logistica.schemas import VeiculoCreate, VeiculoUpdate, resposta
from logistica.services import FrotaService
from .deps import get_frota_service

router = APIRouter(prefix="/frota", tags=["Frota"])


@router.get("")
async def list_frota(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    vagos: Optional[str] = Query(None, description="1/true: só veículos sem motorista fixo"),
    service: FrotaService = Depends(get_frota_service)
):
    """Lista veículos"""
    somente_vagos = (vagos or "").lower() in ("1", "true")
    veiculos, meta = await service.listar_frota(page, limit, vagos=somente_vagos)
    return resposta("Frota listada com sucesso", [v.to_dict() for v in veiculos], meta)


@router.get("/{veiculo_id}")
async def get_veiculo(veiculo_id: int, service: FrotaService = Depends(get_frota_service)):
    veiculo = await service.obter(veiculo_id)
    return resposta("Veículo carregado com sucesso", veiculo.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_veiculo(request: VeiculoCreate, service: FrotaService = Depends(get_frota_service)):
    """Cadastra veículo (gera codigo_frota FROTA-NNN)"""
    veiculo = await service.criar(request)
    return resposta("Veículo criado com sucesso", veiculo.to_dict())


@router.put("/{veiculo_id}")
async def update_veiculo(
    veiculo_id: int,
    request: VeiculoUpdate,
    service: FrotaService = Depends(get_frota_service)
):
    veiculo = await service.atualizar(veiculo_id, request)
    return resposta("Veículo atualizado com sucesso", veiculo.to_dict())


@router.delete("/{veiculo_id}")
async def delete_veiculo(veiculo_id: int, service: FrotaService = Depends(get_frota_service)):
    await service.remover(veiculo_id)
    return resposta("Veículo removido com sucesso")
