"""
Logistica Server - Motoristas API
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from logistica.schemas import MotoristaCreate, MotoristaUpdate, resposta
from logistica.services import MotoristaService
from .deps import get_motorista_service

router = APIRouter(prefix="/motoristas", tags=["Motoristas"])


@router.get("")
async def list_motoristas(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: MotoristaService = Depends(get_motorista_service)
):
    motoristas, meta = await service.listar(page, limit)
    return resposta("Motoristas listados com sucesso", [m.to_dict() for m in motoristas], meta)


@router.get("/{motorista_id}")
async def get_motorista(motorista_id: int, service: MotoristaService = Depends(get_motorista_service)):
    """Retorna o motorista com o veículo vinculado"""
    return resposta("Motorista carregado com sucesso", await service.detalhar(motorista_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_motorista(request: MotoristaCreate, service: MotoristaService = Depends(get_motorista_service)):
    """Cadastra motorista; terceirizado/agregado exige veiculo_id"""
    motorista = await service.criar(request)
    return resposta("Motorista criado com sucesso", motorista.to_dict())


@router.put("/{motorista_id}")
async def update_motorista(
    motorista_id: int,
    request: MotoristaUpdate,
    service: MotoristaService = Depends(get_motorista_service)
):
    motorista = await service.atualizar(motorista_id, request)
    return resposta("Motorista atualizado com sucesso", motorista.to_dict())


@router.delete("/{motorista_id}")
async def delete_motorista(motorista_id: int, service: MotoristaService = Depends(get_motorista_service)):
    await service.remover(motorista_id)
    return resposta("Motorista removido com sucesso")
