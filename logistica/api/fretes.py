"""
Logistica Server - Fretes API
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from logistica.core.exceptions import ValidationFailure
from logistica.schemas import FreteCreate, FreteUpdate, resposta
from logistica.services import FreteService
from .deps import get_frete_service

router = APIRouter(prefix="/fretes", tags=["Fretes"])


@router.get("")
async def list_fretes(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    data_inicio: Optional[date] = Query(None),
    data_fim: Optional[date] = Query(None),
    motorista_id: Optional[int] = Query(None),
    fazenda_id: Optional[int] = Query(None),
    service: FreteService = Depends(get_frete_service)
):
    """Lista fretes (mais recentes primeiro)"""
    fretes, meta = await service.listar_fretes(
        page,
        limit,
        data_inicio=data_inicio,
        data_fim=data_fim,
        motorista_id=motorista_id,
        fazenda_id=fazenda_id
    )
    return resposta("Fretes listados com sucesso", fretes, meta)


@router.get("/pendentes")
async def list_pendentes(
    motorista_id: Optional[str] = Query(None),
    service: FreteService = Depends(get_frete_service)
):
    """Fretes ainda não incluídos em pagamento"""
    filtro = None
    if motorista_id:
        if not motorista_id.strip().isdigit():
            raise ValidationFailure.campo("motorista_id", "motorista_id inválido")
        filtro = int(motorista_id)

    return resposta("Fretes pendentes listados", await service.pendentes(filtro))


@router.get("/{frete_id}")
async def get_frete(frete_id: int, service: FreteService = Depends(get_frete_service)):
    return resposta("Frete carregado com sucesso", await service.detalhar(frete_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_frete(request: FreteCreate, service: FreteService = Depends(get_frete_service)):
    """Cria frete (código FRT-<ano>-NNN) e acumula fazenda/motorista"""
    frete = await service.criar(request)
    return resposta("Frete criado com sucesso", frete.to_dict())


@router.put("/{frete_id}")
async def update_frete(
    frete_id: int,
    request: FreteUpdate,
    service: FreteService = Depends(get_frete_service)
):
    frete = await service.atualizar(frete_id, request)
    return resposta("Frete atualizado com sucesso", frete.to_dict())


@router.delete("/{frete_id}")
async def delete_frete(frete_id: int, service: FreteService = Depends(get_frete_service)):
    await service.remover(frete_id)
    return resposta("Frete removido com sucesso")
