"""
Logistica Server - Pagamentos API
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from logistica.core.config import Settings
from logistica.schemas import PagamentoCreate, PagamentoUpdate, resposta
from logistica.services import PagamentoService
from .deps import get_app_settings, get_pagamento_service

router = APIRouter(prefix="/pagamentos", tags=["Pagamentos"])


@router.get("")
async def list_pagamentos(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: PagamentoService = Depends(get_pagamento_service)
):
    pagamentos, meta = await service.listar(page, limit)
    return resposta("Pagamentos listados com sucesso", [p.to_dict() for p in pagamentos], meta)


@router.get("/{pagamento_id}")
async def get_pagamento(pagamento_id: int, service: PagamentoService = Depends(get_pagamento_service)):
    pagamento = await service.obter(pagamento_id)
    return resposta("Pagamento carregado com sucesso", pagamento.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pagamento(request: PagamentoCreate, service: PagamentoService = Depends(get_pagamento_service)):
    """Cria pagamento e marca os fretes incluídos como pagos"""
    pagamento = await service.criar(request)
    return resposta("Pagamento criado com sucesso", pagamento.to_dict())


@router.put("/{pagamento_id}")
async def update_pagamento(
    pagamento_id: int,
    request: PagamentoUpdate,
    service: PagamentoService = Depends(get_pagamento_service)
):
    pagamento = await service.atualizar(pagamento_id, request)
    return resposta("Pagamento atualizado com sucesso", pagamento.to_dict())


@router.delete("/{pagamento_id}")
async def delete_pagamento(pagamento_id: int, service: PagamentoService = Depends(get_pagamento_service)):
    """Remove pagamento; os fretes voltam a ficar pendentes"""
    await service.remover(pagamento_id)
    return resposta("Pagamento removido com sucesso")


@router.post("/{pagamento_id}/comprovante")
async def upload_comprovante(
    pagamento_id: int,
    file: Optional[UploadFile] = File(None),
    service: PagamentoService = Depends(get_pagamento_service),
    settings: Settings = Depends(get_app_settings)
):
    """Faz upload do comprovante do pagamento"""
    data = await service.anexar_comprovante(
        pagamento_id,
        file,
        upload_dir=settings.UPLOAD_DIR,
        max_bytes=settings.MAX_UPLOAD_BYTES
    )
    return resposta("Comprovante enviado com sucesso", data)
