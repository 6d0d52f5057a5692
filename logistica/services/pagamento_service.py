"""
Logistica Server - Pagamento Service

Acerto com o motorista: o pagamento nasce com um conjunto fixo (talvez vazio) de fretes,
todos marcados (pagamento_id) na mesma transação do INSERT.
"""
import logging
import os
import uuid
from typing import Any, Dict, Optional

from fastapi import UploadFile

from logistica.database import transacao
from logistica.models import Anexo, Motorista, Pagamento
from logistica.models.base import utcnow
from logistica.core.exceptions import NotFoundError, ValidationFailure
from logistica.schemas import PagamentoCreate, PagamentoUpdate
from . import regras
from .base import EntityService

logger = logging.getLogger(__name__)


class PagamentoService(EntityService):
    model = Pagamento
    nome = "Pagamento"
    # motorista_id, quantidade_fretes e fretes_incluidos ficam de fora:
    # o conjunto de fretes acertados não muda depois da criação
    campos_atualizaveis = (
        "motorista_nome",
        "periodo_fretes",
        "total_toneladas",
        "valor_por_tonelada",
        "valor_total",
        "data_pagamento",
        "status",
        "metodo_pagamento",
        "comprovante_nome",
        "comprovante_url",
        "comprovante_data_upload",
        "observacoes",
    )

    async def criar(self, payload: PagamentoCreate) -> Pagamento:
        dados = payload.model_dump(exclude_none=True)
        fretes_ids = dados.pop("fretes_incluidos", None) or []
        dados["quantidade_fretes"] = regras.resolver_quantidade_fretes(
            dados.get("quantidade_fretes"), fretes_ids
        )
        dados["fretes_incluidos"] = ",".join(str(fid) for fid in fretes_ids) or None

        async with transacao(self.session):
            motorista = await self.session.get(Motorista, dados["motorista_id"])
            if motorista is None:
                raise NotFoundError("Motorista não encontrado")
            dados.setdefault("motorista_nome", motorista.nome)

            if fretes_ids:
                await regras.verificar_fretes_pendentes(self.session, fretes_ids)

            async def inserir(codigo: str) -> Pagamento:
                pagamento = Pagamento(codigo_pagamento=codigo, **dados)
                self.session.add(pagamento)
                await self.session.flush()
                return pagamento

            pagamento = await self.sequencias.inserir_com_codigo(self.session, "PAG", inserir)
            if fretes_ids:
                await regras.liquidar_fretes(self.session, pagamento.id, fretes_ids)

        logger.info(
            f"Pagamento {pagamento.codigo_pagamento} criado para motorista {pagamento.motorista_id}: "
            f"{len(fretes_ids)} frete(s) acertado(s), total {pagamento.valor_total}"
        )
        await self.invalidar_dashboard()
        return pagamento

    async def atualizar(self, pagamento_id: int, payload: PagamentoUpdate) -> Pagamento:
        valores = self.montar_update(payload.alteracoes())

        async with transacao(self.session):
            pagamento = await self.obter(pagamento_id, for_update=True)
            await self.aplicar_update(pagamento_id, valores)
            pagamento = await self.recarregar(pagamento)

        await self.invalidar_dashboard()
        return pagamento

    async def remover(self, pagamento_id: int):
        """Exclui o pagamento e devolve seus fretes para pendentes"""
        async with transacao(self.session):
            pagamento = await self.obter(pagamento_id)
            acertados = pagamento.fretes_ids
            liberados = await regras.desfazer_liquidacao(self.session, pagamento_id)
            await self.excluir(pagamento_id)

        if liberados != len(acertados):
            logger.warning(
                f"Pagamento {pagamento_id}: {len(acertados)} frete(s) registrados, "
                f"{liberados} ainda vinculados"
            )
        logger.info(f"Pagamento {pagamento_id} removido, {liberados} frete(s) voltaram a pendentes")
        await self.invalidar_dashboard()

    async def anexar_comprovante(
        self,
        pagamento_id: int,
        file: Optional[UploadFile],
        upload_dir: str,
        max_bytes: int
    ) -> Dict[str, Any]:
        """
        Grava o arquivo em disco, registra o anexo e carimba o comprovante
        no pagamento. Se a transação falhar o arquivo é apagado.
        """
        await self.obter(pagamento_id)

        if file is None or not file.filename:
            raise ValidationFailure.campo("file", "Nenhum arquivo foi enviado", "required")

        contents = await file.read()
        if not contents:
            raise ValidationFailure.campo("file", "Arquivo vazio")
        if len(contents) > max_bytes:
            raise ValidationFailure.campo("file", f"Arquivo excede o limite de {max_bytes} bytes", "too_big")

        ext = os.path.splitext(file.filename)[1].lower()
        filename = f"comprovante_{pagamento_id}_{uuid.uuid4().hex[:8]}{ext}"
        os.makedirs(upload_dir, exist_ok=True)
        filepath = os.path.join(upload_dir, filename)
        with open(filepath, "wb") as f:
            f.write(contents)

        url = f"/uploads/{filename}"

        try:
            async with transacao(self.session):
                async def inserir(codigo: str) -> Anexo:
                    anexo = Anexo(
                        codigo_anexo=codigo,
                        nome_original=file.filename,
                        nome_arquivo=filename,
                        url=url,
                        tipo_mime=file.content_type,
                        tamanho=len(contents),
                        entidade_tipo="pagamento",
                        entidade_id=pagamento_id,
                    )
                    self.session.add(anexo)
                    await self.session.flush()
                    return anexo

                anexo = await self.sequencias.inserir_com_codigo(self.session, "ANX", inserir)

                await self.aplicar_update(pagamento_id, {
                    "comprovante_nome": file.filename,
                    "comprovante_url": url,
                    "comprovante_data_upload": utcnow(),
                })
        except Exception:
            logger.exception(f"Falha ao registrar comprovante do pagamento {pagamento_id}")
            if os.path.exists(filepath):
                os.remove(filepath)
            raise

        logger.info(f"Comprovante {anexo.codigo_anexo} anexado ao pagamento {pagamento_id}")
        return {
            "anexoId": anexo.codigo_anexo,
            "id": anexo.id,
            "filename": filename,
            "url": url,
            "originalname": file.filename,
        }
