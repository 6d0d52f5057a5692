"""
Logistica Server - Gerador de códigos

Códigos legíveis por entidade (FRT-2026-001, FROTA-007, u12...) a partir de
um contador persistido por escopo na tabela `sequencias`. O incremento é um
único UPDATE relativo, então duas transações nunca recebem o mesmo número.

Quando um escopo ainda não tem contador ele é semeado pelo maior código já
gravado na tabela da entidade, para não reemitir códigos antigos.
"""
import logging
import random
import time
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from logistica.models import Anexo, Frete, Motorista, Pagamento, Sequencia, Veiculo
from logistica.models.base import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Prefixos cujo contador reinicia a cada ano
PREFIXOS_ANUAIS = frozenset({"FRT", "PAG", "MOT", "ANX"})

# Coluna onde cada prefixo grava seus códigos (usada só na semeadura)
COLUNAS_CODIGO = {
    "FRT": Frete.codigo_frete,
    "PAG": Pagamento.codigo_pagamento,
    "MOT": Motorista.codigo_motorista,
    "ANX": Anexo.codigo_anexo,
    "FROTA": Veiculo.codigo_frota,
}


def formatar_codigo(prefixo: str, numero: int, ano: Optional[int] = None) -> str:
    """
    Formata o número alocado conforme a convenção do prefixo:

    - FRT/PAG/MOT/ANX: PFX-YYYY-NNN
    - FROTA: FROTA-NNN
    - USR: u<n>
    - demais: PFX-NNNNNN

    O preenchimento com zeros é mínimo; números maiores não são truncados.
    """
    if prefixo in PREFIXOS_ANUAIS:
        return f"{prefixo}-{ano}-{numero:03d}"
    if prefixo == "FROTA":
        return f"FROTA-{numero:03d}"
    if prefixo == "USR":
        return f"u{numero}"
    return f"{prefixo}-{numero:06d}"


def escopo_de(prefixo: str, ano: Optional[int] = None) -> str:
    if prefixo in PREFIXOS_ANUAIS:
        return f"{prefixo}-{ano}"
    return prefixo


def codigo_fallback(prefixo: str) -> str:
    """Timestamp + sufixo aleatório; unicidade apenas probabilística"""
    return f"{prefixo}-{int(time.time() * 1000)}{random.randint(0, 99999):05d}"


def is_colisao_de_codigo(error: IntegrityError) -> bool:
    text = str(error.orig if error.orig is not None else error).lower()
    return "codigo_" in text


async def maior_codigo_existente(session: AsyncSession, prefixo: str, ano: Optional[int] = None) -> int:
    """
    Varredura legada: maior sufixo numérico já gravado para o escopo.

    Só é usada para semear um contador novo. Compara os sufixos como
    inteiros (ordem textual erra depois de 999).
    """
    coluna = COLUNAS_CODIGO.get(prefixo)
    if coluna is None:
        return 0

    padrao = f"{prefixo}-{ano}-%" if prefixo in PREFIXOS_ANUAIS else f"{prefixo}-%"
    result = await session.execute(select(coluna).where(coluna.like(padrao)))

    maior = 0
    for codigo in result.scalars():
        sufixo = codigo.rsplit("-", 1)[-1]
        if sufixo.isdigit():
            maior = max(maior, int(sufixo))
    return maior


class SequenceAllocator:
    """Alocador de números por escopo sobre a tabela sequencias"""

    def __init__(self, tentativas: int = 3):
        self.tentativas = max(1, tentativas)

    async def allocate(self, session: AsyncSession, escopo: str, semente: int = 0) -> int:
        """
        Próximo número do escopo, na transação corrente.

        Na primeira chamada do escopo cria o contador com `semente + 1`.
        """
        numero = await self._incrementar(session, escopo)
        if numero is not None:
            return numero

        try:
            async with session.begin_nested():
                session.add(Sequencia(escopo=escopo, valor=semente + 1))
            return semente + 1
        except IntegrityError:
            # Outra transação criou o contador entre o UPDATE e o INSERT
            numero = await self._incrementar(session, escopo)
            if numero is None:
                raise
            return numero

    async def _incrementar(self, session: AsyncSession, escopo: str) -> Optional[int]:
        result = await session.execute(
            update(Sequencia)
            .where(Sequencia.escopo == escopo)
            .values(valor=Sequencia.valor + 1, updated_at=utcnow())
            .returning(Sequencia.valor)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def proximo_codigo(self, session: AsyncSession, prefixo: str, ano: Optional[int] = None) -> str:
        """Aloca e formata o próximo código; cai no fallback se o contador falhar"""
        if prefixo in PREFIXOS_ANUAIS and ano is None:
            ano = utcnow().year
        escopo = escopo_de(prefixo, ano)

        try:
            # Savepoint: uma falha aqui não invalida a transação de quem chamou
            async with session.begin_nested():
                numero = await self._incrementar(session, escopo)
                if numero is None:
                    semente = await maior_codigo_existente(session, prefixo, ano)
                    numero = await self.allocate(session, escopo, semente)
        except SQLAlchemyError as e:
            codigo = codigo_fallback(prefixo)
            logger.warning(f"Contador '{escopo}' indisponível, usando código provisório {codigo}: {e}")
            return codigo

        return formatar_codigo(prefixo, numero, ano)

    async def inserir_com_codigo(
        self,
        session: AsyncSession,
        prefixo: str,
        inserir: Callable[[str], Awaitable[T]],
        ano: Optional[int] = None
    ) -> T:
        """
        Executa `inserir(codigo)` com um código novo, tentando de novo com o
        próximo código se o INSERT colidir na coluna de código.
        """
        for tentativa in range(1, self.tentativas):
            codigo = await self.proximo_codigo(session, prefixo, ano)
            try:
                async with session.begin_nested():
                    return await inserir(codigo)
            except IntegrityError as e:
                if not is_colisao_de_codigo(e):
                    raise
                logger.warning(f"Código {codigo} já existe, tentativa {tentativa}/{self.tentativas}")

        # Última tentativa: erro sobe para quem chamou
        codigo = await self.proximo_codigo(session, prefixo, ano)
        async with session.begin_nested():
            return await inserir(codigo)
