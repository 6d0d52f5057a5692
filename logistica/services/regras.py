"""
Logistica Server - Regras de consistência entre entidades

Tudo que lê estado persistido para decidir uma escrita roda na sessão
(transação) de quem chama; nenhuma função aqui faz commit.
Incrementos de agregados são sempre UPDATEs relativos à coluna, nunca
"lê, soma em Python e grava".
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from logistica.core.exceptions import BusinessRuleError, NotFoundError, ValidationFailure
from logistica.models import (
    Fazenda,
    Frete,
    Motorista,
    Veiculo,
    TIPOS_COM_CARRETA,
    TIPOS_COM_VEICULO,
)

logger = logging.getLogger(__name__)


# =====================================================
# CARRETA
# =====================================================

def exigir_placa_carreta(tipo_veiculo: Optional[str], placa_carreta: Optional[str]):
    if tipo_veiculo in TIPOS_COM_CARRETA and not placa_carreta:
        raise ValidationFailure.campo(
            "placa_carreta",
            "Placa da carreta obrigatória para o tipo de veículo selecionado",
            "required"
        )


def validar_carreta_atualizacao(alteracoes: Dict[str, Any], veiculo: Veiculo):
    """
    Só verifica quando o update mexe no tipo ou na placa da carreta.
    O que não veio no payload é lido do registro gravado.
    """
    if "tipo_veiculo" not in alteracoes and "placa_carreta" not in alteracoes:
        return

    tipo = alteracoes.get("tipo_veiculo") or veiculo.tipo_veiculo
    if "placa_carreta" in alteracoes:
        placa = alteracoes["placa_carreta"]
    else:
        placa = veiculo.placa_carreta

    exigir_placa_carreta(tipo, placa)


# =====================================================
# VÍNCULO MOTORISTA x VEÍCULO
# =====================================================

def exigir_veiculo_para_tipo(dados: Dict[str, Any]):
    """Terceirizado/agregado precisa de veiculo_id quando o tipo vem no payload"""
    if dados.get("tipo") in TIPOS_COM_VEICULO and not dados.get("veiculo_id"):
        raise ValidationFailure.campo(
            "veiculo_id",
            "Veículo obrigatório para motoristas terceirizados/agregados",
            "required"
        )


async def vincular_veiculo(session: AsyncSession, motorista_id: int, veiculo_id: int) -> Veiculo:
    """
    Define o motorista fixo do veículo mantendo o vínculo 1:1:
    qualquer outro veículo preso ao motorista é liberado antes.
    """
    veiculo = await session.get(Veiculo, veiculo_id, with_for_update=True)
    if veiculo is None:
        raise NotFoundError("Veículo não encontrado")

    anteriores = await session.execute(
        update(Veiculo)
        .where(Veiculo.motorista_fixo_id == motorista_id, Veiculo.id != veiculo_id)
        .values(motorista_fixo_id=None)
        .execution_options(synchronize_session="fetch")
    )
    if anteriores.rowcount:
        logger.info(f"Motorista {motorista_id}: {anteriores.rowcount} vínculo(s) anterior(es) liberado(s)")

    if veiculo.motorista_fixo_id not in (None, motorista_id):
        logger.info(f"Veículo {veiculo.placa} deixa o motorista {veiculo.motorista_fixo_id}")

    veiculo.motorista_fixo_id = motorista_id
    await session.flush()
    return veiculo


async def liberar_vinculos(session: AsyncSession, motorista_id: int) -> int:
    result = await session.execute(
        update(Veiculo)
        .where(Veiculo.motorista_fixo_id == motorista_id)
        .values(motorista_fixo_id=None)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


# =====================================================
# FINANCEIRO DO FRETE
# =====================================================

def _arredondar(valor: Optional[float]) -> Optional[float]:
    return None if valor is None else round(valor, 2)


def derivar_financeiro(dados: Dict[str, Any], atual: Optional[Frete] = None) -> Dict[str, Any]:
    """
    Completa receita e resultado de um payload de frete.

    - receita: explícita, senão toneladas * valor_por_tonelada (no update o
      fator ausente vem do registro gravado e só recalcula se um fator mudou)
    - resultado: explícito, senão receita - custos sempre que receita ou
      custos mudaram

    A receita é resolvida antes do resultado.
    """
    saida = dict(dados)
    criacao = atual is None

    def efetivo(campo):
        if campo in saida:
            return saida[campo]
        return getattr(atual, campo, None)

    if saida.get("receita") is None:
        fator_mudou = "toneladas" in saida or "valor_por_tonelada" in saida or "receita" in saida
        if criacao or fator_mudou:
            toneladas = efetivo("toneladas")
            valor_por_tonelada = efetivo("valor_por_tonelada")
            if toneladas is not None and valor_por_tonelada is not None:
                saida["receita"] = _arredondar(toneladas * valor_por_tonelada)

    if criacao and saida.get("custos") is None:
        saida["custos"] = 0

    if saida.get("resultado") is None and ("receita" in saida or "custos" in saida):
        receita = efetivo("receita")
        custos = efetivo("custos") or 0
        if receita is not None:
            saida["resultado"] = _arredondar(receita - custos)

    return saida


async def aplicar_custo(session: AsyncSession, frete_id: int, delta: float):
    """
    Soma `delta` aos custos do frete e recalcula o resultado com a receita
    gravada. Delta negativo estorna (exclusão/redução de custo).
    """
    existe = await session.scalar(
        select(Frete.id).where(Frete.id == frete_id).with_for_update()
    )
    if existe is None:
        raise NotFoundError("Frete não encontrado")

    custos_atuais = func.coalesce(Frete.custos, 0)
    await session.execute(
        update(Frete)
        .where(Frete.id == frete_id)
        .values(
            custos=custos_atuais + delta,
            resultado=func.coalesce(Frete.receita, 0) - (custos_atuais + delta),
        )
        .execution_options(synchronize_session=False)
    )


# =====================================================
# ACUMULADOS (FAZENDA / MOTORISTA)
# =====================================================

async def acumular_fazenda(
    session: AsyncSession,
    fazenda_id: int,
    sacas: int,
    toneladas: float,
    receita: float,
    data_frete: Optional[date] = None
) -> Fazenda:
    """Incrementa os totais da fazenda; 404 se ela não existir"""
    fazenda = await session.get(Fazenda, fazenda_id)
    if fazenda is None:
        raise NotFoundError("Fazenda não encontrada")

    valores = {
        "total_sacas_carregadas": func.coalesce(Fazenda.total_sacas_carregadas, 0) + (sacas or 0),
        "total_toneladas": func.coalesce(Fazenda.total_toneladas, 0) + (toneladas or 0),
        "faturamento_total": func.coalesce(Fazenda.faturamento_total, 0) + (receita or 0),
    }
    if data_frete is not None:
        valores["ultimo_frete"] = data_frete

    await session.execute(
        update(Fazenda)
        .where(Fazenda.id == fazenda_id)
        .values(**valores)
        .execution_options(synchronize_session=False)
    )
    return fazenda


async def registrar_viagem(session: AsyncSession, motorista_id: int, receita: float):
    await session.execute(
        update(Motorista)
        .where(Motorista.id == motorista_id)
        .values(
            receita_gerada=func.coalesce(Motorista.receita_gerada, 0) + (receita or 0),
            viagens_realizadas=func.coalesce(Motorista.viagens_realizadas, 0) + 1,
        )
        .execution_options(synchronize_session=False)
    )


# =====================================================
# ACERTO (PAGAMENTO x FRETES)
# =====================================================

def resolver_quantidade_fretes(quantidade: Optional[int], fretes_ids: List[int]) -> int:
    """Sem fretes vinculados vale o valor informado (0 se ausente)"""
    if not fretes_ids:
        return quantidade or 0
    if quantidade is None:
        return len(fretes_ids)
    if quantidade != len(fretes_ids):
        raise ValidationFailure.campo(
            "quantidade_fretes",
            f"quantidade_fretes ({quantidade}) difere do número de fretes incluídos ({len(fretes_ids)})"
        )
    return quantidade


async def verificar_fretes_pendentes(session: AsyncSession, fretes_ids: List[int]):
    """Todos os fretes devem existir e estar sem pagamento; trava as linhas lidas"""
    result = await session.execute(
        select(Frete.id, Frete.pagamento_id)
        .where(Frete.id.in_(fretes_ids))
        .with_for_update()
    )
    encontrados = {row.id: row.pagamento_id for row in result}

    faltando = [fid for fid in fretes_ids if fid not in encontrados]
    if faltando:
        raise NotFoundError(f"Frete(s) não encontrado(s): {', '.join(map(str, faltando))}")

    pagos = [fid for fid in fretes_ids if encontrados[fid] is not None]
    if pagos:
        logger.warning(f"Acerto recusado, fretes já pagos: {pagos}")
        raise BusinessRuleError(
            f"Frete(s) já vinculado(s) a outro pagamento: {', '.join(map(str, pagos))}",
            code="FRETE_JA_PAGO"
        )


async def liquidar_fretes(session: AsyncSession, pagamento_id: int, fretes_ids: List[int]):
    """UPDATE único; a condição pagamento_id IS NULL fecha a janela entre leitura e escrita"""
    result = await session.execute(
        update(Frete)
        .where(Frete.id.in_(fretes_ids), Frete.pagamento_id.is_(None))
        .values(pagamento_id=pagamento_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != len(fretes_ids):
        raise BusinessRuleError(
            "Um ou mais fretes foram pagos por outra operação",
            code="FRETE_JA_PAGO"
        )


async def desfazer_liquidacao(session: AsyncSession, pagamento_id: int) -> int:
    result = await session.execute(
        update(Frete)
        .where(Frete.pagamento_id == pagamento_id)
        .values(pagamento_id=None)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
