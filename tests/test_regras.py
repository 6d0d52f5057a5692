"""
Testes unitários das regras puras (sem banco)
"""
from types import SimpleNamespace

import pytest

from logistica.core.exceptions import ValidationFailure
from logistica.services import regras


def frete_gravado(**overrides):
    dados = {
        "toneladas": 10.0,
        "valor_por_tonelada": 100.0,
        "receita": 1000.0,
        "custos": 200.0,
        "resultado": 800.0,
    }
    dados.update(overrides)
    return SimpleNamespace(**dados)


class TestDerivarFinanceiroCriacao:
    def test_receita_from_tonnage(self):
        saida = regras.derivar_financeiro({"toneladas": 27, "valor_por_tonelada": 150})
        assert saida["receita"] == 4050
        assert saida["custos"] == 0
        assert saida["resultado"] == 4050

    def test_explicit_receita_wins(self):
        saida = regras.derivar_financeiro({"toneladas": 27, "valor_por_tonelada": 150, "receita": 5000})
        assert saida["receita"] == 5000
        assert saida["resultado"] == 5000

    def test_explicit_resultado_wins(self):
        saida = regras.derivar_financeiro(
            {"toneladas": 10, "valor_por_tonelada": 100, "custos": 50, "resultado": 1}
        )
        assert saida["receita"] == 1000
        assert saida["resultado"] == 1

    def test_rounding(self):
        saida = regras.derivar_financeiro({"toneladas": 1.333, "valor_por_tonelada": 3})
        assert saida["receita"] == 4.0


class TestDerivarFinanceiroAtualizacao:
    def test_factor_change_recomputes(self):
        saida = regras.derivar_financeiro({"toneladas": 20}, frete_gravado())
        assert saida["receita"] == 2000
        assert saida["resultado"] == 1800

    def test_custos_change_recomputes_resultado(self):
        saida = regras.derivar_financeiro({"custos": 300}, frete_gravado())
        assert "receita" not in saida
        assert saida["resultado"] == 700

    def test_unrelated_change_untouched(self):
        saida = regras.derivar_financeiro({"origem": "MARACAJU"}, frete_gravado())
        assert saida == {"origem": "MARACAJU"}

    def test_input_not_mutated(self):
        dados = {"toneladas": 20}
        regras.derivar_financeiro(dados, frete_gravado())
        assert dados == {"toneladas": 20}


class TestCarreta:
    @pytest.mark.parametrize("tipo", ["CARRETA", "BITREM", "RODOTREM"])
    def test_required_for_trailer_types(self, tipo):
        with pytest.raises(ValidationFailure) as exc:
            regras.exigir_placa_carreta(tipo, None)
        assert exc.value.errors[0]["field"] == "placa_carreta"

    def test_not_required_for_truck(self):
        regras.exigir_placa_carreta("TRUCADO", None)

    def test_update_reads_stored_type(self):
        veiculo = SimpleNamespace(tipo_veiculo="BITREM", placa_carreta="DEF5678")
        with pytest.raises(ValidationFailure):
            regras.validar_carreta_atualizacao({"placa_carreta": None}, veiculo)

    def test_update_without_related_fields_skips(self):
        veiculo = SimpleNamespace(tipo_veiculo="BITREM", placa_carreta=None)
        regras.validar_carreta_atualizacao({"modelo": "SCANIA"}, veiculo)


class TestVeiculoObrigatorio:
    @pytest.mark.parametrize("tipo", ["terceirizado", "agregado"])
    def test_required(self, tipo):
        with pytest.raises(ValidationFailure) as exc:
            regras.exigir_veiculo_para_tipo({"tipo": tipo})
        assert exc.value.errors[0]["field"] == "veiculo_id"

    def test_proprio_without_vehicle(self):
        regras.exigir_veiculo_para_tipo({"tipo": "proprio"})

    def test_with_vehicle(self):
        regras.exigir_veiculo_para_tipo({"tipo": "agregado", "veiculo_id": 3})
