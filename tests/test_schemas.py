"""
Testes unitários: normalização de payloads e validadores de formato
"""
from datetime import date

import pytest
from pydantic import ValidationError

from logistica.schemas import (
    FazendaUpdate,
    FreteCreate,
    IncrementoVolume,
    MotoristaCreate,
    PagamentoCreate,
    VeiculoCreate,
    VeiculoUpdate,
    normalizar,
)
from logistica.schemas.base import TEXTO
from logistica.schemas.validators import cpf_valido, normalizar_data, validar_placa

from .conftest import frete_payload, motorista_payload, veiculo_payload


def pagamento_dados(**overrides):
    dados = {
        "motorista_id": 1,
        "periodo_fretes": "Março 2026",
        "fretes_incluidos": [1, 2],
        "total_toneladas": 54,
        "valor_por_tonelada": 150,
        "valor_total": 8100,
        "data_pagamento": "2026-03-31",
        "metodo_pagamento": "pix",
    }
    dados.update(overrides)
    return dados


class TestNormalizar:
    def test_applies_rules_in_order(self):
        saida = normalizar({"a": "  soja  ", "b": "   "}, {"a": TEXTO, "b": TEXTO})
        assert saida == {"a": "SOJA", "b": None}

    def test_absent_keys_stay_absent(self):
        assert normalizar({}, {"a": TEXTO}) == {}

    def test_single_rule(self):
        assert normalizar({"doc": "529.982.247-25"}, {"doc": "somente_digitos"}) == {"doc": "52998224725"}


class TestMotoristaSchema:
    """Documento, telefone e campos de texto"""

    def test_normalizes_fields(self):
        motorista = MotoristaCreate(**motorista_payload(nome="  joão silva ", documento="529.982.247-25"))
        assert motorista.nome == "JOÃO SILVA"
        assert motorista.documento == "52998224725"
        assert motorista.telefone == "67999991234"
        assert motorista.status == "ativo"

    def test_empty_document_becomes_null(self):
        assert MotoristaCreate(**motorista_payload(documento="")).documento is None

    @pytest.mark.parametrize("documento", ["52998224724", "11111111111", "123456"])
    def test_invalid_document(self, documento):
        with pytest.raises(ValidationError):
            MotoristaCreate(**motorista_payload(documento=documento))

    def test_cnpj_length_accepted(self):
        assert MotoristaCreate(**motorista_payload(documento="11.222.333/0001-81")).documento == "11222333000181"

    def test_invalid_phone(self):
        with pytest.raises(ValidationError):
            MotoristaCreate(**motorista_payload(telefone="123"))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            MotoristaCreate(**motorista_payload(apelido="Jão"))

    def test_cpf_check_digits(self):
        assert cpf_valido("52998224725")
        assert cpf_valido("11144477735")
        assert not cpf_valido("52998224726")


class TestVeiculoSchema:
    def test_plate_uppercased(self):
        veiculo = VeiculoCreate(**veiculo_payload(placa="abc1d23", tipo_veiculo="trucado"))
        assert veiculo.placa == "ABC1D23"
        assert veiculo.tipo_veiculo == "TRUCADO"

    def test_plate_formats(self):
        assert validar_placa("ABC-1234") == "ABC-1234"
        with pytest.raises(ValueError):
            validar_placa("1234567")

    def test_explicit_null_on_required_column(self):
        with pytest.raises(ValidationError):
            VeiculoUpdate.model_validate({"placa": None})

    def test_partial_update_only_sent_fields(self):
        assert VeiculoUpdate(km_atual=1000).alteracoes() == {"km_atual": 1000}


class TestFreteSchema:
    def test_brazilian_date(self):
        frete = FreteCreate(**frete_payload(1, 1, data_frete="10-03-2026"))
        assert frete.data_frete == date(2026, 3, 10)

    def test_camel_case_date_alias(self):
        dados = frete_payload(1, 1)
        dados["dataFrete"] = dados.pop("data_frete")
        assert FreteCreate.model_validate(dados).data_frete == date(2026, 3, 10)

    def test_invalid_date_format(self):
        with pytest.raises(ValidationError):
            FreteCreate(**frete_payload(1, 1, data_frete="2026/03/10"))

    def test_ticket_digits_only(self):
        with pytest.raises(ValidationError):
            FreteCreate(**frete_payload(1, 1, ticket="AB12"))

    def test_normalizar_data(self):
        assert normalizar_data("31-12-2025") == "2025-12-31"
        assert normalizar_data(date(2025, 1, 2)) == date(2025, 1, 2)


class TestPagamentoSchema:
    def test_csv_fretes(self):
        assert PagamentoCreate(**pagamento_dados(fretes_incluidos="1, 2,3")).fretes_incluidos == [1, 2, 3]

    def test_duplicated_ids(self):
        with pytest.raises(ValidationError):
            PagamentoCreate(**pagamento_dados(fretes_incluidos=[1, 1]))

    def test_list_is_optional(self):
        dados = pagamento_dados()
        del dados["fretes_incluidos"]
        assert PagamentoCreate(**dados).fretes_incluidos is None
        assert PagamentoCreate(**pagamento_dados(fretes_incluidos="")).fretes_incluidos is None


class TestFazendaSchema:
    def test_legacy_volume_names(self):
        incremento = IncrementoVolume.model_validate({"toneladas": 10, "sacas": 160, "faturamento": 1200})
        assert incremento.quantidade_sacas == 160
        assert incremento.receita_total == 1200

    def test_volume_defaults(self):
        incremento = IncrementoVolume(toneladas=5)
        assert incremento.quantidade_sacas == 0
        assert incremento.receita_total == 0

    def test_estado_restricted(self):
        with pytest.raises(ValidationError):
            FazendaUpdate(estado="RJ")

    def test_update_alteracoes(self):
        assert FazendaUpdate(safra="2026").alteracoes() == {"safra": "2026"}
