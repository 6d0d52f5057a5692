"""
Testes de integração: fretes, custos e acumulados
"""
import pytest

from .conftest import CPF_VALIDO_2, frete_payload, motorista_payload, veiculo_payload
from .test_api_cadastros import ano_atual


def custo_payload(frete_id, **overrides):
    payload = {
        "frete_id": frete_id,
        "tipo": "combustivel",
        "descricao": "Diesel posto Rio Brilhante",
        "valor": 800,
        "data": "2026-03-10",
    }
    payload.update(overrides)
    return payload


async def criar_frete(client, motorista_id, caminhao_id, **overrides):
    response = await client.post("/api/fretes", json=frete_payload(motorista_id, caminhao_id, **overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def obter_frete(client, frete_id):
    response = await client.get(f"/api/fretes/{frete_id}")
    assert response.status_code == 200
    return response.json()["data"]


class TestCriacaoFrete:
    async def test_sequential_codes(self, client, motorista, veiculo):
        primeiro = await criar_frete(client, motorista["id"], veiculo["id"])
        segundo = await criar_frete(client, motorista["id"], veiculo["id"])

        ano = ano_atual()
        assert primeiro["codigo_frete"] == f"FRT-{ano}-001"
        assert segundo["codigo_frete"] == f"FRT-{ano}-002"

    async def test_revenue_derived(self, frete):
        assert frete["receita"] == 4050
        assert frete["custos"] == 0
        assert frete["resultado"] == 4050
        assert frete["pagamento_id"] is None

    async def test_explicit_revenue(self, client, motorista, veiculo):
        frete = await criar_frete(client, motorista["id"], veiculo["id"], receita=5000)
        assert frete["receita"] == 5000
        assert frete["resultado"] == 5000

    async def test_cached_names_filled(self, frete, motorista, veiculo):
        assert frete["motorista_nome"] == motorista["nome"]
        assert frete["caminhao_placa"] == veiculo["placa"]

    async def test_detail_joins_current_records(self, client, frete):
        data = await obter_frete(client, frete["id"])
        assert data["motorista_tipo"] == "proprio"
        assert data["motorista_telefone"] == "67999991234"
        assert data["caminhao_modelo"] == "VOLVO FH 540"

    async def test_driver_counters(self, client, frete):
        data = (await client.get(f"/api/motoristas/{frete['motorista_id']}")).json()["data"]
        assert data["receita_gerada"] == 4050
        assert data["viagens_realizadas"] == 1

    async def test_farm_rollup(self, client, motorista, veiculo, fazenda):
        frete = await criar_frete(client, motorista["id"], veiculo["id"], fazenda_id=fazenda["id"])
        assert frete["fazenda_nome"] == "SANTA HELENA"

        data = (await client.get(f"/api/fazendas/{fazenda['id']}")).json()["data"]
        assert data["total_sacas_carregadas"] == 450
        assert data["total_toneladas"] == 27
        assert data["faturamento_total"] == 4050
        assert data["ultimo_frete"] == "2026-03-10"

    async def test_unknown_farm_creates_nothing(self, client, motorista, veiculo):
        response = await client.post(
            "/api/fretes",
            json=frete_payload(motorista["id"], veiculo["id"], fazenda_id=999)
        )
        assert response.status_code == 404

        listagem = (await client.get("/api/fretes")).json()
        assert listagem["meta"]["total"] == 0
        data = (await client.get(f"/api/motoristas/{motorista['id']}")).json()["data"]
        assert data["viagens_realizadas"] == 0

    async def test_unknown_driver(self, client, veiculo):
        response = await client.post("/api/fretes", json=frete_payload(999, veiculo["id"]))
        assert response.status_code == 404

    async def test_camel_case_date(self, client, motorista, veiculo):
        payload = frete_payload(motorista["id"], veiculo["id"])
        payload["dataFrete"] = payload.pop("data_frete")
        response = await client.post("/api/fretes", json=payload)
        assert response.status_code == 201
        assert response.json()["data"]["data_frete"] == "2026-03-10"


class TestAtualizacaoFrete:
    async def test_tonnage_change_recomputes(self, client, frete):
        response = await client.put(f"/api/fretes/{frete['id']}", json={"toneladas": 30})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["receita"] == 4500
        assert data["resultado"] == 4500

    async def test_only_unknown_fields(self, client, frete):
        response = await client.put(f"/api/fretes/{frete['id']}", json={})
        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_UPDATE"

    async def test_extra_field_rejected(self, client, frete):
        response = await client.put(f"/api/fretes/{frete['id']}", json={"pagamento_id": 1})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_unknown_vehicle(self, client, frete):
        response = await client.put(f"/api/fretes/{frete['id']}", json={"caminhao_id": 999})
        assert response.status_code == 404

    async def test_reassignment_refreshes_names(self, client, frete):
        outro = (await client.post(
            "/api/motoristas",
            json=motorista_payload(nome="Maria Souza", documento=CPF_VALIDO_2)
        )).json()["data"]
        caminhao = (await client.post("/api/frota", json=veiculo_payload(placa="XYZ9876"))).json()["data"]

        response = await client.put(
            f"/api/fretes/{frete['id']}",
            json={"motorista_id": outro["id"], "caminhao_id": caminhao["id"]}
        )
        assert response.status_code == 200

        data = await obter_frete(client, frete["id"])
        assert data["motorista_nome"] == "MARIA SOUZA"
        assert data["caminhao_placa"] == "XYZ9876"

    async def test_explicit_name_wins(self, client, frete, motorista):
        response = await client.put(
            f"/api/fretes/{frete['id']}",
            json={"motorista_id": motorista["id"], "motorista_nome": "Joao S."}
        )
        assert response.status_code == 200
        assert response.json()["data"]["motorista_nome"] == "JOAO S."


class TestListagemFretes:
    async def test_filters(self, client, motorista, veiculo):
        outro = (await client.post(
            "/api/motoristas",
            json=motorista_payload(nome="Maria Souza", documento=CPF_VALIDO_2)
        )).json()["data"]
        await criar_frete(client, motorista["id"], veiculo["id"], data_frete="2026-01-05")
        await criar_frete(client, outro["id"], veiculo["id"], data_frete="2026-02-05")

        response = await client.get("/api/fretes", params={"motorista_id": outro["id"]})
        data = response.json()["data"]
        assert [f["motorista_id"] for f in data] == [outro["id"]]

        response = await client.get("/api/fretes", params={"data_inicio": "2026-02-01"})
        assert response.json()["meta"]["total"] == 1

    async def test_most_recent_first(self, client, motorista, veiculo):
        await criar_frete(client, motorista["id"], veiculo["id"], data_frete="2026-01-05")
        await criar_frete(client, motorista["id"], veiculo["id"], data_frete="2026-02-05")

        data = (await client.get("/api/fretes")).json()["data"]
        assert [f["data_frete"] for f in data] == ["2026-02-05", "2026-01-05"]

    async def test_pendentes_invalid_driver_id(self, client):
        response = await client.get("/api/fretes/pendentes", params={"motorista_id": "abc"})
        assert response.status_code == 400


class TestCustos:
    """Custos sempre refletidos em custos/resultado do frete"""

    async def test_rollup_create_update_delete(self, client, frete):
        primeiro = await client.post("/api/custos", json=custo_payload(frete["id"]))
        assert primeiro.status_code == 201
        segundo = await client.post(
            "/api/custos",
            json=custo_payload(frete["id"], tipo="pedagio", descricao="Pedágio BR-163", valor=200)
        )
        assert segundo.status_code == 201

        data = await obter_frete(client, frete["id"])
        assert data["custos"] == pytest.approx(1000)
        assert data["resultado"] == pytest.approx(3050)

        response = await client.put(f"/api/custos/{primeiro.json()['data']['id']}", json={"valor": 500})
        assert response.status_code == 200
        data = await obter_frete(client, frete["id"])
        assert data["custos"] == pytest.approx(700)
        assert data["resultado"] == pytest.approx(3350)

        response = await client.delete(f"/api/custos/{segundo.json()['data']['id']}")
        assert response.status_code == 200
        data = await obter_frete(client, frete["id"])
        assert data["custos"] == pytest.approx(500)
        assert data["resultado"] == pytest.approx(3550)

    async def test_delete_restores_result(self, client, frete):
        custo = (await client.post("/api/custos", json=custo_payload(frete["id"]))).json()["data"]
        await client.delete(f"/api/custos/{custo['id']}")

        data = await obter_frete(client, frete["id"])
        assert data["custos"] == pytest.approx(0)
        assert data["resultado"] == pytest.approx(frete["resultado"])

    async def test_move_between_freights(self, client, frete):
        outro = await criar_frete(client, frete["motorista_id"], frete["caminhao_id"])
        custo = (await client.post("/api/custos", json=custo_payload(frete["id"]))).json()["data"]

        response = await client.put(f"/api/custos/{custo['id']}", json={"frete_id": outro["id"]})
        assert response.status_code == 200

        assert (await obter_frete(client, frete["id"]))["custos"] == pytest.approx(0)
        assert (await obter_frete(client, outro["id"]))["custos"] == pytest.approx(800)

    async def test_unknown_freight(self, client):
        response = await client.post("/api/custos", json=custo_payload(999))
        assert response.status_code == 404

    async def test_invalid_type(self, client, frete):
        response = await client.post("/api/custos", json=custo_payload(frete["id"], tipo="multa"))
        assert response.status_code == 400

    async def test_delete_freight_removes_costs(self, client, frete):
        custo = (await client.post("/api/custos", json=custo_payload(frete["id"]))).json()["data"]

        response = await client.delete(f"/api/fretes/{frete['id']}")
        assert response.status_code == 200
        assert (await client.get(f"/api/custos/{custo['id']}")).status_code == 404
