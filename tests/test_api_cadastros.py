"""
Testes de integração: frota, motoristas, fazendas e envelope de erros
"""
from datetime import datetime, timezone

from .conftest import CPF_VALIDO_2, fazenda_payload, frete_payload, motorista_payload, veiculo_payload


def ano_atual():
    return datetime.now(timezone.utc).year


class TestFrota:
    """Cadastro de veículos e regra da carreta"""

    async def test_create_generates_code(self, client):
        response = await client.post("/api/frota", json=veiculo_payload(placa="abc1d23"))
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["codigo_frota"] == "FROTA-001"
        assert body["data"]["placa"] == "ABC1D23"
        assert body["data"]["status"] == "disponivel"

    async def test_trailer_plate_required_on_create(self, client):
        response = await client.post("/api/frota", json=veiculo_payload(tipo_veiculo="CARRETA"))
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"][0]["field"] == "placa_carreta"

        response = await client.post(
            "/api/frota",
            json=veiculo_payload(tipo_veiculo="CARRETA", placa_carreta="DEF5678")
        )
        assert response.status_code == 201

    async def test_trailer_rule_on_update(self, client, veiculo):
        url = f"/api/frota/{veiculo['id']}"

        response = await client.put(url, json={"tipo_veiculo": "BITREM"})
        assert response.status_code == 400

        response = await client.put(url, json={"tipo_veiculo": "BITREM", "placa_carreta": "DEF5678"})
        assert response.status_code == 200
        assert response.json()["data"]["placa_carreta"] == "DEF5678"

        # Sem a placa da carreta o tipo gravado (BITREM) continua exigindo
        response = await client.put(url, json={"placa_carreta": None})
        assert response.status_code == 400

        response = await client.put(url, json={"modelo": "Scania R450"})
        assert response.status_code == 200
        assert response.json()["data"]["modelo"] == "SCANIA R450"

    async def test_duplicate_plate(self, client, veiculo):
        response = await client.post("/api/frota", json=veiculo_payload())
        assert response.status_code == 409
        assert response.json()["message"] == "Placa já cadastrada"

    async def test_empty_update(self, client, veiculo):
        response = await client.put(f"/api/frota/{veiculo['id']}", json={})
        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_UPDATE"

    async def test_list_vagos(self, client, motorista, veiculo):
        outro = await client.post(
            "/api/frota",
            json=veiculo_payload(placa="XYZ9876", motorista_fixo_id=motorista["id"])
        )
        assert outro.status_code == 201

        response = await client.get("/api/frota", params={"vagos": "1"})
        placas = [v["placa"] for v in response.json()["data"]]
        assert placas == [veiculo["placa"]]

    async def test_unprefixed_route(self, client, veiculo):
        response = await client.get(f"/frota/{veiculo['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["placa"] == veiculo["placa"]


class TestMotoristas:
    async def test_create(self, client):
        response = await client.post("/api/motoristas", json=motorista_payload())
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["codigo_motorista"] == f"MOT-{ano_atual()}-001"
        assert data["nome"] == "JOÃO DA SILVA"
        assert data["telefone"] == "67999991234"
        assert data["receita_gerada"] == 0
        assert data["viagens_realizadas"] == 0

    async def test_duplicate_document(self, client, motorista):
        response = await client.post("/api/motoristas", json=motorista_payload(nome="Outro Nome"))
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Documento já cadastrado"

    async def test_invalid_payload_envelope(self, client):
        response = await client.post("/api/motoristas", json=motorista_payload(documento="52998224724"))
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"][0]["field"] == "documento"

    async def test_outsourced_requires_vehicle(self, client):
        response = await client.post("/api/motoristas", json=motorista_payload(tipo="terceirizado"))
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "veiculo_id"

    async def test_outsourced_with_vehicle_binds(self, client, veiculo):
        response = await client.post(
            "/api/motoristas",
            json=motorista_payload(tipo="agregado", veiculo_id=veiculo["id"])
        )
        assert response.status_code == 201
        motorista_id = response.json()["data"]["id"]

        response = await client.get(f"/api/frota/{veiculo['id']}")
        assert response.json()["data"]["motorista_fixo_id"] == motorista_id

    async def test_unknown_vehicle(self, client):
        response = await client.post(
            "/api/motoristas",
            json=motorista_payload(tipo="agregado", veiculo_id=999)
        )
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_rebinding_releases_previous_vehicle(self, client, motorista, veiculo):
        segundo = (await client.post("/api/frota", json=veiculo_payload(placa="XYZ9876"))).json()["data"]
        url = f"/api/motoristas/{motorista['id']}"

        response = await client.put(url, json={"veiculo_id": veiculo["id"]})
        assert response.status_code == 200

        response = await client.put(url, json={"veiculo_id": segundo["id"]})
        assert response.status_code == 200

        primeiro = (await client.get(f"/api/frota/{veiculo['id']}")).json()["data"]
        atual = (await client.get(f"/api/frota/{segundo['id']}")).json()["data"]
        assert primeiro["motorista_fixo_id"] is None
        assert atual["motorista_fixo_id"] == motorista["id"]

        detalhe = (await client.get(url)).json()["data"]
        assert detalhe["veiculo_vinculado"]["id"] == segundo["id"]

    async def test_vehicle_taken_from_other_driver(self, client, motorista, veiculo):
        outro = (await client.post(
            "/api/motoristas",
            json=motorista_payload(nome="Maria Souza", documento=CPF_VALIDO_2)
        )).json()["data"]

        await client.put(f"/api/motoristas/{motorista['id']}", json={"veiculo_id": veiculo["id"]})
        response = await client.put(f"/api/motoristas/{outro['id']}", json={"veiculo_id": veiculo["id"]})
        assert response.status_code == 200

        data = (await client.get(f"/api/frota/{veiculo['id']}")).json()["data"]
        assert data["motorista_fixo_id"] == outro["id"]
        detalhe = (await client.get(f"/api/motoristas/{motorista['id']}")).json()["data"]
        assert detalhe["veiculo_vinculado"] is None

    async def test_delete_releases_vehicle(self, client, motorista, veiculo):
        await client.put(f"/api/motoristas/{motorista['id']}", json={"veiculo_id": veiculo["id"]})

        response = await client.delete(f"/api/motoristas/{motorista['id']}")
        assert response.status_code == 200

        data = (await client.get(f"/api/frota/{veiculo['id']}")).json()["data"]
        assert data["motorista_fixo_id"] is None
        assert (await client.get(f"/api/motoristas/{motorista['id']}")).status_code == 404

    async def test_delete_with_freights_conflicts(self, client, frete):
        response = await client.delete(f"/api/motoristas/{frete['motorista_id']}")
        assert response.status_code == 409

    async def test_pagination_clamp(self, client, motorista):
        response = await client.get("/api/motoristas", params={"limit": "1000"})
        meta = response.json()["meta"]
        assert meta["limit"] == 200
        assert meta["total"] == 1

        response = await client.get("/api/motoristas", params={"page": "-3", "limit": "abc"})
        meta = response.json()["meta"]
        assert meta["page"] == 1
        assert meta["limit"] == 50

    async def test_page_out_of_range(self, client, motorista):
        for page in ("inf", "1e30"):
            response = await client.get("/api/motoristas", params={"page": page})
            assert response.status_code == 200
            body = response.json()
            assert body["meta"]["page"] == 1
            assert len(body["data"]) == 1


class TestFazendas:
    async def test_create_and_update(self, client, fazenda):
        assert fazenda["fazenda"] == "SANTA HELENA"
        assert fazenda["total_toneladas"] == 0

        response = await client.put(f"/api/fazendas/{fazenda['id']}", json={"colheita_finalizada": True})
        assert response.status_code == 200
        assert response.json()["data"]["colheita_finalizada"] is True

    async def test_invalid_state(self, client):
        response = await client.post("/api/fazendas", json=fazenda_payload(estado="RJ"))
        assert response.status_code == 400

    async def test_increment_volume(self, client, fazenda):
        url = f"/api/fazendas/{fazenda['id']}/incrementar-volume"

        response = await client.post(url, json={"toneladas": 10, "sacas": 160, "faturamento": 1200})
        assert response.status_code == 200
        response = await client.post(url, json={"toneladas": 5, "quantidadeSacas": 80, "receitaTotal": 600})
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["total_toneladas"] == 15
        assert data["total_sacas_carregadas"] == 240
        assert data["faturamento_total"] == 1800
        assert data["ultimo_frete"] == datetime.now(timezone.utc).date().isoformat()

    async def test_increment_unknown_farm(self, client):
        response = await client.post("/api/fazendas/999/incrementar-volume", json={"toneladas": 1})
        assert response.status_code == 404

    async def test_increment_requires_positive_tonnage(self, client, fazenda):
        response = await client.post(
            f"/api/fazendas/{fazenda['id']}/incrementar-volume",
            json={"toneladas": 0}
        )
        assert response.status_code == 400

    async def test_delete_referenced_farm_conflicts(self, client, motorista, veiculo, fazenda):
        response = await client.post(
            "/api/fretes",
            json=frete_payload(motorista["id"], veiculo["id"], fazenda_id=fazenda["id"])
        )
        assert response.status_code == 201

        response = await client.delete(f"/api/fazendas/{fazenda['id']}")
        assert response.status_code == 409


class TestEnvelope:
    async def test_unknown_route(self, client):
        response = await client.get("/api/nao-existe")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Rota não encontrada"}

    async def test_unknown_id(self, client):
        response = await client.get("/api/fretes/9999")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "NOT_FOUND"

    async def test_health(self, client):
        assert (await client.get("/health")).json() == {"status": "healthy"}
        assert (await client.get("/health/db")).json()["database"] == "connected"

        full = (await client.get("/health/full")).json()
        assert full["cache"] == "memory"
