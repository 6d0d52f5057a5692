"""
Testes de integração: KPIs, estatísticas por rota e cache
"""
import pytest

from .test_api_fretes import criar_frete, custo_payload


class TestKpis:
    async def test_empty_database(self, client):
        response = await client.get("/api/dashboard/kpis")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "KPIs carregados com sucesso"
        assert body["data"] == {
            "receitaTotal": 0,
            "custosTotal": 0,
            "lucroTotal": 0,
            "margemLucro": 0,
            "totalFretes": 0,
            "motoristasAtivos": 0,
            "caminhoesDisponiveis": 0,
        }

    async def test_cache_and_invalidation(self, client, motorista, veiculo):
        primeira = (await client.get("/api/dashboard/kpis")).json()
        assert primeira["message"] == "KPIs carregados com sucesso"
        assert primeira["data"]["motoristasAtivos"] == 1
        assert primeira["data"]["caminhoesDisponiveis"] == 1

        segunda = (await client.get("/api/dashboard/kpis")).json()
        assert segunda["message"].endswith("(cache)")
        assert segunda["data"] == primeira["data"]

        # Escrita em frete invalida o cache
        frete = await criar_frete(client, motorista["id"], veiculo["id"])
        terceira = (await client.get("/api/dashboard/kpis")).json()
        assert terceira["message"] == "KPIs carregados com sucesso"
        assert terceira["data"]["totalFretes"] == 1
        assert terceira["data"]["receitaTotal"] == pytest.approx(4050)
        assert terceira["data"]["margemLucro"] == 100.0

        await client.post("/api/custos", json=custo_payload(frete["id"], valor=1050))
        data = (await client.get("/api/dashboard/kpis")).json()["data"]
        assert data["custosTotal"] == pytest.approx(1050)
        assert data["lucroTotal"] == pytest.approx(3000)
        assert data["margemLucro"] == 74.07

    async def test_inactive_drivers_not_counted(self, client, motorista):
        await client.put(f"/api/motoristas/{motorista['id']}", json={"status": "inativo"})
        data = (await client.get("/api/dashboard/kpis")).json()["data"]
        assert data["motoristasAtivos"] == 0


class TestEstatisticasRotas:
    async def test_grouped_by_route(self, client, motorista, veiculo):
        await criar_frete(client, motorista["id"], veiculo["id"])
        await criar_frete(client, motorista["id"], veiculo["id"], receita=6000)
        await criar_frete(client, motorista["id"], veiculo["id"], destino="Santos")

        response = await client.get("/api/dashboard/estatisticas-rotas")
        assert response.status_code == 200
        rotas = response.json()["data"]

        assert [(r["origem"], r["destino"]) for r in rotas] == [
            ("DOURADOS", "PARANAGUÁ"),
            ("DOURADOS", "SANTOS"),
        ]
        assert rotas[0]["total_fretes"] == 2
        assert rotas[0]["receita_total"] == pytest.approx(10050)
        assert rotas[0]["lucro_total"] == pytest.approx(10050)

        again = (await client.get("/api/dashboard/estatisticas-rotas")).json()
        assert again["message"].endswith("(cache)")
