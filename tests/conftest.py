"""
Fixtures compartilhadas: app contra um SQLite temporário e cliente HTTP
"""
import pytest
from httpx import ASGITransport, AsyncClient

from logistica.core.config import Settings
from logistica.main import create_app

CPF_VALIDO = "52998224725"
CPF_VALIDO_2 = "11144477735"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=None,
        LOGISTICA_DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        REDIS_URL=None,
        CACHE_TTL_SECONDS=60,
        MAX_UPLOAD_BYTES=1024,
        CODE_RETRY_ATTEMPTS=3,
    )


@pytest.fixture
async def app(test_settings):
    application = create_app(test_settings)
    # ASGITransport não dispara o lifespan
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def motorista_payload(**overrides):
    payload = {
        "nome": "João da Silva",
        "documento": CPF_VALIDO,
        "telefone": "(67) 99999-1234",
        "tipo": "proprio",
        "tipo_pagamento": "pix",
    }
    payload.update(overrides)
    return payload


def veiculo_payload(**overrides):
    payload = {
        "placa": "ABC1D23",
        "modelo": "Volvo FH 540",
        "tipo_veiculo": "TRUCADO",
    }
    payload.update(overrides)
    return payload


def fazenda_payload(**overrides):
    payload = {
        "fazenda": "Santa Helena",
        "estado": "MS",
        "proprietario": "Carlos Mendes",
        "mercadoria": "Soja",
        "safra": "2025/2026",
        "preco_por_tonelada": 120.0,
    }
    payload.update(overrides)
    return payload


def frete_payload(motorista_id, caminhao_id, **overrides):
    payload = {
        "origem": "Dourados",
        "destino": "Paranaguá",
        "motorista_id": motorista_id,
        "caminhao_id": caminhao_id,
        "mercadoria": "Soja",
        "data_frete": "2026-03-10",
        "quantidade_sacas": 450,
        "toneladas": 27,
        "valor_por_tonelada": 150,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def motorista(client):
    response = await client.post("/api/motoristas", json=motorista_payload())
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def veiculo(client):
    response = await client.post("/api/frota", json=veiculo_payload())
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def fazenda(client):
    response = await client.post("/api/fazendas", json=fazenda_payload())
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
async def frete(client, motorista, veiculo):
    response = await client.post("/api/fretes", json=frete_payload(motorista["id"], veiculo["id"]))
    assert response.status_code == 201, response.text
    return response.json()["data"]
