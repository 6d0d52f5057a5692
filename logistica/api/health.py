"""
Logistica Server - Health API
"""
import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health():
    """Health check"""
    return {"status": "healthy"}


async def _check_db(request: Request) -> bool:
    try:
        await request.app.state.db.ping()
        return True
    except Exception as e:
        logger.error(f"Health check do banco falhou: {e}")
        return False


@router.get("/db")
async def health_db(request: Request):
    if await _check_db(request):
        return {"status": "healthy", "database": "connected"}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "disconnected"})


@router.get("/full")
async def health_full(request: Request):
    """Banco + cache, com tempo de resposta"""
    inicio = time.perf_counter()
    db_ok = await _check_db(request)
    cache = request.app.state.cache

    body = {
        "status": "healthy" if db_ok else "unhealthy",
        "database": "connected" if db_ok else "disconnected",
        "cache": cache.backend,
        "elapsed_ms": round((time.perf_counter() - inicio) * 1000, 2),
    }
    return JSONResponse(status_code=200 if db_ok else 503, content=body)
