"""
Logistica Server - Cache
Cache read-through best-effort: Redis quando REDIS_URL está configurado,
senão um dicionário em memória com TTL. Falhas nunca sobem para quem chama.
"""
import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import redis.asyncio as redis
from fastapi import Request

logger = logging.getLogger(__name__)


class Cache:
    """Cliente de cache com ciclo de vida explícito (connect/close)"""

    def __init__(self, url: Optional[str] = None, default_ttl: int = 60):
        self.url = url
        self.default_ttl = default_ttl
        self._redis: Optional[redis.Redis] = None
        self._memory: Dict[str, Tuple[float, str]] = {}
        self._ready = False

    @property
    def backend(self) -> str:
        if self._redis is not None:
            return "redis"
        return "memory" if self._ready else "disabled"

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def connect(self):
        if not self.url:
            self._ready = True
            logger.info("Cache em memória ativo (REDIS_URL não configurado)")
            return

        try:
            client = redis.from_url(self.url, decode_responses=True)
            await client.ping()
            self._redis = client
            self._ready = True
            logger.info("Conexão com Redis estabelecida")
        except Exception as e:
            logger.warning(f"Redis indisponível, cache desativado: {e}")
            self._redis = None
            self._ready = False

    async def close(self):
        if self._redis is not None:
            try:
                await self._redis.aclose()
            except Exception as e:
                logger.warning(f"Erro ao fechar conexão Redis: {e}")
        self._redis = None
        self._memory.clear()
        self._ready = False

    async def get(self, key: str) -> Optional[Any]:
        if not self._ready:
            return None

        try:
            if self._redis is not None:
                raw = await self._redis.get(key)
            else:
                raw = self._memory_get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as e:
            logger.warning(f"Falha ao ler cache '{key}': {e}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None):
        if not self._ready:
            return

        ttl = ttl_seconds or self.default_ttl
        try:
            payload = json.dumps(value, default=str)
            if self._redis is not None:
                await self._redis.set(key, payload, ex=ttl)
            else:
                self._memory[key] = (time.monotonic() + ttl, payload)
        except Exception as e:
            logger.warning(f"Falha ao gravar cache '{key}': {e}")

    async def delete(self, *keys: str):
        if not self._ready or not keys:
            return

        try:
            if self._redis is not None:
                await self._redis.delete(*keys)
            else:
                for key in keys:
                    self._memory.pop(key, None)
        except Exception as e:
            logger.warning(f"Falha ao invalidar cache {keys}: {e}")

    def _memory_get(self, key: str) -> Optional[str]:
        entry = self._memory.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if time.monotonic() >= expires_at:
            self._memory.pop(key, None)
            return None
        return payload


def get_cache(request: Request) -> Cache:
    """Dependency para injetar o cache da aplicação"""
    return request.app.state.cache
