"""Lifespan middleware - opens the pool on startup, releases clients on shutdown."""

from typing import Any

from psycopg_pool import AsyncConnectionPool


class LifespanMiddleware:
    """Opens the connection pool and closes it plus HTTP clients on shutdown."""

    def __init__(self, pool: AsyncConnectionPool | None, closeables: list[Any] | None = None) -> None:
        self._pool = pool
        self._closeables = closeables or []

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        if self._pool is not None:
            await self._pool.open()

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        for closeable in self._closeables:
            await closeable.aclose()
        if self._pool is not None:
            await self._pool.close()
