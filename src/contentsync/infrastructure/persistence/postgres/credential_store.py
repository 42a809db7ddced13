"""PostgreSQL credential store implementation."""

from dataclasses import asdict
from typing import Any

from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from contentsync.domain.entities import Credential, Target

_COLUMNS = "bearer_token, site_id, org_id, org_name, site_name, base_url, available_sites"


class PostgresCredentialStore:
    """Single-row credential storage. Each write replaces the row in one statement."""

    def __init__(self, pool: AsyncConnectionPool, name: str = "default") -> None:
        self._pool = pool
        self._name = name

    async def get(self) -> Credential | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                f"SELECT {_COLUMNS} FROM credential WHERE name = %s",
                (self._name,),
            )
            r = await cur.fetchone()
        if not r:
            return None
        return Credential(
            bearer_token=r[0],
            site_id=r[1] or "",
            org_id=r[2] or "",
            org_name=r[3] or "",
            site_name=r[4] or "",
            base_url=r[5] or "",
            available_sites=_sites_from_json(r[6]),
        )

    async def save(self, credential: Credential) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                f"INSERT INTO credential (name, {_COLUMNS}, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, NOW()) "
                "ON CONFLICT (name) DO UPDATE SET "
                "bearer_token = EXCLUDED.bearer_token, site_id = EXCLUDED.site_id, "
                "org_id = EXCLUDED.org_id, org_name = EXCLUDED.org_name, "
                "site_name = EXCLUDED.site_name, base_url = EXCLUDED.base_url, "
                "available_sites = EXCLUDED.available_sites, updated_at = NOW()",
                (
                    self._name,
                    credential.bearer_token,
                    credential.site_id,
                    credential.org_id,
                    credential.org_name,
                    credential.site_name,
                    credential.base_url,
                    Jsonb([asdict(s) for s in credential.available_sites]),
                ),
            )

    async def clear(self) -> None:
        async with self._pool.connection() as conn:
            await conn.execute("DELETE FROM credential WHERE name = %s", (self._name,))


def _sites_from_json(value: Any) -> tuple[Target, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        Target(id=s.get("id", ""), name=s.get("name", ""), base_url=s.get("base_url", ""))
        for s in value
        if isinstance(s, dict)
    )
