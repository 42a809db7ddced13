"""PostgreSQL index queue implementation."""

from psycopg_pool import AsyncConnectionPool

from contentsync.domain.entities import QueueItem
from contentsync.domain.value_objects import QueueOperation

# Oldest visible items; SKIP LOCKED keeps concurrent claimers disjoint.
_CLAIM_SQL = """
UPDATE index_queue
SET claimed_until = NOW() + %s * INTERVAL '1 second'
WHERE id IN (
    SELECT id FROM index_queue
    WHERE queue_name = %s AND (claimed_until IS NULL OR claimed_until < NOW())
    ORDER BY seq
    LIMIT %s
    FOR UPDATE SKIP LOCKED
)
RETURNING seq, id, record_id, operation, url, created_at
"""


class PostgresIndexQueue:
    """Index queue backed by the index_queue table.

    Claims are leases: an item claimed but never committed becomes visible
    again once claimed_until passes.
    """

    def __init__(self, pool: AsyncConnectionPool, queue_name: str, lease_seconds: int = 300) -> None:
        self._pool = pool
        self._queue_name = queue_name
        self._lease_seconds = lease_seconds

    async def enqueue(self, item: QueueItem) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                "INSERT INTO index_queue (id, queue_name, record_id, operation, url, created_at) "
                "VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    item.id,
                    self._queue_name,
                    item.record_id,
                    item.operation.value,
                    item.url,
                    item.created_at,
                ),
            )

    async def claim(self, limit: int = 1) -> list[QueueItem]:
        """Lease up to limit items in FIFO order."""
        if limit < 1:
            return []
        async with self._pool.connection() as conn:
            cur = await conn.execute(_CLAIM_SQL, (self._lease_seconds, self._queue_name, limit))
            rows = await cur.fetchall()
        rows.sort(key=lambda r: r[0])
        return [
            QueueItem(
                id=r[1],
                record_id=r[2],
                operation=QueueOperation(r[3]),
                url=r[4],
                created_at=r[5],
            )
            for r in rows
        ]

    async def commit(self, item: QueueItem) -> None:
        async with self._pool.connection() as conn:
            await conn.execute("DELETE FROM index_queue WHERE id = %s", (item.id,))

    async def size(self) -> int:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "SELECT COUNT(*) FROM index_queue WHERE queue_name = %s",
                (self._queue_name,),
            )
            row = await cur.fetchone()
        return int(row[0]) if row else 0

    async def purge(self) -> int:
        """Delete every item of this queue in one statement."""
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM index_queue WHERE queue_name = %s",
                (self._queue_name,),
            )
            return cur.rowcount
