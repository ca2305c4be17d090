import logging
from collections.abc import Iterable

from shardring.core.ports.storage import Storage, StorageFactory
from shardring.core.space.ring import Ring

logger = logging.getLogger("core.service.topology")


def shard_sid(shard_id: int) -> str:
    """Storage identifier of a shard, e.g. "shard-2"."""
    return f"shard-{shard_id}"


async def build_ring(
    shard_ids: Iterable[int],
    replication_factor: int,
    storage_factory: StorageFactory,
) -> Ring[Storage]:
    """
    Open the storage of every shard and add it to a new ring, in the given
    order. The order must be stable across restarts for keys to keep their
    shard.
    """
    ring: Ring[Storage] = Ring(replication_factor)
    for shard_id in shard_ids:
        storage = await storage_factory.get(shard_sid(shard_id))
        ring.add(shard_id, storage)

    logger.info(
        f"Shard ring ready: {len(ring.endpoints)} shards, "
        f"{len(ring)} vnodes (replication factor {replication_factor})"
    )
    return ring
