import logging

from shardring.core.errors import ShortIdExhausted
from shardring.core.helpers.shortid import generate_short_id
from shardring.core.models.record import UrlRecord
from shardring.core.ports.serializer import Serializer
from shardring.core.ports.storage import Storage
from shardring.core.space.ring import Ring


class UrlShortener:
    """
    Stores URLs under short identifiers, spread over shards by the ring.

    A short ID is routed through the ring both when it is created and when
    it is read back, so a record is always looked up on the shard it was
    written to, as long as the ring is built from the same shards in the
    same order.
    """

    KEYSPACE = b"url_table"

    def __init__(
        self,
        ring: Ring[Storage],
        serializer: Serializer,
        id_length: int = 5,
        max_attempts: int = 3,
    ) -> None:
        self._ring = ring
        self._serializer = serializer
        self._id_length = id_length
        self._max_attempts = max_attempts
        self._logger = logging.getLogger("core.service.shortener")

    async def insert(self, url: str) -> str:
        if not url:
            raise ValueError("url must not be empty")

        for _ in range(self._max_attempts):
            url_id = generate_short_id(self._id_length)
            vnode = self._ring.locate(url_id)
            storage: Storage = vnode.handle
            record = UrlRecord(url_id=url_id, url=url)

            stored = await storage.put_if_absent(
                self.KEYSPACE,
                record.key,
                self._serializer.serialize(record.to_dict())
            )
            if not stored:
                self._logger.debug(f"Short ID {url_id} already taken on shard {vnode.endpoint_id}")
                continue

            self._logger.info(f"Inserted URL '{url}' into shard {vnode.endpoint_id}")
            return url_id

        raise ShortIdExhausted(
            f"No free short ID found after {self._max_attempts} attempts"
        )

    async def get(self, url_id: str) -> str | None:
        vnode = self._ring.locate(url_id)
        storage: Storage = vnode.handle
        raw = await storage.get(self.KEYSPACE, url_id.encode("utf-8"))
        if raw is None:
            self._logger.debug(f"Short ID {url_id} not found on shard {vnode.endpoint_id}")
            return None

        record = UrlRecord.from_dict(self._serializer.deserialize(raw))
        return record.url
