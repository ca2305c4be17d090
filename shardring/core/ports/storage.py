from typing import Protocol


class Storage(Protocol):
    """
    Minimal asynchronous interface for a keyspaced key–value backend.
    One Storage instance backs one shard; the shard ring hands these
    instances out as opaque handles.

    The interface does not prescribe durability, isolation, or
    transactional semantics. Implementations may provide stronger
    guarantees, but callers must not rely on anything beyond the
    behavior described here.
    """

    async def get(self, keyspace: bytes, key: bytes) -> bytes | None:
        """
        Retrieve the value associated with `key` inside the given
        keyspace. Returns None if the key does not exist.

        Implementations must not raise exceptions for missing keys.
        """

    async def put(self, keyspace: bytes, key: bytes, value: bytes) -> None:
        """
        Store `value` under `key` inside the keyspace. If the key
        already exists, its value is replaced.

        The write must be visible to subsequent calls to `get` within
        the same Storage instance. Durability depends on the backend.
        """

    async def put_if_absent(self, keyspace: bytes, key: bytes, value: bytes) -> bool:
        """
        Store `value` under `key` only if the key does not exist yet.
        Returns True when the value was written, False when an existing
        value was left untouched.

        The check and the write form a single atomic step: of several
        concurrent calls for the same key, at most one returns True.
        """

    async def close(self) -> None:
        """
        Release all underlying resources associated with this Storage
        instance (file handles, mmap regions, thread pools, etc.).

        After calling close(), the instance must not be used again.
        """


class StorageFactory(Protocol):
    """
    Factory interface for creating Storage instances, one per shard,
    identified by a string-based storage identifier (sid).

    Implementations are free to map the storage identifier to files,
    directories, database tables, or any other backend-specific structure.
    """

    async def get(self, sid: str) -> Storage:
        """
        Return a Storage instance associated with the given storage
        identifier `sid`, creating it on first use.

        The returned Storage must behave as a logically isolated key–value
        store, regardless of how the factory manages underlying resources.
        """

    async def close(self) -> None:
        """
        Release all resources associated with this factory and any
        Storage instances it created.

        The method must not block the event loop.
        """
