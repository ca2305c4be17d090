import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from shardring.core.ports.storage import Storage
from shardring.infra.lmdb_storage.backend import LMDBBackend


class LMDBStorage:
    """
    Storage implementation backed by an LMDB environment.

    LMDB is a fully synchronous library: reads and writes are delegated to
    dedicated thread pools so that the event loop is never blocked. Each
    call opens a short-lived LMDB transaction.
    """
    def __init__(
        self,
        path: str,
        map_size: int = 1 << 30,
        max_dbs: int = 8,
        readahead: bool = True,
        writemap: bool = False,
        sync: bool = True,
        lock: bool = True,
        max_readers: int = 4,
        max_writers: int = 1,
    ) -> None:
        self._backend = LMDBBackend(
            path=path,
            map_size=map_size,
            max_dbs=max_dbs,
            readahead=readahead,
            writemap=writemap,
            sync=sync,
            lock=lock,
        )
        self._read_pool = ThreadPoolExecutor(max_workers=max_readers)
        self._write_pool = ThreadPoolExecutor(max_workers=max_writers)

    async def get(self, keyspace: bytes, key: bytes) -> bytes | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._read_pool, self._backend.get, keyspace, key
        )

    async def put(self, keyspace: bytes, key: bytes, value: bytes) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            self._write_pool, self._backend.put, keyspace, key, value
        )

    async def put_if_absent(self, keyspace: bytes, key: bytes, value: bytes) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._write_pool, self._backend.put_if_absent, keyspace, key, value
        )

    async def close(self) -> None:
        def shutdown() -> None:
            self._read_pool.shutdown(wait=True)
            self._write_pool.shutdown(wait=True)
            self._backend.close()

        await asyncio.to_thread(shutdown)


class LMDBStorageFactory:
    """
    Creates one LMDBStorage per shard, each in its own environment under
    `path / sid`. Instances are cached, so asking twice for the same shard
    returns the same storage.
    """
    def __init__(
        self,
        path: Path,
        map_size: int = 1 << 30,
        max_dbs: int = 8,
        readahead: bool = True,
        writemap: bool = False,
        sync: bool = True,
        lock: bool = True,
        max_readers: int = 4,
        max_writers: int = 1,
    ) -> None:
        self._path = path
        self._map_size = map_size
        self._max_dbs = max_dbs
        self._readahead = readahead
        self._writemap = writemap
        self._sync = sync
        self._lock = lock
        self._max_readers = max_readers
        self._max_writers = max_writers

        self._backends: dict[str, LMDBStorage] = {}
        self._backends_lock = asyncio.Lock()

    async def get(self, sid: str) -> Storage:
        async with self._backends_lock:
            if sid not in self._backends:
                path = self._path / sid
                path.mkdir(parents=True, exist_ok=True)
                backend = LMDBStorage(
                    path=str(path),
                    map_size=self._map_size,
                    max_dbs=self._max_dbs,
                    readahead=self._readahead,
                    writemap=self._writemap,
                    sync=self._sync,
                    lock=self._lock,
                    max_readers=self._max_readers,
                    max_writers=self._max_writers,
                )
                self._backends[sid] = backend

            return self._backends[sid]

    async def close(self) -> None:
        coros = [b.close() for b in self._backends.values()]
        await asyncio.gather(*coros, return_exceptions=True)
        self._backends.clear()
