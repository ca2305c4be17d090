import threading

import lmdb


class LMDBBackend:
    """
    Synchronous LMDB environment holding one shard. Each keyspace is
    mapped to a named LMDB database (DBI), opened lazily on first use.
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
    ) -> None:
        self._env = lmdb.open(
            path,
            map_size=map_size,
            max_dbs=max_dbs,
            lock=lock,
            writemap=writemap,
            sync=sync,
            readahead=readahead,
        )
        self._dbis: dict[bytes, object] = {}
        self._dbis_lock = threading.Lock()

    def get(self, db_name: bytes, key: bytes) -> bytes | None:
        dbi = self._get_dbi(db_name)
        with self._env.begin(db=dbi, write=False) as txn:
            return txn.get(key)

    def put(self, db_name: bytes, key: bytes, value: bytes) -> bool:
        dbi = self._get_dbi(db_name)
        with self._env.begin(db=dbi, write=True) as txn:
            return txn.put(key, value)

    def put_if_absent(self, db_name: bytes, key: bytes, value: bytes) -> bool:
        dbi = self._get_dbi(db_name)
        with self._env.begin(db=dbi, write=True) as txn:
            return txn.put(key, value, overwrite=False)

    def close(self) -> None:
        self._dbis.clear()
        self._env.close()

    def _get_dbi(self, db_name: bytes) -> object:
        dbi = self._dbis.get(db_name)
        if dbi is not None:
            return dbi

        with self._dbis_lock:
            dbi = self._dbis.get(db_name)
            if dbi is None:
                dbi = self._env.open_db(db_name)
                self._dbis[db_name] = dbi
            return dbi
