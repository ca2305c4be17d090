import json
from functools import lru_cache

from pydantic import ValidationError

from shardring.bootstrap.config.settings import ShardRingConfig
from shardring.core.ports.serializer import Serializer
from shardring.core.ports.storage import StorageFactory
from shardring.infra.lmdb_storage.aiobackend import LMDBStorageFactory
from shardring.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_config() -> ShardRingConfig:
    try:
        return ShardRingConfig()  # type: ignore[call-arg]
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


@lru_cache
def get_storage_factory() -> StorageFactory:
    config = get_config()
    return LMDBStorageFactory(path=config.storage.data_dir)


@lru_cache
def get_serializer() -> Serializer:
    return MsgPackSerializer()
