import pytest
import yaml

from shardring.core.space.ring import Ring
from shardring.infra.msgpack_serializer import MsgPackSerializer
from tests.fake.fake_storage import FakeStorage
from tests.helpers import FakeShardRingConfig


@pytest.fixture
def serializer():
    return MsgPackSerializer()


@pytest.fixture
def shards() -> dict[int, FakeStorage]:
    return {0: FakeStorage(), 1: FakeStorage(), 2: FakeStorage()}


@pytest.fixture
def storage_ring(shards) -> Ring[FakeStorage]:
    ring = Ring(replication_factor=50)
    for shard_id, storage in shards.items():
        ring.add(shard_id, storage)
    return ring


@pytest.fixture
def config_data(tmp_path) -> dict:
    return {
        "ring": {
            "replication_factor": 10,
        },
        "shards": [
            {"id": 0},
            {"id": 1},
            {"id": 2},
        ],
        "storage": {
            "data_dir": str(tmp_path / "data")
        },
        "shortener": {
            "id_length": 6,
            "max_attempts": 4,
        }
    }


@pytest.fixture
def config_file(tmp_path, config_data):
    file = tmp_path / "shardring.yaml"
    file.write_text(yaml.dump(config_data))
    return file


@pytest.fixture
def ring_config(config_file, monkeypatch) -> FakeShardRingConfig:
    monkeypatch.setenv("TEST_SHARDRINGCONFIG", str(config_file))
    return FakeShardRingConfig()
