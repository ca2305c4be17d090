import pytest

from shardring.bootstrap.boot import run
from shardring.bootstrap.config.loader import build_parser
from shardring.infra.lmdb_storage.aiobackend import LMDBStorageFactory
from tests.fake.fake_storage import FakeStorageFactory


def lmdb_factory(config) -> LMDBStorageFactory:
    return LMDBStorageFactory(path=config.storage.data_dir, map_size=1 << 20)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_insert_prints_the_short_id(ring_config, serializer, capsys):
    factory = FakeStorageFactory()
    args = build_parser().parse_args(["insert", "https://example.com"])

    await run(args, ring_config, factory, serializer)

    out = capsys.readouterr().out.strip()
    assert out.startswith("URL ID: ")
    assert len(out.removeprefix("URL ID: ")) == ring_config.shortener.id_length
    assert factory.closed
    assert set(factory.backends) == {"shard-0", "shard-1", "shard-2"}


@pytest.mark.ut
@pytest.mark.asyncio
async def test_storage_is_closed_when_command_fails(ring_config, serializer):
    factory = FakeStorageFactory()
    args = build_parser().parse_args(["insert", ""])

    with pytest.raises(ValueError):
        await run(args, ring_config, factory, serializer)

    assert factory.closed


@pytest.mark.it
@pytest.mark.asyncio
async def test_short_id_resolves_after_restart(ring_config, serializer, capsys):
    insert = build_parser().parse_args(["insert", "https://example.com/long"])
    await run(insert, ring_config, lmdb_factory(ring_config), serializer)
    url_id = capsys.readouterr().out.strip().removeprefix("URL ID: ")

    get = build_parser().parse_args(["get", url_id])
    await run(get, ring_config, lmdb_factory(ring_config), serializer)

    assert capsys.readouterr().out.strip() == "Retrieved URL: https://example.com/long"


@pytest.mark.it
@pytest.mark.asyncio
async def test_unknown_short_id_is_reported(ring_config, serializer, capsys):
    get = build_parser().parse_args(["get", "ZZZZZZ"])
    await run(get, ring_config, lmdb_factory(ring_config), serializer)

    assert capsys.readouterr().out.strip() == "URL not found"
