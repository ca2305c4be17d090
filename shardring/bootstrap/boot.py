import argparse
import asyncio

from shardring.bootstrap.config.loader import get_cli_args
from shardring.bootstrap.config.settings import ShardRingConfig
from shardring.bootstrap.deps import get_config, get_serializer, get_storage_factory
from shardring.core.helpers.utils import setup_logging
from shardring.core.ports.serializer import Serializer
from shardring.core.ports.storage import StorageFactory
from shardring.core.service.shortener import UrlShortener
from shardring.core.service.topology import build_ring


async def run(
    args: argparse.Namespace,
    config: ShardRingConfig,
    storage_factory: StorageFactory,
    serializer: Serializer,
) -> None:
    try:
        ring = await build_ring(
            config.shard_ids,
            config.ring.replication_factor,
            storage_factory
        )
        shortener = UrlShortener(
            ring,
            serializer,
            id_length=config.shortener.id_length,
            max_attempts=config.shortener.max_attempts,
        )

        match args.command:
            case "insert":
                url_id = await shortener.insert(args.url)
                print(f"URL ID: {url_id}")
            case "get":
                url = await shortener.get(args.url_id)
                if url is None:
                    print("URL not found")
                else:
                    print(f"Retrieved URL: {url}")
    finally:
        await storage_factory.close()


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    config = get_config()
    asyncio.run(run(cli, config, get_storage_factory(), get_serializer()))


if __name__ == "__main__":
    main()
