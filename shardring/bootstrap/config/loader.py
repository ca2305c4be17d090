import argparse
import os
from functools import lru_cache
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shardring",
        description=(
            "Shorten URLs and resolve short IDs.\n\n"
            "Records are spread over several storage shards with a consistent "
            "hashing ring, so a short ID always resolves on the shard it was "
            "written to."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a shardring configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → ring placement and routing of every key.\n"
            "INFO     → ring summary and inserted URLs.\n"
            "WARNING  → only warnings and errors (default).\n"
            "ERROR    → only errors.\n"
            "CRITICAL → only critical failures.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    commands = parser.add_subparsers(dest="command", required=True)

    insert = commands.add_parser("insert", help="Insert a new URL into the sharded store")
    insert.add_argument("url", help="The URL to be shortened")

    get = commands.add_parser("get", help="Retrieve a URL by its short ID")
    get.add_argument("url_id", help="The short ID of the URL")

    return parser


@lru_cache
def get_cli_args(argv: tuple[str, ...] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


@lru_cache
def get_configfile() -> Path:
    args = get_cli_args()

    # Priority: CLI > ENV > default file in current working directory
    raw = args.config or os.getenv("SHARDRING_CONFIG")

    if raw is None:
        file = Path.cwd() / "shardring.yaml"
    else:
        file = Path(raw)

    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the SHARDRING_CONFIG environment variable\n"
            "  - Or place a 'shardring.yaml' file in the current working directory."
        )

    return file
