from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class UrlRecord:
    """
    A shortened URL as persisted on its shard.
    """
    url_id: str
    """
    Short identifier routed through the ring, also the storage key.
    """

    url: str
    """
    The original URL.
    """

    @property
    def key(self) -> bytes:
        return self.url_id.encode("utf-8")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "UrlRecord":
        return UrlRecord(url_id=data["url_id"], url=data["url"])
