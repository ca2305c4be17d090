from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding records stored on shards.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - safe against malformed input
    """

    def serialize(self, message: Any) -> bytes:
        """Encode a Python object into bytes suitable for storage."""

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes read from storage into a Python object."""
