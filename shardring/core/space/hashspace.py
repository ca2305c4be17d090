import hashlib
from typing import Generator


class HashSpace:
    """
    HashSpace defines the fixed 64-bit circular keyspace used by the shard ring.

    This type provides:
    - deterministic hashing into the 64-bit space
    - interval comparison on a wrap-around ring
    - generation of deterministic virtual-node tokens

    Both virtual-node placement and key lookup go through `hash`, so the
    layout of a ring depends only on the endpoints inserted and their order.
    Nothing here is seeded per process: a ring rebuilt after a restart
    routes every key exactly as before.
    """

    MAX = 2**64
    DIGEST_SIZE = 8
    VNODE_SEPARATOR = "-VN"

    @classmethod
    def hash(cls, value: bytes) -> int:
        """
        Returns the first 8 bytes of the SHA-256 digest of `value`, read as a
        big-endian unsigned integer.
        """
        digest = hashlib.sha256(value).digest()
        return int.from_bytes(digest[:cls.DIGEST_SIZE], "big")

    @classmethod
    def lookup_hash(cls, key: str) -> int:
        """Token of a routing key, hashed from its UTF-8 encoding."""
        return cls.hash(key.encode("utf-8"))

    @staticmethod
    def in_interval(x: int, a: int, b: int) -> bool:
        """
        Reports whether x ∈ (a, b] on a circular ring.

        Normal interval:
            a < b  →  a < x <= b

        Wrapped interval (ring wrap-around):
            a >= b  →  x > a or x <= b
        """
        if a < b:
            return a < x <= b
        else:
            return x > a or x <= b

    @classmethod
    def label(cls, endpoint_id: object, index: int) -> str:
        """
        Virtual-node label for (endpoint_id, index), e.g. "2-VN17".

        The index always follows the last separator, so a label maps back to a
        single (str(endpoint_id), index) pair. Distinct ids with the same
        string form, such as 1 and "1", share their labels and their tokens.
        """
        return f"{endpoint_id}{cls.VNODE_SEPARATOR}{index}"

    @classmethod
    def token(cls, endpoint_id: object, index: int) -> int:
        return cls.lookup_hash(cls.label(endpoint_id, index))

    @classmethod
    def generate_tokens(cls, endpoint_id: object, count: int) -> Generator[int, None, None]:
        """Yields the `count` placement tokens of an endpoint, by index."""
        for i in range(count):
            yield cls.token(endpoint_id, i)
