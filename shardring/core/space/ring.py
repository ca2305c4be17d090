import bisect
import logging
from typing import Any, Generic, Iterator, TypeVar

from shardring.core.errors import EmptyRing, InvalidConfiguration
from shardring.core.space.hashspace import HashSpace
from shardring.core.space.vnode import VNode

H = TypeVar("H")


class Ring(Generic[H]):
    """
    Represents a consistent‑hashing ring routing keys to shard handles.

    Each physical endpoint added to the ring is expanded into
    `replication_factor` virtual nodes. Their tokens are derived from the
    labels "<endpoint_id>-VN<index>" through HashSpace, and the vnodes are
    kept in a list sorted by token, forming a circular token space.

    Key properties:
        - Placement and lookup share the same SHA-256 based hash, so the ring
          layout is identical for the same sequence of `add` calls in any
          process.
        - A key is owned by the first vnode whose token is greater than or
          equal to the key's token, wrapping around to the first vnode past
          the end of the token space.
        - When two vnodes land on the same token, the vnode added last owns
          the position.
        - The ring is built once, before any lookup, and is read-only
          afterwards. Lookups do not mutate anything and need no locking;
          `add` must not run concurrently with lookups.
    """
    def __init__(self, replication_factor: int) -> None:
        if (
            isinstance(replication_factor, bool)
            or not isinstance(replication_factor, int)
            or replication_factor < 1
        ):
            raise InvalidConfiguration(
                f"replication_factor must be a positive integer, got {replication_factor!r}"
            )

        self._replication_factor = replication_factor
        self._vnodes: list[VNode] = []
        self._endpoints: list[Any] = []
        self._logger = logging.getLogger("core.space.ring")

    @property
    def replication_factor(self) -> int:
        """Number of vnodes created for each endpoint."""
        return self._replication_factor

    @property
    def endpoints(self) -> list[Any]:
        """Identifiers of the added endpoints, in insertion order."""
        return list(self._endpoints)

    def add(self, endpoint_id: Any, handle: H) -> None:
        """
        Place `replication_factor` vnodes for the endpoint on the ring.

        The ring keeps a reference to `handle` and hands it back on lookups;
        it does not own the underlying resource.
        """
        for token in HashSpace.generate_tokens(endpoint_id, self._replication_factor):
            self._insert(VNode(endpoint_id, token, handle))

        self._endpoints.append(endpoint_id)
        self._logger.debug(
            f"Added endpoint {endpoint_id} with {self._replication_factor} vnodes "
            f"(ring size: {len(self._vnodes)})"
        )

    def get(self, key: str) -> H:
        """
        Return the handle of the endpoint owning `key`.

        Raises EmptyRing if no endpoint was ever added.
        """
        return self.locate(key).handle

    def locate(self, key: str) -> VNode:
        """Return the vnode owning `key`."""
        token = HashSpace.lookup_hash(key)
        vnode = self.find_successor(token)
        self._logger.debug(f"Key {key!r} hashed to {token}, routed to endpoint {vnode.endpoint_id}")
        return vnode

    def find_successor(self, token: int) -> VNode:
        """
        Return the vnode responsible for the given token.

        `bisect_left` returns the index of the first vnode whose token is
        greater than or equal to the searched token. Past the last vnode the
        search wraps around to index 0.

        Complexity: O(log n)
        """
        if not self._vnodes:
            raise EmptyRing("Cannot route a key on a ring without endpoints")

        idx = bisect.bisect_left(self._vnodes, token, key=lambda v: v.token)
        if idx == len(self._vnodes):
            idx = 0  # wrap-around
        return self._vnodes[idx]

    def _insert(self, vnode: VNode) -> None:
        idx = bisect.bisect_left(self._vnodes, vnode.token, key=lambda v: v.token)
        if idx < len(self._vnodes) and self._vnodes[idx].token == vnode.token:
            previous = self._vnodes[idx]
            self._logger.warning(
                f"Token collision at {vnode.token}: endpoint {vnode.endpoint_id} "
                f"replaces endpoint {previous.endpoint_id}"
            )
            self._vnodes[idx] = vnode
        else:
            self._vnodes.insert(idx, vnode)

    def __getitem__(self, i: int) -> VNode:
        return self._vnodes[i]

    def __len__(self) -> int:
        return len(self._vnodes)

    def __iter__(self) -> Iterator[VNode]:
        return iter(self._vnodes)
