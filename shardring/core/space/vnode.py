from typing import Any, Self


class VNode(tuple):
    """
    VNode represents a virtual node on the 64-bit shard ring.

    The token defines the vnode's position on the ring. The endpoint_id
    identifies the physical shard it was derived from, and the handle is the
    opaque value returned to callers whose key lands on this vnode. The ring
    never inspects or manages the handle.
    """

    __slots__ = ()

    def __new__(cls, endpoint_id: Any, token: int, handle: Any) -> Self:
        return super().__new__(cls, (endpoint_id, token, handle))

    @property
    def endpoint_id(self) -> Any:
        """The identifier of the physical endpoint owning this vnode."""
        return self[0]

    @property
    def token(self) -> int:
        """The 64-bit position of this vnode."""
        return self[1]

    @property
    def handle(self) -> Any:
        return self[2]

    def repr_token(self) -> str:
        return f"Token(hash={self.token}, hex={self.token:016x})"

    def __repr__(self) -> str:
        return f"VNode(endpoint_id={self.endpoint_id}, token={self.repr_token()})"
