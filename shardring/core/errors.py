class RingError(Exception):
    """Base class for errors raised by the shard ring."""


class InvalidConfiguration(RingError, ValueError):
    """The ring was constructed with parameters it can never work with."""


class EmptyRing(RingError, LookupError):
    """A key was looked up before any endpoint was added to the ring."""


class ShortIdExhausted(RuntimeError):
    """Every generated short ID collided with an already stored one."""
