"""Key-value store interface."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract base class for byte-valued key-value stores.

    Implementations hold opaque ``bytes`` under string keys. Reading a key
    that was never written returns ``None`` rather than raising.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the bytes stored at ``key``, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` at ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
