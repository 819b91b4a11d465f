"""Process-wide registry of API keys owned by live SDK instances."""
import threading
from typing import Optional, Set


class KeyRegistry:
    """Thread-safe set of API keys; at most one live SDK instance per key."""

    def __init__(self):
        self._keys: Set[str] = set()
        self._lock = threading.Lock()

    def add(self, key: str) -> bool:
        """Register a key. Returns False if it was already registered."""
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def remove(self, key: str) -> None:
        with self._lock:
            self._keys.discard(key)

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)


_registry: Optional[KeyRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> KeyRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = KeyRegistry()
        return _registry
