"""Lightweight in-memory reference cache for the locations page.

Holds resolved reference values (state abbreviations) for the lifetime of a
single page render.  Entries never expire and are never invalidated; a new
cache is created for every render.
"""

from typing import Any, Awaitable, Callable


class ReferenceCache:
    """In-memory cache with a ``get_or_populate`` coroutine.

    ``get_or_populate`` does not coordinate concurrent misses: two tasks that
    miss on the same key before either finishes will both call the loader.
    Both writes store the same value, so the cache still ends up with one
    entry per key.

    Usage::

        cache = ReferenceCache()
        abbr = await cache.get_or_populate(state_id, load_abbreviation)
    """

    _MISSING = object()

    def __init__(self) -> None:
        self._store: dict[Any, Any] = {}
        self._hits = 0
        self._misses = 0

    def __contains__(self, key: Any) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: Any, default: Any = None) -> Any:
        """Return cached value for *key*, or *default* if absent."""
        value = self._store.get(key, self._MISSING)
        if value is self._MISSING:
            self._misses += 1
            return default
        self._hits += 1
        return value

    def set(self, key: Any, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""
        self._store[key] = value

    async def get_or_populate(
        self, key: Any, loader: Callable[[Any], Awaitable[Any]]
    ) -> Any:
        """Return the cached value for *key*, loading and storing it on a miss.

        Args:
            key: Cache key (must be hashable).
            loader: Coroutine function called with *key* on a miss.

        Returns:
            The cached or freshly loaded value.
        """
        value = self.get(key, self._MISSING)
        if value is not self._MISSING:
            return value
        value = await loader(key)
        self.set(key, value)
        return value

    def stats(self) -> dict[str, int]:
        """Return cache statistics.

        Returns:
            Dict with keys ``hits``, ``misses``, and ``size``.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._store),
        }
