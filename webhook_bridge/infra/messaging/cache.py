"""Cache of exchange names confirmed on the broker.

The cache is scoped to a single broker link: a confirmation obtained over a
previous connection says nothing about the broker behind the next one, so
the connection manager clears it on every disconnect and every new connect.

All mutation happens on the event loop thread with no await between the
check and the update. The only cross-task race left is a declare that was
in flight while a disconnect cleared the cache; ``generation`` closes it:
callers snapshot the generation before the declare and pass it to ``add``,
which drops the update if a clear happened in between.
"""

from __future__ import annotations


class ExchangeCache:
    """Set of exchange names known to exist under the current broker link."""

    def __init__(self) -> None:
        self._names: set[str] = set()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of clears so far; changes whenever the link epoch changes."""
        return self._generation

    def contains(self, name: str) -> bool:
        """Check whether ``name`` is confirmed under the current link."""
        return name in self._names

    def add(self, name: str, generation: int | None = None) -> bool:
        """Record ``name`` as confirmed.

        Args:
            name: Exchange name.
            generation: Generation observed before the confirming broker call.
                When it no longer matches, the confirmation belongs to a link
                that is gone and is discarded.

        Returns:
            True if the name was recorded.
        """
        if generation is not None and generation != self._generation:
            return False
        self._names.add(name)
        return True

    def remove(self, name: str) -> None:
        """Forget ``name``; no-op if absent."""
        self._names.discard(name)

    def clear(self) -> None:
        """Forget every name and start a new generation."""
        self._names.clear()
        self._generation += 1

    def names(self) -> list[str]:
        """Sorted snapshot of the cached names."""
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
