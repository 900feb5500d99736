"""Keyed registries shared by loader and plugin lookups."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class MutableRegistry[K, V]:
    """Insertion-ordered registry that refuses silent replacement.

    ``label`` names the registry in error messages.
    """

    label: str = "entry"
    _entries: dict[K, V] = field(default_factory=dict, repr=False)

    def register(self, key: K, value: V, *, overwrite: bool = False) -> None:
        """Bind ``value`` to ``key``.

        Raises
        ------
        ValueError
            Raised when ``key`` is already bound and ``overwrite`` is False.
        """
        if not overwrite and key in self._entries:
            msg = f"{self.label} {key!r} is already registered; pass overwrite=True to replace it."
            raise ValueError(msg)
        self._entries[key] = value

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def require(self, key: K) -> V:
        """Return the value bound to ``key``.

        Returns
        -------
        V
            Registered value.

        Raises
        ------
        KeyError
            Raised when ``key`` is not registered.
        """
        try:
            return self._entries[key]
        except KeyError:
            known = ", ".join(repr(item) for item in self._entries) or "none"
            msg = f"No {self.label} registered for {key!r} (known: {known})."
            raise KeyError(msg) from None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["MutableRegistry"]
