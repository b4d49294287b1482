"""Optional capabilities a command client may implement.

The runner accepts *any* object as the per-run client.  These protocols
describe the narrow extras it knows how to use; they are
``runtime_checkable`` so the runner can query them with ``isinstance``
instead of poking at attributes.  No explicit inheritance is required.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheDisable(Protocol):
    """A client whose cache can be switched off for the current run.

    The runner calls :meth:`disable_cache` right after construction when
    ``--no-cache`` was given.
    """

    def disable_cache(self) -> None:
        ...  # pragma: no cover


@runtime_checkable
class Disposable(Protocol):
    """A client holding resources that must be released after the run.

    :meth:`disconnect` is awaited exactly once, after the handler
    finished or failed.  A plain (non-async) implementation is accepted
    as well.
    """

    async def disconnect(self) -> None:
        ...  # pragma: no cover


@runtime_checkable
class CacheClient(Protocol):
    """A client exposing the cache-management operations used by
    :func:`~clikit.core.commands.cache_commands`.
    """

    def get_cache_stats(self) -> Any:
        """Return a JSON-serialisable summary of the cache."""
        ...  # pragma: no cover

    def clear_cache(self) -> int:
        """Drop every entry and return how many were removed."""
        ...  # pragma: no cover

    def invalidate_cache_key(self, key: str) -> bool:
        """Drop one entry; return ``True`` if it existed."""
        ...  # pragma: no cover
