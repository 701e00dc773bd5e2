"""
Daily selection cache.

Callers that want "today's bias" to stay fixed for the whole day inject a
CacheStore instead of relying on process-global state. ``get_or_compute``
is the only access path.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from loguru import logger

from dailybias.core.models import Bias


class CacheStore(Protocol):
    """Minimal key-value contract for the daily cache."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryCacheStore:
    """Dict-backed CacheStore, mainly for tests and short-lived processes."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)


def get_or_compute(store: CacheStore, key: str, compute: Callable[[], str]) -> str:
    """Return the cached value for ``key``, computing and storing it on a miss."""
    cached = store.get(key)
    if cached is not None:
        return cached
    value = compute()
    store.set(key, value)
    return value


def get_cached_daily_bias(
    store: CacheStore,
    date_key: str,
    catalog: Sequence[Bias],
    compute: Callable[[], Bias],
) -> Bias:
    """
    Resolve the bias for ``date_key`` through the cache.

    A cached id that no longer exists in the catalog (e.g. a deleted user
    bias) is discarded and the selection recomputed.
    """
    by_id = {bias.id: bias for bias in catalog}
    cache_key = f"daily:{date_key}"

    cached_id = store.get(cache_key)
    if cached_id is not None:
        if cached_id in by_id:
            return by_id[cached_id]
        logger.warning(f"Cached daily bias {cached_id!r} for {date_key} not in catalog, recomputing")

    bias = compute()
    store.set(cache_key, bias.id)
    return bias


__all__ = ["CacheStore", "InMemoryCacheStore", "get_or_compute", "get_cached_daily_bias"]
