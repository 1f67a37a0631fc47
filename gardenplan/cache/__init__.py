from .fingerprint import (
    Fingerprint,
    ResultKind,
    garden_space_fingerprint,
    layout_fingerprint,
    yield_fingerprint,
)
from .store import CacheStats, ReadWriteLock, ResultCache

__all__ = [
    "CacheStats",
    "Fingerprint",
    "ReadWriteLock",
    "ResultCache",
    "ResultKind",
    "garden_space_fingerprint",
    "layout_fingerprint",
    "yield_fingerprint",
]
