"""Time-bounded on-disk cache of API responses.

Each entry is a JSON file named after the escaped request URI, holding the
time it was written and the raw response body. Entries older than the TTL
are ignored and overwritten by the next write to the same key; nothing is
ever deleted. There is no locking: concurrent invocations may race.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from kube_autocomplete.core.exceptions import CacheDirectoryError

DEFAULT_CACHE_DIR = Path(".cache")
DEFAULT_TTL = timedelta(minutes=5)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def escape_cache_key(api_path: str) -> str:
    """Turn a request URI into a file name by replacing every ``/`` with ``_``."""
    return api_path.replace("/", "_")


class CacheEntry(BaseModel):
    """Serialized form of a cached response."""

    model_config = ConfigDict(extra="ignore")

    created_at: datetime
    body: str


class CacheStatus(StrEnum):
    """Outcome of a cache lookup."""

    HIT = "hit"
    MISSING = "missing"
    EXPIRED = "expired"
    UNREADABLE = "unreadable"
    CORRUPT = "corrupt"


@dataclass
class CacheLookup:
    """Result of FileCache.get."""

    key: str
    status: CacheStatus
    body: bytes | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        """True only for a fresh, readable entry."""
        return self.status is CacheStatus.HIT


@dataclass
class CacheWrite:
    """Result of FileCache.set."""

    key: str
    path: Path
    ok: bool
    error: str | None = None


class FileCache:
    """Key/value store on local disk with a fixed TTL.

    Lookups fail open: a missing, unreadable, corrupt or expired entry is
    reported as a miss. Writes never raise; failures come back as a
    :class:`CacheWrite` with ``ok=False`` for the caller to deal with.

    Args:
        cache_dir: Directory holding the entry files.
        ttl: Maximum age of a usable entry. An entry exactly ``ttl`` old is
            still used.
        clock: Returns the current aware datetime; injectable for tests.
    """

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.ttl = ttl
        self._clock = clock

    def ensure_directory(self) -> None:
        """Create the cache directory if needed.

        Raises:
            CacheDirectoryError: If the directory cannot be created.
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(self.cache_dir, original_error=e) from e

    def path_for(self, key: str) -> Path:
        """Return the entry file path for ``key``."""
        return self.cache_dir / escape_cache_key(key)

    def get(self, key: str) -> CacheLookup:
        """Look up a fresh entry for ``key``."""
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return CacheLookup(key=key, status=CacheStatus.MISSING)
        except OSError as e:
            return CacheLookup(key=key, status=CacheStatus.UNREADABLE, error=str(e))

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            return CacheLookup(key=key, status=CacheStatus.CORRUPT, error=str(e))

        created_at = entry.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        if self._clock() - created_at > self.ttl:
            return CacheLookup(key=key, status=CacheStatus.EXPIRED)

        return CacheLookup(key=key, status=CacheStatus.HIT, body=entry.body.encode("utf-8"))

    def set(self, key: str, body: bytes) -> CacheWrite:
        """Write ``body`` for ``key``, replacing any previous entry."""
        path = self.path_for(key)
        try:
            entry = CacheEntry(created_at=self._clock(), body=body.decode("utf-8"))
        except UnicodeDecodeError as e:
            return CacheWrite(key=key, path=path, ok=False, error=str(e))

        try:
            path.write_text(entry.model_dump_json(), encoding="utf-8")
        except OSError as e:
            return CacheWrite(key=key, path=path, ok=False, error=str(e))
        return CacheWrite(key=key, path=path, ok=True)
