"""In-memory snapshot cache in front of the company registry."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager, nullcontext
from datetime import UTC, datetime, timedelta
from threading import Lock
from typing import Any, Protocol

from pydantic import ValidationError

from company_directory.clients.sec_edgar import RegistryError, SecEdgarClient
from company_directory.config import settings
from company_directory.models.company import CacheSnapshot, CompanyRecord, SnapshotSource
from company_directory.observability.metrics import metrics
from company_directory.services.directory.errors import DirectoryUnavailableError
from company_directory.services.directory.fallback import curated_companies
from company_directory.services.directory.synthesizer import RecordSynthesizer

logger = logging.getLogger(__name__)


class RegistryClient(Protocol):
    """Subset of registry client behavior used by the cache."""

    def fetch_entries(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        ...

    def close(self) -> None:
        ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DirectoryCacheService:
    """Owns the current `CacheSnapshot` and decides when to rebuild it.

    Created once at application startup, replaced wholesale on every refresh,
    and closed at shutdown. Readers only ever see a complete snapshot: the new
    one is built off to the side and swapped in with a single assignment.
    """

    def __init__(
        self,
        *,
        registry: RegistryClient,
        synthesizer: RecordSynthesizer | None = None,
        fallback_factory: Callable[[], Sequence[CompanyRecord]] = curated_companies,
        ttl_seconds: float = settings.cache_ttl_seconds,
        registry_limit: int = settings.registry_limit,
        single_flight: bool = settings.refresh_single_flight,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative.")
        self._registry = registry
        self._synthesizer = synthesizer or RecordSynthesizer.seeded(settings.synthesizer_seed)
        self._fallback_factory = fallback_factory
        self._ttl = timedelta(seconds=ttl_seconds)
        self._registry_limit = registry_limit
        self._single_flight = single_flight
        self._clock = clock
        self._snapshot: CacheSnapshot | None = None
        self._refresh_lock = Lock()

    @classmethod
    def from_settings(cls) -> "DirectoryCacheService":
        return cls(registry=SecEdgarClient.from_settings())

    @property
    def snapshot(self) -> CacheSnapshot | None:
        """Last snapshot produced, or None before the first refresh."""
        return self._snapshot

    def get_snapshot(self) -> CacheSnapshot:
        """Serve the cached snapshot while fresh, otherwise rebuild it."""
        snapshot = self._snapshot
        if self._is_fresh(snapshot):
            metrics.increment("cache.hit")
            logger.info("directory.cache.hit", extra={"count": snapshot.count})
            return snapshot.as_cached()

        metrics.increment("cache.miss")
        logger.info("directory.cache.miss", extra={"populated": snapshot is not None})
        with self._refresh_guard():
            # Another caller may have refreshed while this one waited.
            snapshot = self._snapshot
            if self._single_flight and self._is_fresh(snapshot):
                return snapshot.as_cached()
            return self._rebuild()

    def refresh(self) -> CacheSnapshot:
        """Rebuild the snapshot unconditionally: registry first, curated list on failure."""
        with self._refresh_guard():
            return self._rebuild()

    def get_by_id(self, company_id: int) -> CompanyRecord | None:
        """Look up a record in the current snapshot; None means not found."""
        snapshot = self._snapshot
        if snapshot is None:
            snapshot = self.refresh()
        return snapshot.find(company_id)

    def close(self) -> None:
        self._registry.close()

    def _is_fresh(self, snapshot: CacheSnapshot | None) -> bool:
        if snapshot is None or not snapshot.records:
            return False
        return self._clock() - snapshot.fetched_at < self._ttl

    @contextmanager
    def _refresh_guard(self) -> Iterator[None]:
        guard = self._refresh_lock if self._single_flight else nullcontext()
        with guard:
            yield

    def _rebuild(self) -> CacheSnapshot:
        start = time.perf_counter()
        records = self._fetch_primary()
        source = SnapshotSource.PRIMARY
        if not records:
            records = self._build_fallback()
            source = SnapshotSource.FALLBACK

        snapshot = CacheSnapshot.build(records, fetched_at=self._clock(), source=source)
        self._snapshot = snapshot

        elapsed_ms = (time.perf_counter() - start) * 1000
        metrics.increment(f"refresh.{source.value}")
        metrics.timing("refresh.latency_ms", elapsed_ms, tags={"source": source.value})
        metrics.gauge("snapshot.size", snapshot.count, tags={"source": source.value})
        logger.info(
            "directory.refresh.completed",
            extra={
                "source": source.value,
                "count": snapshot.count,
                "latency_ms": round(elapsed_ms, 2),
            },
        )
        return snapshot

    def _fetch_primary(self) -> list[CompanyRecord] | None:
        try:
            entries = self._registry.fetch_entries(limit=self._registry_limit)
            records = self._synthesizer.synthesize(entries)
        except RegistryError as exc:
            self._log_primary_failure(exc.code, str(exc))
            return None
        except (ValidationError, KeyError, TypeError) as exc:
            self._log_primary_failure("REGISTRY_SCHEMA_ERR", str(exc))
            return None
        except Exception as exc:
            logger.exception("directory.registry.unexpected_error")
            self._log_primary_failure("REGISTRY_UNEXPECTED", str(exc))
            return None

        if not records:
            self._log_primary_failure("REGISTRY_EMPTY", "Registry returned no entries")
            return None
        return records

    def _build_fallback(self) -> list[CompanyRecord]:
        try:
            records = list(self._fallback_factory())
        except Exception as exc:
            logger.exception("directory.fallback.failed")
            raise DirectoryUnavailableError(f"Unable to build fallback dataset: {exc}") from exc
        if not records:
            raise DirectoryUnavailableError("Fallback dataset is empty")
        logger.info("directory.refresh.fallback", extra={"count": len(records)})
        return records

    def _log_primary_failure(self, code: str, message: str) -> None:
        metrics.increment("registry.errors", tags={"code": code})
        logger.warning("directory.registry.failed", extra={"code": code, "error": message})
