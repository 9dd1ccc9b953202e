"""Domain models for the company directory."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, conint, constr, model_validator


class CompanyRecord(BaseModel):
    """One directory entry, immutable for the lifetime of a snapshot."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: constr(strip_whitespace=True, min_length=1)  # type: ignore[valid-type]
    location: str
    industry: str
    employees: conint(ge=0)  # type: ignore[valid-type]
    founded: conint(ge=1000, le=9999)  # type: ignore[valid-type]
    ticker: str | None = None


class SnapshotSource(str, Enum):
    """Where the records of a snapshot came from."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    CACHE = "cache"


class CacheSnapshot(BaseModel):
    """Full company list at one point in time, swapped wholesale on refresh."""

    model_config = ConfigDict(frozen=True)

    records: tuple[CompanyRecord, ...] = Field(default_factory=tuple)
    fetched_at: datetime
    source: SnapshotSource
    origin: SnapshotSource = Field(
        description="Underlying data source; never `cache`.",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_origin(cls, values: object) -> object:
        if isinstance(values, dict) and values.get("origin") is None:
            values = dict(values)
            values["origin"] = values.get("source")
        return values

    @model_validator(mode="after")
    def _check_snapshot(self) -> "CacheSnapshot":
        if self.origin is SnapshotSource.CACHE:
            raise ValueError("Snapshot origin must be primary or fallback.")
        seen: set[int] = set()
        for record in self.records:
            if record.id in seen:
                raise ValueError(f"Duplicate company id {record.id} in snapshot.")
            seen.add(record.id)
        return self

    @property
    def count(self) -> int:
        return len(self.records)

    def find(self, company_id: int) -> CompanyRecord | None:
        for record in self.records:
            if record.id == company_id:
                return record
        return None

    def as_cached(self) -> "CacheSnapshot":
        """Return the same snapshot tagged as served from cache."""
        return self.model_copy(update={"source": SnapshotSource.CACHE})

    @classmethod
    def build(
        cls,
        records: Sequence[CompanyRecord],
        *,
        fetched_at: datetime,
        source: SnapshotSource,
    ) -> "CacheSnapshot":
        return cls(records=tuple(records), fetched_at=fetched_at, source=source, origin=source)
