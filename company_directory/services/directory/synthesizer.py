"""Maps registry entries into directory records.

The registry only publishes names and tickers. Industry, head count and
founding year are filler values produced here; they are placeholders for the
UI and must not be read as authoritative company data.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from company_directory.models.company import CompanyRecord

REGISTRY_LOCATION = "United States"
FILLER_INDUSTRIES: tuple[str, ...] = ("Technology", "Finance", "Healthcare", "Retail", "Energy")
EMPLOYEE_RANGE = (100, 5099)
FOUNDED_RANGE = (1950, 2019)


class RecordSynthesizer:
    """Fills the fields the registry does not provide.

    Industries cycle through `FILLER_INDUSTRIES` by position; employee counts
    and founding years are drawn from `rng`, so a seeded `random.Random` makes
    the output reproducible.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        industries: Sequence[str] = FILLER_INDUSTRIES,
    ) -> None:
        if not industries:
            raise ValueError("industries must not be empty.")
        self._rng = rng or random.Random()
        self._industries = tuple(industries)

    @classmethod
    def seeded(cls, seed: int | None) -> "RecordSynthesizer":
        return cls(rng=random.Random(seed))

    def synthesize(self, entries: Iterable[Mapping[str, Any]]) -> list[CompanyRecord]:
        records: list[CompanyRecord] = []
        for index, entry in enumerate(entries):
            ticker = entry.get("ticker") or None
            records.append(
                CompanyRecord(
                    id=index + 1,
                    name=str(entry["title"]),
                    location=REGISTRY_LOCATION,
                    industry=self._industries[index % len(self._industries)],
                    employees=self._rng.randint(*EMPLOYEE_RANGE),
                    founded=self._rng.randint(*FOUNDED_RANGE),
                    ticker=ticker,
                )
            )
        return records
