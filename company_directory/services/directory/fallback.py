"""Curated list of well-known public companies served when the registry is down."""

from __future__ import annotations

from company_directory.models.company import CompanyRecord

_CURATED_COMPANIES: tuple[dict[str, object], ...] = (
    {"name": "Apple Inc.", "location": "Cupertino, CA", "industry": "Technology", "employees": 164000, "founded": 1976, "ticker": "AAPL"},
    {"name": "Microsoft Corporation", "location": "Redmond, WA", "industry": "Technology", "employees": 221000, "founded": 1975, "ticker": "MSFT"},
    {"name": "Amazon.com Inc.", "location": "Seattle, WA", "industry": "Retail", "employees": 1541000, "founded": 1994, "ticker": "AMZN"},
    {"name": "Tesla Inc.", "location": "Austin, TX", "industry": "Energy", "employees": 127855, "founded": 2003, "ticker": "TSLA"},
    {"name": "Meta Platforms Inc.", "location": "Menlo Park, CA", "industry": "Technology", "employees": 86482, "founded": 2004, "ticker": "META"},
    {"name": "Alphabet Inc.", "location": "Mountain View, CA", "industry": "Technology", "employees": 190234, "founded": 1998, "ticker": "GOOGL"},
    {"name": "JPMorgan Chase & Co.", "location": "New York, NY", "industry": "Finance", "employees": 293723, "founded": 1799, "ticker": "JPM"},
    {"name": "Johnson & Johnson", "location": "New Brunswick, NJ", "industry": "Healthcare", "employees": 152700, "founded": 1886, "ticker": "JNJ"},
    {"name": "Visa Inc.", "location": "San Francisco, CA", "industry": "Finance", "employees": 26500, "founded": 1958, "ticker": "V"},
    {"name": "Walmart Inc.", "location": "Bentonville, AR", "industry": "Retail", "employees": 2100000, "founded": 1962, "ticker": "WMT"},
    {"name": "Procter & Gamble", "location": "Cincinnati, OH", "industry": "Retail", "employees": 107000, "founded": 1837, "ticker": "PG"},
    {"name": "UnitedHealth Group", "location": "Minnetonka, MN", "industry": "Healthcare", "employees": 440000, "founded": 1977, "ticker": "UNH"},
    {"name": "NVIDIA Corporation", "location": "Santa Clara, CA", "industry": "Technology", "employees": 29600, "founded": 1993, "ticker": "NVDA"},
    {"name": "Exxon Mobil", "location": "Irving, TX", "industry": "Energy", "employees": 62000, "founded": 1999, "ticker": "XOM"},
    {"name": "Pfizer Inc.", "location": "New York, NY", "industry": "Healthcare", "employees": 83000, "founded": 1849, "ticker": "PFE"},
    {"name": "Coca-Cola Company", "location": "Atlanta, GA", "industry": "Retail", "employees": 82500, "founded": 1892, "ticker": "KO"},
    {"name": "Intel Corporation", "location": "Santa Clara, CA", "industry": "Technology", "employees": 124800, "founded": 1968, "ticker": "INTC"},
    {"name": "Chevron Corporation", "location": "San Ramon, CA", "industry": "Energy", "employees": 43846, "founded": 1879, "ticker": "CVX"},
    {"name": "Mastercard Inc.", "location": "Purchase, NY", "industry": "Finance", "employees": 33000, "founded": 1966, "ticker": "MA"},
    {"name": "Netflix Inc.", "location": "Los Gatos, CA", "industry": "Technology", "employees": 12800, "founded": 1997, "ticker": "NFLX"},
)


def curated_companies() -> list[CompanyRecord]:
    """Build the fallback records with ids numbered from 1 in list order."""
    return [
        CompanyRecord(id=index, **entry)
        for index, entry in enumerate(_CURATED_COMPANIES, start=1)
    ]
