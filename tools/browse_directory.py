"""Browse the company directory from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from company_directory.clients.directory_api import DirectoryApiClient
from company_directory.config import settings
from company_directory.models.company import CompanyRecord
from company_directory.services.directory.session import (
    DirectoryApi,
    DirectorySession,
    LoadStatus,
    ViewMode,
)
from company_directory.services.directory.view_model import (
    DirectoryPage,
    SortDirection,
    SortKey,
    ViewState,
)

logger = logging.getLogger("tools.browse_directory")

TABLE_COLUMNS: tuple[tuple[str, str, int], ...] = (
    ("name", "Company", 32),
    ("location", "Location", 20),
    ("industry", "Industry", 12),
    ("employees", "Employees", 11),
    ("founded", "Founded", 7),
)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search, filter and page through the company directory.")
    parser.add_argument("--base-url", default=settings.directory_api_base_url, help="Directory API base URL.")
    parser.add_argument("--search", default="", help="Match company name or location (case-insensitive).")
    parser.add_argument("--location", default="", help="Exact location filter.")
    parser.add_argument("--industry", default="", help="Exact industry filter.")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.NAME.value,
        help="Field to sort by.",
    )
    parser.add_argument(
        "--direction",
        choices=[direction.value for direction in SortDirection],
        default=SortDirection.ASC.value,
        help="Sort direction.",
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (clamped to the valid range).")
    parser.add_argument("--page-size", type=positive_int, default=settings.page_size, help="Companies per page.")
    parser.add_argument(
        "--view",
        choices=[mode.value for mode in ViewMode],
        default=ViewMode.TABLE.value,
        help="Render as a table or as cards.",
    )
    parser.add_argument("--refresh", action="store_true", help="Ask the service to refetch before listing.")
    parser.add_argument("--list-filters", action="store_true", help="Print the available filter values.")
    return parser.parse_args(argv)


def format_employees(value: int) -> str:
    return f"{value:,}"


def render_table(page: DirectoryPage) -> list[str]:
    header = "  ".join(title.ljust(width) for _, title, width in TABLE_COLUMNS)
    lines = [header, "-" * len(header)]
    for record in page.records:
        cells = []
        for field_name, _, width in TABLE_COLUMNS:
            value = getattr(record, field_name)
            text = format_employees(value) if field_name == "employees" else str(value)
            cells.append(_truncate(text, width).ljust(width))
        lines.append("  ".join(cells).rstrip())
    return lines


def render_cards(page: DirectoryPage) -> list[str]:
    lines: list[str] = []
    for record in page.records:
        lines.extend(_card(record))
        lines.append("")
    return lines


def _card(record: CompanyRecord) -> list[str]:
    title = f"{record.name} ({record.ticker})" if record.ticker else record.name
    return [
        title,
        f"  Location:  {record.location}",
        f"  Industry:  {record.industry}",
        f"  Employees: {format_employees(record.employees)}",
        f"  Founded:   {record.founded}",
    ]


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "~"


def render(session: DirectorySession) -> list[str]:
    page = session.current_page()
    if not page.records:
        return ["No companies found. Try adjusting your search or filters."]
    body = render_table(page) if session.view_mode is ViewMode.TABLE else render_cards(page)
    footer = f"{page.summary()} (page {page.page} of {page.total_pages})"
    return [*body, footer]


def build_session(args: argparse.Namespace, api: DirectoryApi) -> DirectorySession:
    state = ViewState(
        search_term=args.search,
        location_filter=args.location,
        industry_filter=args.industry,
        sort_key=SortKey(args.sort),
        sort_direction=SortDirection(args.direction),
        page_size=args.page_size,
    )
    session = DirectorySession(api, state=state)
    session.set_view_mode(args.view)
    return session


def run(args: argparse.Namespace, api: DirectoryApi, out: TextIO = sys.stdout) -> int:
    session = build_session(args, api)
    status = session.refresh() if args.refresh else session.load()
    if status is not LoadStatus.READY:
        logger.error("Directory unavailable: %s", session.error)
        return 1

    session.go_to_page(args.page)
    if args.list_filters:
        out.write("Locations: " + ", ".join(session.locations) + "\n")
        out.write("Industries: " + ", ".join(session.industries) + "\n")
    for line in render(session):
        out.write(line + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = parse_args(argv)
    with DirectoryApiClient(base_url=args.base_url) as api:
        return run(args, api)


if __name__ == "__main__":
    raise SystemExit(main())
