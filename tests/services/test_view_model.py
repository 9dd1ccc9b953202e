from __future__ import annotations

import math

import pytest

from company_directory.models.company import CompanyRecord
from company_directory.services.directory.fallback import curated_companies
from company_directory.services.directory.view_model import (
    SortDirection,
    SortKey,
    ViewState,
    apply_view,
    distinct_industries,
    distinct_locations,
    filter_records,
    filtered_sorted,
    paginate,
    sort_records,
    total_pages,
)


def _record(record_id: int, name: str, **overrides) -> CompanyRecord:
    payload = {
        "id": record_id,
        "name": name,
        "location": "NY",
        "industry": "Tech",
        "employees": 10,
        "founded": 2000,
    }
    payload.update(overrides)
    return CompanyRecord(**payload)


def test_filters_and_sort_on_reference_example():
    acme = _record(1, "Acme", industry="Tech", employees=100, founded=2000)
    zenith = _record(2, "Zenith", industry="Finance", employees=50, founded=1990)
    state = ViewState(
        location_filter="NY",
        sort_key=SortKey.EMPLOYEES,
        sort_direction=SortDirection.DESC,
        page=1,
        page_size=6,
    )

    page = apply_view([zenith, acme], state)

    assert filtered_sorted([zenith, acme], state) == [acme, zenith]
    assert page.records == (acme, zenith)
    assert page.total_pages == 1
    assert page.total_count == 2


def test_empty_filters_keep_every_record_once():
    records = curated_companies()

    result = filtered_sorted(records, ViewState(page_size=6))

    assert len(result) == len(records)
    assert {record.id for record in result} == {record.id for record in records}


def test_search_matches_name_or_location_case_insensitively():
    records = curated_companies()
    state = ViewState(search_term="santa CLARA")

    kept = filter_records(records, state)
    excluded = [record for record in records if record not in kept]

    assert {record.name for record in kept} == {"NVIDIA Corporation", "Intel Corporation"}
    for record in excluded:
        assert "santa clara" not in record.name.lower()
        assert "santa clara" not in record.location.lower()


def test_search_term_matches_name_substring():
    kept = filter_records(curated_companies(), ViewState(search_term="inc."))

    assert kept
    assert all("inc." in record.name.lower() for record in kept)


def test_filters_are_anded():
    records = curated_companies()
    state = ViewState(location_filter="Santa Clara, CA", industry_filter="Technology", search_term="intel")

    kept = filter_records(records, state)

    assert [record.ticker for record in kept] == ["INTC"]


def test_location_filter_requires_exact_match():
    kept = filter_records(curated_companies(), ViewState(location_filter="New York"))

    assert kept == []


@pytest.mark.parametrize("key", list(SortKey))
@pytest.mark.parametrize("direction", list(SortDirection))
def test_sort_orders_adjacent_pairs(key, direction):
    ordered = sort_records(curated_companies(), key, direction)

    def value(record):
        raw = getattr(record, key.value)
        return raw.casefold() if isinstance(raw, str) else raw

    for left, right in zip(ordered, ordered[1:]):
        if direction is SortDirection.ASC:
            assert value(left) <= value(right)
        else:
            assert value(left) >= value(right)


def test_string_sort_ignores_case():
    records = [_record(1, "beta"), _record(2, "Alpha"), _record(3, "charlie")]

    ordered = sort_records(records, SortKey.NAME)

    assert [record.name for record in ordered] == ["Alpha", "beta", "charlie"]


def test_flipping_direction_reverses_distinct_keys():
    records = curated_companies()

    ascending = sort_records(records, SortKey.EMPLOYEES, SortDirection.ASC)
    descending = sort_records(records, SortKey.EMPLOYEES, SortDirection.DESC)

    assert descending == list(reversed(ascending))


def test_ties_keep_original_order_in_both_directions():
    records = [
        _record(1, "First", employees=5),
        _record(2, "Second", employees=5),
        _record(3, "Third", employees=1),
    ]

    ascending = sort_records(records, SortKey.EMPLOYEES, SortDirection.ASC)
    descending = sort_records(records, SortKey.EMPLOYEES, SortDirection.DESC)

    assert [record.id for record in ascending] == [3, 1, 2]
    assert [record.id for record in descending] == [1, 2, 3]


def test_pages_concatenate_to_filtered_sorted_list():
    records = curated_companies()
    state = ViewState(sort_key=SortKey.FOUNDED, page_size=6)
    expected = filtered_sorted(records, state)

    first = apply_view(records, state)
    pages = [apply_view(records, state.with_page(number)) for number in range(1, first.total_pages + 1)]

    assert first.total_pages == math.ceil(len(records) / 6) == 4
    assert [record for page in pages for record in page.records] == expected
    assert len(pages[-1].records) == 2


def test_page_is_clamped_into_range():
    records = curated_companies()

    high = apply_view(records, ViewState(page=99, page_size=6))
    low = paginate(records, -3, 6)

    assert high.page == 4
    assert high.records == apply_view(records, ViewState(page=4, page_size=6)).records
    assert low.page == 1


def test_no_matches_yields_zero_pages_on_page_one():
    page = apply_view(curated_companies(), ViewState(search_term="no such company", page=3))

    assert page.total_pages == 0
    assert page.total_count == 0
    assert page.page == 1
    assert page.records == ()
    assert page.summary() == "Showing 0 to 0 of 0 companies"


def test_total_pages_rounds_up():
    assert total_pages(0, 6) == 0
    assert total_pages(6, 6) == 1
    assert total_pages(7, 6) == 2


def test_page_summary_reports_visible_range():
    page = apply_view(curated_companies(), ViewState(page=2, page_size=6))

    assert page.summary() == "Showing 7 to 12 of 20 companies"
    assert page.has_previous
    assert page.has_next


def test_distinct_choices_come_from_full_list_sorted():
    records = curated_companies()

    assert distinct_industries(records) == ["Energy", "Finance", "Healthcare", "Retail", "Technology"]
    locations = distinct_locations(records)
    assert locations == sorted(set(locations))
    assert "Santa Clara, CA" in locations
    assert len(locations) == len({record.location for record in records})


@pytest.mark.parametrize(
    "transition",
    [
        lambda state: state.with_search("apple"),
        lambda state: state.with_location_filter("Austin, TX"),
        lambda state: state.with_industry_filter("Energy"),
        lambda state: state.with_sort(SortKey.FOUNDED, SortDirection.DESC),
        lambda state: state.toggle_sort(SortKey.NAME),
    ],
)
def test_changing_filters_or_sort_resets_page(transition):
    state = ViewState(page=3)

    assert transition(state).page == 1


def test_toggle_sort_flips_same_key_and_starts_new_key_ascending():
    state = ViewState()

    flipped = state.toggle_sort(SortKey.NAME)
    switched = flipped.toggle_sort("employees")

    assert flipped.sort_direction is SortDirection.DESC
    assert switched.sort_key is SortKey.EMPLOYEES
    assert switched.sort_direction is SortDirection.ASC


def test_reset_restores_defaults_but_keeps_page_size():
    state = ViewState(search_term="x", industry_filter="Retail", page=2, page_size=4)

    reset = state.reset()

    assert reset == ViewState(page_size=4)


def test_view_state_rejects_unknown_sort_key():
    with pytest.raises(ValueError):
        ViewState(sort_key="revenue")
