from datetime import date

import pytest

from config import REQUIRED_PROVINCES
from processing import NoCompleteDate
from processing.completeness import (
    COMPLETENESS_MARKER_LABEL,
    build_completeness_marker,
    resolve_completeness_date,
)


PROVINCES = {'AB', 'BC', 'MB', 'NB', 'NL', 'NS', 'ON', 'PE', 'QC', 'SK'}


def test_returns_last_date_with_all_provinces():
    records = {
        "2024-01-01": {"AB", "BC"},
        "2024-01-02": {"AB", "BC", "MB", "NB", "NL", "NS", "ON", "PE", "QC", "SK"},
    }
    assert resolve_completeness_date(records, PROVINCES) == "2024-01-02"


def test_default_requires_ten_provinces_only():
    assert REQUIRED_PROVINCES == PROVINCES
    records = {date(2024, 3, 1): PROVINCES, date(2024, 3, 2): PROVINCES | {'YT'}}
    assert resolve_completeness_date(records) == date(2024, 3, 2)


def test_territories_are_not_required():
    records = {date(2024, 3, 1): sorted(PROVINCES)}
    assert resolve_completeness_date(records) == date(2024, 3, 1)


def test_most_recent_qualifying_date_wins():
    records = {
        date(2024, 1, 5): PROVINCES,
        date(2024, 1, 1): PROVINCES,
        date(2024, 1, 9): {'AB'},
    }
    assert resolve_completeness_date(records) == date(2024, 1, 5)


def test_custom_required_regions():
    records = {"2024-01-01": {"AB", "BC"}, "2024-01-02": {"AB"}}
    assert resolve_completeness_date(records, {"AB", "BC"}) == "2024-01-01"


def test_no_qualifying_date():
    records = {"2024-01-01": {"AB", "BC"}, "2024-01-02": {"ON"}}
    with pytest.raises(NoCompleteDate):
        resolve_completeness_date(records, PROVINCES)


@pytest.mark.parametrize("records", [
    {},
    {"2024-01-01": None},
    {"2024-01-01": "ABBCMBNBNLNSONPEQCSK"},
    {"2024-01-01": 42},
    {"2024-01-01": [["AB"]]},
    {"2024-01-01": [sorted(PROVINCES)]},
    None,
    ["2024-01-01"],
])
def test_empty_or_malformed_input(records):
    with pytest.raises(NoCompleteDate):
        resolve_completeness_date(records, PROVINCES)


def test_marker():
    marker = build_completeness_marker(date(2024, 1, 2))
    assert marker.date == date(2024, 1, 2)
    assert marker.label == COMPLETENESS_MARKER_LABEL
