"""
Completeness Resolution - When did every province last report?

National totals for cases, deaths and tests are sums of provincial reports
that arrive on different schedules. The completeness file lists, per date,
which regions had reported by then; the latest date covered by all ten
provinces is where the national series stops being provisional.
"""

from collections.abc import Iterable, Mapping
from typing import AbstractSet, Any

from config import REQUIRED_PROVINCES
from .errors import NoCompleteDate
from .models import AnnotationMarker


COMPLETENESS_MARKER_LABEL = 'All provinces last reported'


def _reported_regions(regions: Any) -> frozenset:
    # Malformed entries (None, bare strings, numbers) never count as complete
    if isinstance(regions, (str, bytes)) or not isinstance(regions, Iterable):
        return frozenset()
    try:
        return frozenset(regions)
    except TypeError:
        # Unhashable members, e.g. nested lists
        return frozenset()


def resolve_completeness_date(
    records: Mapping,
    required_regions: AbstractSet[str] = REQUIRED_PROVINCES,
):
    """
    Find the most recent date by which all required regions had reported.

    Args:
        records: Mapping of date -> collection of region codes reported by that date
        required_regions: Regions that must all be present (default: the ten provinces)

    Returns:
        The qualifying date key, in whatever form the records use

    Raises:
        NoCompleteDate: if no date covers every required region
    """
    if not isinstance(records, Mapping):
        raise NoCompleteDate(f"Completeness records must be a mapping, got {type(records).__name__}")

    required = frozenset(required_regions)
    complete = [day for day, regions in records.items() if required <= _reported_regions(regions)]

    if not complete:
        missing = ', '.join(sorted(required))
        raise NoCompleteDate(f"No date has reports from all of: {missing}")

    return max(complete)


def build_completeness_marker(completeness_date) -> AnnotationMarker:
    return AnnotationMarker(date=completeness_date, label=COMPLETENESS_MARKER_LABEL)
