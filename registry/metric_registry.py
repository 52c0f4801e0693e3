"""
Metric Registry - Single Source of Truth for labels and metric behaviour.

The catalog fetched from CovidTimelineCanada only feeds the metric picker;
labels and classification come from the table below so a chart never
depends on what the remote catalog happens to contain.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from config import REGION_NAMES, COUNTRY_CODE, COMPLETENESS_METRICS


# Metric categories
COUNT = 'count'              # running totals (cases, deaths, tests)
ACTIVE = 'active'            # point-in-time occupancy (hospital, ICU)
COVERAGE = 'coverage'        # cumulative percentage of population
ADMINISTRATION = 'administration'


@dataclass(frozen=True)
class MetricInfo:
    """Display and charting metadata for one metric."""

    id: str
    name: str
    category: str = COUNT
    unit: str = 'count'
    clamp_at_zero: bool = False

    @property
    def is_active(self) -> bool:
        return self.category == ACTIVE

    @property
    def is_percentage(self) -> bool:
        return self.category == COVERAGE


@dataclass(frozen=True)
class RegionDescriptor:
    code: str
    name: str


def _metric(id: str, name: str, category: str = COUNT, **kwargs) -> MetricInfo:
    return MetricInfo(id=id, name=name, category=category, **kwargs)


# =============================================================================
# METRIC DATABASE
# =============================================================================

METRIC_DB: Dict[str, MetricInfo] = {
    m.id: m for m in [
        _metric('cases', 'cases', clamp_at_zero=True),
        _metric('deaths', 'deaths', clamp_at_zero=True),
        _metric('hospitalizations', 'hospitalizations', ACTIVE),
        _metric('icu', 'ICU', ACTIVE),
        _metric('tests_completed', 'tests completed'),
    ] + [
        _metric(f'vaccine_coverage_dose_{n}', f'vaccine coverage (dose {n})', COVERAGE, unit='percent')
        for n in range(1, 6)
    ] + [
        _metric('vaccine_administration_total_doses', 'vaccine administration (total doses)',
                ADMINISTRATION, unit='dose count'),
    ] + [
        _metric(f'vaccine_administration_dose_{n}', f'vaccine administration (dose {n})',
                ADMINISTRATION, unit='dose count')
        for n in range(1, 5)
    ]
}


class MetricRegistry:
    """Lookup for metrics and regions. Misses return None."""

    def __init__(self, metrics: Optional[Dict[str, MetricInfo]] = None,
                 regions: Optional[Dict[str, str]] = None):
        self._metrics = dict(METRIC_DB if metrics is None else metrics)
        self._regions = dict(REGION_NAMES if regions is None else regions)

    def get_metric(self, metric_id: str) -> Optional[MetricInfo]:
        """Get metric info, or None if the id is unknown."""
        return self._metrics.get(metric_id)

    def metric_ids(self) -> List[str]:
        return list(self._metrics)

    def get_region_name(self, region_code: str) -> Optional[str]:
        return self._regions.get(region_code)

    def regions(self) -> List[RegionDescriptor]:
        return [RegionDescriptor(code=code, name=name) for code, name in self._regions.items()]

    def tracks_completeness(self, metric_id: str, region_code: str) -> bool:
        """National totals of some metrics lag until every province reports."""
        return region_code == COUNTRY_CODE and metric_id in COMPLETENESS_METRICS


# Global registry instance
registry = MetricRegistry()
