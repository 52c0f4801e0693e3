"""
Data model for the transformation core.

All records are immutable; derived series are rebuilt on every call.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class AggregationMode(str, Enum):
    """Which derived series a chart shows."""

    CUMULATIVE = 'cumulative'
    DAILY = 'daily'


class SeriesKind(str, Enum):
    CUMULATIVE = 'cumulative'
    DAILY_RAW = 'daily_raw'
    DAILY_SMOOTHED = 'daily_smoothed'


@dataclass(frozen=True)
class RawPoint:
    """One reporting day for a (metric, region) pair."""

    date: date
    cumulative_value: float
    daily_value: float


@dataclass(frozen=True)
class MetricDescriptor:
    """Catalog entry used to populate the metric picker."""

    id: str
    display_name: str
    value_unit: str = 'count'


@dataclass(frozen=True)
class DerivedSeries:
    """A labelled series aligned point-for-point with its raw input."""

    label: str
    kind: SeriesKind
    points: Tuple[Tuple[date, float], ...]

    @property
    def dates(self) -> List[date]:
        return [d for d, _ in self.points]

    @property
    def values(self) -> List[float]:
        return [v for _, v in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class AnnotationMarker:
    """A single vertical reference line."""

    date: date
    label: str


@dataclass(frozen=True)
class SeriesBundle:
    """
    Result of the series builder.

    y_axis_min is 0 when negative values make no sense for the metric,
    None when the axis should be left unclamped.
    """

    primary: DerivedSeries
    secondary: Optional[DerivedSeries] = None
    y_axis_min: Optional[int] = None

    @property
    def series(self) -> List[DerivedSeries]:
        if self.secondary is None:
            return [self.primary]
        return [self.primary, self.secondary]
