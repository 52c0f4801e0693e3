"""
Typed failures raised by the transformation core.

Callers (API, exporter) catch TransformError and show a fallback state.
"""


class TransformError(Exception):
    """Base class for all transformation failures."""


class UnknownMetric(TransformError, KeyError):
    """A metric id is not in the label table."""

    def __init__(self, metric_id: str):
        self.metric_id = metric_id
        super().__init__(metric_id)

    def __str__(self) -> str:
        return f"Unknown metric: {self.metric_id!r}"


class UnknownRegion(TransformError, KeyError):
    """A region code is not in the region table."""

    def __init__(self, region_code: str):
        self.region_code = region_code
        super().__init__(region_code)

    def __str__(self) -> str:
        return f"Unknown region: {self.region_code!r}"


class NoCompleteDate(TransformError):
    """No reporting date covers every required region."""


class EmptySeries(TransformError):
    """The series builder was given no points."""
