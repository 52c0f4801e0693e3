"""
Chart Session - One long-lived chart and the target it draws into.

The session is the only stateful piece of the pipeline: it remembers the
last annotation so that callers can choose whether a completeness marker
survives a redraw that does not produce one.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .formatter import format_chart_data
from .models import AggregationMode, RawPoint
from .transforms import DEFAULT_WINDOW

logger = logging.getLogger(__name__)


class RenderTarget(ABC):
    """Where chart payloads end up (a page, a file, a test double)."""

    @abstractmethod
    def render(self, chart: Dict[str, Any]) -> None:
        pass


class MemoryRenderTarget(RenderTarget):
    """Keeps every rendered payload, newest last."""

    def __init__(self):
        self.history: List[Dict[str, Any]] = []

    def render(self, chart: Dict[str, Any]) -> None:
        self.history.append(chart)

    @property
    def latest(self) -> Optional[Dict[str, Any]]:
        return self.history[-1] if self.history else None


class JSONFileRenderTarget(RenderTarget):
    """Writes each chart to <directory>/<metric>_<region>_<mode>.json."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.written: List[Path] = []

    def render(self, chart: Dict[str, Any]) -> None:
        path = self.directory / f"{chart['metric']}_{chart['region']}_{chart['mode']}.json"
        path.write_text(json.dumps(chart, indent=2))
        self.written.append(path)
        logger.info(f"[Chart] Wrote {path}")


class ChartSession:
    """
    Rebuilds a chart on every parameter change and hands it to a target.

    Args:
        target: RenderTarget receiving each payload
        preserve_annotation: Keep the previous annotation when a redraw has none
        window: Rolling average window in days
    """

    def __init__(self, target: RenderTarget, preserve_annotation: bool = False,
                 window: int = DEFAULT_WINDOW):
        self.target = target
        self.preserve_annotation = preserve_annotation
        self.window = window
        self._annotation: Optional[Dict[str, str]] = None

    @property
    def annotation(self) -> Optional[Dict[str, str]]:
        return self._annotation

    def refresh(
        self,
        raw_points: Sequence[RawPoint],
        metric_id: str,
        region_code: str,
        mode: AggregationMode,
        completeness: Optional[Mapping] = None,
    ) -> Dict[str, Any]:
        """Build the chart for new parameters and render it."""
        chart = format_chart_data(
            raw_points, metric_id, region_code, mode,
            completeness=completeness, window=self.window,
        )

        if chart['annotation'] is None and self.preserve_annotation:
            chart['annotation'] = self._annotation

        self._annotation = chart['annotation']
        self.target.render(chart)
        return chart

    def reset(self) -> None:
        self._annotation = None
