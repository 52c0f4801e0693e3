#!/usr/bin/env python
"""
Export chart payloads as JSON files.

Walks a metric x region x mode grid through one ChartSession, so the
annotation policy behaves exactly as it does on the page when a user
flips through the pickers.

Usage:
    python -m scripts.export_charts --out charts --metrics cases deaths --regions CAN ON
"""

import argparse
import logging
import sys

from config import config
from processing import AggregationMode, ChartSession, JSONFileRenderTarget, NoCompleteDate, TransformError
from registry import registry
from sources import source_manager

logger = logging.getLogger("export_charts")


def export_charts(session: ChartSession, metrics, regions, modes, manager=source_manager) -> int:
    """
    Render every combination into the session's target.

    Returns:
        Number of charts that failed
    """
    failures = 0
    for metric in metrics:
        for region in regions:
            series = manager.fetch_sync(metric, region)
            if not series.is_valid:
                logger.error(f"[Export] {metric}/{region}: {series.error}")
                failures += 1
                continue

            records = None
            if registry.tracks_completeness(metric, region):
                completeness = manager.fetch_completeness_sync(metric)
                if completeness.is_valid:
                    records = completeness.records
                else:
                    logger.warning(f"[Export] Completeness unavailable for {metric}: {completeness.error}")

            for mode in modes:
                try:
                    try:
                        session.refresh(series.points, metric, region, mode, completeness=records)
                    except NoCompleteDate as e:
                        logger.warning(f"[Export] {metric}/{region}: {e}")
                        session.refresh(series.points, metric, region, mode)
                except TransformError as e:
                    logger.error(f"[Export] {metric}/{region}/{mode.value}: {e}")
                    failures += 1
    return failures


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('--out', default='charts', help='Output directory')
    parser.add_argument('--metrics', nargs='+', default=['cases', 'deaths'])
    parser.add_argument('--regions', nargs='+', default=['CAN'])
    parser.add_argument('--modes', nargs='+', default=[m.value for m in AggregationMode],
                        choices=[m.value for m in AggregationMode])
    parser.add_argument('--preserve-annotation', action='store_true', default=config.preserve_annotation)
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.log_level, format="%(levelname)s %(message)s")

    session = ChartSession(
        JSONFileRenderTarget(args.out),
        preserve_annotation=args.preserve_annotation,
        window=config.rolling_window,
    )
    failures = export_charts(
        session,
        args.metrics,
        [r.upper() for r in args.regions],
        [AggregationMode(m) for m in args.modes],
        manager=source_manager,
    )
    print(f"Wrote {len(session.target.written)} charts to {args.out} ({failures} failed)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
