import json
from datetime import date

import pytest

from config import TESTING_NOTE
from processing import (
    AggregationMode,
    EmptySeries,
    NoCompleteDate,
    SeriesKind,
    UnknownMetric,
    UnknownRegion,
)
from processing.formatter import build_data_note, build_series, format_chart_data, y_axis_floor


CUMULATIVE = AggregationMode.CUMULATIVE
DAILY = AggregationMode.DAILY


def test_cumulative_mode_emits_one_series(points_factory):
    points = points_factory([1, 2, 3])
    bundle = build_series(points, 'cases', CUMULATIVE)

    assert len(bundle.series) == 1
    assert bundle.secondary is None
    assert bundle.primary.kind == SeriesKind.CUMULATIVE
    assert bundle.primary.label == "Cumulative cases"
    assert bundle.primary.values == [1.0, 3.0, 6.0]
    assert bundle.primary.dates == [p.date for p in points]


def test_daily_mode_emits_raw_and_smoothed(points_factory):
    points = points_factory([7, 0, 14, 3, 3, 3, 5, 10, -2])
    bundle = build_series(points, 'cases', DAILY)

    assert len(bundle.series) == 2
    raw, smoothed = bundle.series
    assert raw.kind == SeriesKind.DAILY_RAW
    assert raw.label == "Daily cases"
    assert raw.values == [7, 0, 14, 3, 3, 3, 5, 10, -2]
    assert smoothed.kind == SeriesKind.DAILY_SMOOTHED
    assert smoothed.label == "7-day average"
    assert smoothed.values[:3] == [7, 4, 7]
    assert smoothed.values[-1] == 5


def test_series_stay_aligned_with_input(points_factory):
    points = points_factory([1.0] * 30)
    for series in build_series(points, 'icu', DAILY).series:
        assert len(series) == len(points)
        assert series.dates == [p.date for p in points]


def test_percentage_smoothing_is_one_decimal(points_factory):
    points = points_factory([0.13, 0.27, 0.05, 0.31, 0.18, 0.22, 0.09, 0.41, 0.0, 0.17])
    smoothed = build_series(points, 'vaccine_coverage_dose_2', DAILY).secondary

    for value in smoothed.values:
        assert abs(value * 10 - round(value * 10)) < 1e-9


def test_count_smoothing_is_whole_numbers(points_factory):
    points = points_factory([3, 4, 4, 9, 1, 2, 7, 8])
    smoothed = build_series(points, 'deaths', DAILY).secondary
    assert all(float(v).is_integer() for v in smoothed.values)


def test_custom_window_label(points_factory):
    bundle = build_series(points_factory([1, 2, 3]), 'cases', DAILY, window=14)
    assert bundle.secondary.label == "14-day average"


def test_y_axis_floor():
    assert y_axis_floor('deaths') == 0
    assert y_axis_floor('cases') == 0
    assert y_axis_floor('hospitalizations') is None
    assert y_axis_floor('vaccine_coverage_dose_1') is None


def test_bundle_carries_y_axis_floor(points_factory):
    assert build_series(points_factory([1]), 'deaths', DAILY).y_axis_min == 0
    assert build_series(points_factory([1]), 'hospitalizations', DAILY).y_axis_min is None


def test_empty_input_raises():
    with pytest.raises(EmptySeries):
        build_series([], 'cases', DAILY)


def test_unknown_metric_checked_first():
    with pytest.raises(UnknownMetric):
        build_series([], 'nope', CUMULATIVE)


def test_data_note_for_national_cases_with_completeness():
    note = build_data_note('cases', 'CAN', date(2024, 1, 3), date(2024, 1, 2))
    assert note == (
        f"{TESTING_NOTE} Canadian data may be incomplete in recent weeks. "
        "All provinces last reported on 2024-01-02."
    )


def test_data_note_without_completeness_date():
    note = build_data_note('deaths', 'CAN', date(2024, 1, 3))
    assert note.endswith("Canadian data may be incomplete in recent weeks.")
    assert "last reported on" not in note


def test_data_note_for_province():
    assert build_data_note('icu', 'ON', date(2024, 1, 3)) == "Ontario last reported on 2024-01-03."
    assert build_data_note('cases', 'BC', date(2024, 1, 3)) == (
        f"{TESTING_NOTE} British Columbia last reported on 2024-01-03."
    )


def test_data_note_tolerates_empty_series():
    assert build_data_note('icu', 'ON', None) == ""


def test_data_note_unknown_region():
    with pytest.raises(UnknownRegion):
        build_data_note('icu', 'XX', None)


def test_chart_payload_for_national_cases(points_factory, complete_records):
    chart = format_chart_data(points_factory([1, 2, 3]), 'cases', 'CAN', DAILY, completeness=complete_records)

    assert chart['title'] == "Daily cases in Canada"
    assert chart['mode'] == 'daily'
    assert chart['dates'] == ['2024-01-01', '2024-01-02', '2024-01-03']
    assert [s['style'] for s in chart['series']] == ['bar', 'line']
    assert chart['y_axis_min'] == 0
    assert chart['annotation'] == {'date': '2024-01-02', 'label': 'All provinces last reported'}
    assert chart['note'].endswith("All provinces last reported on 2024-01-02.")
    json.dumps(chart)


def test_chart_payload_ignores_completeness_outside_national_totals(points_factory, complete_records):
    chart = format_chart_data(points_factory([1, 2, 3]), 'cases', 'ON', CUMULATIVE, completeness=complete_records)
    assert chart['annotation'] is None
    assert chart['note'].endswith("Ontario last reported on 2024-01-03.")

    chart = format_chart_data(points_factory([1, 2, 3]), 'icu', 'CAN', CUMULATIVE, completeness=complete_records)
    assert chart['annotation'] is None
    assert chart['y_axis_min'] is None


def test_chart_payload_propagates_missing_completeness(points_factory):
    with pytest.raises(NoCompleteDate):
        format_chart_data(points_factory([1]), 'deaths', 'CAN', DAILY, completeness={date(2024, 1, 1): {'AB'}})
