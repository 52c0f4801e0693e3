import pytest

from processing import AggregationMode, UnknownMetric, UnknownRegion, TransformError
from processing.labels import format_metric_label, format_region_label, format_chart_title


CUMULATIVE = AggregationMode.CUMULATIVE
DAILY = AggregationMode.DAILY


def test_cumulative_labels():
    assert format_metric_label('cases', CUMULATIVE) == "Cumulative cases"
    assert format_metric_label('tests_completed', CUMULATIVE) == "Cumulative tests completed"
    assert format_metric_label('vaccine_coverage_dose_3', CUMULATIVE) == "Cumulative vaccine coverage (dose 3)"


def test_active_metrics_are_never_cumulative():
    assert format_metric_label('icu', CUMULATIVE) == "Active ICU"
    assert format_metric_label('hospitalizations', CUMULATIVE) == "Active hospitalizations"


def test_daily_labels():
    assert format_metric_label('cases', DAILY) == "Daily cases"
    assert format_metric_label('icu', DAILY) == "Change in active ICU"
    assert format_metric_label('hospitalizations', DAILY) == "Change in active hospitalizations"
    assert format_metric_label('vaccine_coverage_dose_1', DAILY) == "Change in vaccine coverage (dose 1)"
    assert format_metric_label('vaccine_coverage_dose_5', DAILY) == "Change in vaccine coverage (dose 5)"
    assert (format_metric_label('vaccine_administration_total_doses', DAILY)
            == "Daily vaccine administration (total doses)")


def test_mode_accepts_wire_value():
    assert format_metric_label('deaths', 'daily') == "Daily deaths"


def test_unknown_metric_is_explicit():
    with pytest.raises(UnknownMetric) as excinfo:
        format_metric_label('not_a_real_metric', CUMULATIVE)

    assert excinfo.value.metric_id == 'not_a_real_metric'
    assert isinstance(excinfo.value, TransformError)
    assert 'not_a_real_metric' in str(excinfo.value)


def test_region_labels():
    assert format_region_label('CAN') == 'Canada'
    assert format_region_label('PE') == 'Prince Edward Island'
    assert format_region_label('YT') == 'Yukon'


def test_unknown_region_is_explicit():
    with pytest.raises(UnknownRegion):
        format_region_label('XX')


def test_chart_title():
    assert format_chart_title('icu', 'ON', DAILY) == "Change in active ICU in Ontario"
