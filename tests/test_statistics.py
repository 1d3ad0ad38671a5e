"""Tests for the statistics engine."""

import pytest

from dnsbench.statistics import StatisticsEngine, percentile, summarize, unique_errors

from conftest import failed, make_run, ok


def test_percentile_bounds():
    values = [10.0, 20.0, 30.0, 40.0]
    assert percentile(values, 0) == 10.0
    assert percentile(values, -5) == 10.0
    assert percentile(values, 100) == 40.0
    assert percentile(values, 150) == 40.0


def test_percentile_interpolates_between_ranks():
    assert percentile([10.0, 20.0, 30.0, 40.0], 50) == pytest.approx(25.0)
    # position 0.95 * 4 = 3.8
    assert percentile([10.0, 20.0, 30.0, 40.0, 50.0], 95) == pytest.approx(48.0)


def test_percentile_exact_rank():
    assert percentile([10.0, 20.0, 30.0], 50) == 20.0


def test_percentile_empty_is_not_available():
    assert percentile([], 50) is None


def test_summarize_all_successful():
    stats = summarize([ok(v) for v in (30, 10, 50, 20, 40)])
    assert stats.count == 5
    assert stats.success_count == 5
    assert stats.min_ms == 10.0
    assert stats.max_ms == 50.0
    assert stats.avg_ms == pytest.approx(30.0)
    assert stats.median_ms == pytest.approx(30.0)
    assert stats.p95_ms == pytest.approx(48.0)
    assert stats.success_rate == 100.0
    assert stats.errors == ()


def test_summarize_mixed_outcomes():
    stats = summarize([ok(10), failed(1500), ok(20), failed(1501)])
    assert stats.count == 4
    assert stats.success_count == 2
    assert stats.failure_count == 2
    assert stats.min_ms == 10.0
    assert stats.max_ms == 20.0
    assert stats.avg_ms == pytest.approx(15.0)
    assert stats.success_rate == 50.0
    assert stats.errors == ("timeout after 1500ms",)


def test_failed_elapsed_times_are_ignored():
    stats = summarize([ok(5), failed(1)])
    assert stats.min_ms == 5.0
    assert stats.max_ms == 5.0


def test_summarize_no_successes_reports_not_available():
    stats = summarize([failed(1500), failed(1500, "SERVFAIL from 192.0.2.1:53")])
    assert stats.count == 2
    assert stats.success_count == 0
    for value in (stats.min_ms, stats.max_ms, stats.avg_ms, stats.median_ms, stats.p95_ms):
        assert value is None
    assert stats.success_rate == 0.0


def test_summarize_empty():
    stats = summarize([])
    assert stats.count == 0
    assert stats.success_rate == 0.0
    assert stats.avg_ms is None


def test_median_and_p95_match_percentile():
    values = [12.5, 3.25, 7.0, 99.0, 41.0, 8.5]
    stats = summarize([ok(v) for v in values])
    ordered = sorted(values)
    assert stats.median_ms == pytest.approx(percentile(ordered, 50))
    assert stats.p95_ms == pytest.approx(percentile(ordered, 95))


def test_unique_errors_keep_first_occurrence_order():
    outcomes = [failed(1, "b"), ok(1), failed(1, "a"), failed(1, "b"), failed(1, "c")]
    assert unique_errors(outcomes) == ("b", "a", "c")


def test_compare_resolvers_picks_fastest_average():
    slow = make_run("Slow", [ok(40), ok(60)])
    fast = make_run("Fast", [ok(10), ok(30)])
    dead = make_run("Dead", [failed(1500)])

    comparison = StatisticsEngine.compare_resolvers([slow, fast, dead])

    assert comparison["winner"] is fast
    assert [name for name, _ in comparison["rankings"]["by_latency"]] == ["Fast", "Slow"]
    assert comparison["improvements"]["Slow"] == pytest.approx(60.0)


def test_compare_resolvers_without_successes():
    comparison = StatisticsEngine.compare_resolvers([make_run("Dead", [failed(1)])])
    assert comparison["winner"] is None
