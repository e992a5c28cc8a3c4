"""Tests for run_all and Report."""

import pytest

from givenfixture.core.aggregator import Report, run_all
from givenfixture.core.errors import AggregateAssertionError


def failing(message: str):
    def assertion(value):
        raise AssertionError(message)

    return assertion


class TestRunAll:
    """Tests for run_all."""

    def test_no_assertions_pass(self) -> None:
        report = run_all(1, [])
        assert report.passed
        assert report.to_exception() is None

    def test_every_assertion_runs(self) -> None:
        seen = []
        run_all("value", [seen.append, failing("boom"), seen.append])
        assert seen == ["value", "value"]

    def test_violations_keep_registration_order(self) -> None:
        report = run_all(0, [failing("first"), lambda v: None, failing("third")])
        assert [str(v) for v in report.violations] == ["first", "third"]

    def test_non_assertion_errors_are_collected(self) -> None:
        def divide(value):
            return 1 / value

        report = run_all(0, [divide])
        assert isinstance(report.violations[0], ZeroDivisionError)

    def test_base_exceptions_are_not_swallowed(self) -> None:
        def interrupt(value):
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            run_all(0, [interrupt])

    def test_system_exit_is_not_swallowed(self) -> None:
        def leave(value):
            raise SystemExit(1)

        seen = []
        with pytest.raises(SystemExit):
            run_all(0, [leave, seen.append])
        assert seen == []

    def test_test_runner_failures_are_collected(self) -> None:
        seen = []
        report = run_all(
            0, [lambda v: pytest.fail("first"), seen.append, lambda v: pytest.fail("third")]
        )

        assert seen == [0]
        assert [type(v) for v in report.violations] == [pytest.fail.Exception] * 2
        assert [str(v) for v in report.violations] == ["first", "third"]


class TestReport:
    """Tests for Report."""

    def test_single_violation_is_returned_unchanged(self) -> None:
        error = AssertionError("only")
        assert Report((error,)).to_exception() is error

    def test_several_violations_are_aggregated(self) -> None:
        first, second = AssertionError("a"), ValueError("b")
        error = Report((first, second)).to_exception()

        assert isinstance(error, AggregateAssertionError)
        assert error.violations == (first, second)
        assert "1. AssertionError: a" in str(error)
        assert "2. ValueError: b" in str(error)

    def test_merge_concatenates_in_order(self) -> None:
        first, second = AssertionError("a"), AssertionError("b")
        merged = Report((first,)).merge(Report((second,)))
        assert merged.violations == (first, second)

    def test_raise_for_violations(self) -> None:
        Report().raise_for_violations()
        with pytest.raises(AssertionError, match="only"):
            Report((AssertionError("only"),)).raise_for_violations()
