"""Arrange/Act/Assert fixture orchestration.

A fixture collects subject overrides, configurators, exactly one act step
and the assertions for its outcome, then runs everything once:

1. Build the subject (doubles injected for its collaborators)
2. Invoke the act step and capture a Value or a Failure
3. Route the outcome to the success or failure assertions
4. Verify the double expectations
5. Raise whatever was collected

State Transitions:
    - UNCONFIGURED → ACT_CONFIGURED (when / when_async / when_static*)
    - ACT_CONFIGURED → SUCCEEDED | FAILED (run / run_async)
    - SUCCEEDED | FAILED → REPORTED (assertions and verification done)
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .aggregator import Report, run_all
from .assertions import Assertion, ignoring_outcome, of_type, predicate
from .errors import ConfigurationError, DidNotFail, VerificationError
from .models import (
    ActKind,
    ActStep,
    Failure,
    FixtureState,
    NamedParameter,
    Outcome,
    SubjectConfigurator,
    SubjectParameter,
    Value,
)
from .ports import DoubleProviderPort, InstanceBuilderPort
from .subject_factory import SubjectFactory

logger = logging.getLogger(__name__)

S = TypeVar("S")
F = TypeVar("F", bound="Fixture")


class Fixture:
    """Single-use test fixture with one act step and aggregated assertions.

    Every configuration method returns the fixture itself so calls chain.
    The fixture owns its double provider and instance builder; neither may
    be shared with another fixture.

    Attributes:
        doubles: Provider of collaborator doubles for this test.
        builder: Random instance builder for this test.
        properties: Free-form storage for passing data between steps.
    """

    def __init__(self, doubles: DoubleProviderPort, builder: InstanceBuilderPort):
        self.doubles = doubles
        self.builder = builder
        self.properties: dict[str, Any] = {}
        self._subjects = SubjectFactory(doubles)
        self._parameters: list[SubjectParameter] = []
        self._configurators: list[SubjectConfigurator] = []
        self._act: ActStep | None = None
        self._result_assertions: list[Assertion] = []
        self._error_assertions: list[Assertion] = []
        self._checks: list[Assertion] = []
        self._expects_failure = False
        self._state = FixtureState.UNCONFIGURED

    @property
    def state(self) -> FixtureState:
        return self._state

    @property
    def expects_failure(self) -> bool:
        return self._expects_failure

    # ------------------------------------------------------------------
    # Arrange
    # ------------------------------------------------------------------

    def having_subject_parameters(
        self: F, *parameters: SubjectParameter, **named: Any
    ) -> F:
        """Pass explicit constructor arguments to the subject.

        Positional arguments are NamedParameter/TypedParameter instances;
        keyword arguments are shorthand for NamedParameter.
        """
        self._ensure_configurable()
        self._parameters.extend(parameters)
        self._parameters.extend(NamedParameter(k, v) for k, v in named.items())
        return self

    def having_configured_subject(
        self: F, subject_type: type[S], configurator: Callable[[S], Any]
    ) -> F:
        """Run ``configurator`` against the subject after it is built."""
        self._ensure_configurable()
        self._configurators.append(SubjectConfigurator(subject_type, configurator))
        return self

    # ------------------------------------------------------------------
    # Act
    # ------------------------------------------------------------------

    def when(self: F, subject_type: type[S], act: Callable[[S], Any]) -> F:
        """Act on a subject of ``subject_type``.

        A coroutine function registers an asynchronous act step; use
        when_async() for lambdas that return an awaitable.
        """
        if inspect.iscoroutinefunction(act):
            return self.when_async(subject_type, act)
        return self._set_act(
            ActKind.SYNC,
            lambda: act(self._build_subject(subject_type)),
            f"{subject_type.__name__} (sync)",
        )

    def when_async(
        self: F, subject_type: type[S], act: Callable[[S], Awaitable[Any]]
    ) -> F:
        """Act on a subject of ``subject_type`` with an awaitable operation."""

        async def invoke() -> Any:
            return await _awaited(act(self._build_subject(subject_type)))

        return self._set_act(ActKind.ASYNC, invoke, f"{subject_type.__name__} (async)")

    def when_static(self: F, act: Callable[[], Any]) -> F:
        """Act without a subject."""
        if inspect.iscoroutinefunction(act):
            return self.when_static_async(act)
        return self._set_act(ActKind.SYNC, act, "static (sync)")

    def when_static_async(self: F, act: Callable[[], Awaitable[Any]]) -> F:
        """Act without a subject, awaiting the operation."""

        async def invoke() -> Any:
            return await _awaited(act())

        return self._set_act(ActKind.ASYNC, invoke, "static (async)")

    # ------------------------------------------------------------------
    # Assert
    # ------------------------------------------------------------------

    def should(self: F, check: Callable[[], Any]) -> F:
        """Add a check that runs whatever the outcome is."""
        self._ensure_configurable()
        self._checks.append(ignoring_outcome(check))
        return self

    def should_return(
        self: F,
        *asserts: Callable[[Any], Any],
        result_type: type | None = None,
    ) -> F:
        """Add assertions on the act step's return value.

        Args:
            *asserts: Checks taking the result. Each raises, or returns
                False, to signal a violation.
            result_type: If given, the result must be an instance of it;
                the checks only run after that holds. With no checks, the
                type check alone is registered.
        """
        self._ensure_configurable()
        if result_type is None:
            self._result_assertions.extend(predicate(a) for a in asserts)
        elif not asserts:
            self._result_assertions.append(of_type(result_type))
        else:
            self._result_assertions.extend(of_type(result_type, a) for a in asserts)
        return self

    def should_raise(
        self: F,
        error_type: type[BaseException] | None = None,
        *asserts: Callable[[Any], Any],
    ) -> F:
        """Expect the act step to raise, and add assertions on the exception.

        Args:
            error_type: Exception class the error must be an instance of.
            *asserts: Checks taking the exception.
        """
        self._ensure_configurable()
        self._expects_failure = True
        if error_type is None:
            self._error_assertions.extend(predicate(a) for a in asserts)
        elif not asserts:
            self._error_assertions.append(of_type(error_type))
        else:
            self._error_assertions.extend(of_type(error_type, a) for a in asserts)
        return self

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run a synchronous act step and report its outcome.

        Raises:
            ConfigurationError: If no act step or an async act step is set,
                or the fixture already ran.
            Exception: The act step's own error when success was expected.
            AssertionError: Violations and verification failures.
        """
        act = self._begin_run(ActKind.SYNC)
        self._report(self._execute(act))

    async def run_async(self) -> None:
        """Run an asynchronous act step and report its outcome.

        Raises:
            ConfigurationError: If no act step or a sync act step is set,
                or the fixture already ran.
            Exception: The act step's own error when success was expected.
            AssertionError: Violations and verification failures.
        """
        act = self._begin_run(ActKind.ASYNC)
        self._report(await self._execute_async(act))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_subject(self, subject_type: type[S]) -> S:
        return self._subjects.build(subject_type, self._parameters, self._configurators)

    def _ensure_configurable(self) -> None:
        if self._state not in {FixtureState.UNCONFIGURED, FixtureState.ACT_CONFIGURED}:
            raise ConfigurationError(
                f"Fixture has already been run (state: {self._state.value})"
            )

    def _set_act(self: F, kind: ActKind, invoke: Callable[[], Any], description: str) -> F:
        self._ensure_configurable()
        if self._act is not None:
            raise ConfigurationError("Act step already configured")
        self._act = ActStep(kind=kind, invoke=invoke, description=description)
        self._state = FixtureState.ACT_CONFIGURED
        logger.debug(f"Act step configured: {description}")
        return self

    def _begin_run(self, kind: ActKind) -> ActStep:
        if self._state == FixtureState.UNCONFIGURED or self._act is None:
            raise ConfigurationError(
                "No act step configured: call when(), when_async() or "
                "when_static() before running the fixture"
            )
        if self._state != FixtureState.ACT_CONFIGURED:
            raise ConfigurationError(
                f"Fixture has already been run (state: {self._state.value})"
            )
        if self._act.kind != kind:
            if self._act.kind == ActKind.ASYNC:
                raise ConfigurationError(
                    "The act step is asynchronous: await run_async() instead of run()"
                )
            raise ConfigurationError(
                "The act step is synchronous: call run() instead of run_async()"
            )
        return self._act

    def _execute(self, act: ActStep) -> Outcome:
        try:
            result = act.invoke()
        except ConfigurationError:
            raise
        except Exception as e:
            return Failure(e)

        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise ConfigurationError(
                "The act step returned an awaitable: configure it with "
                "when_async() and await run_async()"
            )
        return Value(result)

    async def _execute_async(self, act: ActStep) -> Outcome:
        try:
            result = await act.invoke()  # type: ignore[misc]
        except ConfigurationError:
            raise
        except Exception as e:
            return Failure(e)
        return Value(result)

    def _report(self, outcome: Outcome) -> None:
        if isinstance(outcome, Failure):
            self._state = FixtureState.FAILED
            if not self._expects_failure:
                logger.debug(
                    f"Act step raised {type(outcome.error).__name__} "
                    f"while success was expected"
                )
                self._state = FixtureState.REPORTED
                raise outcome.error
            report = run_all(outcome.error, self._error_assertions)
            report = report.merge(run_all(outcome.error, self._checks))
        else:
            self._state = FixtureState.SUCCEEDED
            if self._expects_failure:
                report = Report((DidNotFail(outcome.result),))
            else:
                report = run_all(outcome.result, self._result_assertions)
                report = report.merge(run_all(outcome.result, self._checks))

        self._state = FixtureState.REPORTED
        verification_error = self._verify()

        error = report.to_exception()
        if error is not None:
            if verification_error is not None:
                logger.warning(
                    f"Expectation verification failed in addition to assertions: "
                    f"{verification_error}"
                )
                error.add_note(f"Expectation verification also failed: {verification_error}")
            raise error
        if verification_error is not None:
            raise verification_error

    def _verify(self) -> VerificationError | None:
        try:
            self.doubles.verify_all()
        except VerificationError as e:
            return e
        return None


def _awaited(result: Any) -> Awaitable[Any]:
    """Return ``result`` if it can be awaited, else fail the configuration."""
    if not inspect.isawaitable(result):
        raise ConfigurationError(
            f"The async act step returned {type(result).__name__}, not an awaitable: "
            f"configure it with when() or when_static() and call run()"
        )
    return result
