"""Domain models for the fixture engine.

All models in this module use only Python standard library types,
so the core can be exercised against in-memory fakes.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeAlias


class FixtureState(Enum):
    """Lifecycle states for a fixture.

    State transitions follow a single-shot workflow:
    - UNCONFIGURED: No act step yet; arrange/assert calls are allowed
    - ACT_CONFIGURED: Exactly one act step is set
    - SUCCEEDED: The act step returned a value
    - FAILED: The act step raised
    - REPORTED: Assertions and verification have run; the fixture is spent
    """

    UNCONFIGURED = "unconfigured"
    ACT_CONFIGURED = "act_configured"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REPORTED = "reported"


class ActKind(Enum):
    """Whether the act step is run with ``run`` or ``run_async``."""

    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class ActStep:
    """The single operation under test.

    ``invoke`` takes no arguments: it builds the subject (if any) and calls
    the user's act function with it.
    """

    kind: ActKind
    invoke: Callable[[], Any] | Callable[[], Awaitable[Any]]
    description: str


@dataclass(frozen=True)
class Value:
    """Outcome of an act step that returned normally."""

    result: Any


@dataclass(frozen=True)
class Failure:
    """Outcome of an act step that raised."""

    error: Exception


Outcome: TypeAlias = Value | Failure


@dataclass(frozen=True)
class NamedParameter:
    """Subject constructor override matched by parameter name."""

    name: str
    value: Any


@dataclass(frozen=True)
class TypedParameter:
    """Subject constructor override matched by parameter annotation."""

    type: type
    value: Any


SubjectParameter: TypeAlias = NamedParameter | TypedParameter


@dataclass(frozen=True)
class SubjectConfigurator:
    """Pre-act configuration applied to the built subject."""

    subject_type: type
    configure: Callable[[Any], Any]


class Match:
    """Argument matcher that compares equal to values accepted by a predicate.

    Example:
        >>> pattern = CallPattern("get", (Match(lambda x: x > 3),))
    """

    def __init__(self, predicate: Callable[[Any], bool], description: str | None = None):
        self.predicate = predicate
        self.description = description or getattr(predicate, "__name__", "predicate")

    def __eq__(self, other: object) -> bool:
        return bool(self.predicate(other))

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Match {self.description}>"


@dataclass(frozen=True)
class CallPattern:
    """A method call to match: method name plus expected arguments.

    Arguments may be plain values, ``unittest.mock.ANY`` or ``Match`` instances.
    """

    method: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] | MappingProxyType[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert kwargs dict to read-only proxy."""
        if isinstance(self.kwargs, dict):
            object.__setattr__(self, "kwargs", MappingProxyType(self.kwargs))

    def describe(self) -> str:
        """Render the pattern as ``method(arg, key=value)``."""
        rendered = [repr(a) for a in self.args]
        rendered += [f"{k}={v!r}" for k, v in self.kwargs.items()]
        return f"{self.method}({', '.join(rendered)})"


@dataclass(frozen=True)
class Returns:
    """Effect: return a fixed value."""

    value: Any


@dataclass(frozen=True)
class Raises:
    """Effect: raise an exception."""

    error: BaseException


@dataclass(frozen=True)
class Computes:
    """Effect: call ``func`` with the call's arguments and return its result."""

    func: Callable[..., Any]


@dataclass(frozen=True)
class DoesNothing:
    """Effect: return ``None``."""


Effect: TypeAlias = Returns | Raises | Computes | DoesNothing


def apply_effect(effect: Effect, args: tuple, kwargs: dict[str, Any]) -> Any:
    """Produce the configured response for a matched call."""
    if isinstance(effect, Returns):
        return effect.value
    if isinstance(effect, Raises):
        raise effect.error
    if isinstance(effect, Computes):
        return effect.func(*args, **kwargs)
    return None


@dataclass
class Expectation:
    """A registered call pattern with its effect and verification requirement.

    Intentionally mutable: ``calls`` is incremented by the double provider
    every time a call matches.
    """

    capability: type
    pattern: CallPattern
    effect: Effect
    must_verify: bool
    because: str | None = None
    calls: int = 0

    def record_call(self) -> None:
        """Count one matching call."""
        self.calls += 1

    @property
    def fired(self) -> bool:
        """True once at least one matching call was received."""
        return self.calls > 0

    def describe(self) -> str:
        """Render as ``Capability.method(args)``."""
        return f"{self.capability.__name__}.{self.pattern.describe()}"
