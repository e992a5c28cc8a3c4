"""Construction of the unit under test.

Builds the subject from its constructor's type hints: explicit overrides win,
collaborator types are resolved to doubles, defaults are kept, and anything
else is a configuration error. Registered configurators then run against the
built instance.
"""

import inspect
import logging
import types
import typing
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

from .errors import ConfigurationError
from .models import NamedParameter, SubjectConfigurator, SubjectParameter, TypedParameter
from .ports import DoubleProviderPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Annotations that describe data rather than collaborators; never doubled.
VALUE_TYPES: frozenset[type] = frozenset(
    {
        str, bytes, bytearray, int, float, complex, bool, type(None), object,
        list, dict, set, frozenset, tuple,
    }
)


class SubjectFactory:
    """Builds subjects, injecting doubles for their declared dependencies."""

    def __init__(self, doubles: DoubleProviderPort):
        self.doubles = doubles

    def build(
        self,
        subject_type: type[T],
        parameters: Sequence[SubjectParameter] = (),
        configurators: Iterable[SubjectConfigurator] = (),
    ) -> T:
        """Construct ``subject_type`` and apply every configurator.

        Args:
            subject_type: Class of the unit under test.
            parameters: Named or typed constructor overrides.
            configurators: Pre-act configurators, applied in order.

        Returns:
            The configured subject.

        Raises:
            ConfigurationError: If a constructor parameter cannot be
                resolved or a configurator targets a different subject type.
        """
        kwargs = self._resolve_arguments(subject_type, parameters)
        subject = subject_type(**kwargs)
        logger.debug(
            f"Built subject {subject_type.__name__} with parameters {sorted(kwargs)}"
        )

        for configurator in configurators:
            if not isinstance(subject, configurator.subject_type):
                raise ConfigurationError(
                    f"Incorrect subject type: configurator expects "
                    f"{configurator.subject_type.__name__} but the subject is "
                    f"{subject_type.__name__}"
                )
            configurator.configure(subject)

        return subject

    def _resolve_arguments(
        self, subject_type: type, parameters: Sequence[SubjectParameter]
    ) -> dict[str, Any]:
        named = {p.name: p.value for p in parameters if isinstance(p, NamedParameter)}
        typed = [p for p in parameters if isinstance(p, TypedParameter)]

        try:
            signature = inspect.signature(subject_type)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Cannot inspect constructor of {subject_type.__name__}: {e}"
            ) from e
        hints = _constructor_hints(subject_type)

        unknown = set(named) - set(signature.parameters)
        if unknown:
            raise ConfigurationError(
                f"{subject_type.__name__} has no constructor parameter(s) "
                f"{', '.join(sorted(unknown))}"
            )

        kwargs: dict[str, Any] = {}
        for name, param in signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            if name in named:
                kwargs[name] = named[name]
                continue

            if name in hints:
                annotation = _unwrap_optional(hints[name])
            elif param.annotation is not param.empty:
                annotation = _unwrap_optional(param.annotation)
            else:
                # Unannotated: never doubled, only its default can fill it.
                annotation = None

            override = _find_typed(typed, annotation)
            if override is not None:
                kwargs[name] = override.value
            elif _is_collaborator(annotation):
                kwargs[name] = self.doubles.resolve(annotation)
            elif param.default is not param.empty:
                continue
            else:
                raise ConfigurationError(
                    f"Cannot resolve parameter {name!r} of {subject_type.__name__}: "
                    f"provide it with having_subject_parameters()"
                )
        return kwargs


def _constructor_hints(subject_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(subject_type.__init__)
    except Exception as e:
        # Unresolvable forward references; fall back to raw annotations.
        logger.debug(f"Could not evaluate type hints of {subject_type.__name__}: {e}")
        return {}


def _unwrap_optional(annotation: Any) -> Any:
    """Reduce ``X | None`` / ``Optional[X]`` to ``X``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _find_typed(typed: Sequence[TypedParameter], annotation: Any) -> TypedParameter | None:
    if not isinstance(annotation, type):
        return None
    # Last registered override wins.
    for parameter in reversed(typed):
        if parameter.type is annotation:
            return parameter
    for parameter in reversed(typed):
        if issubclass(parameter.type, annotation):
            return parameter
    return None


def _is_collaborator(annotation: Any) -> bool:
    return (
        isinstance(annotation, type)
        and annotation not in VALUE_TYPES
        and not issubclass(annotation, Enum)
        and typing.get_origin(annotation) is None
    )
