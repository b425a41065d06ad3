"""Result and probe types for explicit error handling.

Every fallible step of note generation returns a Result instead of raising,
so the CLI layer is the only place that turns failures into exit codes.

Usage:
    match load_manifest(path):
        case Ok(manifest):
            print(manifest.project_ids)
        case Err(error):
            print(f"error: {error.message}")

Probes answer "does this remote/local object exist?" with three outcomes
instead of two, so a transient failure is never mistaken for absence:

    match repo.tag_commit("app-v1.0.0"):
        case Found(sha):
            ...
        case NotFound():
            ...
        case ProbeFailed(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding a value."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding an error value."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    """The probed object exists; `value` carries what the probe learned."""

    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    """The probed object definitely does not exist."""


@dataclass(frozen=True, slots=True)
class ProbeFailed(Generic[E]):
    """The probe itself failed; existence is unknown."""

    error: E


Probe: TypeAlias = Union[Found[T], NotFound, ProbeFailed[E]]
