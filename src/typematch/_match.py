"""Match — fluent type-based matching over a single subject.

Wrap a subject, register cases in order, then run them:

    Match.from_(5).on_match_stop(int, print).on_match_stop(str, print).run()

Evaluation semantics:
- Cases run in registration order (no reordering, no priority)
- A case whose kind does not match the subject is skipped and never stops the scan
- A matching case stops the scan when its predicate returns a falsy value
- Exceptions raised by predicates or actions propagate out of run() untouched

Match is the mutable builder. freeze() snapshots it into a FrozenMatch,
the immutable sequence that actually runs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from typematch._case import (
    Case,
    Kind,
    is_valid_bound,
    is_valid_kind,
    kind_members,
    kind_name,
)

logger = logging.getLogger(__name__)


class MatchError(Exception):
    """Base class for errors raised by typematch."""


class InvalidKindError(MatchError):
    """A kind cannot be used with isinstance(), or a bound with issubclass()."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(
            f"invalid kind {kind!r}: expected a class, a tuple of classes, or a union"
        )


class IncompatibleKindError(MatchError):
    """A case kind falls outside the bound declared for the subject."""

    def __init__(self, kind: Kind, bound: Kind) -> None:
        self.kind = kind
        self.bound = bound
        super().__init__(
            f"case kind {kind_name(kind)} is not a subtype of bound {kind_name(bound)}"
        )


class InvalidCaseError(MatchError):
    """A case was registered with a non-callable predicate or action."""


@dataclass(frozen=True, slots=True)
class FrozenMatch[T]:
    """An immutable subject + case sequence, ready to run.

    Running is stateless: calling run() again repeats the same scan.
    """

    subject: T
    cases: tuple[Case[Any], ...]

    def run(self) -> None:
        """Run the cases in order until one of them signals stop."""
        for index, case in enumerate(self.cases):
            if logger.isEnabledFor(logging.DEBUG) and not case.applies_to(self.subject):
                logger.debug(
                    "case %d (%s) skipped: subject is %s",
                    index,
                    kind_name(case.kind),
                    type(self.subject).__qualname__,
                )
            if not case.run(self.subject):
                logger.debug("case %d (%s) stopped the match", index, kind_name(case.kind))
                return
        logger.debug("match ran all %d cases", len(self.cases))


class Match[T]:
    """Builder that accumulates cases against a subject.

    ``bound`` is the runtime form of the "case kind must be a subtype of
    T" constraint. When set, registering a case whose kind has a member
    that is not a subclass of ``bound`` raises IncompatibleKindError.
    """

    __slots__ = ("_bound", "_cases", "_subject")

    def __init__(self, subject: T, *, bound: Kind | None = None) -> None:
        if bound is not None and not is_valid_bound(bound):
            raise InvalidKindError(bound)
        self._subject = subject
        self._bound = bound
        self._cases: list[Case[Any]] = []

    @classmethod
    def from_(cls, subject: T, *, bound: Kind | None = None) -> Match[T]:
        """Wrap a subject. Any value is accepted, None included."""
        return cls(subject, bound=bound)

    @property
    def subject(self) -> T:
        return self._subject

    @property
    def bound(self) -> Kind | None:
        return self._bound

    @property
    def cases(self) -> tuple[Case[Any], ...]:
        return tuple(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def __repr__(self) -> str:
        kinds = ", ".join(kind_name(c.kind) for c in self._cases)
        return f"Match(subject={self._subject!r}, cases=[{kinds}])"

    def register_case[U](self, kind: type[U] | Kind, predicate: Callable[[U], object]) -> Match[T]:
        """Add a case whose predicate decides whether the scan continues.

        The predicate runs only when the subject is an instance of
        ``kind``; a truthy result continues, a falsy one stops.

        Raises:
            InvalidKindError: ``kind`` is not usable with isinstance()
            IncompatibleKindError: ``kind`` is outside the declared bound
            InvalidCaseError: ``predicate`` is not callable
        """
        if not is_valid_kind(kind):
            raise InvalidKindError(kind)
        if not callable(predicate):
            msg = f"predicate for {kind_name(kind)} must be callable, got {type(predicate).__name__}"
            raise InvalidCaseError(msg)
        if self._bound is not None:
            self._check_bound(kind)
        self._cases.append(Case(kind, predicate))
        return self

    def on_match_stop[U](self, kind: type[U] | Kind, action: Callable[[U], object]) -> Match[T]:
        """Add a terminal case: run ``action`` on a match, then stop."""
        _require_callable(kind, action)

        def stop(subject: U) -> bool:
            action(subject)
            return False

        return self.register_case(kind, stop)

    def on_match_continue[U](self, kind: type[U] | Kind, action: Callable[[U], object]) -> Match[T]:
        """Add a pass-through case: run ``action`` on a match, then continue."""
        _require_callable(kind, action)

        def proceed(subject: U) -> bool:
            action(subject)
            return True

        return self.register_case(kind, proceed)

    def freeze(self) -> FrozenMatch[T]:
        """Snapshot the subject and cases. Later registrations are not seen."""
        return FrozenMatch(subject=self._subject, cases=tuple(self._cases))

    def run(self) -> None:
        """Run the registered cases. See FrozenMatch.run()."""
        self.freeze().run()

    def _check_bound(self, kind: Kind) -> None:
        for member in kind_members(kind):
            if not isinstance(member, type) or not issubclass(member, self._bound):  # type: ignore[arg-type]
                raise IncompatibleKindError(kind, self._bound)  # type: ignore[arg-type]


def _require_callable(kind: Kind, action: object) -> None:
    if not callable(action):
        msg = f"action for {kind_name(kind)} must be callable, got {type(action).__name__}"
        raise InvalidCaseError(msg)
