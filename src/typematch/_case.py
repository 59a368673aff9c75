"""Case — one registered rule: a runtime kind paired with a predicate.

A Case applies to a subject when ``isinstance(subject, kind)`` holds.
Applicability is checked before the predicate is ever called, so a
predicate only sees subjects of its declared kind.

The continuation signal:
- Case does not apply -> True (continue, predicate not called)
- Case applies        -> bool(predicate(subject))
"""

from __future__ import annotations

import types
import typing
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

# Anything isinstance() accepts: a class (runtime_checkable Protocols
# included), a nested tuple of classes, or an ``X | Y`` union.
type Kind = type | tuple[Kind, ...] | types.UnionType


@dataclass(frozen=True, slots=True)
class Case[U]:
    """A type-guarded predicate.

    INV: the predicate is never invoked for a subject that is not an
    instance of ``kind``.
    """

    kind: Kind
    predicate: Callable[[U], object]

    def applies_to(self, subject: object) -> bool:
        return isinstance(subject, self.kind)

    def run(self, subject: object) -> bool:
        """Run this case against a subject.

        Returns True to continue the scan, False to stop it. A case that
        does not apply always continues.
        """
        if not self.applies_to(subject):
            return True
        return bool(self.predicate(subject))  # type: ignore[arg-type]

    def __str__(self) -> str:
        return f"Case({kind_name(self.kind)})"


def kind_name(kind: Kind) -> str:
    """Render a kind for logs and error messages."""
    if isinstance(kind, tuple):
        return "(" + ", ".join(kind_name(k) for k in kind) + ")"
    if _is_union(kind):
        return " | ".join(kind_name(k) for k in typing.get_args(kind))
    if kind is types.NoneType:
        return "None"
    return getattr(kind, "__qualname__", repr(kind))


def kind_members(kind: Kind) -> Iterator[Any]:
    """Flatten a kind into the individual classes it is made of."""
    if isinstance(kind, tuple):
        for k in kind:
            yield from kind_members(k)
    elif _is_union(kind):
        for k in typing.get_args(kind):
            yield from kind_members(k)
    else:
        yield kind


def is_valid_kind(kind: object) -> bool:
    """Check that isinstance() accepts ``kind`` as its second argument.

    Parameterized generics (``list[int]``) and non-runtime Protocols are
    rejected here rather than on first use.
    """
    try:
        isinstance(None, kind)  # type: ignore[arg-type]
    except TypeError:
        return False
    return True


def is_valid_bound(bound: object) -> bool:
    """Check that a bound works with both isinstance() and issubclass().

    Protocols with data members pass isinstance() but not issubclass().
    """
    if not is_valid_kind(bound):
        return False
    try:
        issubclass(object, bound)  # type: ignore[arg-type]
    except TypeError:
        return False
    return True


def _is_union(kind: object) -> bool:
    return isinstance(kind, types.UnionType) or typing.get_origin(kind) is typing.Union
