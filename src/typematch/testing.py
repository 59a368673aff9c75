"""Test utilities for typematch.

Provides a Recorder and three action types for exercising case tables in
tests and examples. These are NOT meant for production use: they exist
to make case evaluation order observable.

>>> from typematch import Match
>>> from typematch.testing import Recorder
>>> rec = Recorder()
>>> Match.from_(5).on_match_continue(int, rec.action("int")).on_match_stop(object, rec.action("any")).run()
>>> rec.labels
['int', 'any']
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typematch._registry import RegistryBuilder

RECORD_TYPE_URL = "typematch.test.v1.Record"
ANSWER_TYPE_URL = "typematch.test.v1.Answer"
RAISE_TYPE_URL = "typematch.test.v1.Raise"


class RecordedError(Exception):
    """Raised by the Raise test action."""


@dataclass(slots=True)
class Recorder:
    """Collects (label, subject) events in the order actions ran."""

    events: list[tuple[str, Any]] = field(default_factory=list)

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.events]

    def action(self, label: str) -> Callable[[Any], None]:
        """An action that records ``label`` and the subject it received."""

        def record(subject: Any) -> None:
            self.events.append((label, subject))

        return record

    def answer(self, label: str, result: bool) -> Callable[[Any], bool]:
        """A predicate that records ``label`` and returns ``result``."""

        def respond(subject: Any) -> bool:
            self.events.append((label, subject))
            return result

        return respond


def raiser(message: str) -> Callable[[Any], None]:
    """An action that always raises RecordedError(message)."""

    def fail(subject: Any) -> None:
        raise RecordedError(message)

    return fail


def register(builder: RegistryBuilder, recorder: Recorder) -> RegistryBuilder:
    """Register the test-domain action types, all bound to ``recorder``.

    - typematch.test.v1.Record { "label": str }
    - typematch.test.v1.Answer { "label": str, "answer": bool }
    - typematch.test.v1.Raise  { "message": str } (defaults to "boom")
    """
    builder.action(RECORD_TYPE_URL, lambda cfg: recorder.action(_require_str(cfg, "label")))
    builder.action(
        ANSWER_TYPE_URL,
        lambda cfg: recorder.answer(_require_str(cfg, "label"), _require_bool(cfg, "answer")),
    )
    builder.action(RAISE_TYPE_URL, lambda cfg: raiser(_require_str(cfg, "message", default="boom")))
    return builder


def _require_str(config: dict[str, Any], key: str, default: str | None = None) -> str:
    value = config.get(key, default)
    if not isinstance(value, str):
        msg = f"test action requires a {key!r} field (string)"
        raise ValueError(msg)
    return value


def _require_bool(config: dict[str, Any], key: str) -> bool:
    value = config.get(key)
    if not isinstance(value, bool):
        msg = f"test action requires a {key!r} field (bool)"
        raise ValueError(msg)
    return value
