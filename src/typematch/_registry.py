"""Registry for config-driven case construction.

The registry turns a declarative case table into a runnable Match
without hand-written registration code.

- RegistryBuilder → .build() → Registry (immutable)
- Kinds are registered by name: "int" → int
- Action factories are plain callables: (config: dict) → Callable[[Any], object]
- load_match() walks the config and registers each case in order

Example::

    builder = register_builtin_kinds(RegistryBuilder())
    builder.action("app.v1.Log", lambda cfg: lambda subject: log(cfg["prefix"], subject))
    registry = builder.build()

    config = parse_match_config(yaml.safe_load(text))
    registry.load_match(config, subject).run()
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, assert_never

from typematch._match import Match, MatchError

if TYPE_CHECKING:
    from typematch._case import Case, Kind
    from typematch._config import CaseConfig, MatchConfig

logger = logging.getLogger(__name__)

MAX_CASES = 256

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownKindError(MatchError):
    """A kind name was not found in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            msg = f"unknown kind: {name!r} (registered: {', '.join(self.available)})"
        else:
            msg = f"unknown kind: {name!r} (no kinds are registered)"
        super().__init__(msg)


class UnknownTypeUrlError(MatchError):
    """An action type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            msg = f"unknown action type_url: {type_url!r} (registered: {', '.join(self.available)})"
        else:
            msg = f"unknown action type_url: {type_url!r} (no action types are registered)"
        super().__init__(msg)


class InvalidConfigError(MatchError):
    """An action config payload was rejected by its factory."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyCasesError(MatchError):
    """Case table exceeds MAX_CASES."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many cases: {count} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type ActionFactory = Callable[[dict[str, Any]], Callable[[Any], object]]

BUILTIN_KINDS: dict[str, type] = {
    "object": object,
    "None": types.NoneType,
    "bool": bool,
    "int": int,
    "float": float,
    "complex": complex,
    "str": str,
    "bytes": bytes,
    "bytearray": bytearray,
    "list": list,
    "tuple": tuple,
    "dict": dict,
    "set": set,
    "frozenset": frozenset,
}


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register kinds by name and action factories by type URL, then call
    build() to produce an immutable Registry. Re-registering a name
    replaces the earlier entry.
    """

    def __init__(self) -> None:
        self._kinds: dict[str, type] = {}
        self._action_factories: dict[str, ActionFactory] = {}

    def kind(self, name: str, cls: type) -> RegistryBuilder:
        """Register a class under a config-facing name."""
        self._kinds[name] = cls
        return self

    def action(self, type_url: str, factory: ActionFactory) -> RegistryBuilder:
        """Register an action factory with a type URL."""
        self._action_factories[type_url] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(
            _kinds=MappingProxyType(dict(self._kinds)),
            _action_factories=MappingProxyType(dict(self._action_factories)),
        )


def register_builtin_kinds(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the builtin scalar and container kinds, plus None and object."""
    for name, cls in BUILTIN_KINDS.items():
        builder.kind(name, cls)
    return builder


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of kinds and action factories.

    Constructed via RegistryBuilder. Use load_match() to turn a
    MatchConfig into a Match bound to a subject.
    """

    _kinds: MappingProxyType[str, type] = field(
        default_factory=lambda: MappingProxyType({})
    )
    _action_factories: MappingProxyType[str, ActionFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_match[T](
        self, config: MatchConfig, subject: T, *, bound: Kind | None = None
    ) -> Match[T]:
        """Build a Match for ``subject`` from a case table.

        Cases are registered in config order.

        Raises:
            TooManyCasesError: more than MAX_CASES cases
            UnknownKindError: kind name not registered
            UnknownTypeUrlError: action type_url not registered
            InvalidConfigError: action factory failed or returned a non-callable
            IncompatibleKindError: a kind falls outside ``bound``
        """
        if len(config.cases) > MAX_CASES:
            raise TooManyCasesError(len(config.cases), MAX_CASES)

        result = Match.from_(subject, bound=bound)
        for case_config in config.cases:
            self._load_case(result, case_config)
        logger.debug("loaded %d cases from config", len(result))
        return result

    def load_cases(self, config: MatchConfig) -> tuple[Case[Any], ...]:
        """Resolve a case table into Case objects without binding a subject."""
        return self.load_match(config, None).cases

    @property
    def kind_count(self) -> int:
        """Number of registered kinds."""
        return len(self._kinds)

    @property
    def action_count(self) -> int:
        """Number of registered action types."""
        return len(self._action_factories)

    def contains_kind(self, name: str) -> bool:
        return name in self._kinds

    def contains_action(self, type_url: str) -> bool:
        return type_url in self._action_factories

    def kind_names(self) -> list[str]:
        """Return all registered kind names (sorted)."""
        return sorted(self._kinds.keys())

    def action_type_urls(self) -> list[str]:
        """Return all registered action type URLs (sorted)."""
        return sorted(self._action_factories.keys())

    # ── Private loading methods ────────────────────────────────────────────

    def _load_case(self, target: Match[Any], config: CaseConfig) -> None:
        kind = self._resolve_kind(config.kinds)
        action = self._load_action(config)
        match config.on_match:
            case "stop":
                target.on_match_stop(kind, action)
            case "continue":
                target.on_match_continue(kind, action)
            case "predicate":
                target.register_case(kind, action)
            case _:
                assert_never(config.on_match)

    def _resolve_kind(self, names: tuple[str, ...]) -> Kind:
        resolved = []
        for name in names:
            cls = self._kinds.get(name)
            if cls is None:
                raise UnknownKindError(name, list(self._kinds.keys()))
            resolved.append(cls)
        if len(resolved) == 1:
            return resolved[0]
        return tuple(resolved)

    def _load_action(self, config: CaseConfig) -> Callable[[Any], object]:
        factory = self._action_factories.get(config.action.type_url)
        if factory is None:
            raise UnknownTypeUrlError(
                config.action.type_url, list(self._action_factories.keys())
            )

        try:
            action = factory(config.action.config)
        except Exception as e:
            raise InvalidConfigError(str(e)) from e

        if not callable(action):
            msg = (
                f"factory for {config.action.type_url!r} returned "
                f"{type(action).__name__}, expected a callable"
            )
            raise InvalidConfigError(msg)
        return action
