"""Config types for declarative case tables.

A case table is plain JSON/YAML data. Config-driven construction path:
  dict → parse_match_config() → MatchConfig → Registry.load_match() → Match

Relationship to runtime types:

| Config type | Runtime type                           |
|-------------|----------------------------------------|
| MatchConfig | Match (subject supplied at load time)  |
| CaseConfig  | Case                                   |
| kinds       | Kind (names resolved by the registry)  |
| TypedConfig | action or predicate callable           |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from typematch._match import MatchError

type OnMatch = Literal["stop", "continue", "predicate"]

# stop/continue wrap the action; predicate uses its return value as the signal.
ON_MATCH_MODES: frozenset[str] = frozenset({"stop", "continue", "predicate"})


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered action type with its configuration.

    - type_url identifies the registered action factory
    - config carries the factory-specific payload
    """

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CaseConfig:
    """Config for a single case.

    More than one kind name means the case applies to any of them.
    """

    kinds: tuple[str, ...]
    on_match: OnMatch
    action: TypedConfig


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Ordered case table. Order is preserved exactly as written."""

    cases: tuple[CaseConfig, ...] = ()


class ConfigParseError(MatchError):
    """Error parsing a config dict into config types."""


def parse_match_config(data: dict[str, Any]) -> MatchConfig:
    """Parse a dict into a MatchConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_cases = data.get("cases")
    if raw_cases is None:
        msg = "missing required field 'cases'"
        raise ConfigParseError(msg)
    if not isinstance(raw_cases, list):
        msg = f"'cases' must be a list, got {type(raw_cases).__name__}"
        raise ConfigParseError(msg)

    return MatchConfig(cases=tuple(_parse_case(c) for c in raw_cases))


def _parse_case(data: dict[str, Any]) -> CaseConfig:
    if not isinstance(data, dict):
        msg = f"case must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    for required in ("kind", "action"):
        if required not in data:
            msg = f"case missing required field {required!r}"
            raise ConfigParseError(msg)

    on_match = data.get("on_match", "stop")
    if on_match not in ON_MATCH_MODES:
        msg = f"unknown on_match mode: {on_match!r} (expected one of {sorted(ON_MATCH_MODES)})"
        raise ConfigParseError(msg)

    return CaseConfig(
        kinds=_parse_kinds(data["kind"]),
        on_match=on_match,
        action=_parse_typed_config(data["action"]),
    )


def _parse_kinds(data: Any) -> tuple[str, ...]:
    """Accept a single kind name or a non-empty list of names."""
    if isinstance(data, str):
        return (data,)
    if not isinstance(data, list) or not data:
        msg = f"kind must be a string or a non-empty list of strings, got {data!r}"
        raise ConfigParseError(msg)
    for name in data:
        if not isinstance(name, str):
            msg = f"kind names must be strings, got {type(name).__name__}"
            raise ConfigParseError(msg)
    return tuple(data)


def _parse_typed_config(data: dict[str, Any]) -> TypedConfig:
    if not isinstance(data, dict):
        msg = f"action must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "type_url" not in data:
        msg = "action missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)
