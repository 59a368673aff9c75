"""typematch — fluent type-based matching.

Wrap a value, register typed cases, and run them in order:

    from typematch import Match

    Match.from_(value).on_match_stop(int, handle_int).on_match_stop(str, handle_str).run()

All public types are exported from this module for flat imports.
"""

__version__ = "0.1.0"

from typematch._case import Case, Kind, kind_name
from typematch._config import (
    CaseConfig,
    ConfigParseError,
    MatchConfig,
    TypedConfig,
    parse_match_config,
)
from typematch._match import (
    FrozenMatch,
    IncompatibleKindError,
    InvalidCaseError,
    InvalidKindError,
    Match,
    MatchError,
)
from typematch._registry import (
    BUILTIN_KINDS,
    MAX_CASES,
    InvalidConfigError,
    Registry,
    RegistryBuilder,
    TooManyCasesError,
    UnknownKindError,
    UnknownTypeUrlError,
    register_builtin_kinds,
)

__all__ = [
    # Core
    "Case",
    "Kind",
    "kind_name",
    "Match",
    "FrozenMatch",
    # Errors
    "MatchError",
    "InvalidKindError",
    "IncompatibleKindError",
    "InvalidCaseError",
    # Config types
    "TypedConfig",
    "CaseConfig",
    "MatchConfig",
    "ConfigParseError",
    "parse_match_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_builtin_kinds",
    "UnknownKindError",
    "UnknownTypeUrlError",
    "InvalidConfigError",
    "TooManyCasesError",
    "BUILTIN_KINDS",
    "MAX_CASES",
]
