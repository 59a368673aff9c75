"""Conformance fixture loader for typematch.

Loads YAML case tables from tests/fixtures/ for parametrized testing.
Each document carries a subject, a case table, and the labels the
recorded actions are expected to produce, in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single conformance document."""

    source: str
    name: str
    config: dict[str, Any]
    subject: Any = None
    expect: list[str] = field(default_factory=list)
    expect_raise: str | None = None
    expect_error: bool = False

    @property
    def id(self) -> str:
        return f"{self.source}::{self.name}"


def load_fixtures() -> list[FixtureCase]:
    """Load every fixture document, in file then document order."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                cases.append(
                    FixtureCase(
                        source=yaml_file.name,
                        name=doc["name"],
                        config=doc["config"],
                        subject=doc.get("subject"),
                        expect=[str(label) for label in doc.get("expect", [])],
                        expect_raise=doc.get("expect_raise"),
                        expect_error=doc.get("expect_error", False),
                    )
                )
    return cases
