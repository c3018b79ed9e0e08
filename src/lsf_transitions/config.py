"""YAML configuration for the rule table and discourse tolerances.

A configuration file may carry either or both top-level sections::

    transition_rules:
      to_negation:
        min_duration: 450
        requires_reset: true
        blend_factor: 0.5
    discourse:
      position_tolerance: 0.25

Anything not given keeps its built-in default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .exceptions import RuleTableError
from .models import TransitionRule, TransitionType
from .rules import RuleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscourseRules:
    """Tolerances used by the discourse context validator."""

    position_tolerance: float = 0.2
    tilt_tolerance: float = 0.3
    shift_tolerance: float = 0.2
    topic_eyebrow_min_intensity: float = 0.5
    topic_head_forward_min_intensity: float = 0.3


@dataclass(frozen=True)
class EngineConfig:
    transition_rules: RuleTable = field(default_factory=RuleTable)
    discourse: DiscourseRules = field(default_factory=DiscourseRules)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _number(value: object, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RuleTableError(f"{where} must be a number, got {value!r}")
    return float(value)


def _parse_rule(name: str, raw: object) -> tuple[TransitionType, TransitionRule]:
    try:
        transition_type = TransitionType(name.lower())
    except ValueError:
        valid = ", ".join(t.value for t in TransitionType)
        raise RuleTableError(f"Unknown transition type {name!r} (expected one of: {valid})") from None

    if not isinstance(raw, dict):
        raise RuleTableError(f"transition_rules.{name} must be a mapping")

    missing = {"min_duration", "requires_reset", "blend_factor"} - set(raw)
    if missing:
        raise RuleTableError(f"transition_rules.{name} missing keys: {sorted(missing)}")

    min_duration = _number(raw["min_duration"], f"transition_rules.{name}.min_duration")
    if min_duration < 0:
        raise RuleTableError(f"transition_rules.{name}.min_duration must not be negative")

    blend_factor = _number(raw["blend_factor"], f"transition_rules.{name}.blend_factor")
    if not 0.0 <= blend_factor <= 1.0:
        raise RuleTableError(f"transition_rules.{name}.blend_factor={blend_factor} is outside [0.0, 1.0]")

    requires_reset = raw["requires_reset"]
    if not isinstance(requires_reset, bool):
        raise RuleTableError(f"transition_rules.{name}.requires_reset must be a boolean")

    return transition_type, TransitionRule(
        min_duration=min_duration,
        requires_reset=requires_reset,
        blend_factor=blend_factor,
    )


def _parse_discourse(raw: object) -> DiscourseRules:
    if not isinstance(raw, dict):
        raise RuleTableError("discourse must be a mapping")
    known = {f.name for f in fields(DiscourseRules)}
    unknown = set(raw) - known
    if unknown:
        raise RuleTableError(f"Unknown discourse keys: {sorted(unknown)}")
    values = {key: _number(value, f"discourse.{key}") for key, value in raw.items()}
    for key, value in values.items():
        if value < 0:
            raise RuleTableError(f"discourse.{key} must not be negative")
    return DiscourseRules(**values)


def parse_config(data: dict[str, Any] | None) -> EngineConfig:
    """Build an :class:`EngineConfig` from an already-parsed mapping."""
    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise RuleTableError(f"Config must be a mapping, got {type(data).__name__}")

    raw_rules = data.get("transition_rules") or {}
    if not isinstance(raw_rules, dict):
        raise RuleTableError("transition_rules must be a mapping")
    overrides = dict(_parse_rule(str(name), raw) for name, raw in raw_rules.items())

    discourse = DiscourseRules()
    if data.get("discourse") is not None:
        discourse = _parse_discourse(data["discourse"])

    return EngineConfig(transition_rules=RuleTable(overrides), discourse=discourse)


def load_config(path: str | Path) -> EngineConfig:
    """Load rule-table and discourse configuration from a YAML file.

    Raises
    ------
    RuleTableError
        If the file cannot be read, is not valid YAML, or has invalid values.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise RuleTableError(f"Cannot read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuleTableError(f"Invalid YAML in config file: {exc}") from exc

    config = parse_config(raw)
    logger.info("Loaded transition config from %s (%d rules)", path, len(config.transition_rules))
    return config
