"""Transition rule table and transition-type classifier.

Classification is first-match, no scoring:

  1. question -> question           QUESTION_TO_QUESTION
  2. target is a negation           TO_NEGATION
  3. target is an emphasis          TO_EMPHASIS
  4. target is a condition          TO_CONDITION
  5. anything else                  DEFAULT

Rule lookup is total: any unrecognized type falls back to the DEFAULT rule.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, Mapping

from .models import Expression, ExpressionType, TransitionRule, TransitionType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TRANSITION_RULES: Mapping[TransitionType, TransitionRule] = MappingProxyType({
    TransitionType.QUESTION_TO_QUESTION: TransitionRule(min_duration=300, requires_reset=False, blend_factor=0.7),
    TransitionType.TO_NEGATION: TransitionRule(min_duration=400, requires_reset=True, blend_factor=0.5),
    TransitionType.TO_EMPHASIS: TransitionRule(min_duration=200, requires_reset=False, blend_factor=0.8),
    TransitionType.TO_CONDITION: TransitionRule(min_duration=350, requires_reset=True, blend_factor=0.6),
    TransitionType.DEFAULT: TransitionRule(min_duration=250, requires_reset=False, blend_factor=0.6),
})


# ---------------------------------------------------------------------------
# RuleTable
# ---------------------------------------------------------------------------


class RuleTable(Mapping[TransitionType, TransitionRule]):
    """Read-only mapping from transition type to blending rule.

    Types missing from *overrides* keep the built-in defaults, so the
    table always covers every :class:`TransitionType`.
    """

    def __init__(self, overrides: Mapping[TransitionType, TransitionRule] | None = None) -> None:
        rules = dict(DEFAULT_TRANSITION_RULES)
        if overrides:
            rules.update(overrides)
        self._rules: Mapping[TransitionType, TransitionRule] = MappingProxyType(rules)

    def __getitem__(self, key: TransitionType) -> TransitionRule:
        return self._rules[key]

    def __iter__(self) -> Iterator[TransitionType]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({dict(self._rules)!r})"

    def rule_for(self, transition_type: TransitionType | str) -> TransitionRule:
        """Return the rule for *transition_type*, or the DEFAULT rule."""
        if isinstance(transition_type, TransitionType):
            return self._rules[transition_type]
        try:
            key = TransitionType(str(transition_type).lower())
        except ValueError:
            logger.warning("Unknown transition type %r, using the default rule", transition_type)
            return self._rules[TransitionType.DEFAULT]
        return self._rules[key]


_DEFAULT_TABLE = RuleTable()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_transition(from_expr: Expression, to_expr: Expression) -> TransitionType:
    """Decide the transition type between two expressions."""
    if (
        from_expr.expression_type is ExpressionType.QUESTION
        and to_expr.expression_type is ExpressionType.QUESTION
    ):
        return TransitionType.QUESTION_TO_QUESTION
    if to_expr.expression_type is ExpressionType.NEGATION:
        return TransitionType.TO_NEGATION
    if to_expr.expression_type is ExpressionType.EMPHASIS:
        return TransitionType.TO_EMPHASIS
    if to_expr.expression_type is ExpressionType.CONDITION:
        return TransitionType.TO_CONDITION
    return TransitionType.DEFAULT


def get_transition_rule(
    transition_type: TransitionType | str,
    table: RuleTable | None = None,
) -> TransitionRule:
    """Look up the blending rule for *transition_type*.

    Never raises: unrecognized values resolve to the DEFAULT rule.
    """
    return (table if table is not None else _DEFAULT_TABLE).rule_for(transition_type)
