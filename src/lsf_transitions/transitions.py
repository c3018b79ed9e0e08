"""Transition engine: computes intermediate steps between two expressions.

Pipeline for one request:

  1. classify the pair and look up its rule
  2. prepend a neutral reset step when the rule requires one
  3. sample strictly interior progress points (2, 3 or 4 of them)
  4. interpolate, time and ease each step
  5. simplify or enhance the step list for the pacing context
  6. estimate the total gesture duration from the rule
"""

from __future__ import annotations

import logging

from .interpolation import interpolate_expressions
from .models import (
    NEUTRAL_EXPRESSION,
    Easing,
    Expression,
    TransitionContext,
    TransitionMetadata,
    TransitionRule,
    TransitionSequence,
    TransitionStep,
)
from .optimizer import optimize_steps, round_ms
from .rules import RuleTable, classify_transition

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

RESET_STEP_DURATION = 150
BASE_STEP_DURATION = 150
MIDDLE_STEP_FACTOR = 0.8

_STEP_SPEED_FACTORS = {"fast": 0.7, "slow": 1.4}
_TOTAL_SPEED_FACTORS = {"slow": 1.5, "normal": 1.0, "fast": 0.7}
_TOTAL_IMPORTANCE_FACTORS = {"low": 0.9, "normal": 1.0, "high": 1.2}


class TransitionSystem:
    """Compute transition sequences between LSF expressions.

    Parameters
    ----------
    rules:
        Rule table to use.  Defaults to the built-in table.
    """

    def __init__(self, rules: RuleTable | None = None) -> None:
        self.rules = rules if rules is not None else RuleTable()

    def compute(
        self,
        from_expr: Expression,
        to_expr: Expression,
        context: TransitionContext | None = None,
    ) -> TransitionSequence:
        context = context or TransitionContext()
        transition_type = classify_transition(from_expr, to_expr)
        rule = self.rules.rule_for(transition_type)
        logger.debug("Transition %s with %s", transition_type.value, rule)

        steps: list[TransitionStep] = []
        if rule.requires_reset:
            steps.append(self.reset_step())
        steps.extend(self.intermediate_steps(from_expr, to_expr, rule, context))

        return TransitionSequence(
            steps=tuple(optimize_steps(steps, context)),
            duration=self.total_duration(rule, context),
            metadata=TransitionMetadata(
                type=transition_type,
                requires_reset=rule.requires_reset,
                importance=context.importance or "normal",
            ),
        )

    # -- steps --------------------------------------------------------------

    @staticmethod
    def reset_step() -> TransitionStep:
        """Return to a neutral face before blending incompatible configurations."""
        return TransitionStep(expression=NEUTRAL_EXPRESSION, duration=RESET_STEP_DURATION, easing="easeOut")

    @staticmethod
    def step_count(context: TransitionContext) -> int:
        if context.speed == "fast":
            return 2
        if context.speed == "slow" or context.importance == "high":
            return 4
        return 3

    @staticmethod
    def progress_points(count: int) -> list[float]:
        """Interior sample points; never 0.0 or 1.0."""
        return [i / (count + 1) for i in range(1, count + 1)]

    def intermediate_steps(
        self,
        from_expr: Expression,
        to_expr: Expression,
        rule: TransitionRule,
        context: TransitionContext,
    ) -> list[TransitionStep]:
        count = self.step_count(context)
        logger.debug("Generating %d intermediate steps", count)
        return [
            TransitionStep(
                expression=interpolate_expressions(from_expr, to_expr, progress, rule.blend_factor),
                duration=self.step_duration(progress, context),
                easing=self.step_easing(progress, context),
            )
            for progress in self.progress_points(count)
        ]

    @staticmethod
    def step_duration(progress: float, context: TransitionContext) -> int:
        factor = 1.0
        # Middle steps move faster.
        if 0.25 < progress < 0.75:
            factor = MIDDLE_STEP_FACTOR
        factor *= _STEP_SPEED_FACTORS.get(context.speed, 1.0)
        return round_ms(BASE_STEP_DURATION * factor)

    @staticmethod
    def step_easing(progress: float, context: TransitionContext) -> Easing:
        if progress < 0.3:
            return "easeIn"
        if progress < 0.7:
            return "easeInOut" if context.importance == "high" else "linear"
        return "easeOut"

    # -- duration -----------------------------------------------------------

    @staticmethod
    def total_duration(rule: TransitionRule, context: TransitionContext) -> float:
        """Semantic duration of the whole gesture, never below the rule minimum."""
        speed_factor = _TOTAL_SPEED_FACTORS.get(context.speed, 1.0)
        importance_factor = _TOTAL_IMPORTANCE_FACTORS.get(context.importance, 1.0)
        return max(rule.min_duration, rule.min_duration * speed_factor * importance_factor)


def compute_transition(
    from_expr: Expression,
    to_expr: Expression,
    context: TransitionContext | None = None,
    rules: RuleTable | None = None,
) -> TransitionSequence:
    """Compute a transition sequence with a one-off :class:`TransitionSystem`."""
    return TransitionSystem(rules).compute(from_expr, to_expr, context)
