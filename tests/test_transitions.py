"""Tests for lsf_transitions.transitions.

Covers:
- The worked negation example (reset step, three interior steps)
- Interior progress points (never 0 or 1)
- Step count per speed/importance, before and after optimization
- Step duration and easing schedules
- Total duration estimate
"""

from __future__ import annotations

import pytest

from lsf_transitions.models import (
    NEUTRAL_EXPRESSION,
    Expression,
    ExpressionType,
    TransitionContext,
    TransitionRule,
    TransitionType,
)
from lsf_transitions.rules import RuleTable
from lsf_transitions.transitions import TransitionSystem, compute_transition


@pytest.fixture()
def system() -> TransitionSystem:
    return TransitionSystem()


# ---------------------------------------------------------------------------
# Worked example
# ---------------------------------------------------------------------------


class TestNegationExample:
    def test_metadata(
        self,
        assertion_expression: Expression,
        negation_expression: Expression,
        normal_context: TransitionContext,
    ) -> None:
        seq = compute_transition(assertion_expression, negation_expression, normal_context)
        assert seq.metadata.type is TransitionType.TO_NEGATION
        assert seq.metadata.requires_reset is True
        assert seq.metadata.importance == "normal"
        assert seq.duration == 400

    def test_reset_then_three_steps(
        self,
        assertion_expression: Expression,
        negation_expression: Expression,
        normal_context: TransitionContext,
    ) -> None:
        seq = compute_transition(assertion_expression, negation_expression, normal_context)
        assert len(seq.steps) == 4
        reset = seq.steps[0]
        assert reset.expression == NEUTRAL_EXPRESSION
        assert reset.duration == 150
        assert reset.easing == "easeOut"

        raised = [step.expression.eyebrows.raised for step in seq.steps[1:]]
        assert raised == [pytest.approx(0.125), pytest.approx(0.25), pytest.approx(0.375)]
        tilts = [step.expression.head.tilt for step in seq.steps[1:]]
        assert tilts == [pytest.approx(0.125), pytest.approx(0.25), pytest.approx(0.375)]

    def test_step_schedule(
        self,
        assertion_expression: Expression,
        negation_expression: Expression,
        normal_context: TransitionContext,
    ) -> None:
        seq = compute_transition(assertion_expression, negation_expression, normal_context)
        assert [s.duration for s in seq.steps[1:]] == [150, 120, 150]
        assert [s.easing for s in seq.steps[1:]] == ["easeIn", "linear", "easeOut"]

    def test_type_switches_at_midpoint(
        self,
        assertion_expression: Expression,
        negation_expression: Expression,
        normal_context: TransitionContext,
    ) -> None:
        seq = compute_transition(assertion_expression, negation_expression, normal_context)
        types = [s.expression.expression_type for s in seq.steps[1:]]
        assert types == [ExpressionType.ASSERTION, ExpressionType.NEGATION, ExpressionType.NEGATION]


# ---------------------------------------------------------------------------
# Reset step
# ---------------------------------------------------------------------------


class TestResetStep:
    def test_condition_has_reset(self, system: TransitionSystem, assertion_expression: Expression) -> None:
        seq = system.compute(assertion_expression, Expression(expression_type=ExpressionType.CONDITION))
        assert seq.steps[0].expression == NEUTRAL_EXPRESSION

    def test_emphasis_has_no_reset(
        self, system: TransitionSystem, assertion_expression: Expression, emphasis_expression: Expression
    ) -> None:
        seq = system.compute(assertion_expression, emphasis_expression)
        assert len(seq.steps) == 3
        assert all(s.expression != NEUTRAL_EXPRESSION for s in seq.steps)

    def test_question_to_question_has_no_reset(
        self, system: TransitionSystem, question_expression: Expression
    ) -> None:
        seq = system.compute(question_expression, question_expression)
        assert seq.metadata.type is TransitionType.QUESTION_TO_QUESTION
        assert seq.metadata.requires_reset is False
        assert len(seq.steps) == 3


# ---------------------------------------------------------------------------
# Sampling
# ---------------------------------------------------------------------------


class TestProgressPoints:
    @pytest.mark.parametrize("count", [1, 2, 3, 4, 10])
    def test_strictly_interior(self, count: int) -> None:
        points = TransitionSystem.progress_points(count)
        assert len(points) == count
        assert all(0.0 < p < 1.0 for p in points)
        assert points == sorted(points)

    def test_three_points(self) -> None:
        assert TransitionSystem.progress_points(3) == [0.25, 0.5, 0.75]


class TestStepCount:
    @pytest.mark.parametrize(
        ("speed", "importance", "expected"),
        [
            ("normal", "normal", 3),
            ("normal", "low", 3),
            ("fast", "normal", 2),
            ("fast", "high", 2),
            ("slow", "normal", 4),
            ("slow", "low", 4),
            ("normal", "high", 4),
        ],
    )
    def test_mapping(self, speed: str, importance: str, expected: int) -> None:
        ctx = TransitionContext(speed=speed, importance=importance)  # type: ignore[arg-type]
        assert TransitionSystem.step_count(ctx) == expected

    def test_fast_sequence_is_simplified(self, system: TransitionSystem, assertion_expression: Expression) -> None:
        seq = system.compute(assertion_expression, assertion_expression, TransitionContext(speed="fast"))
        # 2 interior steps, keep index 0 only
        assert len(seq.steps) == 1

    def test_high_importance_sequence_is_enhanced(
        self, system: TransitionSystem, assertion_expression: Expression
    ) -> None:
        seq = system.compute(assertion_expression, assertion_expression, TransitionContext(importance="high"))
        # 4 interior steps plus 3 micro-adjustments
        assert len(seq.steps) == 7
        assert seq.metadata.importance == "high"

    def test_fast_and_high_uses_speed_path(self, system: TransitionSystem, negation_expression: Expression) -> None:
        ctx = TransitionContext(speed="fast", importance="high")
        seq = system.compute(Expression(), negation_expression, ctx)
        # reset + 2 interior = 3 raw steps, even indices kept
        assert len(seq.steps) == 2
        assert seq.steps[0].expression == NEUTRAL_EXPRESSION
        # Second kept step is the raw interior step at progress 2/3, not a micro-adjustment.
        assert seq.steps[1].duration == 84


class TestStepDuration:
    @pytest.mark.parametrize(
        ("progress", "speed", "expected"),
        [
            (0.25, "normal", 150),
            (0.5, "normal", 120),
            (0.75, "normal", 150),
            (0.2, "slow", 210),
            (0.4, "slow", 168),
            (1 / 3, "fast", 84),
            (2 / 3, "fast", 84),
            (0.8, "fast", 105),
        ],
    )
    def test_schedule(self, progress: float, speed: str, expected: int) -> None:
        ctx = TransitionContext(speed=speed)  # type: ignore[arg-type]
        assert TransitionSystem.step_duration(progress, ctx) == expected


class TestStepEasing:
    @pytest.mark.parametrize(
        ("progress", "importance", "expected"),
        [
            (0.2, "normal", "easeIn"),
            (0.2, "high", "easeIn"),
            (0.5, "normal", "linear"),
            (0.5, "high", "easeInOut"),
            (0.7, "high", "easeOut"),
            (0.8, "normal", "easeOut"),
        ],
    )
    def test_schedule(self, progress: float, importance: str, expected: str) -> None:
        ctx = TransitionContext(importance=importance)  # type: ignore[arg-type]
        assert TransitionSystem.step_easing(progress, ctx) == expected


class TestTotalDuration:
    @pytest.mark.parametrize(
        ("speed", "importance", "expected"),
        [
            ("normal", "normal", 250),
            ("slow", "normal", 375),
            ("slow", "high", 450),
            ("normal", "high", 300),
            # Never below the rule minimum.
            ("fast", "normal", 250),
            ("normal", "low", 250),
        ],
    )
    def test_default_rule(self, speed: str, importance: str, expected: float) -> None:
        rule = TransitionRule(min_duration=250, requires_reset=False, blend_factor=0.6)
        ctx = TransitionContext(speed=speed, importance=importance)  # type: ignore[arg-type]
        assert TransitionSystem.total_duration(rule, ctx) == pytest.approx(expected)

    def test_independent_of_step_sum(self, system: TransitionSystem, negation_expression: Expression) -> None:
        seq = system.compute(Expression(), negation_expression)
        assert seq.duration == 400
        assert sum(s.duration for s in seq.steps) != seq.duration


class TestCustomRules:
    def test_rule_table_is_used(self, assertion_expression: Expression, negation_expression: Expression) -> None:
        table = RuleTable({
            TransitionType.TO_NEGATION: TransitionRule(min_duration=600, requires_reset=False, blend_factor=1.0),
        })
        seq = TransitionSystem(table).compute(assertion_expression, negation_expression)
        assert seq.duration == 600
        assert seq.metadata.requires_reset is False
        assert [s.expression.eyebrows.raised for s in seq.steps] == [
            pytest.approx(0.25), pytest.approx(0.5), pytest.approx(0.75),
        ]


class TestDeterminism:
    def test_same_inputs_same_sequence(
        self, system: TransitionSystem, question_expression: Expression, emphasis_expression: Expression
    ) -> None:
        ctx = TransitionContext(speed="slow", importance="high")
        assert system.compute(question_expression, emphasis_expression, ctx) == system.compute(
            question_expression, emphasis_expression, ctx
        )
