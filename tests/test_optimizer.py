"""Tests for lsf_transitions.optimizer."""

from __future__ import annotations

import pytest

from lsf_transitions.models import Expression, TransitionContext, TransitionStep
from lsf_transitions.optimizer import (
    enhance_steps,
    micro_adjustment,
    optimize_steps,
    round_ms,
    simplify_steps,
)


def _steps(*durations: int) -> list[TransitionStep]:
    return [TransitionStep(expression=Expression(), duration=d, easing="linear") for d in durations]


class TestRoundMs:
    @pytest.mark.parametrize(("value", "expected"), [(31.5, 32), (32.5, 33), (50.4, 50), (120.0, 120)])
    def test_halves_round_up(self, value: float, expected: int) -> None:
        assert round_ms(value) == expected


class TestSimplify:
    def test_keeps_even_indices(self) -> None:
        steps = _steps(1, 2, 3, 4, 5)
        assert [s.duration for s in simplify_steps(steps)] == [1, 3, 5]

    def test_empty(self) -> None:
        assert simplify_steps([]) == []


class TestEnhance:
    def test_micro_adjustment_between_steps(self) -> None:
        enhanced = enhance_steps(_steps(150, 120, 150))
        assert [s.duration for s in enhanced] == [150, 45, 120, 36, 150]
        assert [s.easing for s in enhanced] == ["linear", "easeInOut", "linear", "easeInOut", "linear"]

    def test_length(self) -> None:
        assert len(enhance_steps(_steps(*range(1, 5)))) == 7

    def test_single_step_unchanged(self) -> None:
        assert enhance_steps(_steps(100)) == _steps(100)

    def test_micro_adjustment_copies_expression(self) -> None:
        step = _steps(150)[0]
        adjusted = micro_adjustment(step)
        assert adjusted.expression is step.expression
        assert adjusted.duration == 45
        assert step.duration == 150


class TestOptimize:
    def test_fast_simplifies(self) -> None:
        result = optimize_steps(_steps(1, 2, 3), TransitionContext(speed="fast"))
        assert len(result) == 2

    def test_high_importance_enhances(self) -> None:
        result = optimize_steps(_steps(1, 2, 3), TransitionContext(importance="high"))
        assert len(result) == 5

    def test_fast_wins_over_high_importance(self) -> None:
        result = optimize_steps(_steps(1, 2, 3, 4), TransitionContext(speed="fast", importance="high"))
        assert [s.duration for s in result] == [1, 3]

    def test_normal_unchanged(self) -> None:
        steps = _steps(1, 2, 3)
        assert optimize_steps(steps, TransitionContext()) == steps
