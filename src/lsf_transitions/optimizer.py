"""Post-processing of raw transition steps for pacing context.

Speed wins over importance: a fast, high-importance transition is
simplified, never enhanced.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from .models import TransitionContext, TransitionStep

MICRO_ADJUSTMENT_RATIO = 0.3


def round_ms(value: float) -> int:
    """Round a duration to whole milliseconds, halves rounding up."""
    return math.floor(value + 0.5)


def micro_adjustment(step: TransitionStep) -> TransitionStep:
    """Copy *step* as a short corrective frame."""
    return replace(step, duration=round_ms(step.duration * MICRO_ADJUSTMENT_RATIO), easing="easeInOut")


def simplify_steps(steps: Sequence[TransitionStep]) -> list[TransitionStep]:
    """Keep the steps at even indices."""
    return [step for index, step in enumerate(steps) if index % 2 == 0]


def enhance_steps(steps: Sequence[TransitionStep]) -> list[TransitionStep]:
    """Insert a micro-adjustment after every step but the last."""
    enhanced: list[TransitionStep] = []
    for index, step in enumerate(steps):
        enhanced.append(step)
        if index < len(steps) - 1:
            enhanced.append(micro_adjustment(step))
    return enhanced


def optimize_steps(steps: Sequence[TransitionStep], context: TransitionContext) -> list[TransitionStep]:
    if context.speed == "fast":
        return simplify_steps(steps)
    if context.importance == "high":
        return enhance_steps(steps)
    return list(steps)
