"""Compute-then-validate planning for callers that drive an avatar.

The adaptation layer decides *which* expression the avatar should move
to; this module turns that decision into a validated transition.
Whether error-severity issues block the transition is the caller's
choice (``strict``); warnings never block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .context_validator import ContextValidator, ValidationResult
from .discourse import DiscourseContext
from .exceptions import TransitionValidationError
from .models import Expression, TransitionContext, TransitionSequence
from .transitions import TransitionSystem

logger = logging.getLogger(__name__)


class AdaptationStrategy(Protocol):
    """Anything that can recommend the next expression state."""

    def target_expression(self, current: Expression) -> Expression:
        ...


@dataclass(frozen=True)
class PlannedTransition:
    sequence: TransitionSequence
    validation: ValidationResult


class TransitionPlanner:
    """Compute a transition and check it against the discourse context."""

    def __init__(
        self,
        system: TransitionSystem | None = None,
        validator: ContextValidator | None = None,
        strict: bool = False,
    ) -> None:
        self.system = system or TransitionSystem()
        self.validator = validator or ContextValidator()
        self.strict = strict

    def plan(
        self,
        from_expr: Expression,
        to_expr: Expression,
        context: TransitionContext | None = None,
        discourse: DiscourseContext | None = None,
    ) -> PlannedTransition:
        """Compute and validate one transition.

        Raises
        ------
        TransitionValidationError
            In strict mode, when validation reports error-severity issues.
        """
        sequence = self.system.compute(from_expr, to_expr, context)
        validation = self.validator.validate(sequence, discourse or DiscourseContext())

        errors = validation.errors
        if errors:
            if self.strict:
                raise TransitionValidationError(
                    f"Transition {sequence.metadata.type.value} failed discourse validation "
                    f"with {len(errors)} error(s)",
                    validation,
                )
            logger.warning(
                "Transition %s has %d discourse error(s); continuing in non-strict mode",
                sequence.metadata.type.value,
                len(errors),
            )
        return PlannedTransition(sequence=sequence, validation=validation)

    def plan_for_strategy(
        self,
        strategy: AdaptationStrategy,
        current: Expression,
        context: TransitionContext | None = None,
        discourse: DiscourseContext | None = None,
    ) -> PlannedTransition:
        """Plan the move from *current* to whatever *strategy* recommends."""
        return self.plan(current, strategy.target_expression(current), context, discourse)
