"""Discourse context validator -- checks a transition sequence for continuity.

Three independent checks, each enabled by the matching part of the
discourse context:

  SPATIAL_INCONSISTENCY    spatial references drift or vanish        ERROR
  ROLE_SHIFT_ERROR         gaze/tilt/body leave the embodied role    ERROR
  TOPIC_MAINTENANCE_ERROR  topic marking too weak on a step          WARNING

Failures are data, not exceptions: :meth:`ContextValidator.validate`
always returns a :class:`ValidationResult`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Mapping, TypeAlias

from .config import DiscourseRules
from .discourse import (
    DiscourseContext,
    Role,
    SpatialReference,
    Topic,
    extract_role_alignment,
    extract_spatial_references,
    extract_topic_markers,
)
from .models import TransitionSequence

logger = logging.getLogger(__name__)

IssueType: TypeAlias = Literal["SPATIAL_INCONSISTENCY", "ROLE_SHIFT_ERROR", "TOPIC_MAINTENANCE_ERROR"]

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

RECOMMENDATIONS: Mapping[IssueType, str] = {
    "SPATIAL_INCONSISTENCY": "Maintenir les références spatiales établies tout au long de la transition",
    "ROLE_SHIFT_ERROR": "Conserver l'alignement du regard, de la tête et du buste propre au rôle incarné",
    "TOPIC_MAINTENANCE_ERROR": "Renforcer les marqueurs de topic pendant toute la séquence",
}

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationIssue:
    """A single continuity finding, tied to a step index."""

    type: IssueType
    severity: Literal["error", "warning"]
    message: str
    step: int
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Outcome of validating a transition sequence against a discourse context."""

    is_valid: bool = True
    issues: list[ValidationIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class ContextValidator:
    """Validate transition sequences for spatial, role and topic continuity."""

    def __init__(self, rules: DiscourseRules | None = None) -> None:
        self.rules = rules if rules is not None else DiscourseRules()

    def validate(self, sequence: TransitionSequence, context: DiscourseContext) -> ValidationResult:
        issues: list[ValidationIssue] = []
        if context.spatial_references is not None:
            issues.extend(self.check_spatial_continuity(sequence, context.spatial_references))
        if context.current_role is not None:
            issues.extend(self.check_role_consistency(sequence, context.current_role))
        if context.active_topic is not None:
            issues.extend(self.check_topic_maintenance(sequence, context.active_topic))

        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            recommendations=[recommendation_for(issue) for issue in issues],
        )

    # -- spatial ------------------------------------------------------------

    def _within_tolerance(self, found: SpatialReference, expected: SpatialReference) -> bool:
        if expected.position is not None:
            if found.position is None:
                return False
            return abs(found.position - expected.position) <= self.rules.position_tolerance
        if expected.side is not None:
            return found.side == expected.side
        return True

    def check_spatial_continuity(
        self,
        sequence: TransitionSequence,
        expected_refs: tuple[SpatialReference, ...],
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, step in enumerate(sequence.steps):
            step_refs = extract_spatial_references(step.expression)
            for expected in expected_refs:
                found = next((ref for ref in step_refs if ref.type == expected.type), None)
                if found is not None and self._within_tolerance(found, expected):
                    continue
                issues.append(ValidationIssue(
                    type="SPATIAL_INCONSISTENCY",
                    severity="error",
                    message=(
                        f"Step {index}: spatial reference {expected.type} "
                        + ("is missing" if found is None else "drifted out of tolerance")
                    ),
                    step=index,
                    details={
                        "expected": asdict(expected),
                        "found": asdict(found) if found is not None else None,
                    },
                ))
        logger.debug("Spatial continuity check produced %d issues", len(issues))
        return issues

    # -- role ---------------------------------------------------------------

    def check_role_consistency(self, sequence: TransitionSequence, role: Role) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if not sequence.steps:
            return issues

        previous = extract_role_alignment(sequence.steps[0].expression)
        for index, step in enumerate(sequence.steps[1:], start=1):
            current = extract_role_alignment(step.expression)
            tilt_diff = current.head_tilt - role.expected_tilt
            valid = (
                abs(tilt_diff) <= self.rules.tilt_tolerance
                and current.gaze_direction == role.expected_gaze
                and abs(current.body_shift - role.expected_shift) <= self.rules.shift_tolerance
            )
            if not valid:
                issues.append(ValidationIssue(
                    type="ROLE_SHIFT_ERROR",
                    severity="error",
                    message=f"Step {index}: alignment breaks role '{role.name}'",
                    step=index,
                    details={
                        "role": asdict(role),
                        "previous": asdict(previous),
                        "current": asdict(current),
                    },
                ))
            previous = current
        logger.debug("Role consistency check produced %d issues", len(issues))
        return issues

    # -- topic --------------------------------------------------------------

    def check_topic_maintenance(self, sequence: TransitionSequence, topic: Topic) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if not topic.requires_emphasis:
            return issues

        for index, step in enumerate(sequence.steps):
            markers = extract_topic_markers(step.expression)
            has_eyebrows = any(
                m.type == "EYEBROW_RAISE" and m.intensity >= self.rules.topic_eyebrow_min_intensity
                for m in markers
            )
            has_head = any(
                m.type == "HEAD_FORWARD" and m.intensity >= self.rules.topic_head_forward_min_intensity
                for m in markers
            )
            if has_eyebrows and has_head:
                continue
            issues.append(ValidationIssue(
                type="TOPIC_MAINTENANCE_ERROR",
                severity="warning",
                message=f"Step {index}: topic '{topic.name}' is not marked strongly enough",
                step=index,
                details={
                    "topic": asdict(topic),
                    "markers": [asdict(m) for m in markers],
                },
            ))
        logger.debug("Topic maintenance check produced %d issues", len(issues))
        return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def recommendation_for(issue: ValidationIssue) -> str:
    return RECOMMENDATIONS[issue.type]


def validate_transition_context(
    sequence: TransitionSequence,
    context: DiscourseContext,
    rules: DiscourseRules | None = None,
) -> ValidationResult:
    """Validate *sequence* with a one-off :class:`ContextValidator`."""
    return ContextValidator(rules).validate(sequence, context)
