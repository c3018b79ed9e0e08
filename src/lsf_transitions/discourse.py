"""Discourse context models and the cue extractors the validator reads.

A discourse context is the linguistic state a transition must stay
consistent with: spatial loci already set up in signing space, the
participant the signer is currently embodying (role shift), and the
active topic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from .models import Environment, Expression

SpatialReferenceType: TypeAlias = Literal["HEAD", "EYEBROW_REFERENCE"]
TopicMarkerType: TypeAlias = Literal["EYEBROW_RAISE", "HEAD_FORWARD"]


@dataclass(frozen=True)
class SpatialReference:
    """A reference point: position-valued (``HEAD``) or side-valued."""

    type: SpatialReferenceType
    position: float | None = None
    side: str | None = None


@dataclass(frozen=True)
class Role:
    """The discourse participant embodied during a role shift."""

    name: str
    expected_gaze: str = "neutral"
    expected_shift: float = 0.0
    expected_tilt: float = 0.0


@dataclass(frozen=True)
class Topic:
    name: str
    requires_emphasis: bool = False


@dataclass(frozen=True)
class DiscourseContext:
    spatial_references: tuple[SpatialReference, ...] | None = None
    current_role: Role | None = None
    active_topic: Topic | None = None
    environment: Environment | None = None


@dataclass(frozen=True)
class RoleAlignment:
    head_tilt: float
    gaze_direction: str
    body_shift: float


@dataclass(frozen=True)
class TopicMarker:
    type: TopicMarkerType
    intensity: float


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def extract_spatial_references(expression: Expression) -> list[SpatialReference]:
    references: list[SpatialReference] = []
    if expression.head.position is not None:
        references.append(SpatialReference(type="HEAD", position=expression.head.position))
    if expression.eyebrows.raised_side is not None:
        references.append(SpatialReference(type="EYEBROW_REFERENCE", side=expression.eyebrows.raised_side))
    return references


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_role_alignment(expression: Expression) -> RoleAlignment:
    eyes = expression.eyes or {}
    body = expression.body or {}
    tilt = expression.head.tilt
    focus = eyes.get("focus")
    shift = body.get("shift")
    return RoleAlignment(
        head_tilt=tilt if tilt is not None else 0.0,
        gaze_direction=str(focus) if focus is not None else "neutral",
        body_shift=float(shift) if _is_number(shift) else 0.0,
    )


def extract_topic_markers(expression: Expression) -> list[TopicMarker]:
    markers: list[TopicMarker] = []
    if expression.eyebrows.raised:
        markers.append(TopicMarker(type="EYEBROW_RAISE", intensity=expression.eyebrows.intensity or 0.0))
    if expression.head.forward:
        markers.append(TopicMarker(type="HEAD_FORWARD", intensity=expression.head.intensity or 0.0))
    return markers
