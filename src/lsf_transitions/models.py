"""Data models for LSF expressions and transition sequences.

Immutable dataclasses describing one instant of non-manual signing
(eyebrows, head, mouth, plus open-ended components such as ``eyes`` and
``body``) and the transition sequences computed between two of them.

Every numeric field is optional.  ``None`` means "not specified", which
is distinct from ``0.0``: interpolation only blends a field when both
endpoints define it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping, TypeAlias, Union

Speed: TypeAlias = Literal["slow", "normal", "fast"]
Importance: TypeAlias = Literal["low", "normal", "high"]
Environment: TypeAlias = Literal["formal", "casual"]
Easing: TypeAlias = Literal["easeIn", "easeOut", "easeInOut", "linear"]

# Leaf values allowed inside open-ended components (``eyes``, ``body``).
ComponentValue: TypeAlias = Union[float, int, bool, str, "Position3D", Mapping[str, Any]]
ComponentProperties: TypeAlias = Mapping[str, ComponentValue]


class ExpressionType(str, Enum):
    """Grammatical function carried by an expression."""

    QUESTION = "question"
    NEGATION = "negation"
    EMPHASIS = "emphasis"
    CONDITION = "condition"
    ASSERTION = "assertion"
    DEFAULT = "default"


class TransitionType(str, Enum):
    """Kind of grammatical transition between two expressions."""

    QUESTION_TO_QUESTION = "question_to_question"
    TO_NEGATION = "to_negation"
    TO_EMPHASIS = "to_emphasis"
    TO_CONDITION = "to_condition"
    DEFAULT = "default"


# ---------------------------------------------------------------------------
# Expression components
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Position3D:
    """A 3-axis value (rotation or position)."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class EyebrowsPosition:
    raised: float | None = None
    furrowed: float | None = None
    asymmetry: float | None = None
    intensity: float | None = None
    # Side used as a spatial reference marker ("left", "right").
    raised_side: str | None = None


@dataclass(frozen=True)
class HeadPosition:
    rotation: Position3D | None = None
    tilt: float | None = None
    nod: float | None = None
    intensity: float | None = None
    # Spatial locus the head points to.
    position: float | None = None
    # Forward tilt used as a topic marker.
    forward: float | None = None


@dataclass(frozen=True)
class MouthConfiguration:
    openness: float | None = None
    spread: float | None = None
    roundness: float | None = None
    intensity: float | None = None
    tensed: bool | None = None


@dataclass(frozen=True)
class ExpressionMetadata:
    duration: float | None = None  # milliseconds
    intensity: float | None = None
    priority: float | None = None
    cultural: str | None = None


@dataclass(frozen=True)
class Expression:
    """A snapshot of facial, head and mouth values at one instant."""

    eyebrows: EyebrowsPosition = field(default_factory=EyebrowsPosition)
    head: HeadPosition = field(default_factory=HeadPosition)
    mouth: MouthConfiguration = field(default_factory=MouthConfiguration)
    expression_type: ExpressionType | None = None
    eyes: ComponentProperties | None = None
    body: ComponentProperties | None = None
    metadata: ExpressionMetadata | None = None


NEUTRAL_EXPRESSION = Expression(
    eyebrows=EyebrowsPosition(raised=0.0, furrowed=0.0, asymmetry=0.0, intensity=0.0),
    head=HeadPosition(rotation=Position3D(0.0, 0.0, 0.0), tilt=0.0, nod=0.0, intensity=0.0),
    mouth=MouthConfiguration(openness=0.0, spread=0.0, roundness=0.0, intensity=0.0, tensed=False),
    expression_type=ExpressionType.DEFAULT,
)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransitionRule:
    """Blending parameters for one transition type."""

    min_duration: float  # milliseconds
    requires_reset: bool
    blend_factor: float  # 0.0 - 1.0


@dataclass(frozen=True)
class TransitionContext:
    """Caller-supplied pacing hints for a transition request."""

    speed: Speed = "normal"
    importance: Importance = "normal"
    environment: Environment | None = None
    # Reserved; not read by the blending math.
    quantization_level: int | None = None


@dataclass(frozen=True)
class TransitionStep:
    expression: Expression
    duration: int  # milliseconds
    easing: Easing


@dataclass(frozen=True)
class TransitionMetadata:
    type: TransitionType
    requires_reset: bool
    importance: Importance = "normal"


@dataclass(frozen=True)
class TransitionSequence:
    """A computed path of intermediate expressions.

    ``duration`` is the semantic target duration of the whole gesture and
    is not the sum of the step durations.
    """

    steps: tuple[TransitionStep, ...]
    duration: float
    metadata: TransitionMetadata
