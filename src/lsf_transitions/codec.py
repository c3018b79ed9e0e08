"""Conversion between SDK dataclasses and JSON-shaped dicts.

Keys are snake_case.  Optional fields that are ``None`` are left out of
the output, so an omitted field stays omitted across a round trip.
"""

from __future__ import annotations

from dataclasses import asdict, fields, is_dataclass
from typing import Any, Mapping, TypeVar

from .context_validator import ValidationResult
from .discourse import DiscourseContext, Role, SpatialReference, Topic
from .exceptions import ExpressionFormatError
from .models import (
    Expression,
    ExpressionMetadata,
    ExpressionType,
    EyebrowsPosition,
    HeadPosition,
    MouthConfiguration,
    Position3D,
    TransitionContext,
    TransitionMetadata,
    TransitionSequence,
    TransitionStep,
    TransitionType,
)

_C = TypeVar("_C")

_SPEEDS = frozenset({"slow", "normal", "fast"})
_IMPORTANCES = frozenset({"low", "normal", "high"})
_ENVIRONMENTS = frozenset({"formal", "casual"})
_EASINGS = frozenset({"easeIn", "easeOut", "easeInOut", "linear"})
_REFERENCE_TYPES = frozenset({"HEAD", "EYEBROW_REFERENCE"})


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------


def _mapping(data: object, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ExpressionFormatError(f"Expected an object, got {type(data).__name__}", path)
    return data


def _number(value: object, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExpressionFormatError(f"Expected a number, got {value!r}", path)
    return value


def _boolean(value: object, path: str) -> bool:
    if not isinstance(value, bool):
        raise ExpressionFormatError(f"Expected a boolean, got {value!r}", path)
    return value


def _choice(value: object, allowed: frozenset[str], path: str) -> str:
    if value not in allowed:
        raise ExpressionFormatError(f"{value!r} is not one of: {', '.join(sorted(allowed))}", path)
    return value  # type: ignore[return-value]


def _position(data: object, path: str) -> Position3D:
    raw = _mapping(data, path)
    try:
        return Position3D(*(_number(raw[axis], f"{path}.{axis}") for axis in ("x", "y", "z")))
    except KeyError as exc:
        raise ExpressionFormatError(f"Missing axis {exc.args[0]!r}", path) from None


def _component(cls: type[_C], data: object, path: str) -> _C:
    """Decode a fixed-field component; every field is optional."""
    raw = _mapping(data, path)
    known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    unknown = set(raw) - known
    if unknown:
        raise ExpressionFormatError(f"Unknown fields: {sorted(unknown)}", path)

    values: dict[str, Any] = {}
    for name, value in raw.items():
        where = f"{path}.{name}"
        if value is None:
            continue
        if name == "rotation":
            values[name] = _position(value, where)
        elif name == "tensed":
            values[name] = _boolean(value, where)
        elif name in ("raised_side", "cultural"):
            if not isinstance(value, str):
                raise ExpressionFormatError(f"Expected a string, got {value!r}", where)
            values[name] = value
        else:
            values[name] = _number(value, where)
    return cls(**values)


def _expression_type(value: object, path: str) -> ExpressionType:
    try:
        return ExpressionType(str(value).lower())
    except ValueError:
        valid = ", ".join(t.value for t in ExpressionType)
        raise ExpressionFormatError(f"Unknown expression type {value!r} (expected one of: {valid})", path) from None


# ---------------------------------------------------------------------------
# Encoding helpers
# ---------------------------------------------------------------------------


def _prune(value: Any) -> Any:
    """Drop ``None`` entries recursively and flatten dataclasses and enums."""
    if is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in fields(value)}
    if isinstance(value, Mapping):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_prune(v) for v in value]
    if isinstance(value, (ExpressionType, TransitionType)):
        return value.value
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def expression_from_dict(data: object, path: str = "expression") -> Expression:
    raw = _mapping(data, path)
    known = {f.name for f in fields(Expression)}
    unknown = set(raw) - known
    if unknown:
        raise ExpressionFormatError(f"Unknown fields: {sorted(unknown)}", path)

    kwargs: dict[str, Any] = {}
    if raw.get("eyebrows") is not None:
        kwargs["eyebrows"] = _component(EyebrowsPosition, raw["eyebrows"], f"{path}.eyebrows")
    if raw.get("head") is not None:
        kwargs["head"] = _component(HeadPosition, raw["head"], f"{path}.head")
    if raw.get("mouth") is not None:
        kwargs["mouth"] = _component(MouthConfiguration, raw["mouth"], f"{path}.mouth")
    if raw.get("metadata") is not None:
        kwargs["metadata"] = _component(ExpressionMetadata, raw["metadata"], f"{path}.metadata")
    if raw.get("expression_type") is not None:
        kwargs["expression_type"] = _expression_type(raw["expression_type"], f"{path}.expression_type")
    for name in ("eyes", "body"):
        if raw.get(name) is not None:
            kwargs[name] = dict(_mapping(raw[name], f"{path}.{name}"))
    return Expression(**kwargs)


def expression_to_dict(expression: Expression) -> dict[str, Any]:
    return _prune(expression)


def context_from_dict(data: object | None, path: str = "context") -> TransitionContext:
    if data is None:
        return TransitionContext()
    raw = _mapping(data, path)
    kwargs: dict[str, Any] = {}
    if raw.get("speed") is not None:
        kwargs["speed"] = _choice(raw["speed"], _SPEEDS, f"{path}.speed")
    if raw.get("importance") is not None:
        kwargs["importance"] = _choice(raw["importance"], _IMPORTANCES, f"{path}.importance")
    if raw.get("environment") is not None:
        kwargs["environment"] = _choice(raw["environment"], _ENVIRONMENTS, f"{path}.environment")
    if raw.get("quantization_level") is not None:
        kwargs["quantization_level"] = int(_number(raw["quantization_level"], f"{path}.quantization_level"))
    return TransitionContext(**kwargs)


def sequence_to_dict(sequence: TransitionSequence) -> dict[str, Any]:
    return _prune(sequence)


def sequence_from_dict(data: object, path: str = "sequence") -> TransitionSequence:
    raw = _mapping(data, path)
    raw_steps = raw.get("steps", [])
    if not isinstance(raw_steps, list):
        raise ExpressionFormatError("Expected a list of steps", f"{path}.steps")

    steps = []
    for i, raw_step in enumerate(raw_steps):
        where = f"{path}.steps[{i}]"
        step = _mapping(raw_step, where)
        steps.append(TransitionStep(
            expression=expression_from_dict(step.get("expression", {}), f"{where}.expression"),
            duration=int(_number(step.get("duration", 0), f"{where}.duration")),
            easing=_choice(step.get("easing", "linear"), _EASINGS, f"{where}.easing"),  # type: ignore[arg-type]
        ))

    meta = _mapping(raw.get("metadata", {}), f"{path}.metadata")
    try:
        transition_type = TransitionType(str(meta.get("type", "default")).lower())
    except ValueError:
        raise ExpressionFormatError(f"Unknown transition type {meta.get('type')!r}", f"{path}.metadata.type") from None

    return TransitionSequence(
        steps=tuple(steps),
        duration=_number(raw.get("duration", 0), f"{path}.duration"),
        metadata=TransitionMetadata(
            type=transition_type,
            requires_reset=_boolean(meta.get("requires_reset", False), f"{path}.metadata.requires_reset"),
            importance=_choice(meta.get("importance", "normal"), _IMPORTANCES, f"{path}.metadata.importance"),  # type: ignore[arg-type]
        ),
    )


def discourse_from_dict(data: object | None, path: str = "discourse") -> DiscourseContext:
    if data is None:
        return DiscourseContext()
    raw = _mapping(data, path)

    spatial = None
    if raw.get("spatial_references") is not None:
        refs = raw["spatial_references"]
        if not isinstance(refs, list):
            raise ExpressionFormatError("Expected a list", f"{path}.spatial_references")
        spatial = []
        for i, ref in enumerate(refs):
            where = f"{path}.spatial_references[{i}]"
            ref = _mapping(ref, where)
            position = ref.get("position")
            spatial.append(SpatialReference(
                type=_choice(ref.get("type"), _REFERENCE_TYPES, f"{where}.type"),  # type: ignore[arg-type]
                position=_number(position, f"{where}.position") if position is not None else None,
                side=ref.get("side"),
            ))
        spatial = tuple(spatial)

    role = None
    if raw.get("current_role") is not None:
        r = _mapping(raw["current_role"], f"{path}.current_role")
        role = Role(
            name=str(r.get("name", "")),
            expected_gaze=str(r.get("expected_gaze", "neutral")),
            expected_shift=_number(r.get("expected_shift", 0.0), f"{path}.current_role.expected_shift"),
            expected_tilt=_number(r.get("expected_tilt", 0.0), f"{path}.current_role.expected_tilt"),
        )

    topic = None
    if raw.get("active_topic") is not None:
        t = _mapping(raw["active_topic"], f"{path}.active_topic")
        topic = Topic(
            name=str(t.get("name", "")),
            requires_emphasis=_boolean(t.get("requires_emphasis", False), f"{path}.active_topic.requires_emphasis"),
        )

    environment = None
    if raw.get("environment") is not None:
        environment = _choice(raw["environment"], _ENVIRONMENTS, f"{path}.environment")

    return DiscourseContext(
        spatial_references=spatial,
        current_role=role,
        active_topic=topic,
        environment=environment,  # type: ignore[arg-type]
    )


def validation_result_to_dict(result: ValidationResult) -> dict[str, Any]:
    return {
        "is_valid": result.is_valid,
        "issues": [asdict(issue) for issue in result.issues],
        "recommendations": list(result.recommendations),
    }
