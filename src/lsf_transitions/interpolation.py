"""Weighted interpolation between two expressions.

Visible components (eyebrows, head, mouth, and the open-ended ``eyes``
and ``body`` maps) move by ``progress * blend_factor``; metadata tracks
raw gesture ``progress``.  Leaf kinds are handled as a closed set:

  number      linear blend
  3-vector    per-axis linear blend (``Position3D`` or ``{x, y, z}``)
  bool        discrete switch at progress 0.5
  mapping     recurse key by key
  other       discrete switch at progress 0.5

A field missing on either endpoint is omitted from the result, at every
nesting level.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, TypeVar

from .models import (
    ComponentProperties,
    Expression,
    ExpressionMetadata,
    ExpressionType,
    EyebrowsPosition,
    HeadPosition,
    MouthConfiguration,
    Position3D,
)

_C = TypeVar("_C", EyebrowsPosition, HeadPosition, MouthConfiguration)

MIDPOINT = 0.5

# Sentinel for "no value": distinct from None, which some leaves may carry.
_OMIT = object()


# ---------------------------------------------------------------------------
# Leaf helpers
# ---------------------------------------------------------------------------


def lerp(start: float, end: float, weight: float) -> float:
    return start + (end - start) * weight


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_vector(value: object) -> tuple[float, float, float] | None:
    if isinstance(value, Position3D):
        return (value.x, value.y, value.z)
    if isinstance(value, Mapping) and all(_is_number(value.get(axis)) for axis in ("x", "y", "z")):
        return (value["x"], value["y"], value["z"])
    return None


def _switch(start: Any, end: Any, progress: float) -> Any:
    return start if progress < MIDPOINT else end


def interpolate_value(start: Any, end: Any, progress: float, blend_factor: float) -> Any:
    """Interpolate one leaf or nested mapping.

    Returns the module-level omission sentinel when either side is missing.
    """
    if start is None or end is None:
        return _OMIT

    weight = progress * blend_factor

    if _is_number(start) and _is_number(end):
        return lerp(start, end, weight)

    start_vec = _as_vector(start)
    end_vec = _as_vector(end)
    if start_vec is not None and end_vec is not None:
        x, y, z = (lerp(a, b, weight) for a, b in zip(start_vec, end_vec))
        if isinstance(start, Position3D):
            return Position3D(x, y, z)
        return {"x": x, "y": y, "z": z}

    if isinstance(start, bool) and isinstance(end, bool):
        return _switch(start, end, progress)

    if isinstance(start, Mapping) and isinstance(end, Mapping):
        return interpolate_component(start, end, progress, blend_factor)

    return _switch(start, end, progress)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def interpolate_component(
    start: ComponentProperties,
    end: ComponentProperties,
    progress: float,
    blend_factor: float,
) -> dict[str, Any]:
    """Deep-merge-interpolate two open-ended component maps.

    Walks the union of keys; keys present on only one side are dropped.
    """
    result: dict[str, Any] = {}
    keys = list(start) + [k for k in end if k not in start]
    for key in keys:
        value = interpolate_value(start.get(key), end.get(key), progress, blend_factor)
        if value is not _OMIT:
            result[key] = value
    return result


def _interpolate_fields(start: _C, end: _C, progress: float, blend_factor: float) -> _C:
    values: dict[str, Any] = {}
    for f in fields(start):
        value = interpolate_value(getattr(start, f.name), getattr(end, f.name), progress, blend_factor)
        values[f.name] = None if value is _OMIT else value
    return type(start)(**values)


def interpolate_metadata(
    start: ExpressionMetadata | None,
    end: ExpressionMetadata | None,
    progress: float,
) -> ExpressionMetadata | None:
    """Blend metadata by raw *progress*; the blend factor does not apply here."""
    if start is None and end is None:
        return None
    start = start or ExpressionMetadata()
    end = end or ExpressionMetadata()

    def _blend(a: float | None, b: float | None) -> float | None:
        if a is None or b is None:
            return None
        return lerp(a, b, progress)

    cultural = None
    if start.cultural and end.cultural:
        cultural = _switch(start.cultural, end.cultural, progress)

    return ExpressionMetadata(
        duration=_blend(start.duration, end.duration),
        intensity=_blend(start.intensity, end.intensity),
        priority=_blend(start.priority, end.priority),
        cultural=cultural,
    )


def _interpolate_type(start: Expression, end: Expression, progress: float) -> ExpressionType:
    if progress < MIDPOINT and start.expression_type is not None:
        return start.expression_type
    if end.expression_type is not None:
        return end.expression_type
    return ExpressionType.DEFAULT


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def interpolate_expressions(
    start: Expression,
    end: Expression,
    progress: float,
    blend_factor: float,
) -> Expression:
    """Build the intermediate expression at *progress* between two expressions."""
    eyes = None
    if start.eyes is not None and end.eyes is not None:
        eyes = interpolate_component(start.eyes, end.eyes, progress, blend_factor)

    body = None
    if start.body is not None and end.body is not None:
        body = interpolate_component(start.body, end.body, progress, blend_factor)

    return Expression(
        eyebrows=_interpolate_fields(start.eyebrows, end.eyebrows, progress, blend_factor),
        head=_interpolate_fields(start.head, end.head, progress, blend_factor),
        mouth=_interpolate_fields(start.mouth, end.mouth, progress, blend_factor),
        expression_type=_interpolate_type(start, end, progress),
        eyes=eyes,
        body=body,
        metadata=interpolate_metadata(start.metadata, end.metadata, progress),
    )
