"""Transition endpoint: compute (and optionally validate) a transition."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from lsf_transitions import ContextValidator, TransitionPlanner, TransitionSystem
from lsf_transitions.codec import (
    context_from_dict,
    discourse_from_dict,
    expression_from_dict,
    sequence_to_dict,
    validation_result_to_dict,
)

router = APIRouter()


class TransitionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_expression: dict[str, Any] = Field(alias="from")
    to_expression: dict[str, Any] = Field(alias="to")
    context: dict[str, Any] | None = None
    discourse: dict[str, Any] | None = None
    strict: bool = False


class TransitionResponse(BaseModel):
    sequence: dict[str, Any]
    validation: dict[str, Any] | None = None


@router.post("/transitions", response_model=TransitionResponse)
async def compute_transition(body: TransitionRequest, request: Request) -> TransitionResponse:
    engine = request.app.state.engine
    system = TransitionSystem(engine.transition_rules)

    from_expr = expression_from_dict(body.from_expression, "from")
    to_expr = expression_from_dict(body.to_expression, "to")
    context = context_from_dict(body.context)

    if body.discourse is None:
        sequence = system.compute(from_expr, to_expr, context)
        return TransitionResponse(sequence=sequence_to_dict(sequence))

    planner = TransitionPlanner(system, ContextValidator(engine.discourse), strict=body.strict)
    planned = planner.plan(from_expr, to_expr, context, discourse_from_dict(body.discourse))
    return TransitionResponse(
        sequence=sequence_to_dict(planned.sequence),
        validation=validation_result_to_dict(planned.validation),
    )
