"""Rule table endpoint: expose the active blending rules."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class RuleResponse(BaseModel):
    min_duration: float
    requires_reset: bool
    blend_factor: float


@router.get("/rules", response_model=dict[str, RuleResponse])
async def list_rules(request: Request) -> dict[str, RuleResponse]:
    table = request.app.state.engine.transition_rules
    return {
        transition_type.value: RuleResponse(
            min_duration=rule.min_duration,
            requires_reset=rule.requires_reset,
            blend_factor=rule.blend_factor,
        )
        for transition_type, rule in table.items()
    }
