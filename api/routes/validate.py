"""Validation endpoint: check a transition sequence against a discourse context."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from lsf_transitions import ContextValidator
from lsf_transitions.codec import discourse_from_dict, sequence_from_dict

router = APIRouter()


class ValidateRequest(BaseModel):
    sequence: dict[str, Any]
    discourse: dict[str, Any] | None = None


class ValidationIssueResponse(BaseModel):
    type: str
    severity: str
    message: str
    step: int
    details: dict[str, Any] = {}


class ValidateResponse(BaseModel):
    is_valid: bool
    issues: list[ValidationIssueResponse]
    recommendations: list[str]


@router.post("/validate", response_model=ValidateResponse)
async def validate_sequence(body: ValidateRequest, request: Request) -> ValidateResponse:
    validator = ContextValidator(request.app.state.engine.discourse)
    result = validator.validate(sequence_from_dict(body.sequence), discourse_from_dict(body.discourse))

    issues = [
        ValidationIssueResponse(
            type=issue.type,
            severity=issue.severity,
            message=issue.message,
            step=issue.step,
            details=issue.details,
        )
        for issue in result.issues
    ]

    return ValidateResponse(
        is_valid=result.is_valid,
        issues=issues,
        recommendations=result.recommendations,
    )
