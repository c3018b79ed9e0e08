"""Shared test fixtures for the lsf_transitions test suite."""

from __future__ import annotations

import pytest

from lsf_transitions.models import (
    Expression,
    ExpressionType,
    EyebrowsPosition,
    HeadPosition,
    MouthConfiguration,
    TransitionContext,
)

# ---------------------------------------------------------------------------
# Sample expressions
# ---------------------------------------------------------------------------

ASSERTION_EXPRESSION = Expression(
    eyebrows=EyebrowsPosition(raised=0.0),
    head=HeadPosition(tilt=0.0),
    mouth=MouthConfiguration(openness=0.0),
    expression_type=ExpressionType.ASSERTION,
)

NEGATION_EXPRESSION = Expression(
    eyebrows=EyebrowsPosition(raised=1.0),
    head=HeadPosition(tilt=1.0),
    mouth=MouthConfiguration(openness=1.0),
    expression_type=ExpressionType.NEGATION,
)

QUESTION_EXPRESSION = Expression(
    eyebrows=EyebrowsPosition(raised=0.8, furrowed=0.1, intensity=0.7),
    head=HeadPosition(tilt=0.2, nod=0.0, intensity=0.5),
    mouth=MouthConfiguration(openness=0.3, tensed=False),
    expression_type=ExpressionType.QUESTION,
)

EMPHASIS_EXPRESSION = Expression(
    eyebrows=EyebrowsPosition(raised=0.6, furrowed=0.4, intensity=0.9),
    head=HeadPosition(tilt=0.0, nod=0.6, intensity=0.8),
    mouth=MouthConfiguration(openness=0.5, tensed=True),
    expression_type=ExpressionType.EMPHASIS,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def assertion_expression() -> Expression:
    return ASSERTION_EXPRESSION


@pytest.fixture()
def negation_expression() -> Expression:
    return NEGATION_EXPRESSION


@pytest.fixture()
def question_expression() -> Expression:
    return QUESTION_EXPRESSION


@pytest.fixture()
def emphasis_expression() -> Expression:
    return EMPHASIS_EXPRESSION


@pytest.fixture()
def normal_context() -> TransitionContext:
    return TransitionContext(speed="normal", importance="normal")
