"""LSF transitions SDK -- grammatical expression blending for signing avatars.

Public API re-exports for convenient access::

    from lsf_transitions import compute_transition, validate_transition_context
"""

from ._version import __version__
from .config import DiscourseRules, EngineConfig, load_config, parse_config
from .context_validator import (
    ContextValidator,
    ValidationIssue,
    ValidationResult,
    validate_transition_context,
)
from .discourse import DiscourseContext, Role, SpatialReference, Topic
from .exceptions import (
    ExpressionFormatError,
    LSFTransitionError,
    RuleTableError,
    TransitionValidationError,
)
from .models import (
    NEUTRAL_EXPRESSION,
    Expression,
    ExpressionMetadata,
    ExpressionType,
    EyebrowsPosition,
    HeadPosition,
    MouthConfiguration,
    Position3D,
    TransitionContext,
    TransitionRule,
    TransitionSequence,
    TransitionStep,
    TransitionType,
)
from .planner import AdaptationStrategy, PlannedTransition, TransitionPlanner
from .rules import RuleTable, classify_transition, get_transition_rule
from .transitions import TransitionSystem, compute_transition

__all__ = [
    "__version__",
    # Core
    "classify_transition",
    "get_transition_rule",
    "compute_transition",
    "validate_transition_context",
    "TransitionSystem",
    "ContextValidator",
    "ValidationIssue",
    "ValidationResult",
    # Models
    "Expression",
    "ExpressionMetadata",
    "ExpressionType",
    "EyebrowsPosition",
    "HeadPosition",
    "MouthConfiguration",
    "Position3D",
    "NEUTRAL_EXPRESSION",
    "TransitionContext",
    "TransitionRule",
    "TransitionSequence",
    "TransitionStep",
    "TransitionType",
    # Discourse
    "DiscourseContext",
    "Role",
    "SpatialReference",
    "Topic",
    # Configuration
    "RuleTable",
    "DiscourseRules",
    "EngineConfig",
    "load_config",
    "parse_config",
    # Planning
    "AdaptationStrategy",
    "PlannedTransition",
    "TransitionPlanner",
    # Exceptions
    "LSFTransitionError",
    "RuleTableError",
    "ExpressionFormatError",
    "TransitionValidationError",
]
