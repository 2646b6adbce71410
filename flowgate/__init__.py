"""flowgate - declarative state transitions with guards and lifecycle hooks"""
from .domain.models import (
    Action,
    Guard,
    StateDefinition,
    StateIdentifier,
    TransitionContext,
    TransitionDefinition,
    ValidationResult,
    WorkflowDefinition,
)
from .domain.errors import (
    GuardFailedError,
    InvalidTransitionError,
    StateNotFoundError,
    WorkflowDefinitionError,
    WorkflowError,
)
from .engine import (
    DefinitionReport,
    TransitionValidator,
    WorkflowEngine,
    create_workflow,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Guard",
    "StateDefinition",
    "StateIdentifier",
    "TransitionContext",
    "TransitionDefinition",
    "ValidationResult",
    "WorkflowDefinition",
    "GuardFailedError",
    "InvalidTransitionError",
    "StateNotFoundError",
    "WorkflowDefinitionError",
    "WorkflowError",
    "DefinitionReport",
    "TransitionValidator",
    "WorkflowEngine",
    "create_workflow",
]
