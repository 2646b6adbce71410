"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, List, Optional


class WorkflowError(Exception):
    """Base workflow error - all errors extend this"""

    error_code: str = "WORKFLOW_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a serializable dict"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class InvalidTransitionError(WorkflowError):
    """Transition rejected by validation"""
    error_code = "INVALID_TRANSITION"

    def __init__(self, from_state: str, to_state: str, reason: Optional[str] = None):
        message = f"Invalid transition from {from_state} to {to_state}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"from_state": from_state, "to_state": to_state, "reason": reason}
        )
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason


class StateNotFoundError(WorkflowError):
    """State name not present in the definition"""
    error_code = "STATE_NOT_FOUND"

    def __init__(self, state: str, workflow: Optional[str] = None):
        message = f"State {state} not found"
        if workflow:
            message = f"{message} in workflow {workflow}"
        super().__init__(message, details={"state": state, "workflow": workflow})
        self.state = state


class GuardFailedError(WorkflowError):
    """A guard rejected the transition"""
    error_code = "GUARD_FAILED"

    def __init__(self, from_state: str, to_state: str, reason: Optional[str] = None):
        message = f"Guard rejected transition from {from_state} to {to_state}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"from_state": from_state, "to_state": to_state, "reason": reason}
        )
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason


class WorkflowDefinitionError(WorkflowError):
    """Workflow definition failed the integrity check"""
    error_code = "WORKFLOW_DEFINITION_ERROR"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, details={"errors": errors or []})
        self.errors = errors or []
