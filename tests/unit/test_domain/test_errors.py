"""Unit tests for the workflow error hierarchy."""

import pytest

from flowgate.domain.errors import (
    GuardFailedError,
    InvalidTransitionError,
    StateNotFoundError,
    WorkflowDefinitionError,
    WorkflowError,
)


@pytest.mark.parametrize("error", [
    InvalidTransitionError("A", "B", "nope"),
    StateNotFoundError("A"),
    GuardFailedError("A", "B"),
    WorkflowDefinitionError("broken"),
])
def test_all_errors_share_the_base(error):
    assert isinstance(error, WorkflowError)


def test_invalid_transition_carries_states_and_reason():
    error = InvalidTransitionError("CREATED", "SUCCESS", "No transition defined from CREATED to SUCCESS")

    assert str(error) == "Invalid transition from CREATED to SUCCESS: No transition defined from CREATED to SUCCESS"
    assert error.to_dict() == {
        "error": {
            "code": "INVALID_TRANSITION",
            "message": str(error),
            "details": {
                "from_state": "CREATED",
                "to_state": "SUCCESS",
                "reason": "No transition defined from CREATED to SUCCESS",
            },
        }
    }


def test_guard_failed_without_reason():
    error = GuardFailedError("A", "B")

    assert error.message == "Guard rejected transition from A to B"
    assert error.error_code == "GUARD_FAILED"


def test_state_not_found_mentions_workflow():
    error = StateNotFoundError("GHOST", workflow="Payments")

    assert error.message == "State GHOST not found in workflow Payments"
    assert error.details == {"state": "GHOST", "workflow": "Payments"}


def test_error_code_override():
    error = WorkflowError("custom", error_code="CUSTOM")

    assert error.to_dict()["error"]["code"] == "CUSTOM"
    assert WorkflowError.error_code == "WORKFLOW_ERROR"
