"""Definition Validator - Integrity report for a workflow definition"""
from typing import List, Optional, Set, Tuple

from pydantic import BaseModel, Field

from ..domain.models import StateIdentifier, WorkflowDefinition


class DefinitionIssue(BaseModel):
    """Single problem found in a definition"""
    type: str = Field(..., description="Issue code, e.g. INVALID_TRANSITION_TO")
    message: str
    path: Optional[str] = Field(None, description="Location in the definition")


class DefinitionReport(BaseModel):
    """Errors and warnings for a definition"""
    is_valid: bool
    errors: List[DefinitionIssue] = Field(default_factory=list)
    warnings: List[DefinitionIssue] = Field(default_factory=list)


class DefinitionValidator:
    """
    Check a workflow definition for structural problems

    Definitions are never checked when built. This runs on demand (or when
    an engine is created with strict_definitions) and reports:

    Errors: missing states, unknown initial state, state keys that disagree
    with their names, transitions touching undefined states, transitions
    with no source.

    Warnings: duplicate (source, target) pairs, which validation never
    evaluates past the first; states unreachable from the initial state; terminal
    states with outgoing transitions.
    """

    def validate(self, definition: WorkflowDefinition) -> DefinitionReport:
        errors: List[DefinitionIssue] = []
        warnings: List[DefinitionIssue] = []

        state_names = set(definition.states)

        if not state_names:
            errors.append(DefinitionIssue(
                type="NO_STATES",
                message="Workflow must have at least one state",
                path="states"
            ))

        if definition.initial_state not in state_names:
            errors.append(DefinitionIssue(
                type="INVALID_INITIAL_STATE",
                message=f"Initial state {definition.initial_state} not found in states",
                path="initial_state"
            ))

        for key, state in definition.states.items():
            if state.name != key:
                errors.append(DefinitionIssue(
                    type="STATE_NAME_MISMATCH",
                    message=f"State registered as {key} is named {state.name}",
                    path=f"states.{key}.name"
                ))

        seen_edges: Set[Tuple[StateIdentifier, StateIdentifier]] = set()
        for i, transition in enumerate(definition.transitions):
            if not transition.sources:
                errors.append(DefinitionIssue(
                    type="EMPTY_TRANSITION_FROM",
                    message=f"Transition to {transition.to_state} has no source state",
                    path=f"transitions[{i}].from"
                ))

            for source in sorted(transition.sources):
                if source not in state_names:
                    errors.append(DefinitionIssue(
                        type="INVALID_TRANSITION_FROM",
                        message=f"Transition references non-existent from state: {source}",
                        path=f"transitions[{i}].from"
                    ))

                edge = (source, transition.to_state)
                if edge in seen_edges:
                    warnings.append(DefinitionIssue(
                        type="DUPLICATE_TRANSITION",
                        message=f"Transition {source} -> {transition.to_state} is already defined; "
                                f"only the first definition is validated",
                        path=f"transitions[{i}]"
                    ))
                seen_edges.add(edge)

                state = definition.states.get(source)
                if state is not None and state.is_terminal:
                    warnings.append(DefinitionIssue(
                        type="TERMINAL_HAS_OUTGOING",
                        message=f"Terminal state {source} has an outgoing transition to {transition.to_state}",
                        path=f"transitions[{i}].from"
                    ))

            if transition.to_state not in state_names:
                errors.append(DefinitionIssue(
                    type="INVALID_TRANSITION_TO",
                    message=f"Transition references non-existent to state: {transition.to_state}",
                    path=f"transitions[{i}].to"
                ))

        if definition.initial_state in state_names:
            reachable = self.find_reachable_states(definition)
            for name in sorted(state_names - reachable):
                warnings.append(DefinitionIssue(
                    type="UNREACHABLE_STATE",
                    message=f"State {name} is not reachable from {definition.initial_state}",
                    path=f"states.{name}"
                ))

        return DefinitionReport(is_valid=not errors, errors=errors, warnings=warnings)

    def find_reachable_states(self, definition: WorkflowDefinition) -> Set[StateIdentifier]:
        """All states reachable from the initial state, ignoring guards"""
        reachable = {definition.initial_state}
        to_visit = [definition.initial_state]

        while to_visit:
            current = to_visit.pop()
            for transition in definition.outgoing(current):
                if transition.to_state not in reachable:
                    reachable.add(transition.to_state)
                    to_visit.append(transition.to_state)

        return reachable
