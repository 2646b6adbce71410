"""
Workflow Engine - Stateless orchestrator over a workflow definition

The engine holds a definition and nothing else. The current state of any
workflow instance is tracked by the caller and passed on every call, so one
engine can serve any number of in-flight instances concurrently.

Responsibilities:
    - Answer "may this instance move from A to B under this context?"
    - Execute an accepted move with its lifecycle hooks
    - Enumerate the moves currently open from a state

Hook order for an accepted transition is always:

    source.on_leave -> transition.on_transition -> target.on_enter

each awaited before the next starts. A hook that raises aborts the remaining
hooks and propagates; nothing is rolled back.
"""

import inspect
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..config.settings import Settings, settings as default_settings
from ..domain.models import (
    StateDefinition, StateIdentifier, TransitionContext, TransitionDefinition,
    ValidationResult, WorkflowDefinition
)
from ..domain.errors import InvalidTransitionError, StateNotFoundError, WorkflowDefinitionError
from .transition_validator import TransitionValidator
from .definition_validator import DefinitionReport, DefinitionValidator
from ..utils.logger import get_context_logger

TContext = TypeVar("TContext")


class WorkflowEngine(Generic[TContext]):
    """
    The Workflow Engine - validate, assert and execute transitions

    Guard evaluation lives in TransitionValidator; the engine only adds
    assertion semantics and hook execution on top of it.
    """

    def __init__(self, definition: WorkflowDefinition, settings: Optional[Settings] = None):
        self.definition = definition
        self.settings = settings or default_settings
        self.validator = TransitionValidator(definition, self.settings)
        self.definition_validator = DefinitionValidator()
        self.logger = get_context_logger(__name__, workflow=definition.name)

        if self.settings.strict_definitions:
            report = self.check_definition()
            if not report.is_valid:
                raise WorkflowDefinitionError(
                    f"Workflow {definition.name} failed the integrity check",
                    errors=[issue.model_dump() for issue in report.errors]
                )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_initial_state(self) -> StateIdentifier:
        """Initial state of the workflow, verbatim from the definition"""
        return self.definition.initial_state

    def get_definition(self) -> WorkflowDefinition:
        """The stored definition (not a copy)"""
        return self.definition

    def get_state(self, name: StateIdentifier) -> StateDefinition:
        """
        Look up a state definition

        Raises:
            StateNotFoundError: If the state is not in the definition
        """
        state = self.definition.get_state(name)
        if state is None:
            raise StateNotFoundError(name, workflow=self.definition.name)
        return state

    def is_terminal(self, name: StateIdentifier) -> bool:
        """Advisory terminal flag of a state"""
        return self.get_state(name).is_terminal

    def check_definition(self) -> DefinitionReport:
        """Run the integrity check over the stored definition"""
        return self.definition_validator.validate(self.definition)

    # =========================================================================
    # Validation
    # =========================================================================

    async def validate(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: TContext
    ) -> ValidationResult:
        """Validate a transition without side effects"""
        return await self.validator.validate_transition(from_state, to_state, context)

    async def assert_transition(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: TContext
    ) -> ValidationResult:
        """
        Validate a transition and raise if it is not allowed

        Raises:
            InvalidTransitionError: If validation rejects the move
        """
        result = await self.validate(from_state, to_state, context)
        if not result.allowed:
            self.logger.debug(
                f"Transition rejected: {from_state} -> {to_state}",
                extra={"from_state": from_state, "to_state": to_state, "errors": result.errors}
            )
            raise InvalidTransitionError(from_state, to_state, result.explanation)
        return result

    async def assert_guards(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: TContext
    ) -> None:
        """
        Raise on the first guard rejection instead of collecting all of them

        Raises:
            InvalidTransitionError: If no transition is defined for the move
            GuardFailedError: On the first guard that does not pass
        """
        candidates = self.validator.find_candidates(from_state, to_state)
        if not candidates:
            raise InvalidTransitionError(
                from_state, to_state, f"No transition defined from {from_state} to {to_state}"
            )
        transition_context = TransitionContext(from_state=from_state, to_state=to_state, context=context)
        await self.validator.guard_evaluator.evaluate_until_failure(candidates[0].guards, transition_context)

    async def get_allowed_transitions(
        self,
        from_state: StateIdentifier,
        context: TContext
    ) -> List[StateIdentifier]:
        """Target states currently open from from_state"""
        return await self.validator.get_allowed_transitions(from_state, context)

    async def get_available_transitions(
        self,
        from_state: StateIdentifier,
        context: TContext
    ) -> List[TransitionDefinition]:
        """Transition definitions currently open from from_state (labels included)"""
        return await self.validator.get_available_transitions(from_state, context)

    # =========================================================================
    # Execution
    # =========================================================================

    async def transition(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: TContext
    ) -> ValidationResult:
        """
        Execute a transition

        1. Validate the transition (always fresh)
        2. Run on_leave of the source state
        3. Run on_transition of the matched transition
        4. Run on_enter of the target state

        Returns:
            The ValidationResult that authorized the move

        Raises:
            InvalidTransitionError: If validation fails
            StateNotFoundError: If source or target is missing from the states mapping
        """
        result = await self.assert_transition(from_state, to_state, context)

        source = self.get_state(from_state)
        target = self.get_state(to_state)
        transition_context = TransitionContext(from_state=from_state, to_state=to_state, context=context)

        await self._run_hook("on_leave", source.on_leave, transition_context)
        await self._run_hook("on_transition", result.matched_transition.on_transition, transition_context)
        await self._run_hook("on_enter", target.on_enter, transition_context)

        self.logger.info(
            f"Transition applied: {from_state} -> {to_state}",
            extra={"from_state": from_state, "to_state": to_state}
        )
        return result

    async def _run_hook(
        self,
        hook_name: str,
        hook: Optional[Callable[..., Any]],
        transition_context: TransitionContext
    ) -> None:
        if hook is None:
            return
        try:
            outcome = hook(transition_context)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            self.logger.error(
                f"Hook {hook_name} failed: {transition_context.from_state} -> {transition_context.to_state}",
                extra={
                    "hook": hook_name,
                    "from_state": transition_context.from_state,
                    "to_state": transition_context.to_state
                },
                exc_info=True
            )
            raise


def create_workflow(
    definition: WorkflowDefinition,
    settings: Optional[Settings] = None
) -> WorkflowEngine[Any]:
    """Create a workflow engine for a definition"""
    return WorkflowEngine(definition, settings)
