"""Transition Validator - Decide whether a move between two states is legal"""
from typing import Any, Dict, List, Optional

from ..config.settings import Settings, settings as default_settings
from ..domain.models import (
    StateIdentifier, TransitionContext, TransitionDefinition, ValidationResult, WorkflowDefinition
)
from .guard_evaluator import GuardEvaluator
from ..utils.logger import get_logger

logger = get_logger(__name__)

GUARDS_FAILED = "Guards failed"


class TransitionValidator:
    """
    Validate transitions against a workflow definition

    Given source S, target T and a context:
    1. Find candidate transitions where S is a source and T is the target
    2. If none -> not allowed, "No transition defined"
    3. Run every guard of the first candidate (no short-circuit)
    4. Allowed only when all of them pass

    validate_transition only ever evaluates the first declared candidate
    for a (source, target) pair. Enumeration evaluates every candidate, so
    a later passing duplicate still opens its target there. Business
    rejections come back as ValidationResult, guard exceptions propagate.
    """

    def __init__(self, definition: WorkflowDefinition, settings: Optional[Settings] = None):
        self.definition = definition
        self.settings = settings or default_settings
        self.guard_evaluator = GuardEvaluator()

    def find_candidates(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier
    ) -> List[TransitionDefinition]:
        """Candidate transitions for a move, in declaration order"""
        return [t for t in self.definition.transitions if t.matches(from_state, to_state)]

    async def validate_transition(
        self,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: Any
    ) -> ValidationResult:
        """
        Validate a move from from_state to to_state

        Args:
            from_state: Current state, supplied by the caller
            to_state: Requested state
            context: Caller business data handed to the guards

        Returns:
            ValidationResult; matched_transition is set only when allowed
        """
        candidates = self.find_candidates(from_state, to_state)
        if not candidates:
            logger.debug(
                f"No transition defined: {from_state} -> {to_state}",
                extra={"workflow": self.definition.name, "from_state": from_state, "to_state": to_state}
            )
            return ValidationResult.deny(f"No transition defined from {from_state} to {to_state}")

        return await self._evaluate_candidate(candidates[0], from_state, to_state, context)

    async def get_available_transitions(
        self,
        from_state: StateIdentifier,
        context: Any
    ) -> List[TransitionDefinition]:
        """
        Transitions out of from_state whose guards all pass

        Every candidate out of from_state is evaluated in declaration order.
        A target is listed once, through its first passing definition, even
        when an earlier definition for the same target failed.
        """
        available: Dict[StateIdentifier, TransitionDefinition] = {}
        for transition in self.definition.outgoing(from_state):
            result = await self._evaluate_candidate(transition, from_state, transition.to_state, context)
            if result.allowed and transition.to_state not in available:
                available[transition.to_state] = transition
        return list(available.values())

    async def get_allowed_transitions(
        self,
        from_state: StateIdentifier,
        context: Any
    ) -> List[StateIdentifier]:
        """Target states reachable from from_state under this context"""
        available = await self.get_available_transitions(from_state, context)
        return [t.to_state for t in available]

    async def _evaluate_candidate(
        self,
        transition: TransitionDefinition,
        from_state: StateIdentifier,
        to_state: StateIdentifier,
        context: Any
    ) -> ValidationResult:
        """Run every guard of one candidate and build the result"""
        self._flag_dangling_references(transition, from_state, to_state)

        transition_context = TransitionContext(from_state=from_state, to_state=to_state, context=context)
        outcomes = await self.guard_evaluator.evaluate_all(transition.guards, transition_context)

        if all(outcome.passed for outcome in outcomes):
            return ValidationResult.allow(transition)

        errors = [outcome.reason for outcome in outcomes if not outcome.passed and outcome.reason]
        logger.debug(
            f"Guards failed: {from_state} -> {to_state}",
            extra={
                "workflow": self.definition.name,
                "from_state": from_state,
                "to_state": to_state,
                "errors": errors
            }
        )
        return ValidationResult.deny(GUARDS_FAILED, errors)

    def _flag_dangling_references(
        self,
        transition: TransitionDefinition,
        from_state: StateIdentifier,
        to_state: StateIdentifier
    ) -> None:
        if not self.settings.warn_dangling_references:
            return
        missing = [s for s in (from_state, to_state) if s not in self.definition.states]
        if missing:
            logger.warning(
                f"Transition {from_state} -> {to_state} references undefined state(s): {', '.join(missing)}",
                extra={"workflow": self.definition.name, "from_state": from_state, "to_state": to_state}
            )
