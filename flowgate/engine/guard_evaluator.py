"""Guard Evaluator - Invoke transition guards and normalize their outcomes"""
import inspect
from collections.abc import Mapping
from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from ..domain.models import TransitionContext, ValidationResult
from ..domain.errors import GuardFailedError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GuardOutcome(NamedTuple):
    """Normalized result of one guard call"""
    passed: bool
    reason: Optional[str] = None


class GuardEvaluator:
    """
    Evaluate transition guards

    A guard may return bool, a ValidationResult, a mapping shaped like one,
    or an awaitable of any of these. Only True or an allowed result passes.
    Guards run one at a time in declaration order; exceptions raised by a
    guard propagate to the caller untouched.
    """

    async def evaluate(
        self,
        guard: Callable[..., Any],
        transition_context: TransitionContext
    ) -> GuardOutcome:
        """
        Evaluate a single guard

        Args:
            guard: Guard callable
            transition_context: Context for this transition attempt

        Returns:
            GuardOutcome with the pass flag and optional rejection reason
        """
        result = guard(transition_context)
        if inspect.isawaitable(result):
            result = await result
        return self._normalize(result, transition_context)

    async def evaluate_all(
        self,
        guards: Sequence[Callable[..., Any]],
        transition_context: TransitionContext
    ) -> List[GuardOutcome]:
        """Evaluate every guard in order, without stopping at the first failure"""
        outcomes = []
        for guard in guards:
            outcomes.append(await self.evaluate(guard, transition_context))
        return outcomes

    async def evaluate_until_failure(
        self,
        guards: Sequence[Callable[..., Any]],
        transition_context: TransitionContext
    ) -> None:
        """
        Evaluate guards in order and stop at the first rejection

        Raises:
            GuardFailedError: On the first guard that does not pass
        """
        for guard in guards:
            outcome = await self.evaluate(guard, transition_context)
            if not outcome.passed:
                raise GuardFailedError(
                    transition_context.from_state,
                    transition_context.to_state,
                    outcome.reason
                )

    def _normalize(self, result: Any, transition_context: TransitionContext) -> GuardOutcome:
        """Map a raw guard return value onto a GuardOutcome"""
        if result is True:
            return GuardOutcome(True)

        if isinstance(result, ValidationResult):
            if result.allowed:
                return GuardOutcome(True)
            return GuardOutcome(False, result.explanation)

        if isinstance(result, Mapping):
            # Read leniently: extra keys are ignored and a missing "allowed" fails
            if result.get("allowed") is True:
                return GuardOutcome(True)
            return GuardOutcome(False, self._mapping_reason(result))

        if result is not False:
            logger.debug(
                f"Guard returned unsupported value {result!r}, treating as failure",
                extra={"from_state": transition_context.from_state, "to_state": transition_context.to_state}
            )
        return GuardOutcome(False)

    def _mapping_reason(self, result: Mapping) -> Optional[str]:
        reason = result.get("reason")
        if isinstance(reason, str) and reason:
            return reason
        errors = result.get("errors")
        if isinstance(errors, (list, tuple)) and errors:
            return ", ".join(str(e) for e in errors)
        return None
