"""Domain Models - Pydantic schemas for workflow definitions and results"""
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


StateIdentifier = str


# ============================================================================
# Transition Context
# ============================================================================

class TransitionContext(BaseModel):
    """Context handed to every guard and hook of a single transition attempt"""
    model_config = ConfigDict(frozen=True)

    from_state: StateIdentifier = Field(..., description="Source state")
    to_state: StateIdentifier = Field(..., description="Target state")
    context: Any = Field(None, description="Caller-owned business data, passed by reference")


# A guard returns bool, a ValidationResult (or a dict shaped like one), or an awaitable of either.
Guard = Callable[[TransitionContext], Any]
# Return value of an action is ignored; it may be a coroutine.
Action = Callable[[TransitionContext], Union[None, Awaitable[None]]]


# ============================================================================
# State & Transition Definitions
# ============================================================================

class StateDefinition(BaseModel):
    """State definition in workflow"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: StateIdentifier = Field(..., description="State name, must equal its key in the states mapping")
    description: Optional[str] = None
    is_terminal: bool = Field(default=False, description="Advisory only, not enforced by the engine")
    on_enter: Optional[Callable[..., Any]] = Field(None, description="Action run after entering this state")
    on_leave: Optional[Callable[..., Any]] = Field(None, description="Action run before leaving this state")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Custom metadata")


class TransitionDefinition(BaseModel):
    """Transition definition in workflow"""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    from_state: Union[StateIdentifier, Tuple[StateIdentifier, ...]] = Field(
        ..., alias="from", description="Source state or states"
    )
    to_state: StateIdentifier = Field(..., alias="to", description="Target state")
    guards: Tuple[Callable[..., Any], ...] = Field(
        default_factory=tuple, description="Guards evaluated in declaration order"
    )
    on_transition: Optional[Callable[..., Any]] = Field(None, description="Action run for this transition")
    label: Optional[str] = Field(None, description="Human-readable label, e.g. for buttons")

    @field_validator("from_state", mode="before")
    @classmethod
    def _sources_as_tuple(cls, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return tuple(sorted(value))
        return value

    @property
    def sources(self) -> FrozenSet[StateIdentifier]:
        """Source states as a set (a single source is a singleton)"""
        if isinstance(self.from_state, str):
            return frozenset((self.from_state,))
        return frozenset(self.from_state)

    def matches(self, from_state: StateIdentifier, to_state: Optional[StateIdentifier] = None) -> bool:
        """Check whether this transition leaves from_state (and lands on to_state, if given)"""
        if from_state not in self.sources:
            return False
        return to_state is None or self.to_state == to_state


# ============================================================================
# Validation Result
# ============================================================================

class ValidationResult(BaseModel):
    """
    Outcome of a transition validation (also accepted as a guard return value)

    The model only rejects matched_transition on a denied result, since a
    guard may return allowed=True with no transition. Results built by the
    validator go through allow()/deny(), so there matched_transition is set
    if and only if allowed.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed: bool = Field(..., description="Whether the transition is allowed")
    reason: Optional[str] = Field(None, description="Reason for rejection")
    errors: Optional[List[str]] = Field(None, description="Every guard failure message of the attempt")
    matched_transition: Optional[TransitionDefinition] = Field(
        None, description="Winning transition, set only when allowed"
    )

    @model_validator(mode="after")
    def _matched_only_when_allowed(self) -> "ValidationResult":
        if self.matched_transition is not None and not self.allowed:
            raise ValueError("matched_transition can only be set on an allowed result")
        return self

    @classmethod
    def allow(cls, transition: TransitionDefinition) -> "ValidationResult":
        return cls(allowed=True, matched_transition=transition)

    @classmethod
    def deny(cls, reason: str, errors: Optional[List[str]] = None) -> "ValidationResult":
        return cls(allowed=False, reason=reason, errors=errors)

    @property
    def explanation(self) -> Optional[str]:
        """Best available explanation: reason, falling back to the joined errors"""
        if self.reason:
            return self.reason
        if self.errors:
            return ", ".join(self.errors)
        return None


# ============================================================================
# Workflow Definition
# ============================================================================

class WorkflowDefinition(BaseModel):
    """Complete workflow definition - immutable once built"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Workflow name")
    initial_state: StateIdentifier = Field(..., description="State new instances start in")
    states: Dict[StateIdentifier, StateDefinition] = Field(default_factory=dict)
    transitions: Tuple[TransitionDefinition, ...] = Field(default_factory=tuple)

    def get_state(self, name: StateIdentifier) -> Optional[StateDefinition]:
        """Find state definition by name"""
        return self.states.get(name)

    def outgoing(self, from_state: StateIdentifier) -> List[TransitionDefinition]:
        """Transitions leaving from_state, in declaration order"""
        return [t for t in self.transitions if t.matches(from_state)]
