"""Workflow Engine - transition validation and execution"""
from .engine import WorkflowEngine, create_workflow
from .transition_validator import TransitionValidator
from .guard_evaluator import GuardEvaluator, GuardOutcome
from .definition_validator import DefinitionIssue, DefinitionReport, DefinitionValidator

__all__ = [
    "WorkflowEngine",
    "create_workflow",
    "TransitionValidator",
    "GuardEvaluator",
    "GuardOutcome",
    "DefinitionIssue",
    "DefinitionReport",
    "DefinitionValidator",
]
