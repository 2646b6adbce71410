"""
Pytest Configuration and Fixtures

This file contains shared fixtures and configuration for all tests.
"""

import asyncio

import pytest

from flowgate.config.settings import Settings
from flowgate.domain.models import StateDefinition, TransitionDefinition, WorkflowDefinition
from flowgate.engine import create_workflow


CREATED = "CREATED"
PROCESSING = "PROCESSING"
SUCCESS = "SUCCESS"
REJECTED = "REJECTED"
REFUNDED = "REFUNDED"


async def not_duplicate(ctx):
    """Simulates an async lookup before deciding"""
    await asyncio.sleep(0.01)
    if ctx.context.get("is_duplicate"):
        return {"allowed": False, "reason": "Duplicate payment detected"}
    return True


def paid_in_full(ctx):
    paid = ctx.context.get("paid_amount")
    if paid is not None and paid < ctx.context["amount"]:
        return {"allowed": False, "reason": "Insufficient payment amount"}
    return True


@pytest.fixture
def settings():
    """Settings isolated from the environment"""
    return Settings(_env_file=None)


@pytest.fixture
def payment_definition():
    """Payment lifecycle: CREATED -> PROCESSING -> SUCCESS/REJECTED -> REFUNDED"""
    return WorkflowDefinition(
        name="PaymentWorkflow",
        initial_state=CREATED,
        states={
            CREATED: StateDefinition(name=CREATED),
            PROCESSING: StateDefinition(name=PROCESSING),
            SUCCESS: StateDefinition(name=SUCCESS, is_terminal=True),
            REJECTED: StateDefinition(name=REJECTED, is_terminal=True),
            REFUNDED: StateDefinition(name=REFUNDED, is_terminal=True),
        },
        transitions=[
            TransitionDefinition(from_state=CREATED, to_state=PROCESSING, label="Start Processing"),
            TransitionDefinition(
                from_state=PROCESSING,
                to_state=SUCCESS,
                label="Payment Approved",
                guards=[not_duplicate, paid_in_full],
            ),
            TransitionDefinition(from_state=PROCESSING, to_state=REJECTED, label="Payment Declined"),
            TransitionDefinition(from_state=SUCCESS, to_state=REFUNDED, label="Refund Payment"),
        ],
    )


@pytest.fixture
def payment_engine(payment_definition, settings):
    return create_workflow(payment_definition, settings)


@pytest.fixture
def order():
    """A fully paid, non-duplicate order"""
    return {"order_id": "123", "amount": 100, "paid_amount": 100, "is_duplicate": False}
