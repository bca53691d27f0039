"""
Module: coverage.remediation

Purpose:
    Interface for the two remediation actions an administrative view offers
    per backlog row: top up a criterion with more questions, or regenerate
    its questions. Both are asynchronous remote jobs owned by an external
    service; the engine never triggers them itself.

Key Classes:
    - RemediationAction: TOP_UP / REGENERATE
    - RemediationOutcome: success flag and human-readable message
    - CoverageRemediator: Protocol the external service implements

Key Functions:
    - remediate(): Dispatch an action and turn failures into an outcome
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

__all__ = [
    "CoverageRemediator",
    "RemediationAction",
    "RemediationOutcome",
    "remediate",
]


class RemediationAction(str, Enum):
    TOP_UP = "topup"
    REGENERATE = "regenerate"

    @property
    def failure_message(self) -> str:
        if self is RemediationAction.TOP_UP:
            return "Error topping up questions"
        return "Error regenerating questions"


@dataclass(frozen=True)
class RemediationOutcome:
    success: bool
    message: str


@runtime_checkable
class CoverageRemediator(Protocol):
    """
    External service that adds or replaces questions for a criterion.

    On success, the next coverage report is expected to show a higher
    current_count for the criterion.
    """

    async def top_up(self, criterion_id: str) -> RemediationOutcome:
        ...

    async def regenerate(self, criterion_id: str) -> RemediationOutcome:
        ...


async def remediate(
    remediator: CoverageRemediator,
    action: RemediationAction,
    criterion_id: str,
) -> RemediationOutcome:
    """
    Run a remediation action for a criterion.

    Exceptions raised by the remediator are logged and reported as a
    failed outcome with a human-readable message.
    """
    if not criterion_id:
        return RemediationOutcome(success=False, message="criterionId is required")

    try:
        if action is RemediationAction.TOP_UP:
            outcome = await remediator.top_up(criterion_id)
        else:
            outcome = await remediator.regenerate(criterion_id)
    except Exception as exc:
        logger.exception(f"{action.value} failed for {criterion_id}: {exc}")
        return RemediationOutcome(success=False, message=action.failure_message)

    if outcome.success:
        logger.info(f"{action.value} for {criterion_id}: {outcome.message}")
    else:
        logger.warning(f"{action.value} for {criterion_id} failed: {outcome.message}")
    return outcome
