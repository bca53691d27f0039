"""
Unit tests for the remediation interface.
"""

import asyncio

from psras_toolkit.coverage.remediation import (
    CoverageRemediator,
    RemediationAction,
    RemediationOutcome,
    remediate,
)


class _RecordingRemediator:
    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    async def top_up(self, criterion_id):
        self.calls.append(("topup", criterion_id))
        if self.fail:
            raise RuntimeError("job queue down")
        return RemediationOutcome(success=True, message=f"Queued 5 questions for {criterion_id}")

    async def regenerate(self, criterion_id):
        self.calls.append(("regenerate", criterion_id))
        return RemediationOutcome(success=False, message="Generation quota exceeded")


class TestRemediate:
    """Tests for remediate."""

    def test_protocol_is_satisfied(self):
        """A class with both coroutines is a CoverageRemediator."""
        assert isinstance(_RecordingRemediator(), CoverageRemediator)

    def test_top_up_dispatch(self):
        """TOP_UP calls top_up and returns its outcome."""
        remediator = _RecordingRemediator()
        outcome = asyncio.run(remediate(remediator, RemediationAction.TOP_UP, "C-1"))
        assert outcome.success
        assert remediator.calls == [("topup", "C-1")]

    def test_regenerate_failure_outcome_passed_through(self):
        """A failed outcome is returned as-is."""
        remediator = _RecordingRemediator()
        outcome = asyncio.run(remediate(remediator, RemediationAction.REGENERATE, "C-2"))
        assert outcome == RemediationOutcome(success=False, message="Generation quota exceeded")
        assert remediator.calls == [("regenerate", "C-2")]

    def test_exception_becomes_failure(self):
        """Raised errors turn into a human-readable failure."""
        outcome = asyncio.run(remediate(_RecordingRemediator(fail=True), RemediationAction.TOP_UP, "C-1"))
        assert not outcome.success
        assert outcome.message == "Error topping up questions"

    def test_missing_criterion_id(self):
        """An empty id fails without calling the service."""
        remediator = _RecordingRemediator()
        outcome = asyncio.run(remediate(remediator, RemediationAction.TOP_UP, ""))
        assert outcome == RemediationOutcome(success=False, message="criterionId is required")
        assert remediator.calls == []

    def test_action_values(self):
        """Action values match the remote job names."""
        assert RemediationAction.TOP_UP.value == "topup"
        assert RemediationAction.REGENERATE.failure_message == "Error regenerating questions"
