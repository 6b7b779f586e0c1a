"""Approval state machine tests — single decisions and batches."""

from __future__ import annotations

from datetime import date

import pytest
from pymongo.errors import PyMongoError

from conftest import stored_leave, update_result
from exceptions import DependencyError, ValidationError
from schemas.leave import ApprovalRequest, OutcomeStatus
from schemas.notification import NotificationType
from utils.approval_utils import apply_decisions, approve


def _request(*pairs, username: str = "jdoe") -> ApprovalRequest:
    return ApprovalRequest(
        username=username,
        decisions=[{"leave_id": leave_id, "approved": decision} for leave_id, decision in pairs],
    )


class TestApprove:

    async def test_updates_only_the_matching_element(self, collections):
        outcome = await approve("jdoe", "leave-1", True, approver="boss")

        query, update = collections.leaves.update_one.await_args.args
        assert query == {
            "username": "jdoe",
            "leaves": {"$elemMatch": {"id": "leave-1", "approved": None, "approver": "boss"}},
        }
        assert update["$set"]["leaves.$.approved"] is True
        assert set(update["$set"]) == {"leaves.$.approved", "leaves.$.decided_at"}
        assert outcome.status == OutcomeStatus.UPDATED
        assert (outcome.matched_count, outcome.modified_count) == (1, 1)

    async def test_unknown_id_reports_zero_match(self, collections):
        collections.leaves.update_one.return_value = update_result(0, 0)
        collections.leaves.find_one.return_value = None

        outcome = await approve("jdoe", "missing", False, approver="boss")

        assert outcome.status == OutcomeStatus.NOT_FOUND
        assert outcome.matched_count == 0

    async def test_other_approver_is_forbidden(self, collections):
        collections.leaves.update_one.return_value = update_result(0, 0)
        collections.leaves.find_one.return_value = {
            "leaves": [stored_leave("leave-1", date(2024, 1, 22), date(2024, 1, 22), approver="someone-else")],
        }

        outcome = await approve("jdoe", "leave-1", True, approver="boss")

        assert outcome.status == OutcomeStatus.FORBIDDEN

    async def test_decided_record_is_terminal(self, collections):
        collections.leaves.update_one.return_value = update_result(0, 0)
        collections.leaves.find_one.return_value = {
            "leaves": [stored_leave("leave-1", date(2024, 1, 22), date(2024, 1, 22), approved=False)],
        }

        outcome = await approve("jdoe", "leave-1", True, approver="boss")

        assert outcome.status == OutcomeStatus.ALREADY_DECIDED

    async def test_storage_failure_raises(self, collections):
        collections.leaves.update_one.side_effect = PyMongoError("down")
        with pytest.raises(DependencyError):
            await approve("jdoe", "leave-1", True, approver="boss")


class TestApplyDecisions:

    async def test_every_identifier_is_resolved(self, collections, approver_identity):
        collections.leaves.update_one.side_effect = [
            update_result(1, 1),
            update_result(0, 0),
            update_result(1, 1),
        ]

        outcomes = await apply_decisions(approver_identity, _request(("a", True), ("b", True), ("c", False)))

        assert [outcome.leave_id for outcome in outcomes] == ["a", "b", "c"]
        assert [outcome.status for outcome in outcomes] == [
            OutcomeStatus.UPDATED, OutcomeStatus.NOT_FOUND, OutcomeStatus.UPDATED,
        ]
        filters = [call.args[0]["leaves"]["$elemMatch"]["id"] for call in collections.leaves.update_one.await_args_list]
        assert filters == ["a", "b", "c"]

    async def test_notifies_employee_and_audits_each_update(self, collections, approver_identity):
        collections.leaves.update_one.side_effect = [update_result(1, 1), update_result(1, 1)]

        await apply_decisions(approver_identity, _request(("a", True), ("b", False)))

        types = [call.args[0]["type"] for call in collections.notifications.insert_one.await_args_list]
        assert types == [NotificationType.LEAVE_APPROVED, NotificationType.LEAVE_REJECTED]
        assert all(
            call.args[0]["recipient_id"] == "jdoe"
            for call in collections.notifications.insert_one.await_args_list
        )
        actions = [call.args[0]["action"] for call in collections.activity.insert_one.await_args_list]
        assert actions == ["approved", "rejected"]

    async def test_misses_do_not_notify(self, collections, approver_identity):
        collections.leaves.update_one.return_value = update_result(0, 0)

        await apply_decisions(approver_identity, _request(("a", True)))

        collections.notifications.insert_one.assert_not_awaited()
        collections.activity.insert_one.assert_not_awaited()

    async def test_duplicate_ids_rejected_before_writing(self, collections, approver_identity):
        with pytest.raises(ValidationError):
            await apply_decisions(approver_identity, _request(("a", True), ("a", False)))
        collections.leaves.update_one.assert_not_awaited()

    async def test_storage_failure_midway_reports_every_identifier(self, collections, approver_identity):
        collections.leaves.update_one.side_effect = [
            update_result(1, 1),
            PyMongoError("connection reset"),
            update_result(1, 1),
        ]

        outcomes = await apply_decisions(approver_identity, _request(("a", True), ("b", True), ("c", False)))

        assert [(outcome.leave_id, outcome.status) for outcome in outcomes] == [
            ("a", OutcomeStatus.UPDATED),
            ("b", OutcomeStatus.FAILED),
            ("c", OutcomeStatus.UPDATED),
        ]
        assert outcomes[1].matched_count == 0
        assert collections.leaves.update_one.await_count == 3
        notified = [call.args[0]["related_id"] for call in collections.notifications.insert_one.await_args_list]
        assert notified == ["a", "c"]
