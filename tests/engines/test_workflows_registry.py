"""
Tests for engines.workflows — entity-kind dispatch over every
transition table.
"""

import pytest

from hypothesis import given
from hypothesis import strategies as st

from core.policy.rejection import ReasonCode
from engines.customs import PIBStatus
from engines.invoicing import InvoiceStatus
from engines.workflows import (
    WORKFLOWS,
    EntityKind,
    allowed_next_statuses,
    check_transition,
    get_workflow,
    is_terminal,
    is_valid_transition,
)


ALL_STATUSES = [
    (kind, status)
    for kind, workflow in WORKFLOWS.items()
    for status in workflow.status_type
]


class TestIsValidTransition:
    def test_invoice_examples(self):
        assert is_valid_transition("invoice", "draft", "sent")
        assert not is_valid_transition("invoice", "paid", "sent")

    def test_accepts_enum_members(self):
        assert is_valid_transition(EntityKind.PIB, PIBStatus.DRAFT, PIBStatus.SUBMITTED)

    def test_unknown_entity_kind_fails_closed(self):
        assert not is_valid_transition("shipment", "draft", "sent")
        assert not is_valid_transition(None, "draft", "sent")

    def test_status_of_other_kind_fails_closed(self):
        # "sent" is an invoice status, not a PIB status
        assert not is_valid_transition("pib", "draft", "sent")
        assert not is_valid_transition("pib", InvoiceStatus.DRAFT, PIBStatus.SUBMITTED)

    @pytest.mark.parametrize("kind,status", ALL_STATUSES)
    def test_terminal_statuses_have_no_exits(self, kind, status):
        workflow = WORKFLOWS[kind]
        if is_terminal(kind, status):
            assert allowed_next_statuses(kind, status) == frozenset()
            assert all(not is_valid_transition(kind, status, t) for t in workflow.status_type)
        else:
            assert allowed_next_statuses(kind, status)

    @given(st.sampled_from(ALL_STATUSES), st.text(max_size=20))
    def test_arbitrary_target_never_raises(self, kind_and_status, target):
        kind, status = kind_and_status
        result = is_valid_transition(kind, status, target)
        assert result == (target in {s.value for s in allowed_next_statuses(kind, status)})


class TestCheckTransition:
    def test_unknown_entity_kind(self):
        result = check_transition("shipment", "draft", "sent")
        assert not result
        assert result.rejection.code == ReasonCode.UNKNOWN_ENTITY_KIND

    def test_delegates_to_workflow(self):
        result = check_transition("job_order", "closed", "active")
        assert result.rejection.code == ReasonCode.TERMINAL_STATUS
        assert result.rejection.policy_name == "joborder_transition_policy"

    def test_allowed(self):
        assert check_transition("pjo", "draft", "pending_approval").allowed


class TestRegistry:
    def test_every_kind_registered(self):
        assert set(WORKFLOWS) == set(EntityKind)

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            WORKFLOWS[EntityKind.INVOICE] = None

    def test_get_workflow(self):
        assert get_workflow("invoice").name == "Invoice"
        assert get_workflow("unknown") is None

    def test_unknown_kind_helpers(self):
        assert allowed_next_statuses("unknown", "draft") == frozenset()
        assert not is_terminal("unknown", "paid")
