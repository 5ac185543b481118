"""Tests for de-escalation audit trail models."""

import pytest

from common.deescalation import (
    AuditRecord,
    DecisionStatus,
    DeEscalationStats,
    GroupTally,
    classify_decision,
    ward_key,
)


class TestEnums:
    """Test enum definitions."""

    def test_decision_status_values(self):
        assert DecisionStatus.APPROVED.value == "approved"
        assert DecisionStatus.DECLINED.value == "declined"
        assert DecisionStatus.PENDING.value == "pending"

    def test_display_names(self):
        assert DecisionStatus.APPROVED.display_name() == "Approved"
        assert DecisionStatus.DECLINED.display_name() == "Declined"
        assert DecisionStatus.PENDING.display_name() == "Pending"


class TestClassifyDecision:
    """Decision cells are classified case-insensitively into three buckets."""

    @pytest.mark.parametrize("value", ["approve", "Approve", "APPROVE", "aPpRoVe"])
    def test_approve_any_case(self, value):
        assert classify_decision(value) == DecisionStatus.APPROVED

    @pytest.mark.parametrize("value", ["decline", "Decline", "DECLINE"])
    def test_decline_any_case(self, value):
        assert classify_decision(value) == DecisionStatus.DECLINED

    @pytest.mark.parametrize("value", [None, "", "Maybe", "approved", " approve", 1, True])
    def test_everything_else_is_pending(self, value):
        assert classify_decision(value) == DecisionStatus.PENDING


class TestWardKey:
    """Ward is the first three characters of the patient ID."""

    def test_prefix(self):
        assert ward_key("ICU-07") == "ICU"
        assert ward_key("WD1-22") == "WD1"

    def test_short_id_used_whole(self):
        assert ward_key("AB") == "AB"
        assert ward_key("X") == "X"

    def test_exactly_three(self):
        assert ward_key("NIC") == "NIC"

    def test_missing_is_unknown(self):
        assert ward_key(None) == "Unknown"
        assert ward_key("") == "Unknown"

    def test_numeric_id(self):
        assert ward_key(12345) == "123"


class TestAuditRecord:
    """Tests for AuditRecord parsing."""

    def test_from_row(self):
        record = AuditRecord.from_row({
            "patientId": "ICU-07",
            "patientName": "Alice Smith",
            "currentAntibiotic": "Vancomycin",
            "recommendation": "Switch to cefazolin",
            "clinicianDecision": "Approve",
            "aiConfidenceScore": 0.92,
            "id": 2,
        })

        assert record.patient_id == "ICU-07"
        assert record.patient_name == "Alice Smith"
        assert record.current_antibiotic == "Vancomycin"
        assert record.recommendation == "Switch to cefazolin"
        assert record.decision == DecisionStatus.APPROVED
        assert record.ward == "ICU"
        assert record.confidence_pct == 92
        assert record.raw["id"] == 2

    def test_from_empty_row(self):
        record = AuditRecord.from_row({})

        assert record.patient_id is None
        assert record.decision == DecisionStatus.PENDING
        assert record.antibiotic_key == "Unknown"
        assert record.ward == "Unknown"
        assert record.decision_label == "Pending"
        assert record.confidence_pct == 0

    def test_decision_label_keeps_original_text(self):
        record = AuditRecord.from_row({"clinicianDecision": "approve"})
        assert record.decision_label == "approve"

    def test_confidence_from_string(self):
        record = AuditRecord.from_row({"aiConfidenceScore": "0.75"})
        assert record.ai_confidence_score == 0.75
        assert record.confidence_pct == 75

    def test_confidence_rounds_half_up(self):
        record = AuditRecord.from_row({"aiConfidenceScore": 0.125})
        assert record.confidence_pct == 13

    @pytest.mark.parametrize("value", ["high", "", None, float("nan"), True])
    def test_unreadable_confidence_is_missing(self, value):
        record = AuditRecord.from_row({"aiConfidenceScore": value})
        assert record.ai_confidence_score is None
        assert record.confidence_pct == 0

    def test_empty_antibiotic_is_unknown(self):
        record = AuditRecord.from_row({"currentAntibiotic": ""})
        assert record.antibiotic_key == "Unknown"

    def test_to_dict(self):
        data = AuditRecord.from_row({
            "patientId": "ICU-07",
            "clinicianDecision": "Decline",
        }).to_dict()

        assert data["patient_id"] == "ICU-07"
        assert data["decision"] == "declined"
        assert data["ward"] == "ICU"


class TestGroupTally:
    """Tests for GroupTally counting."""

    def test_add(self):
        tally = GroupTally(name="Vancomycin")
        tally.add(DecisionStatus.APPROVED)
        tally.add(DecisionStatus.APPROVED)
        tally.add(DecisionStatus.DECLINED)
        tally.add(DecisionStatus.PENDING)

        assert tally.approved == 2
        assert tally.declined == 1
        assert tally.pending == 1
        assert tally.total == 4
        assert tally.to_dict() == {
            "name": "Vancomycin",
            "approved": 2,
            "declined": 1,
            "pending": 1,
        }


class TestDeEscalationStats:
    """Tests for DeEscalationStats."""

    def test_empty(self):
        stats = DeEscalationStats.empty()
        assert stats.to_dict() == {
            "total": 0,
            "approved": 0,
            "declined": 0,
            "pending": 0,
            "approval_rate": 0,
            "by_antibiotic": [],
            "by_ward": [],
        }

    def test_decision_distribution(self):
        stats = DeEscalationStats(total=4, approved=2, declined=1, pending=1, approval_rate=67)
        slices = stats.decision_distribution()

        assert [s["name"] for s in slices] == ["Approved", "Declined", "Pending"]
        assert [s["value"] for s in slices] == [2, 1, 1]
        assert [s["pct"] for s in slices] == [50, 25, 25]

    def test_decision_distribution_rounds_half_up(self):
        stats = DeEscalationStats(total=8, approved=1, declined=7, pending=0)
        assert [s["pct"] for s in stats.decision_distribution()] == [13, 88, 0]

    def test_decision_distribution_empty(self):
        slices = DeEscalationStats.empty().decision_distribution()
        assert all(s["value"] == 0 and s["pct"] == 0 for s in slices)
