"""Data models for the antibiotic de-escalation audit trail."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

UNKNOWN_LABEL = "Unknown"
WARD_PREFIX_LENGTH = 3


class DecisionStatus(Enum):
    """Clinician decision on a de-escalation recommendation."""
    APPROVED = "approved"
    DECLINED = "declined"
    PENDING = "pending"    # No decision recorded yet

    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.capitalize()


# Sheet values are "Approve"/"Decline" in any letter case
_DECISION_VALUES = {
    "approve": DecisionStatus.APPROVED,
    "decline": DecisionStatus.DECLINED,
}


def classify_decision(value: Any) -> DecisionStatus:
    """Classify a free-text decision cell.

    Case-insensitive match on "approve"/"decline". Anything else, including
    a blank or missing cell, is pending, so every record lands in exactly
    one bucket.
    """
    if not isinstance(value, str) or not value:
        return DecisionStatus.PENDING
    return _DECISION_VALUES.get(value.lower(), DecisionStatus.PENDING)


def ward_key(patient_id: Any) -> str:
    """Derive the ward label from the first characters of a patient ID.

    IDs shorter than the prefix are used whole.
    """
    if patient_id is None or patient_id == "":
        return UNKNOWN_LABEL
    return str(patient_id)[:WARD_PREFIX_LENGTH]


def _optional_str(value: Any) -> str | None:
    """Normalize a spreadsheet cell to a string, keeping absence as None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _optional_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass
class AuditRecord:
    """One row of the de-escalation audit trail sheet.

    Every field is optional; the sheet owns the schema and cells may be blank.
    """
    patient_id: str | None = None
    patient_name: str | None = None
    current_antibiotic: str | None = None
    recommendation: str | None = None
    clinician_decision: str | None = None
    ai_confidence_score: float | None = None

    # Original row as returned by the sheet
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AuditRecord":
        """Build a record from an upstream row (camelCase column keys)."""
        return cls(
            patient_id=_optional_str(row.get("patientId")),
            patient_name=_optional_str(row.get("patientName")),
            current_antibiotic=_optional_str(row.get("currentAntibiotic")),
            recommendation=_optional_str(row.get("recommendation")),
            clinician_decision=_optional_str(row.get("clinicianDecision")),
            ai_confidence_score=_optional_float(row.get("aiConfidenceScore")),
            raw=dict(row),
        )

    @property
    def decision(self) -> DecisionStatus:
        return classify_decision(self.clinician_decision)

    @property
    def antibiotic_key(self) -> str:
        return self.current_antibiotic or UNKNOWN_LABEL

    @property
    def ward(self) -> str:
        return ward_key(self.patient_id)

    @property
    def decision_label(self) -> str:
        """Decision text as entered, or "Pending" when blank."""
        return self.clinician_decision or DecisionStatus.PENDING.display_name()

    @property
    def confidence_pct(self) -> int:
        """Confidence score as a whole percentage (0 when missing)."""
        if self.ai_confidence_score is None:
            return 0
        return math.floor(self.ai_confidence_score * 100 + 0.5)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "patient_id": self.patient_id,
            "patient_name": self.patient_name,
            "current_antibiotic": self.current_antibiotic,
            "recommendation": self.recommendation,
            "clinician_decision": self.clinician_decision,
            "ai_confidence_score": self.ai_confidence_score,
            "decision": self.decision.value,
            "ward": self.ward,
        }


@dataclass
class GroupTally:
    """Decision counts for one antibiotic or ward."""
    name: str
    approved: int = 0
    declined: int = 0
    pending: int = 0

    @property
    def total(self) -> int:
        return self.approved + self.declined + self.pending

    def add(self, decision: DecisionStatus) -> None:
        """Count one record in the bucket for its decision."""
        if decision == DecisionStatus.APPROVED:
            self.approved += 1
        elif decision == DecisionStatus.DECLINED:
            self.declined += 1
        else:
            self.pending += 1

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "approved": self.approved,
            "declined": self.declined,
            "pending": self.pending,
        }


# Chart colors for the decision distribution
DECISION_COLORS = {
    DecisionStatus.APPROVED: "#10b981",
    DecisionStatus.DECLINED: "#ef4444",
    DecisionStatus.PENDING: "#f59e0b",
}


@dataclass
class DeEscalationStats:
    """Summary statistics over one poll's worth of audit records.

    Recomputed wholesale from the full record list; never updated in place.
    """
    total: int = 0
    approved: int = 0
    declined: int = 0
    pending: int = 0
    approval_rate: int = 0  # Percent of decided records that were approved
    by_antibiotic: list[GroupTally] = field(default_factory=list)
    by_ward: list[GroupTally] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DeEscalationStats":
        return cls()

    def decision_distribution(self) -> list[dict]:
        """Slices for the approval distribution chart."""
        counts = {
            DecisionStatus.APPROVED: self.approved,
            DecisionStatus.DECLINED: self.declined,
            DecisionStatus.PENDING: self.pending,
        }
        return [
            {
                "name": status.display_name(),
                "value": count,
                "color": DECISION_COLORS[status],
                "pct": math.floor(100 * count / self.total + 0.5) if self.total else 0,
            }
            for status, count in counts.items()
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "approved": self.approved,
            "declined": self.declined,
            "pending": self.pending,
            "approval_rate": self.approval_rate,
            "by_antibiotic": [g.to_dict() for g in self.by_antibiotic],
            "by_ward": [g.to_dict() for g in self.by_ward],
        }
