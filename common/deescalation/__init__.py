"""Antibiotic de-escalation audit trail models and aggregation.

Shared by the dashboard views and the summary runner so both compute
statistics the same way.
"""

from .models import (
    AuditRecord,
    DecisionStatus,
    DeEscalationStats,
    GroupTally,
    UNKNOWN_LABEL,
)
from .aggregator import (
    analyze_records,
    approval_rate,
    classify_decision,
    to_records,
    ward_key,
)

__all__ = [
    "AuditRecord",
    "DecisionStatus",
    "DeEscalationStats",
    "GroupTally",
    "UNKNOWN_LABEL",
    "analyze_records",
    "approval_rate",
    "classify_decision",
    "to_records",
    "ward_key",
]
