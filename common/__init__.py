"""Common models and aggregation for the de-escalation audit dashboard."""

from .deescalation import (
    AuditRecord,
    DecisionStatus,
    DeEscalationStats,
    GroupTally,
    analyze_records,
)

__all__ = [
    "AuditRecord",
    "DecisionStatus",
    "DeEscalationStats",
    "GroupTally",
    "analyze_records",
]
