"""Aggregation of audit trail rows into dashboard statistics.

Single shared routine used by every dashboard view and the CLI runner.
"""

from typing import Any, Iterable, Mapping

from .models import (
    AuditRecord,
    DecisionStatus,
    DeEscalationStats,
    GroupTally,
    classify_decision,
    ward_key,
)

__all__ = [
    "analyze_records",
    "approval_rate",
    "classify_decision",
    "to_records",
    "ward_key",
]


def approval_rate(approved: int, declined: int) -> int:
    """Percent of decided records that were approved, rounded half up.

    Returns 0 when nothing has been decided yet.
    """
    decided = approved + declined
    if decided <= 0:
        return 0
    # floor(100 * a / d + 1/2) in integers
    return (200 * approved + decided) // (2 * decided)


def to_records(rows: Iterable[AuditRecord | Mapping[str, Any]]) -> list[AuditRecord]:
    """Normalize raw sheet rows to AuditRecord objects.

    Entries that are not mappings still count, as blank records.
    """
    records = []
    for row in rows:
        if isinstance(row, AuditRecord):
            records.append(row)
        elif isinstance(row, Mapping):
            records.append(AuditRecord.from_row(row))
        else:
            records.append(AuditRecord())
    return records


def analyze_records(rows: Iterable[AuditRecord | Mapping[str, Any]]) -> DeEscalationStats:
    """Compute summary statistics for one batch of audit records.

    Groups keep the order in which each antibiotic or ward first appears.

    Args:
        rows: AuditRecord objects or raw row mappings from the sheet.

    Returns:
        DeEscalationStats with scalar counts and both groupings.
    """
    counts = {status: 0 for status in DecisionStatus}
    by_antibiotic: dict[str, GroupTally] = {}
    by_ward: dict[str, GroupTally] = {}

    total = 0
    for record in to_records(rows):
        total += 1
        decision = record.decision
        counts[decision] += 1

        abx = record.antibiotic_key
        if abx not in by_antibiotic:
            by_antibiotic[abx] = GroupTally(name=abx)
        by_antibiotic[abx].add(decision)

        ward = record.ward
        if ward not in by_ward:
            by_ward[ward] = GroupTally(name=ward)
        by_ward[ward].add(decision)

    approved = counts[DecisionStatus.APPROVED]
    declined = counts[DecisionStatus.DECLINED]

    return DeEscalationStats(
        total=total,
        approved=approved,
        declined=declined,
        pending=counts[DecisionStatus.PENDING],
        approval_rate=approval_rate(approved, declined),
        by_antibiotic=list(by_antibiotic.values()),
        by_ward=list(by_ward.values()),
    )
