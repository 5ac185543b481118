"""Command-line runner for the de-escalation audit summary.

Fetches the audit trail sheet and prints the same statistics the dashboard
shows, either once or on every poll interval.

Usage:
    # Print the current summary and exit
    python -m dashboard.runner --once

    # Same, as JSON
    python -m dashboard.runner --once --json

    # Poll continuously, logging each refresh
    python -m dashboard.runner
"""

import argparse
import json
import logging
import sys

from common.deescalation import DeEscalationStats

from .config import get_config
from .services.audit_trail import AuditTrailClient
from .services.poller import AuditTrailPoller, DashboardSnapshot

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def format_summary(stats: DeEscalationStats) -> str:
    """Render statistics as a plain-text report."""
    lines = [
        "Antibiotic De-escalation Summary",
        f"  Total:      {stats.total}",
        f"  Approved:   {stats.approved}",
        f"  Declined:   {stats.declined}",
        f"  Pending:    {stats.pending}",
        f"  Approval %: {stats.approval_rate}%",
    ]
    for title, groups in (("By antibiotic", stats.by_antibiotic), ("By ward", stats.by_ward)):
        lines.append("")
        lines.append(f"{title}:")
        if not groups:
            lines.append("  (none)")
        for group in groups:
            lines.append(
                f"  {group.name:<24} approved={group.approved} "
                f"declined={group.declined} pending={group.pending}"
            )
    return "\n".join(lines)


def print_snapshot(snapshot: DashboardSnapshot, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(snapshot.to_dict(), indent=2))
    else:
        print(format_summary(snapshot.stats))


def run_once(poller: AuditTrailPoller, as_json: bool = False) -> int:
    """Poll once and print the summary.

    Returns:
        Exit code: 0 on success, 1 if the sheet could not be fetched.
    """
    if not poller.poll_once():
        return 1
    print_snapshot(poller.snapshot, as_json=as_json)
    return 0


def run_daemon(poller: AuditTrailPoller) -> None:
    """Run continuously until interrupted."""
    logger.info(f"Starting daemon mode (poll interval: {poller.interval}s)")
    with poller:
        # Park the main thread until Ctrl-C
        poller.wait()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Summarize antibiotic de-escalation decisions from the audit trail sheet."
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run once and exit (default: continuous polling)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print statistics as JSON",
    )
    parser.add_argument(
        "--url",
        help="Override the audit trail URL",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = get_config()
    client = AuditTrailClient(
        source_url=args.url or config.DEESCALATION_SOURCE_URL,
        timeout=config.DEESCALATION_REQUEST_TIMEOUT,
    )

    logger.info("Antibiotic De-escalation Audit")
    logger.info(f"  Source: {client.source_url}")

    try:
        if args.once:
            return run_once(AuditTrailPoller(client), as_json=args.json)

        poller = AuditTrailPoller(
            client,
            interval=config.DEESCALATION_POLL_INTERVAL,
            on_update=lambda snapshot: print_snapshot(snapshot, as_json=args.json),
        )
        try:
            run_daemon(poller)
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
