"""De-escalation audit dashboard views.

Both pages render the same snapshot; they differ only in presentation.
"""

from flask import Blueprint, render_template, current_app

deescalation_bp = Blueprint("deescalation", __name__, url_prefix="/deescalation")


def _get_snapshot():
    """Current snapshot, fetching synchronously if nothing has loaded yet."""
    poller = current_app.audit_trail_poller
    # Without a background thread, the first page view does the first poll
    if poller.loading and not poller.running:
        poller.poll_once()
    return poller, poller.snapshot


def _render(template: str):
    poller, snapshot = _get_snapshot()
    if poller.loading:
        return render_template(
            "deescalation/loading.html",
            refresh_seconds=2,
        )

    stats = snapshot.stats
    return render_template(
        template,
        stats=stats,
        distribution=stats.decision_distribution(),
        recent=snapshot.recent(current_app.config.get("DEESCALATION_RECENT_LIMIT", 10)),
        fetched_at=snapshot.fetched_at,
        refresh_seconds=poller.interval,
    )


@deescalation_bp.route("/")
def dashboard():
    """Main de-escalation dashboard."""
    return _render("deescalation/dashboard.html")


@deescalation_bp.route("/live")
def live():
    """Live display variant (wallboard)."""
    return _render("deescalation/live.html")
