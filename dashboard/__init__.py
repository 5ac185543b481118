"""De-escalation audit dashboard (Flask)."""
