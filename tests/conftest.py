"""Shared pytest fixtures for the de-escalation dashboard tests."""

from unittest.mock import Mock

import pytest

from common.deescalation import to_records
from dashboard.app import create_app
from dashboard.services.audit_trail import AuditTrailClient


@pytest.fixture
def scenario_rows():
    """Three rows: one approved, one declined, one undecided."""
    return [
        {
            "patientId": "ICU-07",
            "patientName": "Alice Smith",
            "currentAntibiotic": "Vancomycin",
            "recommendation": "Switch to cefazolin",
            "clinicianDecision": "Approve",
            "aiConfidenceScore": 0.92,
        },
        {
            "patientId": "ICU-09",
            "patientName": "Bob Jones",
            "currentAntibiotic": "Vancomycin",
            "recommendation": "Discontinue",
            "clinicianDecision": "Decline",
            "aiConfidenceScore": 0.61,
        },
        {
            "patientId": "WD1-22",
            "patientName": "Carol White",
            "currentAntibiotic": "Meropenem",
            "recommendation": "Narrow to ceftriaxone",
            "clinicianDecision": "",
            "aiConfidenceScore": 0.455,
        },
    ]


@pytest.fixture
def mock_client(scenario_rows):
    """AuditTrailClient stand-in returning the scenario rows."""
    client = Mock(spec=AuditTrailClient)
    client.source_url = "https://sheet.example.test/rows"
    client.fetch_payload.return_value = {"rows": scenario_rows}
    client.fetch_rows.return_value = scenario_rows
    client.fetch_records.side_effect = lambda: to_records(scenario_rows)
    return client


@pytest.fixture
def app(mock_client):
    """Flask app in testing mode with the upstream client mocked out."""
    app = create_app({
        "TESTING": True,
        "DEESCALATION_POLLER_ENABLED": False,
        "DEESCALATION_POLL_INTERVAL": 30,
    })
    app.audit_trail_client = mock_client
    app.audit_trail_poller.client = mock_client
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
