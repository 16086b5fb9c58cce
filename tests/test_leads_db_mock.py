"""Tests for lead capture database operations with mocked Supabase."""

from unittest.mock import MagicMock, patch

import pytest

from risk_audit.core.audit_report import assemble
from risk_audit.core.errors import PersistenceUnavailable
from risk_audit.core.schemas_audit import IdentityData, RiskCategory, RiskInput
from risk_audit.db.leads import build_lead_payload, draft_lead, finalize_lead


@pytest.fixture
def mock_settings():
    """Settings with Supabase configured."""
    with patch("risk_audit.db.leads.get_settings") as mock:
        settings = mock.return_value
        settings.persistence_configured = True
        settings.LEADS_TABLE = "leads"
        yield settings


@pytest.fixture
def mock_supabase():
    """Mock Supabase client."""
    with patch("risk_audit.db.leads.get_supabase") as mock:
        yield mock.return_value


class TestBuildLeadPayload:
    def test_flattens_scores_and_vectors(self, construction_foundation, worked_example_inputs):
        """Test the draft row carries report numbers, flat scores and risk vectors."""
        report = assemble(construction_foundation, worked_example_inputs)
        payload = build_lead_payload("audit-1", construction_foundation, worked_example_inputs, report)

        assert payload["audit_ref"] == "audit-1"
        assert payload["industry"] == "Construction & Real Estate"
        assert payload["primary_rar"] == 3_200_000
        assert payload["volatility_index"] == 56
        assert payload["score_supply_chain_severity"] == 8
        assert payload["score_weather_latency"] == 5
        assert "company_name" not in payload
        assert "email" not in payload

        supply = payload["risk_vectors"][0]
        assert supply["scores"] == {"severity": 8, "latency": 8, "magnitude": 16, "zone": "critical"}
        assert supply["telemetry"]["q2_value"] == "< 3 Days (JIT)"

    def test_missing_categories_and_report_default_to_zero(self, construction_foundation):
        """Test unanswered categories and a missing report are stored as 0."""
        inputs = [RiskInput(category=RiskCategory.CASH_FLOW, severity=7, latency=7, skipped=True)]
        payload = build_lead_payload("audit-2", construction_foundation, inputs, None)

        assert payload["primary_rar"] == 0
        assert payload["score_cash_flow_severity"] == 7
        assert payload["score_workforce_severity"] == 0
        assert payload["risk_vectors"][0]["telemetry"]["skipped"] is True
        assert payload["risk_vectors"][0]["telemetry"]["q1_label"] is None


class TestDraftLead:
    def test_inserts_draft(
        self, mock_settings, mock_supabase, construction_foundation, worked_example_inputs
    ):
        """Test a draft lead is inserted and its id returned."""
        mock_response = MagicMock()
        mock_response.data = [{"id": 42}]
        mock_supabase.table.return_value.insert.return_value.execute.return_value = mock_response

        lead_id = draft_lead("audit-1", construction_foundation, worked_example_inputs, None)

        assert lead_id == 42
        mock_supabase.table.assert_called_once_with("leads")
        inserted = mock_supabase.table.return_value.insert.call_args.args[0]
        assert inserted["audit_ref"] == "audit-1"

    def test_skipped_when_not_configured(self, mock_supabase, construction_foundation, worked_example_inputs):
        """Test nothing is written when Supabase is not configured."""
        assert draft_lead("audit-1", construction_foundation, worked_example_inputs, None) is None
        mock_supabase.table.assert_not_called()

    def test_store_errors_are_swallowed(
        self, mock_settings, mock_supabase, construction_foundation, worked_example_inputs
    ):
        """Test a failing insert returns None instead of raising."""
        mock_supabase.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        assert draft_lead("audit-1", construction_foundation, worked_example_inputs, None) is None

    def test_empty_response(self, mock_settings, mock_supabase, construction_foundation, worked_example_inputs):
        """Test an insert returning no rows yields None."""
        mock_response = MagicMock()
        mock_response.data = []
        mock_supabase.table.return_value.insert.return_value.execute.return_value = mock_response

        assert draft_lead("audit-1", construction_foundation, worked_example_inputs, None) is None


class TestFinalizeLead:
    def test_updates_identity_by_audit_ref(self, mock_settings, mock_supabase):
        """Test identity fields are written to the matching draft."""
        identity = IdentityData(company_name=" Acme Builders ", email="owner@acme.com")
        expected = {"id": 42, "company_name": "Acme Builders", "email": "owner@acme.com"}

        mock_response = MagicMock()
        mock_response.data = [expected]
        update = mock_supabase.table.return_value.update
        update.return_value.eq.return_value.execute.return_value = mock_response

        result = finalize_lead("audit-1", identity)

        assert result == expected
        update.assert_called_once_with({"company_name": "Acme Builders", "email": "owner@acme.com"})
        update.return_value.eq.assert_called_once_with("audit_ref", "audit-1")

    def test_missing_draft_raises_lookup_error(self, mock_settings, mock_supabase):
        """Test finalizing an unknown audit raises LookupError."""
        mock_response = MagicMock()
        mock_response.data = []
        mock_supabase.table.return_value.update.return_value.eq.return_value.execute.return_value = (
            mock_response
        )

        with pytest.raises(LookupError):
            finalize_lead("missing", IdentityData(company_name="Acme", email="a@b.co"))

    def test_unconfigured_store_raises(self):
        """Test finalizing without Supabase configured raises PersistenceUnavailable."""
        with pytest.raises(PersistenceUnavailable):
            finalize_lead("audit-1", IdentityData(company_name="Acme", email="a@b.co"))
