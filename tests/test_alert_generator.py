# tests/test_alert_generator.py

import pytest

from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import AxisId, Severity
from torp.models.quote import CompanyInfo, ExtractedQuoteData, LineItem, QuoteTotals
from torp.models.result import AxisScore
from torp.scoring.alert_generator import AXIS_ALERT_RULES, AlertGenerator


def _axis(axis: AxisId, percentage: float) -> AxisScore:
    return AxisScore(
        axis=axis,
        label=axis.value,
        score=percentage,
        max_points=100,
        percentage=percentage,
        weight=0.25,
    )


class TestDataRules:

    def setup_method(self):
        self.generator = AlertGenerator(totals_tolerance=0.01)

    def test_missing_legal_id_is_critical(self, sparse_quote):
        alerts = self.generator.generate(sparse_quote, EnrichmentContext(), [])
        legal = [a for a in alerts if a.type == "MISSING_LEGAL_ID"]
        assert len(legal) == 1
        assert legal[0].severity == Severity.CRITICAL

    @pytest.mark.parametrize("legal_id", ["", "   ", "\t\n"])
    def test_blank_legal_id_is_missing(self, legal_id):
        quote = ExtractedQuoteData(company=CompanyInfo(legal_id=legal_id))
        alerts = self.generator.generate(quote, EnrichmentContext(), [])
        assert [a.severity for a in alerts if a.type == "MISSING_LEGAL_ID"] == [Severity.CRITICAL]

    def test_legal_id_present(self, complete_quote, full_enrichment):
        alerts = self.generator.generate(complete_quote, full_enrichment, [])
        assert alerts == []

    def test_totals_mismatch(self):
        quote = ExtractedQuoteData(
            company=CompanyInfo(legal_id="1"),
            items=[LineItem(total_price=800)],
            totals=QuoteTotals(subtotal=1000),
        )
        alerts = self.generator.generate(quote, EnrichmentContext(), [])
        mismatch = [a for a in alerts if a.type == "TOTALS_MISMATCH"]
        assert len(mismatch) == 1
        assert mismatch[0].severity == Severity.HIGH

    def test_no_totals_mismatch_without_subtotal(self):
        quote = ExtractedQuoteData(
            company=CompanyInfo(legal_id="1"),
            items=[LineItem(total_price=800)],
        )
        alerts = self.generator.generate(quote, EnrichmentContext(), [])
        assert not any(a.type == "TOTALS_MISMATCH" for a in alerts)

    def test_enrichment_missing_is_low(self, complete_quote):
        alerts = self.generator.generate(complete_quote, EnrichmentContext(), [])
        assert [(a.type, a.severity) for a in alerts] == [("ENRICHMENT_MISSING", Severity.LOW)]


class TestAxisRules:

    def setup_method(self):
        self.generator = AlertGenerator()

    def test_compliance_at_35_percent_is_critical(self, complete_quote, full_enrichment):
        alerts = self.generator.generate(
            complete_quote, full_enrichment, [_axis(AxisId.COMPLIANCE, 35.0)]
        )
        assert len(alerts) == 1
        assert alerts[0].type == "CONFORMITY_CRITICAL"
        assert alerts[0].severity == Severity.CRITICAL
        assert alerts[0].axis == AxisId.COMPLIANCE

    def test_threshold_is_strict(self, complete_quote, full_enrichment):
        alerts = self.generator.generate(
            complete_quote, full_enrichment, [_axis(AxisId.COMPLIANCE, 40.0)]
        )
        assert alerts == []

    @pytest.mark.parametrize("rule", AXIS_ALERT_RULES, ids=lambda r: r.alert_type)
    def test_each_rule_fires_below_threshold(self, rule, complete_quote, full_enrichment):
        alerts = self.generator.generate(
            complete_quote, full_enrichment, [_axis(rule.axis, rule.threshold - 1)]
        )
        assert [a.type for a in alerts] == [rule.alert_type]
        assert alerts[0].severity == rule.severity

    def test_absent_axis_never_fires(self, complete_quote, full_enrichment):
        # innovation is weak but has no alert rule; guarantees is absent
        alerts = self.generator.generate(
            complete_quote, full_enrichment, [_axis(AxisId.INNOVATION, 5.0)]
        )
        assert alerts == []

    def test_each_type_at_most_once(self, sparse_quote):
        breakdown = [_axis(axis, 0.0) for axis in AxisId]
        alerts = self.generator.generate(sparse_quote, EnrichmentContext(), breakdown)
        types = [a.type for a in alerts]
        assert len(types) == len(set(types))
