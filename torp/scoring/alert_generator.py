"""
scoring/alert_generator.py

Emits alerts from fixed rules:

    Data rules (always checked):
        MISSING_LEGAL_ID     critical   company legal id absent
        TOTALS_MISMATCH      high       line totals do not reconcile with subtotal
        ENRICHMENT_MISSING   low        no company record supplied

    Axis rules (only for axes present in the active rubric):
        CONFORMITY_CRITICAL  critical   compliance   < 40 %
        PRICE_ANOMALY        high       price        < 30 %
        QUALITY_CONCERN      high       quality      < 40 %
        GUARANTEE_GAP        high       guarantees   < 40 %
        TIMELINE_RISK        medium     timeline     < 30 %
        TRANSPARENCY_LOW     medium     transparency < 30 %
        FEASIBILITY_RISK     medium     feasibility  < 30 %

Each alert type appears at most once per call.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from torp.config import get_settings
from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import AxisId, Severity
from torp.models.quote import ExtractedQuoteData
from torp.models.result import Alert, AxisScore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisAlertRule:
    alert_type: str
    axis: AxisId
    threshold: float      # percentage of the axis budget
    severity: Severity
    message: str


AXIS_ALERT_RULES = (
    AxisAlertRule(
        "CONFORMITY_CRITICAL", AxisId.COMPLIANCE, 40.0, Severity.CRITICAL,
        "The quote has major legal compliance issues",
    ),
    AxisAlertRule(
        "PRICE_ANOMALY", AxisId.PRICE, 30.0, Severity.HIGH,
        "Suspicious price - possible significant overpricing",
    ),
    AxisAlertRule(
        "QUALITY_CONCERN", AxisId.QUALITY, 40.0, Severity.HIGH,
        "Insufficient quality of materials and services",
    ),
    AxisAlertRule(
        "GUARANTEE_GAP", AxisId.GUARANTEES, 40.0, Severity.HIGH,
        "Mandatory warranties or insurances are not evidenced",
    ),
    AxisAlertRule(
        "TIMELINE_RISK", AxisId.TIMELINE, 30.0, Severity.MEDIUM,
        "Schedule is unrealistic or undefined",
    ),
    AxisAlertRule(
        "TRANSPARENCY_LOW", AxisId.TRANSPARENCY, 30.0, Severity.MEDIUM,
        "The quote lacks detail and documentation",
    ),
    AxisAlertRule(
        "FEASIBILITY_RISK", AxisId.FEASIBILITY, 30.0, Severity.MEDIUM,
        "Technical feasibility of the works is not demonstrated",
    ),
)


class AlertGenerator:
    """Evaluate data rules and axis threshold rules."""

    def __init__(self, totals_tolerance: Optional[float] = None):
        self.totals_tolerance = (
            totals_tolerance if totals_tolerance is not None else get_settings().TOTALS_TOLERANCE
        )

    def generate(
        self,
        quote: ExtractedQuoteData,
        enrichment: EnrichmentContext,
        breakdown: List[AxisScore],
    ) -> List[Alert]:
        alerts: List[Alert] = []

        if not quote.company.has_legal_id:
            alerts.append(Alert(
                type="MISSING_LEGAL_ID",
                severity=Severity.CRITICAL,
                message="Company legal id (SIRET) missing - contractor cannot be identified",
            ))

        if quote.totals_reconcile(self.totals_tolerance) is False:
            alerts.append(Alert(
                type="TOTALS_MISMATCH",
                severity=Severity.HIGH,
                message=(
                    f"Line totals ({quote.line_items_total:.2f}) do not match "
                    f"the declared subtotal ({quote.totals.subtotal:.2f})"
                ),
            ))

        if enrichment.company is None:
            alerts.append(Alert(
                type="ENRICHMENT_MISSING",
                severity=Severity.LOW,
                message="No company record available - company checks use neutral values",
            ))

        by_axis = {a.axis: a for a in breakdown}
        for rule in AXIS_ALERT_RULES:
            axis_score = by_axis.get(rule.axis)
            if axis_score is None:
                continue
            if axis_score.percentage < rule.threshold:
                alerts.append(Alert(
                    type=rule.alert_type,
                    severity=rule.severity,
                    message=rule.message,
                    axis=rule.axis,
                ))

        if alerts:
            logger.info(
                "alerts_generated",
                extra={"quote_id": quote.quote_id, "types": [a.type for a in alerts]},
            )
        return alerts
