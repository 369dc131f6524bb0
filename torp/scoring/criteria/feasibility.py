"""
Feasibility criteria (F001-F003), plus shared timeline and capacity checks.
"""

from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, mentions, scored
from torp.scoring.criteria.quality import project_capacity, project_portfolio
from torp.scoring.criteria.timeline import (
    duration_realism,
    materials_lead_time,
    trades_coordination,
)


def site_diagnostic(quote, enrichment, context) -> CriterionResult:
    """F001: works preceded by a site visit or diagnostic."""
    return keyword_check(
        "F001",
        quote.searchable_text(),
        (r"diagnostic", r"[ée]tat des lieux", r"visite", r"expertise", r"relev[ée]"),
        1.0,
        0.44,
        "Site diagnostic performed",
        "No site diagnostic",
    )


def sizing(quote, enrichment, context) -> CriterionResult:
    """F002: dimensions and sizing calculations stated."""
    text = quote.searchable_text()
    has_dimensions = quote.project.surface is not None or mentions(
        text, r"surface", r"m²", r"\bm2\b", r"m[èe]tres?", r"volume"
    )
    has_calculations = mentions(text, r"calcul", r"dimensionnement", r"\bcharges?\b")
    if has_dimensions and has_calculations:
        return scored("F002", 1.0, "Dimensions and sizing calculations")
    if has_dimensions or has_calculations:
        return scored("F002", 0.67, "Partial sizing information")
    return scored("F002", 0.33, "No sizing information")


def site_logistics(quote, enrichment, context) -> CriterionResult:
    """F003"""
    return keyword_check(
        "F003",
        quote.searchable_text(),
        (r"acc[èe]s", r"logistique", r"chantier", r"contraintes?"),
        1.0,
        0.625,
        "Site logistics considered",
        "Site logistics not considered",
    )


FEASIBILITY_CRITERIA = (
    site_diagnostic,
    sizing,
    duration_realism,
    materials_lead_time,
    site_logistics,
    trades_coordination,
    project_capacity,
    project_portfolio,
)
