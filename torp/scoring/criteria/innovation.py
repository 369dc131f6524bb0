"""
Innovation & sustainability criteria (I001-I007).
"""

from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, neutral, scored


def bio_based_materials(quote, enrichment, context) -> CriterionResult:
    """I001"""
    return keyword_check(
        "I001",
        quote.searchable_text(),
        (r"biosourc[ée]", r"\bbois\b", r"chanvre", r"\bpaille\b", r"\blaine\b", r"fibre v[ée]g[ée]tale"),
        1.0,
        0.44,
        "Bio-based materials",
        "No bio-based materials",
    )


def energy_savings(quote, enrichment, context) -> CriterionResult:
    """I002"""
    return keyword_check(
        "I002",
        quote.searchable_text(),
        (
            r"[ée]conomies [ée]nerg[ée]tiques",
            r"gain [ée]nerg[ée]tique",
            r"performance [ée]nerg[ée]tique",
            r"isolation",
            r"r[ée]novation [ée]nerg[ée]tique",
        ),
        1.0,
        0.44,
        "Energy savings targeted",
        "No energy savings targeted",
    )


def waste_management(quote, enrichment, context) -> CriterionResult:
    """I003: site waste sorting and recovery."""
    return keyword_check(
        "I003",
        quote.searchable_text(),
        (r"d[ée]chets?", r"\btri\b", r"valorisation", r"recyclage"),
        1.0,
        0.5,
        "Waste management planned",
        "Waste management not addressed",
    )


def local_sourcing(quote, enrichment, context) -> CriterionResult:
    """I004"""
    return keyword_check(
        "I004",
        quote.searchable_text(),
        (r"\blocale?s?\b", r"circuit court", r"r[ée]gional", r"proximit[ée]"),
        1.0,
        0.5,
        "Local sourcing",
        "No local sourcing",
    )


def technical_innovation(quote, enrichment, context) -> CriterionResult:
    """I005"""
    return keyword_check(
        "I005",
        quote.searchable_text(),
        (r"innovation", r"nouvelle technologie", r"\bsmart\b", r"domotique", r"connect[ée]"),
        1.0,
        0.55,
        "Innovative techniques",
        "Conventional techniques",
    )


def digital_tools(quote, enrichment, context) -> CriterionResult:
    """I006"""
    return keyword_check(
        "I006",
        quote.searchable_text(),
        (r"\bbim\b", r"maquette 3d", r"num[ée]rique", r"digital"),
        1.0,
        0.4,
        "Digital tools used",
        "No digital tools",
    )


def recent_certifications(quote, enrichment, context) -> CriterionResult:
    """I007: certifications valid at the quote issue date."""
    if enrichment.company is None:
        return neutral("I007", "No company record")
    # without an issue date, expiry cannot be judged
    reference_date = quote.dates.issue_date
    current = [
        c for c in enrichment.company.valid_certifications
        if reference_date is None or c.valid_until is None or c.valid_until >= reference_date
    ]
    if len(current) >= 3:
        score = 1.0
    elif current:
        score = 0.67
    else:
        score = 0.33
    return scored("I007", score, f"{len(current)} current certification(s)")


INNOVATION_CRITERIA = (
    bio_based_materials,
    energy_savings,
    waste_management,
    local_sourcing,
    technical_innovation,
    digital_tools,
    recent_certifications,
)
