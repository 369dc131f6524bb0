"""
Quality criteria.

Q001-Q020 cover the quality of the quoted works (materials, certifications,
technical standards). Q021-Q026 cover the contractor itself (financial
strength, reputation, track record) and only score when a company record
was supplied.
"""

from torp.models.enumerations import ProjectType
from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, mentions, neutral, placeholder, scored
from torp.scoring.criteria.guarantees import manufacturer_warranty
from torp.scoring.criteria.transparency import (
    after_sales_service,
    description_quality,
    technical_documents,
)


def dtu_compliance(quote, enrichment, context) -> CriterionResult:
    """Q001: mean compliance of the applicable DTU standards."""
    applicable = [d for d in enrichment.dtus if d.applicable]
    assessed = [d.compliance_score for d in applicable if d.compliance_score is not None]
    if not assessed:
        return neutral("Q001", "No assessed DTU standard")
    score = sum(assessed) / len(assessed) / 100
    return scored("Q001", score, f"{len(assessed)} DTU standard(s) assessed")


def materials_brands(quote, enrichment, context) -> CriterionResult:
    """Q002: materials detailed with brand, reference or standard."""
    if not quote.items:
        return neutral("Q002", "No line items")
    detailed = any(
        mentions(item.description.lower(), r"marque", r"r[ée]f[ée]rence", r"norme")
        for item in quote.items
    )
    if detailed:
        return scored("Q002", 1.0, "Materials detailed with references")
    return scored("Q002", 0.4, "Materials insufficiently detailed")


def product_certifications(quote, enrichment, context) -> CriterionResult:
    """Q003: CE marking, NF/ACERMI standards and certificate numbers."""
    text = quote.searchable_text()
    points = 0
    found = []
    if mentions(text, r"marquage ce\b", r"norme ce\b", r"conforme ce\b"):
        points += 10
        found.append("CE")
    if mentions(text, r"\bnf\b", r"acermi"):
        points += 12
        found.append("NF/ACERMI")
    if mentions(text, r"\b(cert|certif|n°|no)\s*[:.]?\s*[a-z0-9]{5,}"):
        points += 8
        found.append("certificate numbers")
    justification = ", ".join(found) if found else "No product certification mentioned"
    return scored("Q003", points / 30, justification)


def thermal_regulation(quote, enrichment, context) -> CriterionResult:
    """Q011: RE2020 thresholds for new builds, energy wording otherwise."""
    text = quote.searchable_text()
    if context.project_type == ProjectType.CONSTRUCTION:
        points = 0
        if mentions(text, r"re ?2020", r"r[ée]glementation environnementale"):
            points += 25 if mentions(text, r"bbio", r"\bcep\b", r"besoin bioclimatique") else 15
        if mentions(text, r"carbone", r"\bfdes\b"):
            points += 15
        return scored("Q011", points / 40, "RE2020 assessment for a new build")
    if mentions(text, r"performance [ée]nerg[ée]tique", r"r[ée]novation [ée]nerg[ée]tique", r"\brge\b"):
        return scored("Q011", 1.0, "Energy performance addressed")
    return scored("Q011", 0.5, "Little on energy performance")


def energy_performance(quote, enrichment, context) -> CriterionResult:
    """Q016"""
    return keyword_check(
        "Q016",
        quote.searchable_text(),
        (
            r"[ée]conomies? d.[ée]nergie",
            r"[ée]conomies [ée]nerg[ée]tiques",
            r"gain [ée]nerg[ée]tique",
            r"performance [ée]nerg[ée]tique",
            r"isolation",
        ),
        1.0,
        0.44,
        "Energy savings addressed",
        "Energy savings not addressed",
    )


def materials_durability(quote, enrichment, context) -> CriterionResult:
    """Q017"""
    return keyword_check(
        "Q017",
        quote.searchable_text(),
        (r"durable", r"dur[ée]e de vie", r"long[ée]vit[ée]", r"r[ée]sistant"),
        1.0,
        0.375,
        "Durability addressed",
        "Durability not addressed",
    )


def revenue_trend(quote, enrichment, context) -> CriterionResult:
    """Q021: year-on-year revenue growth."""
    history = enrichment.company.revenue_history if enrichment.company else []
    if len(history) < 2 or history[-1] <= 0 or history[-2] <= 0:
        return neutral("Q021", "Revenue history unavailable")
    growth = history[-1] / history[-2] - 1
    previous_growth = history[-2] / history[-3] - 1 if len(history) >= 3 and history[-3] > 0 else 0.0

    if growth > 0.1 and previous_growth >= 0:
        score = 1.0
    elif growth > 0:
        score = 0.67
    elif growth > -0.1:
        score = 0.44
    else:
        score = 0.17
    return scored("Q021", score, f"Revenue {growth:+.0%} year on year")


def profitability(quote, enrichment, context) -> CriterionResult:
    """Q022: positive latest and average net result."""
    results = enrichment.company.net_result_history if enrichment.company else []
    if not results:
        return neutral("Q022", "Net result history unavailable")
    last = results[-1]
    average = sum(results) / len(results)
    if last > 0 and average > 0:
        return scored("Q022", 1.0, "Consistently profitable")
    if last > 0:
        return scored("Q022", 0.67, "Profitable last year")
    return scored("Q022", 0.33, "Loss-making last year")


def project_capacity(quote, enrichment, context) -> CriterionResult:
    """Q023: quote amount relative to the contractor's annual revenue."""
    history = enrichment.company.revenue_history if enrichment.company else []
    if not history or history[-1] <= 0 or quote.total_amount <= 0:
        return neutral("Q023", "Revenue or quote amount unavailable")
    ratio = quote.total_amount / history[-1]
    if ratio < 0.2:
        score = 1.0
    elif ratio < 0.5:
        score = 0.8
    elif ratio < 1.0:
        score = 0.47
    else:
        score = 0.13
    return scored("Q023", score, f"Project is {ratio:.0%} of annual revenue")


def default_risk(quote, enrichment, context) -> CriterionResult:
    """Q024: predicted probability of default."""
    risk = enrichment.company.default_risk if enrichment.company else None
    if risk is None:
        return neutral("Q024", "No default risk prediction")
    if risk < 10:
        score = 1.0
    elif risk < 25:
        score = 0.75
    elif risk < 50:
        score = 0.45
    else:
        score = 0.15
    return scored("Q024", score, f"Default risk {risk:.0f}%")


def reputation(quote, enrichment, context) -> CriterionResult:
    """Q025: customer rating weighted by review volume."""
    rep = enrichment.company.reputation if enrichment.company else None
    if rep is None:
        return neutral("Q025", "No reputation data")
    rating, reviews = rep.average_rating, rep.review_count
    if rating >= 4.5 and reviews >= 10:
        score = 1.0
    elif rating >= 4.0 and reviews >= 5:
        score = 0.8
    elif rating >= 3.5:
        score = 0.48
    elif rating >= 3.0:
        score = 0.24
    else:
        score = 0.08
    return scored("Q025", score, f"Rated {rating:.1f}/5 over {reviews} reviews")


def project_portfolio(quote, enrichment, context) -> CriterionResult:
    """Q026: comparable projects delivered."""
    similar = enrichment.company.similar_projects if enrichment.company else None
    if similar is None:
        return neutral("Q026", "No portfolio data")
    if similar >= 5:
        return scored("Q026", 1.0, f"{similar} similar projects")
    return scored("Q026", 0.5, f"Only {similar} similar projects")


LEGACY_QUALITY_CRITERIA = (
    dtu_compliance,
    materials_brands,
    product_certifications,
    placeholder("Q004", "Materials range"),
    placeholder("Q005", "Technical details"),
    placeholder("Q006", "Quantities accuracy"),
    placeholder("Q007", "Construction standards"),
    description_quality,
    placeholder("Q009", "Alternatives"),
    placeholder("Q010", "Construction techniques"),
    thermal_regulation,
    placeholder("Q012", "Accessibility"),
    manufacturer_warranty,
    after_sales_service,
    placeholder("Q015", "Materials origin"),
    energy_performance,
    materials_durability,
    placeholder("Q018", "Finishes coherence"),
    technical_documents,
    placeholder("Q020", "Client requirements"),
)

ADVANCED_QUALITY_CRITERIA = (
    revenue_trend,
    profitability,
    project_capacity,
    default_risk,
    reputation,
    project_portfolio,
    materials_brands,
    materials_durability,
)
