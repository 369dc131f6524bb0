"""
Transparency criteria (T001-T007): documentation quality, client relation
and project follow-up.
"""

from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, mentions, neutral, scored
from torp.scoring.criteria.price import line_item_transparency

_REFERENCE_PATTERNS = (r"marque", r"\bréf", r"\bref\b", r"mod[èe]le", r"r[ée]f[ée]rence")


def description_quality(quote, enrichment, context) -> CriterionResult:
    """T001: share of detailed line descriptions and their mean length."""
    if not quote.items:
        return neutral("T001", "No line items")
    lengths = [len(item.description.strip()) for item in quote.items]
    detail_rate = sum(1 for n in lengths if n > 30) / len(lengths)
    average_length = sum(lengths) / len(lengths)

    if detail_rate >= 0.7 and average_length >= 50:
        score = 1.0
    elif detail_rate >= 0.5 and average_length >= 30:
        score = 0.67
    else:
        score = 0.33
    return scored("T001", score, f"{detail_rate:.0%} of lines detailed")


def material_references(quote, enrichment, context) -> CriterionResult:
    """T002: share of lines naming a brand, model or reference."""
    if not quote.items:
        return neutral("T002", "No line items")
    referenced = sum(
        1 for item in quote.items if mentions(item.description.lower(), *_REFERENCE_PATTERNS)
    )
    rate = referenced / len(quote.items)
    if rate >= 0.6:
        score = 1.0
    elif rate >= 0.3:
        score = 0.6
    else:
        score = 0.27
    return scored("T002", score, f"{rate:.0%} of lines with material references")


def technical_documents(quote, enrichment, context) -> CriterionResult:
    """T003"""
    return keyword_check(
        "T003",
        quote.searchable_text(),
        (r"\bplans?\b", r"sch[ée]ma", r"\bcoupe\b", r"fa[çc]ade", r"d[ée]tail"),
        1.0,
        0.44,
        "Technical documents referenced",
        "No technical documents referenced",
    )


def client_information(quote, enrichment, context) -> CriterionResult:
    """T004: client identified by name and address."""
    client = quote.client
    if client.name and client.address:
        return scored("T004", 1.0, "Client fully identified")
    if client.name or client.address:
        return scored("T004", 0.55, "Client partially identified")
    return scored("T004", 0.0, "Client not identified")


def contact_details(quote, enrichment, context) -> CriterionResult:
    """T005: contractor reachable by phone and e-mail."""
    company = quote.company
    if company.phone and company.email:
        return scored("T005", 1.0, "Phone and e-mail provided")
    if company.phone or company.email:
        return scored("T005", 0.5, "Single contact channel")
    return scored("T005", 0.0, "No contact details")


def project_follow_up(quote, enrichment, context) -> CriterionResult:
    """T006: milestones or reporting promised."""
    return keyword_check(
        "T006",
        quote.searchable_text(),
        (r"jalon", r"point d.[ée]tape", r"reporting", r"suivi"),
        1.0,
        0.43,
        "Follow-up arrangements described",
        "No follow-up arrangements",
    )


def after_sales_service(quote, enrichment, context) -> CriterionResult:
    """T007"""
    return keyword_check(
        "T007",
        quote.searchable_text(),
        (r"\bsav\b", r"service apr[èe]s[ -]vente", r"maintenance", r"entretien"),
        1.0,
        0.5,
        "After-sales service mentioned",
        "No after-sales service mentioned",
    )


TRANSPARENCY_CRITERIA = (
    description_quality,
    material_references,
    line_item_transparency,
    technical_documents,
    client_information,
    contact_details,
    project_follow_up,
    after_sales_service,
)
