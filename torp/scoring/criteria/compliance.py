"""
Compliance criteria (C001-C039).

Legal mentions and company identification on the quote, VAT rates, validity
period, mandatory insurances, and - for the advanced rubric - the company's
legal standing and trade qualifications.
"""

from torp.models.enumerations import ProjectType
from torp.models.result import CriterionResult
from torp.scoring.criteria.common import neutral, placeholder, scored
from torp.scoring.criteria.guarantees import (
    biennial_warranty,
    completion_warranty,
    damage_insurance,
    decennial_insurance,
)
from torp.scoring.criteria.innovation import waste_management
from torp.scoring.criteria.quality import (
    dtu_compliance,
    product_certifications,
    thermal_regulation,
)

VALID_VAT_RATES = (0.055, 0.10, 0.20)


def legal_mentions(quote, enrichment, context) -> CriterionResult:
    """C001: company name, legal id, address and validity date."""
    present = [
        bool(quote.company.name),
        quote.company.has_legal_id,
        bool(quote.company.address),
        quote.dates.valid_until is not None,
    ]
    count = sum(present)
    return scored("C001", 0.25 * count, f"{count}/4 legal mentions")


def legal_id_present(quote, enrichment, context) -> CriterionResult:
    """C002"""
    if quote.company.has_legal_id:
        return scored("C002", 1.0, "Company legal id present")
    return scored("C002", 0.0, "Company legal id missing")


def payment_terms(quote, enrichment, context) -> CriterionResult:
    """C006"""
    if quote.legal_mentions.has_payment_terms:
        return scored("C006", 1.0, "Payment terms stated")
    return scored("C006", 0.4, "Payment terms missing")


def vat_rate(quote, enrichment, context) -> CriterionResult:
    """C010: applied VAT rate is one of the legal French rates."""
    rate = quote.totals.tax_rate
    if rate is None:
        return neutral("C010", "No VAT rate stated")
    if any(abs(rate - valid) < 0.001 for valid in VALID_VAT_RATES):
        return scored("C010", 1.0, f"VAT rate {rate:.1%} is valid")
    return scored("C010", 0.5, f"Unusual VAT rate {rate:.1%}")


def quote_validity(quote, enrichment, context) -> CriterionResult:
    """C016"""
    if quote.dates.valid_until is not None:
        return scored("C016", 1.0, "Validity period stated")
    return scored("C016", 0.5, "No validity period")


def legal_standing(quote, enrichment, context) -> CriterionResult:
    """C037: registered company free of collective procedure."""
    company = enrichment.company
    if company is None or company.has_collective_procedure is None:
        return neutral("C037", "No legal status record")
    if company.has_collective_procedure:
        return scored("C037", 0.0, "Collective procedure on record")
    if company.legal_status:
        return scored("C037", 1.0, "Registered, no collective procedure")
    return scored("C037", 0.7, "No collective procedure, legal status unknown")


def trade_qualifications(quote, enrichment, context) -> CriterionResult:
    """C038: Qualibat/Qualifelec qualification, trade match and RGE."""
    company = enrichment.company
    if company is None:
        return neutral("C038", "No company record")
    certifications = company.valid_certifications
    points = 0
    notes = []

    if any(c.type.lower() in ("qualibat", "qualifelec") for c in certifications):
        points += 18
        notes.append("trade qualification")

    trade = (context.trade_type or "").lower()
    if trade and any(trade in c.name.lower() for c in certifications):
        points += 12
        notes.append("trade-specific certification")

    has_rge = any(c.type.upper() == "RGE" or "RGE" in c.name for c in certifications)
    if context.project_type != ProjectType.RENOVATION:
        points += 5
    elif has_rge:
        points += 10
        notes.append("RGE")
    else:
        notes.append("RGE missing for renovation")

    justification = ", ".join(notes) if notes else "No qualification on record"
    return scored("C038", points / 40, justification)


def insurance_status(quote, enrichment, context) -> CriterionResult:
    """C039: liability and decennial insurance on record."""
    insurance = enrichment.company.insurance if enrichment.company else None
    if insurance is None:
        if quote.legal_mentions.has_insurance:
            return scored("C039", 0.7, "Insurance mentioned, not verified")
        return neutral("C039", "No insurance record")
    score = 0.5 * insurance.has_liability + 0.5 * insurance.has_decennial
    return scored("C039", score, "Insurance record checked")


LEGACY_COMPLIANCE_CRITERIA = (
    legal_mentions,
    legal_id_present,
    decennial_insurance,
    completion_warranty,
    biennial_warranty,
    payment_terms,
    placeholder("C007", "Withdrawal period"),
    placeholder("C008", "Terms and conditions"),
    placeholder("C009", "Abusive clauses"),
    vat_rate,
    placeholder("C011", "Eco-contribution"),
    placeholder("C012", "Consumer code"),
    placeholder("C013", "Legal protection"),
    placeholder("C014", "Mediation and arbitration"),
    placeholder("C015", "Complaint rights"),
    quote_validity,
    placeholder("C017", "Contract termination"),
    placeholder("C018", "Parties responsibilities"),
    damage_insurance,
    placeholder("C020", "Urbanism compliance"),
    placeholder("C021", "Administrative permits"),
    placeholder("C022", "Environmental compliance"),
    waste_management,
    placeholder("C024", "Site safety"),
    placeholder("C025", "Accessibility compliance"),
    thermal_regulation,
    product_certifications,
    placeholder("C028", "Subcontractors tracking"),
    placeholder("C029", "Safety coordinator"),
    placeholder("C030", "Risk prevention plan"),
    placeholder("C031", "Mandatory technical checks"),
    placeholder("C032", "Gas and electricity compliance"),
    placeholder("C033", "Technical inspection"),
    placeholder("C034", "Building diagnostics"),
    placeholder("C035", "Neighbour protection"),
    placeholder("C036", "Force majeure clauses"),
)

ADVANCED_COMPLIANCE_CRITERIA = (
    legal_mentions,
    legal_id_present,
    legal_standing,
    trade_qualifications,
    insurance_status,
    dtu_compliance,
    product_certifications,
    thermal_regulation,
    vat_rate,
    quote_validity,
)
