"""
Guarantee criteria (G001-G008): legal warranties, insurance cover and
commercial warranty extensions.
"""

from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, mentions, neutral, scored


def decennial_insurance(quote, enrichment, context) -> CriterionResult:
    """G001: ten-year liability insurance stated or on record."""
    insurance = enrichment.company.insurance if enrichment.company else None
    if insurance is not None and insurance.has_decennial:
        return scored("G001", 1.0, "Decennial insurance on record")
    if quote.legal_mentions.has_insurance or mentions(quote.searchable_text(), r"d[ée]cennale"):
        return scored("G001", 1.0, "Decennial insurance mentioned on the quote")
    if insurance is not None:
        return scored("G001", 0.0, "No decennial insurance on record")
    return scored("G001", 0.3, "Decennial insurance not mentioned")


def completion_warranty(quote, enrichment, context) -> CriterionResult:
    """G002: one-year completion warranty ("parfait achèvement")."""
    return keyword_check(
        "G002",
        quote.searchable_text(),
        (r"parfait ach[èe]vement", r"r[ée]ception"),
        1.0,
        0.5,
        "Completion warranty mentioned",
        "Completion warranty not mentioned",
    )


def biennial_warranty(quote, enrichment, context) -> CriterionResult:
    """G003: two-year proper-functioning warranty."""
    return keyword_check(
        "G003",
        quote.searchable_text(),
        (r"biennale?", r"bon fonctionnement", r"\b2 ans\b", r"deux ans"),
        1.0,
        0.4,
        "Biennial warranty mentioned",
        "Biennial warranty not mentioned",
    )


def insurance_cover_amount(quote, enrichment, context) -> CriterionResult:
    """G004: decennial cover at least equal to the quote amount."""
    insurance = enrichment.company.insurance if enrichment.company else None
    if insurance is None or insurance.decennial_amount is None or quote.total_amount <= 0:
        return neutral("G004", "Insurance cover amount unknown")
    if insurance.decennial_amount >= quote.total_amount:
        return scored("G004", 1.0, "Cover exceeds the quote amount")
    return scored("G004", 0.6, "Cover below the quote amount")


def manufacturer_warranty(quote, enrichment, context) -> CriterionResult:
    """G005"""
    return keyword_check(
        "G005",
        quote.searchable_text(),
        (r"garantie fabricant", r"garantie constructeur", r"warranty"),
        1.0,
        0.44,
        "Manufacturer warranty mentioned",
        "No manufacturer warranty",
    )


def extended_warranty(quote, enrichment, context) -> CriterionResult:
    """G006"""
    return keyword_check(
        "G006",
        quote.searchable_text(),
        (r"garantie [ée]tendue", r"extension de garantie"),
        1.0,
        0.44,
        "Extended warranty offered",
        "No extended warranty",
    )


def deposit_protection(quote, enrichment, context) -> CriterionResult:
    """G007: a requested deposit is backed by a financial guarantee."""
    text = quote.searchable_text()
    has_deposit = bool(quote.totals.deposit) or mentions(text, r"acompte", r"avance")
    if not has_deposit:
        return scored("G007", 0.6, "No deposit requested")
    if mentions(text, r"garantie financi[èe]re", r"caution"):
        return scored("G007", 1.0, "Deposit backed by a financial guarantee")
    return scored("G007", 0.4, "Deposit without financial guarantee")


def damage_insurance(quote, enrichment, context) -> CriterionResult:
    """G008: property damage insurance ("dommages-ouvrage")."""
    return keyword_check(
        "G008",
        quote.searchable_text(),
        (r"dommages?[ -]ouvrage",),
        1.0,
        0.4,
        "Property damage insurance mentioned",
        "Property damage insurance not mentioned",
    )


GUARANTEE_CRITERIA = (
    decennial_insurance,
    completion_warranty,
    biennial_warranty,
    insurance_cover_amount,
    manufacturer_warranty,
    extended_warranty,
    deposit_protection,
    damage_insurance,
)
