"""
Price criteria (P001-P014).

Regional market position, unit-price coherence with reference prices, totals
reconciliation and line-item transparency.
"""

from torp.config import get_settings
from torp.models.result import CriterionResult
from torp.scoring.criteria.common import (
    mentions,
    neutral,
    placeholder,
    price_deviation,
    scored,
)

_LABOUR_PATTERNS = (r"main[ -]d.(oe|œ)uvre", r"\bmo\b", r"\bpose\b")
_MATERIAL_PATTERNS = (r"mat[ée]riau", r"fourniture")


def regional_price_deviation(quote, enrichment, context) -> CriterionResult:
    """P001: quote total vs regional average price."""
    deviation = price_deviation(quote, enrichment.regional_benchmark)
    if deviation is None:
        return neutral("P001", "No regional benchmark")
    spread = abs(deviation)
    if spread <= 0.05:
        score = 1.0
    elif spread <= 0.15:
        score = 0.8
    elif spread <= 0.30:
        score = 0.5
    else:
        score = 0.2
    return scored("P001", score, f"{deviation:+.0%} vs regional average")


def unit_price_references(quote, enrichment, context) -> CriterionResult:
    """P002: unit prices within 30% of the matching reference price."""
    if not enrichment.price_references or not quote.items:
        return neutral("P002", "No reference prices")

    matched = 0
    coherent = 0
    for item in quote.items:
        if item.unit_price <= 0:
            continue
        description = item.description.lower()
        reference = next(
            (r for r in enrichment.price_references if r.label.lower() in description),
            None,
        )
        if reference is None:
            continue
        matched += 1
        if abs(item.unit_price - reference.average_price) / reference.average_price < 0.3:
            coherent += 1

    if matched == 0:
        return neutral("P002", "No line matches a reference price")
    rate = coherent / matched
    return scored("P002", rate, f"{rate:.0%} of referenced unit prices coherent")


def totals_coherence(quote, enrichment, context) -> CriterionResult:
    """P003: line totals add up to the declared subtotal."""
    reconciled = quote.totals_reconcile(get_settings().TOTALS_TOLERANCE)
    if reconciled is None:
        return neutral("P003", "Nothing to reconcile")
    if reconciled:
        return scored("P003", 1.0, "Line totals match the subtotal")
    return scored("P003", 0.5, "Line totals do not match the subtotal")


def overpricing(quote, enrichment, context) -> CriterionResult:
    """P004: more than 30% above the regional average."""
    deviation = price_deviation(quote, enrichment.regional_benchmark)
    if deviation is None:
        return neutral("P004", "No regional benchmark")
    if deviation > 0.3:
        return scored("P004", 0.2, "Total more than 30% above the regional average")
    return scored("P004", 1.0, "No overpricing detected")


def materials_labour_ratio(quote, enrichment, context) -> CriterionResult:
    """P007: materials share of materials + labour, ideal around 45%."""
    labour = 0.0
    materials = 0.0
    for item in quote.items:
        description = item.description.lower()
        if mentions(description, *_LABOUR_PATTERNS):
            labour += item.total_price
        elif mentions(description, *_MATERIAL_PATTERNS):
            materials += item.total_price

    if labour <= 0 or materials <= 0:
        return neutral("P007", "Materials and labour not itemised separately")
    ratio = materials / (materials + labour)
    return scored(
        "P007",
        1.0 - abs(ratio - 0.45) * 2,
        f"Materials/labour split {ratio:.0%}/{1 - ratio:.0%}",
    )


def underpricing(quote, enrichment, context) -> CriterionResult:
    """P009: more than 20% below the regional average is suspicious too."""
    deviation = price_deviation(quote, enrichment.regional_benchmark)
    if deviation is None:
        return neutral("P009", "No regional benchmark")
    if deviation < -0.2:
        return scored("P009", 0.3, "Total more than 20% below the regional average")
    return scored("P009", 1.0, "No underpricing detected")


def line_item_transparency(quote, enrichment, context) -> CriterionResult:
    """P012: itemised quote with unit prices and quantities."""
    if not quote.items:
        return neutral("P012", "No line items")
    score = 0.4
    if all(item.unit_price > 0 for item in quote.items):
        score += 0.3
    if all(item.quantity > 0 for item in quote.items):
        score += 0.3
    return scored("P012", score, f"{len(quote.items)} line items")


def price_per_sqm(quote, enrichment, context) -> CriterionResult:
    """P013: price per square metre vs the regional average."""
    benchmark = enrichment.regional_benchmark
    surface = quote.project.surface
    if not surface or benchmark is None or not benchmark.average_price_sqm:
        return neutral("P013", "No surface or regional price per m²")
    per_sqm = quote.total_amount / surface
    if per_sqm <= 0:
        return neutral("P013", "No quote amount")

    deviation = (per_sqm - benchmark.average_price_sqm) / benchmark.average_price_sqm
    if deviation < -0.2:
        score = 1.0
    elif deviation < -0.1:
        score = 0.83
    elif deviation < 0.1:
        score = 0.67
    elif deviation < 0.3:
        score = 0.33
    else:
        score = 0.17
    return scored("P013", score, f"{per_sqm:.0f}/m² ({deviation:+.0%} vs region)")


def value_indicators(quote, enrichment, context) -> CriterionResult:
    """P014: quality wording together with a detailed breakdown."""
    text = quote.searchable_text()
    has_quality = mentions(text, r"haut de gamme", r"premium", r"qualit[ée]", r"garantie")
    has_detail = len(quote.items) >= 5
    if has_quality and has_detail:
        return scored("P014", 1.0, "Quality wording and detailed breakdown")
    if has_quality or has_detail:
        return scored("P014", 0.65, "Partial value justification")
    return scored("P014", 0.35, "No value justification")


LEGACY_PRICE_CRITERIA = (
    regional_price_deviation,
    unit_price_references,
    totals_coherence,
    overpricing,
    placeholder("P005", "Labour costs"),
    placeholder("P006", "Contractor margin"),
    materials_labour_ratio,
    placeholder("P008", "Market comparison"),
    underpricing,
    placeholder("P010", "Options and variants"),
    placeholder("P011", "Discounts"),
    line_item_transparency,
)

ADVANCED_PRICE_CRITERIA = (
    regional_price_deviation,
    price_per_sqm,
    unit_price_references,
    materials_labour_ratio,
    totals_coherence,
    overpricing,
    underpricing,
    value_indicators,
)
