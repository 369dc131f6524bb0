"""
Timeline criteria (D001-D014).
"""

from torp.models.enumerations import ProjectType
from torp.models.result import CriterionResult
from torp.scoring.criteria.common import keyword_check, neutral, placeholder, scored


def expected_duration_days(project_type: ProjectType, amount: float) -> float:
    """Rough duration estimate, scaled by quote amount."""
    if project_type == ProjectType.CONSTRUCTION:
        return max(90.0, amount / 100_000 * 60)
    return max(30.0, amount / 50_000 * 30)


def duration_realism(quote, enrichment, context) -> CriterionResult:
    """D001: planned duration vs the expected duration for this project type."""
    duration = quote.dates.duration_days
    if duration is None:
        return neutral("D001", "No start and end dates")
    expected = expected_duration_days(context.project_type, quote.total_amount)
    deviation = abs(duration - expected) / expected

    if deviation < 0.15:
        score = 1.0
    elif deviation < 0.3:
        score = 0.8
    elif deviation < 0.5:
        score = 0.53
    else:
        score = 0.27
    return scored("D001", score, f"{duration} days planned vs {expected:.0f} expected")


def phasing_coherence(quote, enrichment, context) -> CriterionResult:
    """D002"""
    return keyword_check(
        "D002",
        quote.searchable_text(),
        (r"\bphases?\b", r"phasage", r"interface", r"corps d.[ée]tat"),
        1.0,
        0.57,
        "Works phasing described",
        "No phasing described",
    )


def buffer_margin(quote, enrichment, context) -> CriterionResult:
    """D003"""
    return keyword_check(
        "D003",
        quote.searchable_text(),
        (r"\bmarge\b", r"buffer", r"al[ée]as?\b", r"contingence"),
        1.0,
        0.5,
        "Schedule buffer planned",
        "No schedule buffer",
    )


def schedule_clarity(quote, enrichment, context) -> CriterionResult:
    """D004: start and end dates stated."""
    dates = quote.dates
    if dates.start_date and dates.end_date:
        return scored("D004", 1.0, "Start and end dates stated")
    if dates.start_date or dates.end_date:
        return scored("D004", 0.6, "Only one schedule date stated")
    return scored("D004", 0.3, "No schedule dates")


def materials_lead_time(quote, enrichment, context) -> CriterionResult:
    """D006"""
    return keyword_check(
        "D006",
        quote.searchable_text(),
        (r"disponibilit[ée]", r"\bstock\b", r"approvisionnement", r"d[ée]lai"),
        1.0,
        0.58,
        "Supply lead times addressed",
        "Supply lead times not addressed",
    )


def trades_coordination(quote, enrichment, context) -> CriterionResult:
    """D007"""
    return keyword_check(
        "D007",
        quote.searchable_text(),
        (r"coordination", r"intervenants?", r"s[ée]quence", r"encha[îi]nement", r"planning d[ée]taill[ée]"),
        1.0,
        0.5,
        "Trades coordination described",
        "Trades coordination not described",
    )


def milestones(quote, enrichment, context) -> CriterionResult:
    """D009"""
    return keyword_check(
        "D009",
        quote.searchable_text(),
        (r"jalons?", r"[ée]tapes?", r"planning"),
        1.0,
        0.43,
        "Milestones defined",
        "No milestones",
    )


def delay_penalties(quote, enrichment, context) -> CriterionResult:
    """D011"""
    return keyword_check(
        "D011",
        quote.searchable_text(),
        (r"p[ée]nalit[ée]s?", r"retard", r"sanction"),
        1.0,
        0.5,
        "Delay penalties stipulated",
        "No delay penalties",
    )


def delivery_track_record(quote, enrichment, context) -> CriterionResult:
    """D013: customer rating as a proxy for keeping deadlines."""
    rep = enrichment.company.reputation if enrichment.company else None
    if rep is None:
        return neutral("D013", "No reputation data")
    rating = rep.average_rating
    if rating >= 4.5:
        score = 1.0
    elif rating >= 4.0:
        score = 0.8
    elif rating >= 3.5:
        score = 0.53
    else:
        score = 0.27
    return scored("D013", score, f"Rated {rating:.1f}/5")


def completion_incentives(quote, enrichment, context) -> CriterionResult:
    """D014"""
    return keyword_check(
        "D014",
        quote.searchable_text(),
        (r"\bbonus\b", r"\bprime\b", r"anticipation"),
        1.0,
        0.5,
        "Early completion incentive",
        "No completion incentive",
    )


LEGACY_TIMELINE_CRITERIA = (
    duration_realism,
    phasing_coherence,
    buffer_margin,
    schedule_clarity,
    placeholder("D005", "Seasonal constraints"),
    materials_lead_time,
    trades_coordination,
    placeholder("D008", "Interference management"),
    milestones,
    placeholder("D010", "Schedule flexibility"),
    delay_penalties,
    placeholder("D012", "Timeline guarantee"),
)

ADVANCED_TIMELINE_CRITERIA = (
    duration_realism,
    buffer_margin,
    phasing_coherence,
    trades_coordination,
    delivery_track_record,
    delay_penalties,
    completion_incentives,
)
