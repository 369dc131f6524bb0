"""
criteria/ - criterion evaluators, one module per axis.

Each criterion is a pure function ``(quote, enrichment, context) ->
CriterionResult``. Modules expose the ordered criterion tuples used by the
legacy and advanced rubrics.
"""

from torp.scoring.criteria.common import CriterionFn, neutral, placeholder, scored
from torp.scoring.criteria.compliance import (
    ADVANCED_COMPLIANCE_CRITERIA,
    LEGACY_COMPLIANCE_CRITERIA,
)
from torp.scoring.criteria.feasibility import FEASIBILITY_CRITERIA
from torp.scoring.criteria.guarantees import GUARANTEE_CRITERIA
from torp.scoring.criteria.innovation import INNOVATION_CRITERIA
from torp.scoring.criteria.price import ADVANCED_PRICE_CRITERIA, LEGACY_PRICE_CRITERIA
from torp.scoring.criteria.quality import ADVANCED_QUALITY_CRITERIA, LEGACY_QUALITY_CRITERIA
from torp.scoring.criteria.timeline import ADVANCED_TIMELINE_CRITERIA, LEGACY_TIMELINE_CRITERIA
from torp.scoring.criteria.transparency import TRANSPARENCY_CRITERIA

__all__ = [
    "CriterionFn",
    "neutral",
    "placeholder",
    "scored",
    "ADVANCED_COMPLIANCE_CRITERIA",
    "ADVANCED_PRICE_CRITERIA",
    "ADVANCED_QUALITY_CRITERIA",
    "ADVANCED_TIMELINE_CRITERIA",
    "FEASIBILITY_CRITERIA",
    "GUARANTEE_CRITERIA",
    "INNOVATION_CRITERIA",
    "LEGACY_COMPLIANCE_CRITERIA",
    "LEGACY_PRICE_CRITERIA",
    "LEGACY_QUALITY_CRITERIA",
    "LEGACY_TIMELINE_CRITERIA",
    "TRANSPARENCY_CRITERIA",
]
