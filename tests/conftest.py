# tests/conftest.py

"""
Pytest Fixtures - shared quotes, enrichment contexts and rubrics.

QUOTE FIXTURES:
- complete_quote: every block filled, line totals reconcile with the subtotal
- sparse_quote:   empty extraction (no company, no items, no totals)

ENRICHMENT FIXTURES:
- full_enrichment: company record + price references + regional benchmark
  (range 10 000 - 20 000) + DTU references
"""

from datetime import date

import pytest

from torp.models.context import ScoringContext
from torp.models.enrichment import (
    Certification,
    CompanyRecord,
    DTUReference,
    EnrichmentContext,
    InsuranceStatus,
    PriceReference,
    RegionalBenchmarkData,
    Reputation,
)
from torp.models.enumerations import AxisId, ClientProfile, ProjectType
from torp.models.quote import (
    ClientInfo,
    CompanyInfo,
    ExtractedQuoteData,
    LegalMentions,
    LineItem,
    ProjectInfo,
    QuoteDates,
    QuoteTotals,
)
from torp.scoring.axes import AxisEvaluator
from torp.scoring.criteria.common import placeholder
from torp.scoring.grade_classifier import GradeClassifier
from torp.scoring.rubric import LEGACY_GRADES, RubricDefinition


# =============================================================================
# QUOTE FIXTURES
# =============================================================================

@pytest.fixture
def complete_quote():
    """Bathroom renovation quote with three reconciling line items."""
    return ExtractedQuoteData(
        quote_id="q-complete-001",
        company=CompanyInfo(
            name="Durand Rénovation",
            legal_id="12345678900011",
            address="12 rue des Lilas, 69003 Lyon",
            phone="0478000000",
            email="contact@durand-renovation.fr",
        ),
        client=ClientInfo(name="M. Martin", address="4 place Bellecour, 69002 Lyon"),
        project=ProjectInfo(
            title="Rénovation salle de bain",
            description="Rénovation complète avec isolation et planning détaillé, garantie décennale",
            location="Lyon",
            surface=10.0,
        ),
        items=[
            LineItem(
                description="Fourniture carrelage grès cérame marque Porcelanosa référence P-4521",
                quantity=10,
                unit="m2",
                unit_price=600,
                total_price=6000,
            ),
            LineItem(
                description="Main d'oeuvre pose carrelage et préparation des supports",
                quantity=20,
                unit="h",
                unit_price=250,
                total_price=5000,
            ),
            LineItem(
                description="Fourniture et pose receveur de douche extra-plat, modèle Kinedo",
                quantity=1,
                unit="u",
                unit_price=4000,
                total_price=4000,
            ),
        ],
        totals=QuoteTotals(subtotal=15000, tax=1500, tax_rate=0.10, total=16500),
        dates=QuoteDates(
            issue_date=date(2024, 3, 1),
            valid_until=date(2024, 4, 1),
            start_date=date(2024, 5, 1),
            end_date=date(2024, 5, 31),
        ),
        legal_mentions=LegalMentions(has_insurance=True, has_warranty=True, has_payment_terms=True),
    )


@pytest.fixture
def sparse_quote():
    """Nothing could be extracted from the document."""
    return ExtractedQuoteData(quote_id="q-sparse-001")


# =============================================================================
# ENRICHMENT FIXTURES
# =============================================================================

@pytest.fixture
def regional_benchmark():
    return RegionalBenchmarkData(
        region="Auvergne-Rhône-Alpes",
        average_price=15000,
        price_min=10000,
        price_max=20000,
        average_price_sqm=1500,
    )


@pytest.fixture
def company_record():
    return CompanyRecord(
        legal_id="12345678900011",
        legal_status="SARL",
        has_collective_procedure=False,
        revenue_history=[400000, 450000, 520000],
        net_result_history=[20000, 25000, 31000],
        default_risk=5,
        certifications=[
            Certification(type="Qualibat", name="Qualibat carrelage"),
            Certification(type="RGE", name="RGE Eco Artisan"),
        ],
        insurance=InsuranceStatus(has_liability=True, has_decennial=True, decennial_amount=500000),
        reputation=Reputation(average_rating=4.6, review_count=42),
        similar_projects=12,
        years_active=15,
    )


@pytest.fixture
def full_enrichment(company_record, regional_benchmark):
    return EnrichmentContext(
        company=company_record,
        price_references=[PriceReference(label="carrelage", unit="m2", average_price=550)],
        regional_benchmark=regional_benchmark,
        dtus=[DTUReference(code="DTU 52.1", name="Revêtements de sol scellés", compliance_score=90)],
    )


# =============================================================================
# CONTEXT FIXTURES
# =============================================================================

@pytest.fixture
def renovation_context():
    return ScoringContext(profile=ClientProfile.INDIVIDUAL, project_type=ProjectType.RENOVATION)


@pytest.fixture
def construction_context():
    return ScoringContext(profile=ClientProfile.BUSINESS, project_type=ProjectType.CONSTRUCTION)


# =============================================================================
# RUBRIC FIXTURES
# =============================================================================

@pytest.fixture
def uniform_rubric():
    """Legacy-shaped rubric whose criteria all return the neutral 0.7."""
    axes = (
        AxisEvaluator(AxisId.PRICE, "Price", 250, (placeholder("X1", "Uniform"),)),
        AxisEvaluator(AxisId.QUALITY, "Quality", 300, (placeholder("X2", "Uniform"),)),
        AxisEvaluator(AxisId.TIMELINE, "Timeline", 200, (placeholder("X3", "Uniform"),)),
        AxisEvaluator(AxisId.COMPLIANCE, "Compliance", 250, (placeholder("X4", "Uniform"),)),
    )
    return RubricDefinition(
        version="uniform-test",
        total_points=1000,
        axes=axes,
        weights={
            AxisId.PRICE: 0.25,
            AxisId.QUALITY: 0.30,
            AxisId.TIMELINE: 0.20,
            AxisId.COMPLIANCE: 0.25,
        },
        grades=GradeClassifier(LEGACY_GRADES, rubric_version="uniform-test"),
    )
