"""
Enrichment context - pre-fetched third-party data handed to the engine.

Company registry, financial history, price indices, regional benchmarks and
DTU references are fetched by collaborators before scoring. A failed or
skipped lookup simply leaves the corresponding field empty.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Certification body (Qualibat, RGE, Qualifelec...)")
    name: str = ""
    valid: bool = True
    valid_until: Optional[date] = None


class InsuranceStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_liability: bool = False
    has_decennial: bool = False
    decennial_amount: Optional[float] = Field(default=None, ge=0)


class Reputation(BaseModel):
    model_config = ConfigDict(frozen=True)

    average_rating: float = Field(..., ge=0, le=5)
    review_count: int = Field(default=0, ge=0)


class CompanyRecord(BaseModel):
    """Company registry + financial + legal record."""

    model_config = ConfigDict(frozen=True)

    legal_id: Optional[str] = None
    legal_status: Optional[str] = None
    has_collective_procedure: Optional[bool] = Field(
        default=None,
        description="Receivership / liquidation procedure on record"
    )
    revenue_history: List[float] = Field(
        default_factory=list,
        description="Annual revenue, oldest first"
    )
    net_result_history: List[float] = Field(
        default_factory=list,
        description="Annual net result, oldest first"
    )
    default_risk: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Predicted probability of default, in percent"
    )
    certifications: List[Certification] = Field(default_factory=list)
    insurance: Optional[InsuranceStatus] = None
    reputation: Optional[Reputation] = None
    similar_projects: Optional[int] = Field(default=None, ge=0)
    years_active: Optional[int] = Field(default=None, ge=0)

    @property
    def has_financial_data(self) -> bool:
        return bool(self.revenue_history or self.net_result_history)

    @property
    def valid_certifications(self) -> List[Certification]:
        return [c for c in self.certifications if c.valid]


class PriceReference(BaseModel):
    """Reference unit price for a type of work."""

    model_config = ConfigDict(frozen=True)

    label: str
    unit: Optional[str] = None
    average_price: float = Field(..., gt=0)
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)


class RegionalBenchmarkData(BaseModel):
    """Regional price distribution for comparable projects."""

    model_config = ConfigDict(frozen=True)

    region: str
    average_price: float = Field(..., ge=0)
    price_min: float = Field(..., ge=0)
    price_max: float = Field(..., ge=0)
    average_price_sqm: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_range(self):
        """Ensure price_max >= price_min."""
        if self.price_max < self.price_min:
            raise ValueError("price_max must be >= price_min")
        return self


class DTUReference(BaseModel):
    """Technical standard (DTU) reference and its compliance assessment."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str = ""
    applicable: bool = True
    compliance_score: Optional[float] = Field(default=None, ge=0, le=100)


class EnrichmentContext(BaseModel):
    """All optional enrichment data for one scoring call."""

    model_config = ConfigDict(frozen=True)

    company: Optional[CompanyRecord] = None
    price_references: List[PriceReference] = Field(default_factory=list)
    regional_benchmark: Optional[RegionalBenchmarkData] = None
    dtus: List[DTUReference] = Field(default_factory=list)

    def sources(self) -> List[str]:
        """Names of the enrichment sources that delivered data."""
        sources: List[str] = []
        if self.company is not None:
            sources.append("company_registry")
            if self.company.has_financial_data:
                sources.append("financial_history")
        if self.price_references:
            sources.append("price_references")
        if self.regional_benchmark is not None:
            sources.append("regional_benchmark")
        if self.dtus:
            sources.append("dtu_references")
        return sources
