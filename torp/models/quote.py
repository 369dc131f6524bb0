"""
Extracted quote data - the structured form of a construction quote ("devis")
as delivered by the document-analysis collaborator.
"""

from datetime import date
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class CompanyInfo(BaseModel):
    """Contractor identity as printed on the quote."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="Company trade name")
    legal_id: Optional[str] = Field(
        default=None,
        description="Legal company identifier (SIRET)"
    )
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @property
    def has_legal_id(self) -> bool:
        """A blank or whitespace-only identifier counts as missing."""
        return bool(self.legal_id and self.legal_id.strip())


class ClientInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class ProjectInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    surface: Optional[float] = Field(
        default=None,
        gt=0,
        description="Project surface in square metres, when stated"
    )


class LineItem(BaseModel):
    """One priced line of the quote."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    quantity: float = Field(default=0.0, ge=0)
    unit: Optional[str] = None
    unit_price: float = Field(default=0.0, ge=0)
    total_price: float = Field(default=0.0, ge=0)
    category: Optional[str] = None


class QuoteTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Optional[float] = Field(default=None, ge=0, description="Total excluding tax")
    tax: Optional[float] = Field(default=None, ge=0)
    tax_rate: Optional[float] = Field(
        default=None,
        ge=0,
        le=1,
        description="Tax rate as a fraction (0.2 = 20%)"
    )
    total: Optional[float] = Field(default=None, ge=0, description="Total including tax")
    deposit: Optional[float] = Field(default=None, ge=0)


class QuoteDates(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_date: Optional[date] = None
    valid_until: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def duration_days(self) -> Optional[int]:
        """Planned works duration, or None when the dates are missing or inverted."""
        if self.start_date is None or self.end_date is None:
            return None
        days = (self.end_date - self.start_date).days
        return days if days >= 0 else None


class LegalMentions(BaseModel):
    """Presence flags for the legal mentions detected on the document."""

    model_config = ConfigDict(frozen=True)

    has_insurance: bool = False
    has_warranty: bool = False
    has_payment_terms: bool = False


class ExtractedQuoteData(BaseModel):
    """
    Structured quote, input of the scoring engine.

    Every block is optional in practice: the extractor may deliver partial
    data and the engine scores whatever is present.
    """

    model_config = ConfigDict(frozen=True)

    quote_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Owning quote identifier"
    )
    company: CompanyInfo = Field(default_factory=CompanyInfo)
    client: ClientInfo = Field(default_factory=ClientInfo)
    project: ProjectInfo = Field(default_factory=ProjectInfo)
    items: List[LineItem] = Field(default_factory=list)
    totals: QuoteTotals = Field(default_factory=QuoteTotals)
    dates: QuoteDates = Field(default_factory=QuoteDates)
    legal_mentions: LegalMentions = Field(default_factory=LegalMentions)

    @property
    def line_items_total(self) -> float:
        """Sum of line totals."""
        return sum(item.total_price for item in self.items)

    @property
    def total_amount(self) -> float:
        """
        Quote amount used for price comparisons.

        Declared total first, then subtotal + tax, then the line sum.
        """
        if self.totals.total:
            return self.totals.total
        if self.totals.subtotal:
            return self.totals.subtotal + (self.totals.tax or 0.0)
        return self.line_items_total

    def totals_reconcile(self, tolerance: float = 0.01) -> Optional[bool]:
        """
        Check that line totals add up to the declared subtotal.

        Returns None when there is nothing to compare (no items or no
        declared subtotal), otherwise whether the difference is within
        ``tolerance`` (fraction of the subtotal).
        """
        if not self.items or self.totals.subtotal is None:
            return None
        difference = abs(self.line_items_total - self.totals.subtotal)
        return difference <= self.totals.subtotal * tolerance

    def searchable_text(self) -> str:
        """Lower-cased project and line descriptions, for keyword criteria."""
        parts = [
            self.project.title or "",
            self.project.description or "",
            *(item.description for item in self.items),
        ]
        return " ".join(parts).lower()
