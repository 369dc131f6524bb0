from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from torp.models.enumerations import AmountBracket, ClientProfile, ProjectType


class ScoringContext(BaseModel):
    """Per-call scoring parameters. Immutable."""

    model_config = ConfigDict(frozen=True)

    profile: ClientProfile = Field(
        default=ClientProfile.STANDARD,
        description="Rubric weight profile (standard, individual, business)"
    )
    project_type: ProjectType = ProjectType.RENOVATION
    trade_type: Optional[str] = Field(default=None, description="Declared trade (plumbing, roofing...)")
    region: Optional[str] = None
    amount_bracket: Optional[AmountBracket] = None
