from enum import Enum


class RubricVersion(str, Enum):
    LEGACY = "legacy-1.0"        # 4 axes, 1000 points
    ADVANCED = "advanced-2.0"    # 8 axes, 1200 points


class AxisId(str, Enum):
    COMPLIANCE = "compliance"
    PRICE = "price"
    QUALITY = "quality"
    FEASIBILITY = "feasibility"
    TRANSPARENCY = "transparency"
    GUARANTEES = "guarantees"
    INNOVATION = "innovation"
    TIMELINE = "timeline"


class ClientProfile(str, Enum):
    STANDARD = "standard"
    INDIVIDUAL = "individual"    # B2C
    BUSINESS = "business"        # B2B


class ProjectType(str, Enum):
    CONSTRUCTION = "construction"
    RENOVATION = "renovation"
    EXTENSION = "extension"
    MAINTENANCE = "maintenance"


class AmountBracket(str, Enum):
    LOW = "low"          # < 10k
    MEDIUM = "medium"    # 10k - 50k
    HIGH = "high"        # > 50k


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"

    @property
    def rank(self) -> int:
        """Higher is better; E = 0, A+ = 5."""
        return _GRADE_RANK[self]


_GRADE_RANK = {
    Grade.E: 0,
    Grade.D: 1,
    Grade.C: 2,
    Grade.B: 3,
    Grade.A: 4,
    Grade.A_PLUS: 5,
}


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class BenchmarkStatus(str, Enum):
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    CANCELLED = "cancelled"


class SampleStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"
