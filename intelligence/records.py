from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Dimension:
    key: str
    weight: float
    description: str
    phrase: str


@dataclass(frozen=True)
class QuestionDefinition:
    """Immutable catalog entry as the engine sees it."""

    id: str
    question_type: str
    schema: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ResponseRecord:
    question_id: str
    question_type: str
    payload: Any
    timestamp: datetime | None = None


@dataclass(frozen=True)
class Contribution:
    dimension: str
    value: float


@dataclass(frozen=True)
class DimensionTally:
    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> "DimensionTally":
        return DimensionTally(total=self.total + value, count=self.count + 1)


@dataclass(frozen=True)
class DimensionScore:
    dimension: str
    percentage: float
    weighted_score: float
    percentile: int
    total: float
    count: int


@dataclass(frozen=True)
class FrameworkResult:
    framework: str
    result: str
    confidence: float
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ConsistencySignal:
    consistency_score: float
    engagement_level: str
    average_response_time_ms: float
    decision_speed: str
    consistency_markers: tuple[str, ...] = ()
    response_count: int = 0
    fixed_choice_count: int = 0

    def as_dict(self) -> dict:
        return {
            "consistency_score": self.consistency_score,
            "engagement_level": self.engagement_level,
            "average_response_time_ms": self.average_response_time_ms,
            "decision_speed": self.decision_speed,
            "consistency_markers": list(self.consistency_markers),
            "response_count": self.response_count,
            "fixed_choice_count": self.fixed_choice_count,
        }


@dataclass(frozen=True)
class AssessmentScoring:
    dimension_scores: dict[str, DimensionScore]
    frameworks: dict[str, FrameworkResult]
    consistency: ConsistencySignal
    report: dict

    @property
    def percentages(self) -> dict[str, float]:
        return {key: score.percentage for key, score in self.dimension_scores.items()}

    @property
    def average_score(self) -> float:
        if not self.dimension_scores:
            return 0.0
        values = [score.percentage for score in self.dimension_scores.values()]
        return round(sum(values) / len(values), 2)
