from __future__ import annotations

import logging
from typing import Callable, Mapping

from django.conf import settings

from .constants import (
    DEFAULT_TEMPERAMENT_STRATEGY,
    FIVE_TRAIT_INVERTED,
    FIVE_TRAIT_MIXES,
    FOUR_FACTOR_MIXES,
    FRAMEWORK_CONFIDENCE,
    NINE_TYPE_MAP,
    TEMPERAMENT_RULES,
    Framework,
)
from .exceptions import UnknownStrategyError
from .records import FrameworkResult
from .scoring import round_half_up

logger = logging.getLogger(__name__)

Percentages = Mapping[str, float]


def map_frameworks(
    percentages: Percentages, *, temperament_strategy: str | None = None
) -> dict[str, FrameworkResult]:
    return {
        Framework.TEMPERAMENT.value: map_temperament(percentages, strategy=temperament_strategy),
        Framework.FIVE_TRAIT.value: map_five_trait(percentages),
        Framework.FOUR_FACTOR.value: map_four_factor(percentages),
        Framework.NINE_TYPE.value: map_nine_type(percentages),
    }


def resolve_temperament_strategy(strategy: str | None = None) -> str:
    if strategy is None:
        strategy = getattr(settings, "INTELLIGENCE_TEMPERAMENT_STRATEGY", DEFAULT_TEMPERAMENT_STRATEGY)
    if strategy not in TEMPERAMENT_STRATEGIES:
        raise UnknownStrategyError(strategy)
    return strategy


def map_temperament(percentages: Percentages, *, strategy: str | None = None) -> FrameworkResult:
    strategy = resolve_temperament_strategy(strategy)
    return TEMPERAMENT_STRATEGIES[strategy](percentages)


def _balanced_baseline(percentages: Percentages) -> FrameworkResult:
    letters = []
    axis_confidences = []
    details: dict = {"strategy": "balanced_baseline", "axes": {}}
    for axis in TEMPERAMENT_RULES["balanced_baseline"]["axes"]:
        baseline = axis["baseline"]
        pole_score = sum(_score(percentages, key) for key in axis["dimensions"])
        opposite_score = baseline - pole_score
        first, second = axis["poles"]
        letters.append(first if pole_score > opposite_score else second)
        confidence = _clamp(abs(pole_score - opposite_score) / baseline, 0.0, 1.0)
        axis_confidences.append(confidence)
        details["axes"][axis["axis"]] = {
            first: pole_score,
            second: opposite_score,
            "baseline": baseline,
            "confidence": round(confidence, 4),
        }
        for label, value in zip(axis["labels"], (pole_score, opposite_score)):
            details[label] = value

    confidence = min(axis_confidences) if axis_confidences else 0.0
    if _is_degenerate(percentages):
        confidence = FRAMEWORK_CONFIDENCE["degenerate"]
    return FrameworkResult(Framework.TEMPERAMENT.value, "".join(letters), round(confidence, 4), details)


def _centered_offset(percentages: Percentages) -> FrameworkResult:
    rules = TEMPERAMENT_RULES["centered_offset"]
    midpoint = rules["midpoint"]
    letters = []
    magnitudes = []
    details: dict = {"strategy": "centered_offset", "axes": {}}
    for axis in rules["axes"]:
        value = sum(
            (_score(percentages, key) - midpoint) * axis["direction"] for key in axis["dimensions"]
        )
        positive, negative = axis["poles"]
        letters.append(positive if value > 0 else negative)
        magnitudes.append(abs(value))
        details["axes"][axis["axis"]] = value

    confidence = min(1.0, min(magnitudes) / midpoint) if magnitudes else 0.0
    if _is_degenerate(percentages):
        confidence = FRAMEWORK_CONFIDENCE["degenerate"]
    return FrameworkResult(Framework.TEMPERAMENT.value, "".join(letters), round(confidence, 4), details)


TEMPERAMENT_STRATEGIES: dict[str, Callable[[Percentages], FrameworkResult]] = {
    "balanced_baseline": _balanced_baseline,
    "centered_offset": _centered_offset,
}


def map_five_trait(percentages: Percentages) -> FrameworkResult:
    traits = {
        trait: round_half_up(_mix(percentages, weights)) for trait, weights in FIVE_TRAIT_MIXES.items()
    }
    for trait, source in FIVE_TRAIT_INVERTED.items():
        traits[trait] = round_half_up(100 - _score(percentages, source))

    # sorted() is stable, so equal traits keep their table order.
    ranked = sorted(traits, key=lambda trait: traits[trait], reverse=True)
    result = "-".join(trait.title() for trait in ranked[:2])
    return FrameworkResult(
        Framework.FIVE_TRAIT.value,
        result,
        _fixed_confidence("five_trait", percentages),
        dict(traits),
    )


def map_four_factor(percentages: Percentages) -> FrameworkResult:
    factors = {}
    details = {}
    for letter, (name, weights) in FOUR_FACTOR_MIXES.items():
        value = round_half_up(_mix(percentages, weights))
        factors[letter] = value
        details[name] = value

    dominant = None
    for letter, value in factors.items():
        if dominant is None or value > factors[dominant]:
            dominant = letter
    details["dominant"] = dominant
    return FrameworkResult(
        Framework.FOUR_FACTOR.value,
        dominant,
        _fixed_confidence("four_factor", percentages),
        details,
    )


def map_nine_type(percentages: Percentages) -> FrameworkResult:
    type_scores = {}
    for number, (_, dimensions) in NINE_TYPE_MAP.items():
        type_scores[number] = sum(_score(percentages, key) for key in dimensions) / len(dimensions)

    primary = None
    for number in sorted(type_scores):
        if primary is None or type_scores[number] > type_scores[primary]:
            primary = number
    details = {f"type_{number}": score for number, score in type_scores.items()}
    details["primary"] = primary
    details["label"] = NINE_TYPE_MAP[primary][0]
    return FrameworkResult(
        Framework.NINE_TYPE.value,
        f"Type {primary}",
        _fixed_confidence("nine_type", percentages),
        details,
    )


def _score(percentages: Percentages, key: str) -> float:
    value = percentages.get(key)
    return float(value) if value is not None else 0.0


def _mix(percentages: Percentages, weights: Mapping[str, float]) -> float:
    return sum(_score(percentages, key) * weight for key, weight in weights.items())


def _is_degenerate(percentages: Percentages) -> bool:
    return not any(_score(percentages, key) for key in percentages)


def _fixed_confidence(framework: str, percentages: Percentages) -> float:
    if _is_degenerate(percentages):
        return FRAMEWORK_CONFIDENCE["degenerate"]
    return FRAMEWORK_CONFIDENCE[framework]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
