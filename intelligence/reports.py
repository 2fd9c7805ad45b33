from __future__ import annotations

import logging
import operator
from typing import Any, Callable, Mapping, Sequence

from . import narratives
from .consistency import INSUFFICIENT_DATA, LOW_VARIETY_MARKER
from .constants import (
    CULTURAL_FIT_WEIGHTS,
    DIMENSION_KEYS,
    DIMENSIONS,
    REPORT_RULES,
    RISK_LEVEL_ORDER,
    ROLE_FIT_WEIGHTS,
    Framework,
)
from .records import ConsistencySignal, FrameworkResult
from .scoring import round_half_up

logger = logging.getLogger(__name__)

OPERATORS = {
    ">=": operator.ge,
    ">": operator.gt,
    "<": operator.lt,
    "<=": operator.le,
}

REPORT_SECTIONS = (
    "executive_summary",
    "strengths",
    "growth_areas",
    "behavioral_predictions",
    "communication_style",
    "work_style",
    "team_dynamics",
    "risk_factors",
    "recommendations",
    "response_profile",
    "cultural_fit_score",
    "role_fit_scores",
)


def build_report(
    percentages: Mapping[str, float],
    frameworks: Mapping[str, FrameworkResult] | None = None,
    consistency: ConsistencySignal | None = None,
) -> dict:
    """
    Assemble every report section from finished scores.

    Each section is built on its own; one that fails is logged and replaced
    with an empty or neutral value so the rest of the report still renders.
    """
    frameworks = frameworks or {}
    builders: dict[str, tuple[Callable[[], Any], Any]] = {
        "executive_summary": (lambda: executive_summary(percentages, consistency), ""),
        "strengths": (lambda: identify_strengths(percentages), []),
        "growth_areas": (lambda: identify_growth_areas(percentages), []),
        "behavioral_predictions": (lambda: behavioral_predictions(percentages), []),
        "communication_style": (lambda: communication_style(percentages, frameworks), {}),
        "work_style": (lambda: work_style(percentages), {}),
        "team_dynamics": (lambda: team_dynamics(percentages), {}),
        "risk_factors": (lambda: identify_risk_factors(percentages), []),
        "recommendations": (lambda: recommendations(percentages, consistency), {}),
        "response_profile": (lambda: consistency.as_dict() if consistency else {}, {}),
        "cultural_fit_score": (lambda: cultural_fit_score(percentages), 0),
        "role_fit_scores": (lambda: role_fit_scores(percentages), {}),
    }
    report = {name: _safe_section(name, *builders[name]) for name in REPORT_SECTIONS}
    report["average_score"] = average_score(percentages)
    return report


def _safe_section(name: str, builder: Callable[[], Any], default: Any) -> Any:
    try:
        return builder()
    except Exception:
        logger.exception("Failed to build %s report section; using default", name)
        return default


def average_score(percentages: Mapping[str, float]) -> float:
    values = [_score(percentages, key) for key in DIMENSION_KEYS]
    return round(sum(values) / len(values), 2)


def executive_summary(
    percentages: Mapping[str, float], consistency: ConsistencySignal | None = None
) -> str:
    average = average_score(percentages)
    top = ", ".join(DIMENSIONS[key].phrase for key in _ranked(percentages)[:3])
    template = narratives.SUMMARY_TEMPLATES[-1][1]
    for threshold, text in narratives.SUMMARY_TEMPLATES:
        if threshold is not None and average >= threshold:
            template = text
            break
    summary = template.format(average=average, top=top)

    if consistency is not None:
        if consistency.decision_speed == INSUFFICIENT_DATA:
            summary = f"{summary} {narratives.INSUFFICIENT_CONSISTENCY_SENTENCE}"
        else:
            summary = "{} {}".format(
                summary,
                narratives.CONSISTENCY_SENTENCE.format(
                    speed=consistency.decision_speed.lower(),
                    engagement=consistency.engagement_level.lower(),
                    count=consistency.response_count,
                ),
            )
    return summary


def identify_strengths(percentages: Mapping[str, float]) -> list[dict]:
    strengths = []
    for key in DIMENSION_KEYS:
        score = _score(percentages, key)
        if score < REPORT_RULES["strength_threshold"]:
            continue
        tier = 90 if score >= REPORT_RULES["strength_top_tier"] else 80
        insight = narratives.STRENGTH_INSIGHTS.get(key, {}).get(
            tier, f"Shows strong capability in {DIMENSIONS[key].phrase}"
        )
        strengths.append({"dimension": key, "score": score, "tier": tier, "insight": insight})
    return sorted(strengths, key=lambda item: -item["score"])


def identify_growth_areas(percentages: Mapping[str, float]) -> list[dict]:
    areas = []
    for key in DIMENSION_KEYS:
        score = _score(percentages, key)
        if score >= REPORT_RULES["growth_threshold"]:
            continue
        phrase = DIMENSIONS[key].phrase
        description = narratives.GROWTH_DESCRIPTIONS[key]
        if score < REPORT_RULES["growth_severe_threshold"]:
            insight = f"Significant development needed in {phrase}. {description}."
        else:
            insight = f"Room for growth in {phrase}. {description}."
        areas.append(
            {
                "dimension": key,
                "score": score,
                "insight": insight,
                "recommendation": development_action(key),
            }
        )
    return sorted(areas, key=lambda item: item["score"])


def development_action(dimension: str) -> str:
    return narratives.DEVELOPMENT_ACTIONS.get(dimension, narratives.DEFAULT_DEVELOPMENT_ACTION)


def behavioral_predictions(percentages: Mapping[str, float]) -> list[dict]:
    predictions = []
    for rule in narratives.PREDICTION_RULES:
        positive = rule["positive"]
        negative = rule.get("negative")
        if _all_hold(percentages, positive["when"]):
            branch = positive
        elif negative and _any_holds(percentages, negative["any"]):
            branch = negative
        else:
            continue
        predictions.append(
            {
                "category": rule["category"],
                "prediction": branch["prediction"],
                "confidence": branch["confidence"],
            }
        )
    return predictions


def communication_style(
    percentages: Mapping[str, float], frameworks: Mapping[str, FrameworkResult]
) -> dict:
    four_factor = frameworks.get(Framework.FOUR_FACTOR.value)
    temperament = frameworks.get(Framework.TEMPERAMENT.value)

    tips: list[str] = []
    if four_factor is not None:
        tips.extend(narratives.FOUR_FACTOR_TIPS.get(four_factor.result, ()))
    if temperament is not None:
        code = temperament.result or ""
        for position, letters in narratives.TEMPERAMENT_TIPS.items():
            if position < len(code) and code[position] in letters:
                tips.append(letters[code[position]])
    if four_factor is None and temperament is None:
        tips = _matching_texts(percentages, narratives.SCORE_BASED_TIPS)

    return {
        "preferred_style": _first_match(
            percentages, narratives.PREFERRED_STYLES, narratives.DEFAULT_PREFERRED_STYLE
        ),
        "communication_tips": tips,
        "potential_challenges": _matching_texts(percentages, narratives.COMMUNICATION_CHALLENGES),
        "best_approach": _first_match(
            percentages, narratives.BEST_APPROACHES, narratives.DEFAULT_BEST_APPROACH
        ),
    }


def work_style(percentages: Mapping[str, float]) -> dict:
    return {
        "pace": _first_match(percentages, narratives.WORK_PACES, narratives.DEFAULT_WORK_PACE),
        "environment": _first_match(
            percentages, narratives.WORK_ENVIRONMENTS, narratives.DEFAULT_WORK_ENVIRONMENT
        ),
        "motivation": _first_match(
            percentages, narratives.WORK_MOTIVATIONS, narratives.DEFAULT_WORK_MOTIVATION
        ),
        "strengths": _matching_texts(percentages, narratives.WORK_STRENGTHS),
        "optimal_conditions": _matching_texts(percentages, narratives.OPTIMAL_CONDITIONS),
    }


def team_dynamics(percentages: Mapping[str, float]) -> dict:
    top_two = [DIMENSIONS[key].phrase for key in _ranked(percentages)[:2]]
    return {
        "role_tendency": _first_match(
            percentages, narratives.ROLE_TENDENCIES, narratives.DEFAULT_ROLE_TENDENCY
        ),
        "contribution_style": _first_match(
            percentages, narratives.CONTRIBUTION_STYLES, narratives.DEFAULT_CONTRIBUTION_STYLE
        ),
        "potential_conflicts": _matching_texts(percentages, narratives.TEAM_CONFLICTS),
        "team_value": f"Will add greatest value through {' and '.join(top_two)}",
    }


def identify_risk_factors(percentages: Mapping[str, float]) -> list[dict]:
    risks = [
        {
            "level": rule["level"],
            "factor": rule["factor"],
            "description": rule["description"],
            "mitigation": rule["mitigation"],
        }
        for rule in narratives.RISK_RULES
        if _all_hold(percentages, rule["when"])
    ]
    return sorted(risks, key=lambda risk: RISK_LEVEL_ORDER.get(risk["level"], len(RISK_LEVEL_ORDER)))


def recommendations(
    percentages: Mapping[str, float], consistency: ConsistencySignal | None = None
) -> dict:
    average = average_score(percentages)
    top_tier, middle_tier = REPORT_RULES["immediate_action_tiers"]
    if average >= top_tier:
        immediate = narratives.IMMEDIATE_ACTIONS[0]
    elif average >= middle_tier:
        immediate = narratives.IMMEDIATE_ACTIONS[1]
    else:
        immediate = narratives.IMMEDIATE_ACTIONS[2]

    weakest = sorted(DIMENSION_KEYS, key=lambda key: _score(percentages, key))
    weakest = weakest[: REPORT_RULES["development_priority_limit"]]
    priorities = [
        {
            "dimension": key,
            "priority": "HIGH" if _score(percentages, key) < REPORT_RULES["development_priority_high"] else "MEDIUM",
            "action": development_action(key),
        }
        for key in weakest
        if _score(percentages, key) < REPORT_RULES["development_priority_ceiling"]
    ]

    behavioral = []
    if consistency is not None:
        if consistency.engagement_level == "Low":
            behavioral.append(narratives.LOW_ENGAGEMENT_RECOMMENDATION)
        if LOW_VARIETY_MARKER in consistency.consistency_markers:
            behavioral.append(narratives.LOW_VARIETY_RECOMMENDATION)

    return {
        "immediate_actions": list(immediate),
        "development_priorities": priorities,
        "role_fit": _matching_texts(percentages, narratives.ROLE_FIT_BULLETS),
        "management_approach": _matching_texts(percentages, narratives.MANAGEMENT_BULLETS),
        "behavioral": behavioral,
    }


def cultural_fit_score(percentages: Mapping[str, float]) -> int:
    score = round_half_up(_mix(percentages, CULTURAL_FIT_WEIGHTS))
    return int(min(100, max(0, score)))


def role_fit_scores(percentages: Mapping[str, float]) -> dict[str, int]:
    return {
        role: int(round_half_up(_mix(percentages, weights)))
        for role, weights in ROLE_FIT_WEIGHTS.items()
    }


# ---------------------------------------------------------------------------
# Rule helpers
# ---------------------------------------------------------------------------

def _score(percentages: Mapping[str, float], key: str) -> float:
    value = percentages.get(key)
    return float(value) if value is not None else 0.0


def _mix(percentages: Mapping[str, float], weights: Mapping[str, float]) -> float:
    return sum(_score(percentages, key) * weight for key, weight in weights.items())


def _ranked(percentages: Mapping[str, float]) -> list[str]:
    return sorted(DIMENSION_KEYS, key=lambda key: -_score(percentages, key))


def _holds(percentages: Mapping[str, float], condition: Sequence) -> bool:
    dimension, op, threshold = condition
    return OPERATORS[op](_score(percentages, dimension), threshold)


def _all_hold(percentages: Mapping[str, float], conditions: Sequence[Sequence]) -> bool:
    return all(_holds(percentages, condition) for condition in conditions)


def _any_holds(percentages: Mapping[str, float], conditions: Sequence[Sequence]) -> bool:
    return any(_holds(percentages, condition) for condition in conditions)


def _first_match(percentages: Mapping[str, float], rules: Sequence, default: str) -> str:
    for conditions, text in rules:
        if _all_hold(percentages, conditions):
            return text
    return default


def _matching_texts(percentages: Mapping[str, float], rules: Sequence) -> list[str]:
    return [text for conditions, text in rules if _all_hold(percentages, conditions)]
