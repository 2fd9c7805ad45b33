from __future__ import annotations

from collections import Counter
from typing import Sequence

from .constants import CONSISTENCY_RULES, QuestionType
from .records import ConsistencySignal, QuestionDefinition, ResponseRecord
from .scoring import round_half_up

INSUFFICIENT_DATA = "Insufficient data"
LOW_VARIETY_MARKER = "Low response variety"


def analyze(
    responses: Sequence[ResponseRecord],
    catalog: dict[str, QuestionDefinition] | None = None,
) -> ConsistencySignal:
    """
    Summarise timing and selection variety for a response sequence.

    The result only feeds the report; it never changes dimension scores.
    """
    catalog = catalog or {}
    latencies = response_latencies(responses)
    average = round_half_up(sum(latencies) / len(latencies)) if latencies else 0.0

    selections = _fixed_choice_selections(responses, catalog)
    markers: list[str] = []
    distinct = len({index for index, _ in selections})
    if selections and distinct < len(selections) * CONSISTENCY_RULES["variety_floor"]:
        markers.append(LOW_VARIETY_MARKER)
    markers.extend(_tendency_markers(selections, len(responses)))

    return ConsistencySignal(
        consistency_score=_variety_score(distinct, len(selections)),
        engagement_level=engagement_level(latencies),
        average_response_time_ms=average,
        decision_speed=decision_speed(average) if latencies else INSUFFICIENT_DATA,
        consistency_markers=tuple(markers),
        response_count=len(responses),
        fixed_choice_count=len(selections),
    )


def response_latencies(responses: Sequence[ResponseRecord]) -> list[float]:
    latencies = []
    for previous, current in zip(responses, responses[1:]):
        if previous.timestamp is None or current.timestamp is None:
            continue
        latencies.append((current.timestamp - previous.timestamp).total_seconds() * 1000)
    return latencies


def decision_speed(average_ms: float) -> str:
    if average_ms < CONSISTENCY_RULES["fast_ms"]:
        return "Fast"
    if average_ms < CONSISTENCY_RULES["moderate_ms"]:
        return "Moderate"
    return "Deliberate"


def engagement_level(latencies: Sequence[float]) -> str:
    quick = sum(1 for latency in latencies if latency < CONSISTENCY_RULES["quick_response_ms"])
    if quick > CONSISTENCY_RULES["low_engagement_quick_count"]:
        return "Low"
    if quick > CONSISTENCY_RULES["moderate_engagement_quick_count"]:
        return "Moderate"
    return "High"


def _variety_score(distinct: int, count: int) -> float:
    if not count:
        return CONSISTENCY_RULES["default_score"]
    return min(100.0, distinct / count * CONSISTENCY_RULES["variety_multiplier"])


def _fixed_choice_selections(
    responses: Sequence[ResponseRecord], catalog: dict[str, QuestionDefinition]
) -> list[tuple[int, list[str]]]:
    selections = []
    for response in responses:
        question = catalog.get(response.question_id)
        question_type = question.question_type if question else response.question_type
        if question_type != QuestionType.TRADITIONAL:
            continue
        payload = response.payload
        index = payload.get("selected_index") if isinstance(payload, dict) else payload
        if isinstance(index, bool) or not isinstance(index, int):
            continue
        selections.append((index, _indicators(question, index)))
    return selections


def _indicators(question: QuestionDefinition | None, index: int) -> list[str]:
    if question is None:
        return []
    options = question.schema.get("options") or []
    if not 0 <= index < len(options) or not isinstance(options[index], dict):
        return []
    indicators = options[index].get("behavioral_indicators") or []
    return [str(indicator) for indicator in indicators] if isinstance(indicators, list) else []


def _tendency_markers(selections: list[tuple[int, list[str]]], response_count: int) -> list[str]:
    counts = Counter(indicator for _, indicators in selections for indicator in indicators)
    threshold = response_count * CONSISTENCY_RULES["tendency_share"]
    return [f"Strong {pattern} tendency" for pattern, count in counts.items() if count > threshold]
