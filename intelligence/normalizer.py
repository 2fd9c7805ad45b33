from __future__ import annotations

import logging
import math
import re
from typing import Any, Callable, Iterable

from .constants import (
    DEFAULT_QUADRANT_MULTIPLIER,
    DIMENSIONS,
    NORMALIZER_RULES,
    PILE_FACTORS,
    QUADRANT_MULTIPLIERS,
    QuestionType,
)
from .records import Contribution, QuestionDefinition, ResponseRecord

logger = logging.getLogger(__name__)

LIKERT_SCALE_MAX = NORMALIZER_RULES["likert_scale_max"]
SPECTRUM_MAX = NORMALIZER_RULES["spectrum_max"]
ALLOCATION_TOTAL = NORMALIZER_RULES["allocation_total"]
RANKING = NORMALIZER_RULES["ranking"]

PILE_ALIASES = {
    "pile_a": ("pile_a", "pileA"),
    "pile_b": ("pile_b", "pileB"),
}
RANKED_ITEM_KEYS = ("item_id", "itemId", "id")


class MalformedPayload(ValueError):
    pass


def normalize(response: ResponseRecord, question: QuestionDefinition) -> list[Contribution]:
    """
    Convert one response into (dimension, contribution) pairs.

    Never raises: a payload that does not fit its question type contributes
    nothing and is logged at DEBUG.
    """
    if response.question_type and response.question_type != question.question_type:
        logger.debug(
            "Skipping response to %s: declared type %s does not match %s",
            question.id,
            response.question_type,
            question.question_type,
        )
        return []

    handler = NORMALIZERS.get(question.question_type)
    if handler is None:
        logger.debug("Skipping response to %s: unsupported type %s", question.id, question.question_type)
        return []

    try:
        return handler(response.payload, question.schema or {})
    except (MalformedPayload, AttributeError, KeyError, TypeError, ValueError) as exc:
        logger.debug("Skipping malformed %s response to %s: %s", question.question_type, question.id, exc)
        return []


def normalize_all(
    responses: Iterable[ResponseRecord], catalog: dict[str, QuestionDefinition]
) -> list[Contribution]:
    contributions: list[Contribution] = []
    for response in responses:
        question = catalog.get(response.question_id)
        if question is None:
            logger.warning("Response references unknown question %s; skipping", response.question_id)
            continue
        contributions.extend(normalize(response, question))
    return contributions


def normalize_quadrant(value: str) -> str:
    return re.sub(r"[\s_&]+", "-", value.strip().lower())


def quadrant_multiplier(quadrant: str | None) -> float:
    if not isinstance(quadrant, str):
        return DEFAULT_QUADRANT_MULTIPLIER
    return QUADRANT_MULTIPLIERS.get(normalize_quadrant(quadrant), DEFAULT_QUADRANT_MULTIPLIER)


# ---------------------------------------------------------------------------
# Per-type handlers
# ---------------------------------------------------------------------------

def _normalize_traditional(payload: Any, schema: dict) -> list[Contribution]:
    index = payload.get("selected_index") if isinstance(payload, dict) else payload
    if isinstance(index, bool) or not isinstance(index, int):
        raise MalformedPayload("selected_index must be an integer")
    options = schema.get("options") or []
    if not 0 <= index < len(options):
        raise MalformedPayload(f"selected_index {index} out of range")
    option = options[index]
    if not isinstance(option, dict):
        raise MalformedPayload("option is not a mapping")
    return _weighted(option.get("score_weights"))


def _normalize_likert_grid(payload: Any, schema: dict) -> list[Contribution]:
    statements = _index(schema.get("statements"))
    contributions: list[Contribution] = []
    for statement_id, entry in _require_mapping(payload).items():
        statement = statements.get(statement_id)
        if not statement:
            continue
        value = _number(entry.get("value") if isinstance(entry, dict) else entry)
        if value is None:
            continue
        contributions.extend(_weighted(statement.get("dimensions"), value / LIKERT_SCALE_MAX))
    return contributions


def _normalize_sliding_spectrum(payload: Any, schema: dict) -> list[Contribution]:
    spectrums = _index(schema.get("spectrums"))
    contributions: list[Contribution] = []
    for spectrum_id, entry in _require_mapping(payload).items():
        spectrum = spectrums.get(spectrum_id)
        if not spectrum:
            continue
        dimension = spectrum.get("dimension")
        value = _number(entry.get("value") if isinstance(entry, dict) else entry)
        if dimension not in DIMENSIONS or value is None:
            continue
        contributions.append(Contribution(dimension, value / SPECTRUM_MAX))
    return contributions


def _normalize_word_cloud(payload: Any, schema: dict) -> list[Contribution]:
    words = _index(schema.get("words"))
    if isinstance(payload, dict):
        payload = payload.get("selected", payload.get("words"))
    if not isinstance(payload, list):
        raise MalformedPayload("word selection must be a list")
    contributions: list[Contribution] = []
    for entry in payload:
        contributions.extend(_weighted(_resolve_dimensions(words, entry)))
    return contributions


def _normalize_emoji_reaction(payload: Any, schema: dict) -> list[Contribution]:
    reactions = _index(schema.get("reactions"))
    if isinstance(payload, dict) and "dimensions" not in payload:
        payload = payload.get("reaction")
    dimensions = _resolve_dimensions(reactions, payload)
    if dimensions is None:
        raise MalformedPayload("unknown reaction")
    return _weighted(dimensions)


def _normalize_percentage_allocator(payload: Any, schema: dict) -> list[Contribution]:
    categories = _index(schema.get("categories"))
    if isinstance(payload, dict):
        allocations = list(payload.items())
    elif isinstance(payload, list):
        allocations = [
            (entry.get("id"), entry.get("value")) for entry in payload if isinstance(entry, dict)
        ]
    else:
        raise MalformedPayload("allocations must be a list or mapping")

    contributions: list[Contribution] = []
    for category_id, raw_value in allocations:
        category = categories.get(category_id)
        value = _number(raw_value)
        if not category or value is None:
            continue
        contributions.extend(_weighted(category.get("dimensions"), value / ALLOCATION_TOTAL))
    return contributions


def _normalize_speed_ranking(payload: Any, schema: dict) -> list[Contribution]:
    items = _index(schema.get("items"))
    if isinstance(payload, dict):
        payload = payload.get("ranking", payload.get("rankings"))
    if not isinstance(payload, list):
        raise MalformedPayload("ranking must be a list")

    contributions: list[Contribution] = []
    for position, entry in enumerate(payload):
        if isinstance(entry, dict):
            item_id = next((entry[key] for key in RANKED_ITEM_KEYS if key in entry), None)
            rank = _number(entry.get("rank"))
        else:
            item_id = entry
            rank = position + 1
        if rank is None or rank != int(rank) or not RANKING["min_rank"] <= rank <= RANKING["max_rank"]:
            logger.debug("Dropping ranked item %s with rank %s", item_id, rank)
            continue
        item = items.get(item_id)
        if not item:
            continue
        factor = (RANKING["base"] - rank) / RANKING["divisor"]
        contributions.extend(_weighted(item.get("dimensions"), factor))
    return contributions


def _normalize_priority_matrix(payload: Any, schema: dict) -> list[Contribution]:
    items = _index(schema.get("items"))
    contributions: list[Contribution] = []
    for item_id, placement in _require_mapping(payload).items():
        item = items.get(item_id)
        if not item:
            continue
        quadrant = placement.get("quadrant") if isinstance(placement, dict) else placement
        contributions.extend(_weighted(item.get("dimensions"), quadrant_multiplier(quadrant)))
    return contributions


def _normalize_two_pile_sort(payload: Any, schema: dict) -> list[Contribution]:
    items = _index(schema.get("items"))
    payload = _require_mapping(payload)
    contributions: list[Contribution] = []
    for pile, aliases in PILE_ALIASES.items():
        placed = next((payload[alias] for alias in aliases if alias in payload), [])
        if not isinstance(placed, list):
            raise MalformedPayload(f"{pile} must be a list")
        for entry in placed:
            dimensions = _resolve_dimensions(items, entry, allow_inline=False)
            contributions.extend(_weighted(dimensions, PILE_FACTORS[pile]))
    return contributions


NORMALIZERS: dict[str, Callable[[Any, dict], list[Contribution]]] = {
    QuestionType.TRADITIONAL: _normalize_traditional,
    QuestionType.LIKERT_GRID: _normalize_likert_grid,
    QuestionType.SLIDING_SPECTRUM: _normalize_sliding_spectrum,
    QuestionType.WORD_CLOUD: _normalize_word_cloud,
    QuestionType.EMOJI_REACTION: _normalize_emoji_reaction,
    QuestionType.PERCENTAGE_ALLOCATOR: _normalize_percentage_allocator,
    QuestionType.SPEED_RANKING: _normalize_speed_ranking,
    QuestionType.PRIORITY_MATRIX: _normalize_priority_matrix,
    QuestionType.TWO_PILE_SORT: _normalize_two_pile_sort,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _weighted(weights: Any, factor: float = 1.0) -> list[Contribution]:
    if not isinstance(weights, dict):
        return []
    contributions = []
    for dimension, raw_weight in weights.items():
        weight = _number(raw_weight)
        if dimension not in DIMENSIONS or weight is None:
            continue
        value = weight * factor
        if not math.isfinite(value):
            continue
        contributions.append(Contribution(dimension, value))
    return contributions


def _index(collection: Any) -> dict:
    """Catalog collections may be keyed by id or given as a list of {id, ...}."""
    if isinstance(collection, dict):
        return collection
    if isinstance(collection, list):
        return {
            entry["id"]: entry
            for entry in collection
            if isinstance(entry, dict) and "id" in entry
        }
    return {}


def _resolve_dimensions(catalog: dict, entry: Any, *, allow_inline: bool = True) -> dict | None:
    """Look an entry up by id; inline ``dimensions`` only where ``allow_inline``."""
    if isinstance(entry, dict):
        if "dimensions" in entry:
            return entry["dimensions"] if allow_inline else None
        entry = entry.get("id")
    if not isinstance(entry, str):
        return None
    item = catalog.get(entry)
    return item.get("dimensions") if isinstance(item, dict) else None


def _require_mapping(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise MalformedPayload("payload must be a mapping")
    return payload
