from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Iterable, Mapping

from .constants import DIMENSION_TABLE, HEURISTICS, PERCENTILE_BANDS
from .records import Contribution, DimensionScore, DimensionTally

logger = logging.getLogger(__name__)

PERCENTILE_FLOOR = HEURISTICS["percentile_floor"]


def round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def empty_tallies() -> dict[str, DimensionTally]:
    return {dimension.key: DimensionTally() for dimension in DIMENSION_TABLE}


def fold_contribution(
    tallies: Mapping[str, DimensionTally], contribution: Contribution
) -> dict[str, DimensionTally]:
    updated = dict(tallies)
    current = updated.get(contribution.dimension, DimensionTally())
    updated[contribution.dimension] = current.add(contribution.value)
    return updated


def tally_contributions(contributions: Iterable[Contribution]) -> dict[str, DimensionTally]:
    return reduce(fold_contribution, contributions, empty_tallies())


def percentile_for(percentage: float) -> int:
    for threshold, percentile in PERCENTILE_BANDS:
        if percentage >= threshold:
            return percentile
    return PERCENTILE_FLOOR


def accumulate(contributions: Iterable[Contribution]) -> dict[str, DimensionScore]:
    """
    Fold contributions into one score per dimension, in dimension-table order.

    Percentages are not clamped: pile-B penalties can push a dimension below
    zero and heavy catalog weights can take it past 100. A tally whose mean
    overflows is treated as malformed and scores 0.
    """
    tallies = tally_contributions(contributions)
    scores: dict[str, DimensionScore] = {}
    for dimension in DIMENSION_TABLE:
        tally = tallies[dimension.key]
        total = tally.total
        percentage = 0.0
        if tally.count:
            raw = total / tally.count * 100
            if math.isfinite(raw):
                percentage = round_half_up(raw)
            else:
                logger.warning(
                    "Discarding %s tally: %s contributions overflow", dimension.key, tally.count
                )
                total = 0.0
        scores[dimension.key] = DimensionScore(
            dimension=dimension.key,
            percentage=percentage,
            weighted_score=percentage * dimension.weight,
            percentile=percentile_for(percentage),
            total=total,
            count=tally.count,
        )
    return scores
