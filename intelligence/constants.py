from __future__ import annotations

from django.db import models

from .records import Dimension


class QuestionType(models.TextChoices):
    TRADITIONAL = "traditional", "Fixed choice"
    LIKERT_GRID = "likert_grid", "Likert grid"
    SLIDING_SPECTRUM = "sliding_spectrum", "Sliding spectrum"
    WORD_CLOUD = "word_cloud", "Word cloud"
    EMOJI_REACTION = "emoji_reaction", "Emoji reaction"
    PERCENTAGE_ALLOCATOR = "percentage_allocator", "Percentage allocator"
    SPEED_RANKING = "speed_ranking", "Speed ranking"
    PRIORITY_MATRIX = "priority_matrix", "Priority matrix"
    TWO_PILE_SORT = "two_pile_sort", "Two-pile sort"


class Framework(models.TextChoices):
    TEMPERAMENT = "temperament", "Temperament code (MBTI-style)"
    FIVE_TRAIT = "five_trait", "Five-trait profile (Big Five)"
    FOUR_FACTOR = "four_factor", "Four-factor style (DISC)"
    NINE_TYPE = "nine_type", "Nine-type profile (Enneagram)"


# The 12 behavioural dimensions. Weights intentionally sum to 1.02; downstream
# weighted scores are compared on this scale, so they are not renormalised.
DIMENSION_TABLE: tuple[Dimension, ...] = (
    Dimension(
        "cognitive_flexibility",
        0.09,
        "Adaptability and innovative thinking",
        "adaptability and creative problem-solving",
    ),
    Dimension(
        "emotional_regulation",
        0.09,
        "Stress management and composure",
        "emotional control and stress management",
    ),
    Dimension(
        "social_calibration",
        0.08,
        "Interpersonal awareness and adjustment",
        "social awareness and interpersonal sensitivity",
    ),
    Dimension(
        "achievement_drive",
        0.09,
        "Goal orientation and persistence",
        "goal orientation and competitive spirit",
    ),
    Dimension(
        "learning_orientation",
        0.08,
        "Growth mindset and skill development",
        "curiosity and continuous improvement",
    ),
    Dimension(
        "risk_tolerance",
        0.08,
        "Comfort with uncertainty and change",
        "comfort with uncertainty and calculated risks",
    ),
    Dimension(
        "relationship_building",
        0.08,
        "Trust development and rapport",
        "networking and relationship development",
    ),
    Dimension(
        "ethical_reasoning",
        0.08,
        "Moral judgment and integrity",
        "integrity and moral decision-making",
    ),
    Dimension(
        "influence_style",
        0.08,
        "Leadership and persuasion approach",
        "leadership and persuasion capabilities",
    ),
    Dimension(
        "systems_thinking",
        0.09,
        "Strategic and analytical perspective",
        "analytical and strategic thinking",
    ),
    Dimension(
        "self_management",
        0.09,
        "Organization and self-discipline",
        "organization and personal discipline",
    ),
    Dimension(
        "collaborative_intelligence",
        0.09,
        "Team effectiveness and cooperation",
        "teamwork and cooperative skills",
    ),
)

DIMENSIONS = {dimension.key: dimension for dimension in DIMENSION_TABLE}
DIMENSION_KEYS = tuple(DIMENSIONS)

# Every tunable number the engine uses. Recalibration is an edit here, not in
# the scoring code.
HEURISTICS = {
    "normalizer": {
        "likert_scale_max": 5,
        "spectrum_max": 100,
        "allocation_total": 100,
        "ranking": {"base": 6, "divisor": 5, "min_rank": 1, "max_rank": 5},
        "quadrant_multipliers": {
            "urgent-important": 1.0,
            "not-urgent-important": 0.8,
            "urgent-not-important": 0.7,
        },
        "default_quadrant_multiplier": 0.6,
        "pile_factors": {"pile_a": 1.0, "pile_b": -0.5},
    },
    "percentile_bands": [
        (90, 95),
        (80, 85),
        (70, 70),
        (60, 50),
        (50, 30),
        (40, 15),
    ],
    "percentile_floor": 5,
    "temperament": {
        "default_strategy": "balanced_baseline",
        "balanced_baseline": {
            "axes": [
                {
                    "axis": "E_I",
                    "poles": ("E", "I"),
                    "labels": ("extroversion", "introversion"),
                    "dimensions": (
                        "social_calibration",
                        "relationship_building",
                        "collaborative_intelligence",
                    ),
                    "baseline": 300,
                },
                {
                    "axis": "S_N",
                    "poles": ("S", "N"),
                    "labels": ("sensing", "intuition"),
                    "dimensions": ("systems_thinking", "self_management"),
                    "baseline": 200,
                },
                {
                    "axis": "T_F",
                    "poles": ("T", "F"),
                    "labels": ("thinking", "feeling"),
                    "dimensions": ("systems_thinking", "ethical_reasoning"),
                    "baseline": 200,
                },
                {
                    "axis": "J_P",
                    "poles": ("J", "P"),
                    "labels": ("judging", "perceiving"),
                    "dimensions": ("self_management", "achievement_drive"),
                    "baseline": 200,
                },
            ],
        },
        "centered_offset": {
            "midpoint": 50,
            "axes": [
                {
                    "axis": "E_I",
                    "poles": ("E", "I"),
                    "dimensions": ("social_calibration", "relationship_building"),
                    "direction": 1,
                },
                {
                    "axis": "S_N",
                    "poles": ("N", "S"),
                    "dimensions": ("cognitive_flexibility", "learning_orientation"),
                    "direction": 1,
                },
                {
                    "axis": "T_F",
                    "poles": ("T", "F"),
                    "dimensions": ("systems_thinking", "ethical_reasoning"),
                    "direction": -1,
                },
                {
                    "axis": "J_P",
                    "poles": ("J", "P"),
                    "dimensions": ("self_management", "achievement_drive"),
                    "direction": -1,
                },
            ],
        },
    },
    "five_trait": {
        "openness": {"cognitive_flexibility": 0.4, "learning_orientation": 0.6},
        "conscientiousness": {"self_management": 0.5, "ethical_reasoning": 0.5},
        "extraversion": {"social_calibration": 0.4, "relationship_building": 0.6},
        "agreeableness": {"collaborative_intelligence": 0.5, "relationship_building": 0.5},
    },
    # The stability axis is reported inverted, as neuroticism.
    "five_trait_inverted": {"neuroticism": "emotional_regulation"},
    "four_factor": {
        "D": ("dominance", {"influence_style": 0.6, "achievement_drive": 0.4}),
        "I": ("influence", {"relationship_building": 0.5, "social_calibration": 0.5}),
        "S": ("steadiness", {"emotional_regulation": 0.5, "self_management": 0.5}),
        "C": ("compliance", {"ethical_reasoning": 0.6, "systems_thinking": 0.4}),
    },
    "nine_type": {
        1: ("Perfectionist", ("ethical_reasoning",)),
        2: ("Helper", ("relationship_building",)),
        3: ("Achiever", ("achievement_drive",)),
        4: ("Individualist", ("emotional_regulation",)),
        5: ("Investigator", ("systems_thinking",)),
        6: ("Loyalist", ("risk_tolerance",)),
        7: ("Enthusiast", ("cognitive_flexibility",)),
        8: ("Challenger", ("influence_style",)),
        9: ("Peacemaker", ("collaborative_intelligence",)),
    },
    "framework_confidence": {
        "five_trait": 0.85,
        "four_factor": 0.80,
        "nine_type": 0.75,
        "degenerate": 0.0,
    },
    "consistency": {
        "fast_ms": 5000,
        "moderate_ms": 15000,
        "quick_response_ms": 3000,
        "low_engagement_quick_count": 10,
        "moderate_engagement_quick_count": 5,
        "variety_floor": 0.3,
        "variety_multiplier": 150,
        "tendency_share": 0.4,
        "default_score": 100.0,
    },
    "report": {
        "strength_threshold": 80,
        "strength_top_tier": 90,
        "growth_threshold": 60,
        "growth_severe_threshold": 40,
        "immediate_action_tiers": (75, 65),
        "development_priority_ceiling": 70,
        "development_priority_high": 50,
        "development_priority_limit": 3,
    },
    "cultural_fit": {
        "ethical_reasoning": 0.30,
        "collaborative_intelligence": 0.25,
        "achievement_drive": 0.25,
        "social_calibration": 0.20,
    },
    "role_fit": {
        "financial_advisor": {
            "relationship_building": 0.25,
            "ethical_reasoning": 0.20,
            "influence_style": 0.15,
            "achievement_drive": 0.15,
            "social_calibration": 0.15,
            "emotional_regulation": 0.10,
        },
        "team_leader": {
            "influence_style": 0.25,
            "collaborative_intelligence": 0.20,
            "emotional_regulation": 0.15,
            "systems_thinking": 0.15,
            "achievement_drive": 0.15,
            "ethical_reasoning": 0.10,
        },
        "analyst": {
            "systems_thinking": 0.30,
            "self_management": 0.25,
            "cognitive_flexibility": 0.20,
            "learning_orientation": 0.15,
            "achievement_drive": 0.10,
        },
        "business_development": {
            "achievement_drive": 0.25,
            "relationship_building": 0.20,
            "influence_style": 0.20,
            "risk_tolerance": 0.15,
            "cognitive_flexibility": 0.10,
            "social_calibration": 0.10,
        },
        "client_service": {
            "relationship_building": 0.25,
            "emotional_regulation": 0.20,
            "social_calibration": 0.20,
            "collaborative_intelligence": 0.15,
            "self_management": 0.10,
            "ethical_reasoning": 0.10,
        },
    },
    "alerts": {
        "high_performer_average": 80,
        "red_flag_score": 30,
    },
}

NORMALIZER_RULES = HEURISTICS["normalizer"]
QUADRANT_MULTIPLIERS = NORMALIZER_RULES["quadrant_multipliers"]
DEFAULT_QUADRANT_MULTIPLIER = NORMALIZER_RULES["default_quadrant_multiplier"]
PILE_FACTORS = NORMALIZER_RULES["pile_factors"]
PERCENTILE_BANDS = HEURISTICS["percentile_bands"]
TEMPERAMENT_RULES = HEURISTICS["temperament"]
DEFAULT_TEMPERAMENT_STRATEGY = TEMPERAMENT_RULES["default_strategy"]
FIVE_TRAIT_MIXES = HEURISTICS["five_trait"]
FIVE_TRAIT_INVERTED = HEURISTICS["five_trait_inverted"]
FOUR_FACTOR_MIXES = HEURISTICS["four_factor"]
NINE_TYPE_MAP = HEURISTICS["nine_type"]
FRAMEWORK_CONFIDENCE = HEURISTICS["framework_confidence"]
CONSISTENCY_RULES = HEURISTICS["consistency"]
REPORT_RULES = HEURISTICS["report"]
CULTURAL_FIT_WEIGHTS = HEURISTICS["cultural_fit"]
ROLE_FIT_WEIGHTS = HEURISTICS["role_fit"]
ALERT_RULES = HEURISTICS["alerts"]

RISK_LEVEL_ORDER = {"HIGH": 0, "MEDIUM": 1, "LOW": 2}
