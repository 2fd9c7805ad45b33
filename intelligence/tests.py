import math
from datetime import datetime, timedelta, timezone as dt_timezone
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings

from assessments.models import Assessment, AssessmentSession, CandidateProfile, Question, Response
from intelligence import narratives
from intelligence.consistency import analyze
from intelligence.constants import DIMENSION_KEYS, DIMENSIONS, QuestionType
from intelligence.exceptions import ScoringPipelineError, UnknownStrategyError
from intelligence.frameworks import (
    map_five_trait,
    map_four_factor,
    map_frameworks,
    map_nine_type,
    map_temperament,
)
from intelligence.models import DimensionScore, FrameworkMapping, IntelligenceReport
from intelligence.normalizer import NORMALIZERS, normalize, normalize_all, quadrant_multiplier
from intelligence.records import Contribution, DimensionTally, QuestionDefinition, ResponseRecord
from intelligence.reports import (
    build_report,
    cultural_fit_score,
    identify_growth_areas,
    identify_risk_factors,
    role_fit_scores,
)
from intelligence.scoring import accumulate, percentile_for, round_half_up
from intelligence.services import (
    load_response_log,
    regenerate_intelligence_report,
    run_scoring_pipeline,
    score_responses,
)
from intelligence.signals import scoring_completed

START = datetime(2024, 3, 1, 9, 0, tzinfo=dt_timezone.utc)


def _profile(default=70, **overrides):
    percentages = {key: float(default) for key in DIMENSION_KEYS}
    percentages.update({key: float(value) for key, value in overrides.items()})
    return percentages


def _fixed_choice_catalog():
    return {
        f"q_{key}": QuestionDefinition(
            id=f"q_{key}",
            question_type=QuestionType.TRADITIONAL,
            schema={
                "options": [
                    {"score_weights": {key: 1.0}},
                    {"score_weights": {key: 0.2}},
                ]
            },
        )
        for key in DIMENSION_KEYS
    }


def _responses(question_ids, spacing_seconds=8, selected_index=0, question_type=QuestionType.TRADITIONAL):
    return [
        ResponseRecord(
            question_id=question_id,
            question_type=question_type,
            payload={"selected_index": selected_index},
            timestamp=START + timedelta(seconds=spacing_seconds * position),
        )
        for position, question_id in enumerate(question_ids)
    ]


class NormalizerTests(SimpleTestCase):
    def _normalize(self, question_type, schema, payload, declared=None):
        question = QuestionDefinition("q", question_type, schema)
        response = ResponseRecord("q", declared if declared is not None else question_type, payload)
        return normalize(response, question)

    def test_registry_covers_every_question_type(self):
        self.assertEqual(set(QuestionType.values), {str(key) for key in NORMALIZERS})

    def test_traditional_emits_selected_option_weights(self):
        schema = {"options": [{"score_weights": {"ethical_reasoning": 0.9, "influence_style": 0.4}}]}
        result = self._normalize(QuestionType.TRADITIONAL, schema, {"selected_index": 0})
        self.assertEqual(
            result,
            [Contribution("ethical_reasoning", 0.9), Contribution("influence_style", 0.4)],
        )

    def test_traditional_out_of_range_or_boolean_index_contributes_nothing(self):
        schema = {"options": [{"score_weights": {"ethical_reasoning": 1.0}}]}
        self.assertEqual(self._normalize(QuestionType.TRADITIONAL, schema, {"selected_index": 3}), [])
        self.assertEqual(self._normalize(QuestionType.TRADITIONAL, schema, {"selected_index": True}), [])
        self.assertEqual(self._normalize(QuestionType.TRADITIONAL, schema, "zero"), [])

    def test_unknown_dimensions_and_non_numeric_weights_are_dropped(self):
        schema = {
            "options": [
                {"score_weights": {"charisma": 1.0, "risk_tolerance": "high", "self_management": "0.5"}}
            ]
        }
        result = self._normalize(QuestionType.TRADITIONAL, schema, {"selected_index": 0})
        self.assertEqual(result, [Contribution("self_management", 0.5)])

    def test_declared_type_mismatch_is_skipped(self):
        schema = {"options": [{"score_weights": {"ethical_reasoning": 1.0}}]}
        result = self._normalize(
            QuestionType.TRADITIONAL, schema, {"selected_index": 0}, declared=QuestionType.WORD_CLOUD
        )
        self.assertEqual(result, [])

    def test_likert_grid_scales_rating_by_five(self):
        schema = {
            "statements": {
                "s1": {"dimensions": {"self_management": 1.0}},
                "s2": {"dimensions": {"learning_orientation": 0.5}},
            }
        }
        result = self._normalize(QuestionType.LIKERT_GRID, schema, {"s1": {"value": 4}, "s2": 5})
        self.assertAlmostEqual(result[0].value, 0.8)
        self.assertEqual(result[0].dimension, "self_management")
        self.assertAlmostEqual(result[1].value, 0.5)

    def test_sliding_spectrum_maps_position_to_single_dimension(self):
        schema = {"spectrums": {"certainty": {"dimension": "risk_tolerance"}}}
        result = self._normalize(QuestionType.SLIDING_SPECTRUM, schema, {"certainty": {"value": 75}})
        self.assertEqual(result, [Contribution("risk_tolerance", 0.75)])

    def test_word_cloud_accepts_ids_and_inline_dimensions(self):
        schema = {"words": {"driven": {"dimensions": {"achievement_drive": 1.0}}}}
        payload = ["driven", {"id": "driven"}, {"dimensions": {"learning_orientation": 0.6}}, "missing"]
        result = self._normalize(QuestionType.WORD_CLOUD, schema, payload)
        self.assertEqual(
            result,
            [
                Contribution("achievement_drive", 1.0),
                Contribution("achievement_drive", 1.0),
                Contribution("learning_orientation", 0.6),
            ],
        )

    def test_emoji_reaction_resolves_reaction_id(self):
        schema = {"reactions": {"fired_up": {"dimensions": {"achievement_drive": 0.9}}}}
        self.assertEqual(
            self._normalize(QuestionType.EMOJI_REACTION, schema, {"reaction": "fired_up"}),
            [Contribution("achievement_drive", 0.9)],
        )
        self.assertEqual(self._normalize(QuestionType.EMOJI_REACTION, schema, {"reaction": "nope"}), [])

    def test_percentage_allocator_scales_by_allocation(self):
        schema = {"categories": {"clients": {"dimensions": {"relationship_building": 1.0}}}}
        from_list = self._normalize(
            QuestionType.PERCENTAGE_ALLOCATOR, schema, [{"id": "clients", "value": 40}]
        )
        from_mapping = self._normalize(QuestionType.PERCENTAGE_ALLOCATOR, schema, {"clients": 40})
        self.assertEqual(from_list, [Contribution("relationship_building", 0.4)])
        self.assertEqual(from_mapping, from_list)

    def test_speed_ranking_weights_by_rank_and_drops_out_of_range(self):
        schema = {
            "items": {
                "a": {"dimensions": {"ethical_reasoning": 1.0}},
                "b": {"dimensions": {"achievement_drive": 1.0}},
                "c": {"dimensions": {"influence_style": 1.0}},
            }
        }
        payload = [
            {"item_id": "a", "rank": 1},
            {"item_id": "b", "rank": 5},
            {"item_id": "c", "rank": 6},
        ]
        result = self._normalize(QuestionType.SPEED_RANKING, schema, payload)
        self.assertEqual(len(result), 2)
        self.assertAlmostEqual(result[0].value, 1.0)
        self.assertAlmostEqual(result[1].value, 0.2)

    def test_speed_ranking_bare_ids_rank_by_position(self):
        schema = {"items": {"a": {"dimensions": {"ethical_reasoning": 1.0}}, "b": {"dimensions": {"ethical_reasoning": 1.0}}}}
        result = self._normalize(QuestionType.SPEED_RANKING, schema, ["b", "a"])
        self.assertAlmostEqual(result[0].value, 1.0)
        self.assertAlmostEqual(result[1].value, 0.8)

    def test_priority_matrix_quadrants_are_strictly_ordered(self):
        schema = {
            "items": {
                "first": {"dimensions": {"systems_thinking": 1.0}},
                "second": {"dimensions": {"self_management": 1.0}},
                "third": {"dimensions": {"influence_style": 1.0}},
                "fourth": {"dimensions": {"risk_tolerance": 1.0}},
            }
        }
        payload = {
            "first": {"quadrant": "Urgent & Important"},
            "second": {"quadrant": "not_urgent_important"},
            "third": "urgent-not-important",
            "fourth": {"quadrant": "neither"},
        }
        values = {c.dimension: c.value for c in self._normalize(QuestionType.PRIORITY_MATRIX, schema, payload)}
        self.assertGreater(values["systems_thinking"], values["self_management"])
        self.assertGreater(values["self_management"], values["influence_style"])
        self.assertGreater(values["influence_style"], values["risk_tolerance"])
        self.assertEqual(values["risk_tolerance"], 0.6)
        self.assertEqual(quadrant_multiplier(None), 0.6)

    def test_two_pile_penalty_is_half_weight(self):
        schema = {"items": {"bend_rules": {"dimensions": {"risk_tolerance": 10}}, "lead": {"dimensions": {"influence_style": 1}}}}
        result = self._normalize(
            QuestionType.TWO_PILE_SORT, schema, {"pileA": ["lead"], "pile_b": ["bend_rules"]}
        )
        self.assertEqual(result, [Contribution("influence_style", 1.0), Contribution("risk_tolerance", -5.0)])

    def test_two_pile_weights_come_only_from_catalog(self):
        schema = {"items": {"lead": {"dimensions": {"influence_style": 1}}}}
        payload = {
            "pile_a": [{"dimensions": {"influence_style": 50}}, {"id": "lead"}],
            "pile_b": [{"id": "ghost", "dimensions": {"risk_tolerance": 10}}],
        }
        result = self._normalize(QuestionType.TWO_PILE_SORT, schema, payload)
        self.assertEqual(result, [Contribution("influence_style", 1.0)])

    def test_speed_ranking_accepts_item_key_spellings(self):
        schema = {"items": {"a": {"dimensions": {"ethical_reasoning": 1.0}}, "b": {"dimensions": {"achievement_drive": 1.0}}}}
        payload = [{"itemId": "a", "rank": 1}, {"id": "b", "rank": 2}]
        result = self._normalize(QuestionType.SPEED_RANKING, schema, payload)
        self.assertEqual([c.dimension for c in result], ["ethical_reasoning", "achievement_drive"])
        self.assertAlmostEqual(result[1].value, 0.8)

    def test_oversized_numbers_contribute_nothing(self):
        spectrum = {"spectrums": {"certainty": {"dimension": "risk_tolerance"}}}
        self.assertEqual(
            self._normalize(QuestionType.SLIDING_SPECTRUM, spectrum, {"certainty": {"value": 10**400}}), []
        )
        options = {"options": [{"score_weights": {"ethical_reasoning": 10**400, "self_management": 1}}]}
        self.assertEqual(
            self._normalize(QuestionType.TRADITIONAL, options, {"selected_index": 0}),
            [Contribution("self_management", 1.0)],
        )
        # Finite weight and rating whose product overflows.
        grid = {"statements": {"s1": {"dimensions": {"self_management": 1e300}}}}
        self.assertEqual(self._normalize(QuestionType.LIKERT_GRID, grid, {"s1": 1e300}), [])

    def test_malformed_payload_never_raises(self):
        schema = {"items": {"a": {"dimensions": {"ethical_reasoning": 1.0}}}}
        for question_type in QuestionType.values:
            for payload in (None, 42, "text", {"pile_a": "a"}):
                self.assertIsInstance(self._normalize(question_type, schema, payload), list)

    def test_missing_catalog_entry_is_skipped_with_warning(self):
        catalog = _fixed_choice_catalog()
        responses = _responses(["q_ethical_reasoning", "q_retired"])
        with self.assertLogs("intelligence.normalizer", level="WARNING") as logs:
            result = normalize_all(responses, catalog)
        self.assertEqual(result, [Contribution("ethical_reasoning", 1.0)])
        self.assertIn("q_retired", logs.output[0])


class AccumulatorTests(SimpleTestCase):
    def test_empty_input_scores_every_dimension_zero(self):
        scores = accumulate([])
        self.assertEqual(list(scores), list(DIMENSION_KEYS))
        self.assertTrue(all(score.percentage == 0 for score in scores.values()))
        self.assertTrue(all(score.count == 0 for score in scores.values()))

    def test_percentage_is_mean_contribution_rounded_half_up(self):
        scores = accumulate(
            [Contribution("ethical_reasoning", 0.125), Contribution("self_management", 0.5)]
        )
        self.assertEqual(scores["ethical_reasoning"].percentage, 13.0)
        self.assertEqual(scores["self_management"].percentage, 50.0)
        self.assertEqual(round_half_up(2.5), 3.0)

    def test_weighted_score_uses_unnormalised_weight(self):
        scores = accumulate([Contribution("cognitive_flexibility", 1.0)])
        self.assertEqual(scores["cognitive_flexibility"].weighted_score, 100 * 0.09)
        self.assertAlmostEqual(sum(d.weight for d in DIMENSIONS.values()), 1.02)

    def test_percentages_are_not_clamped(self):
        scores = accumulate([Contribution("risk_tolerance", -0.5), Contribution("influence_style", 3.0)])
        self.assertEqual(scores["risk_tolerance"].percentage, -50.0)
        self.assertEqual(scores["influence_style"].percentage, 300.0)

    def test_overflowing_tally_scores_zero(self):
        contributions = [
            Contribution("ethical_reasoning", 1e308),
            Contribution("ethical_reasoning", 1e308),
            Contribution("self_management", 0.5),
        ]
        with self.assertLogs("intelligence.scoring", level="WARNING"):
            scores = accumulate(contributions)
        self.assertEqual(scores["ethical_reasoning"].percentage, 0.0)
        self.assertEqual(scores["ethical_reasoning"].total, 0.0)
        self.assertEqual(scores["ethical_reasoning"].count, 2)
        self.assertEqual(scores["self_management"].percentage, 50.0)
        for score in scores.values():
            self.assertTrue(math.isfinite(score.percentage))
            self.assertTrue(math.isfinite(score.weighted_score))

    def test_tally_add_returns_new_value(self):
        tally = DimensionTally()
        updated = tally.add(0.5)
        self.assertEqual((tally.total, tally.count), (0.0, 0))
        self.assertEqual((updated.total, updated.count), (0.5, 1))

    def test_percentile_bands(self):
        self.assertEqual(percentile_for(95), 95)
        self.assertEqual(percentile_for(80), 85)
        self.assertEqual(percentile_for(65), 50)
        self.assertEqual(percentile_for(10), 5)

    def test_fixed_choice_probabilities_stay_within_bounds(self):
        catalog = _fixed_choice_catalog()
        responses = _responses(list(catalog), selected_index=1) + _responses(list(catalog))
        scores = accumulate(normalize_all(responses, catalog))
        for score in scores.values():
            self.assertGreaterEqual(score.percentage, 0)
            self.assertLessEqual(score.percentage, 100)


class FrameworkMapperTests(SimpleTestCase):
    def test_balanced_baseline_all_high(self):
        result = map_temperament(_profile(100), strategy="balanced_baseline")
        self.assertEqual(result.result, "ESTJ")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.details["extroversion"], 300)
        self.assertEqual(result.details["introversion"], 0)

    def test_balanced_baseline_midpoint_falls_to_second_pole(self):
        result = map_temperament(_profile(50), strategy="balanced_baseline")
        self.assertEqual(result.result, "INFP")
        self.assertEqual(result.confidence, 0.0)

    def test_balanced_baseline_confidence_is_weakest_axis(self):
        percentages = _profile(100, systems_thinking=60, self_management=60)
        result = map_temperament(percentages, strategy="balanced_baseline")
        # S axis: 120 vs 80 over 200.
        self.assertEqual(result.result[1], "S")
        self.assertAlmostEqual(result.confidence, 0.2)

    def test_centered_offset_strategy(self):
        result = map_temperament(_profile(100), strategy="centered_offset")
        self.assertEqual(result.result, "ENFP")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.details["strategy"], "centered_offset")

    @override_settings(INTELLIGENCE_TEMPERAMENT_STRATEGY="centered_offset")
    def test_strategy_follows_setting(self):
        self.assertEqual(map_temperament(_profile(100)).details["strategy"], "centered_offset")

    def test_unknown_strategy_raises(self):
        with self.assertRaises(UnknownStrategyError):
            map_temperament(_profile(), strategy="astrology")

    def test_five_trait_reports_top_two_with_inverted_stability(self):
        percentages = _profile(
            50,
            cognitive_flexibility=80,
            learning_orientation=90,
            social_calibration=40,
            relationship_building=60,
            collaborative_intelligence=70,
            emotional_regulation=30,
        )
        result = map_five_trait(percentages)
        self.assertEqual(result.details["openness"], 86)
        self.assertEqual(result.details["neuroticism"], 70)
        self.assertEqual(result.result, "Openness-Neuroticism")
        self.assertEqual(result.confidence, 0.85)

    def test_five_trait_ties_follow_trait_order(self):
        self.assertEqual(map_five_trait(_profile(50)).result, "Openness-Conscientiousness")

    def test_four_factor_argmax_and_ties(self):
        self.assertEqual(map_four_factor(_profile(50)).result, "D")
        percentages = _profile(0, relationship_building=90, social_calibration=90)
        result = map_four_factor(percentages)
        self.assertEqual(result.result, "I")
        self.assertEqual(result.details["influence"], 90)
        self.assertEqual(result.confidence, 0.80)

    def test_nine_type_ties_go_to_lowest_number(self):
        self.assertEqual(map_nine_type(_profile(50)).result, "Type 1")
        self.assertEqual(map_nine_type(_profile(50, influence_style=90)).result, "Type 8")

    def test_degenerate_input_has_zero_confidence(self):
        results = map_frameworks(_profile(0))
        self.assertEqual(set(results), {"temperament", "five_trait", "four_factor", "nine_type"})
        for result in results.values():
            self.assertEqual(result.confidence, 0.0)
            self.assertTrue(result.result)


class ConsistencyAnalyzerTests(SimpleTestCase):
    def test_single_response_has_insufficient_data(self):
        signal = analyze(_responses(["q_ethical_reasoning"]))
        self.assertEqual(signal.decision_speed, "Insufficient data")
        self.assertEqual(signal.average_response_time_ms, 0)
        self.assertEqual(signal.engagement_level, "High")

    def test_rapid_responses_lower_engagement(self):
        catalog = _fixed_choice_catalog()
        signal = analyze(_responses(list(catalog), spacing_seconds=2), catalog)
        self.assertEqual(signal.average_response_time_ms, 2000)
        self.assertEqual(signal.decision_speed, "Fast")
        self.assertEqual(signal.engagement_level, "Low")

        moderate = analyze(_responses(list(catalog)[:7], spacing_seconds=2), catalog)
        self.assertEqual(moderate.engagement_level, "Moderate")

    def test_decision_speed_bands(self):
        self.assertEqual(analyze(_responses(["a", "b"], spacing_seconds=10)).decision_speed, "Moderate")
        self.assertEqual(analyze(_responses(["a", "b"], spacing_seconds=20)).decision_speed, "Deliberate")

    def test_low_variety_marker(self):
        catalog = _fixed_choice_catalog()
        signal = analyze(_responses(list(catalog)[:10]), catalog)
        self.assertIn("Low response variety", signal.consistency_markers)
        self.assertAlmostEqual(signal.consistency_score, 15.0)
        self.assertEqual(signal.fixed_choice_count, 10)

    def test_no_fixed_choice_answers_scores_full_consistency(self):
        responses = _responses(["a", "b"], question_type=QuestionType.WORD_CLOUD)
        signal = analyze(responses)
        self.assertEqual(signal.consistency_score, 100.0)
        self.assertEqual(signal.consistency_markers, ())

    def test_strong_tendency_marker_from_option_indicators(self):
        catalog = {
            f"q{i}": QuestionDefinition(
                f"q{i}",
                QuestionType.TRADITIONAL,
                {"options": [{"score_weights": {}, "behavioral_indicators": ["empathetic"]}]},
            )
            for i in range(4)
        }
        signal = analyze(_responses(list(catalog)), catalog)
        self.assertIn("Strong empathetic tendency", signal.consistency_markers)


class ReportGeneratorTests(SimpleTestCase):
    def test_all_dimensions_at_full_score(self):
        percentages = _profile(100)
        report = build_report(percentages, map_frameworks(percentages))
        self.assertEqual(len(report["strengths"]), 12)
        for strength in report["strengths"]:
            self.assertEqual(strength["tier"], 90)
            self.assertEqual(strength["insight"], narratives.STRENGTH_INSIGHTS[strength["dimension"]][90])
        self.assertEqual(report["cultural_fit_score"], 100)
        self.assertEqual(report["growth_areas"], [])
        self.assertEqual(report["average_score"], 100.0)
        self.assertIn("exceptional overall capabilities", report["executive_summary"])

    def test_empty_profile(self):
        report = build_report(_profile(0))
        self.assertEqual(report["cultural_fit_score"], 0)
        self.assertEqual(report["risk_factors"][0]["level"], "HIGH")
        self.assertEqual(report["response_profile"], {})

    def test_decision_making_combination_risk(self):
        risks = identify_risk_factors(_profile(70, risk_tolerance=90, ethical_reasoning=55))
        factors = {(risk["level"], risk["factor"]) for risk in risks}
        self.assertIn(("MEDIUM", "Decision Making"), factors)
        self.assertNotIn(("HIGH", "Ethical Reasoning"), factors)

    def test_risks_sorted_high_first(self):
        risks = identify_risk_factors(_profile(70, achievement_drive=45, ethical_reasoning=30))
        self.assertEqual([risk["level"] for risk in risks], ["HIGH", "MEDIUM"])
        self.assertEqual(risks[0]["factor"], "Ethical Reasoning")
        self.assertEqual(risks[1]["factor"], "Performance Drive")

    def test_growth_area_severity(self):
        areas = identify_growth_areas(_profile(70, self_management=35, influence_style=55))
        self.assertEqual([area["dimension"] for area in areas], ["self_management", "influence_style"])
        self.assertTrue(areas[0]["insight"].startswith("Significant development needed in organization"))
        self.assertTrue(areas[1]["insight"].startswith("Room for growth in leadership"))
        self.assertEqual(areas[1]["recommendation"], narratives.DEVELOPMENT_ACTIONS["influence_style"])

    def test_predictions_fire_positive_and_negative_branches(self):
        report = build_report(_profile(60, relationship_building=40))
        predictions = {p["category"]: p["prediction"] for p in report["behavioral_predictions"]}
        self.assertEqual(predictions["Client Interactions"], "May need support in client-facing situations")

        report = build_report(_profile(80))
        categories = [p["category"] for p in report["behavioral_predictions"]]
        self.assertEqual(
            categories,
            ["Client Interactions", "Team Dynamics", "Stress Management", "Leadership", "Innovation", "Sales Performance"],
        )

    def test_development_priorities_limited_to_three_below_seventy(self):
        percentages = _profile(80, self_management=40, learning_orientation=65)
        priorities = build_report(percentages)["recommendations"]["development_priorities"]
        self.assertEqual(
            [(p["dimension"], p["priority"]) for p in priorities],
            [("self_management", "HIGH"), ("learning_orientation", "MEDIUM")],
        )

    def test_role_fit_scores_stay_within_bounds(self):
        for percentages in (_profile(0), _profile(100), _profile(37, ethical_reasoning=100, influence_style=3)):
            scores = role_fit_scores(percentages)
            self.assertEqual(
                set(scores),
                {"financial_advisor", "team_leader", "analyst", "business_development", "client_service"},
            )
            for score in scores.values():
                self.assertGreaterEqual(score, 0)
                self.assertLessEqual(score, 100)

    def test_cultural_fit_is_clamped(self):
        self.assertEqual(cultural_fit_score(_profile(300)), 100)
        self.assertEqual(cultural_fit_score(_profile(-40)), 0)

    def test_communication_style_uses_framework_letters(self):
        percentages = _profile(100)
        style = build_report(percentages, map_frameworks(percentages))["communication_style"]
        self.assertIn("Be direct and to the point", style["communication_tips"])
        self.assertIn("Prefers verbal communication and brainstorming", style["communication_tips"])

    def test_communication_style_without_frameworks_uses_scores(self):
        style = build_report(_profile(75))["communication_style"]
        self.assertIn("Provide detailed information and data", style["communication_tips"])

    def test_low_engagement_adds_behavioral_recommendation(self):
        catalog = _fixed_choice_catalog()
        signal = analyze(_responses(list(catalog), spacing_seconds=1), catalog)
        report = build_report(_profile(70), consistency=signal)
        self.assertIn(narratives.LOW_ENGAGEMENT_RECOMMENDATION, report["recommendations"]["behavioral"])
        self.assertEqual(report["response_profile"]["engagement_level"], "Low")
        self.assertIn("low engagement", report["executive_summary"])

    def test_failing_section_degrades_without_aborting(self):
        with mock.patch("intelligence.reports.work_style", side_effect=RuntimeError("boom")):
            with self.assertLogs("intelligence.reports", level="ERROR"):
                report = build_report(_profile(85))
        self.assertEqual(report["work_style"], {})
        self.assertEqual(len(report["strengths"]), 12)


class ScoreResponsesTests(SimpleTestCase):
    def test_end_to_end_fixed_choice_scenario(self):
        catalog = _fixed_choice_catalog()
        scoring = score_responses(_responses(list(catalog)), catalog)
        for key, score in scoring.dimension_scores.items():
            self.assertEqual(score.percentage, 100)
            self.assertEqual(score.weighted_score, 100 * DIMENSIONS[key].weight)
        self.assertEqual(scoring.report["cultural_fit_score"], 100)
        self.assertEqual(len(scoring.report["strengths"]), 12)

    def test_scoring_is_idempotent(self):
        catalog = _fixed_choice_catalog()
        responses = _responses(list(catalog), selected_index=1)
        first = score_responses(responses, catalog)
        second = score_responses(responses, catalog)
        self.assertEqual(first.dimension_scores, second.dimension_scores)
        self.assertEqual(first.frameworks, second.frameworks)

    def test_overflowing_inline_weights_do_not_abort_scoring(self):
        catalog = {"w": QuestionDefinition("w", QuestionType.WORD_CLOUD, {"words": {}})}
        selection = [{"dimensions": {"ethical_reasoning": 1e308}}] * 2
        responses = [ResponseRecord("w", QuestionType.WORD_CLOUD, selection, START)]
        with self.assertLogs("intelligence.scoring", level="WARNING"):
            scoring = score_responses(responses, catalog)
        self.assertEqual(scoring.percentages["ethical_reasoning"], 0.0)
        self.assertTrue(all(math.isfinite(value) for value in scoring.percentages.values()))
        self.assertEqual(scoring.report["cultural_fit_score"], 0)


class ScoringPipelineTests(TestCase):
    def setUp(self):
        self.assessment = Assessment.objects.create(title="Advisor Screen", slug="advisor-screen")
        for order, key in enumerate(DIMENSION_KEYS, start=1):
            Question.objects.create(
                assessment=self.assessment,
                external_id=f"q_{key}",
                prompt=f"Scenario for {key}",
                question_type=QuestionType.TRADITIONAL,
                order=order,
                schema={"options": [{"score_weights": {key: 1.0}}, {"score_weights": {key: 0.3}}]},
            )
        candidate = CandidateProfile.objects.create(first_name="Ava", email="ava@example.com")
        self.session = AssessmentSession.objects.create(
            candidate=candidate, assessment=self.assessment, status="completed"
        )

    def _answer_all(self, selected_index=0):
        for position, question in enumerate(self.assessment.questions.all()):
            Response.objects.create(
                session=self.session,
                question=question,
                payload={"selected_index": selected_index},
                answered_at=START + timedelta(seconds=10 * position),
            )

    def test_unbounded_average_is_stored_on_session(self):
        for question in self.assessment.questions.all():
            key = question.external_id[len("q_"):]
            question.schema = {"options": [{"score_weights": {key: 500}}]}
            question.save(update_fields=["schema"])
        self._answer_all()
        run_scoring_pipeline(self.session)
        self.session.refresh_from_db()
        self.assertEqual(self.session.average_score, 50000.0)

    def test_pipeline_persists_scores_mappings_and_report(self):
        self._answer_all()
        run_scoring_pipeline(self.session)

        self.assertEqual(DimensionScore.objects.filter(session=self.session).count(), 12)
        self.assertTrue(
            all(score.percentage == 100 for score in DimensionScore.objects.filter(session=self.session))
        )
        self.assertEqual(FrameworkMapping.objects.filter(session=self.session).count(), 4)
        report = IntelligenceReport.objects.get(session=self.session)
        self.assertEqual(report.cultural_fit_score, 100)
        self.assertEqual(report.response_profile["decision_speed"], "Moderate")
        self.session.refresh_from_db()
        self.assertEqual(float(self.session.average_score), 100.0)

    def test_pipeline_sends_scoring_completed_with_alerts(self):
        self._answer_all()
        received = []

        def _capture(sender, **kwargs):
            received.append(kwargs)

        scoring_completed.connect(_capture, dispatch_uid="test_capture")
        try:
            run_scoring_pipeline(self.session)
        finally:
            scoring_completed.disconnect(dispatch_uid="test_capture")

        self.assertEqual(len(received), 1)
        self.assertEqual(received[0]["assessment_id"], self.assessment.id)
        self.assertEqual(received[0]["average_score"], 100.0)
        self.assertEqual([alert["type"] for alert in received[0]["alerts"]], ["high_performer"])

    def test_rerunning_pipeline_overwrites_rows(self):
        self._answer_all()
        run_scoring_pipeline(self.session)
        Response.objects.filter(session=self.session).update(payload={"selected_index": 1})
        run_scoring_pipeline(self.session)

        scores = DimensionScore.objects.filter(session=self.session)
        self.assertEqual(scores.count(), 12)
        self.assertTrue(all(score.percentage == 30 for score in scores))
        self.assertEqual(IntelligenceReport.objects.filter(session=self.session).count(), 1)

    def test_empty_assessment_scores_zero_and_flags_every_dimension(self):
        received = []

        def _capture(sender, **kwargs):
            received.append(kwargs)

        scoring_completed.connect(_capture, dispatch_uid="test_capture_empty")
        try:
            scoring = run_scoring_pipeline(self.session)
        finally:
            scoring_completed.disconnect(dispatch_uid="test_capture_empty")

        self.assertTrue(all(value == 0 for value in scoring.percentages.values()))
        self.assertEqual(scoring.report["cultural_fit_score"], 0)
        red_flags = [alert for alert in received[0]["alerts"] if alert["type"] == "red_flag"]
        self.assertEqual(len(red_flags), 12)

    def test_sink_failure_propagates_without_partial_writes(self):
        self._answer_all()
        with mock.patch.object(
            IntelligenceReport.objects, "update_or_create", side_effect=DatabaseError("down")
        ):
            with self.assertRaises(DatabaseError):
                run_scoring_pipeline(self.session)
        self.assertFalse(DimensionScore.objects.filter(session=self.session).exists())
        self.assertFalse(FrameworkMapping.objects.filter(session=self.session).exists())

    def test_inactive_questions_are_excluded_from_catalog(self):
        self._answer_all()
        Question.objects.filter(external_id="q_ethical_reasoning").update(is_active=False)
        scoring = run_scoring_pipeline(self.session)
        self.assertEqual(scoring.percentages["ethical_reasoning"], 0)
        self.assertEqual(scoring.percentages["self_management"], 100)

    def test_unknown_strategy_is_a_pipeline_error(self):
        with self.assertRaises(ScoringPipelineError):
            run_scoring_pipeline(self.session, temperament_strategy="astrology")

    def test_response_log_is_ordered_by_answer_time(self):
        questions = list(self.assessment.questions.all()[:2])
        Response.objects.create(
            session=self.session, question=questions[0], payload={"selected_index": 0}, answered_at=START + timedelta(minutes=5)
        )
        Response.objects.create(
            session=self.session, question=questions[1], payload={"selected_index": 0}, answered_at=START
        )
        log = load_response_log(self.session)
        self.assertEqual([record.question_id for record in log], [questions[1].external_id, questions[0].external_id])

    def test_regenerate_report_uses_stored_scores(self):
        self._answer_all()
        run_scoring_pipeline(self.session)
        DimensionScore.objects.filter(session=self.session, dimension="ethical_reasoning").update(percentage=20)

        report = regenerate_intelligence_report(self.session)
        factors = [risk["factor"] for risk in report.risk_factors]
        self.assertIn("Ethical Reasoning", factors)
        self.assertEqual(
            FrameworkMapping.objects.get(session=self.session, framework="temperament").result,
            "ESTJ",
        )

    def test_score_assessment_command(self):
        self._answer_all()
        out = StringIO()
        call_command("score_assessment", session=str(self.session.uuid), stdout=out)
        self.assertIn("Scored 1 session(s).", out.getvalue())
        self.assertTrue(IntelligenceReport.objects.filter(session=self.session).exists())

    def test_regenerate_reports_command(self):
        self._answer_all()
        run_scoring_pipeline(self.session)
        out = StringIO()
        call_command("regenerate_intelligence_reports", stdout=out)
        self.assertIn("Regenerated 1 intelligence report(s).", out.getvalue())
