import json
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework.exceptions import ValidationError

from assessments.models import Assessment, AssessmentSession, CandidateProfile, Question, Response
from assessments.services import import_question_catalog, invite_candidate, record_responses
from intelligence.constants import QuestionType
from intelligence.models import DimensionScore, FrameworkMapping, IntelligenceReport

CATALOG_PATH = Path(__file__).resolve().parent / "data" / "behavioral_catalog.json"


def _load_catalog():
    return json.loads(CATALOG_PATH.read_text())


class RecordResponsesTests(TestCase):
    def setUp(self):
        self.assessment = Assessment.objects.create(title="Advisor Screen", slug="advisor-screen")
        import_question_catalog(assessment=self.assessment, entries=_load_catalog())
        candidate = CandidateProfile.objects.create(first_name="Ava", email="ava@example.com")
        self.session = AssessmentSession.objects.create(
            candidate=candidate, assessment=self.assessment, status="invited"
        )

    def _full_answer_set(self):
        answers = [
            ("q1", {"selected_index": 0}),
            ("lg_work_habits", {"plan_week": 5, "new_tools": {"value": 4}, "stay_calm": 3}),
            ("ss_pace", {"certainty": 80, "solo_team": 60}),
            ("wc_self", ["driven", "curious", "principled", "persuasive", "organized"]),
            ("er_deadline", {"reaction": "fired_up"}),
            ("pa_week", [{"id": "clients", "value": 50}, {"id": "analysis", "value": 30}, {"id": "learning", "value": 20}]),
            (
                "sr_values",
                [
                    {"item_id": "integrity", "rank": 1},
                    {"item_id": "winning", "rank": 2},
                    {"item_id": "harmony", "rank": 3},
                    {"item_id": "novelty", "rank": 4},
                    {"item_id": "influence", "rank": 5},
                ],
            ),
            (
                "pm_inbox",
                {
                    "client_complaint": {"quadrant": "urgent-important"},
                    "quarterly_plan": {"quadrant": "not-urgent-important"},
                    "team_lunch": {"quadrant": "neither"},
                    "newsletter": {"quadrant": "urgent-not-important"},
                },
            ),
            ("tp_statements", {"pile_a": ["double_check", "lead_room"], "pile_b": ["bend_rules"]}),
        ]
        return [
            {
                "question_id": question_id,
                "payload": payload,
                "answered_at": f"2024-03-01T09:{position:02d}:00Z",
            }
            for position, (question_id, payload) in enumerate(answers)
        ]

    def test_completed_session_is_scored_across_question_types(self):
        session = record_responses(session=self.session, answers=self._full_answer_set())

        self.assertEqual(session.status, "completed")
        self.assertIsNotNone(session.submitted_at)
        self.assertIsNotNone(session.average_score)

        scores = dict(
            DimensionScore.objects.filter(session=session).values_list("dimension", "percentage")
        )
        self.assertEqual(len(scores), 12)
        # Spectrum 0.8 plus a pile-B penalty of -0.5.
        self.assertEqual(scores["risk_tolerance"], 15)
        self.assertEqual(scores["ethical_reasoning"], 100)
        self.assertEqual(FrameworkMapping.objects.filter(session=session).count(), 4)

        report = IntelligenceReport.objects.get(session=session)
        self.assertEqual(report.response_profile["decision_speed"], "Deliberate")
        self.assertEqual(report.response_profile["response_count"], 9)

    def test_partial_submission_keeps_session_open(self):
        answers = self._full_answer_set()[:2]
        session = record_responses(session=self.session, answers=answers, mark_completed=False)

        self.assertEqual(session.status, "in_progress")
        self.assertIsNotNone(session.started_at)
        self.assertEqual(Response.objects.filter(session=session).count(), 2)
        self.assertFalse(DimensionScore.objects.filter(session=session).exists())

    def test_re_answer_replaces_stored_payload(self):
        record_responses(
            session=self.session,
            answers=[{"question_id": "q1", "payload": {"selected_index": 0}}],
            mark_completed=False,
        )
        record_responses(
            session=self.session,
            answers=[{"question_id": "q1", "payload": {"selected_index": 2}}],
        )

        responses = Response.objects.filter(session=self.session)
        self.assertEqual(responses.count(), 1)
        self.assertEqual(responses.get().payload, {"selected_index": 2})
        score = DimensionScore.objects.get(session=self.session, dimension="collaborative_intelligence")
        self.assertEqual(score.percentage, 50)

    def test_unknown_question_is_skipped(self):
        with self.assertLogs("assessments.services", level="WARNING"):
            record_responses(
                session=self.session,
                answers=[
                    {"question_id": "q1", "payload": {"selected_index": 1}},
                    {"question_id": "retired_question", "payload": {"selected_index": 0}},
                ],
                mark_completed=False,
            )
        self.assertEqual(
            list(Response.objects.filter(session=self.session).values_list("question__external_id", flat=True)),
            ["q1"],
        )

    def test_declared_type_is_stored(self):
        record_responses(
            session=self.session,
            answers=[
                {
                    "question_id": "q1",
                    "question_type": QuestionType.WORD_CLOUD,
                    "payload": {"selected_index": 0},
                }
            ],
        )
        response = Response.objects.get(session=self.session)
        self.assertEqual(response.question_type, QuestionType.WORD_CLOUD)
        # A mismatched declaration contributes nothing.
        self.assertFalse(
            DimensionScore.objects.filter(session=self.session, response_count__gt=0).exists()
        )

    def test_invalid_answer_envelope_is_rejected(self):
        with self.assertRaises(ValidationError):
            record_responses(session=self.session, answers=[{"payload": {"selected_index": 0}}])
        self.assertFalse(Response.objects.filter(session=self.session).exists())


class ImportQuestionCatalogTests(TestCase):
    def setUp(self):
        self.assessment = Assessment.objects.create(title="Advisor Screen", slug="advisor-screen")

    def test_import_creates_then_updates_by_external_id(self):
        result = import_question_catalog(assessment=self.assessment, entries=_load_catalog())
        self.assertEqual((result.created, result.updated), (9, 0))
        self.assertEqual(
            set(self.assessment.questions.values_list("question_type", flat=True)),
            set(QuestionType.values),
        )

        entries = _load_catalog()
        entries[0]["prompt"] = "Updated prompt"
        result = import_question_catalog(assessment=self.assessment, entries=entries)
        self.assertEqual((result.created, result.updated), (0, 9))
        self.assertEqual(Question.objects.get(external_id="q1").prompt, "Updated prompt")

    def test_invalid_entries_are_rejected(self):
        with self.assertRaises(ValidationError):
            import_question_catalog(
                assessment=self.assessment,
                entries=[{"id": "bad", "type": "crystal_ball", "schema": {}}],
            )
        with self.assertRaises(ValidationError):
            import_question_catalog(
                assessment=self.assessment,
                entries=[{"id": "bad", "type": "traditional", "schema": ["not", "a", "mapping"]}],
            )
        self.assertFalse(self.assessment.questions.exists())

    def test_import_command_creates_assessment(self):
        out = StringIO()
        call_command(
            "import_question_catalog",
            str(CATALOG_PATH),
            assessment="behavioral-screen",
            title="Behavioral Screen",
            stdout=out,
        )
        assessment = Assessment.objects.get(slug="behavioral-screen")
        self.assertEqual(assessment.title, "Behavioral Screen")
        self.assertEqual(assessment.questions.count(), 9)
        self.assertIn("Imported 9 new and 0 existing questions", out.getvalue())

    def test_import_command_missing_file(self):
        with self.assertRaises(CommandError):
            call_command("import_question_catalog", "/nonexistent/catalog.json", assessment="x")


class InviteCandidateTests(TestCase):
    def setUp(self):
        self.assessment = Assessment.objects.create(title="Advisor Screen", slug="advisor-screen")

    def test_invite_reuses_open_invitation(self):
        first = invite_candidate(
            assessment=self.assessment, first_name="Ava", email="Ava@Example.com"
        )
        second = invite_candidate(
            assessment=self.assessment, first_name="Ava", last_name="Stone", email="ava@example.com"
        )

        self.assertTrue(first.created)
        self.assertFalse(second.created)
        self.assertEqual(first.session.pk, second.session.pk)
        self.assertEqual(second.candidate.last_name, "Stone")
        self.assertEqual(first.session.status, "invited")
        self.assertIsNotNone(first.session.invited_at)
