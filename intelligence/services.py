"""
Scoring pipeline: load the catalog and response log for a session, score
them, persist the results and announce completion.

``score_responses`` is pure; everything touching the database lives in the
loaders and in ``persist_scoring``.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from assessments.models import Assessment, AssessmentSession, Question, Response

from .consistency import analyze
from .constants import ALERT_RULES, DIMENSION_KEYS
from .exceptions import ScoringPipelineError
from .frameworks import map_frameworks, resolve_temperament_strategy
from .models import DimensionScore, FrameworkMapping, IntelligenceReport
from .normalizer import normalize_all
from .records import AssessmentScoring, FrameworkResult, QuestionDefinition, ResponseRecord
from .reports import REPORT_SECTIONS, build_report
from .scoring import accumulate
from .signals import scoring_completed

logger = logging.getLogger(__name__)

HIGH_PERFORMER_THRESHOLD = getattr(
    settings, "INTELLIGENCE_HIGH_PERFORMER_THRESHOLD", ALERT_RULES["high_performer_average"]
)
RED_FLAG_THRESHOLD = getattr(settings, "INTELLIGENCE_RED_FLAG_THRESHOLD", ALERT_RULES["red_flag_score"])


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

def load_question_catalog(assessment: Assessment) -> dict[str, QuestionDefinition]:
    questions = Question.objects.filter(assessment=assessment, is_active=True).order_by("order", "id")
    return {
        question.external_id: QuestionDefinition(
            id=question.external_id,
            question_type=question.question_type,
            schema=question.schema or {},
        )
        for question in questions
    }


def load_response_log(session: AssessmentSession) -> list[ResponseRecord]:
    responses = (
        Response.objects.filter(session=session)
        .select_related("question")
        .order_by("answered_at", "id")
    )
    return [
        ResponseRecord(
            question_id=response.question.external_id,
            question_type=response.question_type,
            payload=response.payload,
            timestamp=response.answered_at,
        )
        for response in responses
    ]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def score_responses(
    responses: Sequence[ResponseRecord],
    catalog: dict[str, QuestionDefinition],
    *,
    temperament_strategy: str | None = None,
) -> AssessmentScoring:
    strategy = resolve_temperament_strategy(temperament_strategy)
    dimension_scores = accumulate(normalize_all(responses, catalog))
    percentages = {key: score.percentage for key, score in dimension_scores.items()}
    frameworks = map_frameworks(percentages, temperament_strategy=strategy)
    consistency = analyze(responses, catalog)
    report = build_report(percentages, frameworks, consistency)
    return AssessmentScoring(
        dimension_scores=dimension_scores,
        frameworks=frameworks,
        consistency=consistency,
        report=report,
    )


def build_alerts(percentages: dict[str, float], average_score: float) -> list[dict]:
    alerts = []
    if average_score > HIGH_PERFORMER_THRESHOLD:
        alerts.append(
            {
                "type": "high_performer",
                "score": average_score,
                "message": f"High performer: average dimensional score {average_score:.1f}",
            }
        )
    for key in DIMENSION_KEYS:
        score = percentages.get(key, 0)
        if score < RED_FLAG_THRESHOLD:
            alerts.append(
                {
                    "type": "red_flag",
                    "dimension": key,
                    "score": score,
                    "message": f"{key.replace('_', ' ').title()} scored {score:g}",
                }
            )
    return alerts


# ---------------------------------------------------------------------------
# Sink
# ---------------------------------------------------------------------------

def persist_scoring(session: AssessmentSession, scoring: AssessmentScoring) -> IntelligenceReport:
    """Upsert every score, mapping and the report in one transaction."""
    with transaction.atomic():
        for key, score in scoring.dimension_scores.items():
            DimensionScore.objects.update_or_create(
                session=session,
                dimension=key,
                defaults={
                    "percentage": score.percentage,
                    "weighted_score": score.weighted_score,
                    "percentile": score.percentile,
                    "total": score.total,
                    "response_count": score.count,
                },
            )
        for framework, result in scoring.frameworks.items():
            FrameworkMapping.objects.update_or_create(
                session=session,
                framework=framework,
                defaults={
                    "result": result.result,
                    "confidence": result.confidence,
                    "details": result.details,
                },
            )
        report = _save_report(session, scoring.report)
        session.average_score = round(scoring.average_score, 2)
        session.save(update_fields=["average_score", "updated_at"])
    return report


def _save_report(session: AssessmentSession, report: dict) -> IntelligenceReport:
    defaults = {name: report[name] for name in REPORT_SECTIONS}
    defaults["average_score"] = report["average_score"]
    defaults["generated_at"] = timezone.now()
    instance, _ = IntelligenceReport.objects.update_or_create(session=session, defaults=defaults)
    return instance


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def run_scoring_pipeline(
    session: AssessmentSession, *, temperament_strategy: str | None = None
) -> AssessmentScoring:
    if session.assessment_id is None:
        raise ScoringPipelineError(f"Session {session.pk} has no assessment")

    catalog = load_question_catalog(session.assessment)
    responses = load_response_log(session)
    logger.info(
        "Scoring session %s: %s responses against %s catalog questions",
        session.uuid, len(responses), len(catalog),
    )
    scoring = score_responses(responses, catalog, temperament_strategy=temperament_strategy)
    persist_scoring(session, scoring)

    alerts = build_alerts(scoring.percentages, scoring.average_score)
    scoring_completed.send(
        sender=AssessmentSession,
        session=session,
        assessment_id=session.assessment_id,
        average_score=scoring.average_score,
        alerts=alerts,
    )
    return scoring


def regenerate_intelligence_report(session: AssessmentSession) -> IntelligenceReport:
    """
    Rebuild the report from persisted scores and mappings.

    Dimension scores are not recomputed. The response profile is refreshed
    from the stored response log.
    """
    stored = dict(
        DimensionScore.objects.filter(session=session).values_list("dimension", "percentage")
    )
    percentages = {key: stored.get(key, 0.0) for key in DIMENSION_KEYS}
    frameworks = {
        mapping.framework: FrameworkResult(
            framework=mapping.framework,
            result=mapping.result,
            confidence=mapping.confidence,
            details=mapping.details or {},
        )
        for mapping in FrameworkMapping.objects.filter(session=session)
    }
    if not stored:
        logger.warning("Regenerating report for session %s without stored dimension scores", session.uuid)

    catalog = load_question_catalog(session.assessment)
    consistency = analyze(load_response_log(session), catalog)
    report = build_report(percentages, frameworks, consistency)
    with transaction.atomic():
        instance = _save_report(session, report)
    logger.info("Regenerated intelligence report for session %s", session.uuid)
    return instance


def regenerate_reports(sessions: Iterable[AssessmentSession]) -> int:
    count = 0
    for session in sessions:
        regenerate_intelligence_report(session)
        count += 1
    return count
