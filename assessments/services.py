from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from django.db import transaction
from django.utils import timezone

from intelligence.services import run_scoring_pipeline

from .models import Assessment, AssessmentSession, CandidateProfile, Question, Response
from .serializers import AnswerSerializer, CatalogQuestionSerializer

logger = logging.getLogger(__name__)


@dataclass
class SessionInvite:
    candidate: CandidateProfile
    session: AssessmentSession
    assessment: Assessment
    created: bool


@dataclass
class CatalogImport:
    created: int
    updated: int


def invite_candidate(
    *,
    assessment: Assessment,
    first_name: str,
    last_name: str = "",
    email: str,
    headline: str = "",
    metadata: dict | None = None,
) -> SessionInvite:
    """Create a candidate profile and an associated assessment session."""

    candidate, _ = CandidateProfile.objects.update_or_create(
        email=email.lower(),
        defaults={
            "first_name": first_name.strip() or "Candidate",
            "last_name": last_name.strip(),
            "headline": headline,
            "metadata": metadata or {},
        },
    )
    session, created = AssessmentSession.objects.get_or_create(
        candidate=candidate,
        assessment=assessment,
        status="invited",
        defaults={"invited_at": timezone.now()},
    )
    return SessionInvite(
        candidate=candidate, session=session, assessment=assessment, created=created
    )


def import_question_catalog(*, assessment: Assessment, entries: Sequence[dict]) -> CatalogImport:
    """Validate catalog entries and upsert them by external id."""

    serializer = CatalogQuestionSerializer(data=list(entries), many=True)
    serializer.is_valid(raise_exception=True)

    created = updated = 0
    with transaction.atomic():
        for position, entry in enumerate(serializer.validated_data, start=1):
            _, was_created = Question.objects.update_or_create(
                assessment=assessment,
                external_id=entry["id"],
                defaults={
                    "prompt": entry.get("prompt", ""),
                    "question_type": entry["type"],
                    "order": entry.get("order") or position,
                    "schema": entry.get("schema") or {},
                    "is_active": True,
                },
            )
            if was_created:
                created += 1
            else:
                updated += 1
    return CatalogImport(created=created, updated=updated)


def record_responses(
    *,
    session: AssessmentSession,
    answers: Sequence[dict],
    mark_completed: bool = True,
) -> AssessmentSession:
    """
    Persist candidate answers and optionally finalize the session.

    A re-answer replaces the stored payload for that question. Answers that
    reference a question outside the assessment are skipped.
    """

    serializer = AnswerSerializer(data=list(answers), many=True)
    serializer.is_valid(raise_exception=True)
    validated = serializer.validated_data

    question_map = {
        q.external_id: q
        for q in Question.objects.filter(
            assessment=session.assessment,
            external_id__in=[a["question_id"] for a in validated],
        )
    }

    now = timezone.now()
    latest = None
    for answer in validated:
        question = question_map.get(answer["question_id"])
        if not question:
            logger.warning(
                "Session %s answered unknown question %s; skipping",
                session.uuid,
                answer["question_id"],
            )
            continue
        answered_at = answer.get("answered_at") or now
        Response.objects.update_or_create(
            session=session,
            question=question,
            defaults={
                "question_type": answer.get("question_type", ""),
                "payload": answer["payload"],
                "answered_at": answered_at,
            },
        )
        latest = answered_at if latest is None else max(latest, answered_at)

    session.touch(when=latest or now)
    if not mark_completed:
        session.save(update_fields=["status", "started_at", "last_activity_at", "updated_at"])
        return session

    session.status = "completed"
    session.submitted_at = now
    session.save(
        update_fields=["status", "started_at", "submitted_at", "last_activity_at", "updated_at"]
    )
    run_scoring_pipeline(session)
    session.refresh_from_db()
    return session
