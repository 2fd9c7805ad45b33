import uuid

from django.db import models
from django.utils import timezone

from intelligence.constants import QuestionType


class TimeStampedModel(models.Model):
    """Base class to track creation and modification times."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Assessment(TimeStampedModel):
    """A behavioural assessment made of interactive and fixed-choice questions."""

    title = models.CharField(max_length=160)
    slug = models.SlugField(unique=True)
    summary = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(default=30)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ("title",)

    def __str__(self):
        return self.title


class Question(TimeStampedModel):
    """
    Catalog entry for a single question.

    ``schema`` holds the type-specific definition: options with score
    weights for fixed-choice questions, or keyed statements, words, items,
    categories and spectrums carrying dimension weights for interactive ones.
    """

    assessment = models.ForeignKey(
        Assessment, related_name="questions", on_delete=models.CASCADE
    )
    external_id = models.CharField(
        max_length=64,
        help_text="Identifier referenced by recorded responses (e.g. q1, ig_7).",
    )
    prompt = models.TextField()
    question_type = models.CharField(
        max_length=32,
        choices=QuestionType.choices,
        default=QuestionType.TRADITIONAL,
    )
    order = models.PositiveIntegerField(default=1)
    schema = models.JSONField(
        default=dict,
        blank=True,
        help_text="Type-specific definition carrying per-dimension weights.",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ("assessment", "order", "id")
        unique_together = ("assessment", "external_id")

    def __str__(self):
        return f"{self.assessment.title} · {self.external_id}"


class CandidateProfile(TimeStampedModel):
    """Represents an individual candidate that can receive invitations."""

    first_name = models.CharField(max_length=80)
    last_name = models.CharField(max_length=80, blank=True)
    email = models.EmailField(unique=True)
    headline = models.CharField(max_length=180, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ("first_name", "last_name")

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip()


class AssessmentSession(TimeStampedModel):
    """Invitation or attempt for a candidate completing an assessment."""

    STATUS_CHOICES = [
        ("invited", "Invited"),
        ("in_progress", "In Progress"),
        ("completed", "Completed"),
        ("expired", "Expired"),
    ]

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, db_index=True)
    candidate = models.ForeignKey(
        CandidateProfile, related_name="sessions", on_delete=models.CASCADE
    )
    assessment = models.ForeignKey(
        Assessment, related_name="sessions", on_delete=models.CASCADE
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="invited")
    invited_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    submitted_at = models.DateTimeField(null=True, blank=True)
    last_activity_at = models.DateTimeField(null=True, blank=True)
    average_score = models.FloatField(null=True, blank=True)

    class Meta:
        ordering = ("-created_at",)

    def __str__(self):
        return f"{self.candidate} · {self.assessment.title}"

    def touch(self, *, when=None):
        self.last_activity_at = when or timezone.now()
        if self.started_at is None:
            self.started_at = self.last_activity_at
        if self.status == "invited":
            self.status = "in_progress"


class Response(TimeStampedModel):
    """A candidate's answer for a specific question, stored as raw payload."""

    session = models.ForeignKey(
        AssessmentSession, related_name="responses", on_delete=models.CASCADE
    )
    question = models.ForeignKey(
        Question, related_name="responses", on_delete=models.CASCADE
    )
    question_type = models.CharField(
        max_length=32,
        choices=QuestionType.choices,
        blank=True,
        help_text="Type declared by the client when answering; blank means not declared.",
    )
    payload = models.JSONField(default=dict, blank=True)
    answered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        unique_together = ("session", "question")
        ordering = ("answered_at", "id")

    def __str__(self):
        return f"Response · {self.session} · {self.question.external_id}"
