from django.db import models
from django.utils import timezone

from assessments.models import AssessmentSession, TimeStampedModel

from .constants import DIMENSION_TABLE, Framework

DIMENSION_CHOICES = [
    (dimension.key, dimension.key.replace("_", " ").title()) for dimension in DIMENSION_TABLE
]


class DimensionScore(TimeStampedModel):
    session = models.ForeignKey(
        AssessmentSession, related_name="dimension_scores", on_delete=models.CASCADE
    )
    dimension = models.CharField(max_length=40, choices=DIMENSION_CHOICES)
    percentage = models.FloatField(default=0)
    weighted_score = models.FloatField(default=0)
    percentile = models.PositiveSmallIntegerField(default=0)
    total = models.FloatField(default=0)
    response_count = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ("session", "dimension")
        ordering = ("session", "dimension")

    def __str__(self):
        return f"{self.session} · {self.dimension}: {self.percentage:g}"


class FrameworkMapping(TimeStampedModel):
    session = models.ForeignKey(
        AssessmentSession, related_name="framework_mappings", on_delete=models.CASCADE
    )
    framework = models.CharField(max_length=20, choices=Framework.choices)
    result = models.CharField(max_length=40)
    confidence = models.FloatField(default=0)
    details = models.JSONField(default=dict, blank=True)

    class Meta:
        unique_together = ("session", "framework")
        ordering = ("session", "framework")

    def __str__(self):
        return f"{self.session} · {self.get_framework_display()}: {self.result}"


class IntelligenceReport(TimeStampedModel):
    """Narrative report for one session; regenerated in place, never versioned."""

    session = models.OneToOneField(
        AssessmentSession, related_name="intelligence_report", on_delete=models.CASCADE
    )
    executive_summary = models.TextField(blank=True)
    strengths = models.JSONField(default=list, blank=True)
    growth_areas = models.JSONField(default=list, blank=True)
    behavioral_predictions = models.JSONField(default=list, blank=True)
    communication_style = models.JSONField(default=dict, blank=True)
    work_style = models.JSONField(default=dict, blank=True)
    team_dynamics = models.JSONField(default=dict, blank=True)
    risk_factors = models.JSONField(default=list, blank=True)
    recommendations = models.JSONField(default=dict, blank=True)
    response_profile = models.JSONField(default=dict, blank=True)
    cultural_fit_score = models.PositiveSmallIntegerField(default=0)
    role_fit_scores = models.JSONField(default=dict, blank=True)
    average_score = models.FloatField(default=0)
    generated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("-generated_at",)

    def __str__(self):
        return f"Intelligence report · {self.session}"
