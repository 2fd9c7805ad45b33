from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


DIMENSION_CHOICES = [
    ("cognitive_flexibility", "Cognitive Flexibility"),
    ("emotional_regulation", "Emotional Regulation"),
    ("social_calibration", "Social Calibration"),
    ("achievement_drive", "Achievement Drive"),
    ("learning_orientation", "Learning Orientation"),
    ("risk_tolerance", "Risk Tolerance"),
    ("relationship_building", "Relationship Building"),
    ("ethical_reasoning", "Ethical Reasoning"),
    ("influence_style", "Influence Style"),
    ("systems_thinking", "Systems Thinking"),
    ("self_management", "Self Management"),
    ("collaborative_intelligence", "Collaborative Intelligence"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("assessments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DimensionScore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("dimension", models.CharField(choices=DIMENSION_CHOICES, max_length=40)),
                ("percentage", models.FloatField(default=0)),
                ("weighted_score", models.FloatField(default=0)),
                ("percentile", models.PositiveSmallIntegerField(default=0)),
                ("total", models.FloatField(default=0)),
                ("response_count", models.PositiveIntegerField(default=0)),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dimension_scores",
                        to="assessments.assessmentsession",
                    ),
                ),
            ],
            options={
                "ordering": ("session", "dimension"),
                "unique_together": {("session", "dimension")},
            },
        ),
        migrations.CreateModel(
            name="FrameworkMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "framework",
                    models.CharField(
                        choices=[
                            ("temperament", "Temperament code (MBTI-style)"),
                            ("five_trait", "Five-trait profile (Big Five)"),
                            ("four_factor", "Four-factor style (DISC)"),
                            ("nine_type", "Nine-type profile (Enneagram)"),
                        ],
                        max_length=20,
                    ),
                ),
                ("result", models.CharField(max_length=40)),
                ("confidence", models.FloatField(default=0)),
                ("details", models.JSONField(blank=True, default=dict)),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="framework_mappings",
                        to="assessments.assessmentsession",
                    ),
                ),
            ],
            options={
                "ordering": ("session", "framework"),
                "unique_together": {("session", "framework")},
            },
        ),
        migrations.CreateModel(
            name="IntelligenceReport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("executive_summary", models.TextField(blank=True)),
                ("strengths", models.JSONField(blank=True, default=list)),
                ("growth_areas", models.JSONField(blank=True, default=list)),
                ("behavioral_predictions", models.JSONField(blank=True, default=list)),
                ("communication_style", models.JSONField(blank=True, default=dict)),
                ("work_style", models.JSONField(blank=True, default=dict)),
                ("team_dynamics", models.JSONField(blank=True, default=dict)),
                ("risk_factors", models.JSONField(blank=True, default=list)),
                ("recommendations", models.JSONField(blank=True, default=dict)),
                ("response_profile", models.JSONField(blank=True, default=dict)),
                ("cultural_fit_score", models.PositiveSmallIntegerField(default=0)),
                ("role_fit_scores", models.JSONField(blank=True, default=dict)),
                ("average_score", models.FloatField(default=0)),
                ("generated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "session",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="intelligence_report",
                        to="assessments.assessmentsession",
                    ),
                ),
            ],
            options={"ordering": ("-generated_at",)},
        ),
    ]
