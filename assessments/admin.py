from django.contrib import admin

from intelligence.services import run_scoring_pipeline

from . import models


class QuestionInline(admin.StackedInline):
    model = models.Question
    extra = 0
    show_change_link = True
    fields = ("external_id", "question_type", "order", "prompt", "is_active")


@admin.register(models.Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "duration_minutes", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("title", "summary")
    prepopulated_fields = {"slug": ("title",)}
    inlines = [QuestionInline]


@admin.register(models.Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("assessment", "external_id", "order", "question_type", "is_active", "updated_at")
    list_filter = ("question_type", "is_active", "assessment")
    search_fields = ("external_id", "prompt")
    ordering = ("assessment", "order")
    actions = ["mark_active", "mark_inactive"]

    def mark_active(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} question(s) activated.')
    mark_active.short_description = "Activate selected questions"

    def mark_inactive(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} question(s) deactivated.')
    mark_inactive.short_description = "Deactivate selected questions"


@admin.register(models.CandidateProfile)
class CandidateProfileAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "email", "headline", "updated_at")
    search_fields = ("first_name", "last_name", "email")


class ResponseInline(admin.TabularInline):
    model = models.Response
    extra = 0
    show_change_link = True
    fields = ("question", "question_type", "answered_at")
    readonly_fields = ("answered_at",)


@admin.register(models.AssessmentSession)
class AssessmentSessionAdmin(admin.ModelAdmin):
    list_display = (
        "uuid",
        "candidate",
        "assessment",
        "status",
        "average_score",
        "invited_at",
        "submitted_at",
    )
    list_filter = ("status", "assessment")
    search_fields = (
        "candidate__first_name",
        "candidate__last_name",
        "candidate__email",
        "assessment__title",
    )
    inlines = [ResponseInline]
    actions = ["rescore"]

    def rescore(self, request, queryset):
        count = 0
        for session in queryset.select_related("assessment"):
            run_scoring_pipeline(session)
            count += 1
        self.message_user(request, f'{count} session(s) rescored.')
    rescore.short_description = "Re-run scoring for selected sessions"


@admin.register(models.Response)
class ResponseAdmin(admin.ModelAdmin):
    list_display = ("session", "question", "question_type", "answered_at")
    list_filter = ("question__assessment", "question_type")
