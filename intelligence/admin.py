from django.contrib import admin

from .models import DimensionScore, FrameworkMapping, IntelligenceReport
from .services import regenerate_intelligence_report


@admin.register(DimensionScore)
class DimensionScoreAdmin(admin.ModelAdmin):
    list_display = ['session', 'dimension', 'percentage', 'weighted_score', 'percentile', 'response_count']
    list_filter = ['dimension']
    search_fields = ['session__candidate__email', 'session__assessment__title']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(FrameworkMapping)
class FrameworkMappingAdmin(admin.ModelAdmin):
    list_display = ['session', 'framework', 'result', 'confidence', 'updated_at']
    list_filter = ['framework']
    search_fields = ['session__candidate__email', 'result']
    readonly_fields = ['details', 'created_at', 'updated_at']


@admin.register(IntelligenceReport)
class IntelligenceReportAdmin(admin.ModelAdmin):
    list_display = ['session', 'average_score', 'cultural_fit_score', 'generated_at']
    search_fields = ['session__candidate__email', 'session__assessment__title']
    readonly_fields = [
        'executive_summary',
        'strengths',
        'growth_areas',
        'behavioral_predictions',
        'communication_style',
        'work_style',
        'team_dynamics',
        'risk_factors',
        'recommendations',
        'response_profile',
        'role_fit_scores',
        'generated_at',
    ]
    actions = ['regenerate']

    def regenerate(self, request, queryset):
        count = 0
        for report in queryset.select_related('session__assessment'):
            regenerate_intelligence_report(report.session)
            count += 1
        self.message_user(request, f'{count} report(s) regenerated.')
    regenerate.short_description = "Regenerate selected reports"
