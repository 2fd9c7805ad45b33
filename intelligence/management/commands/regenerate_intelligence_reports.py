from django.core.management.base import BaseCommand, CommandError

from assessments.models import AssessmentSession
from intelligence.services import regenerate_reports


class Command(BaseCommand):
    help = 'Rebuild intelligence reports from stored dimension scores and framework mappings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--session',
            help='Regenerate only the report for the session with this UUID',
        )

    def handle(self, *args, **options):
        sessions = AssessmentSession.objects.select_related('assessment').filter(
            dimension_scores__isnull=False
        ).distinct()
        if options.get('session'):
            sessions = sessions.filter(uuid=options['session'])
            if not sessions.exists():
                raise CommandError(f"No scored session {options['session']}")

        count = regenerate_reports(sessions)
        if not count:
            self.stdout.write('No scored sessions found.')
            return
        self.stdout.write(self.style.SUCCESS(f'Regenerated {count} intelligence report(s).'))
