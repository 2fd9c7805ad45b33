"""
Run the scoring pipeline for completed sessions.

Usage:
    python manage.py score_assessment
    python manage.py score_assessment --session <uuid>
    python manage.py score_assessment --strategy centered_offset
"""
from django.core.management.base import BaseCommand, CommandError

from assessments.models import AssessmentSession
from intelligence.exceptions import IntelligenceError
from intelligence.services import run_scoring_pipeline


class Command(BaseCommand):
    help = 'Score completed assessment sessions and regenerate their intelligence reports'

    def add_arguments(self, parser):
        parser.add_argument(
            '--session',
            help='Score only the session with this UUID',
        )
        parser.add_argument(
            '--strategy',
            help='Temperament strategy to use instead of the configured default',
        )

    def handle(self, *args, **options):
        sessions = AssessmentSession.objects.select_related('assessment')
        if options.get('session'):
            sessions = sessions.filter(uuid=options['session'])
            if not sessions.exists():
                raise CommandError(f"Session {options['session']} not found")
        else:
            sessions = sessions.filter(status='completed')

        total = sessions.count()
        if total == 0:
            self.stdout.write('No completed sessions to score.')
            return

        self.stdout.write(f'Scoring {total} session(s)...')
        for session in sessions:
            try:
                scoring = run_scoring_pipeline(session, temperament_strategy=options.get('strategy'))
            except IntelligenceError as exc:
                raise CommandError(str(exc)) from exc
            temperament = scoring.frameworks['temperament'].result
            self.stdout.write(
                f'  {session.uuid}: average={scoring.average_score:.2f} temperament={temperament}'
            )

        self.stdout.write(self.style.SUCCESS(f'Scored {total} session(s).'))
