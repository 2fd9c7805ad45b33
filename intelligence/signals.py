"""
"Scoring complete" event channel.

``scoring_completed`` is sent after a session's scores and report are
persisted. Receivers get ``session``, ``assessment_id``, ``average_score``
and ``alerts`` (a list of dicts). Delivery beyond this process is left to
whatever connects a receiver; the default one only logs.
"""
import logging

from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

scoring_completed = Signal()


@receiver(scoring_completed, dispatch_uid="intelligence_log_scoring_completed")
def log_scoring_completed(sender, session, assessment_id, average_score, alerts, **kwargs):
    logger.info(
        'Scoring completed for session %s (assessment %s): average %.2f',
        session.uuid, assessment_id, average_score,
    )
    for alert in alerts:
        logger.warning(
            'Scoring alert %s for session %s: %s',
            alert.get('type'), session.uuid, alert.get('message'),
        )
