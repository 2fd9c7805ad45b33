from django.apps import AppConfig


class IntelligenceConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'intelligence'
    verbose_name = 'Behavioral Intelligence'

    def ready(self):
        from . import signals  # noqa: F401
