from django.apps import AppConfig


class PendudukConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "penduduk"
    verbose_name = "Kependudukan"

    def ready(self):
        """Import signal handlers and other app initialization code."""
        import penduduk.signals  # noqa
