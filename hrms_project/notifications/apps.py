from django.apps import AppConfig
import os


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    def ready(self):
        # --------------------------------------------------
        # Start embedded scheduler SAFELY
        # --------------------------------------------------
        # Only inside the autoreloaded runserver child; the standalone
        # dispatcher command builds its own blocking scheduler.
        if os.environ.get("RUN_MAIN") != "true":
            return

        from .scheduler import start_scheduler
        start_scheduler()
