"""
notifications/management/commands/send_pending_notifications.py

Runs exactly one dispatcher pass and exits.

Useful from cron, for backfills after an outage, and for checking
what is pending without starting the long-running dispatcher.
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.services.delivery import (
    GatewayConfigurationError,
    LogOnlyGateway,
    get_gateway,
)
from notifications.services.dispatcher import run_pass


class Command(BaseCommand):
    help = "Run a single notification dispatcher pass"

    def add_arguments(self, parser):
        parser.add_argument(
            "--log-only",
            action="store_true",
            help="Log pushes instead of sending them (markers are still committed)",
        )

    def handle(self, *args, **options):
        now = timezone.now()

        if options["log_only"]:
            gateway = LogOnlyGateway()
        else:
            try:
                gateway = get_gateway()
            except GatewayConfigurationError as exc:
                raise CommandError(f"Delivery gateway unavailable: {exc}") from exc

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting notification pass"
            )
        )

        report = run_pass(gateway=gateway)

        if report is None:
            self.stdout.write(self.style.WARNING("Another pass is running, nothing done"))
            return

        for name, error in report.errors.items():
            self.stderr.write(self.style.ERROR(f"{name} failed: {error}"))

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{report.sent} sent of {report.pending} pending, "
                f"{report.tokens_cleared} stale tokens cleared"
            )
        )
