"""
notifications/management/commands/run_notification_dispatcher.py

Long-running notification dispatcher.

Runs one pass immediately, then one every POLL_INTERVAL_SECONDS until
stopped. Intended to run under a supervisor (systemd, PM2, a container
restart policy); startup failures exit non-zero so the supervisor can
retry.
"""

import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from django.core.management.base import BaseCommand, CommandError
from django.db import OperationalError, connection

from notifications import conf
from notifications.scheduler import build_scheduler
from notifications.services.delivery import GatewayConfigurationError, get_gateway

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the notification dispatcher until stopped"

    def add_arguments(self, parser):
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between passes (defaults to NOTIFICATIONS['POLL_INTERVAL_SECONDS'])",
        )

    def check_startup(self):
        try:
            connection.ensure_connection()
        except OperationalError as exc:
            raise CommandError(f"Cannot reach the database: {exc}") from exc

        try:
            get_gateway()
        except GatewayConfigurationError as exc:
            raise CommandError(f"Delivery gateway unavailable: {exc}") from exc

    def handle(self, *args, **options):
        interval = options["interval"]
        if interval is None:
            interval = conf.poll_interval_seconds()
        if interval <= 0:
            raise CommandError("--interval must be a positive number of seconds")

        self.check_startup()

        scheduler = build_scheduler(BlockingScheduler, interval_seconds=interval)

        self.stdout.write(
            self.style.NOTICE(
                f"Notification dispatcher starting (interval={interval}s). "
                f"Will run until stopped."
            )
        )
        logger.info("Notification dispatcher starting, interval=%ss", interval)

        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Notification dispatcher stopping")
            if scheduler.running:
                scheduler.shutdown(wait=False)

        self.stdout.write(self.style.SUCCESS("Notification dispatcher stopped"))
