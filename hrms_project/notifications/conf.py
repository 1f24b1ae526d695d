"""
Dispatcher settings, read from ``settings.NOTIFICATIONS``.

Missing keys fall back to the defaults below so a bare settings
module still produces a working dispatcher.
"""

from django.conf import settings

DEFAULTS = {
    "POLL_INTERVAL_SECONDS": 5,
    "REMINDER_THRESHOLDS": (0, 1, 3, 7),
    "MISFIRE_GRACE_SECONDS": 30,
    "GATEWAY": "notifications.services.delivery.FCMGateway",
}


def get_setting(name):
    configured = getattr(settings, "NOTIFICATIONS", {}) or {}
    return configured.get(name, DEFAULTS[name])


def poll_interval_seconds():
    return int(get_setting("POLL_INTERVAL_SECONDS"))


def reminder_thresholds():
    return frozenset(int(day) for day in get_setting("REMINDER_THRESHOLDS"))


def misfire_grace_seconds():
    return int(get_setting("MISFIRE_GRACE_SECONDS"))


def gateway_path():
    return get_setting("GATEWAY")
