"""
Push delivery gateways.

A gateway exposes one method:

    send(token, title, body, data) -> DeliveryResult

The dispatcher only ever looks at `DeliveryResult.success`. Gateways
send to exactly one device token per call.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, exceptions, messaging
from django.conf import settings
from django.utils.module_loading import import_string

from notifications import conf

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "HRMS"

# Data key that becomes the Android collapse tag instead of a payload field
ANDROID_TAG_KEY = "android_tag"


class GatewayConfigurationError(Exception):
    """Raised when a gateway cannot be initialised (missing credentials etc.)."""


@dataclass(frozen=True)
class DeliveryResult:
    success: bool
    error: str = ""
    message_id: str = ""


def stringify_data(data):
    """FCM data payloads only accept string values."""
    return {
        str(key): "" if value is None else str(value)
        for key, value in (data or {}).items()
    }


def preview_token(token):
    if len(token) > 24:
        return f"{token[:12]}...{token[-8:]}"
    return token


# ============================================================
# FIREBASE CLOUD MESSAGING
# ============================================================

class FCMGateway:
    """Firebase Cloud Messaging through the firebase-admin SDK."""

    app_name = "hrms-notification-dispatcher"

    # Seconds; bounds how long one slow push can hold up a pass
    http_timeout = 10

    def __init__(self, credentials_path=None):
        path = credentials_path or getattr(settings, "FIREBASE_CREDENTIALS_PATH", "")

        if not path or not os.path.exists(path):
            raise GatewayConfigurationError(
                f"Firebase service account file not found: {path or '<unset>'}"
            )

        try:
            self.app = firebase_admin.get_app(self.app_name)
        except ValueError:
            try:
                self.app = firebase_admin.initialize_app(
                    credentials.Certificate(path),
                    options={"httpTimeout": self.http_timeout},
                    name=self.app_name,
                )
            except (ValueError, OSError) as exc:
                raise GatewayConfigurationError(
                    f"Firebase initialisation failed: {exc}"
                ) from exc

        logger.info("FCM gateway initialised from %s", path)

    def build_message(self, token, title, body, data=None):
        payload = stringify_data(data)
        android_tag = payload.pop(ANDROID_TAG_KEY, "")

        return messaging.Message(
            token=token,
            notification=messaging.Notification(
                title=title or DEFAULT_TITLE,
                body=body or "",
            ),
            data=payload,
            android=messaging.AndroidConfig(
                priority="high",
                notification=(
                    messaging.AndroidNotification(tag=android_tag)
                    if android_tag
                    else None
                ),
            ),
        )

    def send(self, token, title, body, data=None):
        if not token or not isinstance(token, str):
            return DeliveryResult(success=False, error="Missing token")

        message = self.build_message(token, title, body, data)

        try:
            message_id = messaging.send(message, app=self.app)
        except (exceptions.FirebaseError, ValueError) as exc:
            logger.warning(
                "FCM send failed token=%s title=%r: %s",
                preview_token(token), title, exc,
            )
            return DeliveryResult(success=False, error=str(exc))

        logger.debug(
            "FCM send ok token=%s title=%r message_id=%s",
            preview_token(token), title, message_id,
        )
        return DeliveryResult(success=True, message_id=message_id)


# ============================================================
# DEVELOPMENT GATEWAY
# ============================================================

class LogOnlyGateway:
    """Logs every push and reports success. For local runs without Firebase."""

    def send(self, token, title, body, data=None):
        logger.info(
            "[log-only push] token=%s title=%r body=%r data=%s",
            preview_token(token or ""), title, body, stringify_data(data),
        )
        return DeliveryResult(success=True, message_id="log-only")


@lru_cache(maxsize=1)
def get_gateway():
    """
    Build the configured gateway once per process.

    Raises GatewayConfigurationError when the gateway cannot start.
    """
    gateway_class = import_string(conf.gateway_path())
    return gateway_class()
