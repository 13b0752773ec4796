"""Run notifications: summary building and delivery."""

from .notifiers import EmailNotifier, LogNotifier, select_notifier
from .summary import Notification, build_notification

__all__ = [
    "Notification",
    "build_notification",
    "EmailNotifier",
    "LogNotifier",
    "select_notifier",
]
