"""End-of-run summary shared by all notifiers."""

from typing import NamedTuple

from ..__util__ import pretty_duration
from ..core.execution import RunReport


class Notification(NamedTuple):
    subject: str
    body: str
    failed: bool = False


def build_notification(label: str, report: RunReport) -> Notification:
    """Summarize ``report`` for the ``label`` profile (e.g. "macOS")."""
    duration = pretty_duration(report.duration)
    errors = report.errors

    if not errors:
        return Notification(
            subject=f"Backup {label} succeeded",
            body=f"Completed in {duration}\n\nHope you're having a nice day :)",
        )

    error_word = "error" if len(errors) == 1 else "errors"
    return Notification(
        subject=f"Backup {label} failed! {len(errors)} {error_word}",
        body=f"Completed in {duration}\n\n" + "\n".join(errors),
        failed=True,
    )
