"""User-facing delivery notifications."""

from __future__ import annotations

import logging
import shutil
import subprocess

from wakectl.core.model import DeliveryOutcome

LOGGER = logging.getLogger(__name__)

NOTIFICATION_TITLE = "Wake-on-LAN"


class Notifier:
    def __init__(self, *, desktop: bool = False, command: str = "notify-send") -> None:
        self.desktop = desktop
        self.command = command

    @staticmethod
    def message(label: str, outcome: DeliveryOutcome) -> str:
        if outcome.success:
            return f"Successfully sent wake-up packet to {label}"
        return f"Failed to send wake-up packet to {label}: {outcome.message}"

    def notify(self, label: str, outcome: DeliveryOutcome) -> str:
        text = self.message(label, outcome)
        if self.desktop:
            self._show_desktop(text, urgent=not outcome.success)
        return text

    def _show_desktop(self, text: str, *, urgent: bool) -> None:
        executable = shutil.which(self.command)
        if executable is None:
            LOGGER.warning("'%s' not found, skipping desktop notification", self.command)
            return
        cmd = [executable, "--urgency", "critical" if urgent else "normal", NOTIFICATION_TITLE, text]
        try:
            result = subprocess.run(cmd, check=False, capture_output=True, text=True)
        except OSError as exc:
            LOGGER.warning("Desktop notification failed: %s", exc)
            return
        if result.returncode != 0:
            LOGGER.warning(
                "Desktop notification exited with %d: %s",
                result.returncode,
                (result.stderr or "").strip(),
            )
