"""
Notification collaborators for user-visible signals.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Notice, Severity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Notifier(ABC):
    """Receives every success, warning and error signal of the explorer."""

    @abstractmethod
    def notify(self, title: str, description: str, severity: Severity = Severity.INFO) -> None:
        """Deliver one notice."""
        pass


class LoggingNotifier(Notifier):
    """Writes notices to the log."""

    def notify(self, title: str, description: str, severity: Severity = Severity.INFO) -> None:
        logger.log(_LOG_LEVELS[Severity(severity)], f"[{Severity(severity).value}] {title}: {description}")


class RecordingNotifier(Notifier):
    """Keeps notices until drained, optionally forwarding them to another notifier."""

    def __init__(self, delegate: Optional[Notifier] = None):
        self.delegate = delegate
        self.notices: List[Notice] = []

    def notify(self, title: str, description: str, severity: Severity = Severity.INFO) -> None:
        self.notices.append(Notice(title=title, description=description, severity=Severity(severity)))
        if self.delegate is not None:
            self.delegate.notify(title, description, severity)

    def drain(self) -> List[Notice]:
        """Return the recorded notices and forget them."""
        notices, self.notices = self.notices, []
        return notices
