# feedback.py
# Voice and haptic collaborators. The core only ever calls speak() and
# notify(); neither returns anything the core waits on.

import logging
from typing import Protocol

from .models import HapticKind

logger = logging.getLogger(__name__)


class SpeechOutput(Protocol):
    def speak(self, text: str, locale: str) -> None: ...


class HapticFeedback(Protocol):
    def notify(self, kind: HapticKind) -> None: ...


class LoggingHaptics:
    """
    HapticFeedback for hosts without a vibration engine.

    Each signal is written to the log so the interaction can still be followed.
    """

    def notify(self, kind: HapticKind) -> None:
        logger.info(f"[Haptic] {kind.value}")
