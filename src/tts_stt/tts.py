# tts.py
# Text-to-speech for guidance and dispatch messages.
# Utterances are queued and spoken by one background worker so callers never
# wait for audio to finish.

import logging
import queue
import threading
from typing import Iterable, Optional

import pyttsx3

logger = logging.getLogger(__name__)


def _voice_matches_locale(voice, locale: str) -> bool:
    lang = locale.split("-")[0].lower()
    for entry in getattr(voice, "languages", None) or []:
        if isinstance(entry, bytes):
            entry = entry.decode("utf-8", errors="ignore")
        if str(entry).lower().lstrip("\x05").startswith(lang):
            return True
    return lang in (voice.id or "").lower()


def init_tts(locale: str, rate: int = 150, preferred: Iterable[str] = ()):
    """Create a pyttsx3 engine tuned for locale."""
    engine = pyttsx3.init()
    engine.setProperty("rate", rate)
    engine.setProperty("volume", 1.0)

    voices = engine.getProperty("voices") or []
    chosen = None
    for v in voices:
        if any(p.lower() in (v.name or "").lower() for p in preferred):
            chosen = v
            break
    if chosen is None:
        chosen = next((v for v in voices if _voice_matches_locale(v, locale)), None)
    if chosen is not None:
        engine.setProperty("voice", chosen.id)
    else:
        logger.warning(f"No voice found for {locale}; using the default voice.")

    return engine


class QueuedSpeaker:
    """
    SpeechOutput backed by pyttsx3 on a worker thread.

    Usage:
        speaker = QueuedSpeaker(rate=150)
        speaker.speak("Camina 120 m hacia Av. Principal.", "es-MX")
        ...
        speaker.close()

    Args:
        rate:      Words per minute.
        preferred: Voice names to try before matching on locale.
    """

    def __init__(self, rate: int = 150, preferred: Iterable[str] = ()) -> None:
        self.rate = rate
        self.preferred = tuple(preferred)
        self._queue: "queue.Queue[Optional[tuple]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def speak(self, text: str, locale: str) -> None:
        text = (text or "").strip()
        if not text:
            return
        self._ensure_worker()
        self._queue.put((text, locale))

    def close(self, timeout: float = 5.0) -> None:
        """Let queued utterances finish, then stop the worker."""
        if self._thread is None:
            return
        self._queue.join()        # wait for everything already queued
        self._queue.put(None)     # stop signal for the worker
        self._thread.join(timeout=timeout)
        self._thread = None

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._thread is None:
                self._thread = threading.Thread(target=self._worker, name="tts", daemon=True)
                self._thread.start()

    def _worker(self) -> None:
        engine = None
        engine_locale = None
        while True:
            item = self._queue.get()
            if item is None:
                self._queue.task_done()
                break
            text, locale = item
            try:
                if engine is None or locale != engine_locale:
                    engine = init_tts(locale, self.rate, self.preferred)
                    engine_locale = locale
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                # Audio problems must not take the app down; drop this utterance.
                logger.error(f"TTS error: {e}")
                engine = None
            finally:
                self._queue.task_done()
