from typing import Callable, List, Tuple

import pytest

from conecta.core.assistant import TripAssistant
from conecta.core.catalog import DemoCatalog
from conecta.core.models import HapticKind


class RecordingSpeech:
    def __init__(self) -> None:
        self.spoken: List[Tuple[str, str]] = []

    def speak(self, text: str, locale: str) -> None:
        self.spoken.append((text, locale))

    @property
    def texts(self) -> List[str]:
        return [t for t, _ in self.spoken]


class RecordingHaptics:
    def __init__(self) -> None:
        self.kinds: List[HapticKind] = []

    def notify(self, kind: HapticKind) -> None:
        self.kinds.append(kind)


class ManualTicker:
    """Tick source that only fires when the test says so."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    @property
    def is_active(self) -> bool:
        return self.started and not self.cancelled

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class TickerRecorder:
    def __init__(self) -> None:
        self.created: List[ManualTicker] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> ManualTicker:
        ticker = ManualTicker(interval, callback)
        self.created.append(ticker)
        return ticker

    @property
    def last(self) -> ManualTicker:
        return self.created[-1]


@pytest.fixture
def catalog():
    return DemoCatalog()


@pytest.fixture
def azteca(catalog):
    return catalog.list_stadiums()[0]


@pytest.fixture
def puerta_11(azteca):
    return next(g for g in azteca.gates if g.name == "Puerta 11")


@pytest.fixture
def speech():
    return RecordingSpeech()


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def tickers():
    return TickerRecorder()


@pytest.fixture
def assistant(speech, haptics, tickers):
    return TripAssistant(speech=speech, haptics=haptics, ticker_factory=tickers)
