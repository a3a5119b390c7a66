# dispatch.py
# Simulated ambulance dispatch: IDLE → REQUESTED → ARRIVED.
# One tick is one simulated minute. Ticks come from a Ticker thread but are
# only ever applied through the EventLoop, never on the timer thread itself.

import logging
import threading
from typing import Callable, Optional, Protocol

from .assist_config import AssistConfig
from .events import EventLoop, Observable
from .geo_utils import offset_coord
from .models import AmbulanceInfo, AmbulanceTrackingState, DispatchStatus

logger = logging.getLogger(__name__)


class TickSource(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...

    @property
    def is_active(self) -> bool: ...


# Builds a tick source firing `callback` every `interval` seconds.
TickerFactory = Callable[[float, Callable[[], None]], TickSource]


class Ticker:
    """
    Repeating timer built from one-shot threading.Timer objects.

    Args:
        interval: Seconds between callbacks.
        callback: Called on the timer thread; should only hand work off.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        with self._lock:
            self._active = True
            self._schedule()

    def cancel(self) -> None:
        with self._lock:
            self._active = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._fire)
        self._timer.daemon = True
        self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._schedule()
        self._callback()


class EmergencyDispatchSimulator(Observable[AmbulanceTrackingState]):
    """
    Ambulance request state and ETA countdown.

    Usage:
        sim = EmergencyDispatchSimulator(config, loop)
        sim.request_ambulance()     # ETA 8, ticker running
        # ... each tick: ETA - 1 until 0, then the ticker stops
        sim.cancel()                # back to IDLE

    Args:
        config:         AssistConfig with ETA, interval and ambulance details.
        loop:           EventLoop that ticks are posted to.
        ticker_factory: Optional override for the tick source (tests).
    """

    def __init__(
        self,
        config: Optional[AssistConfig] = None,
        loop: Optional[EventLoop] = None,
        ticker_factory: Optional[TickerFactory] = None,
    ) -> None:
        super().__init__()
        self.config = config or AssistConfig()
        self._loop = loop or EventLoop()
        self._ticker_factory: TickerFactory = ticker_factory or Ticker

        self._ticker: Optional[TickSource] = None
        self._info: Optional[AmbulanceInfo] = None
        self._eta: int = self.config.initial_eta_minutes
        self._requested: bool = False
        self._status: DispatchStatus = DispatchStatus.IDLE
        self._episode: int = 0

    def snapshot(self) -> AmbulanceTrackingState:
        return AmbulanceTrackingState(
            status=self._status,
            info=self._info,
            eta_minutes=self._eta,
            requested=self._requested,
        )

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def status(self) -> DispatchStatus:
        return self._status

    @property
    def eta_minutes(self) -> int:
        return self._eta

    @property
    def info(self) -> Optional[AmbulanceInfo]:
        return self._info

    @property
    def is_ticking(self) -> bool:
        return self._ticker is not None and self._ticker.is_active

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def request_ambulance(self) -> AmbulanceTrackingState:
        """Create the dispatch and start the countdown."""
        self._stop_ticker()
        self._episode += 1
        episode = self._episode

        user = self.config.user_location
        d_lat, d_lon = self.config.ambulance_offset
        self._info = AmbulanceInfo(
            estimated_arrival_minutes=self.config.initial_eta_minutes,
            ambulance_location=offset_coord(user, d_lat, d_lon),
            user_location=user,
            ambulance_id=self.config.ambulance_id,
            hospital_name=self.config.hospital_name,
        )
        self._eta = self.config.initial_eta_minutes
        self._requested = True
        self._status = DispatchStatus.REQUESTED if self._eta > 0 else DispatchStatus.ARRIVED

        if self._status is DispatchStatus.REQUESTED:
            self._ticker = self._ticker_factory(
                self.config.tick_interval_s,
                lambda: self._loop.post(self._tick_for, episode),
            )
            self._ticker.start()

        logger.info(
            f"Ambulance {self._info.ambulance_id} requested from "
            f"{self._info.hospital_name}, ETA {self._eta} min"
        )
        return self._publish()

    def tick(self) -> AmbulanceTrackingState:
        """One simulated minute. At ETA 0 the ticker is stopped instead."""
        if not self._requested:
            logger.debug("tick ignored: no active request")
            self._stop_ticker()
            return self.snapshot()

        if self._eta <= 0:
            self._stop_ticker()
            return self.snapshot()

        self._eta -= 1
        logger.debug(f"Ambulance ETA {self._eta} min")
        if self._eta == 0:
            self._status = DispatchStatus.ARRIVED
            self._stop_ticker()
            logger.info(f"Ambulance {self._info.ambulance_id} has arrived")
        return self._publish()

    def cancel(self) -> AmbulanceTrackingState:
        """Stop the countdown and forget the request."""
        if self._status is DispatchStatus.IDLE and self._ticker is None:
            return self.snapshot()

        self._stop_ticker()
        self._episode += 1
        self._info = None
        self._eta = self.config.initial_eta_minutes
        self._requested = False
        self._status = DispatchStatus.IDLE
        logger.info("Ambulance request cancelled")
        return self._publish()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _tick_for(self, episode: int) -> None:
        # Ticks queued before a cancel or a new request belong to a dead episode.
        if episode != self._episode:
            logger.debug(f"Dropping stale tick from dispatch episode {episode}")
            return
        self.tick()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
