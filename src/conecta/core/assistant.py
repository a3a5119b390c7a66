# assistant.py
# Public entry point for the interaction core.
# Owns no business logic. Wires the specialist components together and runs
# every command on the shared EventLoop.

import logging
from typing import List, Optional

from .assist_config import AssistConfig, SURROUNDINGS_MESSAGE
from .catalog import CatalogProvider, DemoCatalog
from .dispatch import EmergencyDispatchSimulator, TickerFactory
from .events import EventLoop
from .feedback import HapticFeedback, LoggingHaptics, SpeechOutput
from .guidance import GuidanceStepper
from .models import (
    AccessGate, AmbulanceTrackingState, AppScreen, GuidanceState, HapticKind,
    NavigationState, RouteOption, Stadium, TripState,
)
from .preferences import AccessibilityPreferences
from .screen_navigator import NavigationController
from .trip_session import TripPlanningSession

logger = logging.getLogger(__name__)


class TripAssistant:
    """
    High-level facade used by the presentation layer.

    Typical lifecycle:
        assistant = TripAssistant(speech=QueuedSpeaker())
        assistant.start()

        assistant.open_destination()
        stadium = assistant.search("azteca")[0]
        assistant.choose_stadium(stadium)
        assistant.choose_gate(stadium.gates[3])
        assistant.choose_route(assistant.trip.routes[0])
        assistant.next_step()

        assistant.shutdown()

    Without start() every command runs inline on the caller's thread, which
    is how the tests drive it.

    Args:
        config:         Optional AssistConfig; defaults to AssistConfig().
        preferences:    Shared AccessibilityPreferences instance.
        speech:         SpeechOutput; None disables voice output entirely.
        haptics:        HapticFeedback; defaults to LoggingHaptics.
        catalog:        CatalogProvider; defaults to DemoCatalog.
        ticker_factory: Override for the ambulance tick source.
    """

    def __init__(
        self,
        config: Optional[AssistConfig] = None,
        preferences: Optional[AccessibilityPreferences] = None,
        speech: Optional[SpeechOutput] = None,
        haptics: Optional[HapticFeedback] = None,
        catalog: Optional[CatalogProvider] = None,
        ticker_factory: Optional[TickerFactory] = None,
    ) -> None:
        self.config = config or AssistConfig()
        self.preferences = preferences or AccessibilityPreferences()
        self.catalog = catalog or DemoCatalog(self.config.user_location)
        self.loop = EventLoop()

        self._speech = speech
        self._haptics = haptics or LoggingHaptics()

        # Specialist components
        self.navigation = NavigationController()
        self.stepper    = GuidanceStepper(self._haptics)
        self.trip       = TripPlanningSession(self.catalog, self.stepper)
        self.dispatch   = EmergencyDispatchSimulator(self.config, self.loop, ticker_factory)

        self._last_screen: AppScreen = self.navigation.current
        self.navigation.subscribe(self._on_screen_change)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Run commands and ticks on a background loop thread."""
        self.loop.start()
        logger.info("Trip assistant started.")

    def shutdown(self) -> None:
        self.loop.call(self.dispatch.cancel)
        self.loop.stop()
        close = getattr(self._speech, "close", None)
        if close is not None:
            close()
        logger.info("Trip assistant stopped.")

    # ------------------------------------------------------------------
    # Screen navigation
    # ------------------------------------------------------------------

    def navigate(self, screen: AppScreen) -> NavigationState:
        return self.loop.call(self.navigation.navigate, screen)

    def go_back(self) -> NavigationState:
        return self.loop.call(self.navigation.go_back)

    def go_home(self) -> NavigationState:
        return self.loop.call(self.navigation.go_home)

    # ------------------------------------------------------------------
    # Trip planning flow
    # ------------------------------------------------------------------

    def open_destination(self) -> NavigationState:
        return self.navigate(AppScreen.DESTINATION)

    def search(self, text: str) -> List[Stadium]:
        return self.loop.call(self.trip.search, text)

    def choose_stadium(self, stadium: Stadium) -> NavigationState:
        """Select a stadium and continue to its gates."""
        def run() -> NavigationState:
            self.trip.select_stadium(stadium)
            return self.navigation.navigate(AppScreen.GATES)
        return self.loop.call(run)

    def choose_gate(self, gate: AccessGate) -> NavigationState:
        """Select a gate, load its routes and continue to the route list."""
        def run() -> NavigationState:
            self.trip.select_gate(gate)
            self.trip.load_routes()
            return self.navigation.navigate(AppScreen.ROUTE_LIST)
        return self.loop.call(run)

    def choose_route(self, route: RouteOption) -> NavigationState:
        """Select a route and open step-by-step guidance."""
        def run() -> NavigationState:
            already_guiding = self.navigation.current is AppScreen.GUIDANCE
            self.trip.select_route(route)
            state = self.navigation.navigate(AppScreen.GUIDANCE)
            # no screen transition to trigger the announcement
            if already_guiding:
                self._announce_step()
            return state
        return self.loop.call(run)

    # ------------------------------------------------------------------
    # Guidance
    # ------------------------------------------------------------------

    def next_step(self) -> GuidanceState:
        def run() -> GuidanceState:
            if self.stepper.next_step():
                self._announce_step()
            return self.stepper.snapshot()
        return self.loop.call(run)

    def previous_step(self) -> GuidanceState:
        def run() -> GuidanceState:
            if self.stepper.previous_step():
                self._announce_step()
            return self.stepper.snapshot()
        return self.loop.call(run)

    def describe_surroundings(self) -> None:
        def run() -> None:
            if self.preferences.voice_guidance:
                self._say(SURROUNDINGS_MESSAGE)
        self.loop.call(run)

    # ------------------------------------------------------------------
    # Emergencies
    # ------------------------------------------------------------------

    def sos_alert(self) -> None:
        """SOS button pressed; the user still has to pick an option."""
        self.loop.call(self._haptics.notify, HapticKind.WARNING)

    def sos_only(self) -> None:
        """Share location with trusted contacts, no ambulance."""
        self.loop.call(self._haptics.notify, HapticKind.WARNING)
        logger.info("SOS sent without ambulance request.")

    def sos_with_ambulance(self) -> AmbulanceTrackingState:
        """Request an ambulance and open the tracker."""
        def run() -> AmbulanceTrackingState:
            self._haptics.notify(HapticKind.ERROR)
            state = self.dispatch.request_ambulance()
            self.navigation.navigate(AppScreen.AMBULANCE_TRACKER)
            return state
        return self.loop.call(run)

    def request_ambulance(self) -> AmbulanceTrackingState:
        return self.loop.call(self.dispatch.request_ambulance)

    def cancel_ambulance(self) -> NavigationState:
        """Leave the tracker; leaving it is what cancels the request."""
        def run() -> NavigationState:
            self.dispatch.cancel()
            return self.navigation.go_back()
        return self.loop.call(run)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def set_preference(self, name: str, value: bool) -> AccessibilityPreferences:
        self.loop.call(self.preferences.set, name, value)
        return self.preferences

    def toggle_preference(self, name: str) -> bool:
        return self.loop.call(self.preferences.toggle, name)

    # ------------------------------------------------------------------
    # Read-only snapshots, taken on the loop between mutations
    # ------------------------------------------------------------------

    @property
    def screen(self) -> AppScreen:
        return self.navigation.current

    @property
    def trip_state(self) -> TripState:
        return self.loop.call(self.trip.snapshot)

    @property
    def guidance_state(self) -> GuidanceState:
        return self.loop.call(self.stepper.snapshot)

    @property
    def ambulance_state(self) -> AmbulanceTrackingState:
        return self.loop.call(self.dispatch.snapshot)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_screen_change(self, state: NavigationState) -> None:
        previous, self._last_screen = self._last_screen, state.current

        if previous is AppScreen.AMBULANCE_TRACKER and state.current is not AppScreen.AMBULANCE_TRACKER:
            self.dispatch.cancel()

        if state.current is AppScreen.GUIDANCE and previous is not AppScreen.GUIDANCE:
            self._announce_step()

    def _announce_step(self) -> None:
        if self.preferences.voice_guidance:
            self._say(self.stepper.current_step_text())

    def _say(self, text: str) -> None:
        if self._speech is None:
            logger.debug(f"No speech output configured; skipped: {text}")
            return
        self._speech.speak(text, self.config.speech_locale)
