# trip_session.py
# Selection state for one planning episode: stadium → gate → route.
# Routes and steps are derived through the CatalogProvider; nothing here
# validates selections against the catalog.

import logging
from typing import List, Optional

from .catalog import CatalogProvider
from .events import Observable
from .guidance import GuidanceStepper
from .models import AccessGate, RouteOption, Stadium, StepInstruction, TripState

logger = logging.getLogger(__name__)


class TripPlanningSession(Observable[TripState]):
    """
    Stateful trip planner.

    Usage:
        session = TripPlanningSession(catalog, stepper)
        session.select_stadium(stadium)
        session.select_gate(gate)
        session.load_routes()
        session.select_route(session.routes[0])

    Args:
        catalog: Source of routes and step instructions.
        stepper: Guidance cursor that is reset whenever a route is chosen.
    """

    def __init__(self, catalog: CatalogProvider, stepper: GuidanceStepper) -> None:
        super().__init__()
        self._catalog = catalog
        self._stepper = stepper

        self._stadium: Optional[Stadium] = None
        self._gate: Optional[AccessGate] = None
        self._routes: List[RouteOption] = []
        self._current_route: Optional[RouteOption] = None
        self._steps: List[StepInstruction] = []
        self._show_guidance: bool = False
        self._search_text: str = ""

    def snapshot(self) -> TripState:
        return TripState(
            selected_stadium=self._stadium,
            selected_gate=self._gate,
            routes=tuple(self._routes),
            current_route=self._current_route,
            steps=tuple(self._steps),
            show_guidance=self._show_guidance,
            search_text=self._search_text,
        )

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def selected_stadium(self) -> Optional[Stadium]:
        return self._stadium

    @property
    def selected_gate(self) -> Optional[AccessGate]:
        return self._gate

    @property
    def routes(self) -> List[RouteOption]:
        return list(self._routes)

    @property
    def current_route(self) -> Optional[RouteOption]:
        return self._current_route

    @property
    def steps(self) -> List[StepInstruction]:
        return list(self._steps)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def search(self, text: str) -> List[Stadium]:
        """Remember the destination query and return the matching stadiums."""
        self._search_text = text
        self._publish()
        return list(self._catalog.search_stadiums(text))

    def select_stadium(self, stadium: Stadium) -> TripState:
        self._stadium = stadium
        return self._publish()

    def select_gate(self, gate: AccessGate) -> TripState:
        self._gate = gate
        return self._publish()

    def load_routes(self) -> TripState:
        """
        Replace the route list for the selected stadium and gate.

        Without both selections this does nothing; the previous list stays.
        """
        if self._stadium is None or self._gate is None:
            logger.debug("load_routes ignored: stadium and gate must both be selected")
            return self.snapshot()

        self._routes = list(self._catalog.routes_for(self._stadium, self._gate))
        logger.info(f"Loaded {len(self._routes)} routes to {self._stadium.name} / {self._gate.name}")
        return self._publish()

    def select_route(self, route: RouteOption) -> TripState:
        """Make route current, derive its steps and restart guidance at step 0."""
        self._current_route = route
        if self._stadium is not None and self._gate is not None:
            self._steps = list(self._catalog.steps_for(route, self._stadium, self._gate))
        else:
            self._steps = []
        self._stepper.load(self._steps)
        self._show_guidance = True
        logger.info(f"Route selected: {route.title} ({len(self._steps)} steps)")
        return self._publish()
