# models.py
# Shared data structures and enums used across the interaction core.
# Catalog entities are immutable; state snapshots are frozen copies handed
# to the presentation layer.

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate."""
    lat: float
    lon: float


# ---------------------------------------------------------------------------
# Catalog entities
# ---------------------------------------------------------------------------

class AccessType(Enum):
    RAMP     = "Rampa"
    ELEVATOR = "Elevador"
    BOTH     = "Ambos"


@dataclass(frozen=True)
class AccessGate:
    """A wheelchair-accessible entrance, owned by its Stadium."""
    gate_id: str
    name: str
    access_type: AccessType
    section: str                 # "Cabecera Norte", "Lateral Este", ...
    has_elevator: bool
    has_ramp: bool
    wheelchair_accessible: bool = True

    def features(self) -> Tuple[str, ...]:
        """Labels shown on the gate card, in display order."""
        labels = []
        if self.has_ramp:
            labels.append("Rampa")
        if self.has_elevator:
            labels.append("Elevador")
        if self.wheelchair_accessible:
            labels.append("Silla de ruedas")
        return tuple(labels)


@dataclass(frozen=True)
class Stadium:
    stadium_id: str
    name: str
    city: str
    coordinate: Coord
    gates: Tuple[AccessGate, ...] = ()


@dataclass(frozen=True)
class RouteOption:
    """One candidate accessible route to a gate."""
    route_id: str
    title: str
    duration_minutes: int
    distance_meters: int
    transfers: int
    steps: int
    has_ramps: bool
    has_elevator: bool
    notes: str
    path: Tuple[Coord, ...] = ()


@dataclass(frozen=True)
class StepInstruction:
    step_id: str
    text: str
    distance_meters: int


@dataclass(frozen=True)
class AmbulanceInfo:
    estimated_arrival_minutes: int
    ambulance_location: Coord
    user_location: Coord
    ambulance_id: str
    hospital_name: str


# Static content shown by the transport, tips and emergency screens.

@dataclass(frozen=True)
class TransportSchedule:
    transport_type: str          # "Metro" | "Metrobús" | "Autobús" | ...
    line: str
    destination: str
    station: str
    schedules: Tuple[str, ...]
    accessible: bool = True


@dataclass(frozen=True)
class TipCategory:
    title: str
    tips: Tuple[str, ...]


@dataclass(frozen=True)
class EmergencyContact:
    label: str
    number: str


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------

class AppScreen(Enum):
    HOME                = "home"
    DESTINATION         = "destination"
    GATES               = "gates"
    ROUTE_LIST          = "routeList"
    GUIDANCE            = "guidance"
    PUBLIC_TRANSPORT    = "publicTransport"
    EMERGENCIES         = "emergencies"
    TOURIST_MODE        = "touristMode"
    AMBULANCE_TRACKER   = "ambulanceTracker"
    TRAVEL_TIPS         = "travelTips"
    TRANSPORT_SCHEDULES = "transportSchedules"

    @classmethod
    def parse(cls, name: str) -> "AppScreen":
        """Look a screen up by value ("routeList") or member name ("route_list")."""
        key = name.strip()
        for screen in cls:
            if key == screen.value or key.upper() == screen.name:
                return screen
        raise ValueError(f"Unknown screen: {name!r}")


# ---------------------------------------------------------------------------
# Side-effect kinds
# ---------------------------------------------------------------------------

class HapticKind(Enum):
    SUCCESS       = "success"
    WARNING       = "warning"
    ERROR         = "error"
    MEDIUM_IMPACT = "mediumImpact"


class DispatchStatus(Enum):
    IDLE      = "idle"
    REQUESTED = "requested"
    ARRIVED   = "arrived"


# ---------------------------------------------------------------------------
# Snapshots published by the core components
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NavigationState:
    current: AppScreen = AppScreen.HOME
    history: Tuple[AppScreen, ...] = ()


@dataclass(frozen=True)
class TripState:
    selected_stadium: Optional[Stadium] = None
    selected_gate: Optional[AccessGate] = None
    routes: Tuple[RouteOption, ...] = ()
    current_route: Optional[RouteOption] = None
    steps: Tuple[StepInstruction, ...] = ()
    show_guidance: bool = False
    search_text: str = ""


@dataclass(frozen=True)
class GuidanceState:
    step_index: int = 0
    steps: Tuple[StepInstruction, ...] = field(default_factory=tuple)

    @property
    def step_count(self) -> int:
        return len(self.steps)


@dataclass(frozen=True)
class AmbulanceTrackingState:
    status: DispatchStatus = DispatchStatus.IDLE
    info: Optional[AmbulanceInfo] = None
    eta_minutes: int = 0
    requested: bool = False
