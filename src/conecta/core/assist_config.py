# assist_config.py
# All tuneable constants in one place.
# Pass an AssistConfig instance to every module that needs settings.

from dataclasses import dataclass, field
from typing import Tuple

from .models import Coord


# ---------------------------------------------------------------------------
# Fixed messages
# ---------------------------------------------------------------------------

ARRIVAL_MESSAGE: str = "Llegaste al destino."

SURROUNDINGS_MESSAGE: str = (
    "Función de descripción de entorno. "
    "Usa la cámara para identificar señalética y leerla en voz alta."
)

EMERGENCY_NUMBER: str = "911"


# ---------------------------------------------------------------------------
# Demo position (Zócalo, Ciudad de México)
# ---------------------------------------------------------------------------

DEMO_USER: Coord = Coord(19.4326, -99.1332)


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class AssistConfig:
    # Speech
    speech_locale: str = "es-MX"
    speech_rate: int = 150                 # words per minute for pyttsx3
    preferred_voices: Tuple[str, ...] = ("Paulina", "Juan", "Monica", "Jorge", "spanish-latin-am")

    # Ambulance simulation
    tick_interval_s: float = 60.0          # one tick = one simulated minute
    initial_eta_minutes: int = 8
    ambulance_offset: Tuple[float, float] = (-0.0126, 0.0032)   # (dlat, dlon) from user
    ambulance_id: str = "AMB-2026-001"
    hospital_name: str = "Hospital General CDMX"

    # Position used for routes and dispatch (no GPS in this app)
    user_location: Coord = field(default_factory=lambda: DEMO_USER)

    # Logging
    log_level: str = "WARNING"
