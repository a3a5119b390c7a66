# catalog.py
# Static venue catalog and the deterministic route / step generators.
# Everything here is a pure function of its inputs: the same stadium and gate
# always produce equal RouteOption and StepInstruction values.

import logging
import unicodedata
from typing import List, Protocol, Sequence, Tuple

from .assist_config import DEMO_USER, EMERGENCY_NUMBER
from .models import (
    AccessGate, AccessType, Coord, EmergencyContact, RouteOption, Stadium,
    StepInstruction, TipCategory, TransportSchedule,
)

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Source of stadiums, routes and step instructions."""

    def list_stadiums(self) -> Sequence[Stadium]: ...

    def search_stadiums(self, text: str) -> Sequence[Stadium]: ...

    def routes_for(self, stadium: Stadium, gate: AccessGate) -> Sequence[RouteOption]: ...

    def steps_for(
        self, route: RouteOption, stadium: Stadium, gate: AccessGate
    ) -> Sequence[StepInstruction]: ...


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _gate(stadium_id: str, name: str, access_type: AccessType, section: str) -> AccessGate:
    """Gate flags follow from its access type."""
    return AccessGate(
        gate_id=f"{stadium_id}-{name.split()[-1].lower()}",
        name=name,
        access_type=access_type,
        section=section,
        has_elevator=access_type in (AccessType.ELEVATOR, AccessType.BOTH),
        has_ramp=access_type in (AccessType.RAMP, AccessType.BOTH),
        wheelchair_accessible=True,
    )


def _fold(text: str) -> str:
    """Case- and accent-insensitive form used for searching."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

STADIUMS: Tuple[Stadium, ...] = (
    Stadium(
        stadium_id="azteca",
        name="Estadio Azteca",
        city="Ciudad de México",
        coordinate=Coord(19.3029, -99.1506),
        gates=(
            _gate("azteca", "Puerta 1",  AccessType.RAMP,     "Cabecera Sur"),
            _gate("azteca", "Puerta 3",  AccessType.ELEVATOR, "Lateral Oriente"),
            _gate("azteca", "Puerta 7",  AccessType.RAMP,     "Lateral Poniente"),
            _gate("azteca", "Puerta 11", AccessType.BOTH,     "Cabecera Norte"),
            _gate("azteca", "Puerta 15", AccessType.ELEVATOR, "Túnel 27"),
        ),
    ),
    Stadium(
        stadium_id="akron",
        name="Estadio Akron",
        city="Guadalajara",
        coordinate=Coord(20.6767, -103.3476),
        gates=(
            _gate("akron", "Puerta A",   AccessType.RAMP,     "Acceso Norte"),
            _gate("akron", "Puerta C",   AccessType.ELEVATOR, "Lateral Este"),
            _gate("akron", "Puerta E",   AccessType.RAMP,     "Acceso Sur"),
            _gate("akron", "Puerta VIP", AccessType.BOTH,     "Zona Preferente"),
        ),
    ),
    Stadium(
        stadium_id="bbva",
        name="Estadio BBVA",
        city="Monterrey",
        coordinate=Coord(25.7208, -100.2883),
        gates=(
            _gate("bbva", "Puerta 1", AccessType.ELEVATOR, "Norte"),
            _gate("bbva", "Puerta 3", AccessType.RAMP,     "Este"),
            _gate("bbva", "Puerta 5", AccessType.BOTH,     "Sur"),
            _gate("bbva", "Puerta 7", AccessType.RAMP,     "Oeste"),
        ),
    ),
)

TRANSPORT_SCHEDULES: Tuple[TransportSchedule, ...] = (
    TransportSchedule(
        "Metro", "Línea 2 (Azul)", "Estadio Azteca", "Taxqueña",
        ("06:00 - Primer tren", "Frecuencia: cada 3-5 min",
         "Duración: 25 minutos", "23:30 - Último tren"),
    ),
    TransportSchedule(
        "Metrobús", "Línea 1", "Estadio Azteca", "Insurgentes",
        ("05:00 - Primera unidad", "Frecuencia: cada 5-10 min",
         "Duración: 35 minutos", "00:00 - Última unidad"),
    ),
    TransportSchedule(
        "Autobús", "Ruta 15A", "Estadio Azteca", "Centro Histórico",
        ("06:30 - Primera salida", "Frecuencia: cada 15-20 min",
         "Duración: 45 minutos", "22:00 - Última salida"),
    ),
    TransportSchedule(
        "Tren Ligero", "Línea 2 (Azul) → Tren Ligero", "Estadio Azteca", "Tasqueña (transbordo)",
        ("06:00 - Primer tren", "Frecuencia: cada 10 min",
         "Duración: 15 min (desde Tasqueña)", "23:00 - Último tren"),
    ),
    TransportSchedule(
        "Autobús Expreso", "Servicio Especial Mundial", "Estadios (todos)", "Zócalo, Reforma, Polanco",
        ("Días de partido solamente", "4 horas antes del partido",
         "Frecuencia: cada 10 min", "Hasta 2 horas post-partido"),
    ),
)

TRAVEL_TIPS: Tuple[TipCategory, ...] = (
    TipCategory("Horarios Recomendados", (
        "Llega 2 horas antes del partido",
        "El metro opera de 5:00 AM a 12:00 AM",
        "Horario pico: 7-9 AM y 6-8 PM (evitar)",
        "Puertas del estadio abren 90 min antes",
    )),
    TipCategory("Boletos y Acceso", (
        "Imprime tu boleto o ten QR descargado",
        "Boletos digitales aceptados en todas las puertas",
        "Presenta ID oficial en acceso VIP",
        "Asientos accesibles: Sectores especiales marcados",
    )),
    TipCategory("Transporte", (
        "Metro Línea 2: Estación Taxqueña (Azteca)",
        "Metrobús Línea 1: Directo a estadios",
        "Uber/DiDi: Zona designada de ascenso",
        "Estacionamiento: Llega 3 horas antes",
    )),
    TipCategory("Comida y Bebidas", (
        "Botellas selladas permitidas (máx 600ml)",
        "Comida: Disponible dentro del estadio",
        "Opciones vegetarianas/veganas disponibles",
        "Pagos: Efectivo y tarjeta aceptados",
    )),
    TipCategory("Seguridad", (
        "No lleves mochilas grandes (máx 30x30cm)",
        "Objetos prohibidos: Paraguas, cámaras pro",
        "Puntos de información: En cada puerta",
        "Servicio médico: Sección 100 y 200",
    )),
    TipCategory("Para Turistas", (
        "Moneda: Peso mexicano (MXN), cambio en bancos",
        "Propina: 10-15% en restaurantes",
        "Idioma: Español, inglés en zonas turísticas",
        f"Emergencias: {EMERGENCY_NUMBER} (llamada gratuita)",
    )),
)

EMERGENCY_CONTACTS: Tuple[EmergencyContact, ...] = (
    EmergencyContact("Emergencias", EMERGENCY_NUMBER),
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class DemoCatalog:
    """
    In-memory CatalogProvider backed by the demo data above.

    Args:
        user_location: Start point of every generated route path.
    """

    def __init__(self, user_location: Coord = DEMO_USER) -> None:
        self._user_location = user_location
        self._stadiums: Tuple[Stadium, ...] = STADIUMS

    def list_stadiums(self) -> Tuple[Stadium, ...]:
        return self._stadiums

    def search_stadiums(self, text: str) -> List[Stadium]:
        """
        Stadiums whose name or city contains text, ignoring case and accents.

        Args:
            text: Free-text query; blank returns the whole catalog.

        Returns:
            Matching stadiums in catalog order.
        """
        query = _fold(text.strip())
        if not query:
            return list(self._stadiums)
        return [
            s for s in self._stadiums
            if query in _fold(s.name) or query in _fold(s.city)
        ]

    def routes_for(self, stadium: Stadium, gate: AccessGate) -> List[RouteOption]:
        """
        The three candidate routes to a gate, always in order A, B, C.

        Only route B takes its ramp / elevator flags from the gate itself.
        """
        path = (self._user_location, stadium.coordinate)
        prefix = f"{stadium.stadium_id}:{gate.gate_id}"
        routes = [
            RouteOption(
                route_id=f"{prefix}:A",
                title="Ruta A - 15 min (♿, 🔺)",
                duration_minutes=15,
                distance_meters=1800,
                transfers=0,
                steps=5,
                has_ramps=True,
                has_elevator=True,
                notes=(
                    f"Acceso directo a {gate.name} - {gate.section}. "
                    f"{gate.access_type.value} disponible."
                ),
                path=path,
            ),
            RouteOption(
                route_id=f"{prefix}:B",
                title="Ruta B - 18 min (🚇, 🔁)",
                duration_minutes=18,
                distance_meters=2400,
                transfers=1,
                steps=12,
                has_ramps=gate.has_ramp,
                has_elevator=gate.has_elevator,
                notes=f"Un transbordo. Llegada a {gate.name}.",
                path=path,
            ),
            RouteOption(
                route_id=f"{prefix}:C",
                title="Ruta C - 20 min (🔺, ⚠️ escaleras)",
                duration_minutes=20,
                distance_meters=2100,
                transfers=0,
                steps=18,
                has_ramps=True,
                has_elevator=False,
                notes=f"Ruta alternativa a {gate.name} - {gate.section}.",
                path=path,
            ),
        ]
        logger.debug(f"Generated {len(routes)} routes for {stadium.name} / {gate.name}")
        return routes

    def steps_for(
        self, route: RouteOption, stadium: Stadium, gate: AccessGate
    ) -> List[StepInstruction]:
        """Six-step instruction template; only the venue names change."""
        template = [
            ("Camina 120 m hacia Av. Principal.", 120),
            ("Toma la Línea 2 dirección Sur (2 estaciones).", 1500),
            ("Baja en Estación Centro (usa elevador a nivel calle).", 80),
            ("Transborda al autobús 15A (1 parada).", 700),
            (f"Desciende frente a {stadium.name}; sigue señalética accesible.", 300),
            (f"Dirígete a {gate.name} - {gate.section} ({gate.access_type.value})", 150),
        ]
        return [
            StepInstruction(step_id=f"{route.route_id}:{i}", text=text, distance_meters=dist)
            for i, (text, dist) in enumerate(template)
        ]

    # ------------------------------------------------------------------
    # Static screens
    # ------------------------------------------------------------------

    def transport_schedules(self) -> Tuple[TransportSchedule, ...]:
        return TRANSPORT_SCHEDULES

    def travel_tips(self) -> Tuple[TipCategory, ...]:
        return TRAVEL_TIPS

    def emergency_contacts(self) -> Tuple[EmergencyContact, ...]:
        return EMERGENCY_CONTACTS
