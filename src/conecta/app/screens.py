# screens.py
# Text rendering of every AppScreen. render() is the single dispatch point;
# the core only knows which screen is active, never how it looks.

from typing import Callable, Dict, List, Optional, Sequence

from conecta.core.assistant import TripAssistant
from conecta.core.geo_utils import format_distance, haversine_distance
from conecta.core.models import AppScreen, DispatchStatus, Stadium

WIDTH = 60


def _header(title: str, assistant: TripAssistant) -> List[str]:
    bar = "=" if assistant.preferences.high_contrast else "-"
    text = title.upper() if assistant.preferences.large_controls else title
    return [bar * WIDTH, text, bar * WIDTH]


def _on_off(flag: bool) -> str:
    return "sí" if flag else "no"


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------

def render_home(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    prefs = a.preferences
    return _header("Conecta Fácil", a) + [
        "Movilidad accesible durante el Mundial 2026",
        "",
        "  go destination       Ir al Estadio",
        "  go publicTransport   Transporte Público",
        "  go emergencies       Emergencias",
        "  go touristMode       Modo Turista",
        "",
        "Configuración de Accesibilidad",
        f"  high_contrast  : {_on_off(prefs.high_contrast)}",
        f"  voice_guidance : {_on_off(prefs.voice_guidance)}",
        f"  large_controls : {_on_off(prefs.large_controls)}",
    ]


def render_destination(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    lines = _header("Seleccionar Destino", a)
    query = a.trip_state.search_text
    lines.append(f"Buscar estadio o ciudad: {query or '(todos)'}")
    lines.append("Sedes disponibles:")
    if not stadiums:
        lines.append("  (sin resultados)")
    for i, s in enumerate(stadiums, 1):
        lines.append(f"  {i}. {s.name} - {s.city} ({len(s.gates)} puertas accesibles)")
    return lines


def render_gates(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    stadium = a.trip_state.selected_stadium
    if stadium is None:
        return _header("Puertas", a) + ["Primero elige un estadio."]
    lines = _header(stadium.name, a)
    lines.append("Selecciona tu Puerta de Acceso")
    for i, g in enumerate(stadium.gates, 1):
        lines.append(f"  {i}. {g.name} - {g.section} [{', '.join(g.features())}]")
    return lines


def render_route_list(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    trip = a.trip_state
    title = trip.selected_stadium.name if trip.selected_stadium else "Rutas"
    lines = _header(title, a)
    lines.append("Rutas Accesibles")
    if not trip.routes:
        lines.append("  (sin rutas; elige estadio y puerta)")
    for i, r in enumerate(trip.routes, 1):
        lines.append(f"  {i}. {r.title}")
        lines.append(
            f"     {r.duration_minutes} min · {format_distance(r.distance_meters)} · "
            f"{r.transfers} transbordos · rampas: {_on_off(r.has_ramps)} · "
            f"elevador: {_on_off(r.has_elevator)}"
        )
        lines.append(f"     {r.notes}")
    return lines


def render_guidance(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    lines = _header("Navegación Asistida", a)
    route = a.trip_state.current_route
    if route is not None:
        lines.append(f"{route.title}  ({route.duration_minutes} min)")
    lines.append(a.stepper.progress_label())
    lines.append(f"  {a.stepper.current_step_text()}")
    lines.append("")
    lines.append(f"  prev {'' if a.stepper.can_go_back else '(deshabilitado)'}")
    lines.append(f"  next {'' if a.stepper.can_advance else '(deshabilitado)'}")
    lines.append("  describe   Describir entorno")
    lines.append("Voz activa" if a.preferences.voice_guidance else "Voz desactivada")
    return lines


def render_public_transport(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    return _header("Transporte Público", a) + [
        "Información de líneas, horarios y rutas accesibles del sistema de transporte.",
        "  Líneas disponibles - Consulta líneas de metro y autobús",
        "  go transportSchedules   Horarios",
        "  Accesibilidad - Estaciones con elevador y rampa",
    ]


def render_transport_schedules(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    lines = _header("Horarios de Transporte", a)
    for s in a.catalog.transport_schedules():
        access = "accesible" if s.accessible else "sin accesibilidad"
        lines.append(f"{s.transport_type} · {s.line} → {s.destination} ({s.station}, {access})")
        lines.extend(f"    {entry}" for entry in s.schedules)
    return lines


def render_emergencies(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    lines = _header("Emergencias", a)
    lines.append("  sos          Botón SOS")
    lines.append("  sos+amb      SOS + Ambulancia")
    lines.append("  sos-only     Solo SOS")
    for c in a.catalog.emergency_contacts():
        lines.append(f"  {c.label}: {c.number}")
    return lines


def render_tourist_mode(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    return _header("Modo Turista", a) + [
        "Traducciones, consejos y guía contextual para visitantes",
        "  Traducción en tiempo real - Español ⇄ Inglés",
        "  go travelTips   Consejos de viaje",
        "  Lugares de interés - Atracciones cercanas a estadios",
        "  Restaurantes accesibles - Opciones con menú en varios idiomas",
    ]


def render_travel_tips(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    lines = _header("Consejos de Viaje", a)
    for category in a.catalog.travel_tips():
        lines.append(category.title)
        lines.extend(f"  • {tip}" for tip in category.tips)
    return lines


def render_ambulance_tracker(a: TripAssistant, stadiums: Sequence[Stadium]) -> List[str]:
    state = a.ambulance_state
    lines = _header("Ambulancia en Camino", a)
    if state.status is DispatchStatus.IDLE:
        return lines + ["No hay una solicitud activa."]

    lines.append(f"Tiempo estimado de llegada: {state.eta_minutes} minutos")
    if state.status is DispatchStatus.ARRIVED:
        lines.append("La ambulancia ha llegado")
    else:
        lines.append("La ambulancia está en camino")

    info = state.info
    if info is not None:
        dist = haversine_distance(
            info.ambulance_location.lat, info.ambulance_location.lon,
            info.user_location.lat, info.user_location.lon,
        )
        contact = a.catalog.emergency_contacts()[0]
        lines.append(f"  Unidad   : {info.ambulance_id}")
        lines.append(f"  Hospital : {info.hospital_name}")
        lines.append(f"  Contacto : {contact.number} - {contact.label}")
        lines.append(f"  Distancia: {format_distance(dist)}")
    lines.append("  cancel   Cancelar solicitud")
    return lines


_RENDERERS: Dict[AppScreen, Callable[[TripAssistant, Sequence[Stadium]], List[str]]] = {
    AppScreen.HOME:                render_home,
    AppScreen.DESTINATION:         render_destination,
    AppScreen.GATES:               render_gates,
    AppScreen.ROUTE_LIST:          render_route_list,
    AppScreen.GUIDANCE:            render_guidance,
    AppScreen.PUBLIC_TRANSPORT:    render_public_transport,
    AppScreen.EMERGENCIES:         render_emergencies,
    AppScreen.TOURIST_MODE:        render_tourist_mode,
    AppScreen.AMBULANCE_TRACKER:   render_ambulance_tracker,
    AppScreen.TRAVEL_TIPS:         render_travel_tips,
    AppScreen.TRANSPORT_SCHEDULES: render_transport_schedules,
}


def render(assistant: TripAssistant, stadiums: Optional[Sequence[Stadium]] = None) -> str:
    """Render the assistant's current screen as plain text."""
    if stadiums is None:
        stadiums = assistant.catalog.list_stadiums()
    return "\n".join(_RENDERERS[assistant.screen](assistant, stadiums))
