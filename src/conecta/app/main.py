# main.py
# Entry point: interactive command loop acting as the presentation layer.
# Reads commands, calls the TripAssistant and re-renders the current screen.

import argparse
import logging
import traceback
from typing import List, Sequence

from conecta.core.assist_config import AssistConfig
from conecta.core.assistant import TripAssistant
from conecta.core.models import AmbulanceTrackingState, AppScreen, DispatchStatus, Stadium
from conecta.app.screens import render
from tts_stt.tts import QueuedSpeaker

logger = logging.getLogger(__name__)

COMMANDS = """Comandos:
  go <pantalla>           navegar (home, destination, emergencies, ...)
  back | home             regresar / menú principal
  search <texto>          buscar estadio o ciudad
  stadium <n> | gate <n> | route <n>
  next | prev | describe  guía paso a paso
  sos | sos+amb | sos-only | cancel
  pref <nombre> [on|off]  high_contrast, voice_guidance, large_controls
  screen | help | quit"""


def parse_index(args: List[str], items: Sequence) -> int:
    if len(args) != 1:
        raise ValueError("Se espera un número.")
    n = int(args[0])
    if not 1 <= n <= len(items):
        raise ValueError(f"Número fuera de rango (1-{len(items)}).")
    return n - 1


def parse_switch(word: str) -> bool:
    word = word.lower()
    if word in ("on", "si", "sí", "true", "1"):
        return True
    if word in ("off", "no", "false", "0"):
        return False
    raise ValueError(f"Valor no válido: {word!r}")


class CommandShell:
    """
    Maps one line of user input to assistant commands.

    Args:
        assistant: The wired TripAssistant.
    """

    def __init__(self, assistant: TripAssistant) -> None:
        self.assistant = assistant
        self.stadiums: List[Stadium] = list(assistant.catalog.list_stadiums())

    def handle(self, line: str) -> str:
        """Run one command and return the text to show. Raises ValueError on bad input."""
        a = self.assistant
        parts = line.split()
        cmd = parts[0].lower()
        args = parts[1:]

        if cmd == "go":
            if len(args) != 1:
                raise ValueError("Uso: go <pantalla>")
            screen = AppScreen.parse(args[0])
            if screen is AppScreen.DESTINATION:
                self.stadiums = a.search(a.trip_state.search_text)
            a.navigate(screen)
        elif cmd == "back":
            a.go_back()
        elif cmd == "home":
            a.go_home()
        elif cmd == "search":
            self.stadiums = a.search(" ".join(args))
        elif cmd == "stadium":
            a.choose_stadium(self.stadiums[parse_index(args, self.stadiums)])
        elif cmd == "gate":
            stadium = a.trip_state.selected_stadium
            if stadium is None:
                raise ValueError("Primero elige un estadio.")
            a.choose_gate(stadium.gates[parse_index(args, stadium.gates)])
        elif cmd == "route":
            routes = a.trip_state.routes
            a.choose_route(routes[parse_index(args, routes)])
        elif cmd == "next":
            a.next_step()
        elif cmd == "prev":
            a.previous_step()
        elif cmd == "describe":
            a.describe_surroundings()
        elif cmd == "sos":
            a.sos_alert()
            return ("Alerta SOS: se compartirá tu ubicación con tus contactos de emergencia.\n"
                    "¿Deseas también solicitar una ambulancia?  sos+amb | sos-only")
        elif cmd == "sos+amb":
            a.sos_with_ambulance()
        elif cmd == "sos-only":
            a.sos_only()
            return "SOS enviado a tus contactos de confianza."
        elif cmd == "cancel":
            a.cancel_ambulance()
        elif cmd == "pref":
            if len(args) == 1:
                a.toggle_preference(args[0])
            elif len(args) == 2:
                a.set_preference(args[0], parse_switch(args[1]))
            else:
                raise ValueError("Uso: pref <nombre> [on|off]")
        elif cmd == "help":
            return COMMANDS
        elif cmd != "screen":
            raise ValueError("Comando desconocido.")

        return render(a, self.stadiums)


def _print_eta(assistant: TripAssistant):
    def on_update(state: AmbulanceTrackingState) -> None:
        if assistant.screen is not AppScreen.AMBULANCE_TRACKER or not state.requested:
            return
        if state.status is DispatchStatus.ARRIVED:
            print("\n[Ambulancia] La ambulancia ha llegado.")
        else:
            print(f"\n[Ambulancia] Llegada en {state.eta_minutes} min.")
    return on_update


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conecta Fácil: asistente de movilidad accesible")
    parser.add_argument("--tick-seconds", type=float, default=60.0,
                        help="Segundos reales por minuto simulado de ambulancia")
    parser.add_argument("--no-voice", action="store_true",
                        help="Desactiva la salida de voz (pyttsx3)")
    parser.add_argument("--locale", default="es-MX", help="Idioma de la voz")
    parser.add_argument("--log-level", default="WARNING",
                        help="DEBUG, INFO, WARNING, ...")
    return parser


def log_level(config: AssistConfig) -> int:
    """Numeric logging level for config.log_level; unknown names fall back to WARNING."""
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.WARNING


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)

    config = AssistConfig(
        speech_locale=args.locale,
        tick_interval_s=args.tick_seconds,
        log_level=args.log_level,
    )

    # Logging setup: configure once here, all modules inherit
    logging.basicConfig(
        level=log_level(config),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    speaker = None if args.no_voice else QueuedSpeaker(config.speech_rate, config.preferred_voices)
    assistant = TripAssistant(config=config, speech=speaker)
    assistant.dispatch.subscribe(_print_eta(assistant))
    assistant.start()

    shell = CommandShell(assistant)
    print(COMMANDS)
    print(render(assistant))

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        if line.lower() in ("q", "quit", "exit"):
            break

        try:
            print(shell.handle(line))
        except ValueError as e:
            print("[ERR]", e)
        except Exception as e:
            logger.debug(traceback.format_exc())
            print("[ERR]", f"Error: {e}")

    assistant.shutdown()


if __name__ == "__main__":
    main()
