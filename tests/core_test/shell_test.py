
import logging

import pytest

from conecta.app.main import CommandShell, build_parser, log_level, parse_switch
from conecta.app.screens import render
from conecta.core.assist_config import AssistConfig
from conecta.core.models import AppScreen


@pytest.fixture
def shell(assistant):
    return CommandShell(assistant)


def test_home_screen_lists_preferences(assistant):
    text = render(assistant)
    assert "Conecta Fácil".upper() in text
    assert "voice_guidance : sí" in text


def test_every_screen_renders(assistant):
    for screen in AppScreen:
        assistant.navigate(screen)
        assert render(assistant).strip()


def test_trip_through_commands(shell, assistant, speech):
    shell.handle("go destination")
    out = shell.handle("search azteca")
    assert "1. Estadio Azteca" in out

    out = shell.handle("stadium 1")
    assert "4. Puerta 11 - Cabecera Norte" in out

    out = shell.handle("gate 4")
    assert "Ruta A - 15 min" in out
    assert "1.8 km" in out

    out = shell.handle("route 1")
    assert "Paso 1 de 6" in out
    assert "Voz activa" in out

    out = shell.handle("next")
    assert "Paso 2 de 6" in out
    assert assistant.screen is AppScreen.GUIDANCE
    assert len(speech.spoken) == 2


def test_emergency_commands(shell, assistant, tickers):
    shell.handle("go emergencies")
    assert "ambulancia" in shell.handle("sos")

    out = shell.handle("sos+amb")
    assert "8 minutos" in out
    assert "AMB-2026-001" in out
    assert "911 - Emergencias" in out

    shell.handle("cancel")
    assert assistant.screen is AppScreen.EMERGENCIES
    assert tickers.last.cancelled


def test_preference_commands(shell, assistant):
    shell.handle("pref voice_guidance off")
    assert assistant.preferences.voice_guidance is False
    shell.handle("pref voice_guidance")
    assert assistant.preferences.voice_guidance is True


@pytest.mark.parametrize("line", [
    "fly",
    "go nowhere",
    "stadium 9",
    "gate 1",
    "route 1",
    "pref loudness on",
    "pref voice_guidance maybe",
])
def test_bad_input_raises_value_error(shell, line):
    with pytest.raises(ValueError):
        shell.handle(line)


def test_back_and_home(shell, assistant):
    shell.handle("go touristMode")
    shell.handle("go travelTips")
    shell.handle("back")
    assert assistant.screen is AppScreen.TOURIST_MODE
    shell.handle("home")
    assert assistant.navigation.snapshot().history == ()


def test_parse_switch():
    assert parse_switch("on") is True
    assert parse_switch("No") is False


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.tick_seconds == 60.0
    assert args.no_voice is False


@pytest.mark.parametrize("name, level", [
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    ("verbose", logging.WARNING),
])
def test_log_level_comes_from_config(name, level):
    assert log_level(AssistConfig(log_level=name)) == level
