import threading

from conecta.core.assist_config import SURROUNDINGS_MESSAGE
from conecta.core.models import AppScreen, DispatchStatus, HapticKind


def _plan(assistant, azteca, puerta_11):
    assistant.open_destination()
    assistant.choose_stadium(azteca)
    assistant.choose_gate(puerta_11)
    assistant.choose_route(assistant.trip_state.routes[0])


def test_full_planning_flow(assistant, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)

    nav = assistant.navigation.snapshot()
    assert nav.current is AppScreen.GUIDANCE
    assert nav.history == (AppScreen.HOME, AppScreen.DESTINATION, AppScreen.GATES, AppScreen.ROUTE_LIST)
    assert assistant.trip_state.show_guidance
    assert assistant.guidance_state.step_index == 0
    assert assistant.guidance_state.step_count == 6


def test_guidance_is_read_aloud_when_opened(assistant, speech, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)
    assert speech.spoken == [("Camina 120 m hacia Av. Principal.", "es-MX")]


def test_each_step_change_is_spoken(assistant, speech, haptics, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)

    assistant.next_step()
    assistant.previous_step()

    assert speech.texts[1:] == [
        "Toma la Línea 2 dirección Sur (2 estaciones).",
        "Camina 120 m hacia Av. Principal.",
    ]
    assert haptics.kinds == [HapticKind.SUCCESS, HapticKind.MEDIUM_IMPACT]


def test_no_speech_on_boundary_no_op(assistant, speech, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)
    spoken = len(speech.spoken)

    assistant.previous_step()

    assert len(speech.spoken) == spoken


def test_voice_guidance_off_silences_steps(assistant, speech, azteca, puerta_11):
    assistant.set_preference("voice_guidance", False)
    _plan(assistant, azteca, puerta_11)
    assistant.next_step()
    assistant.describe_surroundings()

    assert speech.spoken == []
    assert assistant.guidance_state.step_index == 1


def test_walk_to_arrival(assistant, speech, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)
    for _ in range(10):
        assistant.next_step()

    assert assistant.guidance_state.step_index == 5
    assert speech.texts[-1] == "Dirígete a Puerta 11 - Cabecera Norte (Ambos)"


def test_describe_surroundings(assistant, speech):
    assistant.describe_surroundings()
    assert speech.texts == [SURROUNDINGS_MESSAGE]


def test_sos_with_ambulance_opens_tracker(assistant, haptics, tickers):
    assistant.navigate(AppScreen.EMERGENCIES)
    assistant.sos_alert()

    state = assistant.sos_with_ambulance()

    assert haptics.kinds == [HapticKind.WARNING, HapticKind.ERROR]
    assert state.eta_minutes == 8
    assert assistant.screen is AppScreen.AMBULANCE_TRACKER
    assert tickers.last.started


def test_sos_only_does_not_dispatch(assistant, haptics, tickers):
    assistant.sos_only()
    assert haptics.kinds == [HapticKind.WARNING]
    assert tickers.created == []
    assert assistant.ambulance_state.status is DispatchStatus.IDLE


def test_ticks_reach_state_through_the_loop(assistant, tickers):
    assistant.sos_with_ambulance()
    for _ in range(3):
        tickers.last.fire()
    assistant.loop.run_pending()

    assert assistant.ambulance_state.eta_minutes == 5


def test_leaving_tracker_cancels_dispatch(assistant, tickers):
    assistant.navigate(AppScreen.EMERGENCIES)
    assistant.sos_with_ambulance()

    assistant.go_home()

    assert tickers.last.cancelled
    assert assistant.ambulance_state.status is DispatchStatus.IDLE


def test_forward_navigation_from_tracker_also_cancels(assistant, tickers):
    assistant.sos_with_ambulance()
    assistant.navigate(AppScreen.TRAVEL_TIPS)
    assert tickers.last.cancelled


def test_cancel_button_goes_back(assistant, tickers):
    assistant.navigate(AppScreen.EMERGENCIES)
    assistant.sos_with_ambulance()

    nav = assistant.cancel_ambulance()

    assert nav.current is AppScreen.EMERGENCIES
    assert tickers.last.cancelled
    assert not assistant.ambulance_state.requested


def test_request_outside_tracker_keeps_running(assistant, tickers):
    assistant.request_ambulance()
    assistant.navigate(AppScreen.GUIDANCE)
    assert not tickers.last.cancelled


def test_commands_on_background_loop(assistant, azteca, puerta_11):
    assistant.start()
    try:
        _plan(assistant, azteca, puerta_11)
        state = assistant.next_step()
    finally:
        assistant.shutdown()

    assert state.step_index == 1
    assert assistant.screen is AppScreen.GUIDANCE


def test_toggle_preference(assistant):
    assert assistant.toggle_preference("high_contrast") is False
    assert assistant.preferences.high_contrast is False


def test_changing_route_during_guidance_reads_first_step(assistant, speech, azteca, puerta_11):
    _plan(assistant, azteca, puerta_11)
    for _ in range(3):
        assistant.next_step()
    spoken = len(speech.spoken)

    assistant.choose_route(assistant.trip_state.routes[1])

    assert assistant.screen is AppScreen.GUIDANCE
    assert assistant.guidance_state.step_index == 0
    assert speech.texts[spoken:] == ["Camina 120 m hacia Av. Principal."]


def test_arrived_snapshot_is_consistent(assistant, tickers):
    assistant.sos_with_ambulance()
    for _ in range(8):
        tickers.last.fire()

    state = assistant.ambulance_state

    assert state.status is DispatchStatus.ARRIVED
    assert state.eta_minutes == 0


def test_snapshots_are_read_on_the_loop_thread(assistant, monkeypatch):
    threads = []
    snapshot = assistant.dispatch.snapshot

    def recording_snapshot():
        threads.append(threading.current_thread().name)
        return snapshot()

    monkeypatch.setattr(assistant.dispatch, "snapshot", recording_snapshot)
    assistant.start()
    try:
        assistant.ambulance_state
    finally:
        assistant.shutdown()

    assert threads and set(threads) == {"core-loop"}
