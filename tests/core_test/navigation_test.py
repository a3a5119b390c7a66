import pytest

from conecta.core.models import AppScreen
from conecta.core.screen_navigator import NavigationController


def test_starts_on_home_with_empty_history():
    nav = NavigationController()
    state = nav.snapshot()
    assert state.current is AppScreen.HOME
    assert state.history == ()


def test_go_home_clears_any_history():
    nav = NavigationController()
    for screen in (AppScreen.DESTINATION, AppScreen.GATES, AppScreen.ROUTE_LIST, AppScreen.GUIDANCE):
        nav.navigate(screen)

    state = nav.go_home()

    assert state.current is AppScreen.HOME
    assert state.history == ()


def test_back_replays_navigation_order():
    nav = NavigationController()
    nav.navigate(AppScreen.EMERGENCIES)
    nav.navigate(AppScreen.AMBULANCE_TRACKER)

    assert nav.go_back().current is AppScreen.EMERGENCIES
    assert nav.go_back().current is AppScreen.HOME


def test_back_on_empty_history_is_a_no_op():
    nav = NavigationController()
    nav.navigate(AppScreen.TOURIST_MODE)
    nav.go_home()

    first = nav.go_back()
    second = nav.go_back()

    assert first.current is AppScreen.HOME
    assert second == first


def test_repeated_navigation_keeps_duplicate_entries():
    nav = NavigationController()
    nav.navigate(AppScreen.DESTINATION)
    nav.navigate(AppScreen.DESTINATION)
    nav.navigate(AppScreen.GATES)

    assert nav.snapshot().history == (AppScreen.HOME, AppScreen.DESTINATION, AppScreen.DESTINATION)
    assert nav.go_back().current is AppScreen.DESTINATION
    assert nav.go_back().current is AppScreen.DESTINATION
    assert nav.go_back().current is AppScreen.HOME


def test_navigating_to_the_current_screen_still_pushes():
    nav = NavigationController()
    state = nav.navigate(AppScreen.HOME)
    assert state.current is AppScreen.HOME
    assert state.history == (AppScreen.HOME,)


def test_subscribers_see_each_transition():
    nav = NavigationController()
    seen = []
    unsubscribe = nav.subscribe(lambda s: seen.append(s.current))

    nav.navigate(AppScreen.PUBLIC_TRANSPORT)
    nav.navigate(AppScreen.TRANSPORT_SCHEDULES)
    nav.go_back()
    unsubscribe()
    nav.go_home()

    assert seen == [AppScreen.PUBLIC_TRANSPORT, AppScreen.TRANSPORT_SCHEDULES, AppScreen.PUBLIC_TRANSPORT]


def test_snapshot_is_detached_from_later_changes():
    nav = NavigationController()
    before = nav.navigate(AppScreen.DESTINATION)
    nav.navigate(AppScreen.GATES)
    assert before.history == (AppScreen.HOME,)


@pytest.mark.parametrize("name, expected", [
    ("routeList", AppScreen.ROUTE_LIST),
    ("route_list", AppScreen.ROUTE_LIST),
    ("ambulanceTracker", AppScreen.AMBULANCE_TRACKER),
    ("home", AppScreen.HOME),
])
def test_screen_parse(name, expected):
    assert AppScreen.parse(name) is expected


def test_screen_parse_rejects_unknown_names():
    with pytest.raises(ValueError):
        AppScreen.parse("settings")
