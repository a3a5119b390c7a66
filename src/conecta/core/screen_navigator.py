# screen_navigator.py
# LIFO screen stack. navigate() pushes the literal current screen, so
# go_back() replays the exact history, duplicates included.

import logging
from typing import List

from .events import Observable
from .models import AppScreen, NavigationState

logger = logging.getLogger(__name__)


class NavigationController(Observable[NavigationState]):
    """
    Owns the current screen and the back-stack.

    Usage:
        nav = NavigationController()
        nav.navigate(AppScreen.DESTINATION)
        nav.go_back()      # → HOME
    """

    def __init__(self) -> None:
        super().__init__()
        self._current: AppScreen = AppScreen.HOME
        self._history: List[AppScreen] = []

    def snapshot(self) -> NavigationState:
        return NavigationState(current=self._current, history=tuple(self._history))

    @property
    def current(self) -> AppScreen:
        return self._current

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def navigate(self, to: AppScreen) -> NavigationState:
        """Push the current screen, then show `to`. Any screen is reachable."""
        self._history.append(self._current)
        self._current = to
        logger.debug(f"navigate → {to.value} (depth {len(self._history)})")
        return self._publish()

    def go_back(self) -> NavigationState:
        """Pop the previous screen; with an empty history nothing changes."""
        if not self._history:
            logger.debug("go_back ignored: history is empty")
            return self.snapshot()
        self._current = self._history.pop()
        logger.debug(f"go_back → {self._current.value}")
        return self._publish()

    def go_home(self) -> NavigationState:
        self._history.clear()
        self._current = AppScreen.HOME
        logger.debug("go_home")
        return self._publish()
