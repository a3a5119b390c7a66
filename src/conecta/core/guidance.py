# guidance.py
# Bounds-checked cursor over the active step sequence.
# Call load() when a route is chosen, then next_step() / previous_step().
# Speech is not triggered here; see TripAssistant.

import logging
from typing import List, Optional, Sequence

from .assist_config import ARRIVAL_MESSAGE
from .events import Observable
from .feedback import HapticFeedback
from .models import GuidanceState, HapticKind, StepInstruction

logger = logging.getLogger(__name__)


class GuidanceStepper(Observable[GuidanceState]):
    """
    Step cursor with haptic confirmation.

    Usage:
        stepper = GuidanceStepper(haptics)
        stepper.load(steps)
        stepper.next_step()
        stepper.current_step_text()

    Args:
        haptics: Receives SUCCESS on advance and MEDIUM_IMPACT on step back.
    """

    def __init__(self, haptics: HapticFeedback) -> None:
        super().__init__()
        self._haptics = haptics
        self._steps: List[StepInstruction] = []
        self._step_index: int = 0

    def snapshot(self) -> GuidanceState:
        return GuidanceState(step_index=self._step_index, steps=tuple(self._steps))

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def load(self, steps: Sequence[StepInstruction]) -> GuidanceState:
        """Load a new step sequence and reset the cursor."""
        self._steps = list(steps)
        self._step_index = 0
        return self._publish()

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def current_step(self) -> Optional[StepInstruction]:
        if 0 <= self._step_index < len(self._steps):
            return self._steps[self._step_index]
        return None

    @property
    def can_advance(self) -> bool:
        return self._step_index < len(self._steps) - 1

    @property
    def can_go_back(self) -> bool:
        return self._step_index > 0

    def current_step_text(self) -> str:
        step = self.current_step
        return step.text if step is not None else ARRIVAL_MESSAGE

    def progress_label(self) -> str:
        return f"Paso {self._step_index + 1} de {max(len(self._steps), 1)}"

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def next_step(self) -> bool:
        """Advance one step. Returns False (and stays silent) at the last step."""
        if not self.can_advance:
            logger.debug("next_step ignored: already at last step")
            return False
        self._step_index += 1
        self._haptics.notify(HapticKind.SUCCESS)
        self._publish()
        return True

    def previous_step(self) -> bool:
        """Go back one step. Returns False at the first step."""
        if not self.can_go_back:
            logger.debug("previous_step ignored: already at first step")
            return False
        self._step_index -= 1
        self._haptics.notify(HapticKind.MEDIUM_IMPACT)
        self._publish()
        return True
