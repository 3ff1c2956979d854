"""Timeline commands and their keyboard bindings.

:class:`TimelineAction` names the discrete commands the timeline controls
send; ``KEY_BINDINGS`` maps browser-style key names (``KeyboardEvent.key``)
to them. Each action maps to exactly one
:class:`space_replay.observer.ReplayObserver` method.
"""

from enum import StrEnum, auto
from typing import Dict


class TimelineAction(StrEnum):
    """Commands a key press can trigger.

    Members:
        TOGGLE_PLAY: Play when stopped, pause when playing.
        PREVIOUS, NEXT: Step one frame back / forward (with a transition).
        FIRST, LAST: Jump to the first / last frame (with a transition).
    """

    TOGGLE_PLAY = auto()
    PREVIOUS = auto()
    NEXT = auto()
    FIRST = auto()
    LAST = auto()


KEY_BINDINGS: Dict[str, TimelineAction] = {
    " ": TimelineAction.TOGGLE_PLAY,
    "ArrowLeft": TimelineAction.PREVIOUS,
    "ArrowRight": TimelineAction.NEXT,
    "Home": TimelineAction.FIRST,
    "End": TimelineAction.LAST,
}
