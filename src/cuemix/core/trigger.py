"""Edge-triggered crossfade state for a single playlist track.

Kept free of playback objects so the rewind handling can be tested on its own.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class TriggerState(Enum):
    ARMED = "armed"
    FIRED = "fired"


def advance(
    state: TriggerState,
    time_to_previous_next: float,
    fade_in_duration: float,
) -> Tuple[TriggerState, bool]:
    """Return ``(new_state, fire)`` for one scheduling tick.

    ``fire`` is True exactly when the track has to be started from its
    ``begin`` cue. A fired track re-arms once the predecessor is rewound so
    that its ``next`` cue is further away than this track's fade-in.
    """

    if state is TriggerState.FIRED and time_to_previous_next > fade_in_duration:
        state = TriggerState.ARMED
    if state is TriggerState.ARMED and time_to_previous_next <= fade_in_duration:
        return TriggerState.FIRED, True
    return state, False
