"""Tell-tale (warning light) counting."""

from __future__ import annotations

from rfms_trip.models.metrics import TellTaleCounts
from rfms_trip.normalize import TripEvents

RED = "RED"
YELLOW = "YELLOW"


def count_tell_tales(events: TripEvents) -> TellTaleCounts:
    """Count each named warning once, at the highest severity it reached.

    A warning first seen YELLOW and later RED moves from the yellow count to
    the red count. Other states (GREEN, OFF, ...) are ignored.
    """
    highest: dict[str, str] = {}
    red = yellow = 0

    for event in events:
        for tell_tale in event.tell_tales:
            seen = highest.get(tell_tale.name)
            if tell_tale.state == RED and seen != RED:
                red += 1
                if seen == YELLOW:
                    yellow -= 1
                highest[tell_tale.name] = RED
            elif tell_tale.state == YELLOW and seen is None:
                yellow += 1
                highest[tell_tale.name] = YELLOW

    return TellTaleCounts(red=red, yellow=yellow)
