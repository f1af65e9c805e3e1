"""Driver activity states and trigger kinds."""

from __future__ import annotations

from enum import Enum


class DriverState(str, Enum):
    """Tachograph working state of driver 1."""

    DRIVE = "DRIVE"
    WORK = "WORK"
    REST = "REST"
    AVAILABLE = "AVAILABLE"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, label: object) -> DriverState:
        """Map a raw working-state label to a state, folding anything else to UNKNOWN."""
        if isinstance(label, DriverState):
            return label
        if not isinstance(label, str) or not label.strip():
            return cls.UNKNOWN
        key = label.strip().upper()
        key = _STATE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


_STATE_ALIASES = {
    "DRIVER_AVAILABLE": "AVAILABLE",
}

# States other than DRIVE/WORK that may own a credited minute, in tie order
OTHER_STATES: tuple[DriverState, ...] = (
    DriverState.REST,
    DriverState.AVAILABLE,
    DriverState.NOT_AVAILABLE,
    DriverState.ERROR,
)


class TriggerType(str, Enum):
    """What caused the vehicle to send a status message."""

    ENGINE_ON = "ENGINE_ON"
    ENGINE_OFF = "ENGINE_OFF"
    TIMER = "TIMER"
    DRIVER_LOGIN = "DRIVER_LOGIN"
    DRIVER_LOGOUT = "DRIVER_LOGOUT"
    TELL_TALE = "TELL_TALE"
    DRIVER_1_WORKING_STATE_CHANGED = "DRIVER_1_WORKING_STATE_CHANGED"
    DRIVER_2_WORKING_STATE_CHANGED = "DRIVER_2_WORKING_STATE_CHANGED"
    DISTANCE_TRAVELLED = "DISTANCE_TRAVELLED"
    PTO_ENABLED = "PTO_ENABLED"
    PTO_DISABLED = "PTO_DISABLED"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, label: object) -> TriggerType:
        if isinstance(label, TriggerType):
            return label
        if not isinstance(label, str):
            return cls.OTHER
        try:
            return cls(label.strip().upper())
        except ValueError:
            return cls.OTHER


# Triggers whose accumulated fields cover the interval since the previous message
INTERVAL_TRIGGERS = frozenset({TriggerType.ENGINE_ON, TriggerType.TIMER, TriggerType.ENGINE_OFF})
