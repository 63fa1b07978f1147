from lifx_app.errors import ProgrammerError

import enum

MAX_LEVEL = 65535


class Power(enum.Enum):
    """
    The power of a device

    Devices tell us a level between 0 and 65535. Anything other than those
    two ends is a device that is half way through a power transition.
    """

    ON = "on"
    OFF = "off"
    UNKNOWN = "unknown"

    @classmethod
    def from_level(kls, level):
        if level == MAX_LEVEL:
            return kls.ON
        elif level == 0:
            return kls.OFF
        return kls.UNKNOWN

    @property
    def is_on(self):
        return self is Power.ON

    @property
    def is_off(self):
        return self is Power.OFF

    @property
    def level(self):
        if self is Power.ON:
            return MAX_LEVEL
        elif self is Power.OFF:
            return 0


def level_for(status):
    """Turn a ``Power`` or a boolean into the level we send to a device"""
    if isinstance(status, Power):
        if status is Power.UNKNOWN:
            raise ProgrammerError("Can't set a device to an unknown power")
        return status.level
    return MAX_LEVEL if status else 0
