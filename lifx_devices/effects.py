"""
Firmware effects for strips and tiles.

These are run by the device itself, we only tell it which effect to run and
how fast.

.. code-block:: python

    from lifx_devices.effects import MultizoneEffectInfo, TileEffectInfo
    from lifx_colour import RED, BLUE

    await strip.multizone.set_effect(MultizoneEffectInfo.move(3000, backward=True))
    await tile.matrix.set_effect(TileEffectInfo.morph(5000, RED, BLUE))
"""
from lifx_messages import enums

from lifx_colour.hsbk import Color

import struct

INSTANCE_ID = 99


class MultizoneEffectInfo:
    """
    A multizone effect has eight 32 bit parameters. The first two say which
    way a MOVE effect goes.
    """

    PARAMETER_COUNT = 8

    def __init__(self, type, speed=0, parameters=None, instanceid=INSTANCE_ID, duration=0):
        self.type = type
        self.speed = speed
        self.duration = duration
        self.instanceid = instanceid

        parameters = list(parameters or [])
        self.parameters = (parameters + [0] * self.PARAMETER_COUNT)[: self.PARAMETER_COUNT]

    @classmethod
    def off(kls):
        return kls(enums.MultiZoneEffectType.OFF)

    @classmethod
    def move(kls, speed, backward=False):
        parameters = [] if backward else [1, 1]
        return kls(enums.MultiZoneEffectType.MOVE, speed, parameters)

    @classmethod
    def from_packet(kls, pkt):
        raw = pkt.parameters or bytes(4 * kls.PARAMETER_COUNT)
        parameters = struct.unpack(f"<{kls.PARAMETER_COUNT}I", raw[: 4 * kls.PARAMETER_COUNT])
        return kls(
            pkt.type,
            speed=pkt.speed,
            parameters=parameters,
            instanceid=pkt.instanceid,
            duration=pkt.duration,
        )

    def as_set_kwargs(self):
        return {
            "instanceid": self.instanceid,
            "type": self.type,
            "speed": self.speed,
            "duration": self.duration,
            "parameters": struct.pack(f"<{self.PARAMETER_COUNT}I", *self.parameters),
        }

    @property
    def is_backward(self):
        return self.type is enums.MultiZoneEffectType.MOVE and self.parameters[:2] != [1, 1]

    def __eq__(self, other):
        return (
            isinstance(other, MultizoneEffectInfo)
            and self.type == other.type
            and self.speed == other.speed
            and self.parameters == other.parameters
        )

    def __repr__(self):
        return (
            f"<MultizoneEffectInfo {self.type.name} speed={self.speed}"
            f" parameters={self.parameters}>"
        )


class TileEffectInfo:
    """
    A tile effect has 32 parameter bytes and a palette of up to 16 colours.

    The SKY effect puts the type of sky in the first parameter byte and the
    minimum saturation of clouds in the fifth.
    """

    PARAMETER_COUNT = 32
    PALETTE_MAX = 16

    def __init__(
        self, type, speed=0, parameters=None, palette=None, instanceid=INSTANCE_ID, duration=0
    ):
        self.type = type
        self.speed = speed
        self.duration = duration
        self.instanceid = instanceid
        self.palette = list(palette or [])[: self.PALETTE_MAX]
        self.parameters = (bytes(parameters or b"") + bytes(self.PARAMETER_COUNT))[
            : self.PARAMETER_COUNT
        ]

    @classmethod
    def off(kls):
        return kls(enums.TileEffectType.OFF)

    @classmethod
    def flame(kls, speed):
        return kls(enums.TileEffectType.FLAME, speed)

    @classmethod
    def morph(kls, speed, *colors):
        return kls(enums.TileEffectType.MORPH, speed, palette=colors)

    @classmethod
    def sky(kls, speed, sky_type, cloud_saturation_min, *colors):
        parameters = bytearray(kls.PARAMETER_COUNT)
        parameters[0] = sky_type.value
        parameters[4] = cloud_saturation_min
        return kls(enums.TileEffectType.SKY, speed, parameters=parameters, palette=colors)

    @classmethod
    def from_packet(kls, pkt):
        palette = [
            Color(c["hue"], c["saturation"], c["brightness"], c["kelvin"])
            for c in pkt.palette[: pkt.palette_count]
        ]
        return kls(
            pkt.type,
            speed=pkt.speed,
            parameters=pkt.parameters,
            palette=palette,
            instanceid=pkt.instanceid,
            duration=pkt.duration,
        )

    @property
    def sky_type(self):
        if self.type is enums.TileEffectType.SKY:
            return enums.TileEffectSkyType(self.parameters[0])

    @property
    def cloud_saturation_min(self):
        if self.type is enums.TileEffectType.SKY:
            return self.parameters[4]

    def as_set_kwargs(self):
        return {
            "instanceid": self.instanceid,
            "type": self.type,
            "speed": self.speed,
            "duration": self.duration,
            "parameters": self.parameters,
            "palette_count": len(self.palette),
            "palette": [c.as_dict() for c in self.palette],
        }

    def __eq__(self, other):
        return (
            isinstance(other, TileEffectInfo)
            and self.type == other.type
            and self.speed == other.speed
            and self.parameters == other.parameters
            and self.palette == other.palette
        )

    def __repr__(self):
        return (
            f"<TileEffectInfo {self.type.name} speed={self.speed}"
            f" palette={len(self.palette)} colors>"
        )
