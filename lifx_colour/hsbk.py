"""
The colour of a single LIFX light.

.. autoclass:: lifx_colour.hsbk.Color
    :members:

Hue, saturation and brightness are all stored as the unsigned 16 bit values
that go over the wire. Use ``Color.from_hsbk`` to make one from degrees and
fractions instead.
"""
from collections import namedtuple
import colorsys
import math

MAX_VALUE = 65535
HUE_RANGE = 65536

RGBK = namedtuple("RGBK", ["red", "green", "blue", "kelvin"])


def u16(value):
    return max(0, min(MAX_VALUE, int(math.floor(value + 0.5))))


class Color:
    """
    An immutable ``hue``, ``saturation``, ``brightness`` and ``kelvin``.

    Every colour with zero brightness is equal to every other one, and the
    hue of a colour with zero saturation doesn't matter.
    """

    __slots__ = ("_hsbk",)

    def __init__(self, hue, saturation, brightness, kelvin):
        hue = int(math.floor(hue + 0.5)) % HUE_RANGE
        object.__setattr__(
            self, "_hsbk", (hue, u16(saturation), u16(brightness), u16(kelvin))
        )

    def __setattr__(self, key, value):
        raise AttributeError(f"Can't change {key} on a Color")

    @classmethod
    def from_hsbk(kls, hue, saturation, brightness, kelvin):
        """
        Make a colour from ``hue`` in degrees, ``saturation`` and ``brightness``
        between 0 and 1 and ``kelvin`` as is.
        """
        return kls(
            (hue % 360) / 360 * HUE_RANGE,
            saturation * MAX_VALUE,
            brightness * MAX_VALUE,
            kelvin,
        )

    @classmethod
    def from_rgbk(kls, rgbk):
        red, green, blue, kelvin = rgbk
        h, s, v = colorsys.rgb_to_hsv(red / 255, green / 255, blue / 255)
        return kls(h * HUE_RANGE, s * MAX_VALUE, v * MAX_VALUE, kelvin)

    @classmethod
    def from_dict(kls, d):
        return kls(d["hue"], d["saturation"], d["brightness"], d["kelvin"])

    @property
    def hue(self):
        return self._hsbk[0]

    @property
    def saturation(self):
        return self._hsbk[1]

    @property
    def brightness(self):
        return self._hsbk[2]

    @property
    def kelvin(self):
        return self._hsbk[3]

    @property
    def hue_degrees(self):
        return self.hue * 360 / HUE_RANGE

    @property
    def is_off(self):
        return self.brightness == 0

    def as_tuple(self):
        return self._hsbk

    def as_dict(self):
        return {
            "hue": self.hue,
            "saturation": self.saturation,
            "brightness": self.brightness,
            "kelvin": self.kelvin,
        }

    def add(self, other, quota):
        """
        Return a colour ``quota`` of the way from this colour to ``other``

        Hue goes the short way around the colour wheel.
        """
        hue1 = self.hue
        hue2 = other.hue
        if hue2 - hue1 > HUE_RANGE // 2:
            hue1 += HUE_RANGE
        elif hue1 - hue2 > HUE_RANGE // 2:
            hue2 += HUE_RANGE

        def between(a, b):
            return a + (b - a) * quota

        return Color(
            between(hue1, hue2),
            between(self.saturation, other.saturation),
            between(self.brightness, other.brightness),
            between(self.kelvin, other.kelvin),
        )

    def with_brightness(self, brightness):
        return Color(self.hue, self.saturation, brightness, self.kelvin)

    def with_relative_brightness(self, factor):
        if factor == 1:
            return self
        return self.with_brightness(min(MAX_VALUE, self.brightness * factor))

    def to_rgbk(self):
        r, g, b = colorsys.hsv_to_rgb(
            self.hue / HUE_RANGE, self.saturation / MAX_VALUE, self.brightness / MAX_VALUE
        )
        return RGBK(
            int(math.floor(r * 255 + 0.5)),
            int(math.floor(g * 255 + 0.5)),
            int(math.floor(b * 255 + 0.5)),
            self.kelvin,
        )

    def is_similar(self, other, epsilon=3):
        """
        Say whether ``other`` is within ``epsilon`` of this colour on every
        channel.

        Hue only counts when both colours have some saturation.
        """
        if other is None:
            return False

        if self.is_off and other.is_off:
            return True

        if abs(self.brightness - other.brightness) > epsilon:
            return False
        if abs(self.saturation - other.saturation) > epsilon:
            return False
        if abs(self.kelvin - other.kelvin) > epsilon:
            return False

        if self.saturation and other.saturation:
            diff = abs(self.hue - other.hue)
            return min(diff, HUE_RANGE - diff) <= epsilon

        return True

    def is_similar_black_white(self, other, epsilon=3):
        """Compare brightness and kelvin only"""
        if other is None:
            return False
        if self.is_off and other.is_off:
            return True
        return (
            abs(self.brightness - other.brightness) <= epsilon
            and abs(self.kelvin - other.kelvin) <= epsilon
        )

    def _key(self):
        if self.is_off:
            return ("off",)
        if self.saturation == 0:
            return (0, self.brightness, self.kelvin)
        return self._hsbk

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __iter__(self):
        return iter(self._hsbk)

    def __repr__(self):
        return "<Color ({}, {}, {}, {})>".format(*self._hsbk)


OFF = Color(0, 0, 0, 3500)
WHITE = Color(0, 0, MAX_VALUE, 3500)
WARM_WHITE = Color(0, 0, MAX_VALUE, 2700)
RED = Color.from_hsbk(0, 1, 1, 3500)
YELLOW = Color.from_hsbk(60, 1, 1, 3500)
GREEN = Color.from_hsbk(120, 1, 1, 3500)
CYAN = Color.from_hsbk(180, 1, 1, 3500)
BLUE = Color.from_hsbk(240, 1, 1, 3500)
MAGENTA = Color.from_hsbk(300, 1, 1, 3500)

# Dark, through a dim red sunrise, to bright warm white
WAKEUP_CYCLE = (
    OFF,
    Color.from_hsbk(0, 1, 0.01, 2500),
    Color.from_hsbk(10, 1, 0.1, 2500),
    Color.from_hsbk(30, 0.8, 0.3, 2700),
    Color.from_hsbk(40, 0.3, 0.6, 3000),
    Color.from_hsbk(0, 0, 1, 3500),
)
