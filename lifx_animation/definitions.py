"""
What an animation looks like.

An ``AnimationDefinition`` says what colour to show at each step and how long
the step takes. The colour is a ``Color`` for a light, a ``MultizoneColors``
for a strip or a ``TileChainColors`` for a chain of tiles. Returning None
from ``color`` ends the animation.

.. code-block:: python

    class Blink(AnimationDefinition):
        def color(self, n):
            return RED if n % 2 == 0 else OFF

        def duration(self, n):
            return 500

    runner = device.light.animation(Blink())
    runner.start()

``start_time`` may return when a step should start, as seconds since the
epoch. The runner waits until then before doing the step.
"""
from lifx_colour.tiles import TileChainColors, register_chain_kind
from lifx_colour.hsbk import Color

from enum import Enum
import math


class AnimationDefinition:
    def color(self, n):
        raise NotImplementedError()

    def duration(self, n):
        """Milliseconds that step ``n`` takes"""
        raise NotImplementedError()

    def start_time(self, n):
        return None

    def wait_for_previous_animation_end(self):
        """Whether to let an animation already on the light finish before we start"""
        return False


########################
###   CYCLE
########################


class CycleDefinition(AnimationDefinition):
    """
    Go through ``colors`` in order.

    The first step takes ``start_transition`` milliseconds and the rest take
    ``step_duration``. A ``cycle_count`` of 0 means go forever, otherwise we
    go through the colours that many times and finish on the first colour,
    or the last one if ``end_with_last`` is True.
    """

    def __init__(
        self,
        colors,
        step_duration=1000,
        start_transition=200,
        cycle_count=0,
        end_with_last=False,
    ):
        self.colors = list(colors)
        self.step_duration = max(step_duration, 0)
        self.start_transition = max(start_transition, 0)
        self.cycle_count = max(cycle_count, 0)
        self.end_with_last = end_with_last

    def color(self, n):
        count = len(self.colors)
        if count == 0:
            return None

        if self.cycle_count > 0:
            last = self.cycle_count * count - (1 if self.end_with_last else 0)
            if n > last:
                return None

        return self.colors[n % count]

    def duration(self, n):
        return self.start_transition if n == 0 else self.step_duration

    def set_cycle_duration(self, duration):
        """Make one time through all the colours take ``duration`` milliseconds"""
        if self.colors:
            self.step_duration = max(duration, 0) // len(self.colors)
        return self

    def set_step_duration(self, duration):
        self.step_duration = max(duration, 0)
        return self

    def set_start_transition(self, duration):
        self.start_transition = max(duration, 0)
        return self

    def set_cycle_count(self, count):
        self.cycle_count = max(count, 0)
        return self

    def set_end_with_last(self, end_with_last=True):
        self.end_with_last = end_with_last
        return self


########################
###   MULTIZONE MOVE
########################


class MoveDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    OUTWARD = "outward"
    INWARD = "inward"


class MultizoneMoveDefinition(AnimationDefinition):
    """
    Move ``colors`` along a strip of ``zone_count`` zones, one zone every step.

    ``duration`` is how long it takes to move the whole length of the strip.
    OUTWARD and INWARD mirror the colours around the middle of the strip and
    so take twice as long for each step.
    """

    def __init__(self, zone_count, duration, stretch, direction, colors):
        self.zone_count = zone_count
        self.total_duration = duration
        self.direction = direction
        self.colors = colors.stretch(stretch)
        self.selected_brightness = 1

        if direction in (MoveDirection.INWARD, MoveDirection.BACKWARD):
            self.sgn = -1
        else:
            self.sgn = 1

    @property
    def mirrored(self):
        return self.direction in (MoveDirection.INWARD, MoveDirection.OUTWARD)

    def duration(self, n):
        step = abs(self.total_duration) // max(self.zone_count, 1)
        return step * 2 if self.mirrored else step

    def color(self, n):
        colors = self.colors.shift(self.sgn * n)
        if self.mirrored:
            colors = colors.mirror()
        return colors.with_relative_brightness(self.selected_brightness)


########################
###   TILE CHAIN WAVE
########################


class WaveDirection(Enum):
    OUTWARD = "outward"
    INWARD = "inward"
    FROM_LEFT = "from_left"
    FROM_RIGHT = "from_right"
    FROM_BOTTOM = "from_bottom"
    FROM_TOP = "from_top"


class WaveForm(Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    DIAMOND = "diamond"
    HEART = "heart"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def wave_distance(form, x, y):
    """How far ``(x, y)`` is from the centre when measured in the shape of ``form``"""
    if form is WaveForm.SQUARE:
        return max(abs(x), abs(y))
    elif form is WaveForm.DIAMOND:
        return max(abs(x + y), abs(x - y))
    elif form is WaveForm.HEART:
        theta = math.atan2(-y, abs(x)) + math.pi / 2
        factor = (2 * theta / math.pi - 1) ** 5 + 1.2 + math.cos(theta / 2) / 3
        return math.hypot(x, y) / factor
    elif form is WaveForm.VERTICAL:
        return abs(x)
    elif form is WaveForm.HORIZONTAL:
        return abs(y)
    return math.hypot(x, y)


@register_chain_kind
class WaveColors(TileChainColors):
    """Rings of ``colors`` that are ``radius`` pixels apart around a centre"""

    kind = "wave"

    def __init__(self, x_center, y_center, radius, offset, colors, form, brightness=1):
        self.x_center = x_center
        self.y_center = y_center
        self.radius = radius
        self.offset = offset
        self.colors = list(colors)
        self.form = form
        self.brightness = brightness

    def color(self, x, y, width, height):
        count = len(self.colors)
        distance = wave_distance(self.form, x - self.x_center, y - self.y_center)
        index = ((distance + self.offset) / self.radius * count) % count

        before = self.colors[int(math.floor(index)) % count]
        after = self.colors[int(math.ceil(index)) % count]
        return before.add(after, index % 1).with_relative_brightness(self.brightness)

    def options(self):
        return {
            "x_center": self.x_center,
            "y_center": self.y_center,
            "radius": self.radius,
            "offset": self.offset,
            "colors": [c.as_dict() for c in self.colors],
            "form": self.form.value,
            "brightness": self.brightness,
        }

    @classmethod
    def from_dict(kls, d):
        return kls(
            d["x_center"],
            d["y_center"],
            d["radius"],
            d["offset"],
            [Color.from_dict(c) for c in d["colors"]],
            WaveForm(d["form"]),
            d["brightness"],
        )


class TileChainWaveDefinition(AnimationDefinition):
    """
    Waves of ``colors`` moving over a chain of tiles.

    ``radius`` is the distance in pixels between repeats of the colours and
    ``duration`` is how many milliseconds a wave takes to move that far.
    """

    MIN_DURATION = 250

    def __init__(self, total_width, total_height, duration, radius, direction, form, colors):
        self.radius = radius
        self.direction = direction
        self.form = form
        self.colors = list(colors)
        self.selected_brightness = 1

        if direction is WaveDirection.FROM_LEFT:
            self.x_center = -0.5
        elif direction is WaveDirection.FROM_RIGHT:
            self.x_center = total_width - 0.5
        else:
            self.x_center = (total_width - 1) * 0.5

        if direction is WaveDirection.FROM_BOTTOM:
            self.y_center = -0.5
        elif direction is WaveDirection.FROM_TOP:
            self.y_center = total_height - 0.5
        else:
            self.y_center = (total_height - 1) * (0.6 if form is WaveForm.HEART else 0.5)

        self.step_duration = max(self.MIN_DURATION, int(duration / (2 * radius)))
        self.radius_factor = self.step_duration * radius / duration
        if direction is not WaveDirection.INWARD:
            self.radius_factor = -self.radius_factor

    def duration(self, n):
        return 0 if n == 0 else self.step_duration

    def color(self, n):
        return WaveColors(
            self.x_center,
            self.y_center,
            self.radius,
            self.radius_factor * n,
            self.colors,
            self.form,
            self.selected_brightness,
        )
