"""
Candles burning on a chain of tiles.

The flames flicker between random targets, each pixel fading from where it
is now towards its target over a random duration. A step lasts until the
first flame reaches its target.

.. code-block:: python

    from lifx_animation.candle import CandleAnimationDefinition, Background

    definition = await CandleAnimationDefinition.for_matrix(
        device.matrix, candle_count=2, background=Background.CRADLE
    )
    device.light.animation(definition).start()

``Background.KEEP`` puts the candles in front of whatever the tiles are
showing, which is why ``for_matrix`` is async.
"""
from lifx_animation.definitions import AnimationDefinition

from lifx_colour.hsbk import Color, RGBK, OFF, WHITE, YELLOW
from lifx_colour.tiles import (
    TileChainColors,
    FixedChain,
    PerTile,
    chain_from_dict,
    register_chain_kind,
)

from lifx_app.errors import ProgrammerError

from collections import namedtuple
from enum import Enum
import random
import math

CANDLE_COLOR = Color.from_hsbk(0, 1, 0.15, 3500)
FAINT_WHITE = Color.from_hsbk(0, 0, 0.01, 3500)

FLAME_HEIGHT = 4
MIN_DURATION = 20


class Background(Enum):
    BLACK = "black"
    # A very faint white
    WHITE = "white"
    # Whatever the tiles were showing
    KEEP = "keep"
    # Candles standing in a cradle
    CRADLE = "cradle"
    # Black with a white light in the bottom right
    LIGHT = "light"


Layout = namedtuple(
    "Layout",
    ["flame_width", "candle_width", "lefts", "heights", "cradle_heights", "cradle_bottoms"],
)

layouts = {
    1: Layout(2, 4, (6,), (12,), (11,), (1,)),
    2: Layout(2, 4, (2, 10), (10, 12), (9, 11), (1, 1)),
    3: Layout(2, 4, (0, 6, 12), (8, 12, 10), (7, 11, 9), (2, 1, 2)),
    4: Layout(1, 3, (0, 4, 9, 13), (6, 12, 10, 8), (5, 11, 7, 9), (3, 1, 5, 3)),
}

# fmt: off
crest = [
      (0, 0, 0), (0, 0, 0), (23665, 49151, 2052), (15365, 65535, 3852)
    , (23830, 65535, 3852), (24365, 56797, 3852), (15745, 65535, 4622), (15029, 65535, 5393)
    , (23524, 42597, 5136), (15891, 65535, 5907), (23665, 65535, 4365), (24029, 43690, 3852)
    , (15665, 65535, 2309), (15485, 65535, 1310), (0, 0, 0), (0, 0, 0)

    , (15845, 65535, 1795), (23301, 54612, 4622), (22625, 53970, 4365), (21845, 65535, 2566)
    , (21845, 65535, 1310), (21845, 65535, 2052), (21845, 65535, 2309), (21845, 65535, 1795)
    , (21845, 65535, 2566), (21845, 65535, 2052), (21845, 65535, 2052), (21845, 65535, 1310)
    , (21845, 65535, 1310), (23058, 65535, 2309), (23058, 42129, 3594), (15845, 65535, 2566)

    , (23130, 46420, 6164), (21845, 59577, 2823), (21845, 65535, 1538), (21845, 65535, 2052)
    , (21845, 59577, 2823), (23405, 48288, 4879), (23665, 56172, 3594), (21845, 43690, 3852)
    , (21845, 60493, 3337), (21845, 65535, 2052), (21116, 54612, 4622), (22451, 65535, 4622)
    , (21845, 65535, 2309), (21845, 65535, 2052), (21845, 65535, 1310), (22625, 48288, 4879)

    , (15845, 65535, 5393), (22391, 52428, 6424), (21845, 65535, 3337), (21202, 65535, 4365)
    , (24029, 54612, 3080), (0, 0, 0), (0, 0, 0), (0, 0, 0)
    , (0, 0, 0), (0, 0, 0), (0, 0, 0), (23130, 46420, 6164)
    , (21845, 65535, 4622), (22573, 65535, 3852), (21845, 65535, 3080), (15625, 65535, 4622)

    , (21845, 65535, 1310), (22685, 50115, 4365), (22391, 56986, 5907), (21845, 65535, 5136)
    , (21845, 65535, 3337), (21845, 65535, 1310), (21845, 65535, 1310), (21845, 65535, 1310)
    , (21845, 65535, 1310), (21845, 65535, 1310), (21845, 65535, 2309), (21845, 65535, 3594)
    , (22527, 61680, 4365), (22885, 57343, 6164), (21845, 48059, 3852), (0, 0, 0)

    , (0, 0, 0), (0, 0, 0), (0, 0, 0), (21845, 65535, 1310)
    , (22755, 65535, 3080), (21845, 65535, 2566), (21845, 65535, 1795), (21845, 65535, 1538)
    , (21845, 65535, 1310), (21845, 65535, 2052), (21845, 65535, 1795), (23058, 65535, 2309)
    , (23405, 50971, 2309), (21845, 32767, 1310), (0, 0, 0), (0, 0, 0)
]
# fmt: on

CREST_WIDTH = 16


def in_range01(value):
    return min(1, max(0, value))


def random_kelvin(rand, low, high):
    """A kelvin between low and high, spread evenly on a log scale"""
    return int(math.exp(math.log(low) + rand.random() * (math.log(high) - math.log(low))))


def random_brightness(rand, low, high):
    """A brightness between low and high that leans towards low"""
    value = ((rand.random() + 0.5) ** 2 - 0.25) / 2
    return low + value * (high - low)


def kelvin_to_color(kelvin, brightness):
    """The colour of something glowing at this temperature"""
    if kelvin < 6600:
        red = 1
        green = 0.39 * math.log(kelvin / 100) - 0.634
        blue = 0.543 * math.log(max(kelvin / 100 - 10, 1e-9)) - 1.186
    else:
        red = 1.269 * (kelvin / 100 - 60) ** -0.1332
        green = 1.144 * (kelvin / 100 - 60) ** -0.0755
        blue = 1

    channels = [in_range01(channel) * brightness * 255 for channel in (red, green, blue)]
    return Color.from_rgbk(RGBK(*channels, 3000))


def points_from_dict(points):
    return {(x, y): Color.from_dict(color) for x, y, color in points}


def points_as_dict(points):
    return [[x, y, color.as_dict()] for (x, y), color in sorted(points.items())]


@register_chain_kind
class CrestColors(TileChainColors):
    """A cradle for candles to stand in, two tiles wide"""

    kind = "crest"

    def color(self, x, y, width, height):
        if not 0 <= x < CREST_WIDTH or not 0 <= y < len(crest) // CREST_WIDTH:
            return OFF
        return Color(*crest[x + CREST_WIDTH * y], 3600)

    @classmethod
    def from_dict(kls, d):
        return kls()


@register_chain_kind
class CandleColors(TileChainColors):
    """
    One step of a candle animation

    ``foreground`` and ``flames`` are ``{(x, y): Color}`` and ``candles`` is
    a list of ``(left, bottom, width, height)``. Anything not covered by those
    is the ``background``.
    """

    kind = "candle"

    def __init__(self, background, candles, candle_color, flames, foreground=None):
        self.background = background
        self.candles = [tuple(candle) for candle in candles]
        self.candle_color = candle_color
        self.flames = flames
        self.foreground = foreground or {}

    def color(self, x, y, width, height):
        if (x, y) in self.foreground:
            return self.foreground[x, y]

        for left, bottom, candle_width, candle_height in self.candles:
            if left <= x < left + candle_width and bottom <= y < bottom + candle_height:
                return self.candle_color

        if (x, y) in self.flames:
            return self.flames[x, y]

        return self.background.color(x, y, width, height)

    def options(self):
        return {
            "background": self.background.as_dict(),
            "candles": [list(candle) for candle in self.candles],
            "candle_color": self.candle_color.as_dict(),
            "flames": points_as_dict(self.flames),
            "foreground": points_as_dict(self.foreground),
        }

    @classmethod
    def from_dict(kls, d):
        return kls(
            chain_from_dict(d["background"]),
            d["candles"],
            Color.from_dict(d["candle_color"]),
            points_from_dict(d["flames"]),
            points_from_dict(d["foreground"]),
        )


class Flame:
    """
    The changing colours of one flame

    Every pixel fades from ``current`` towards ``target`` and there are
    ``remaining`` milliseconds left until it gets there.
    """

    def __init__(self, width, height, background, rand):
        self.rand = rand
        self.width = width
        self.height = height
        self.background = background

        self.current = {}
        self.target = {}
        self.remaining = 0

        self.new_target()
        self.add_time(self.remaining)

    def color(self, elapsed, x, y):
        if elapsed >= self.remaining:
            return self.target[x, y]
        return self.current[x, y].add(self.target[x, y], elapsed / self.remaining)

    def new_target(self):
        kelvin = random_kelvin(self.rand, 2500, 3500)
        brightness = random_brightness(self.rand, 0.7, 1)

        for x in range(self.width):
            column_kelvin = kelvin - 200 + self.rand.randrange(400)
            column_brightness = brightness * (1 - 0.2 * self.rand.random())

            for y in range(self.height):
                factor = in_range01(column_brightness - 0.15 * y) / column_brightness
                self.target[x, y] = (
                    kelvin_to_color(column_kelvin - 400 * y, column_brightness)
                    .add(YELLOW, 0.3 * (self.height - y - 1) / self.height)
                    .add(self.background[x, y], 1 - factor)
                )

        self.remaining = 100 + self.rand.randrange(2000)

    def add_time(self, ms):
        # Never leave less than MIN_DURATION until the target
        if ms > self.remaining - MIN_DURATION:
            self.current = dict(self.target)
            self.new_target()
        else:
            quota = ms / self.remaining
            self.current = {
                point: color.add(self.target[point], quota)
                for point, color in self.current.items()
            }
            self.remaining -= ms


class CandleAnimationDefinition(AnimationDefinition):
    """
    Between one and four candles on a chain that is ``total_width`` pixels
    wide and ``total_height`` pixels high.

    ``burndown`` makes the candles that many pixels shorter and
    ``brightness`` scales the candles and flames but not the background.
    ``background_colors`` is required for ``Background.KEEP``.
    """

    def __init__(
        self,
        total_width,
        total_height,
        candle_count=1,
        burndown=0,
        brightness=1,
        background=Background.BLACK,
        background_colors=None,
        rand=None,
    ):
        self.total_width = total_width
        self.total_height = total_height
        self.brightness = brightness
        self.background = background
        self.rand = rand or random.Random()

        layout = layouts.get(candle_count, layouts[1])
        self.candle_count = len(layout.lefts)
        self.flame_width = layout.flame_width
        self.candle_width = layout.candle_width

        if background is Background.CRADLE:
            heights = layout.cradle_heights
            bottoms = layout.cradle_bottoms
        else:
            heights = layout.heights
            bottoms = (0,) * self.candle_count

        self.candles = [
            (left, bottom, self.candle_width, max(0, height - burndown))
            for left, bottom, height in zip(layout.lefts, bottoms, heights)
        ]

        if background is Background.WHITE:
            self.background_colors = FixedChain(FAINT_WHITE)
        elif background is Background.KEEP:
            if background_colors is None:
                raise ProgrammerError("Keeping the background needs the colours to keep")
            self.background_colors = background_colors
        elif background is Background.CRADLE:
            self.background_colors = CrestColors()
        else:
            self.background_colors = FixedChain(OFF)

        self.foreground = self.make_foreground()

        offset = (self.candle_width - self.flame_width) // 2
        self.flame_corners = []
        self.flames = []
        for left, bottom, _, height in self.candles:
            corner = (left + offset, bottom + height)
            behind = {
                (x, y): self.background_color(corner[0] + x, corner[1] + y)
                for x in range(self.flame_width)
                for y in range(FLAME_HEIGHT)
            }
            self.flame_corners.append(corner)
            self.flames.append(Flame(self.flame_width, FLAME_HEIGHT, behind, self.rand))

        self.step = None
        self.step_duration = None

    @classmethod
    async def for_matrix(kls, matrix, **kwargs):
        """Make a definition that fits this ``Matrix``"""
        if kwargs.get("background") is Background.KEEP and "background_colors" not in kwargs:
            kwargs["background_colors"] = PerTile(matrix.tile_info, await matrix.get_colors())
        return kls(matrix.total_width, matrix.total_height, **kwargs)

    def background_color(self, x, y):
        return self.background_colors.color(x, y, self.total_width, self.total_height)

    def make_foreground(self):
        """The pixels that go in front of the candles"""
        foreground = {}

        if self.background is Background.CRADLE:
            for x in range(self.total_width):
                foreground[x, 0] = self.background_color(x, 0)

            if self.candle_count == 2:
                edges = [(2, 1), (13, 1)]
            elif self.candle_count == 3:
                edges = [(0, 2), (2, 2), (13, 2), (15, 2)]
            else:
                edges = []

            for x, y in edges:
                foreground[x, y] = self.background_color(x, y).add(CANDLE_COLOR, 0.5)

        elif self.background is Background.LIGHT:
            for x in range(self.total_width // 2, self.total_width):
                for y in range(self.total_height // 2):
                    foreground[x, y] = WHITE

        return foreground

    def advance(self, n):
        """Move the flames along to step ``n``"""
        if self.step is not None and n > self.step:
            for flame in self.flames:
                flame.add_time(self.step_duration)
            self.step_duration = None

        if self.step is None or n > self.step:
            self.step = n

        if self.step_duration is None:
            shortest = min(flame.remaining for flame in self.flames)
            self.step_duration = max(shortest, MIN_DURATION)

    def duration(self, n):
        self.advance(n)
        return self.step_duration

    def color(self, n):
        self.advance(n)

        flames = {}
        for (left, bottom), flame in zip(self.flame_corners, self.flames):
            for x in range(self.flame_width):
                for y in range(FLAME_HEIGHT):
                    color = flame.color(self.step_duration, x, y)
                    flames[left + x, bottom + y] = color.with_relative_brightness(self.brightness)

        return CandleColors(
            self.background_colors,
            self.candles,
            CANDLE_COLOR.with_relative_brightness(self.brightness),
            flames,
            self.foreground,
        )
