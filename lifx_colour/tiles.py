"""
Colours for tiles and chains of tiles.

A ``TileColors`` is a function from ``(x, y)`` on a single 8x8 tile to a
``Color`` and a ``TileChainColors`` is a function from ``(x, y, width,
height)`` over the whole chain. ``y`` goes up, so ``(0, 0)`` is the bottom
left.

.. autoclass:: lifx_colour.tiles.TileInfo
    :members:

.. autoclass:: lifx_colour.tiles.Rotation
"""
from lifx_colour.hsbk import Color, OFF

from lifx_products import Products, VendorRegistry

from enum import Enum
import math

WIDTH = 8


def java_round(value):
    return int(math.floor(value + 0.5))


class Rotation(Enum):
    """The way a tile is sitting, worked out from its accelerometer"""

    UPRIGHT = 0
    ROTATE_RIGHT = 1
    UPSIDE_DOWN = 2
    ROTATE_LEFT = 3
    FACE_UP = 4
    FACE_DOWN = 5

    @classmethod
    def from_accelerometer(kls, x, y, z):
        abs_x = abs(x)
        abs_y = abs(y)
        abs_z = abs(z)

        if x == -1 and y == -1 and z == -1:
            # Invalid data, assume right-side up.
            return kls.UPRIGHT

        elif abs_x > abs_y and abs_x > abs_z:
            if x > 0:
                return kls.ROTATE_RIGHT
            else:
                return kls.ROTATE_LEFT

        elif abs_z > abs_x and abs_z > abs_y:
            if z > 0:
                return kls.FACE_UP
            else:
                return kls.FACE_DOWN

        else:
            if y > 0:
                return kls.UPSIDE_DOWN
            else:
                return kls.UPRIGHT


class TileInfo:
    """
    What a tile told us about itself in a ``StateDeviceChain``

    ``x_offset`` and ``y_offset`` are the smallest ``user_x`` and ``user_y``
    in the chain and are used to work out where this tile starts in the
    chain's pixels.
    """

    def __init__(
        self,
        *,
        width=WIDTH,
        height=WIDTH,
        user_x=0,
        user_y=0,
        accel_x=0,
        accel_y=0,
        accel_z=0,
        vendor=None,
        product=None,
        version=0,
        firmware_build=0,
        firmware_version=(0, 0),
        x_offset=0,
        y_offset=0,
    ):
        self.width = width
        self.height = height
        self.user_x = user_x
        self.user_y = user_y
        self.accel_x = accel_x
        self.accel_y = accel_y
        self.accel_z = accel_z
        self.vendor = vendor
        self.product = product
        self.version = version
        self.firmware_build = firmware_build
        self.firmware_version = firmware_version
        self.x_offset = x_offset
        self.y_offset = y_offset
        self.rotation = Rotation.from_accelerometer(accel_x, accel_y, accel_z)

    @classmethod
    def from_packet(kls, tile, x_offset=0, y_offset=0):
        """Make a TileInfo from one of the ``tile_devices`` in a StateDeviceChain"""
        vendor = VendorRegistry.choose(tile["device_version_vendor"])
        return kls(
            width=tile["width"],
            height=tile["height"],
            user_x=tile["user_x"],
            user_y=tile["user_y"],
            accel_x=tile["accel_meas_x"],
            accel_y=tile["accel_meas_y"],
            accel_z=tile["accel_meas_z"],
            vendor=vendor,
            product=Products[vendor, tile["device_version_product"]],
            version=tile["device_version_version"],
            # Tiles report their build time in nanoseconds
            firmware_build=int(tile["firmware_build"] / 1e9),
            firmware_version=(tile["firmware_version_major"], tile["firmware_version_minor"]),
            x_offset=x_offset,
            y_offset=y_offset,
        )

    def with_offsets(self, x_offset, y_offset):
        clone = TileInfo.__new__(TileInfo)
        clone.__dict__.update(self.__dict__)
        clone.x_offset = x_offset
        clone.y_offset = y_offset
        return clone

    def min_x(self, x_offset=None):
        if x_offset is None:
            x_offset = self.x_offset
        return java_round((self.user_x - x_offset) * self.width)

    def min_y(self, y_offset=None):
        if y_offset is None:
            y_offset = self.y_offset
        return java_round((self.user_y - y_offset) * self.height)

    def contains(self, x, y):
        min_x = self.min_x()
        min_y = self.min_y()
        return min_x <= x < min_x + self.width and min_y <= y < min_y + self.height

    def rotated(self, x, y):
        """Map a point on an upright tile to where it is on this tile"""
        right = self.width - 1
        top = self.height - 1
        if self.rotation is Rotation.UPSIDE_DOWN:
            return right - x, top - y
        elif self.rotation is Rotation.ROTATE_LEFT:
            return y, top - x
        elif self.rotation is Rotation.ROTATE_RIGHT:
            return right - y, x
        return x, y

    def __repr__(self):
        product = getattr(self.product, "name", self.product)
        return (
            f"<TileInfo {product} (v{self.version}) firmware={self.firmware_version}"
            f" size=({self.width},{self.height}) position=({self.user_x},{self.user_y})"
            f",({self.min_x()},{self.min_y()}) rotation={self.rotation.name}>"
        )


########################
###   TILE
########################


class TileColors:
    kind = None

    def color(self, x, y):
        raise NotImplementedError()

    def shift(self, x, y):
        return ShiftedTile(self, x, y)

    def with_relative_brightness(self, factor):
        return ScaledTile(self, factor)

    def add(self, other, quota):
        return BlendedTile(self, other, quota)

    def as_list(self, width=WIDTH, height=WIDTH):
        """The colours in the order they go over the wire"""
        return [self.color(x, y) for y in reversed(range(height)) for x in range(width)]

    def max_brightness(self):
        return max(c.brightness for c in self.as_list())

    def as_dict(self):
        return {"kind": self.kind, **self.options()}

    def options(self):
        return {}

    def __eq__(self, other):
        return isinstance(other, TileColors) and self.as_dict() == other.as_dict()

    __hash__ = None

    def __repr__(self):
        return f"<TileColors {self.kind}>"


class FixedTile(TileColors):
    kind = "fixed"

    def __init__(self, color):
        self.fixed = color

    def color(self, x, y):
        return self.fixed

    def with_relative_brightness(self, factor):
        return FixedTile(self.fixed.with_relative_brightness(factor))

    def options(self):
        return {"color": self.fixed.as_dict()}


class ExactTile(TileColors):
    """``rows[y][x]`` with anything outside the rows being off"""

    kind = "exact"

    def __init__(self, rows):
        self.rows = [list(row) for row in rows]

    @classmethod
    def from_list(kls, colors, width=WIDTH, height=WIDTH):
        """
        Make from the colours a tile gives us

        The first row on the wire is the top of the tile.
        """
        size = width * height
        colors = list(colors)[:size]
        colors.extend([OFF] * (size - len(colors)))
        rows = [colors[i : i + width] for i in range(0, size, width)]
        return kls(list(reversed(rows)))

    def color(self, x, y):
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return OFF

    def options(self):
        return {"rows": [[c.as_dict() for c in row] for row in self.rows]}


class InterpolatedCornersTile(TileColors):
    kind = "interpolated_corners"

    def __init__(self, top_left, top_right, bottom_left, bottom_right):
        self.top_left = top_left
        self.top_right = top_right
        self.bottom_left = bottom_left
        self.bottom_right = bottom_right

    def color(self, x, y):
        x_quota = x / (WIDTH - 1)
        y_quota = y / (WIDTH - 1)
        top = self.top_left.add(self.top_right, x_quota)
        bottom = self.bottom_left.add(self.bottom_right, x_quota)
        return bottom.add(top, y_quota)

    def options(self):
        return {
            "top_left": self.top_left.as_dict(),
            "top_right": self.top_right.as_dict(),
            "bottom_left": self.bottom_left.as_dict(),
            "bottom_right": self.bottom_right.as_dict(),
        }


class ShiftedTile(TileColors):
    kind = "shifted"

    def __init__(self, base, x, y):
        self.base = base
        self.x = x
        self.y = y

    def color(self, x, y):
        return self.base.color(x - self.x, y - self.y)

    def options(self):
        return {"base": self.base.as_dict(), "x": self.x, "y": self.y}


class ScaledTile(TileColors):
    kind = "scaled"

    def __init__(self, base, factor):
        self.base = base
        self.factor = factor

    def color(self, x, y):
        return self.base.color(x, y).with_relative_brightness(self.factor)

    def options(self):
        return {"base": self.base.as_dict(), "factor": self.factor}


class BlendedTile(TileColors):
    kind = "blended"

    def __init__(self, base, other, quota):
        self.base = base
        self.other = other
        self.quota = quota

    def color(self, x, y):
        return self.base.color(x, y).add(self.other.color(x, y), self.quota)

    def options(self):
        return {"base": self.base.as_dict(), "other": self.other.as_dict(), "quota": self.quota}


class ChainWindow(TileColors):
    """The part of a ``TileChainColors`` that one tile sees"""

    kind = "chain_window"

    def __init__(self, chain, min_x, min_y, total_width, total_height):
        self.chain = chain
        self.min_x = min_x
        self.min_y = min_y
        self.total_width = total_width
        self.total_height = total_height

    def color(self, x, y):
        return self.chain.color(self.min_x + x, self.min_y + y, self.total_width, self.total_height)

    def options(self):
        return {
            "chain": self.chain.as_dict(),
            "min_x": self.min_x,
            "min_y": self.min_y,
            "total_width": self.total_width,
            "total_height": self.total_height,
        }


def oriented(colors, tile_info):
    """Lay out ``colors`` so they look upright on a tile that may be rotated"""
    if tile_info.rotation in (Rotation.UPRIGHT, Rotation.FACE_UP, Rotation.FACE_DOWN):
        return colors

    rows = [[OFF] * tile_info.width for _ in range(tile_info.height)]
    for y in range(tile_info.height):
        for x in range(tile_info.width):
            nx, ny = tile_info.rotated(x, y)
            rows[ny][nx] = colors.color(x, y)
    return ExactTile(rows)


########################
###   CHAIN
########################


class TileChainColors:
    kind = None

    def color(self, x, y, width, height):
        raise NotImplementedError()

    def shift(self, x, y):
        return ShiftedChain(self, x, y)

    def with_relative_brightness(self, factor):
        return ScaledChain(self, factor)

    def add(self, other, quota):
        return BlendedChain(self, other, quota)

    def tile_colors(self, min_x, min_y, total_width, total_height):
        return ChainWindow(self, min_x, min_y, total_width, total_height)

    def max_brightness(self, tile_infos, total_width, total_height):
        return max(
            [
                self.tile_colors(
                    info.min_x(), info.min_y(), total_width, total_height
                ).max_brightness()
                for info in tile_infos
            ],
            default=0,
        )

    def as_dict(self):
        return {"kind": self.kind, **self.options()}

    def options(self):
        return {}

    def __eq__(self, other):
        return isinstance(other, TileChainColors) and self.as_dict() == other.as_dict()

    __hash__ = None

    def __repr__(self):
        return f"<TileChainColors {self.kind}>"


class FixedChain(TileChainColors):
    kind = "fixed"

    def __init__(self, color):
        self.fixed = color

    def color(self, x, y, width, height):
        return self.fixed

    def with_relative_brightness(self, factor):
        return FixedChain(self.fixed.with_relative_brightness(factor))

    def options(self):
        return {"color": self.fixed.as_dict()}


class PerTile(TileChainColors):
    """A ``TileColors`` for each tile in ``tile_infos``"""

    kind = "per_tile"

    def __init__(self, tile_infos, tile_colors):
        self.tile_infos = list(tile_infos)
        self.colors = list(tile_colors)

    def color(self, x, y, width, height):
        for info, colors in zip(self.tile_infos, self.colors):
            if info.contains(x, y):
                return colors.color(x - info.min_x(), y - info.min_y())
        return OFF

    def with_relative_brightness(self, factor):
        return PerTile(self.tile_infos, [c.with_relative_brightness(factor) for c in self.colors])

    def options(self):
        return {
            "tiles": [
                {"min_x": info.min_x(), "min_y": info.min_y(), "colors": colors.as_dict()}
                for info, colors in zip(self.tile_infos, self.colors)
            ]
        }


class InterpolatedCornersChain(TileChainColors):
    kind = "interpolated_corners"

    def __init__(self, top_left, top_right, bottom_left, bottom_right):
        self.top_left = top_left
        self.top_right = top_right
        self.bottom_left = bottom_left
        self.bottom_right = bottom_right

    def color(self, x, y, width, height):
        x_quota = x / (width - 1) if width > 1 else 0
        y_quota = y / (height - 1) if height > 1 else 0
        top = self.top_left.add(self.top_right, x_quota)
        bottom = self.bottom_left.add(self.bottom_right, x_quota)
        return bottom.add(top, y_quota)

    def with_relative_brightness(self, factor):
        return InterpolatedCornersChain(
            self.top_left.with_relative_brightness(factor),
            self.top_right.with_relative_brightness(factor),
            self.bottom_left.with_relative_brightness(factor),
            self.bottom_right.with_relative_brightness(factor),
        )

    def options(self):
        return {
            "top_left": self.top_left.as_dict(),
            "top_right": self.top_right.as_dict(),
            "bottom_left": self.bottom_left.as_dict(),
            "bottom_right": self.bottom_right.as_dict(),
        }


class ShiftedChain(TileChainColors):
    kind = "shifted"

    def __init__(self, base, x, y):
        self.base = base
        self.x = x
        self.y = y

    def color(self, x, y, width, height):
        return self.base.color(x - self.x, y - self.y, width, height)

    def options(self):
        return {"base": self.base.as_dict(), "x": self.x, "y": self.y}


class ScaledChain(TileChainColors):
    kind = "scaled"

    def __init__(self, base, factor):
        self.base = base
        self.factor = factor

    def color(self, x, y, width, height):
        return self.base.color(x, y, width, height).with_relative_brightness(self.factor)

    def options(self):
        return {"base": self.base.as_dict(), "factor": self.factor}


class BlendedChain(TileChainColors):
    kind = "blended"

    def __init__(self, base, other, quota):
        self.base = base
        self.other = other
        self.quota = quota

    def color(self, x, y, width, height):
        return self.base.color(x, y, width, height).add(
            self.other.color(x, y, width, height), self.quota
        )

    def options(self):
        return {"base": self.base.as_dict(), "other": self.other.as_dict(), "quota": self.quota}


OFF_TILE = FixedTile(OFF)
OFF_CHAIN = FixedChain(OFF)

# Other kinds of TileChainColors that chain_from_dict knows how to rebuild
chain_kinds = {}


def register_chain_kind(kls):
    """
    Class decorator for a ``TileChainColors`` defined outside this module.

    ``kls`` must have a ``from_dict`` classmethod that takes what ``as_dict``
    returns.
    """
    chain_kinds[kls.kind] = kls
    return kls


def tile_from_dict(d):
    """Turn the result of ``TileColors.as_dict`` back into a ``TileColors``"""
    kind = d["kind"]
    if kind == "fixed":
        return FixedTile(Color.from_dict(d["color"]))
    elif kind == "exact":
        return ExactTile([[Color.from_dict(c) for c in row] for row in d["rows"]])
    elif kind == "interpolated_corners":
        return InterpolatedCornersTile(*corners_from_dict(d))
    elif kind == "shifted":
        return ShiftedTile(tile_from_dict(d["base"]), d["x"], d["y"])
    elif kind == "scaled":
        return ScaledTile(tile_from_dict(d["base"]), d["factor"])
    elif kind == "blended":
        return BlendedTile(tile_from_dict(d["base"]), tile_from_dict(d["other"]), d["quota"])
    elif kind == "chain_window":
        return ChainWindow(
            chain_from_dict(d["chain"]),
            d["min_x"],
            d["min_y"],
            d["total_width"],
            d["total_height"],
        )
    raise ValueError(f"Unknown kind of tile colors: {kind}")


def chain_from_dict(d):
    """
    Turn the result of ``TileChainColors.as_dict`` back into a
    ``TileChainColors``

    ``PerTile`` only remembers where each tile starts, so the tiles come back
    as full 8x8 tiles at those positions.
    """
    kind = d["kind"]
    if kind == "fixed":
        return FixedChain(Color.from_dict(d["color"]))
    elif kind == "per_tile":
        infos = [TileInfo(user_x=t["min_x"] / WIDTH, user_y=t["min_y"] / WIDTH) for t in d["tiles"]]
        return PerTile(infos, [tile_from_dict(t["colors"]) for t in d["tiles"]])
    elif kind == "interpolated_corners":
        return InterpolatedCornersChain(*corners_from_dict(d))
    elif kind == "shifted":
        return ShiftedChain(chain_from_dict(d["base"]), d["x"], d["y"])
    elif kind == "scaled":
        return ScaledChain(chain_from_dict(d["base"]), d["factor"])
    elif kind == "blended":
        return BlendedChain(chain_from_dict(d["base"]), chain_from_dict(d["other"]), d["quota"])
    elif kind in chain_kinds:
        return chain_kinds[kind].from_dict(d)
    raise ValueError(f"Unknown kind of tile chain colors: {kind}")


def corners_from_dict(d):
    names = ("top_left", "top_right", "bottom_left", "bottom_right")
    return [Color.from_dict(d[name]) for name in names]
