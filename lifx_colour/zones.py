"""
Colours for a strip of zones.

A ``MultizoneColors`` is a function from ``(zone, count)`` to a ``Color``.
Nothing is evaluated until you ask for a zone, so composing them is cheap.

.. autoclass:: lifx_colour.zones.MultizoneColors
    :members:

The variants are ``Fixed``, ``Exact`` and ``Interpolated`` and the
compositions ``Shifted``, ``Scaled``, ``Blended``, ``Stretched`` and
``Mirrored``. Every one of them knows how to ``as_dict`` itself and
``from_dict`` turns that back into the same structure.
"""
from lifx_colour.hsbk import Color, OFF

import math


class MultizoneColors:
    kind = None

    def color(self, zone, count):
        raise NotImplementedError()

    def shift(self, amount):
        return Shifted(self, amount)

    def with_relative_brightness(self, factor):
        return Scaled(self, factor)

    def add(self, other, quota):
        return Blended(self, other, quota)

    def stretch(self, factor):
        return Stretched(self, factor)

    def mirror(self):
        return Mirrored(self)

    def as_list(self, count):
        return [self.color(zone, count) for zone in range(count)]

    def max_brightness(self, count):
        return max([c.brightness for c in self.as_list(count)], default=0)

    def as_dict(self):
        return {"kind": self.kind, **self.options()}

    def options(self):
        return {}

    def __eq__(self, other):
        return isinstance(other, MultizoneColors) and self.as_dict() == other.as_dict()

    __hash__ = None

    def __repr__(self):
        return f"<MultizoneColors {self.as_dict()}>"


class Fixed(MultizoneColors):
    kind = "fixed"

    def __init__(self, color):
        self.fixed = color

    def color(self, zone, count):
        return self.fixed

    def with_relative_brightness(self, factor):
        return Fixed(self.fixed.with_relative_brightness(factor))

    def options(self):
        return {"color": self.fixed.as_dict()}


class Exact(MultizoneColors):
    """The colour for each zone, with zones past the end being off"""

    kind = "exact"

    def __init__(self, colors):
        self.colors = list(colors)

    def color(self, zone, count):
        if 0 <= zone < len(self.colors):
            return self.colors[zone]
        return OFF

    def options(self):
        return {"colors": [c.as_dict() for c in self.colors]}


class Interpolated(MultizoneColors):
    """
    Spread ``colors`` over however many zones there are

    When ``cyclic`` is True the last colour blends back into the first,
    otherwise the first and last colours sit on the first and last zones.
    """

    kind = "interpolated"

    def __init__(self, colors, cyclic=False):
        self.colors = list(colors)
        self.cyclic = cyclic

    @classmethod
    def from_colors(kls, colors, count, cyclic=False):
        """
        Pick ``count`` colours spread evenly through ``colors``

        This is an approximation of the gradient that may have made those
        colours.
        """
        colors = list(colors)
        if count <= 0 or not colors:
            return kls([], cyclic=cyclic)

        if count >= len(colors):
            return kls(colors, cyclic=cyclic)

        if count == 1:
            return kls([colors[0]], cyclic=cyclic)

        if cyclic:
            indexes = [i * len(colors) // count for i in range(count)]
        else:
            indexes = [
                int(math.floor(i * (len(colors) - 1) / (count - 1) + 0.5)) for i in range(count)
            ]
        return kls([colors[i] for i in indexes], cyclic=cyclic)

    def color(self, zone, count):
        colors = self.colors
        if len(colors) <= 1:
            return colors[0] if colors else OFF

        index = zone % count
        if len(colors) >= count:
            return colors[index]

        if self.cyclic:
            relative = index * len(colors) / count
            if relative >= len(colors) - 1:
                return colors[-1].add(colors[0], relative % 1)
        else:
            relative = index * (len(colors) - 1) / (count - 1)
            if relative >= len(colors) - 1:
                return colors[-1]

        below = int(math.floor(relative))
        return colors[below].add(colors[below + 1], relative % 1)

    def options(self):
        return {"colors": [c.as_dict() for c in self.colors], "cyclic": self.cyclic}


class Shifted(MultizoneColors):
    """Move the colours ``amount`` zones up the strip, wrapping at the end"""

    kind = "shifted"

    def __init__(self, base, amount):
        self.base = base
        self.amount = amount

    def color(self, zone, count):
        return self.base.color((zone - self.amount) % count, count)

    def options(self):
        return {"base": self.base.as_dict(), "amount": self.amount}


class Scaled(MultizoneColors):
    kind = "scaled"

    def __init__(self, base, factor):
        self.base = base
        self.factor = factor

    def color(self, zone, count):
        return self.base.color(zone, count).with_relative_brightness(self.factor)

    def options(self):
        return {"base": self.base.as_dict(), "factor": self.factor}


class Blended(MultizoneColors):
    kind = "blended"

    def __init__(self, base, other, quota):
        self.base = base
        self.other = other
        self.quota = quota

    def color(self, zone, count):
        return self.base.color(zone, count).add(self.other.color(zone, count), self.quota)

    def options(self):
        return {"base": self.base.as_dict(), "other": self.other.as_dict(), "quota": self.quota}


class Stretched(MultizoneColors):
    """Make every colour cover ``factor`` zones"""

    kind = "stretched"

    def __init__(self, base, factor):
        if factor <= 0:
            raise ValueError(f"Stretch factor must be positive, got {factor}")
        self.base = base
        self.factor = factor

    def color(self, zone, count):
        return self.base.color(
            int(math.floor(zone / self.factor)), int(math.ceil(count / self.factor))
        )

    def options(self):
        return {"base": self.base.as_dict(), "factor": self.factor}


class Mirrored(MultizoneColors):
    """
    Fold the strip in half so the first zone of ``base`` is in the middle and
    both ends show the end of ``base``
    """

    kind = "mirrored"

    def __init__(self, base):
        self.base = base

    def color(self, zone, count):
        half = (count + 1) // 2
        if zone < half:
            index = half - 1 - zone
        else:
            index = zone - count // 2
        return self.base.color(index, half)

    def options(self):
        return {"base": self.base.as_dict()}


OFF_ZONES = Fixed(OFF)


def from_dict(d):
    """Turn the result of ``as_dict`` back into ``MultizoneColors``"""
    kind = d["kind"]
    if kind == "fixed":
        return Fixed(Color.from_dict(d["color"]))
    elif kind == "exact":
        return Exact([Color.from_dict(c) for c in d["colors"]])
    elif kind == "interpolated":
        return Interpolated([Color.from_dict(c) for c in d["colors"]], cyclic=d["cyclic"])
    elif kind == "shifted":
        return Shifted(from_dict(d["base"]), d["amount"])
    elif kind == "scaled":
        return Scaled(from_dict(d["base"]), d["factor"])
    elif kind == "blended":
        return Blended(from_dict(d["base"]), from_dict(d["other"]), d["quota"])
    elif kind == "stretched":
        return Stretched(from_dict(d["base"]), d["factor"])
    elif kind == "mirrored":
        return Mirrored(from_dict(d["base"]))
    raise ValueError(f"Unknown kind of multizone colors: {kind}")
