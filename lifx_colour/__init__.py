"""
.. lifx_module:: lifx_colour

This module knows about colour.

``lifx_colour.hsbk`` has the ``Color`` of a single light,
``lifx_colour.zones`` has colour functions for strips and
``lifx_colour.tiles`` has colour functions for tiles and chains of tiles.

.. code-block:: python

    from lifx_colour import Color, RED, BLUE
    from lifx_colour import zones

    gradient = zones.Interpolated([RED, BLUE])
    colors = gradient.shift(3).with_relative_brightness(0.5).as_list(16)
"""
from lifx_colour.hsbk import (
    Color,
    RGBK,
    OFF,
    WHITE,
    WARM_WHITE,
    RED,
    YELLOW,
    GREEN,
    CYAN,
    BLUE,
    MAGENTA,
    WAKEUP_CYCLE,
)
from lifx_colour.zones import MultizoneColors
from lifx_colour.tiles import TileColors, TileChainColors, TileInfo, Rotation

__shortdesc__ = "Colour for lights, strips and tiles"

__all__ = [
    "Color",
    "RGBK",
    "OFF",
    "WHITE",
    "WARM_WHITE",
    "RED",
    "YELLOW",
    "GREEN",
    "CYAN",
    "BLUE",
    "MAGENTA",
    "WAKEUP_CYCLE",
    "MultizoneColors",
    "TileColors",
    "TileChainColors",
    "TileInfo",
    "Rotation",
]
