"""
.. lifx_module:: lifx_animation

Animations are a series of colours shown on a device one step at a time.

``lifx_animation.definitions`` and ``lifx_animation.candle`` say what
animations look like. ``lifx_animation.runner`` shows them on a device.

.. code-block:: python

    from lifx_animation import CycleDefinition
    from lifx_colour import RED, GREEN, BLUE

    runner = device.light.animation(CycleDefinition([RED, GREEN, BLUE], cycle_count=2))
    runner.start()
    await runner.wait()
"""
from lifx_animation.definitions import (
    AnimationDefinition,
    CycleDefinition,
    MoveDirection,
    MultizoneMoveDefinition,
    WaveDirection,
    WaveForm,
    WaveColors,
    TileChainWaveDefinition,
)
from lifx_animation.candle import CandleAnimationDefinition, Background
from lifx_animation.runner import AnimationRunner, State

__shortdesc__ = "Animations of colour on lights, strips and tiles"

__all__ = [
    "AnimationDefinition",
    "CycleDefinition",
    "MoveDirection",
    "MultizoneMoveDefinition",
    "WaveDirection",
    "WaveForm",
    "WaveColors",
    "TileChainWaveDefinition",
    "CandleAnimationDefinition",
    "Background",
    "AnimationRunner",
    "State",
]
