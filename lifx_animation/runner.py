"""
Running an ``AnimationDefinition`` on a device.

.. code-block:: python

    runner = AnimationRunner(
        device,
        CycleDefinition([RED, GREEN, BLUE]),
        end_color=OFF,
        on_animation_end=lambda interrupted: print("finished", interrupted),
    )
    runner.start()
    ...
    await runner.end(wait=True)

The animation runs in its own task. Ending it cancels that task, so it stops
even in the middle of waiting for the next step.

Only one animation runs on a light at a time. Starting an animation stops the
one that was already running, and the new animation waits for the old one to
finish if its definition asks for that.

When the animation finishes we leave the light as ``end_color`` says:

* An ``end_color`` with no brightness turns the light off
* Any other ``end_color`` is shown on the light
* Without an ``end_color`` a light is left at whatever step it got to. If we
  were stopped part way through a step we stop the light changing, or put
  back its power if the step was changing the power.

Failing to talk to the light is retried after waiting for each of
``error_waits`` seconds in turn. After that we give up and ``on_exception``
is called with the error.
"""
from lifx_transport import NoResponse, FailedToSend
from lifx_messages import enums
from lifx_colour.zones import MultizoneColors
from lifx_colour.tiles import TileChainColors

from lifx_app.errors import ProgrammerError
from lifx_app.helpers import lc, async_as_background

from enum import Enum
import logging
import asyncio
import time

log = logging.getLogger("lifx_animation.runner")

MAX_LEVEL = 65535

# Errors from talking to a device that are worth trying again
IO_ERRORS = (NoResponse, FailedToSend, OSError)


class State(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"


class AnimationRunner:
    error_waits = (1, 2, 5, 10, 10, 10)
    restore_transition = 200

    def __init__(
        self,
        device,
        definition,
        end_color=None,
        end_transition=200,
        brightness=1,
        on_exception=None,
        on_animation_end=None,
    ):
        self.device = device
        self.light = device.require("light")
        self.definition = definition
        self.end_color = end_color
        self.end_transition = max(end_transition, 0)
        self.brightness = max(brightness, 0)
        self.on_exception = on_exception
        self.on_animation_end = on_animation_end

        self.lc = lc.using(serial=device.serial)

        self.task = None
        self.ended = False
        self.state = State.IDLE
        self.interrupted = False
        self.power_changed = False

    def __repr__(self):
        return f"<AnimationRunner {self.device.serial}: {self.state.name}>"

    ########################
    ###   CONTROL
    ########################

    def start(self):
        """Stop whatever animation the light is running and start this one"""
        if self.task is not None:
            raise ProgrammerError("An animation can only be started once")

        previous = self.light.running_animation
        if previous is not None and previous is not self:
            previous.interrupt()

        self.light.running_animation = self
        self.state = State.RUNNING
        self.task = async_as_background(
            self.run(previous), name=f"animation for {self.device.serial}"
        )
        self.task.add_done_callback(self.task_done)
        return self

    def interrupt(self):
        """Tell the animation to stop without waiting for it to do so"""
        if self.task is not None and not self.task.done():
            self.interrupted = True
            self.state = State.STOPPING
            self.task.cancel()

    async def end(self, wait=False):
        self.interrupt()
        if wait:
            await self.wait()

    async def wait(self):
        """Wait for the animation to finish"""
        if self.task is not None:
            await asyncio.wait([self.task])

    ########################
    ###   RUNNING
    ########################

    async def run(self, previous):
        try:
            if previous is not None and self.definition.wait_for_previous_animation_end():
                await previous.wait()
            await self.animate()
        except asyncio.CancelledError:
            self.interrupted = True
        except IO_ERRORS as error:
            self.failed(error)

        self.state = State.STOPPING

        try:
            await self.finish_light()
        except IO_ERRORS as error:
            self.failed(error)

        self.finished()

    async def animate(self):
        n = 0
        previous_color = None

        while self.state is State.RUNNING:
            color = self.definition.color(n)
            if color is None:
                return

            start = self.definition.start_time(n)
            if start is None:
                start = time.time()
            elif start > time.time():
                await asyncio.sleep(start - time.time())

            duration = max(self.definition.duration(n), 0)

            if n == 0:
                was_off = await self.light_is_off()
            else:
                was_off = self.is_off(previous_color)

            await self.retrying(
                self.step, color.with_relative_brightness(self.brightness), duration, was_off
            )

            previous_color = color
            await asyncio.sleep(max(0, duration / 1000 + start - time.time()))
            n += 1

    async def step(self, color, duration, was_off):
        if was_off:
            await self.write(color, 0)
            await self.light.set_power(True, duration)
            self.power_changed = True
        elif self.is_off(color):
            await self.light.set_power(False, duration)
            self.power_changed = True
        else:
            await self.write(color, duration)
            self.power_changed = False

    async def retrying(self, func, *args):
        failures = 0
        while True:
            try:
                return await func(*args)
            except IO_ERRORS as error:
                if failures >= len(self.error_waits):
                    raise

                wait = self.error_waits[failures]
                failures += 1
                log.warning(self.lc("Animation step failed", error=error, retry_in=wait))
                await asyncio.sleep(wait)

    async def finish_light(self):
        end_color = self.end_color

        if end_color is None:
            if not self.interrupted:
                return

            if self.power_changed:
                await self.restore()
            else:
                # The same waveform with nothing set stops any transition in progress
                await self.light.set_waveform_optional(
                    period=0, cycles=0, waveform=enums.Waveform.PULSE, transient=False
                )

        elif self.is_off(end_color):
            await self.light.set_power(False, self.end_transition, wait=True)

        else:
            await self.write(end_color, self.end_transition)
            await asyncio.sleep(self.end_transition / 1000)

    async def restore(self):
        """Put back power and colour after being stopped part way through changing power"""
        factor = (await self.light.get_power_level()) / MAX_LEVEL

        if self.device.multizone is not None:
            colors = await self.device.multizone.get_colors()
            await self.device.multizone.set_colors(
                colors.with_relative_brightness(factor), self.restore_transition
            )
        elif self.device.matrix is None:
            color = await self.light.get_color()
            await self.light.set_color(
                color.with_relative_brightness(factor), self.restore_transition
            )

        await self.light.set_power(True, self.restore_transition)

    def failed(self, error):
        log.error(self.lc("Animation failed", error=error))
        if self.on_exception is not None:
            self.on_exception(error)

    def finished(self):
        if self.ended:
            return
        self.ended = True

        self.state = State.IDLE
        if self.light.running_animation is self:
            self.light.running_animation = None

        if self.on_animation_end is not None:
            self.on_animation_end(self.interrupted)

    def task_done(self, task):
        # Covers being cancelled before the task got a chance to run
        if task.cancelled():
            self.interrupted = True
        self.finished()

    ########################
    ###   COLOURS
    ########################

    async def light_is_off(self):
        try:
            return (await self.light.get_power()).is_off
        except IO_ERRORS as error:
            log.warning(self.lc("Couldn't find out if the light is on", error=error))
            return False

    def is_off(self, color):
        if isinstance(color, MultizoneColors):
            return color.max_brightness(self.device.require("multizone").zone_count) == 0

        elif isinstance(color, TileChainColors):
            matrix = self.device.require("matrix")
            return (
                color.max_brightness(matrix.tile_info, matrix.total_width, matrix.total_height)
                == 0
            )

        return color.is_off

    async def write(self, color, duration):
        if isinstance(color, MultizoneColors):
            await self.device.require("multizone").set_colors(color, duration)
        elif isinstance(color, TileChainColors):
            await self.device.require("matrix").set_colors(color, duration)
        else:
            await self.light.set_color(color, duration)
