"""
What a device can do when it's a light.

This is reached with ``device.light`` on an upgraded device.

.. code-block:: python

    light = device.require("light")

    await light.set_power(True, duration=500)
    await light.set_color(Color.from_hsbk(120, 1, 0.5, 3500), duration=1000, wait=True)
    await light.pulse(RED, period=500, cycles=3, waveform=Waveform.SINE)

    runner = light.cycle(RED, GREEN, BLUE)
    runner.definition.set_cycle_duration(6000)
    runner.start()
    ...
    await light.end_animation(wait=True)
"""
from lifx_devices.errors import IncapableDevice
from lifx_devices.power import Power, level_for

from lifx_animation.definitions import CycleDefinition
from lifx_animation.runner import AnimationRunner

from lifx_messages import LightMessages, enums
from lifx_colour.hsbk import Color, WAKEUP_CYCLE

from collections import namedtuple
import asyncio

# The largest number of cycles a waveform can be told to do
FLOAT_MAX = 3.4028234663852886e38

LightState = namedtuple("LightState", ["color", "power", "label"])


class Light:
    def __init__(self, device):
        self.device = device
        self.running_animation = None

    def __repr__(self):
        return f"<Light {self.device.serial}>"

    @property
    def has_color(self):
        return self.device.product.cap.has_color

    ########################
    ###   STATE
    ########################

    async def get_power_level(self):
        return (await self.device.request(LightMessages.GetLightPower())).level

    async def get_power(self):
        return Power.from_level(await self.get_power_level())

    async def get_state(self):
        pkt = await self.device.request(LightMessages.GetColor())
        color = Color(pkt.hue, pkt.saturation, pkt.brightness, pkt.kelvin)
        return LightState(color, Power.from_level(pkt.power), pkt.label)

    async def get_color(self):
        return (await self.get_state()).color

    async def get_infrared(self):
        self.require_infrared()
        return (await self.device.request(LightMessages.GetInfrared())).brightness

    async def set_infrared(self, brightness):
        self.require_infrared()
        await self.device.request(LightMessages.SetInfrared(brightness=brightness))

    def require_infrared(self):
        if not self.device.product.cap.has_ir:
            raise IncapableDevice(
                "Device has no infrared", serial=self.device.serial, product=self.device.product
            )

    async def volatile_information(self):
        """Name and value of the light specific facts for ``full_information``"""
        found = []
        if self.device.product.cap.has_ir:
            found.append(("Infrared Brightness", await self.get_infrared()))
        found.append(("Color", await self.get_color()))
        return found

    ########################
    ###   CHANGING
    ########################

    async def set_power(self, status, duration=0, wait=False):
        msg = LightMessages.SetLightPower(level=level_for(status), duration=duration)
        await self.device.request(msg)
        if wait:
            await asyncio.sleep(duration / 1000)

    async def set_color(self, color, duration=0, wait=False):
        msg = LightMessages.SetColor(duration=duration, **color.as_dict())
        await self.device.request(msg)
        if wait:
            await asyncio.sleep(duration / 1000)

    async def set_waveform(
        self,
        color,
        period,
        cycles,
        waveform=enums.Waveform.SAW,
        transient=False,
        skew_ratio=0.5,
        wait=False,
    ):
        cycles = max(0, min(FLOAT_MAX, cycles))
        msg = LightMessages.SetWaveform(
            transient=1 if transient else 0,
            period=period,
            cycles=cycles,
            skew_ratio=skew_ratio,
            waveform=waveform,
            **color.as_dict(),
        )
        await self.device.request(msg)
        if wait:
            await asyncio.sleep(period * cycles / 1000)

    async def pulse(self, color, period, cycles, waveform=enums.Waveform.SAW):
        """
        Go to color and back ``cycles`` times, waiting until that's done.

        Zero or fewer cycles means do it until told otherwise and return
        straight away.
        """
        await self.set_waveform(
            color,
            period,
            FLOAT_MAX if cycles <= 0 else cycles,
            waveform=waveform,
            transient=True,
            wait=cycles > 0,
        )

    async def set_waveform_optional(
        self,
        hue=None,
        saturation=None,
        brightness=None,
        kelvin=None,
        period=0,
        cycles=1,
        waveform=enums.Waveform.SAW,
        transient=False,
        skew_ratio=0.5,
        wait=False,
    ):
        """
        A waveform that only changes the parts of the colour that are given.

        ``hue`` is in degrees, ``saturation`` and ``brightness`` are between
        0 and 1.
        """
        cycles = max(0, min(FLOAT_MAX, cycles))
        color = Color.from_hsbk(
            180 if hue is None else hue,
            1 if saturation is None else saturation,
            1 if brightness is None else brightness,
            4000 if kelvin is None else kelvin,
        )
        msg = LightMessages.SetWaveformOptional(
            transient=1 if transient else 0,
            **color.as_dict(),
            period=period,
            cycles=cycles,
            skew_ratio=skew_ratio,
            waveform=waveform,
            set_hue=0 if hue is None else 1,
            set_saturation=0 if saturation is None else 1,
            set_brightness=0 if brightness is None else 1,
            set_kelvin=0 if kelvin is None else 1,
        )
        await self.device.request(msg)
        if wait:
            await asyncio.sleep(period * cycles / 1000)

    async def wait_for_color(self, wanted, timeout=-1):
        """
        Keep looking at the colour of the light until it matches wanted.

        ``wanted`` is either a ``Color`` or a function that takes in a
        ``Color`` and says whether it matches. ``timeout`` is in milliseconds
        and a negative timeout means wait forever.

        Return whether we found a match.
        """
        if isinstance(wanted, Color):
            if self.has_color:
                matches = wanted.is_similar
            else:
                matches = wanted.is_similar_black_white
        else:
            matches = wanted

        loop = asyncio.get_event_loop()
        start = loop.time()

        while True:
            if matches(await self.get_color()):
                return True
            if timeout >= 0 and (loop.time() - start) * 1000 >= timeout:
                return False
            await asyncio.sleep(0.2)

    ########################
    ###   ANIMATION
    ########################

    def animation(self, definition, **kwargs):
        """Return an ``AnimationRunner`` for this light. Call ``start()`` on it to begin"""
        return AnimationRunner(self.device, definition, **kwargs)

    def cycle(self, *colors, **kwargs):
        """Return an ``AnimationRunner`` that goes through these colours"""
        return self.animation(CycleDefinition(colors), **kwargs)

    def wakeup(self, duration, callback=None):
        """Slowly go from dark to bright over ``duration`` milliseconds"""
        definition = CycleDefinition(WAKEUP_CYCLE, cycle_count=1, end_with_last=True)
        definition.set_cycle_duration(duration)
        return self.animation(definition, on_animation_end=callback).start()

    async def end_animation(self, wait=False):
        if self.running_animation is not None:
            animation = self.running_animation
            self.running_animation = None
            await animation.end(wait=wait)

    async def wait_for_animation_end(self):
        if self.running_animation is not None:
            await self.running_animation.wait()
            self.running_animation = None
