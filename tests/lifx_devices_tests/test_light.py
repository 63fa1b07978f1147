from lifx_devices.device import upgrade
from lifx_devices.errors import IncapableDevice
from lifx_devices.power import Power

from lifx_transport.fake import FakeDevice
from lifx_messages import LightMessages, enums
from lifx_colour import Color, RED, BLUE

from delfick_project.errors_pytest import assertRaises
import asyncio
import pytest


@pytest.fixture()
async def light(fake_light, device_for):
    device = await upgrade(device_for(fake_light))
    yield device.light


class TestLightState:
    async def test_it_gets_power(self, light, fake_light):
        assert await light.get_power() is Power.ON
        assert await light.get_power_level() == 65535

        fake_light.power = 30000
        assert await light.get_power() is Power.UNKNOWN

    async def test_it_gets_the_color(self, light):
        assert await light.get_color() == Color(0, 65535, 65535, 3500)

        state = await light.get_state()
        assert state.power is Power.ON
        assert state.label == "kitchen"

    async def test_it_only_does_infrared_on_infrared_lights(self, light, device_for):
        with assertRaises(IncapableDevice):
            await light.get_infrared()

        async with FakeDevice("d073d5000002", 29, infrared=300) as fake:
            device = await upgrade(device_for(fake))
            assert await device.light.get_infrared() == 300
            await device.light.set_infrared(600)
            assert fake.infrared == 600

            found = dict(await device.light.volatile_information())
            assert found["Infrared Brightness"] == 600


class TestLightChanges:
    async def test_it_sets_power_with_a_duration(self, light, fake_light):
        await light.set_power(False, duration=500)
        assert fake_light.power == 0
        assert fake_light.received_of(LightMessages.SetLightPower)[-1].duration == 500

        await light.set_power(Power.ON)
        assert fake_light.power == 65535

    async def test_it_sets_color(self, light, fake_light):
        await light.set_color(BLUE, duration=100)
        assert Color(*fake_light.color) == BLUE
        assert fake_light.received_of(LightMessages.SetColor)[-1].duration == 100

    async def test_it_waits_for_the_duration_if_asked(self, light):
        loop = asyncio.get_event_loop()
        start = loop.time()
        await light.set_color(BLUE, duration=300, wait=True)
        assert loop.time() - start >= 0.3

    async def test_it_sets_waveforms(self, light, fake_light):
        await light.set_waveform(RED, 100, 2, waveform=enums.Waveform.SINE, transient=False)
        pkt = fake_light.received_of(LightMessages.SetWaveform)[-1]
        assert pkt.period == 100
        assert pkt.cycles == 2
        assert pkt.waveform is enums.Waveform.SINE
        assert not pkt.transient
        assert Color(*fake_light.color) == RED

    async def test_it_clamps_cycles(self, light, fake_light):
        await light.set_waveform(RED, 100, -5)
        assert fake_light.received_of(LightMessages.SetWaveform)[-1].cycles == 0

    async def test_it_pulses_forever_with_no_cycles(self, light, fake_light):
        await light.pulse(BLUE, 100, 0)
        pkt = fake_light.received_of(LightMessages.SetWaveform)[-1]
        assert pkt.transient
        assert pkt.cycles > 1e38
        assert Color(*fake_light.color) == Color(0, 65535, 65535, 3500)

    async def test_it_only_sets_given_parts_with_optional_waveforms(self, light, fake_light):
        await light.set_waveform_optional(brightness=0.5, kelvin=2500)
        pkt = fake_light.received_of(LightMessages.SetWaveformOptional)[-1]
        assert (pkt.set_hue, pkt.set_saturation, pkt.set_brightness, pkt.set_kelvin) == (
            0,
            0,
            1,
            1,
        )
        assert pkt.kelvin == 2500
        assert fake_light.color == (0, 65535, 32768, 2500)

    async def test_it_has_defaults_for_parts_not_given(self, light, fake_light):
        await light.set_waveform_optional(period=0, cycles=0, waveform=enums.Waveform.PULSE)
        pkt = fake_light.received_of(LightMessages.SetWaveformOptional)[-1]
        assert pkt.hue == 32768
        assert pkt.kelvin == 4000
        assert not any([pkt.set_hue, pkt.set_saturation, pkt.set_brightness, pkt.set_kelvin])
        assert fake_light.color == (0, 65535, 65535, 3500)


class TestWaitForColor:
    async def test_it_returns_when_the_color_matches(self, light):
        assert await light.wait_for_color(Color(0, 65535, 65535, 3500), timeout=1000)

    async def test_it_can_use_a_function(self, light):
        assert await light.wait_for_color(lambda color: color.brightness > 0, timeout=1000)

    async def test_it_gives_up_after_the_timeout(self, light):
        assert not await light.wait_for_color(BLUE, timeout=300)
