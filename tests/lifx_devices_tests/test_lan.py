from lifx_devices.lan import LifxLan, matches

from lifx_transport.fake import FakeDevice, FakeNetwork
from lifx_messages import DeviceMessages
from lifx_app.options import LanOptions

from unittest import mock
import asyncio
import pytest


def lan_for(network):
    return LifxLan(
        LanOptions.FieldSpec().empty_normalise(
            port=network.port,
            broadcast_addresses=["127.0.0.1"],
            source=1234,
            default_timeout=200,
            default_attempts=1,
            discovery_timeout=200,
            filter_timeout=200,
        )
    )


@pytest.fixture()
async def network():
    devices = [
        FakeDevice("d073d5000001", 27, label="kitchen"),
        FakeDevice("d073d5000002", 27, label="kitchen lamp"),
        FakeDevice("d073d5000003", 89, label="switch"),
    ]
    async with FakeNetwork(devices) as network:
        yield network


class TestMatches:
    async def test_it_takes_normal_and_async_functions(self):
        async def yes(device):
            return True

        assert await matches(yes, None)
        assert await matches(lambda device: 1, None)
        assert not await matches(lambda device: None, None)


class TestDiscovery:
    async def test_it_finds_and_upgrades_devices(self, network):
        lan = lan_for(network)
        found = await lan.retrieve_device_information()

        assert sorted(device.serial for device in found) == [
            "d073d5000001",
            "d073d5000002",
            "d073d5000003",
        ]
        assert len(lan.devices) == 3
        assert sorted(light.serial for light in lan.lights) == ["d073d5000001", "d073d5000002"]

        switch = [device for device in lan.devices if device.serial == "d073d5000003"][0]
        assert switch.kind == "Device"
        assert switch.port == network.port
        assert switch.address == "127.0.0.1"

    async def test_it_stops_at_the_number_of_devices_asked_for(self, network):
        lan = lan_for(network)
        found = await lan.retrieve_device_information(num_devices=1, timeout=2000)
        assert len(found) == 1
        assert len(lan.devices) == 1

    async def test_it_only_replaces_what_matches_the_filter(self, network):
        lan = lan_for(network)
        await lan.retrieve_device_information()
        before = {device.serial: device for device in lan.devices}

        found = await lan.retrieve_device_information(
            filter=lambda device: device.serial == "d073d5000002"
        )
        assert [device.serial for device in found] == ["d073d5000002"]

        after = {device.serial: device for device in lan.devices}
        assert sorted(after) == sorted(before)
        assert after["d073d5000001"] is before["d073d5000001"]
        assert after["d073d5000002"] is not before["d073d5000002"]

    async def test_it_keeps_running_animations_when_devices_are_found_again(self, network):
        lan = lan_for(network)
        await lan.retrieve_device_information()

        class Animation:
            device = None
            light = None

        animation = Animation()
        old = [light for light in lan.lights if light.serial == "d073d5000001"][0]
        old.light.running_animation = animation

        await lan.retrieve_device_information()
        new = [light for light in lan.lights if light.serial == "d073d5000001"][0]

        assert new is not old
        assert new.light.running_animation is animation
        assert animation.device is new
        assert animation.light is new.light

    async def test_it_skips_devices_that_stop_answering(self, network):
        lan = lan_for(network)
        with network.device("d073d5000002").no_replies_for(DeviceMessages.GetVersion):
            found = await lan.retrieve_device_information()
        assert sorted(device.serial for device in found) == ["d073d5000001", "d073d5000003"]

    async def test_it_upgrades_devices_at_the_same_time(self, network):
        lan = lan_for(network)
        original = lan.discovered
        started = []
        everyone = asyncio.Event()

        async def discovered(pkt):
            started.append(pkt.serial)
            if len(started) == 3:
                everyone.set()
            await asyncio.wait_for(everyone.wait(), timeout=1)
            return await original(pkt)

        with mock.patch.object(lan, "discovered", discovered):
            found = await lan.retrieve_device_information(timeout=500)

        assert sorted(started) == ["d073d5000001", "d073d5000002", "d073d5000003"]
        assert len(found) == 3

    async def test_it_finds_nothing_on_an_empty_network(self):
        async with FakeNetwork([]) as network:
            lan = lan_for(network)
            assert await lan.retrieve_device_information() == []
            assert await lan.get_devices() == []


class TestLookingUp:
    async def test_it_only_searches_for_devices_when_it_knows_none(self, network):
        lan = lan_for(network)
        assert len(await lan.get_devices()) == 3

        first = network.device("d073d5000001")
        sent = len(first.received)
        assert len(await lan.get_devices()) == 3
        assert len(first.received) == sent

    async def test_it_finds_devices_by_mac(self, network):
        lan = lan_for(network)
        device = await lan.get_device_by_mac("d0:73:d5:00:00:03")
        assert device.serial == "d073d5000003"
        assert await lan.get_device_by_mac("D0:73:D5:00:00:09") is None

    async def test_it_finds_devices_by_filter(self, network):
        lan = lan_for(network)
        found = await lan.get_devices_by_filter(lambda device: device.product.cap.is_light)
        assert sorted(device.serial for device in found) == ["d073d5000001", "d073d5000002"]

    async def test_it_finds_a_light_by_label(self, network):
        lan = lan_for(network)
        light = await lan.get_light_by_label("kitchen lamp")
        assert light.serial == "d073d5000002"

    async def test_it_matches_the_whole_label(self, network):
        lan = lan_for(network)
        light = await lan.get_light_by_label("kitchen")
        assert light.serial == "d073d5000001"

        assert await lan.get_light_by_label("kitch") is None
        assert await lan.get_light_by_label("switch") is None

    async def test_it_uses_lights_it_already_knows(self, network):
        lan = lan_for(network)
        await lan.retrieve_device_information()
        known = [light for light in lan.lights if light.serial == "d073d5000002"][0]

        assert await lan.get_light_by_mac("d0:73:d5:00:00:02") is known

    async def test_it_searches_for_a_light_it_doesnt_know(self, network):
        lan = lan_for(network)
        light = await lan.get_light_by_mac("D0:73:D5:00:00:01")
        assert light.serial == "d073d5000001"
        assert light.light is not None
        assert [device.serial for device in lan.devices] == ["d073d5000001"]

    async def test_it_always_searches_for_lights(self, network):
        lan = lan_for(network)
        assert len(await lan.get_lights()) == 2

        first = network.device("d073d5000001")
        sent = len(first.received)
        assert len(await lan.get_lights()) == 2
        assert len(first.received) > sent
