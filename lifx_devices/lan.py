"""
Finding devices on the network and remembering them.

.. code-block:: python

    from lifx_devices.lan import LifxLan

    lan = LifxLan()
    await lan.retrieve_device_information()

    for light in lan.lights:
        await light.light.set_power(True)

    kitchen = await lan.get_light_by_label("kitchen.*")

Filters are functions that take in a ``Device`` and return whether it
matches. They may be normal functions or async functions.

Broadcast addresses are found once when a ``LifxLan`` is made, unless they
are given in the options.
"""
from lifx_devices.device import Device, upgrade

from lifx_transport import (
    Connection,
    RetryPolicy,
    NoResponse,
    FailedToSend,
    make_source,
    find_broadcast_addresses,
)
from lifx_messages import DiscoveryMessages, enums

from lifx_app.options import LanOptions
from lifx_app.helpers import lc, cancel_futures_and_wait

import logging
import asyncio
import inspect
import re

log = logging.getLogger("lifx_devices.lan")


async def matches(f, device):
    result = f(device)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


def is_light(device):
    return device.light is not None


class LifxLan:
    def __init__(self, options=None):
        if options is None:
            options = LanOptions.FieldSpec().empty_normalise()
        self.options = options

        if options.broadcast_addresses is not None:
            broadcast_addresses = list(options.broadcast_addresses)
        else:
            broadcast_addresses = find_broadcast_addresses().or_default()

        self.source = make_source() if options.source is None else options.source
        self.network = Connection(
            self.source, port=options.port, broadcast_addresses=broadcast_addresses
        )

        self.devices = []

    def __repr__(self):
        return f"<LifxLan {len(self.devices)} devices>"

    @property
    def lights(self):
        return [device for device in self.devices if is_light(device)]

    ########################
    ###   DISCOVERY
    ########################

    async def retrieve_device_information(self, num_devices=None, filter=None, timeout=None):
        """
        Broadcast a GetService and return the devices that answered.

        Every device that answers is asked what it is and upgraded. Devices
        are upgraded at the same time as each other. We stop once
        ``num_devices`` have answered, or when we run out of time if that is
        None.

        Without a filter the devices we knew about are replaced by what we
        found. With a filter only the devices we knew about that match the
        filter are replaced.
        """
        if timeout is None:
            timeout = self.options.discovery_timeout

        policy = RetryPolicy.create(
            attempts=self.options.default_attempts, timeout=timeout, expected=num_devices
        )

        upgrades = {}

        async def accept(pkt):
            if pkt.service is not enums.Services.UDP:
                return False

            if pkt.serial not in upgrades:
                upgrades[pkt.serial] = asyncio.ensure_future(self.discovered(pkt))

            device = await asyncio.shield(upgrades[pkt.serial])
            if device is None:
                return False

            return filter is None or await matches(filter, device)

        try:
            replies = await self.network.broadcast_with_response(
                DiscoveryMessages.GetService(), policy, accept=accept
            )
        finally:
            await cancel_futures_and_wait(*upgrades.values())
        log.info(lc(f"Found {len(replies)} devices"))

        found = [upgrades[pkt.serial].result() for pkt in replies]

        if filter is None:
            previous = self.devices
            self.devices = []
        else:
            previous = []
            for device in self.devices:
                if await matches(filter, device):
                    previous.append(device)
            self.devices = [device for device in self.devices if device not in previous]

        for device in found:
            self.carry_animation(previous, device)
            self.devices.append(device)

        return found

    async def discovered(self, pkt):
        """Make an upgraded Device from a StateService, or None if it doesn't talk to us"""
        device = Device(
            pkt.serial,
            pkt.remote_addr[0],
            port=pkt.port,
            source=self.source,
            options=self.options,
        )

        try:
            device = await upgrade(device)
            await device.get_label()
            await device.get_location()
        except (NoResponse, FailedToSend) as error:
            log.error(
                lc("Failed to get information from device", serial=device.serial, error=error)
            )
            return None

        return device

    def carry_animation(self, previous, device):
        """Let a device we found again keep the animation it was running"""
        if device.light is None:
            return

        for old in previous:
            if old.serial == device.serial and old.light is not None:
                animation = old.light.running_animation
                if animation is not None:
                    animation.device = device
                    animation.light = device.light
                    device.light.running_animation = animation
                return

    ########################
    ###   LOOKING UP
    ########################

    async def get_devices(self, search=None):
        """
        Return the devices we know about.

        We look for devices first if ``search`` is True, or if it is None and
        we don't know about any devices yet.
        """
        if search is None:
            search = not self.devices

        if search:
            await self.retrieve_device_information()
        return list(self.devices)

    async def get_lights(self):
        """Look for devices and return the ones that are lights"""
        await self.retrieve_device_information()
        return self.lights

    async def get_device_by_mac(self, mac):
        mac = mac.upper()
        for device in await self.get_devices():
            if device.mac == mac:
                return device

    async def get_devices_by_filter(self, f):
        """
        Return the devices we know about that match ``f``, or if there are none
        look for devices and return the ones that match.
        """
        found = [device for device in self.devices if await matches(f, device)]
        if found:
            return found

        try:
            await self.retrieve_device_information()
        except FailedToSend as error:
            log.error(lc("Failed to look for devices", error=error))

        return [device for device in self.devices if await matches(f, device)]

    async def get_light_by_filter(self, f):
        """
        Return the first light we know about that matches ``f``.

        If we don't know of one we look for it, stopping at the first one we
        find. None is returned if we can't find it.
        """
        for light in self.lights:
            if await matches(f, light):
                return light

        async def wanted(device):
            return is_light(device) and await matches(f, device)

        try:
            found = await self.retrieve_device_information(
                num_devices=1, filter=wanted, timeout=self.options.filter_timeout
            )
        except FailedToSend as error:
            log.error(lc("Failed to look for light", error=error))
            return None

        if found:
            return found[0]

    async def get_light_by_mac(self, mac):
        mac = mac.upper()
        return await self.get_light_by_filter(lambda device: device.mac == mac)

    async def get_light_by_label(self, regex):
        """Return the first light with a label that entirely matches regex"""

        async def f(device):
            return re.fullmatch(regex, await device.get_label()) is not None

        return await self.get_light_by_filter(f)
