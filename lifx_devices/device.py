"""
A handle on one device on the network.

A ``Device`` knows where the device is and how to talk to it. What else it
can do comes from its ``Capabilities``, which are only known after we ask the
device what product it is:

.. code-block:: python

    from lifx_devices.device import Device, upgrade

    device = Device("d073d5000001", "192.168.0.3")
    device = await upgrade(device)

    if device.light is not None:
        await device.light.set_color(RED, duration=1000)

    # Raises IncapableDevice if this isn't a strip
    strip = device.require("multizone")
    print(strip.zone_count)

``upgrade`` returns a new ``Device`` and doesn't change the one it was given.
"""
from lifx_devices.collections import Group, Location
from lifx_devices.info import ConnectionInfo, format_uptime
from lifx_devices.errors import IncapableDevice
from lifx_devices.power import Power, level_for
from lifx_devices.multizone import MultiZone
from lifx_devices.matrix import Matrix
from lifx_devices.light import Light

from lifx_transport import Connection, RetryPolicy, FailedToSend, make_source
from lifx_messages import DeviceMessages
from lifx_products import Products, VendorRegistry

from lifx_app.helpers import lc, Firmware
from lifx_app.options import LanOptions

import binascii
import logging
import os

log = logging.getLogger("lifx_devices.device")

INDENT = "  "


def mac_from_serial(serial):
    return ":".join(serial[i : i + 2] for i in range(0, 12, 2)).upper()


def normalise_serial(serial):
    """Accept ``d073d5000001``, ``D0:73:D5:00:00:01`` or 6 bytes"""
    if isinstance(serial, (bytes, bytearray)):
        serial = binascii.hexlify(bytes(serial[:6])).decode()
    return serial.replace(":", "").lower()


class Capabilities:
    """
    What we know a device is and the parts of it that do more than the basics.

    ``light``, ``multizone`` and ``matrix`` are ``None`` when the device can't
    do those things.
    """

    def __init__(
        self, product=None, vendor=None, version=0, light=None, multizone=None, matrix=None
    ):
        self.product = product
        self.vendor = vendor
        self.version = version
        self.light = light
        self.multizone = multizone
        self.matrix = matrix

    @property
    def kind(self):
        if self.matrix is not None:
            return "TileChain"
        elif self.multizone is not None:
            return "MultiZoneLight"
        elif self.light is not None:
            return "Light"
        return "Device"

    def __repr__(self):
        product = getattr(self.product, "name", None)
        return f"<Capabilities {self.kind} product={product}>"


class Device:
    def __init__(
        self, serial, address, port=56700, source=None, options=None, capabilities=None
    ):
        self.serial = normalise_serial(serial)
        self.address = address
        self.port = port
        self.source = make_source() if source is None else source

        if options is None:
            options = LanOptions.FieldSpec().empty_normalise()
        self.options = options

        if capabilities is None:
            capabilities = Capabilities()
        self.capabilities = capabilities

        self.connection = Connection(self.source, target=self.serial, address=address, port=port)
        self.lc = lc.using(serial=self.serial)

        self.cache = {}

    def __repr__(self):
        label = self.cache.get("label", "?")
        return f"<{self.kind} {self.mac} ({label}@{self.address}:{self.port})>"

    @property
    def mac(self):
        return mac_from_serial(self.serial)

    @property
    def kind(self):
        return self.capabilities.kind

    @property
    def product(self):
        return self.capabilities.product

    @property
    def vendor(self):
        return self.capabilities.vendor

    @property
    def version(self):
        return self.capabilities.version

    @property
    def light(self):
        return self.capabilities.light

    @property
    def multizone(self):
        return self.capabilities.multizone

    @property
    def matrix(self):
        return self.capabilities.matrix

    def require(self, name):
        """Return the capability called ``name`` or complain if we don't have it"""
        found = getattr(self.capabilities, name, None)
        if found is None:
            raise IncapableDevice(
                f"Device is not a {name}", serial=self.serial, kind=self.kind, wanted=name
            )
        return found

    def clone(self, capabilities):
        """A new Device at the same place with different capabilities"""
        device = Device(
            self.serial,
            self.address,
            port=self.port,
            source=self.source,
            options=self.options,
            capabilities=capabilities,
        )
        device.cache.update(self.cache)
        return device

    ########################
    ###   TALKING
    ########################

    def policy(self, **overrides):
        options = {
            "attempts": self.options.default_attempts,
            "timeout": self.options.default_timeout,
        }
        options.update(overrides)
        return RetryPolicy.create(**options)

    async def request(self, msg, policy=None):
        """Send msg and return the first reply, raising NoResponse if there isn't one"""
        if policy is None:
            policy = self.policy()
        return await self.connection.request_with_response(msg, policy)

    async def replies(self, msg, expected, key):
        """Send msg and return up to ``expected`` replies, told apart by ``key``"""
        policy = self.policy(expected=expected)
        return await self.connection.broadcast_with_response(msg, policy, key=key)

    async def cached(self, name, retrieve):
        if name not in self.cache:
            self.cache[name] = await retrieve()
        return self.cache[name]

    ########################
    ###   VERSION
    ########################

    async def get_version(self):
        """Ask the device what it is and return ``(vendor, product, version)``"""
        pkt = await self.request(DeviceMessages.GetVersion())
        vendor = VendorRegistry.choose(pkt.vendor)
        return vendor, Products[vendor, pkt.product], pkt.version

    async def reset(self):
        """Forget what we remember about this device and ask what it is again"""
        vendor, product, version = await self.get_version()
        self.capabilities.vendor = vendor
        self.capabilities.product = product
        self.capabilities.version = version
        self.cache.clear()

    ########################
    ###   METADATA
    ########################

    async def get_label(self):
        async def retrieve():
            return (await self.request(DeviceMessages.GetLabel())).label

        return await self.cached("label", retrieve)

    async def set_label(self, label):
        await self.request(DeviceMessages.SetLabel(label=label))
        self.cache.pop("label", None)

    async def get_location(self):
        async def retrieve():
            return Location.from_packet(await self.request(DeviceMessages.GetLocation()))

        return await self.cached("location", retrieve)

    async def set_location(self, location):
        await self.request(DeviceMessages.SetLocation(**location.as_set_kwargs()))
        self.cache.pop("location", None)

    async def get_group(self):
        async def retrieve():
            return Group.from_packet(await self.request(DeviceMessages.GetGroup()))

        return await self.cached("group", retrieve)

    async def set_group(self, group):
        await self.request(DeviceMessages.SetGroup(**group.as_set_kwargs()))
        self.cache.pop("group", None)

    async def get_host_firmware(self):
        """Return a ``Firmware`` with the version and build time of the host firmware"""

        async def retrieve():
            pkt = await self.request(DeviceMessages.GetHostFirmware())
            return Firmware(pkt.version_major, pkt.version_minor, build=int(pkt.build / 1e9))

        return await self.cached("host_firmware", retrieve)

    async def get_wifi_firmware(self):
        async def retrieve():
            pkt = await self.request(DeviceMessages.GetWifiFirmware())
            return Firmware(pkt.version_major, pkt.version_minor, build=int(pkt.build / 1e9))

        return await self.cached("wifi_firmware", retrieve)

    ########################
    ###   STATE
    ########################

    async def get_uptime(self):
        """Seconds since the device last started"""
        return (await self.request(DeviceMessages.GetInfo())).uptime

    async def get_host_info(self):
        return ConnectionInfo.from_packet(await self.request(DeviceMessages.GetHostInfo()))

    async def get_wifi_info(self):
        return ConnectionInfo.from_packet(await self.request(DeviceMessages.GetWifiInfo()))

    async def get_power(self):
        return Power.from_level((await self.request(DeviceMessages.GetPower())).level)

    async def set_power(self, status):
        await self.request(DeviceMessages.SetPower(level=level_for(status)))

    async def is_reachable(self):
        """Whether the device answers an echo quickly. This never raises"""
        policy = RetryPolicy.create(attempts=1, timeout=self.options.echo_timeout)
        try:
            replies = await self.connection.broadcast_with_response(
                DeviceMessages.EchoRequest(echoing=os.urandom(8)), policy
            )
        except (FailedToSend, OSError) as error:
            log.error(self.lc("Failed to check if device is reachable", error=error))
            return False
        return len(replies) > 0

    async def full_information(self, include_volatile=True):
        """A description of the device with one fact on each line"""
        lines = [f"{self.kind}:"]

        def add(name, value):
            lines.append(f"{INDENT}{name}: {value}")

        host_firmware = await self.get_host_firmware()

        add("MAC", self.mac)
        add("IP Address", self.address)
        add("Port", self.port)
        add("Vendor", getattr(self.vendor, "name", self.vendor))
        add("Product", self.product)
        add("Version", self.version)
        add("Colored", bool(self.product is not None and self.product.cap.has_color))
        add("Label", await self.get_label())
        add("Location", (await self.get_location()).label)
        add("Group", (await self.get_group()).label)
        add("Host Firmware Version", host_firmware)
        add("Firmware time", host_firmware.build)
        add("WiFi Firmware Version", await self.get_wifi_firmware())

        if include_volatile:
            add("Uptime", format_uptime(await self.get_uptime()))
            add("WiFi Signal Strength", (await self.get_wifi_info()).signal_strength)
            add("Power", (await self.get_power()).name)

            if self.light is not None:
                for name, value in await self.light.volatile_information():
                    add(name, value)

        return "\n".join(lines) + "\n"


async def upgrade(device):
    """
    Ask device what it is and return a new ``Device`` with the capabilities of
    that product.

    Strips find out how many zones they have and tiles find out about their
    chain as part of this.
    """
    vendor, product, version = await device.get_version()

    capabilities = Capabilities(product=product, vendor=vendor, version=version)
    upgraded = device.clone(capabilities)

    cap = product.cap
    if not cap.is_light:
        return upgraded

    capabilities.light = Light(upgraded)

    if cap.has_chain or cap.has_matrix:
        matrix = Matrix(upgraded)
        await matrix.refresh()
        capabilities.matrix = matrix
    elif cap.has_multizone:
        multizone = MultiZone(upgraded)
        await multizone.refresh()
        capabilities.multizone = multizone

    log.debug(lc("Upgraded device", serial=device.serial, kind=upgraded.kind, product=product.name))
    return upgraded
