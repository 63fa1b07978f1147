"""
Fake LIFX devices that answer over real UDP sockets on localhost.

.. code-block:: python

    from lifx_transport.fake import FakeDevice

    async with FakeDevice("d073d5000001", product_pid=27, label="kitchen") as device:
        connection = Connection(
            source, target=device.serial, address="127.0.0.1", port=device.port
        )
        ...

Several devices can share one socket with ``FakeNetwork``. Because every
message carries the target it is meant for, a broadcast gets a reply from
every device and a unicast message only from the device it names.

.. code-block:: python

    async with FakeNetwork([device1, device2]) as network:
        lan = LifxLan(options(port=network.port, broadcast_addresses=["127.0.0.1"]))
"""
from lifx_messages import (
    decode,
    enums,
    CoreMessages,
    DiscoveryMessages,
    DeviceMessages,
    LightMessages,
    MultiZoneMessages,
    TileMessages,
)
from lifx_products import Products

from lifx_app.helpers import lc, async_as_background

from contextlib import contextmanager
import binascii
import logging
import asyncio
import uuid

log = logging.getLogger("lifx_transport.fake")


def hsbk_of(pkt):
    return (pkt["hue"], pkt["saturation"], pkt["brightness"], pkt["kelvin"])


def as_color(color):
    hue, saturation, brightness, kelvin = color
    return {"hue": hue, "saturation": saturation, "brightness": brightness, "kelvin": kelvin}


class FakeTile:
    """State for one tile in a chain"""

    def __init__(self, user_x=0, user_y=0, width=8, height=8, accel=(0, 0, -1), colors=None):
        self.width = width
        self.height = height
        self.user_x = user_x
        self.user_y = user_y
        self.accel = accel
        self.colors = list(colors or [(0, 0, 0, 3500)] * 64)

    def as_packet_dict(self, device):
        x, y, z = self.accel
        return {
            "accel_meas_x": x,
            "accel_meas_y": y,
            "accel_meas_z": z,
            "user_x": self.user_x,
            "user_y": self.user_y,
            "width": self.width,
            "height": self.height,
            "device_version_vendor": 1,
            "device_version_product": device.product_pid,
            "device_version_version": 0,
            "firmware_build": device.firmware_build * 1_000_000_000,
            "firmware_version_minor": device.firmware[1],
            "firmware_version_major": device.firmware[0],
        }


class Responder:
    """Turns messages into replies for a FakeDevice"""

    async def respond(self, device, pkt):
        if False:
            yield


class DeviceResponder(Responder):
    async def respond(self, device, pkt):
        if pkt | DiscoveryMessages.GetService:
            yield DiscoveryMessages.StateService(service=enums.Services.UDP, port=device.port)

        elif pkt | DeviceMessages.EchoRequest:
            yield DeviceMessages.EchoResponse(echoing=pkt.echoing)

        elif pkt | DeviceMessages.GetVersion:
            yield DeviceMessages.StateVersion(vendor=1, product=device.product_pid, version=0)

        elif pkt | DeviceMessages.GetHostFirmware or pkt | DeviceMessages.GetWifiFirmware:
            kls = (
                DeviceMessages.StateHostFirmware
                if pkt | DeviceMessages.GetHostFirmware
                else DeviceMessages.StateWifiFirmware
            )
            yield kls(
                build=device.firmware_build * 1_000_000_000,
                version_major=device.firmware[0],
                version_minor=device.firmware[1],
            )

        elif pkt | DeviceMessages.GetHostInfo:
            yield DeviceMessages.StateHostInfo(signal=0, tx=device.tx, rx=device.rx)

        elif pkt | DeviceMessages.GetWifiInfo:
            yield DeviceMessages.StateWifiInfo(signal=device.signal, tx=device.tx, rx=device.rx)

        elif pkt | DeviceMessages.GetInfo:
            yield DeviceMessages.StateInfo(time=0, uptime=device.uptime, downtime=0)

        elif pkt | DeviceMessages.GetPower or pkt | DeviceMessages.SetPower:
            if pkt | DeviceMessages.SetPower:
                device.power = pkt.level
            yield DeviceMessages.StatePower(level=device.power)

        elif pkt | DeviceMessages.GetLabel or pkt | DeviceMessages.SetLabel:
            if pkt | DeviceMessages.SetLabel:
                device.label = pkt.label
            yield DeviceMessages.StateLabel(label=device.label)

        elif pkt | DeviceMessages.GetLocation or pkt | DeviceMessages.SetLocation:
            if pkt | DeviceMessages.SetLocation:
                device.location = (pkt.location, pkt.label, pkt.updated_at)
            location, label, updated_at = device.location
            yield DeviceMessages.StateLocation(
                location=location, label=label, updated_at=updated_at
            )

        elif pkt | DeviceMessages.GetGroup or pkt | DeviceMessages.SetGroup:
            if pkt | DeviceMessages.SetGroup:
                device.group = (pkt.group, pkt.label, pkt.updated_at)
            group, label, updated_at = device.group
            yield DeviceMessages.StateGroup(group=group, label=label, updated_at=updated_at)


class LightResponder(Responder):
    async def respond(self, device, pkt):
        if pkt | LightMessages.GetColor or pkt | LightMessages.SetColor:
            if pkt | LightMessages.SetColor:
                device.color = hsbk_of(pkt)
            yield self.light_state(device)

        elif pkt | LightMessages.SetWaveform:
            if not pkt.transient:
                device.color = hsbk_of(pkt)
            yield self.light_state(device)

        elif pkt | LightMessages.SetWaveformOptional:
            if not pkt.transient:
                color = list(device.color)
                for i, name in enumerate(("hue", "saturation", "brightness", "kelvin")):
                    if pkt[f"set_{name}"]:
                        color[i] = pkt[name]
                device.color = tuple(color)
            yield self.light_state(device)

        elif pkt | LightMessages.GetLightPower or pkt | LightMessages.SetLightPower:
            if pkt | LightMessages.SetLightPower:
                device.power = pkt.level
            yield LightMessages.StateLightPower(level=device.power)

        elif pkt | LightMessages.GetInfrared or pkt | LightMessages.SetInfrared:
            if not device.product.cap.has_ir:
                return
            if pkt | LightMessages.SetInfrared:
                device.infrared = pkt.brightness
            yield LightMessages.StateInfrared(brightness=device.infrared)

    def light_state(self, device):
        return LightMessages.LightState(
            **as_color(device.color), power=device.power, label=device.label
        )


class ZonesResponder(Responder):
    async def respond(self, device, pkt):
        if pkt | MultiZoneMessages.GetColorZones:
            for reply in self.zone_replies(device, pkt.start_index, pkt.end_index):
                yield reply

        elif pkt | MultiZoneMessages.SetColorZones:
            end = min(pkt.end_index, len(device.zones) - 1)
            for i in range(pkt.start_index, end + 1):
                device.zones[i] = hsbk_of(pkt)
            for reply in self.zone_replies(device, pkt.start_index, end):
                yield reply

        elif pkt | MultiZoneMessages.GetExtendedColorZones:
            if device.has_extended_multizone:
                yield self.extended_state(device)

        elif pkt | MultiZoneMessages.SetExtendedColorZones:
            if device.has_extended_multizone:
                colors = pkt.colors[: pkt.colors_count]
                for i, color in enumerate(colors, start=pkt.zone_index):
                    if i < len(device.zones):
                        device.zones[i] = hsbk_of(color)
                yield self.extended_state(device)

        elif (
            pkt | MultiZoneMessages.GetMultiZoneEffect
            or pkt | MultiZoneMessages.SetMultiZoneEffect
        ):
            if pkt | MultiZoneMessages.SetMultiZoneEffect:
                device.zones_effect = {
                    "instanceid": pkt.instanceid,
                    "type": pkt.type,
                    "speed": pkt.speed,
                    "duration": pkt.duration,
                    "parameters": pkt.parameters,
                }
            yield MultiZoneMessages.StateMultiZoneEffect(**device.zones_effect)

    def zone_replies(self, device, start, end):
        count = len(device.zones)
        end = min(end, count - 1)

        if start == end:
            yield MultiZoneMessages.StateZone(
                zones_count=count, zone_index=start, **as_color(device.zones[start])
            )
            return

        for index in range(start, end + 1, 8):
            colors = [as_color(c) for c in device.zones[index : index + 8]]
            yield MultiZoneMessages.StateMultiZone(
                zones_count=count, zone_index=index, colors=colors
            )

    def extended_state(self, device):
        return MultiZoneMessages.StateExtendedColorZones(
            zones_count=len(device.zones),
            zone_index=0,
            colors_count=min(82, len(device.zones)),
            colors=[as_color(c) for c in device.zones[:82]],
        )


class MatrixResponder(Responder):
    async def respond(self, device, pkt):
        if pkt | TileMessages.GetDeviceChain:
            yield TileMessages.StateDeviceChain(
                start_index=0,
                tile_devices=[tile.as_packet_dict(device) for tile in device.tiles],
                tile_devices_count=len(device.tiles),
            )

        elif pkt | TileMessages.SetUserPosition:
            if pkt.tile_index < len(device.tiles):
                tile = device.tiles[pkt.tile_index]
                tile.user_x = pkt.user_x
                tile.user_y = pkt.user_y

        elif pkt | TileMessages.GetTileState64:
            for index in self.indexes(device, pkt):
                yield self.tile_state(device, index)

        elif pkt | TileMessages.SetTileState64:
            for index in self.indexes(device, pkt):
                device.tiles[index].colors = [hsbk_of(c) for c in pkt.colors]
                if pkt.res_required:
                    yield self.tile_state(device, index)

        elif pkt | TileMessages.GetTileEffect or pkt | TileMessages.SetTileEffect:
            if pkt | TileMessages.SetTileEffect:
                device.tile_effect = {
                    "instanceid": pkt.instanceid,
                    "type": pkt.type,
                    "speed": pkt.speed,
                    "duration": pkt.duration,
                    "parameters": pkt.parameters,
                    "palette": pkt.palette[: pkt.palette_count],
                }
            yield TileMessages.StateTileEffect(**device.tile_effect)

    def indexes(self, device, pkt):
        return range(pkt.tile_index, min(pkt.tile_index + pkt.length, len(device.tiles)))

    def tile_state(self, device, index):
        return TileMessages.StateTileState64(
            tile_index=index,
            x=0,
            y=0,
            width=device.tiles[index].width,
            colors=[as_color(c) for c in device.tiles[index].colors],
        )


class FakeDevice:
    """
    A pretend device that keeps some state and answers messages from it.

    ``received`` is every message we have been sent. Use ``offline()`` to make
    the device ignore everything, or ``no_replies_for(kls)`` to ignore a kind
    of message.
    """

    def __init__(
        self,
        serial,
        product_pid=1,
        *,
        label="",
        power=0,
        color=(0, 0, 65535, 3500),
        zones=None,
        tiles=None,
        infrared=0,
        firmware=(3, 70),
        firmware_build=1600000000,
        location=None,
        group=None,
        uptime=3600,
        signal=1e-5,
    ):
        self.serial = serial
        self.product_pid = product_pid
        self.product = Products.by_pid(product_pid)

        self.label = label
        self.power = power
        self.color = color
        self.infrared = infrared
        self.firmware = firmware
        self.firmware_build = firmware_build
        self.uptime = uptime
        self.signal = signal
        self.tx = 0
        self.rx = 0

        self.location = location or (uuid.uuid4().bytes, "", 0)
        self.group = group or (uuid.uuid4().bytes, "", 0)

        self.zones = list(zones or [])
        if self.product.cap.has_multizone and not self.zones:
            self.zones = [color] * 16

        self.tiles = list(tiles or [])
        if self.product.cap.has_matrix and not self.tiles:
            self.tiles = [FakeTile()]

        self.zones_effect = {"type": enums.MultiZoneEffectType.OFF}
        self.tile_effect = {"type": enums.TileEffectType.OFF}

        self.port = None
        self.online = True
        self.network = None
        self.no_res = {}
        self.received = []

        self.responders = [DeviceResponder()]
        if self.product.cap.is_light:
            self.responders.append(LightResponder())
        if self.product.cap.has_multizone:
            self.responders.append(ZonesResponder())
        if self.product.cap.has_matrix:
            self.responders.append(MatrixResponder())

    def __repr__(self):
        return f"<FakeDevice {self.serial}: {self.product.name}>"

    @property
    def has_extended_multizone(self):
        return self.product.has_extended_api(self.firmware_build)

    async def __aenter__(self):
        self.network = FakeNetwork([self])
        await self.network.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.network is not None:
            await self.network.finish()
            self.network = None

    def reset_received(self):
        self.received = []

    def received_of(self, kls):
        return [pkt for pkt in self.received if pkt | kls]

    @contextmanager
    def offline(self):
        try:
            self.online = False
            yield
        finally:
            self.online = True

    @contextmanager
    def no_replies_for(self, kls):
        ident = str(uuid.uuid4())
        try:
            self.no_res[ident] = kls
            yield
        finally:
            self.no_res.pop(ident, None)

    def wants(self, pkt):
        if not self.online:
            return False
        return pkt.is_broadcast or pkt.serial == self.serial

    async def got_message(self, pkt):
        """Return the replies to this message"""
        self.received.append(pkt)

        if any(pkt | kls for kls in self.no_res.values()):
            return []

        replies = []
        if pkt.ack_required:
            replies.append(CoreMessages.Acknowledgement())

        if pkt.res_required or pkt.__class__.__name__.startswith("Get"):
            for responder in self.responders:
                async for reply in responder.respond(self, pkt):
                    replies.append(reply)
        else:
            for responder in self.responders:
                async for _ in responder.respond(self, pkt):
                    pass

        for reply in replies:
            reply.source = pkt.source
            reply.sequence = pkt.sequence
            reply.target = self.serial

        return replies


class FakeNetwork:
    """One UDP socket on 127.0.0.1 shared by several fake devices"""

    def __init__(self, devices, host="127.0.0.1"):
        self.host = host
        self.port = None
        self.devices = list(devices)
        self.remote = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.finish()

    def device(self, serial):
        for device in self.devices:
            if device.serial == serial:
                return device

    async def start(self):
        network = self

        class ServerProtocol(asyncio.DatagramProtocol):
            def connection_made(sp, transport):
                sp.udp_transport = transport

            def datagram_received(sp, data, addr):
                async_as_background(network.received(sp.udp_transport, data, addr))

            def error_received(sp, exc):
                log.error(lc("Error on fake udp transport", error=exc))

        loop = asyncio.get_event_loop()
        self.remote, _ = await loop.create_datagram_endpoint(
            ServerProtocol, local_addr=(self.host, 0)
        )
        self.port = self.remote.get_extra_info("sockname")[1]

        for device in self.devices:
            device.port = self.port

    async def finish(self):
        if self.remote is not None:
            self.remote.close()
            self.remote = None

    async def received(self, transport, data, addr):
        pkt = decode(data)
        if pkt is None:
            return

        log.debug(lc("RECV", bts=binascii.hexlify(data).decode(), pkt=pkt.__class__.__name__))

        for device in self.devices:
            if not device.wants(pkt):
                continue

            for reply in await device.got_message(pkt):
                if self.remote is not None:
                    transport.sendto(reply.tobytes(), addr)
