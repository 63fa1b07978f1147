"""
What a device can do when it's a strip of zones.

Newer firmware can get and set up to 82 zones in one message. For older
firmware we ask for all the zones and collect a ``StateMultiZone`` for every
eight of them, and we set them one zone at a time, only applying the change
with the last one so the whole strip changes at once.
"""
from lifx_devices.effects import MultizoneEffectInfo

from lifx_messages import MultiZoneMessages, enums
from lifx_colour.hsbk import Color, OFF
from lifx_colour.zones import Exact

from lifx_app.helpers import lc

import logging
import math

log = logging.getLogger("lifx_devices.multizone")

EXTENDED_MAX = 82
LEGACY_MAX = 8


def color_of(pkt):
    return Color(pkt["hue"], pkt["saturation"], pkt["brightness"], pkt["kelvin"])


class MultiZone:
    def __init__(self, device):
        self.device = device
        self.zone_count = 0

    def __repr__(self):
        return f"<MultiZone {self.device.serial}: {self.zone_count} zones>"

    async def refresh(self):
        """Find out how many zones we have"""
        pkt = await self.device.request(MultiZoneMessages.GetColorZones(start_index=0, end_index=0))
        self.zone_count = pkt.zones_count
        return self.zone_count

    async def has_extended_api(self):
        firmware = await self.device.get_host_firmware()
        return self.device.product.has_extended_api(firmware.build)

    async def get_colors(self):
        """Return the colours of our zones as an ``Exact`` MultizoneColors"""
        if await self.has_extended_api():
            colors = await self.get_extended_colors()
        else:
            colors = await self.get_legacy_colors()

        log.debug(lc("Got zone colors", serial=self.device.serial, count=len(colors)))
        return Exact(colors)

    async def get_extended_colors(self):
        expected = max(1, math.ceil(self.zone_count / EXTENDED_MAX))
        replies = await self.device.replies(
            MultiZoneMessages.GetExtendedColorZones(),
            expected,
            key=lambda pkt: pkt.zone_index,
        )

        colors = [None] * self.zone_count
        for pkt in replies:
            for i, color in enumerate(pkt.colors[: pkt.colors_count], start=pkt.zone_index):
                if i < self.zone_count:
                    colors[i] = color_of(color)
        return self.filled(colors)

    async def get_legacy_colors(self):
        expected = max(1, math.ceil(self.zone_count / LEGACY_MAX))
        replies = await self.device.replies(
            MultiZoneMessages.GetColorZones(start_index=0, end_index=255),
            expected,
            key=lambda pkt: pkt.zone_index,
        )

        colors = [None] * self.zone_count
        for pkt in replies:
            if pkt | MultiZoneMessages.StateZone:
                found = [color_of(pkt)]
            else:
                found = [color_of(c) for c in pkt.colors]

            for i, color in enumerate(found, start=pkt.zone_index):
                if i < self.zone_count:
                    colors[i] = color
        return self.filled(colors)

    def filled(self, colors):
        missing = [i for i, c in enumerate(colors) if c is None]
        if missing:
            log.warning(
                lc("Didn't get colors for some zones", serial=self.device.serial, missing=missing)
            )
        return [OFF if c is None else c for c in colors]

    async def set_colors(self, colors, duration=0):
        """Make our zones look like the ``MultizoneColors`` we are given"""
        found = colors.as_list(self.zone_count)

        if await self.has_extended_api():
            for start in range(0, len(found), EXTENDED_MAX):
                chunk = found[start : start + EXTENDED_MAX]
                await self.device.request(
                    MultiZoneMessages.SetExtendedColorZones(
                        duration=duration,
                        apply=enums.MultiZoneApplicationRequest.APPLY,
                        zone_index=start,
                        colors=[c.as_dict() for c in chunk],
                    )
                )
            return

        last = len(found) - 1
        for index, color in enumerate(found):
            await self.set_color_range(index, index, color, duration=duration, apply=index == last)

    async def set_color_range(self, start, end, color, duration=0, apply=True):
        if apply:
            application = enums.MultiZoneApplicationRequest.APPLY
        else:
            application = enums.MultiZoneApplicationRequest.NO_APPLY

        await self.device.request(
            MultiZoneMessages.SetColorZones(
                start_index=start,
                end_index=end,
                duration=duration,
                apply=application,
                **color.as_dict(),
            )
        )

    async def get_effect(self):
        pkt = await self.device.request(MultiZoneMessages.GetMultiZoneEffect())
        return MultizoneEffectInfo.from_packet(pkt)

    async def set_effect(self, effect):
        await self.device.request(MultiZoneMessages.SetMultiZoneEffect(**effect.as_set_kwargs()))
