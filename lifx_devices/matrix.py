"""
What a device can do when it's a chain of tiles.

We remember what the chain told us about each tile so we know where each tile
sits in the chain's pixels. ``refresh`` asks again, which is needed after any
tile is moved.
"""
from lifx_devices.effects import TileEffectInfo

from lifx_messages import TileMessages
from lifx_colour.hsbk import Color
from lifx_colour.tiles import TileInfo, ExactTile, oriented

from lifx_app.helpers import lc

import logging

log = logging.getLogger("lifx_devices.matrix")


class Matrix:
    def __init__(self, device):
        self.device = device
        self.tile_info = []

    def __repr__(self):
        return f"<Matrix {self.device.serial}: {self.tile_count} tiles>"

    @property
    def tile_count(self):
        return len(self.tile_info)

    @property
    def total_width(self):
        return max([info.min_x() + info.width for info in self.tile_info], default=0)

    @property
    def total_height(self):
        return max([info.min_y() + info.height for info in self.tile_info], default=0)

    async def get_device_chain(self):
        """
        Return a ``TileInfo`` for each tile in the chain.

        The offsets of every tile are the smallest position in the chain so
        the bottom left of the chain is at ``(0, 0)``.
        """
        pkt = await self.device.request(TileMessages.GetDeviceChain())
        tiles = pkt.tile_devices[: pkt.tile_devices_count]
        if not tiles:
            return []

        x_offset = min(tile["user_x"] for tile in tiles)
        y_offset = min(tile["user_y"] for tile in tiles)
        return [TileInfo.from_packet(tile, x_offset, y_offset) for tile in tiles]

    async def refresh(self):
        self.tile_info = await self.get_device_chain()
        log.debug(
            lc(
                "Found tiles",
                serial=self.device.serial,
                count=self.tile_count,
                size=(self.total_width, self.total_height),
            )
        )
        return self.tile_info

    async def get_colors(self):
        """Return an ``ExactTile`` for each tile in the chain"""
        if not self.tile_info:
            return []

        width = self.tile_info[0].width
        replies = await self.device.replies(
            TileMessages.GetTileState64(tile_index=0, length=self.tile_count, width=width),
            self.tile_count,
            key=lambda pkt: pkt.tile_index,
        )

        found = {}
        for pkt in replies:
            colors = [
                Color(c["hue"], c["saturation"], c["brightness"], c["kelvin"]) for c in pkt.colors
            ]
            info = self.tile_info[pkt.tile_index]
            found[pkt.tile_index] = ExactTile.from_list(colors, info.width, info.height)

        return [found.get(index, ExactTile([])) for index in range(self.tile_count)]

    async def set_tile_colors(self, index, colors, duration=0):
        """Show these ``TileColors`` on the tile at ``index``"""
        info = self.tile_info[index]
        colors = oriented(colors, info)
        await self.device.request(
            TileMessages.SetTileState64(
                tile_index=index,
                length=1,
                x=0,
                y=0,
                width=info.width,
                duration=duration,
                colors=[c.as_dict() for c in colors.as_list(info.width, info.height)],
            )
        )

    async def set_colors(self, chain, duration=0):
        """Show these ``TileChainColors`` over the whole chain"""
        width = self.total_width
        height = self.total_height
        for index, info in enumerate(self.tile_info):
            colors = chain.tile_colors(info.min_x(), info.min_y(), width, height)
            await self.set_tile_colors(index, colors, duration=duration)

    async def set_user_position(self, index, x, y):
        """Tell the tile at ``index`` where it is and then ask the chain where everything is"""
        msg = TileMessages.SetUserPosition(tile_index=index, user_x=x, user_y=y)
        await self.device.request(msg)
        await self.refresh()

    async def get_effect(self):
        return TileEffectInfo.from_packet(await self.device.request(TileMessages.GetTileEffect()))

    async def set_effect(self, effect):
        await self.device.request(TileMessages.SetTileEffect(**effect.as_set_kwargs()))
