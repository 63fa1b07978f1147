from lifx_devices.device import upgrade
from lifx_devices.effects import TileEffectInfo

from lifx_transport.fake import FakeDevice, FakeTile
from lifx_messages import TileMessages, enums
from lifx_colour import Color, RED, BLUE, GREEN
from lifx_colour.tiles import FixedChain, FixedTile, ExactTile, InterpolatedCornersChain, Rotation

import pytest


@pytest.fixture()
async def chain():
    tiles = [
        FakeTile(user_x=0, user_y=0, colors=[RED.as_tuple()] * 64),
        FakeTile(user_x=1, user_y=0, colors=[BLUE.as_tuple()] * 64),
    ]
    async with FakeDevice("d073d5000020", 55, tiles=tiles) as fake:
        yield fake


@pytest.fixture()
async def matrix(chain, device_for):
    device = await upgrade(device_for(chain))
    yield device.matrix


class TestDeviceChain:
    async def test_it_knows_where_the_tiles_are(self, matrix):
        assert matrix.tile_count == 2
        assert [(info.min_x(), info.min_y()) for info in matrix.tile_info] == [(0, 0), (8, 0)]
        assert (matrix.total_width, matrix.total_height) == (16, 8)
        assert matrix.tile_info[0].rotation is Rotation.FACE_DOWN

    async def test_it_measures_from_the_smallest_position(self, device_for):
        tiles = [FakeTile(user_x=-1, user_y=2), FakeTile(user_x=0, user_y=3)]
        async with FakeDevice("d073d5000021", 55, tiles=tiles) as fake:
            device = await upgrade(device_for(fake))
            found = [(info.min_x(), info.min_y()) for info in device.matrix.tile_info]
            assert found == [(0, 0), (8, 8)]
            assert (device.matrix.total_width, device.matrix.total_height) == (16, 16)

    async def test_it_can_move_a_tile(self, matrix, chain):
        await matrix.set_user_position(1, 0, 1)
        assert (chain.tiles[1].user_x, chain.tiles[1].user_y) == (0, 1)
        assert [(info.min_x(), info.min_y()) for info in matrix.tile_info] == [(0, 0), (0, 8)]
        assert (matrix.total_width, matrix.total_height) == (8, 16)


class TestTileColors:
    async def test_it_gets_colors_for_each_tile(self, matrix):
        found = await matrix.get_colors()
        assert len(found) == 2
        assert all(isinstance(tile, ExactTile) for tile in found)
        assert found[0].color(3, 4) == RED
        assert found[1].color(7, 7) == BLUE

    async def test_it_sets_one_tile(self, matrix, chain):
        await matrix.set_tile_colors(1, FixedTile(GREEN), duration=100)
        assert chain.tiles[1].colors == [GREEN.as_tuple()] * 64
        assert chain.tiles[0].colors == [RED.as_tuple()] * 64

        pkt = chain.received_of(TileMessages.SetTileState64)[-1]
        assert pkt.tile_index == 1
        assert pkt.duration == 100

    async def test_it_sends_the_top_row_first(self, matrix, chain):
        rows = [[Color(0, 0, 1000 * (y + 1), 3500)] * 8 for y in range(8)]
        await matrix.set_tile_colors(0, ExactTile(rows))

        # Row 7 is the top of the tile
        assert chain.tiles[0].colors[0] == (0, 0, 8000, 3500)
        assert chain.tiles[0].colors[63] == (0, 0, 1000, 3500)

        found = await matrix.get_colors()
        assert found[0].color(0, 0) == Color(0, 0, 1000, 3500)
        assert found[0].color(0, 7) == Color(0, 0, 8000, 3500)

    async def test_it_uses_the_size_the_tile_reports(self, device_for):
        async with FakeDevice("d073d5000022", 55, tiles=[FakeTile(width=5, height=5)]) as fake:
            device = await upgrade(device_for(fake))
            rows = [[Color(0, 0, 1000 * (y + 1), 3500)] * 5 for y in range(5)]
            await device.matrix.set_tile_colors(0, ExactTile(rows))

            assert fake.received_of(TileMessages.SetTileState64)[-1].width == 5
            assert fake.tiles[0].colors[0] == (0, 0, 5000, 3500)
            assert fake.tiles[0].colors[20] == (0, 0, 1000, 3500)

            found = (await device.matrix.get_colors())[0]
            assert len(found.rows) == 5
            assert all(len(row) == 5 for row in found.rows)
            assert found.color(0, 4) == Color(0, 0, 5000, 3500)
            assert found.color(4, 0) == Color(0, 0, 1000, 3500)
            assert fake.received_of(TileMessages.GetTileState64)[-1].width == 5

    async def test_it_sets_the_whole_chain(self, matrix, chain):
        await matrix.set_colors(FixedChain(GREEN))
        assert chain.tiles[0].colors == [GREEN.as_tuple()] * 64
        assert chain.tiles[1].colors == [GREEN.as_tuple()] * 64

    async def test_it_gives_each_tile_its_part_of_the_chain(self, matrix):
        corners = InterpolatedCornersChain(RED, BLUE, RED, BLUE)
        await matrix.set_colors(corners)

        found = await matrix.get_colors()
        assert found[0].color(0, 0) == corners.color(0, 0, 16, 8)
        assert found[1].color(7, 0) == corners.color(15, 0, 16, 8)


class TestTileEffects:
    async def test_it_gets_and_sets_effects(self, matrix):
        assert (await matrix.get_effect()).type is enums.TileEffectType.OFF

        await matrix.set_effect(TileEffectInfo.morph(4000, RED, BLUE))
        found = await matrix.get_effect()
        assert found.type is enums.TileEffectType.MORPH
        assert found.palette == [RED, BLUE]
