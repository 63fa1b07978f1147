from lifx_colour.hsbk import Color, OFF, RED, GREEN, BLUE, WHITE
from lifx_colour.tiles import (
    Rotation,
    TileInfo,
    FixedTile,
    ExactTile,
    InterpolatedCornersTile,
    ChainWindow,
    FixedChain,
    PerTile,
    InterpolatedCornersChain,
    oriented,
    tile_from_dict,
    chain_from_dict,
)

from lifx_products import Products
import pytest


def numbered(count=64):
    return [Color(i * 100, 65535, 65535, 3500) for i in range(count)]


def turned_on_the_wire(colors, rotation):
    """Move each pixel in wire order to where it shows on a tile sitting this way"""
    final = [None] * 64
    for i, color in enumerate(colors):
        x = i % 8
        y = i // 8
        if rotation is Rotation.UPSIDE_DOWN:
            x, y = 7 - x, 7 - y
        elif rotation is Rotation.ROTATE_LEFT:
            x, y = 7 - y, x
        elif rotation is Rotation.ROTATE_RIGHT:
            x, y = y, 7 - x
        final[x + y * 8] = color
    return final


class TestRotation:
    @pytest.mark.parametrize(
        "accel,expected",
        [
            ((-1, -1, -1), Rotation.UPRIGHT),
            ((100, 0, 0), Rotation.ROTATE_RIGHT),
            ((-100, 0, 0), Rotation.ROTATE_LEFT),
            ((0, 0, 100), Rotation.FACE_UP),
            ((0, 0, -100), Rotation.FACE_DOWN),
            ((0, 100, 0), Rotation.UPSIDE_DOWN),
            ((0, -100, 0), Rotation.UPRIGHT),
            ((50, 50, 0), Rotation.UPSIDE_DOWN),
        ],
    )
    def test_it_works_out_rotation_from_the_accelerometer(self, accel, expected):
        assert Rotation.from_accelerometer(*accel) is expected


class TestTileInfo:
    def test_it_can_be_made_from_a_device_chain_tile(self):
        info = TileInfo.from_packet(
            {
                "accel_meas_x": 0,
                "accel_meas_y": 100,
                "accel_meas_z": 0,
                "user_x": 1.5,
                "user_y": 0.5,
                "width": 8,
                "height": 8,
                "device_version_vendor": 1,
                "device_version_product": 55,
                "device_version_version": 10,
                "firmware_build": 1600000000 * 1000000000,
                "firmware_version_minor": 50,
                "firmware_version_major": 3,
            }
        )
        assert info.product is Products.LCM3_TILE
        assert info.rotation is Rotation.UPSIDE_DOWN
        assert info.firmware_build == 1600000000
        assert info.firmware_version == (3, 50)
        assert info.version == 10
        assert (info.width, info.height) == (8, 8)

    def test_it_knows_where_it_starts(self):
        info = TileInfo(user_x=1.5, user_y=0.5)
        assert info.min_x(0.5) == 8
        assert info.min_y(0.5) == 0
        assert info.min_x() == 12

        placed = info.with_offsets(0.5, 0.5)
        assert (placed.min_x(), placed.min_y()) == (8, 0)
        assert info.x_offset == 0
        assert placed.contains(8, 0)
        assert placed.contains(15, 7)
        assert not placed.contains(16, 0)
        assert not placed.contains(7, 0)

    def test_it_rotates_points(self):
        assert TileInfo().rotated(1, 2) == (1, 2)
        assert TileInfo(accel_y=100).rotated(0, 0) == (7, 7)
        assert TileInfo(accel_x=-100).rotated(0, 0) == (0, 7)
        assert TileInfo(accel_x=100).rotated(0, 0) == (7, 0)
        assert TileInfo(accel_x=-100).rotated(0, 7) == (7, 7)
        assert TileInfo(accel_x=100).rotated(0, 7) == (0, 0)


class TestTileColors:
    def test_it_keeps_wire_order_through_a_list(self):
        colors = numbered()
        exact = ExactTile.from_list(colors)
        assert exact.as_list() == colors

    def test_it_puts_the_first_wire_row_at_the_top(self):
        exact = ExactTile.from_list(numbered())
        assert exact.color(0, 7) == numbered()[0]
        assert exact.color(7, 0) == numbered()[63]

    def test_it_pads_with_off(self):
        exact = ExactTile.from_list([RED])
        as_list = exact.as_list()
        assert as_list[0] == RED
        assert all(c == OFF for c in as_list[1:])
        assert exact.color(20, 20) == OFF

    def test_it_interpolates_corners(self):
        tile = InterpolatedCornersTile(RED, GREEN, BLUE, WHITE)
        assert tile.color(0, 7) == RED
        assert tile.color(7, 7) == GREEN
        assert tile.color(0, 0) == BLUE
        assert tile.color(7, 0) == WHITE

    def test_it_shifts(self):
        exact = ExactTile.from_list(numbered())
        shifted = exact.shift(1, 0)
        assert shifted.color(1, 0) == exact.color(0, 0)
        assert shifted.color(0, 0) == OFF

    def test_it_dims_and_blends(self):
        dimmed = FixedTile(Color(0, 0, 1000, 3500)).with_relative_brightness(0.5)
        assert isinstance(dimmed, FixedTile)
        assert dimmed.max_brightness() == 500

        blended = FixedTile(RED).add(FixedTile(GREEN), 0.5)
        assert blended.color(3, 3) == RED.add(GREEN, 0.5)

    def test_it_can_be_serialised(self):
        colors = ExactTile.from_list(numbered()).shift(1, 2).with_relative_brightness(0.5)
        restored = tile_from_dict(colors.as_dict())
        assert restored == colors
        assert restored.as_list() == colors.as_list()

    def test_it_can_be_laid_out_for_a_rotated_tile(self):
        rows = [[OFF] * 8 for _ in range(8)]
        rows[0][0] = RED
        colors = ExactTile(rows)

        assert oriented(colors, TileInfo()) is colors
        upside_down = oriented(colors, TileInfo(accel_y=100))
        assert upside_down.color(7, 7) == RED
        assert upside_down.color(0, 0) == OFF

    @pytest.mark.parametrize(
        "accel,rotation,first",
        [
            ((-100, 0, 0), Rotation.ROTATE_LEFT, 7),
            ((100, 0, 0), Rotation.ROTATE_RIGHT, 56),
            ((0, 100, 0), Rotation.UPSIDE_DOWN, 63),
        ],
    )
    def test_it_turns_the_wire_order_the_same_way_the_tile_is_turned(
        self, accel, rotation, first
    ):
        wire = numbered()
        info = TileInfo(accel_x=accel[0], accel_y=accel[1], accel_z=accel[2])
        assert info.rotation is rotation

        found = oriented(ExactTile.from_list(wire), info).as_list()
        assert found == turned_on_the_wire(wire, rotation)
        assert found.index(wire[0]) == first

    def test_it_works_with_other_sizes(self):
        colors = numbered(25)
        exact = ExactTile.from_list(colors, 5, 5)
        assert len(exact.rows) == 5
        assert all(len(row) == 5 for row in exact.rows)
        assert exact.color(0, 4) == colors[0]
        assert exact.color(4, 0) == colors[24]
        assert exact.as_list(5, 5) == colors


class TestTileChainColors:
    @pytest.fixture()
    def infos(self):
        return [TileInfo(user_x=0), TileInfo(user_x=1)]

    def test_it_finds_the_tile_for_a_point(self, infos):
        chain = PerTile(infos, [FixedTile(RED), FixedTile(BLUE)])
        assert chain.color(3, 3, 16, 8) == RED
        assert chain.color(9, 3, 16, 8) == BLUE
        assert chain.color(20, 3, 16, 8) == OFF

    def test_it_dims_every_tile(self, infos):
        chain = PerTile(infos, [FixedTile(RED), FixedTile(BLUE)]).with_relative_brightness(0.5)
        assert isinstance(chain, PerTile)
        assert chain.color(9, 3, 16, 8) == BLUE.with_relative_brightness(0.5)

    def test_it_interpolates_over_the_whole_chain(self):
        chain = InterpolatedCornersChain(RED, GREEN, BLUE, WHITE)
        assert chain.color(0, 0, 16, 8) == BLUE
        assert chain.color(15, 0, 16, 8) == WHITE
        assert chain.color(0, 7, 16, 8) == RED
        assert chain.color(15, 7, 16, 8) == GREEN

    def test_it_gives_each_tile_its_part(self):
        chain = InterpolatedCornersChain(RED, GREEN, BLUE, WHITE)
        window = chain.tile_colors(8, 0, 16, 8)
        assert isinstance(window, ChainWindow)
        assert window.color(0, 0) == chain.color(8, 0, 16, 8)
        assert window.color(7, 7) == GREEN

    def test_it_knows_the_brightest_point(self, infos):
        chain = PerTile(infos, [FixedTile(Color(0, 0, 10, 3500)), FixedTile(Color(0, 0, 20, 3500))])
        assert chain.max_brightness(infos, 16, 8) == 20
        assert FixedChain(OFF).max_brightness(infos, 16, 8) == 0

    def test_it_shifts_and_blends(self):
        chain = InterpolatedCornersChain(RED, GREEN, BLUE, WHITE)
        assert chain.shift(1, 0).color(1, 0, 16, 8) == BLUE
        assert FixedChain(RED).add(FixedChain(GREEN), 1).color(0, 0, 1, 1) == GREEN

    def test_it_can_be_serialised(self):
        chain = InterpolatedCornersChain(RED, GREEN, BLUE, WHITE).shift(2, 1)
        restored = chain_from_dict(chain.as_dict())
        assert restored == chain
        assert restored.color(5, 5, 16, 8) == chain.color(5, 5, 16, 8)
