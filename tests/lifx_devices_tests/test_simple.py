from lifx_devices.collections import Group, Location
from lifx_devices.errors import InvalidId
from lifx_devices.info import Signal, ConnectionInfo, format_uptime
from lifx_devices.power import Power, level_for
from lifx_devices.effects import MultizoneEffectInfo, TileEffectInfo

from lifx_messages import DeviceMessages, MultiZoneMessages, TileMessages, enums
from lifx_colour import RED, BLUE

from lifx_app.errors import ProgrammerError

from delfick_project.errors_pytest import assertRaises
from unittest import mock
import uuid


class TestPower:
    def test_it_comes_from_a_level(self):
        assert Power.from_level(65535) is Power.ON
        assert Power.from_level(0) is Power.OFF
        assert Power.from_level(200) is Power.UNKNOWN

    def test_it_knows_if_it_is_on_or_off(self):
        assert Power.ON.is_on and not Power.ON.is_off
        assert Power.OFF.is_off and not Power.OFF.is_on
        assert not Power.UNKNOWN.is_on and not Power.UNKNOWN.is_off

    def test_it_makes_levels_from_power_or_booleans(self):
        assert level_for(Power.ON) == 65535
        assert level_for(Power.OFF) == 0
        assert level_for(True) == 65535
        assert level_for(False) == 0

    def test_it_cant_set_unknown_power(self):
        with assertRaises(ProgrammerError):
            level_for(Power.UNKNOWN)


class TestCollections:
    def test_it_makes_a_random_id(self):
        group = Group(label="kitchen")
        assert len(group.id) == 16
        assert group.label == "kitchen"
        assert Group().id != group.id

    def test_it_complains_about_ids_that_are_not_16_bytes(self):
        with assertRaises(InvalidId, got=b"short", kind="Location"):
            Location(b"short")
        with assertRaises(InvalidId):
            Group("0123456789abcdef")

    def test_it_is_equal_by_id(self):
        ident = uuid.uuid4().bytes
        assert Group(ident, "one") == Group(ident, "two")
        assert Group(ident) != Location(ident)
        assert len({Group(ident, "one"), Group(ident, "two")}) == 1

    def test_it_can_update_its_label(self):
        group = Group(label="one", updated_at=1)
        with mock.patch("time.time", return_value=200):
            renamed = group.update_label("two")
        assert renamed == group
        assert renamed.label == "two"
        assert renamed.updated_at == 200
        assert group.label == "one"

    def test_it_goes_to_and_from_messages(self):
        location = Location(b"a" * 16, "home", 1500)
        kwargs = location.as_set_kwargs()
        assert kwargs == {"location": b"a" * 16, "label": "home", "updated_at": 1500 * 10 ** 9}

        pkt = DeviceMessages.StateLocation(**kwargs)
        found = Location.from_packet(pkt)
        assert found == location
        assert found.label == "home"
        assert found.updated_at == 1500

    def test_it_has_a_hex_id(self):
        assert Group(b"\x01" * 16).hex_id == "01" * 16


class TestSignal:
    def test_it_turns_milliwatts_into_decibels(self):
        assert Signal(1e-5).value == -50
        assert Signal(100).value == 20
        assert Signal(0).value == Signal.NO_SIGNAL

    def test_it_describes_rssi(self):
        assert Signal(1e-5).text == "Good signal"
        assert Signal(10 ** -6.5).text == "Alright signal"
        assert Signal(10 ** -7.5).text == "Somewhat bad signal"
        assert Signal(1e-9).text == "Very bad signal"

    def test_it_describes_snr(self):
        assert Signal(0).text == "No signal"
        assert Signal(10 ** 0.4).text == "Very bad signal"
        assert Signal(10).text == "Somewhat bad signal"
        assert Signal(10 ** 1.4).text == "Alright signal"
        assert Signal(100).text == "Good signal"
        assert Signal(10 ** 0.6).text == "No signal"

    def test_it_has_a_str(self):
        assert str(Signal(1e-5)) == "Good signal (-50)"

    def test_it_makes_connection_info_from_a_packet(self):
        info = ConnectionInfo.from_packet(DeviceMessages.StateWifiInfo(signal=1e-5, tx=3, rx=4))
        assert info.signal_strength.value == -50
        assert (info.bytes_sent, info.bytes_received) == (3, 4)


class TestFormatUptime:
    def test_it_formats_hours_minutes_and_seconds(self):
        assert format_uptime(0) == "00:00:00"
        assert format_uptime(3723.6) == "01:02:03"

    def test_it_includes_days(self):
        assert format_uptime(2 * 86400 + 61) == "2 days, 00:01:01"


class TestMultizoneEffectInfo:
    def test_it_has_move_effects_both_ways(self):
        forward = MultizoneEffectInfo.move(3000)
        assert forward.type is enums.MultiZoneEffectType.MOVE
        assert forward.parameters == [1, 1, 0, 0, 0, 0, 0, 0]
        assert not forward.is_backward

        backward = MultizoneEffectInfo.move(3000, backward=True)
        assert backward.is_backward
        assert backward != forward

    def test_it_goes_through_a_message(self):
        effect = MultizoneEffectInfo.move(2500)
        pkt = MultiZoneMessages.StateMultiZoneEffect(**effect.as_set_kwargs())
        found = MultizoneEffectInfo.from_packet(pkt)
        assert found == effect
        assert found.instanceid == 99

    def test_it_has_off(self):
        assert MultizoneEffectInfo.off().type is enums.MultiZoneEffectType.OFF


class TestTileEffectInfo:
    def test_it_has_stock_effects(self):
        assert TileEffectInfo.off().type is enums.TileEffectType.OFF
        assert TileEffectInfo.flame(4000).speed == 4000

        morph = TileEffectInfo.morph(5000, RED, BLUE)
        assert morph.type is enums.TileEffectType.MORPH
        assert morph.palette == [RED, BLUE]

    def test_it_puts_sky_settings_in_the_parameters(self):
        sky = TileEffectInfo.sky(6000, enums.TileEffectSkyType.CLOUDS, 50)
        assert sky.parameters[0] == enums.TileEffectSkyType.CLOUDS.value
        assert sky.parameters[4] == 50
        assert sky.sky_type is enums.TileEffectSkyType.CLOUDS
        assert sky.cloud_saturation_min == 50
        assert TileEffectInfo.flame(1).sky_type is None

    def test_it_goes_through_a_message(self):
        effect = TileEffectInfo.morph(5000, RED, BLUE)
        pkt = TileMessages.StateTileEffect(**effect.as_set_kwargs())
        found = TileEffectInfo.from_packet(pkt)
        assert found == effect
        assert len(found.palette) == 2

    def test_it_only_keeps_16_colors(self):
        assert len(TileEffectInfo.morph(1, *([RED] * 20)).palette) == 16
