from lifx_transport.fake import FakeDevice, FakeTile

from lifx_messages import (
    enums,
    DeviceMessages,
    LightMessages,
    MultiZoneMessages,
    TileMessages,
)


def stamped(pkt, serial="d073d5000001"):
    return pkt.clone(source=2, sequence=3, target=serial)


class TestFakeDevice:
    def test_it_knows_what_it_is(self):
        assert FakeDevice("d073d5000001", 55).tiles
        assert FakeDevice("d073d5000001", 31).zones
        assert not FakeDevice("d073d5000001", 1).zones
        assert FakeDevice("d073d5000001", 32, firmware_build=1600000000).has_extended_multizone
        assert not FakeDevice("d073d5000001", 31).has_extended_multizone

    def test_it_only_wants_messages_for_it(self):
        device = FakeDevice("d073d5000001", 1)
        assert device.wants(stamped(DeviceMessages.GetLabel()))
        assert device.wants(stamped(DeviceMessages.GetLabel(), serial=None))
        assert not device.wants(stamped(DeviceMessages.GetLabel(), serial="d073d5000002"))

        with device.offline():
            assert not device.wants(stamped(DeviceMessages.GetLabel()))
        assert device.wants(stamped(DeviceMessages.GetLabel()))

    async def test_it_replies_with_the_same_source_and_sequence(self):
        device = FakeDevice("d073d5000001", 1, label="den")
        replies = await device.got_message(stamped(DeviceMessages.GetLabel()))
        assert len(replies) == 1
        reply = replies[0]
        assert (reply.source, reply.sequence, reply.serial) == (2, 3, "d073d5000001")
        assert reply.label == "den"
        assert device.received_of(DeviceMessages.GetLabel)

    async def test_it_acknowledges_and_changes_state(self):
        device = FakeDevice("d073d5000001", 1)
        replies = await device.got_message(
            stamped(LightMessages.SetColor(hue=1, saturation=2, brightness=3, kelvin=4000))
        )
        assert [r.__class__.__name__ for r in replies] == ["Acknowledgement"]
        assert device.color == (1, 2, 3, 4000)

    async def test_it_only_changes_flags_set_by_waveform_optional(self):
        device = FakeDevice("d073d5000001", 1, color=(10, 20, 30, 3500))
        await device.got_message(
            stamped(LightMessages.SetWaveformOptional(brightness=0, waveform=enums.Waveform.PULSE))
        )
        assert device.color == (10, 20, 0, 3500)

    async def test_it_ignores_messages_it_is_told_to(self):
        device = FakeDevice("d073d5000001", 1)
        with device.no_replies_for(DeviceMessages.GetLabel):
            assert await device.got_message(stamped(DeviceMessages.GetLabel())) == []
        assert len(device.received) == 1

    async def test_it_only_does_infrared_for_infrared_products(self):
        assert await FakeDevice("d073d5000001", 1).got_message(
            stamped(LightMessages.GetInfrared())
        ) == []

        replies = await FakeDevice("d073d5000001", 29, infrared=100).got_message(
            stamped(LightMessages.GetInfrared())
        )
        assert replies[0].brightness == 100


class TestFakeZones:
    async def test_it_gives_one_zone(self):
        device = FakeDevice("d073d5000001", 31, zones=[(i, 0, 0, 3500) for i in range(10)])
        replies = await device.got_message(
            stamped(MultiZoneMessages.GetColorZones(start_index=0, end_index=0))
        )
        assert len(replies) == 1
        assert replies[0] | MultiZoneMessages.StateZone
        assert replies[0].zones_count == 10

    async def test_it_sets_zones(self):
        device = FakeDevice("d073d5000001", 31, zones=[(0, 0, 0, 3500)] * 10)
        await device.got_message(
            stamped(
                MultiZoneMessages.SetColorZones(
                    start_index=2, end_index=3, hue=5, saturation=6, brightness=7, kelvin=3500
                )
            )
        )
        assert device.zones[1:5] == [
            (0, 0, 0, 3500),
            (5, 6, 7, 3500),
            (5, 6, 7, 3500),
            (0, 0, 0, 3500),
        ]

    async def test_it_does_extended_zones_when_the_firmware_supports_it(self):
        device = FakeDevice("d073d5000001", 32, zones=[(0, 0, 0, 3500)] * 4)
        await device.got_message(
            stamped(
                MultiZoneMessages.SetExtendedColorZones(
                    colors=[
                        {"hue": i, "saturation": 0, "brightness": 0, "kelvin": 3500}
                        for i in range(4)
                    ]
                )
            )
        )
        assert [c[0] for c in device.zones] == [0, 1, 2, 3]

        replies = await device.got_message(stamped(MultiZoneMessages.GetExtendedColorZones()))
        assert replies[0].zones_count == 4
        assert [c["hue"] for c in replies[0].colors[:4]] == [0, 1, 2, 3]


class TestFakeTiles:
    async def test_it_describes_the_chain(self):
        device = FakeDevice(
            "d073d5000001", 55, tiles=[FakeTile(user_x=0), FakeTile(user_x=1, accel=(100, 0, 0))]
        )
        replies = await device.got_message(stamped(TileMessages.GetDeviceChain()))
        chain = replies[0]
        assert chain.tile_devices_count == 2
        assert chain.tile_devices[1]["user_x"] == 1
        assert chain.tile_devices[1]["accel_meas_x"] == 100
        assert chain.tile_devices[0]["device_version_product"] == 55

    async def test_it_sets_and_gets_tile_colors(self):
        device = FakeDevice("d073d5000001", 55, tiles=[FakeTile(), FakeTile()])
        colors = [{"hue": i, "saturation": 0, "brightness": 0, "kelvin": 3500} for i in range(64)]
        await device.got_message(stamped(TileMessages.SetTileState64(tile_index=1, colors=colors)))
        assert device.tiles[1].colors[5] == (5, 0, 0, 3500)
        assert device.tiles[0].colors[5] == (0, 0, 0, 3500)

        replies = await device.got_message(
            stamped(TileMessages.GetTileState64(tile_index=0, length=2))
        )
        assert [r.tile_index for r in replies] == [0, 1]
        assert replies[1].colors[63]["hue"] == 63

    async def test_it_remembers_effects(self):
        device = FakeDevice("d073d5000001", 55)
        await device.got_message(
            stamped(TileMessages.SetTileEffect(type=enums.TileEffectType.FLAME, speed=3000))
        )
        replies = await device.got_message(stamped(TileMessages.GetTileEffect()))
        assert replies[0].type is enums.TileEffectType.FLAME
        assert replies[0].speed == 3000
