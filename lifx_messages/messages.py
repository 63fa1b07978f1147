from lifx_messages import enums, fields
from lifx_messages.frame import msg

from lifx_protocol.messages import Messages
from lifx_protocol.types import Optional, T

from delfick_project.norms import sb

ACK = ["Acknowledgement"]


def empty(pkt, attr):
    return pkt.actual(attr) in (Optional, sb.NotSpecified)


########################
###   CORE
########################


class CoreMessages(Messages):
    Acknowledgement = msg(45)


########################
###   DISCOVERY
########################


class DiscoveryMessages(Messages):
    GetService = msg(2, responds_with=["StateService"])

    StateService = msg(
        3,
        ("service", T.Uint8.enum(enums.Services)),
        ("port", T.Uint32),
    )


########################
###   DEVICE
########################


class DeviceMessages(Messages):
    GetHostInfo = msg(12, responds_with=["StateHostInfo"])

    StateHostInfo = msg(
        13,
        ("signal", T.Float),
        ("tx", T.Uint32),
        ("rx", T.Uint32),
        ("reserved6", T.Reserved(16)),
    )

    GetHostFirmware = msg(14, responds_with=["StateHostFirmware"])

    StateHostFirmware = msg(
        15,
        ("build", T.Uint64),
        ("reserved6", T.Reserved(64)),
        ("version_minor", T.Uint16),
        ("version_major", T.Uint16),
    )

    GetWifiInfo = msg(16, responds_with=["StateWifiInfo"])

    StateWifiInfo = StateHostInfo.using(17)

    GetWifiFirmware = msg(18, responds_with=["StateWifiFirmware"])

    StateWifiFirmware = StateHostFirmware.using(19)

    GetPower = msg(20, responds_with=["StatePower"])

    SetPower = msg(21, ("level", T.Uint16), responds_with=ACK)

    StatePower = msg(22, ("level", T.Uint16))

    GetLabel = msg(23, responds_with=["StateLabel"])

    SetLabel = msg(24, ("label", T.String(32 * 8)), responds_with=ACK)

    StateLabel = SetLabel.using(25)

    GetVersion = msg(32, responds_with=["StateVersion"])

    StateVersion = msg(
        33,
        ("vendor", T.Uint32),
        ("product", T.Uint32),
        ("version", T.Uint32),
    )

    GetInfo = msg(34, responds_with=["StateInfo"])

    StateInfo = msg(
        35,
        ("time", T.Uint64),
        ("uptime", fields.nano_to_seconds),
        ("downtime", fields.nano_to_seconds),
    )

    GetLocation = msg(48, responds_with=["StateLocation"])

    SetLocation = msg(
        49,
        ("location", T.Bytes(16 * 8)),
        ("label", T.String(32 * 8)),
        ("updated_at", T.Uint64),
        responds_with=ACK,
    )

    StateLocation = SetLocation.using(50)

    GetGroup = msg(51, responds_with=["StateGroup"])

    SetGroup = msg(
        52,
        ("group", T.Bytes(16 * 8)),
        ("label", T.String(32 * 8)),
        ("updated_at", T.Uint64),
        responds_with=ACK,
    )

    StateGroup = SetGroup.using(53)

    EchoRequest = msg(58, ("echoing", T.Bytes(64 * 8)), responds_with=["EchoResponse"])

    EchoResponse = EchoRequest.using(59)


########################
###   LIGHT
########################


class LightMessages(Messages):
    GetColor = msg(101, responds_with=["LightState"])

    SetColor = msg(
        102,
        ("reserved6", T.Reserved(8)),
        *fields.hsbk,
        ("duration", fields.duration_type),
        responds_with=ACK,
    )

    SetWaveform = msg(
        103,
        ("reserved6", T.Reserved(8)),
        ("transient", T.BoolInt.default(0)),
        *fields.hsbk,
        ("period", fields.waveform_period),
        ("cycles", T.Float.default(1)),
        ("skew_ratio", fields.waveform_skew_ratio),
        ("waveform", T.Uint8.enum(enums.Waveform).default(enums.Waveform.SAW)),
        responds_with=ACK,
    )

    LightState = msg(
        107,
        *fields.hsbk,
        ("reserved6", T.Reserved(16)),
        ("power", T.Uint16),
        ("label", T.String(32 * 8)),
        ("reserved7", T.Reserved(64)),
    )

    GetLightPower = msg(116, responds_with=["StateLightPower"])

    SetLightPower = msg(
        117,
        ("level", T.Uint16),
        ("duration", fields.duration_type),
        responds_with=ACK,
    )

    StateLightPower = msg(118, ("level", T.Uint16))

    SetWaveformOptional = msg(
        119,
        ("reserved6", T.Reserved(8)),
        ("transient", T.BoolInt.default(0)),
        *fields.hsbk_with_optional,
        ("period", fields.waveform_period),
        ("cycles", T.Float.default(1)),
        ("skew_ratio", fields.waveform_skew_ratio),
        ("waveform", T.Uint8.enum(enums.Waveform).default(enums.Waveform.SAW)),
        ("set_hue", T.BoolInt.default(lambda pkt: 0 if empty(pkt, "hue") else 1)),
        ("set_saturation", T.BoolInt.default(lambda pkt: 0 if empty(pkt, "saturation") else 1)),
        ("set_brightness", T.BoolInt.default(lambda pkt: 0 if empty(pkt, "brightness") else 1)),
        ("set_kelvin", T.BoolInt.default(lambda pkt: 0 if empty(pkt, "kelvin") else 1)),
        responds_with=ACK,
    )

    GetInfrared = msg(120, responds_with=["StateInfrared"])

    StateInfrared = msg(121, ("brightness", T.Uint16))

    SetInfrared = msg(122, ("brightness", T.Uint16), responds_with=ACK)


########################
###   MULTI_ZONE
########################


class MultiZoneMessages(Messages):
    SetColorZones = msg(
        501,
        ("start_index", T.Uint8),
        ("end_index", T.Uint8),
        *fields.hsbk,
        ("duration", fields.duration_type),
        (
            "apply",
            T.Uint8.enum(enums.MultiZoneApplicationRequest).default(
                enums.MultiZoneApplicationRequest.APPLY
            ),
        ),
        responds_with=ACK,
    )

    GetColorZones = msg(
        502,
        ("start_index", T.Uint8),
        ("end_index", T.Uint8),
        responds_with=["StateZone", "StateMultiZone"],
    )

    StateZone = msg(
        503,
        ("zones_count", T.Uint8),
        ("zone_index", T.Uint8),
        *fields.hsbk,
    )

    StateMultiZone = msg(
        506,
        ("zones_count", T.Uint8),
        ("zone_index", T.Uint8),
        ("colors", T.Bytes(64 * 8).many(fields.Color)),
    )

    GetMultiZoneEffect = msg(507, responds_with=["StateMultiZoneEffect"])

    SetMultiZoneEffect = msg(508, *fields.multi_zone_effect_settings, responds_with=ACK)

    StateMultiZoneEffect = SetMultiZoneEffect.using(509)

    SetExtendedColorZones = msg(
        510,
        ("duration", fields.duration_type),
        (
            "apply",
            T.Uint8.enum(enums.MultiZoneApplicationRequest).default(
                enums.MultiZoneApplicationRequest.APPLY
            ),
        ),
        ("zone_index", T.Uint16.default(0)),
        ("colors_count", T.Uint8.default(lambda pkt: len(pkt.colors))),
        ("colors", T.Bytes(64 * 82).many(fields.Color)),
        responds_with=ACK,
    )

    GetExtendedColorZones = msg(511, responds_with=["StateExtendedColorZones"])

    StateExtendedColorZones = msg(
        512,
        ("zones_count", T.Uint16),
        ("zone_index", T.Uint16),
        ("colors_count", T.Uint8),
        ("colors", T.Bytes(64 * 82).many(fields.Color)),
    )


########################
###   TILE
########################


class TileMessages(Messages):
    GetDeviceChain = msg(701, responds_with=["StateDeviceChain"])

    StateDeviceChain = msg(
        702,
        ("start_index", T.Uint8),
        ("tile_devices", T.Bytes(440 * 16).many(fields.Tile)),
        ("tile_devices_count", T.Uint8),
    )

    SetUserPosition = msg(
        703,
        ("tile_index", T.Uint8),
        ("reserved6", T.Reserved(16)),
        ("user_x", T.Float),
        ("user_y", T.Float),
        responds_with=ACK,
    )

    GetTileState64 = msg(
        707,
        ("tile_index", T.Uint8),
        ("length", T.Uint8.default(1)),
        *fields.tile_buffer_rect,
        responds_with=["StateTileState64"],
    )

    StateTileState64 = msg(
        711,
        ("tile_index", T.Uint8),
        *fields.tile_buffer_rect,
        ("colors", T.Bytes(64 * 64).many(fields.Color)),
    )

    SetTileState64 = msg(
        715,
        ("tile_index", T.Uint8),
        ("length", T.Uint8.default(1)),
        *fields.tile_buffer_rect,
        ("duration", fields.duration_type),
        ("colors", T.Bytes(64 * 64).many(fields.Color)),
        responds_with=ACK,
    )

    GetTileEffect = msg(
        718,
        ("reserved6", T.Reserved(8)),
        ("reserved7", T.Reserved(8)),
        responds_with=["StateTileEffect"],
    )

    SetTileEffect = msg(
        719,
        ("reserved8", T.Reserved(8)),
        ("reserved9", T.Reserved(8)),
        *fields.tile_effect_settings,
        responds_with=ACK,
    )

    StateTileEffect = msg(720, ("reserved8", T.Reserved(8)), *fields.tile_effect_settings)


__all__ = [
    "CoreMessages",
    "DiscoveryMessages",
    "DeviceMessages",
    "LightMessages",
    "MultiZoneMessages",
    "TileMessages",
]
