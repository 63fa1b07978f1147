from lifx_messages import enums

from lifx_protocol.packets import PacketSpec
from lifx_protocol.types import T

from delfick_project.norms import sb

duration_type = T.Uint32.default(0).allow_float()

extended_duration_type = T.Uint64.default(0).allow_float()

nano_to_seconds = T.Uint64.transform(
    lambda _, v: int(v * 1e9),
    lambda v: v / 1e9,
).allow_float()

waveform_period = T.Uint32.default(0).allow_float()

waveform_skew_ratio = (
    T.Int16.default(0.5)
    .transform(
        lambda _, v: int(65535 * (0 if v is sb.NotSpecified else float(v))) - 32768,
        lambda v: float(v + 32768) / 65535,
    )
    .allow_float()
)

target_type = T.Bytes(64).default(None)

hsbk = (
    ("hue", T.Uint16),
    ("saturation", T.Uint16),
    ("brightness", T.Uint16),
    ("kelvin", T.Uint16.default(3500)),
)

hsbk_with_optional = (
    ("hue", T.Uint16.optional()),
    ("saturation", T.Uint16.optional()),
    ("brightness", T.Uint16.optional()),
    ("kelvin", T.Uint16.optional()),
)


class Color(PacketSpec):
    fields = list(hsbk)


def effect_parameters(amount=8):
    return ("parameters", T.Bytes(32 * amount).default(None))


multi_zone_effect_settings = (
    ("instanceid", T.Uint32.default(0)),
    ("type", T.Uint8.enum(enums.MultiZoneEffectType).default(enums.MultiZoneEffectType.MOVE)),
    ("reserved6", T.Reserved(16)),
    ("speed", duration_type.default(5000)),
    ("duration", extended_duration_type),
    ("reserved7", T.Reserved(32)),
    ("reserved8", T.Reserved(32)),
    effect_parameters(),
)

tile_state_device = (
    ("accel_meas_x", T.Int16),
    ("accel_meas_y", T.Int16),
    ("accel_meas_z", T.Int16),
    ("reserved6", T.Reserved(16)),
    ("user_x", T.Float),
    ("user_y", T.Float),
    ("width", T.Uint8),
    ("height", T.Uint8),
    ("reserved7", T.Reserved(8)),
    ("device_version_vendor", T.Uint32),
    ("device_version_product", T.Uint32),
    ("device_version_version", T.Uint32),
    ("firmware_build", T.Uint64),
    ("reserved8", T.Reserved(64)),
    ("firmware_version_minor", T.Uint16),
    ("firmware_version_major", T.Uint16),
    ("reserved9", T.Reserved(32)),
)


class Tile(PacketSpec):
    fields = list(tile_state_device)


tile_buffer_rect = (
    ("reserved6", T.Reserved(8)),
    ("x", T.Uint8.default(0)),
    ("y", T.Uint8.default(0)),
    ("width", T.Uint8.default(8)),
)

tile_effect_settings = (
    ("instanceid", T.Uint32.default(0)),
    ("type", T.Uint8.enum(enums.TileEffectType).default(enums.TileEffectType.OFF)),
    ("speed", duration_type.default(5000)),
    ("duration", extended_duration_type),
    ("reserved6", T.Reserved(32)),
    ("reserved7", T.Reserved(32)),
    effect_parameters(),
    ("palette_count", T.Uint8.default(lambda pkt: len(pkt.palette))),
    ("palette", T.Bytes(64 * 16).many(Color)),
)
