from lifx_products.base import ProductsHolder
from lifx_products.enums import Zones
from lifx_products import lifx


class ProductRegistry:
    class UNKNOWN(lifx.Product):
        pid = 0
        friendly = "Unknown Product"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (0, 0)

    class LMB_MESH_A21(lifx.Product):
        pid = 1
        friendly = "LIFX Original 1000"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LMBG_MESH_GU10(lifx.Product):
        pid = 3
        friendly = "LIFX Color 650"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCMV4_A19_WHITE_LV(lifx.Product):
        pid = 10
        friendly = "LIFX White 800 (Low Voltage)"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 6500)

    class LCMV4_A19_WHITE_HV(lifx.Product):
        pid = 11
        friendly = "LIFX White 800 (High Voltage)"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 6500)

    class LCMV4_A21_COLOR(lifx.Product):
        pid = 15
        friendly = "LIFX Color 1000"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCMV4_BR30_WHITE_LV(lifx.Product):
        pid = 18
        friendly = "LIFX White 900 BR30 (Low Voltage)"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 6500)

    class LCMV4_BR30_WHITE_HV(lifx.Product):
        pid = 19
        friendly = "LIFX White 900 BR30 (High Voltage)"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 6500)

    class LCMV4_BR30_COLOR(lifx.Product):
        pid = 20
        friendly = "LIFX Color 1000 BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCMV4_A19_COLOR(lifx.Product):
        pid = 22
        friendly = "LIFX Color 1000"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_A19(lifx.Product):
        pid = 27
        friendly = "LIFX A19"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_BR30(lifx.Product):
        pid = 28
        friendly = "LIFX BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_A19_PLUS(lifx.Product):
        pid = 29
        friendly = "LIFX A19 Night Vision"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_BR30_PLUS(lifx.Product):
        pid = 30
        friendly = "LIFX BR30 Night Vision"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM1_Z(lifx.Product):
        pid = 31
        friendly = "LIFX Z"

        class cap(lifx.Capability):
            zones = Zones.LINEAR
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_Z(lifx.Product):
        pid = 32
        friendly = "LIFX Z 2"

        class cap(lifx.Capability):
            zones = Zones.LINEAR
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)
            extended_multizone_build_time = 1532997580

    class LCM2_DOWNLIGHT_OL(lifx.Product):
        pid = 36
        friendly = "LIFX Downlight"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_DOWNLIGHT_NL(lifx.Product):
        pid = 37
        friendly = "LIFX Downlight"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_BEAM(lifx.Product):
        pid = 38
        friendly = "LIFX Beam"

        class cap(lifx.Capability):
            zones = Zones.LINEAR
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)
            extended_multizone_build_time = 1532997580

    class LCM2_DOWNLIGHT_WW_IC4(lifx.Product):
        pid = 39
        friendly = "LIFX Downlight White to Warm"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (1500, 9000)

    class LCM2_DOWNLIGHT_COLOR_IC4(lifx.Product):
        pid = 40
        friendly = "LIFX Downlight"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_A19_HK(lifx.Product):
        pid = 43
        friendly = "LIFX A19"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_BR30_HK(lifx.Product):
        pid = 44
        friendly = "LIFX BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_A19_PLUS_HK(lifx.Product):
        pid = 45
        friendly = "LIFX+ A19"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM2_BR30_PLUS_HK(lifx.Product):
        pid = 46
        friendly = "LIFX+ BR30"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_MINI_COLOR(lifx.Product):
        pid = 49
        friendly = "LIFX Mini"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_MINI_WW(lifx.Product):
        pid = 50
        friendly = "LIFX Mini White to Warm"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (1500, 4000)

    class LCM3_MINI_WHITE(lifx.Product):
        pid = 51
        friendly = "LIFX Mini White"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_GU10_COLOR(lifx.Product):
        pid = 52
        friendly = "LIFX GU10"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_GU10_ST(lifx.Product):
        pid = 53
        friendly = "LIFX GU10"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_TILE(lifx.Product):
        pid = 55
        friendly = "LIFX Tile"

        class cap(lifx.Capability):
            zones = Zones.MATRIX
            has_color = True
            has_chain = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_CANDLE(lifx.Product):
        pid = 57
        friendly = "LIFX Candle"

        class cap(lifx.Capability):
            zones = Zones.MATRIX
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_MINI2_COLOR(lifx.Product):
        pid = 59
        friendly = "LIFX Mini Color"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_MINI2_WW(lifx.Product):
        pid = 60
        friendly = "LIFX Mini White to Warm"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (1500, 4000)

    class LCM3_MINI2_WHITE(lifx.Product):
        pid = 61
        friendly = "LIFX Mini White"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_A19(lifx.Product):
        pid = 62
        friendly = "LIFX A19"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_BR30(lifx.Product):
        pid = 63
        friendly = "LIFX BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_A19_PLUS(lifx.Product):
        pid = 64
        friendly = "LIFX+ A19"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_BR30_PLUS(lifx.Product):
        pid = 65
        friendly = "LIFX+ BR30"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_MINI2_WHITE_INT(lifx.Product):
        pid = 66
        friendly = "LIFX Mini White"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_CANDLE_CA(lifx.Product):
        pid = 68
        friendly = "LIFX Candle"

        class cap(lifx.Capability):
            zones = Zones.MATRIX
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_CANDLE_WW(lifx.Product):
        pid = 81
        friendly = "LIFX Candle White to Warm"

        class cap(lifx.Capability):
            zones = Zones.MATRIX
            has_color = False
            min_kelvin, max_kelvin = (2200, 6500)

    class LCM3_FILAMENT_ST64_CLEAR_US(lifx.Product):
        pid = 82
        friendly = "LIFX Filament Clear"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2100, 2100)

    class LCM3_FILAMENT_ST64_AMBER_US(lifx.Product):
        pid = 85
        friendly = "LIFX Filament Amber"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2000, 2000)

    class LCM3_MINI_WHITE_INTL(lifx.Product):
        pid = 88
        friendly = "LIFX Mini White"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_32_SWITCH_I(lifx.Product):
        pid = 89
        friendly = "LIFX Switch"

        class cap(lifx.NonLightCapability):
            pass

    class LCM3_A19_CLEAN(lifx.Product):
        pid = 90
        friendly = "LIFX Clean"

        class cap(lifx.Capability):
            has_color = False
            has_hev = True
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_32_MINI_COLOR_US(lifx.Product):
        pid = 91
        friendly = "LIFX Color"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_MINI_COLOR_INTL(lifx.Product):
        pid = 92
        friendly = "LIFX Color"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_BR30_US(lifx.Product):
        pid = 94
        friendly = "LIFX BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_CANDLE_WW_INTL(lifx.Product):
        pid = 96
        friendly = "LIFX Candle White to Warm"

        class cap(lifx.Capability):
            zones = Zones.MATRIX
            has_color = False
            min_kelvin, max_kelvin = (2200, 6500)

    class LCM3_32_A19_INTL(lifx.Product):
        pid = 97
        friendly = "LIFX A19"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_BR30_INTL(lifx.Product):
        pid = 98
        friendly = "LIFX BR30"

        class cap(lifx.Capability):
            has_color = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_A19_CLEAN_INTL(lifx.Product):
        pid = 99
        friendly = "LIFX Clean"

        class cap(lifx.Capability):
            has_color = False
            has_hev = True
            min_kelvin, max_kelvin = (2700, 2700)

    class LCM3_FILAMENT_ST64_CLEAR_INTL(lifx.Product):
        pid = 100
        friendly = "LIFX Filament Clear"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2100, 2100)

    class LCM3_FILAMENT_ST64_AMBER_INTL(lifx.Product):
        pid = 101
        friendly = "LIFX Filament Amber"

        class cap(lifx.Capability):
            has_color = False
            min_kelvin, max_kelvin = (2000, 2000)

    class LCM3_32_A19_PLUS_US(lifx.Product):
        pid = 109
        friendly = "LIFX A19 Night Vision"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_BR30_PLUS_US(lifx.Product):
        pid = 110
        friendly = "LIFX BR30 Night Vision"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)

    class LCM3_32_A19_PLUS_INTL(lifx.Product):
        pid = 111
        friendly = "LIFX A19 Night Vision"

        class cap(lifx.Capability):
            has_color = True
            has_ir = True
            min_kelvin, max_kelvin = (2500, 9000)


Products = ProductsHolder(ProductRegistry)
