from lifx_products.base import Capability, CapabilityValue, Product
from lifx_products.enums import VendorRegistry, Zones


class Product(Product):
    vendor = VendorRegistry.LIFX

    def has_extended_api(self, build_time):
        """Whether firmware built at this many seconds since epoch has the extended multizone api"""
        return self.cap.has_extended_multizone(build_time)


class Capability(Capability):
    """
    .. attribute:: is_light
        Is this device a light

    .. attribute:: zones
        The style of zones. So strips are LINEAR and things like the candle and tile are MATRIX

    .. attribute:: has_ir
        Do we have infrared capability

    .. attribute:: has_hev
        Does this device have HEV LEDs

    .. attribute:: has_color
        Do we have hue control

    .. attribute:: has_chain
        Do we have a chain of devices

    .. attribute:: min_kelvin
        The min kelvin of this product

    .. attribute:: max_kelvin
        The max kelvin of this product

    .. attribute:: extended_multizone_build_time
        Seconds since epoch of the first firmware build supporting the extended
        multizone messages, or None if no firmware supports them

    .. autoattribute:: lifx_products.lifx.Capability.has_matrix
    .. autoattribute:: lifx_products.lifx.Capability.has_multizone
    """

    is_light = CapabilityValue(True)

    zones = CapabilityValue(Zones.SINGLE)

    has_ir = CapabilityValue(False)
    has_hev = CapabilityValue(False)
    has_color = CapabilityValue(False)
    has_chain = CapabilityValue(False)

    min_kelvin = CapabilityValue(2500)
    max_kelvin = CapabilityValue(9000)

    extended_multizone_build_time = CapabilityValue(None)

    @property
    def has_multizone(self):
        """Return whether we have LINEAR zones"""
        return self.zones is Zones.LINEAR

    @property
    def has_matrix(self):
        """Return whether we have MATRIX zones"""
        return self.zones is Zones.MATRIX

    def has_extended_multizone(self, build_time):
        """
        Return whether firmware built at ``build_time`` seconds since epoch
        understands the extended multizone messages
        """
        threshold = self.extended_multizone_build_time
        if not self.has_multizone or threshold is None or build_time is None:
            return False
        return build_time >= threshold


class NonLightCapability(Capability):
    zones = None
    is_light = False

    has_ir = None
    has_hev = None
    has_color = None
    has_chain = None

    max_kelvin = None
    min_kelvin = None
