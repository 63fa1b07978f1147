from lifx_app.errors import LifxError


class InvalidId(LifxError):
    desc = "Group and location ids must be 16 bytes"


class IncapableDevice(LifxError):
    desc = "Device can't do that"
