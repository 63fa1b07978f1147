from lifx_app.errors import LifxError


class BadConversion(LifxError):
    desc = "Bad conversion"


class InvalidField(LifxError):
    desc = "Field is invalid"
