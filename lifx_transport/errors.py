from lifx_app.errors import LifxError


class NoResponse(LifxError):
    desc = "Didn't get a response from the device"


class FailedToSend(LifxError):
    desc = "Couldn't send the message"
