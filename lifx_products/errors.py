from lifx_app.errors import LifxError


class IncompleteProduct(LifxError):
    desc = "Product definition was incomplete"
