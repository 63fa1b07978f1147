"""
Logging setup for programs that use these modules.

The modules themselves only ever create loggers, it's up to the program to
call ``setup_logging`` if it wants to see what they say.
"""
from rainbow_logging_handler import RainbowLoggingHandler
import logging
import sys


def setup_logging(level=logging.INFO, handler_file=sys.stderr, only_message=False):
    """
    Put a ``RainbowLoggingHandler`` on the root logger and return it

    The lifx loggers log ``lc`` dictionaries so the message column carries
    the context of each line.
    """
    log = logging.getLogger("")

    handler = RainbowLoggingHandler(handler_file)
    if only_message:
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(name)-15s %(message)s"))

    log.addHandler(handler)
    log.setLevel(level)
    return handler


def setup_logging_theme(handler, colors="light"):
    """Change the colours used by the handler to suit a light or dark terminal"""
    if colors not in ("light", "dark"):
        logging.getLogger("lifx_app.logs").warning(
            "Told to set colors to a theme we don't have, got %s", colors
        )
        return

    if not hasattr(handler, "_column_color"):
        return

    # Haven't put much effort into actually working out more than just the message colour
    if colors == "light":
        handler._column_color["%(message)s"][logging.INFO] = ("cyan", None, False)
    else:
        handler._column_color["%(message)s"][logging.INFO] = ("blue", None, False)
