from delfick_project.logging import lc
from functools import total_ordering
import asyncio
import logging
import time

log = logging.getLogger("lifx_app.helpers")

# Make vim be quiet
lc = lc


@total_ordering
class Firmware:
    """
    A helper for representing and comparing LIFX firmware versions

    ``build`` is the build time of the firmware in seconds since epoch
    """

    def __init__(self, major, minor, build=0):
        self.major = major
        self.minor = minor
        self.build = build

    def clone(self):
        return Firmware(self.major, self.minor, build=self.build)

    def __repr__(self):
        return f"<Firmware {self.major},{self.minor}:{self.build}>"

    def __str__(self):
        return f"{self.major}.{self.minor}"

    def __eq__(self, other):
        if isinstance(other, tuple) and len(other) == 2:
            return (self.major, self.minor) == other
        elif isinstance(other, Firmware):
            return (
                self.major == other.major
                and self.minor == other.minor
                and self.build == other.build
            )
        else:
            raise ValueError(f"Can't compare firmware with {type(other)}: {other}")

    def __lt__(self, other):
        if isinstance(other, tuple) and len(other) == 2:
            return (self.major, self.minor) < other
        elif isinstance(other, Firmware):
            return (self.major, self.minor) < (other.major, other.minor)
        else:
            raise ValueError(f"Can't compare firmware with {type(other)}: {other}")

    @property
    def build_time(self):
        """The build as a ``time.struct_time`` in UTC"""
        return time.gmtime(self.build)

    def as_dict(self):
        return {"major": self.major, "minor": self.minor, "build": self.build}


def reporter(res):
    """
    A generic reporter for asyncio tasks.

    .. code-block:: python

        t = loop.create_task(coroutine())
        t.add_done_callback(hp.reporter)

    This means that exceptions are logged and you won't get warnings about
    tasks not being looked at when they finish.

    It also handles and silences ``asyncio.CancelledError``.
    """
    if not res.cancelled():
        exc = res.exception()
        if exc:
            if not isinstance(exc, KeyboardInterrupt):
                log.exception(exc, exc_info=(type(exc), exc, exc.__traceback__))
        else:
            res.result()
            return True


def async_as_background(coroutine, name=None):
    """
    Create a task with :func:`reporter` as a done callback and return the created
    task.
    """
    t = asyncio.get_event_loop().create_task(coroutine)
    if name is not None:
        t.set_name(name)
    t.add_done_callback(reporter)
    return t


async def cancel_futures_and_wait(*futs):
    """Cancel the provided futures and wait for the ones that weren't done to finish"""
    waiting = []

    for fut in futs:
        if not fut.done():
            fut.cancel()
            waiting.append(fut)

    if waiting:
        await asyncio.wait(waiting)


def ms_to_seconds(ms):
    return max(0, ms) / 1000
