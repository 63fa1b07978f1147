"""
.. lifx_module:: lifx_devices

Handles on the devices on the network.

A ``Device`` is where a device is and how to talk to it. ``upgrade`` asks
the device what product it is and gives back a ``Device`` with the
capabilities of that product: ``light`` for lights, ``multizone`` for strips
and ``matrix`` for chains of tiles.

``LifxLan`` finds devices on the network and remembers them.

.. code-block:: python

    from lifx_devices import LifxLan
    from lifx_colour import RED

    lan = LifxLan()
    for device in await lan.get_lights():
        await device.light.set_color(RED, duration=1000)
"""
from lifx_devices.device import Device, Capabilities, upgrade
from lifx_devices.collections import Group, Location
from lifx_devices.effects import MultizoneEffectInfo, TileEffectInfo
from lifx_devices.errors import InvalidId, IncapableDevice
from lifx_devices.info import Signal, ConnectionInfo
from lifx_devices.multizone import MultiZone
from lifx_devices.matrix import Matrix
from lifx_devices.light import Light, LightState
from lifx_devices.power import Power
from lifx_devices.lan import LifxLan

__shortdesc__ = "Devices, their capabilities and finding them on the network"

__all__ = [
    "Device",
    "Capabilities",
    "upgrade",
    "Group",
    "Location",
    "MultizoneEffectInfo",
    "TileEffectInfo",
    "InvalidId",
    "IncapableDevice",
    "Signal",
    "ConnectionInfo",
    "MultiZone",
    "Matrix",
    "Light",
    "LightState",
    "Power",
    "LifxLan",
]
