"""
Work out where to send discovery messages.

This is done once as an explicit step rather than as a side effect of
importing anything:

.. code-block:: python

    from lifx_transport.broadcast import find_broadcast_addresses

    found = find_broadcast_addresses()
    if found.error:
        print("Couldn't look at the network interfaces", found.error)

    for address in found.addresses:
        print(address)
"""
from lifx_app.helpers import lc

import logging
import socket
import psutil

log = logging.getLogger("lifx_transport.broadcast")

DEFAULT_BROADCAST = "255.255.255.255"


class BroadcastAddresses:
    """The result of looking for broadcast addresses"""

    def __init__(self, addresses, error=None):
        self.error = error
        self.addresses = list(addresses)

    def __iter__(self):
        return iter(self.addresses)

    def __len__(self):
        return len(self.addresses)

    def __bool__(self):
        return bool(self.addresses)

    def __repr__(self):
        return f"<BroadcastAddresses {self.addresses} error={self.error!r}>"

    def or_default(self):
        """Our addresses, or the limited broadcast address if we found none"""
        if self.addresses:
            return list(self.addresses)
        return [DEFAULT_BROADCAST]


def find_broadcast_addresses(net_if_addrs=None):
    """
    Return a ``BroadcastAddresses`` with the IPv4 broadcast address of every
    interface on this machine.

    This never raises. If the interfaces can't be read we log why and return
    an empty result with the error recorded on it.
    """
    if net_if_addrs is None:
        net_if_addrs = psutil.net_if_addrs

    try:
        interfaces = net_if_addrs()
    except (OSError, psutil.Error) as error:
        log.error(lc("Failed to list network interfaces", error=error))
        return BroadcastAddresses([], error=error)

    found = []
    for name, addrs in sorted(interfaces.items()):
        for addr in addrs:
            if addr.family != socket.AF_INET or not addr.broadcast:
                continue
            if addr.broadcast not in found:
                log.debug(lc("Found broadcast address", interface=name, address=addr.broadcast))
                found.append(addr.broadcast)

    return BroadcastAddresses(found)
