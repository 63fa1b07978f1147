"""
.. lifx_module:: lifx_transport

Getting messages to devices over UDP and collecting what they say back.

``lifx_transport.broadcast`` finds the broadcast addresses of this machine,
``lifx_transport.connection`` has the request/response engine and
``lifx_transport.fake`` has pretend devices for tests.
"""
from lifx_transport.connection import Connection, RetryPolicy, NO_DATA, Datagram, make_source
from lifx_transport.broadcast import find_broadcast_addresses, BroadcastAddresses
from lifx_transport.errors import NoResponse, FailedToSend

__shortdesc__ = "UDP transport for LIFX messages"

__all__ = [
    "Connection",
    "RetryPolicy",
    "NO_DATA",
    "Datagram",
    "make_source",
    "find_broadcast_addresses",
    "BroadcastAddresses",
    "NoResponse",
    "FailedToSend",
]
