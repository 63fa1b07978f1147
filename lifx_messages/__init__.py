"""
.. lifx_module:: lifx_messages

This module contains the LIFX header, the field helpers and enums used by
messages, and the collections of messages themselves.

Use ``decode`` to turn bytes from the network into a message.
"""
from lifx_messages.messages import (
    CoreMessages,
    DiscoveryMessages,
    DeviceMessages,
    LightMessages,
    MultiZoneMessages,
    TileMessages,
)
from lifx_messages.frame import LIFXPacket, BROADCAST_TARGET

from lifx_protocol.messages import PacketTypeExtractor, MessagesMixin
from lifx_protocol.errors import BadConversion

from delfick_project.logging import lc
import logging

log = logging.getLogger("lifx_messages")

__shortdesc__ = "LIFX binary protocol messages"

HEADER_SIZE = 36


def decode(data):
    """
    Turn bytes from the network into a message

    Return None if the data is too short to be a LIFX message or if we don't
    know the message type.
    """
    if len(data) < HEADER_SIZE:
        log.debug(lc("Ignoring datagram that is too small", got=len(data)))
        return None

    try:
        protocol, pkt_type = PacketTypeExtractor.packet_type_from_bytes(data)
    except BadConversion as error:
        log.debug(lc("Failed to determine packet type", error=error))
        return None

    kls = MessagesMixin.lookup(pkt_type) if protocol == 1024 else None
    if kls is None:
        log.debug(lc("Unknown message type", protocol=protocol, pkt_type=pkt_type))
        return None

    try:
        return kls.unpack(data)
    except BadConversion as error:
        log.debug(lc("Failed to unpack message", pkt_type=pkt_type, error=error))
        return None


__all__ = [
    "decode",
    "LIFXPacket",
    "BROADCAST_TARGET",
    "CoreMessages",
    "DiscoveryMessages",
    "DeviceMessages",
    "LightMessages",
    "MultiZoneMessages",
    "TileMessages",
]
