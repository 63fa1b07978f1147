"""
The messages system is essentially a collection system for all the Protocol
Payloads.

We create collections of messages by defining them as properties on a subclass
of ``lifx_protocol.messages.Messages``.

This class is a combination of a mixin class for functionality and a meta class
for defining ``by_type`` on the class.
"""

from lifx_protocol.errors import BadConversion

import logging

log = logging.getLogger("lifx_protocol.messages")

registered = {}


class PacketTypeExtractor:
    @classmethod
    def packet_type_from_bytes(kls, data):
        """Return ``(protocol, pkt_type)`` from the header bytes of a packet"""
        if len(data) < 4:
            raise BadConversion("Data is too small to be a LIFX packet", got=len(data))

        protocol = (data[2] + (data[3] << 8)) & 0xFFF

        pkt_type = None
        if protocol == 1024:
            if len(data) < 36:
                raise BadConversion(
                    "Data is too small to be a LIFX packet", need_atleast=36, got=len(data)
                )
            pkt_type = data[32] + (data[33] << 8)

        return protocol, pkt_type


class MessagesMixin:
    """
    Functionality for a collection of Protocol Messages
    """

    @classmethod
    def lookup(kls, pkt_type):
        """Return the message class for this pkt_type from any registered collection"""
        for k in registered.values():
            if pkt_type in k.by_type:
                return k.by_type[pkt_type]

    @classmethod
    def by_name(kls, name):
        for k in registered.values():
            m = getattr(k, name, None)
            if m is not None and hasattr(m, "Payload"):
                return m


class MessagesMeta(type):
    """
    This metaclass puts ``by_type`` on the created class.

    This is a dictionary of {pkt_type: kls} where we get pkt_type from the
    ``kls.Payload.message_type`` where kls is each message defined on the class.
    """

    def __new__(metaname, classname, baseclasses, attrs):
        by_type = {}
        for attr, val in list(attrs.items()):
            if getattr(val, "_lifx_packet_message", False):
                m = attrs[attr] = val(attr)
                by_type[m.Payload.message_type] = m
            elif hasattr(val, "Payload") and hasattr(val.Payload, "message_type"):
                by_type[val.Payload.message_type] = val

        if MessagesMixin not in baseclasses:
            baseclasses = baseclasses + (MessagesMixin,)

        attrs["by_type"] = by_type
        kls = type.__new__(metaname, classname, baseclasses, attrs)

        if by_type:
            registered[classname] = kls

        return kls


class Messages(metaclass=MessagesMeta):
    pass
