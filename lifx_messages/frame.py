from lifx_messages.fields import target_type

from lifx_protocol.messages import MessagesMixin
from lifx_protocol.packets import PacketSpec
from lifx_protocol.types import T

from delfick_project.norms import sb

import binascii

BROADCAST_TARGET = bytes(8)


class FrameHeader(PacketSpec):
    fields = [
        ("size", T.Uint16.default(lambda pkt: pkt.Meta.size_bits // 8)),
        ("protocol", T.Uint16.S(12).default(1024)),
        ("addressable", T.Bool.default(True)),
        ("tagged", T.Bool.default(lambda pkt: pkt.is_broadcast)),
        ("reserved1", T.Reserved(2, left=True)),
        ("source", T.Uint32),
    ]


class FrameAddress(PacketSpec):
    fields = [
        ("target", target_type),
        ("reserved2", T.Reserved(48)),
        ("res_required", T.Bool.default(lambda pkt: pkt.wants_response)),
        ("ack_required", T.Bool.default(lambda pkt: pkt.wants_ack)),
        ("reserved3", T.Reserved(6)),
        ("sequence", T.Uint8),
    ]


class ProtocolHeader(PacketSpec):
    fields = [
        ("reserved4", T.Reserved(64)),
        ("pkt_type", T.Uint16.default(lambda pkt: pkt.Payload.message_type)),
        ("reserved5", T.Reserved(16)),
    ]


class LIFXPacket(PacketSpec):
    """
    The LIFXPacket represents protocol 1024.

    Every message is a subclass of this with a ``Payload`` describing the fields
    after the 36 byte header.

    .. automethod:: lifx_messages.frame.LIFXPacket.message
    """

    responds_with = ()

    # (host, port) of the device that sent this message to us
    remote_addr = None

    class Payload(PacketSpec):
        message_type = 0
        fields = []

    fields = [
        ("frame_header", FrameHeader),
        ("frame_address", FrameAddress),
        ("protocol_header", ProtocolHeader),
        ("payload", Payload),
    ]

    @property
    def message_type(self):
        return self.Payload.message_type

    @property
    def expected_response_types(self):
        """The classes that are valid replies to this message"""
        result = []
        for name in self.responds_with:
            kls = MessagesMixin.by_name(name)
            if kls is not None:
                result.append(kls)
        return tuple(result)

    @property
    def wants_ack(self):
        names = self.responds_with
        return len(names) == 1 and names[0] == "Acknowledgement"

    @property
    def wants_response(self):
        return bool(self.responds_with) and not self.wants_ack

    @property
    def target_bytes(self):
        target = self.actual("target")
        if target is None or target is sb.NotSpecified:
            return BROADCAST_TARGET
        if isinstance(target, str):
            target = binascii.unhexlify(target.replace(":", ""))
        return (bytes(target) + BROADCAST_TARGET)[:8]

    @property
    def is_broadcast(self):
        return self.target_bytes[:6] == BROADCAST_TARGET[:6]

    @property
    def serial(self):
        """The target as a 12 character hex string or None for broadcast"""
        if self.is_broadcast:
            return None
        return binascii.hexlify(self.target_bytes[:6]).decode()

    @property
    def target_address(self):
        """The target as a colon separated uppercase MAC address"""
        target = self.target_bytes[:6]
        return ":".join(f"{b:02X}" for b in target)

    def payload_bytes(self):
        """The packed payload of this message without the header"""
        return self.tobytes()[36:]

    def __or__(self, kls):
        """
        Determine if this object is of type ``kls``. It does this by comparing
        the ``pkt_type`` of this packet and ``kls.Payload.message_type``.
        """
        return self.pkt_type == kls.Payload.message_type

    def matches(self, response):
        """
        Whether ``response`` is a reply to this message

        The reply must be an expected type, with the same source and sequence
        and a compatible target. A broadcast request accepts any non broadcast
        reply and a unicast request accepts the same target or a broadcast one.
        """
        if not any(response | kls for kls in self.expected_response_types):
            return False

        if response.source != self.source or response.sequence != self.sequence:
            return False

        if self.is_broadcast:
            return not response.is_broadcast

        return response.is_broadcast or response.serial == self.serial

    def __repr__(self):
        payload = ", ".join(f"{name}={self[name]!r}" for name in self.Payload.Meta.value_names)
        return (
            f"<{self.__class__.__name__}({self.serial},{self.actual('source')},"
            f"{self.actual('sequence')})({payload})>"
        )

    @classmethod
    def message(kls, message_type, *payload_fields, responds_with=()):
        """
        This is to be used in conjunction with ``lifx_protocol.messages.Messages``

        .. code-block:: python

            from lifx_protocol.messages import Messages

            class MyMessages(Messages):
                GetThing = msg(12, responds_with=["StateThing"])

                StateThing = msg(13
                    , ("field_one", field_one_type)
                    , ("field_two", field_two_type)
                    )

                StateOtherThing = StateThing.using(14)

        This method returns a function that when called with the attribute name
        will return a new class representing the message.

        ``responds_with`` is a list of the names of the messages that are valid
        replies to this message. These are resolved when needed so messages
        may reference replies defined after them.
        """

        def maker(name):
            Payload = type(
                f"{name}Payload",
                (PacketSpec,),
                {"fields": list(payload_fields), "message_type": message_type},
            )

            return type(
                name,
                (kls,),
                {
                    "Payload": Payload,
                    "responds_with": tuple(responds_with),
                    "fields": [
                        ("frame_header", FrameHeader),
                        ("frame_address", FrameAddress),
                        ("protocol_header", ProtocolHeader),
                        ("payload", Payload),
                    ],
                },
            )

        maker._lifx_packet_message = True
        maker.using = lambda mt, **kwargs: kls.message(mt, *payload_fields, **kwargs)
        return maker


# Helper for creating messages
msg = LIFXPacket.message
