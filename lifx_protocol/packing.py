from lifx_protocol.errors import BadConversion
from lifx_protocol.types import Optional

from delfick_project.norms import sb, Meta, BadSpecValue
from collections import defaultdict
from bitarray import bitarray
from lru import LRU
import binascii
import struct


packers = {}
pack_cache = defaultdict(lambda: LRU(0xFFFF))
unpack_cache = defaultdict(lambda: LRU(0xFFFF))


def pack(fmt, val):
    pk = packers.get(fmt)
    if pk is None:
        pk = packers[fmt] = struct.Struct(fmt)
    return pk.pack(val)


def unpack(fmt, val):
    pk = packers.get(fmt)
    if pk is None:
        pk = packers[fmt] = struct.Struct(fmt)
    return pk.unpack(val)


def val_to_bitarray(val, doing):
    """Convert a value into a bitarray"""
    if val is sb.NotSpecified:
        val = b""

    if type(val) is bitarray:
        return val

    if type(val) is str:
        val = binascii.unhexlify(val.encode())

    if type(val) is bytearray:
        val = bytes(val)

    if type(val) is not bytes:
        raise BadConversion("Couldn't get bitarray from a value", value=val, doing=doing)

    b = bitarray(endian="little")
    b.frombytes(val)
    return b


def zeros(size_bits):
    b = bitarray(size_bits, endian="little")
    b.setall(False)
    return b


class BitarraySlice:
    """A slice of bits for one field that knows how to turn into a raw value"""

    def __init__(self, name, typ, val, group):
        self.typ = typ
        self.val = val
        self.name = name
        self.group = group

    @property
    def unpackd(self):
        val = self.val
        typ = self.typ
        fmt = typ.struct_format

        if typ._many is not sb.NotSpecified:
            return self.many(typ._many, typ.many_count)

        if fmt is bool and typ.size_bits == 1:
            return bool(len(val) and val[0])

        size = typ.original_size if fmt is not None else typ.size_bits
        if len(val) < size:
            padding = zeros(size - len(val))
            if getattr(typ, "left_cut", False):
                val = padding + val
            else:
                val = val + padding

        if len(val) % 8 != 0:
            val = val + zeros(8 - len(val) % 8)

        if fmt is None:
            return val.tobytes()

        key = (fmt, val.tobytes())
        c = unpack_cache[fmt].get(key)
        if c is None:
            try:
                c = unpack_cache[fmt][key] = unpack(fmt, key[1])[0]
            except (struct.error, TypeError, ValueError) as error:
                raise BadConversion(
                    "Failed to unpack field",
                    group=self.group,
                    field=self.name,
                    typ=typ,
                    val=val.to01(),
                    error=error,
                )

        return c

    def many(self, kls, number):
        size = kls.Meta.size_bits
        return [kls.unpack(self.val[i * size : (i + 1) * size]) for i in range(number)]


class FieldInfo:
    """A single field with its raw value, ready to become bits"""

    def __init__(self, name, typ, val, group):
        self.typ = typ
        self.val = val
        self.name = name
        self.group = group

    def to_sized_bitarray(self):
        result = self.to_bitarray()
        size_bits = self.typ.size_bits
        if size_bits < len(result):
            if getattr(self.typ, "left_cut", False):
                result = result[-size_bits:]
            else:
                result = result[:size_bits]
        elif size_bits > len(result):
            result = result + zeros(size_bits - len(result))
        return result

    def to_bitarray(self):
        fmt = self.typ.struct_format
        val = self.val

        if self.typ.is_reserved and val is sb.NotSpecified:
            return zeros(self.typ.size_bits)

        if val is sb.NotSpecified:
            raise BadConversion(
                "Cannot pack an unspecified value", field=self.name, group=self.group, typ=self.typ
            )

        if type(val) is bitarray:
            return val

        if self.typ._many is not sb.NotSpecified:
            final = bitarray(endian="little")
            for item in val:
                final += item.pack()
            return final

        if val is Optional:
            if type(fmt) is str:
                val = 0
            else:
                return zeros(self.typ.size_bits)

        key = (fmt, val)
        c = pack_cache[fmt].get(key)
        if c is None:
            c = pack_cache[fmt][key] = self._to_bitarray(fmt, val)
        return c

    def _to_bitarray(self, fmt, val):
        if type(fmt) is str:
            b = bitarray(endian="little")
            try:
                b.frombytes(pack(fmt, val))
            except struct.error as error:
                raise BadConversion(
                    "Failed trying to convert a value",
                    val=val,
                    fmt=fmt,
                    error=error,
                    group=self.group,
                    name=self.name,
                )
            return b

        elif fmt is bool:
            if type(val) is not bool:
                raise BadConversion(
                    "Trying to convert a non boolean into 1 bit",
                    got=val,
                    group=self.group,
                    field=self.name,
                )
            return bitarray("1" if val else "0", endian="little")

        b = bitarray(endian="little")
        b.frombytes(val)
        return b


class PacketPacking:
    @classmethod
    def normalise(kls, pkt, name, typ, val, unpacking=False):
        group = pkt.Meta.name_to_group.get(name, pkt.__class__.__name__)
        try:
            return typ.spec(pkt, unpacking=unpacking).normalise(Meta.empty().at(name), val)
        except BadSpecValue as error:
            raise BadConversion("Failed to normalise field", group=group, field=name, error=error)

    @classmethod
    def fields_in(kls, pkt):
        for name, typ in pkt.Meta.all_field_types:
            group = pkt.Meta.name_to_group.get(name, pkt.__class__.__name__)
            val = pkt.actual(name)
            if val is sb.NotSpecified:
                val = typ.default_for(pkt)

            if val is Optional or (typ.is_reserved and val is sb.NotSpecified):
                yield FieldInfo(name, typ, val, group)
                continue

            if val is sb.NotSpecified:
                raise BadConversion("Cannot pack an unspecified value", field=name, group=group)

            yield FieldInfo(name, typ, kls.normalise(pkt, name, typ, val), group)

    @classmethod
    def pack(kls, pkt):
        """
        Use the ``Meta`` on the packet to determine the order of all the fields
        and convert each one into a bitarray.

        The bitarrays are concatenated to create one final little endian bitarray.
        """
        final = bitarray(endian="little")
        for info in kls.fields_in(pkt):
            final += info.to_sized_bitarray()
        return final

    @classmethod
    def unpack(kls, pkt_kls, value):
        """
        If the ``value`` is not a bitarray already, it is assumed to be ``bytes``
        and converted into a bitarray.

        Missing bits at the end of the value are treated as zeros.
        """
        value = val_to_bitarray(value, doing="Making bitarray to unpack")

        i = 0
        final = pkt_kls()
        for name, typ in pkt_kls.Meta.all_field_types:
            val = value[i : i + typ.size_bits]
            i += typ.size_bits

            if len(val) < typ.size_bits:
                val = val + zeros(typ.size_bits - len(val))

            raw = BitarraySlice(name, typ, val, pkt_kls.__name__).unpackd
            if typ.is_reserved:
                final.set_raw(name, raw)
            else:
                final.set_raw(name, kls.normalise(final, name, typ, raw, unpacking=True))

        return final
