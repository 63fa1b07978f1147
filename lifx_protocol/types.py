"""
Here we create classes that represent the individual fields in the LIFX packets
"""

from lifx_protocol.errors import BadConversion

from lifx_app.errors import ProgrammerError

from delfick_project.norms import sb, BadSpecValue
from bitarray import bitarray
import binascii
import logging
import enum

log = logging.getLogger("lifx_protocol.types")

Optional = type("Optional", (), {"__repr__": lambda s: "<Optional>"})()


class UnknownEnum:
    def __init__(self, val):
        self.name = "UNKNOWN"
        self.value = val

    def __repr__(self):
        return f"<UNKNOWN: {self.value}>"

    def __eq__(self, other):
        return isinstance(other, self.__class__) and other.value == self.value

    def __hash__(self):
        return hash(("UNKNOWN", self.value))


class Type:
    """
    A specification of how to pack and unpack bits from/to a packet

    struct_format
        Either a ``struct`` format specifier, ``None`` or ``bool``.

        ``bool`` represents a single bit indicating 0 or 1

        ``None`` represents treating the field as just bytes

    conversion
        The python type the value takes in python land

    .. note:: Calling an instance allows us to set ``size_bits`` which is an integer
      representing the number of ``bits`` this field should use.
    """

    size_bits = NotImplemented
    _enum = sb.NotSpecified
    _many = sb.NotSpecified
    _default = sb.NotSpecified
    _transform = sb.NotSpecified
    _unpack_transform = sb.NotSpecified

    _optional = False
    _allow_float = False
    _unknown_enum_values = False

    def __init__(self, struct_format, conversion):
        self.conversion = conversion
        self.struct_format = struct_format

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.size_bits})>"

    def __call__(self, size_bits, left=sb.NotSpecified):
        """
        Return us a new instance with a different size_bits

        This is a shortcut for calling ``self.S(<size_bits>, left=<left>)``
        """
        return self.S(size_bits, left=left)

    def S(self, size_bits, left=sb.NotSpecified):
        """Return a new instance with a different size_bits"""
        result = self.__class__(self.struct_format, self.conversion)
        result.size_bits = size_bits
        result._enum = self._enum
        result._many = self._many
        result._default = self._default
        result._optional = self._optional
        result._transform = self._transform
        result._allow_float = self._allow_float
        result._unpack_transform = self._unpack_transform
        result._unknown_enum_values = self._unknown_enum_values

        result.original_size = getattr(self, "original_size", size_bits)
        if left is not sb.NotSpecified:
            result.left_cut = left
        elif hasattr(self, "left_cut"):
            result.left_cut = self.left_cut
        return result

    @classmethod
    def t(kls, name, struct_format, conversion):
        """Create a new type"""
        return type(name, (kls,), {})(struct_format, conversion)

    def allow_float(self):
        """Set the _allow_float option"""
        res = self.S(self.size_bits)
        res._allow_float = True
        return res

    def enum(self, enum, allow_unknown=True):
        """Set the _enum option"""
        res = self.S(self.size_bits)
        res._enum = enum
        res._unknown_enum_values = allow_unknown
        return res

    def many(self, kls):
        """
        Say this field is a list of ``kls`` packets

        The number of items is however many ``kls`` fit in ``size_bits``
        """
        res = self.S(self.size_bits)
        res._many = kls
        return res

    def transform(self, pack_func, unpack_func):
        """Set a ``pack_func`` and ``unpack_func`` for transforming the value for use"""
        for f in (pack_func, unpack_func):
            if not callable(f):
                raise ProgrammerError("Sorry, transform can only be given two callables")

        res = self.S(self.size_bits)
        res._transform = pack_func
        res._unpack_transform = unpack_func
        return res

    def default(self, value):
        """Set a default value for this field"""
        res = self.S(self.size_bits)
        if not callable(value):
            res._default = lambda pkt: value
        else:
            res._default = value
        return res

    def optional(self):
        """Set the _optional option"""
        res = self.S(self.size_bits)
        res._optional = True
        return res

    @classmethod
    def install(kls, *types):
        """Create many types at the same time! and put them onto the Type class"""
        for name, size, fmt, conversion in types:
            if size is not None:
                setattr(kls, name, kls.t(name, fmt, conversion)(size))
            else:
                setattr(kls, name, kls.t(name, fmt, conversion))

    @property
    def is_reserved(self):
        return self.__class__.__name__ == "Reserved"

    @property
    def many_count(self):
        if self._many is sb.NotSpecified:
            return None
        return self.size_bits // self._many.Meta.size_bits

    def default_for(self, pkt):
        """The python land value to use when nothing has been set"""
        if self._default is not sb.NotSpecified:
            return self._default(pkt)
        if self._optional:
            return Optional
        if self._many is not sb.NotSpecified:
            return []
        return sb.NotSpecified

    def spec(self, pkt, unpacking=False):
        """
        Return a delfick_project.norms spec object for normalising values before
        packing and after unpacking

        Transforms are applied before normalising when packing and after
        normalising when unpacking.
        """
        spec = self._spec(pkt, unpacking=unpacking)

        if unpacking:
            if self._unpack_transform is not sb.NotSpecified:
                spec = untransform_spec(spec, self._unpack_transform)
        elif self._transform is not sb.NotSpecified:
            spec = transform_spec(pkt, spec, self._transform)

        return spec

    def _spec(self, pkt, unpacking=False):
        conversion = self.conversion

        if self._many is not sb.NotSpecified:
            return many_spec(self._many, self.many_count, unpacking=unpacking)

        elif conversion is int:
            return integer_spec(
                enum=None if self._enum is sb.NotSpecified else self._enum,
                unpacking=unpacking,
                allow_float=self._allow_float,
                unknown_enum_values=self._unknown_enum_values,
            )

        elif conversion is float:
            return float_spec()

        elif conversion is bool:
            return boolean()

        elif conversion == (bool, int):
            return boolean(as_int=not unpacking)

        elif conversion is bytes:
            return bytes_spec(self.size_bits)

        elif conversion is str:
            return bytes_as_string_spec(self.size_bits, unpacking=unpacking)

        raise BadConversion(
            "Cannot create a specification for this conversion",
            conversion=conversion,
            type=self.__class__.__name__,
        )


class transform_spec(sb.Spec):
    """Apply the pack transformation to a value before normalising it"""

    def __init__(self, pkt, spec, do_transform):
        self.pkt = pkt
        self.spec = spec
        self.do_transform = do_transform

    def normalise(self, meta, val):
        if val not in (sb.NotSpecified, Optional):
            val = self.do_transform(self.pkt, val)
        return self.spec.normalise(meta, val)


class untransform_spec(sb.Spec):
    """Apply the unpack transformation to a value after normalising it"""

    def __init__(self, spec, do_untransform):
        self.spec = spec
        self.do_untransform = do_untransform

    def normalise(self, meta, val):
        return self.do_untransform(self.spec.normalise(meta, val))


class integer_spec(sb.Spec):
    def __init__(self, enum=None, unpacking=False, allow_float=False, unknown_enum_values=False):
        self.enum = enum
        self.unpacking = unpacking
        self.allow_float = allow_float
        self.unknown_enum_values = unknown_enum_values

    def normalise_empty(self, meta):
        raise BadSpecValue("Expected a value", meta=meta)

    def normalise_filled(self, meta, val):
        if self.enum is not None:
            return enum_spec(
                self.enum, unpacking=self.unpacking, allow_unknown=self.unknown_enum_values
            ).normalise(meta, val)

        if isinstance(val, bool):
            return int(val)

        if isinstance(val, float):
            if not self.allow_float:
                raise BadSpecValue("Expected an integer", got=val, meta=meta)
            return int(val)

        if not isinstance(val, int):
            raise BadSpecValue("Expected an integer", got=type(val), meta=meta)

        return val


class enum_spec(sb.Spec):
    """
    When unpacking we turn numbers into enum members and when packing we turn
    enum members, their names or their values into numbers.
    """

    def __init__(self, em, unpacking=False, allow_unknown=False):
        self.em = em
        self.unpacking = unpacking
        self.allow_unknown = allow_unknown

    def normalise_filled(self, meta, val):
        if self.unpacking:
            if isinstance(val, (self.em, UnknownEnum)):
                return val
            try:
                return self.em(val)
            except ValueError:
                if self.allow_unknown:
                    return UnknownEnum(val)
                raise BadConversion(
                    "Value is not a valid value of the enum", val=val, enum=self.em, meta=meta
                )

        if isinstance(val, UnknownEnum):
            return val.value

        if isinstance(val, enum.Enum):
            if not isinstance(val, self.em):
                raise BadConversion("Enum member from the wrong enum", val=val, want=self.em)
            return val.value

        if isinstance(val, str) and val in self.em.__members__:
            return self.em[val].value

        if isinstance(val, int) and not isinstance(val, bool):
            if self.allow_unknown or val in [e.value for e in self.em]:
                return val

        raise BadConversion("Value wasn't a valid enum value", val=val, enum=self.em, meta=meta)


class boolean(sb.Spec):
    def __init__(self, as_int=False):
        self.as_int = as_int

    def normalise_empty(self, meta):
        raise BadSpecValue("Expected a value", meta=meta)

    def normalise_filled(self, meta, val):
        if isinstance(val, int) and val in (0, 1):
            val = bool(val)

        if not isinstance(val, bool):
            raise BadSpecValue("Could not convert value into a boolean", val=val, meta=meta)

        if self.as_int:
            return int(val)
        return val


class float_spec(sb.Spec):
    def normalise_empty(self, meta):
        raise BadSpecValue("Expected a value", meta=meta)

    def normalise_filled(self, meta, val):
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise BadSpecValue("Expected a float", got=type(val), meta=meta)
        return float(val)


class bytes_spec(sb.Spec):
    """
    Normalise bytes to the size of the field

    We accept bytes, a hex string or a bitarray and pad with zeros
    """

    def __init__(self, size_bits):
        self.size_bits = size_bits

    def normalise_empty(self, meta):
        return bytes(self.size_bits // 8)

    def normalise_filled(self, meta, val):
        if val is None:
            return self.normalise_empty(meta)

        if isinstance(val, bitarray):
            val = val.tobytes()

        elif isinstance(val, str):
            try:
                val = binascii.unhexlify(val.replace(":", "").encode())
            except (binascii.Error, ValueError) as error:
                raise BadSpecValue("Couldn't convert hex string into bytes", val=val, error=error)

        elif isinstance(val, bytearray):
            val = bytes(val)

        if not isinstance(val, bytes):
            raise BadSpecValue("Expected bytes", got=type(val), meta=meta)

        size = (self.size_bits + 7) // 8
        if len(val) < size:
            val = val + bytes(size - len(val))
        return val[:size]


class bytes_as_string_spec(sb.Spec):
    """Strings are utf-8 on the wire, padded with null bytes"""

    def __init__(self, size_bits, unpacking=False):
        self.size_bits = size_bits
        self.unpacking = unpacking

    def normalise_empty(self, meta):
        if self.unpacking:
            return ""
        return bytes(self.size_bits // 8)

    def normalise_filled(self, meta, val):
        if self.unpacking:
            if isinstance(val, str):
                return val
            if isinstance(val, bitarray):
                val = val.tobytes()
            if b"\x00" in val:
                val = val[: val.index(b"\x00")]
            return val.decode("utf-8", "replace")

        if isinstance(val, str):
            val = val.encode("utf-8")

        if not isinstance(val, bytes):
            raise BadSpecValue("Expected a string", got=type(val), meta=meta)

        size = self.size_bits // 8
        if len(val) > size:
            log.warning("Truncating string to fit field\tsize=%s\tgot=%s", size, len(val))
        return val[:size] + bytes(max(0, size - len(val)))


class many_spec(sb.Spec):
    """
    A list of ``kls`` packets

    Items can be ``kls`` instances, dictionaries, tuples in field order or
    any object with attributes named after the fields.
    """

    def __init__(self, kls, number, unpacking=False):
        self.kls = kls
        self.number = number
        self.unpacking = unpacking

    def normalise_empty(self, meta):
        return []

    def normalise_filled(self, meta, val):
        if not isinstance(val, (list, tuple)):
            raise BadSpecValue("Expected a list", got=type(val), meta=meta)

        if len(val) > self.number:
            raise BadConversion("Too many items for field", got=len(val), max_amount=self.number)

        return [self.to_kls(meta.indexed_at(i), item) for i, item in enumerate(val)]

    def to_kls(self, meta, item):
        kls = self.kls
        if isinstance(item, kls):
            return item
        if isinstance(item, dict):
            return kls(**item)
        if isinstance(item, (list, tuple)):
            return kls(*item)
        names = kls.Meta.all_names
        if all(hasattr(item, name) for name in names):
            return kls(**{name: getattr(item, name) for name in names})
        raise BadSpecValue("Can't convert item", want=kls.__name__, got=type(item), meta=meta)


T = Type

T.install(
    ("Bool", 1, bool, bool),
    ("Int8", 8, "<b", int),
    ("Uint8", 8, "<B", int),
    ("BoolInt", 8, "<?", (bool, int)),
    ("Int16", 16, "<h", int),
    ("Uint16", 16, "<H", int),
    ("Int32", 32, "<i", int),
    ("Uint32", 32, "<I", int),
    ("Int64", 64, "<q", int),
    ("Uint64", 64, "<Q", int),
    ("Float", 32, "<f", float),
    ("Double", 64, "<d", float),
    ("Bytes", None, None, bytes),
    ("String", None, None, str),
    ("Reserved", None, None, bytes),
)
